"""
Liquidity math kernel.

Ratio-preserving deposit sizing, share minting and share burning, written as
pure functions with floor rounding throughout:

    optimal_b = floor(desired_a * reserve_b / reserve_a)
    minted    = isqrt(used_a * used_b)                                 (empty pool)
    minted    = min(floor(used_a * T / reserve_a), floor(used_b * T / reserve_b))
    out_x     = floor(shares * reserve_x / T)

Every product goes through `checked_mul`, so an input large enough to overflow
256 bits fails instead of producing a wide result no other implementation would.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.errors import EmptyReserves, InsufficientShareBalance, SlippageExceeded, ZeroSharesMinted
from .numeric import checked_mul, integer_sqrt, min_of, require_uint


@dataclass(frozen=True)
class OptimalLiquidityResult:
    amount_a_used: int
    amount_b_used: int


@dataclass(frozen=True)
class MintSharesResult:
    shares_minted: int
    amount_a_used: int
    amount_b_used: int


@dataclass(frozen=True)
class BurnSharesResult:
    amount_a_out: int
    amount_b_out: int


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of B that keeps the `reserve_a : reserve_b` ratio for `amount_a` of A."""
    require_uint("amount_a", amount_a)
    require_uint("reserve_a", reserve_a)
    require_uint("reserve_b", reserve_b)
    if reserve_a == 0 or reserve_b == 0:
        raise EmptyReserves("quote requires non-zero reserves")
    return checked_mul(amount_a, reserve_b) // reserve_a


def optimal_liquidity(
    *,
    reserve_a: int,
    reserve_b: int,
    amount_a_desired: int,
    amount_b_desired: int,
    amount_a_min: int = 0,
    amount_b_min: int = 0,
) -> OptimalLiquidityResult:
    """
    Compute ratio-preserving used amounts.

    For an empty pool (both reserves zero) everything is used and the first
    depositor sets the price. Otherwise the full `amount_a_desired` is used when
    the matching B fits inside `amount_b_desired`, and the full B side is used
    otherwise. The side that gets trimmed is checked against its minimum.
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("amount_a_desired", amount_a_desired),
        ("amount_b_desired", amount_b_desired),
        ("amount_a_min", amount_a_min),
        ("amount_b_min", amount_b_min),
    ):
        require_uint(name, v)

    if reserve_a == 0 and reserve_b == 0:
        return OptimalLiquidityResult(
            amount_a_used=amount_a_desired,
            amount_b_used=amount_b_desired,
        )
    if reserve_a == 0 or reserve_b == 0:
        raise EmptyReserves("one-sided reserves cannot be priced")

    amount_b_optimal = quote(amount_a_desired, reserve_a, reserve_b)
    if amount_b_optimal <= amount_b_desired:
        if amount_b_optimal < amount_b_min:
            raise SlippageExceeded(f"amount_b ({amount_b_optimal}) < amount_b_min ({amount_b_min})")
        amount_a_used = amount_a_desired
        amount_b_used = amount_b_optimal
    else:
        amount_a_optimal = quote(amount_b_desired, reserve_b, reserve_a)
        if amount_a_optimal < amount_a_min:
            raise SlippageExceeded(f"amount_a ({amount_a_optimal}) < amount_a_min ({amount_a_min})")
        amount_a_used = amount_a_optimal
        amount_b_used = amount_b_desired

    if amount_a_used > amount_a_desired or amount_b_used > amount_b_desired:
        raise AssertionError("used amounts exceed desired amounts")

    return OptimalLiquidityResult(
        amount_a_used=amount_a_used,
        amount_b_used=amount_b_used,
    )


def mint_shares(
    *,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
    amount_a_used: int,
    amount_b_used: int,
) -> int:
    """
    Shares owed for a deposit of already ratio-adjusted amounts.

    The first deposit mints `isqrt(a * b)` with no locked minimum; later
    deposits mint the smaller of the two proportional claims.
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_shares", total_shares),
        ("amount_a_used", amount_a_used),
        ("amount_b_used", amount_b_used),
    ):
        require_uint(name, v)

    if total_shares == 0:
        minted = integer_sqrt(checked_mul(amount_a_used, amount_b_used))
    else:
        if reserve_a == 0 or reserve_b == 0:
            raise EmptyReserves("cannot mint against a zero reserve when shares are outstanding")
        minted = min_of(
            checked_mul(amount_a_used, total_shares) // reserve_a,
            checked_mul(amount_b_used, total_shares) // reserve_b,
        )

    if minted == 0:
        raise ZeroSharesMinted("shares_minted is zero (deposit too small)")
    return minted


def compute_deposit(
    *,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
    amount_a_desired: int,
    amount_b_desired: int,
    amount_a_min: int = 0,
    amount_b_min: int = 0,
) -> MintSharesResult:
    """Size a deposit and compute its shares in one pass, without touching state."""
    opt = optimal_liquidity(
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        amount_a_desired=amount_a_desired,
        amount_b_desired=amount_b_desired,
        amount_a_min=amount_a_min,
        amount_b_min=amount_b_min,
    )
    minted = mint_shares(
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        total_shares=total_shares,
        amount_a_used=opt.amount_a_used,
        amount_b_used=opt.amount_b_used,
    )
    return MintSharesResult(
        shares_minted=minted,
        amount_a_used=opt.amount_a_used,
        amount_b_used=opt.amount_b_used,
    )


def burn_shares(
    *,
    share_amount: int,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
    amount_a_min: int = 0,
    amount_b_min: int = 0,
) -> BurnSharesResult:
    """
    Burn shares for underlying assets (floor rounding).
    """
    for name, v in (
        ("share_amount", share_amount),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_shares", total_shares),
        ("amount_a_min", amount_a_min),
        ("amount_b_min", amount_b_min),
    ):
        require_uint(name, v)

    if share_amount > total_shares:
        raise InsufficientShareBalance(f"cannot burn more than total_shares: {share_amount} > {total_shares}")
    if total_shares == 0:
        raise EmptyReserves("no shares outstanding")

    amount_a_out = checked_mul(share_amount, reserve_a) // total_shares
    amount_b_out = checked_mul(share_amount, reserve_b) // total_shares
    if amount_a_out < amount_a_min:
        raise SlippageExceeded(f"amount_a_out ({amount_a_out}) < amount_a_min ({amount_a_min})")
    if amount_b_out < amount_b_min:
        raise SlippageExceeded(f"amount_b_out ({amount_b_out}) < amount_b_min ({amount_b_min})")
    return BurnSharesResult(amount_a_out=amount_a_out, amount_b_out=amount_b_out)
