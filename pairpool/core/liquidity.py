"""
Liquidity management operations: deposit (mint shares) and withdraw (burn shares).

Both operations size everything from the pre-operation ledger before any
transfer is issued, then move assets through the transaction, update shares
and re-derive reserves from the port. Callers (see `pairpool.core.pool`) own
locking, deadline checks and rollback.
"""

from typing import NamedTuple

from ..kernels.lp_math import burn_shares, compute_deposit
from ..kernels.numeric import checked_add, checked_sub, require_uint
from ..state.balances import AssetId, Amount, Holder
from ..state.pool import PoolState
from .errors import InsufficientShareBalance, InvalidAmount, InvalidAssetPair
from .transaction import PoolTransaction


class DepositResult(NamedTuple):
    used_a: Amount
    used_b: Amount
    shares_minted: Amount


class WithdrawResult(NamedTuple):
    amount_a: Amount
    amount_b: Amount


def is_flipped(state: PoolState, asset_x: AssetId, asset_y: AssetId) -> bool:
    """
    Map a caller-ordered pair onto the pool's `(asset_a, asset_b)` order.

    Returns True when the caller named the pair as `(asset_b, asset_a)`.

    Raises:
        InvalidAssetPair: If the pair is not the pool's configured pair
    """
    if (asset_x, asset_y) == (state.asset_a, state.asset_b):
        return False
    if (asset_x, asset_y) == (state.asset_b, state.asset_a):
        return True
    raise InvalidAssetPair(f"pool trades {state.asset_a}/{state.asset_b}, not {asset_x}/{asset_y}")


def preview_deposit(
    state: PoolState,
    asset_x: AssetId,
    asset_y: AssetId,
    desired_x: Amount,
    desired_y: Amount,
    min_x: Amount = 0,
    min_y: Amount = 0,
) -> DepositResult:
    """
    Size a deposit against the current ledger without moving anything.

    Amounts and the result follow the caller's `(asset_x, asset_y)` order.
    """
    flipped = is_flipped(state, asset_x, asset_y)
    desired_a, desired_b = (desired_y, desired_x) if flipped else (desired_x, desired_y)
    min_a, min_b = (min_y, min_x) if flipped else (min_x, min_y)

    res = compute_deposit(
        reserve_a=state.reserve_a,
        reserve_b=state.reserve_b,
        total_shares=state.total_shares,
        amount_a_desired=desired_a,
        amount_b_desired=desired_b,
        amount_a_min=min_a,
        amount_b_min=min_b,
    )
    if flipped:
        return DepositResult(used_a=res.amount_b_used, used_b=res.amount_a_used, shares_minted=res.shares_minted)
    return DepositResult(used_a=res.amount_a_used, used_b=res.amount_b_used, shares_minted=res.shares_minted)


def deposit(
    tx: PoolTransaction,
    *,
    caller: Holder,
    asset_x: AssetId,
    asset_y: AssetId,
    desired_x: Amount,
    desired_y: Amount,
    min_x: Amount,
    min_y: Amount,
    recipient: Holder,
) -> DepositResult:
    """
    Deposit a ratio-adjusted amount of both assets and mint shares to `recipient`.

    Empty pool:
        used = desired, shares = isqrt(used_a * used_b)
    Funded pool:
        optimal_b = floor(desired_a * reserve_b / reserve_a), falling back to the
        B side when that exceeds desired_b;
        shares = min(floor(used_a * T / reserve_a), floor(used_b * T / reserve_b))

    Raises:
        InvalidAssetPair, SlippageExceeded, ZeroSharesMinted, TransferFailed
    """
    state = tx.state
    res = preview_deposit(state, asset_x, asset_y, desired_x, desired_y, min_x, min_y)
    amount_x_used, amount_y_used = res.used_a, res.used_b

    tx.pull(asset_x, caller, amount_x_used)
    tx.pull(asset_y, caller, amount_y_used)

    state.total_shares = checked_add(state.total_shares, res.shares_minted)
    state.shares.add(recipient, res.shares_minted)
    tx.sync_reserves()
    return res


def preview_withdraw(
    state: PoolState,
    asset_x: AssetId,
    asset_y: AssetId,
    share_amount: Amount,
    min_x: Amount = 0,
    min_y: Amount = 0,
) -> WithdrawResult:
    """Amounts a burn of `share_amount` would return, in the caller's asset order."""
    flipped = is_flipped(state, asset_x, asset_y)
    require_uint("share_amount", share_amount)
    if share_amount == 0:
        raise InvalidAmount("share_amount must be positive")
    min_a, min_b = (min_y, min_x) if flipped else (min_x, min_y)

    res = burn_shares(
        share_amount=share_amount,
        reserve_a=state.reserve_a,
        reserve_b=state.reserve_b,
        total_shares=state.total_shares,
        amount_a_min=min_a,
        amount_b_min=min_b,
    )
    if res.amount_a_out == 0 and res.amount_b_out == 0:
        raise InvalidAmount(f"burning {share_amount} shares returns nothing")
    if flipped:
        return WithdrawResult(amount_a=res.amount_b_out, amount_b=res.amount_a_out)
    return WithdrawResult(amount_a=res.amount_a_out, amount_b=res.amount_b_out)


def withdraw(
    tx: PoolTransaction,
    *,
    caller: Holder,
    asset_x: AssetId,
    asset_y: AssetId,
    share_amount: Amount,
    min_x: Amount,
    min_y: Amount,
    recipient: Holder,
) -> WithdrawResult:
    """
    Burn `share_amount` of the caller's shares and send the proportional
    reserves to `recipient`.

        amount_x = floor(share_amount * reserve_x / total_shares)

    Shares are debited on the working ledger before any asset leaves the pool.
    Other readers keep seeing the committed balance until the pool publishes
    the result.

    Raises:
        InvalidAssetPair, InvalidAmount, InsufficientShareBalance,
        SlippageExceeded, TransferFailed
    """
    state = tx.state
    is_flipped(state, asset_x, asset_y)
    require_uint("share_amount", share_amount)
    held = state.shares_of(caller)
    if held < share_amount:
        raise InsufficientShareBalance(f"{caller} holds {held} shares, tried to burn {share_amount}")

    res = preview_withdraw(state, asset_x, asset_y, share_amount, min_x, min_y)

    state.shares.subtract(caller, share_amount)
    state.total_shares = checked_sub(state.total_shares, share_amount)

    tx.push(asset_x, recipient, res.amount_a)
    tx.push(asset_y, recipient, res.amount_b)
    tx.sync_reserves()
    return res
