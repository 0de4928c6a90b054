# [TESTER] v1

from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from pairpool.core.errors import (
    ArithmeticOverflow,
    EmptyReserves,
    InsufficientShareBalance,
    SlippageExceeded,
    ZeroSharesMinted,
)
from pairpool.kernels.lp_math import burn_shares, compute_deposit, mint_shares, optimal_liquidity, quote
from pairpool.kernels.numeric import U256_MAX


def test_optimal_liquidity_uses_everything_on_empty_pool() -> None:
    opt = optimal_liquidity(reserve_a=0, reserve_b=0, amount_a_desired=100, amount_b_desired=400)
    assert (opt.amount_a_used, opt.amount_b_used) == (100, 400)


def test_optimal_liquidity_keeps_full_a_side_when_b_fits() -> None:
    opt = optimal_liquidity(reserve_a=100, reserve_b=400, amount_a_desired=10, amount_b_desired=100)
    assert (opt.amount_a_used, opt.amount_b_used) == (10, 40)


def test_optimal_liquidity_falls_back_to_full_b_side() -> None:
    opt = optimal_liquidity(reserve_a=100, reserve_b=400, amount_a_desired=10, amount_b_desired=20)
    assert (opt.amount_a_used, opt.amount_b_used) == (5, 20)


def test_optimal_liquidity_enforces_minimum_on_trimmed_side() -> None:
    with pytest.raises(SlippageExceeded, match="amount_b"):
        optimal_liquidity(
            reserve_a=100, reserve_b=400, amount_a_desired=10, amount_b_desired=100, amount_b_min=41
        )
    with pytest.raises(SlippageExceeded, match="amount_a"):
        optimal_liquidity(
            reserve_a=100, reserve_b=400, amount_a_desired=10, amount_b_desired=20, amount_a_min=6
        )


def test_optimal_liquidity_rejects_one_sided_reserves() -> None:
    with pytest.raises(EmptyReserves):
        optimal_liquidity(reserve_a=10, reserve_b=0, amount_a_desired=1, amount_b_desired=1)


def test_quote_floors() -> None:
    assert quote(3, 7, 10) == 4
    with pytest.raises(EmptyReserves):
        quote(3, 0, 10)


def test_mint_shares_initial_is_integer_sqrt() -> None:
    assert mint_shares(reserve_a=0, reserve_b=0, total_shares=0, amount_a_used=100, amount_b_used=400) == 200
    # No locked minimum: a 1x1 first deposit mints one share.
    assert mint_shares(reserve_a=0, reserve_b=0, total_shares=0, amount_a_used=1, amount_b_used=1) == 1


def test_mint_shares_proportional_takes_smaller_claim() -> None:
    minted = mint_shares(reserve_a=100, reserve_b=400, total_shares=200, amount_a_used=10, amount_b_used=41)
    assert minted == min(10 * 200 // 100, 41 * 200 // 400) == 20


def test_mint_shares_zero_is_rejected() -> None:
    with pytest.raises(ZeroSharesMinted):
        mint_shares(reserve_a=0, reserve_b=0, total_shares=0, amount_a_used=0, amount_b_used=0)
    with pytest.raises(ZeroSharesMinted):
        mint_shares(reserve_a=1000, reserve_b=1000, total_shares=10, amount_a_used=50, amount_b_used=50)


def test_mint_shares_overflow_fails_explicitly() -> None:
    with pytest.raises(ArithmeticOverflow):
        mint_shares(reserve_a=0, reserve_b=0, total_shares=0, amount_a_used=U256_MAX, amount_b_used=2)


def test_compute_deposit_combines_sizing_and_minting() -> None:
    res = compute_deposit(reserve_a=100, reserve_b=400, total_shares=200, amount_a_desired=10, amount_b_desired=20)
    assert (res.amount_a_used, res.amount_b_used, res.shares_minted) == (5, 20, 10)


def test_burn_shares_floor_rounding() -> None:
    res = burn_shares(share_amount=200, reserve_a=100, reserve_b=400, total_shares=200)
    assert (res.amount_a_out, res.amount_b_out) == (100, 400)
    res = burn_shares(share_amount=1, reserve_a=10, reserve_b=11, total_shares=3)
    assert (res.amount_a_out, res.amount_b_out) == (3, 3)


def test_burn_shares_checks() -> None:
    with pytest.raises(InsufficientShareBalance):
        burn_shares(share_amount=201, reserve_a=100, reserve_b=400, total_shares=200)
    with pytest.raises(SlippageExceeded, match="amount_b_out"):
        burn_shares(share_amount=100, reserve_a=100, reserve_b=400, total_shares=200, amount_b_min=201)


@given(
    reserve_a=st.integers(min_value=1, max_value=10**30),
    reserve_b=st.integers(min_value=1, max_value=10**30),
    desired_a=st.integers(min_value=0, max_value=10**30),
    desired_b=st.integers(min_value=0, max_value=10**30),
)
def test_optimal_liquidity_never_overshoots_pool_ratio(
    reserve_a: int, reserve_b: int, desired_a: int, desired_b: int
) -> None:
    opt = optimal_liquidity(
        reserve_a=reserve_a, reserve_b=reserve_b, amount_a_desired=desired_a, amount_b_desired=desired_b
    )
    assert opt.amount_a_used <= desired_a
    assert opt.amount_b_used <= desired_b
    # used_a : used_b stays within one rounding unit of reserve_a : reserve_b.
    if desired_a * reserve_b // reserve_a <= desired_b:
        assert opt.amount_a_used == desired_a
        assert opt.amount_b_used * reserve_a <= opt.amount_a_used * reserve_b < (opt.amount_b_used + 1) * reserve_a
    else:
        assert opt.amount_b_used == desired_b
        assert opt.amount_a_used * reserve_b <= opt.amount_b_used * reserve_a < (opt.amount_a_used + 1) * reserve_b
