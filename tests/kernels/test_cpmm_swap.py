# [TESTER] v1

from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from pairpool.core.errors import ArithmeticOverflow, EmptyReserves, InsufficientLiquidity
from pairpool.kernels.cpmm_swap import get_amount_in, get_amount_out
from pairpool.kernels.numeric import U256_MAX


def test_get_amount_out_matches_worked_example() -> None:
    # floor(10 * 400 / (100 + 10)) = floor(4000 / 110) = 36
    assert get_amount_out(amount_in=10, reserve_in=100, reserve_out=400) == 36


def test_get_amount_out_zero_input_is_zero() -> None:
    assert get_amount_out(amount_in=0, reserve_in=100, reserve_out=400) == 0


def test_get_amount_out_rejects_empty_reserves() -> None:
    with pytest.raises(EmptyReserves):
        get_amount_out(amount_in=10, reserve_in=0, reserve_out=400)
    with pytest.raises(EmptyReserves):
        get_amount_out(amount_in=10, reserve_in=100, reserve_out=0)


def test_get_amount_out_overflow_fails_explicitly() -> None:
    with pytest.raises(ArithmeticOverflow):
        get_amount_out(amount_in=U256_MAX, reserve_in=1, reserve_out=2)


def test_get_amount_in_is_sufficient() -> None:
    needed = get_amount_in(amount_out=36, reserve_in=100, reserve_out=400)
    assert needed == 10
    assert get_amount_out(amount_in=needed, reserve_in=100, reserve_out=400) >= 36


def test_get_amount_in_cannot_drain_reserve() -> None:
    with pytest.raises(InsufficientLiquidity):
        get_amount_in(amount_out=400, reserve_in=100, reserve_out=400)


def test_get_amount_in_overshoots_by_one_on_exact_division() -> None:
    # floor(100 * 200 / 200) + 1 = 101, although 100 already buys 200.
    assert get_amount_in(amount_out=200, reserve_in=100, reserve_out=400) == 101
    assert get_amount_out(amount_in=100, reserve_in=100, reserve_out=400) == 200


reserves = st.integers(min_value=1, max_value=10**36)
amounts = st.integers(min_value=0, max_value=10**36)


@given(reserve_in=reserves, reserve_out=reserves, amount_in=amounts)
def test_amount_out_monotone_and_bounded(reserve_in: int, reserve_out: int, amount_in: int) -> None:
    out = get_amount_out(amount_in=amount_in, reserve_in=reserve_in, reserve_out=reserve_out)
    out_next = get_amount_out(amount_in=amount_in + 1, reserve_in=reserve_in, reserve_out=reserve_out)
    assert out <= out_next
    assert 0 <= out < reserve_out


@given(reserve_in=reserves, reserve_out=reserves, amount_in=st.integers(min_value=1, max_value=10**36))
def test_swap_never_decreases_product(reserve_in: int, reserve_out: int, amount_in: int) -> None:
    out = get_amount_out(amount_in=amount_in, reserve_in=reserve_in, reserve_out=reserve_out)
    assert (reserve_in + amount_in) * (reserve_out - out) >= reserve_in * reserve_out


@given(
    reserve_in=st.integers(min_value=1, max_value=10**18),
    reserve_out=st.integers(min_value=2, max_value=10**18),
    data=st.data(),
)
def test_amount_in_always_buys_requested_output(reserve_in: int, reserve_out: int, data: st.DataObject) -> None:
    target = data.draw(st.integers(min_value=1, max_value=reserve_out - 1))
    needed = get_amount_in(amount_out=target, reserve_in=reserve_in, reserve_out=reserve_out)
    assert get_amount_out(amount_in=needed, reserve_in=reserve_in, reserve_out=reserve_out) >= target
