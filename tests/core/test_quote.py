# [TESTER] v1

from __future__ import annotations

import pytest

from pairpool.core.errors import EmptyReserves, InsufficientLiquidity, InvalidAssetPair
from pairpool.core.quote import amount_in, amount_out, quote, spot_price
from pairpool.state.pool import PoolState


def test_quote_functions_are_pure() -> None:
    assert amount_out(10, 100, 400) == 36
    assert amount_out(10, 100, 400) == 36
    assert amount_in(36, 100, 400) == 10
    assert quote(10, 100, 400) == 40
    with pytest.raises(InsufficientLiquidity):
        amount_in(400, 100, 400)


def test_spot_price_uses_given_scale_and_floors() -> None:
    state = PoolState(asset_a="A", asset_b="B", reserve_a=3, reserve_b=10, total_shares=5)
    assert spot_price(state, "A", "B", scale=10**18) == 3_333_333_333_333_333_333
    assert spot_price(state, "B", "A", scale=100) == 30
    with pytest.raises(InvalidAssetPair):
        spot_price(state, "A", "A", scale=100)


def test_spot_price_requires_both_reserves() -> None:
    state = PoolState(asset_a="A", asset_b="B")
    with pytest.raises(EmptyReserves):
        spot_price(state, "A", "B", scale=10**18)
