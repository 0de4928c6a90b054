"""
Exact-input swap against the pool's pre-trade reserves.

    amount_out = floor(amount_in * reserve_out / (reserve_in + amount_in))

Slippage is decided from the pre-trade ledger before any asset moves; the
input transfer and the output transfer then run inside the caller's
transaction, which undoes the input if the output leg fails.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from ..kernels.numeric import require_uint
from ..state.balances import AssetId, Amount, Holder
from ..state.pool import PoolState
from .errors import InvalidAmount, InvalidAssetPair, SlippageExceeded
from .quote import amount_out as quote_amount_out
from .transaction import PoolTransaction


def resolve_path(state: PoolState, path: Sequence[AssetId]) -> Tuple[AssetId, AssetId]:
    """Validate a two-asset path and return `(asset_in, asset_out)`."""
    if isinstance(path, (str, bytes)) or len(path) != 2:
        raise InvalidAssetPair(f"path must name exactly two assets, got {path!r}")
    asset_in, asset_out = path[0], path[1]
    if not state.has_pair(asset_in, asset_out):
        raise InvalidAssetPair(f"pool trades {state.asset_a}/{state.asset_b}, not {asset_in}/{asset_out}")
    return asset_in, asset_out


def preview_swap(state: PoolState, amount_in: Amount, path: Sequence[AssetId]) -> Amount:
    asset_in, asset_out = resolve_path(state, path)
    require_uint("amount_in", amount_in)
    if amount_in == 0:
        raise InvalidAmount("amount_in must be positive")
    reserve_in, reserve_out = state.get_reserves(asset_in, asset_out)
    return quote_amount_out(amount_in, reserve_in, reserve_out)


def swap_exact(
    tx: PoolTransaction,
    *,
    caller: Holder,
    amount_in: Amount,
    amount_out_min: Amount,
    path: Sequence[AssetId],
    recipient: Holder,
) -> Amount:
    """
    Swap exactly `amount_in` of `path[0]` for at least `amount_out_min` of `path[1]`.

    Raises:
        InvalidAssetPair, InvalidAmount, EmptyReserves, SlippageExceeded,
        TransferFailed
    """
    state = tx.state
    require_uint("amount_out_min", amount_out_min)
    asset_in, asset_out = resolve_path(state, path)
    amount_out = preview_swap(state, amount_in, path)
    if amount_out < amount_out_min:
        raise SlippageExceeded(f"amount_out ({amount_out}) < amount_out_min ({amount_out_min})")
    if amount_out == 0:
        raise InvalidAmount(f"amount_in {amount_in} is too small to receive any {asset_out}")

    tx.pull(asset_in, caller, amount_in)
    tx.push(asset_out, recipient, amount_out)
    tx.sync_reserves()
    return amount_out
