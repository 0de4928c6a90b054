"""
Read-only quotes.

Nothing here mutates state or takes the pool lock. A quote can be stale by the
time it is used; callers protect themselves with `amount_out_min` / `min_a` /
`min_b` on the state-changing call, not by trusting an earlier quote.
"""

from __future__ import annotations

from ..kernels.cpmm_swap import get_amount_in, get_amount_out
from ..kernels.lp_math import quote as _quote
from ..kernels.numeric import checked_mul, require_uint
from ..state.balances import AssetId
from ..state.pool import PoolState
from .errors import EmptyReserves, InvalidAssetPair


def amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """
    Output of a fee-less constant-product swap, floor-rounded.

    Pure function of its three inputs; raises `EmptyReserves` when either
    reserve is zero.
    """
    return get_amount_out(amount_in=amount_in, reserve_in=reserve_in, reserve_out=reserve_out)


def amount_in(amount_out: int, reserve_in: int, reserve_out: int) -> int:
    """Input that is always enough to receive `amount_out`: `floor(reserve_in * amount_out / (reserve_out - amount_out)) + 1`."""
    return get_amount_in(amount_out=amount_out, reserve_in=reserve_in, reserve_out=reserve_out)


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Ratio-preserving counterpart amount: `floor(amount_a * reserve_b / reserve_a)`."""
    return _quote(amount_a, reserve_a, reserve_b)


def spot_price(state: PoolState, asset_x: AssetId, asset_y: AssetId, *, scale: int) -> int:
    """
    Units of `asset_y` per unit of `asset_x`, as a fixed-point integer.

        price = floor(reserve_y * scale / reserve_x)
    """
    require_uint("scale", scale)
    if not state.has_pair(asset_x, asset_y):
        raise InvalidAssetPair(f"pool does not trade {asset_x}/{asset_y}")
    reserve_x, reserve_y = state.get_reserves(asset_x, asset_y)
    if reserve_x == 0 or reserve_y == 0:
        raise EmptyReserves(f"reserves must be non-zero: ({reserve_x}, {reserve_y})")
    return checked_mul(reserve_y, scale) // reserve_x
