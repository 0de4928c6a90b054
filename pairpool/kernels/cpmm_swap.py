"""
CPMM swap kernel (fee-less).

- Pricing uses the pre-trade reserves:
      amount_out = floor(amount_in * reserve_out / (reserve_in + amount_in))
- Floor rounding keeps the product of reserves non-decreasing, so rounding
  never favours the trader.
- The inverse quote returns an input that always yields at least the requested
  output under the same floor rule. It is `floor(..) + 1`, so when the division
  is exact it is one more than the smallest such input.
"""

from __future__ import annotations

from ..core.errors import EmptyReserves, InsufficientLiquidity
from .numeric import checked_add, checked_mul, require_uint


def get_amount_out(*, amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """
    Compute `floor(amount_in * reserve_out / (reserve_in + amount_in))`.

    The result is non-decreasing in `amount_in` and strictly below `reserve_out`.
    """
    require_uint("amount_in", amount_in)
    require_uint("reserve_in", reserve_in)
    require_uint("reserve_out", reserve_out)
    if reserve_in == 0 or reserve_out == 0:
        raise EmptyReserves(f"reserves must be non-zero: ({reserve_in}, {reserve_out})")
    numerator = checked_mul(amount_in, reserve_out)
    denominator = checked_add(reserve_in, amount_in)
    return numerator // denominator


def get_amount_in(*, amount_out: int, reserve_in: int, reserve_out: int) -> int:
    """
    Compute `floor(reserve_in * amount_out / (reserve_out - amount_out)) + 1`.
    """
    require_uint("amount_out", amount_out)
    require_uint("reserve_in", reserve_in)
    require_uint("reserve_out", reserve_out)
    if reserve_in == 0 or reserve_out == 0:
        raise EmptyReserves(f"reserves must be non-zero: ({reserve_in}, {reserve_out})")
    if amount_out >= reserve_out:
        raise InsufficientLiquidity(
            f"cannot drain full reserve: amount_out ({amount_out}) >= reserve_out ({reserve_out})"
        )
    numerator = checked_mul(reserve_in, amount_out)
    denominator = reserve_out - amount_out
    return checked_add(numerator // denominator, 1)

