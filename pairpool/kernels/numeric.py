"""
Integer helpers shared by the liquidity and swap kernels.

All quantities are unsigned 256-bit integers. Python ints never wrap, so the
width is enforced here explicitly: anything outside `[0, U256_MAX]` is an error,
never a silent truncation.
"""

from __future__ import annotations

from ..core.errors import AmountOutOfRange, ArithmeticOverflow


U256_MAX = (1 << 256) - 1


def require_uint(name: str, value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0 or value > U256_MAX:
        raise AmountOutOfRange(f"{name} out of uint256 range: {value}")
    return value


def checked_add(a: int, b: int) -> int:
    out = a + b
    if out > U256_MAX:
        raise ArithmeticOverflow(f"uint256 overflow in {a} + {b}")
    return out


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise ArithmeticOverflow(f"uint256 underflow in {a} - {b}")
    return a - b


def checked_mul(a: int, b: int) -> int:
    out = a * b
    if out > U256_MAX:
        raise ArithmeticOverflow(f"uint256 overflow in {a} * {b}")
    return out


def integer_sqrt(n: int) -> int:
    """
    Largest `r` with `r * r <= n`, by Babylonian refinement.

    The iteration (start at `n // 2 + 1`, stop once the estimate no longer
    decreases) is fixed so results are bit-identical with other implementations
    of the same recurrence. `math.isqrt` agrees on every input but is not used,
    to keep the algorithm explicit.
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError("n must be an int")
    if n < 0:
        raise ValueError(f"integer_sqrt of negative number: {n}")
    if n > 3:
        z = n
        x = n // 2 + 1
        while x < z:
            z = x
            x = (n // x + x) // 2
        return z
    if n != 0:
        return 1
    return 0


def min_of(a: int, b: int) -> int:
    # Ties resolve to `a`.
    return a if a <= b else b
