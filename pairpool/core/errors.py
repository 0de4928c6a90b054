"""Exception types raised by the pool engine.

Every pool failure derives from ``PoolError``, itself a ``ValueError`` so that
callers treating kernel rejections as ``ValueError`` keep working.
"""

from __future__ import annotations


class PoolError(ValueError):
    """Base class for a rejected pool operation."""


class InvalidAssetPair(PoolError):
    """The referenced assets are not the pool's configured pair."""


class Expired(PoolError):
    """The current time is past the caller's deadline."""


class SlippageExceeded(PoolError):
    """A computed amount fell below the caller's stated minimum."""


class InsufficientShareBalance(PoolError):
    """The caller holds fewer shares than it tried to redeem."""


class TransferFailed(PoolError):
    """The transfer port reported (or raised) a failed transfer."""


class EmptyReserves(PoolError):
    """A pricing query hit a zero reserve."""


class ZeroSharesMinted(PoolError):
    """A deposit was too small to register any ownership."""


class InvalidAmount(PoolError):
    """An amount is zero where the operation needs a positive quantity."""


class InsufficientLiquidity(PoolError):
    """The requested output is not available in the pool."""


class AmountOutOfRange(PoolError):
    """An input quantity does not fit in an unsigned 256-bit integer."""


class ArithmeticOverflow(PoolError):
    """An intermediate result left the unsigned 256-bit range."""


class ReentrantCall(PoolError):
    """A state-changing call arrived while another was in progress on the same thread."""


class RollbackFailed(PoolError):
    """A compensating transfer failed while undoing an aborted operation."""


class PoolInvariantError(PoolError):
    """Raised when a post-state violates one or more invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")
