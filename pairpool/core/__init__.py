"""
Pool engine: quotes, liquidity, swaps and the owning `LiquidityPool`.
"""

from .errors import (
    AmountOutOfRange,
    ArithmeticOverflow,
    EmptyReserves,
    Expired,
    InsufficientLiquidity,
    InsufficientShareBalance,
    InvalidAmount,
    InvalidAssetPair,
    PoolError,
    PoolInvariantError,
    ReentrantCall,
    RollbackFailed,
    SlippageExceeded,
    TransferFailed,
    ZeroSharesMinted,
)
from .quote import amount_in, amount_out, spot_price
from .liquidity import DepositResult, WithdrawResult
from .pool import LiquidityPool

__all__ = [
    "AmountOutOfRange",
    "ArithmeticOverflow",
    "EmptyReserves",
    "Expired",
    "InsufficientLiquidity",
    "InsufficientShareBalance",
    "InvalidAmount",
    "InvalidAssetPair",
    "PoolError",
    "PoolInvariantError",
    "ReentrantCall",
    "RollbackFailed",
    "SlippageExceeded",
    "TransferFailed",
    "ZeroSharesMinted",
    "amount_in",
    "amount_out",
    "spot_price",
    "DepositResult",
    "WithdrawResult",
    "LiquidityPool",
]
