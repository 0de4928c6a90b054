"""
pairpool: a two-asset constant-product liquidity pool.

Public entry points live in `pairpool.core`; asset movement is delegated to a
`TransferPort` (see `pairpool.integration.transfer_port`).
"""

from .core.pool import LiquidityPool
from .integration.config import PoolConfig

__all__ = ["LiquidityPool", "PoolConfig"]
