"""
State tables for the liquidity pool.
"""

from .balances import BalanceTable
from .pool import PoolState, check_invariants
from .shares import ShareTable

__all__ = [
    "BalanceTable",
    "PoolState",
    "ShareTable",
    "check_invariants",
]
