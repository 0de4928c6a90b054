"""
Integration layer: the transfer-port boundary and configuration loading.
"""

from .config import PoolConfig, load_pool_config, pool_config_from_env, pool_config_from_mapping
from .transfer_port import InMemoryTransferPort, TransferPort

__all__ = [
    "PoolConfig",
    "load_pool_config",
    "pool_config_from_env",
    "pool_config_from_mapping",
    "InMemoryTransferPort",
    "TransferPort",
]
