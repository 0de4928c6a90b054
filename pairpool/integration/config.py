"""
Pool configuration.

A pool is fixed at creation by its asset pair, the address it holds assets
under, and the fixed-point scale used for spot prices. Configuration can come
from a YAML file or from `PAIRPOOL_*` environment variables:

    asset_a: "0xaaaa..."
    asset_b: "0xbbbb..."
    pool_address: "0xpool..."
    price_scale: 1000000000000000000   # optional, default 10**18
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..kernels.numeric import U256_MAX


DEFAULT_PRICE_SCALE = 10**18

ENV_ASSET_A = "PAIRPOOL_ASSET_A"
ENV_ASSET_B = "PAIRPOOL_ASSET_B"
ENV_POOL_ADDRESS = "PAIRPOOL_POOL_ADDRESS"
ENV_PRICE_SCALE = "PAIRPOOL_PRICE_SCALE"


@dataclass(frozen=True)
class PoolConfig:
    asset_a: str
    asset_b: str
    pool_address: str
    price_scale: int = DEFAULT_PRICE_SCALE

    def __post_init__(self) -> None:
        for name in ("asset_a", "asset_b", "pool_address"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty string")
        if self.asset_a == self.asset_b:
            raise ValueError(f"asset_a and asset_b must differ: {self.asset_a}")
        if self.pool_address in (self.asset_a, self.asset_b):
            raise ValueError("pool_address must not equal an asset id")
        if not isinstance(self.price_scale, int) or isinstance(self.price_scale, bool):
            raise TypeError("price_scale must be an int")
        if not (1 <= self.price_scale <= U256_MAX):
            raise ValueError(f"price_scale out of range: {self.price_scale}")


def _env_int(name: str, default: int, *, lo: int, hi: int, environ: Mapping[str, str]) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if not (lo <= v <= hi):
        raise ValueError(f"{name} out of range [{lo}, {hi}]: {v}")
    return v


def _env_str(name: str, default: str, *, environ: Mapping[str, str]) -> str:
    raw = environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def pool_config_from_mapping(obj: Mapping[str, Any]) -> PoolConfig:
    if not isinstance(obj, Mapping):
        raise TypeError("pool config must be a mapping")
    unknown = set(obj) - {"asset_a", "asset_b", "pool_address", "price_scale"}
    if unknown:
        raise ValueError(f"unknown pool config keys: {sorted(unknown)}")
    missing = [k for k in ("asset_a", "asset_b", "pool_address") if k not in obj]
    if missing:
        raise ValueError(f"missing pool config keys: {missing}")
    return PoolConfig(
        asset_a=obj["asset_a"],
        asset_b=obj["asset_b"],
        pool_address=obj["pool_address"],
        price_scale=obj.get("price_scale", DEFAULT_PRICE_SCALE),
    )


def load_pool_config(path: str | Path) -> PoolConfig:
    """Load a `PoolConfig` from a YAML mapping."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(obj, Mapping):
        raise TypeError("pool config YAML must be a mapping")
    return pool_config_from_mapping(obj)


def pool_config_from_env(environ: Optional[Mapping[str, str]] = None) -> PoolConfig:
    env = os.environ if environ is None else environ
    return PoolConfig(
        asset_a=_env_str(ENV_ASSET_A, "", environ=env),
        asset_b=_env_str(ENV_ASSET_B, "", environ=env),
        pool_address=_env_str(ENV_POOL_ADDRESS, "", environ=env),
        price_scale=_env_int(ENV_PRICE_SCALE, DEFAULT_PRICE_SCALE, lo=1, hi=U256_MAX, environ=env),
    )
