#!/usr/bin/env python3
"""
Offline pool demo: deposit, swap, withdraw against an in-memory transfer port.

    python tools/pool_demo.py --config pool.yaml
    PAIRPOOL_ASSET_A=... PAIRPOOL_ASSET_B=... PAIRPOOL_POOL_ADDRESS=... python tools/pool_demo.py
"""

from __future__ import annotations

import argparse
import logging
import time
from typing import Optional, Sequence

from pairpool.core.errors import PoolError
from pairpool.core.pool import LiquidityPool
from pairpool.integration.config import load_pool_config, pool_config_from_env
from pairpool.integration.transfer_port import InMemoryTransferPort


def _print_pool(label: str, pool: LiquidityPool) -> None:
    snap = pool.snapshot()
    print(
        f"[pool-demo] {label}: reserve_a={snap['reserve_a']} reserve_b={snap['reserve_b']} "
        f"total_shares={snap['total_shares']}"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a deposit/swap/withdraw cycle on an in-memory pool.")
    parser.add_argument("--config", default=None, help="YAML pool config (default: PAIRPOOL_* env vars).")
    parser.add_argument("--amount-a", type=int, default=100, help="Initial deposit of asset A.")
    parser.add_argument("--amount-b", type=int, default=400, help="Initial deposit of asset B.")
    parser.add_argument("--swap-in", type=int, default=10, help="Amount of asset A to swap for B.")
    parser.add_argument("--verbose", action="store_true", help="Log pool events to stderr.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_pool_config(args.config) if args.config else pool_config_from_env()
    except (OSError, TypeError, ValueError) as exc:
        print(f"[pool-demo] FAIL (config): {exc}")
        return 2

    user = "demo-user"
    port = InMemoryTransferPort(config.pool_address)
    port.mint(user, config.asset_a, args.amount_a + args.swap_in)
    port.mint(user, config.asset_b, args.amount_b)
    pool = LiquidityPool(config, port)
    deadline = time.time() + 3600

    try:
        dep = pool.deposit(
            user, config.asset_a, config.asset_b, args.amount_a, args.amount_b, 0, 0, user, deadline
        )
        print(f"[pool-demo] deposit: used_a={dep.used_a} used_b={dep.used_b} shares={dep.shares_minted}")
        _print_pool("after deposit", pool)
        print(f"[pool-demo] spot price (B per A, scale {config.price_scale}): "
              f"{pool.spot_price(config.asset_a, config.asset_b)}")

        out = pool.swap_exact(user, args.swap_in, 0, [config.asset_a, config.asset_b], user, deadline)
        print(f"[pool-demo] swap: amount_in={args.swap_in} amount_out={out}")
        _print_pool("after swap", pool)

        wd = pool.withdraw(
            user, config.asset_a, config.asset_b, pool.shares_of(user), 0, 0, user, deadline
        )
        print(f"[pool-demo] withdraw: amount_a={wd.amount_a} amount_b={wd.amount_b}")
        _print_pool("after withdraw", pool)
    except PoolError as exc:
        print(f"[pool-demo] FAIL ({type(exc).__name__}): {exc}")
        return 1

    print("[pool-demo] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
