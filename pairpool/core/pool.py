"""
`LiquidityPool`: the owned aggregate around one `PoolState`.

This is the imperative shell over the liquidity and swap engines:
- one lock per pool serialises deposit / withdraw / swap,
- reentrant state-changing calls (e.g. from a transfer-port callback) are
  rejected instead of deadlocking,
- each operation runs in a `PoolTransaction` on a working copy of the ledger;
  any failure compensates issued transfers and drops the copy before the error
  propagates,
- post-state invariants are checked before the copy is published.

A published `PoolState` is never mutated, so quotes and previews read the
current one without taking the lock and always see a committed ledger.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional, Sequence

from ..integration.config import PoolConfig
from ..integration.transfer_port import TransferPort
from ..state.balances import AssetId, Amount, Holder
from ..state.pool import PoolState, check_invariants
from . import liquidity, quote, swap
from .errors import Expired, PoolInvariantError, ReentrantCall
from .liquidity import DepositResult, WithdrawResult
from .transaction import PoolTransaction


logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class LiquidityPool:
    def __init__(
        self,
        config: PoolConfig,
        port: TransferPort,
        *,
        clock: Optional[Clock] = None,
        state: Optional[PoolState] = None,
    ) -> None:
        self.config = config
        self.port = port
        self._clock: Clock = clock if clock is not None else time.time
        if state is None:
            state = PoolState(asset_a=config.asset_a, asset_b=config.asset_b)
        elif (state.asset_a, state.asset_b) != (config.asset_a, config.asset_b):
            raise ValueError("state asset pair does not match config")
        violations = check_invariants(state)
        if violations:
            raise PoolInvariantError(violations)
        self._state = state.snapshot()
        self._lock = threading.Lock()
        self._owner: Optional[int] = None

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def asset_a(self) -> AssetId:
        return self._state.asset_a

    @property
    def asset_b(self) -> AssetId:
        return self._state.asset_b

    @property
    def reserve_a(self) -> Amount:
        return self._state.reserve_a

    @property
    def reserve_b(self) -> Amount:
        return self._state.reserve_b

    @property
    def total_shares(self) -> Amount:
        return self._state.total_shares

    def shares_of(self, holder: Holder) -> Amount:
        return self._state.shares_of(holder)

    def snapshot(self) -> Dict[str, Any]:
        return self._state.to_dict()

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------

    def spot_price(self, asset_a: AssetId, asset_b: AssetId) -> int:
        """Units of `asset_b` per unit of `asset_a`, scaled by `config.price_scale`."""
        return quote.spot_price(self._state, asset_a, asset_b, scale=self.config.price_scale)

    @staticmethod
    def amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
        return quote.amount_out(amount_in, reserve_in, reserve_out)

    @staticmethod
    def amount_in(amount_out: int, reserve_in: int, reserve_out: int) -> int:
        return quote.amount_in(amount_out, reserve_in, reserve_out)

    def preview_deposit(
        self,
        asset_a: AssetId,
        asset_b: AssetId,
        desired_a: Amount,
        desired_b: Amount,
    ) -> DepositResult:
        return liquidity.preview_deposit(self._state, asset_a, asset_b, desired_a, desired_b)

    def preview_withdraw(self, asset_a: AssetId, asset_b: AssetId, share_amount: Amount) -> WithdrawResult:
        return liquidity.preview_withdraw(self._state, asset_a, asset_b, share_amount)

    def preview_swap(self, amount_in: Amount, path: Sequence[AssetId]) -> Amount:
        return swap.preview_swap(self._state, amount_in, path)

    # ------------------------------------------------------------------
    # State-changing operations
    # ------------------------------------------------------------------

    def deposit(
        self,
        caller: Holder,
        asset_a: AssetId,
        asset_b: AssetId,
        desired_a: Amount,
        desired_b: Amount,
        min_a: Amount,
        min_b: Amount,
        recipient: Holder,
        deadline: float,
    ) -> DepositResult:
        with self._operation("deposit", deadline) as tx:
            res = liquidity.deposit(
                tx,
                caller=caller,
                asset_x=asset_a,
                asset_y=asset_b,
                desired_x=desired_a,
                desired_y=desired_b,
                min_x=min_a,
                min_y=min_b,
                recipient=recipient,
            )
            self._commit(tx)
        logger.info(
            "Deposit executed",
            extra={
                "event": "pool.deposit",
                "caller": caller,
                "recipient": recipient,
                "used_a": res.used_a,
                "used_b": res.used_b,
                "shares_minted": res.shares_minted,
            },
        )
        return res

    def withdraw(
        self,
        caller: Holder,
        asset_a: AssetId,
        asset_b: AssetId,
        share_amount: Amount,
        min_a: Amount,
        min_b: Amount,
        recipient: Holder,
        deadline: float,
    ) -> WithdrawResult:
        with self._operation("withdraw", deadline) as tx:
            res = liquidity.withdraw(
                tx,
                caller=caller,
                asset_x=asset_a,
                asset_y=asset_b,
                share_amount=share_amount,
                min_x=min_a,
                min_y=min_b,
                recipient=recipient,
            )
            self._commit(tx)
        logger.info(
            "Withdrawal executed",
            extra={
                "event": "pool.withdraw",
                "caller": caller,
                "recipient": recipient,
                "shares_burned": share_amount,
                "amount_a": res.amount_a,
                "amount_b": res.amount_b,
            },
        )
        return res

    def swap_exact(
        self,
        caller: Holder,
        amount_in: Amount,
        amount_out_min: Amount,
        path: Sequence[AssetId],
        recipient: Holder,
        deadline: float,
    ) -> Amount:
        with self._operation("swap", deadline) as tx:
            k_before = self._state.reserve_a * self._state.reserve_b
            amount_out = swap.swap_exact(
                tx,
                caller=caller,
                amount_in=amount_in,
                amount_out_min=amount_out_min,
                path=path,
                recipient=recipient,
            )
            self._commit(tx, k_before=k_before)
        logger.info(
            "Swap executed",
            extra={
                "event": "pool.swap",
                "caller": caller,
                "recipient": recipient,
                "path": f"{path[0]}->{path[1]}",
                "amount_in": amount_in,
                "amount_out": amount_out,
            },
        )
        return amount_out

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_not_expired(self, deadline: float) -> None:
        if isinstance(deadline, bool) or not isinstance(deadline, (int, float)):
            raise TypeError("deadline must be a number")
        now = self._clock()
        if now > deadline:
            raise Expired(f"deadline {deadline} has passed (now={now})")

    def _commit(self, tx: PoolTransaction, *, k_before: Optional[int] = None) -> None:
        violations = check_invariants(tx.state, balances=tx.balances(), k_before=k_before)
        if violations:
            raise PoolInvariantError(violations)
        self._state = tx.state

    @contextmanager
    def _operation(self, name: str, deadline: float) -> Iterator[PoolTransaction]:
        me = threading.get_ident()
        if self._owner == me:
            raise ReentrantCall(f"{name} called while another pool operation is in progress")
        with self._lock:
            self._owner = me
            try:
                self._require_not_expired(deadline)
                tx = PoolTransaction(self._state, self.port, self.config.pool_address)
                try:
                    yield tx
                except Exception as exc:
                    logger.warning(
                        "Pool operation rejected: %s",
                        exc,
                        extra={
                            "event": f"pool.{name}.rejected",
                            "error_type": type(exc).__name__,
                            "moves_undone": len(tx.moves),
                        },
                    )
                    tx.rollback()
                    raise
            finally:
                self._owner = None
