"""
Operation-scoped transaction over the pool ledger and the transfer port.

A `PoolTransaction` works on a private copy of the committed `PoolState`; the
owning pool publishes that copy only after the operation succeeds and its
invariants hold. Every transfer issued through the transaction is journaled.
If the operation aborts, journaled transfers are compensated in reverse order
and the working copy is dropped, so a failed call leaves reserves, total shares
and share balances exactly as they were.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Tuple

from ..kernels.numeric import require_uint
from ..state.balances import AssetId, Amount, Holder
from ..state.pool import PoolState
from .errors import PoolError, PoolInvariantError, RollbackFailed, TransferFailed


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    asset: AssetId
    sender: Holder
    to: Holder
    amount: Amount


def _invoke(what: str, fn: Callable[..., Any], *args: Any) -> None:
    try:
        ok = fn(*args)
    except PoolError:
        raise
    except Exception as exc:
        raise TransferFailed(f"{what} raised {type(exc).__name__}: {exc}") from exc
    if ok is not True:
        raise TransferFailed(f"{what} reported failure")


class PoolTransaction:
    def __init__(self, committed: PoolState, port: Any, pool_address: Holder) -> None:
        self.state = committed.snapshot()
        self.port = port
        self.pool_address = pool_address
        self._journal: List[Move] = []
        if self.state.total_shares == 0:
            # Whatever an unfunded pool already holds belongs to nobody.
            self.state.residue_a, self.state.residue_b = self.balances()

    @property
    def moves(self) -> Tuple[Move, ...]:
        return tuple(self._journal)

    def pull(self, asset: AssetId, sender: Holder, amount: Amount) -> None:
        """Move `amount` of `asset` from `sender` into the pool."""
        if amount == 0:
            return
        _invoke(
            f"transfer_from({asset}, {sender} -> pool, {amount})",
            self.port.transfer_from, asset, sender, self.pool_address, amount,
        )
        self._journal.append(Move(asset=asset, sender=sender, to=self.pool_address, amount=amount))

    def push(self, asset: AssetId, to: Holder, amount: Amount) -> None:
        """Move `amount` of `asset` from the pool to `to`."""
        if amount == 0:
            return
        _invoke(f"transfer({asset}, pool -> {to}, {amount})", self.port.transfer, asset, to, amount)
        self._journal.append(Move(asset=asset, sender=self.pool_address, to=to, amount=amount))

    def balances(self) -> Tuple[Amount, Amount]:
        """The port's reported `(balance_a, balance_b)` for the pool address."""
        balance_a = require_uint("balance_a", self.port.balance_of(self.state.asset_a, self.pool_address))
        balance_b = require_uint("balance_b", self.port.balance_of(self.state.asset_b, self.pool_address))
        return balance_a, balance_b

    def sync_reserves(self) -> Tuple[Amount, Amount]:
        """
        Re-derive reserves from the port's actual balances.

        Reserves are the pool's balance minus its recorded residue. With no
        shares outstanding the pool is empty by definition and everything the
        port still reports becomes residue.

        Raises:
            PoolInvariantError: If the port reports less than the recorded residue
        """
        s = self.state
        balance_a, balance_b = self.balances()
        if s.total_shares == 0:
            s.reserve_a, s.reserve_b = 0, 0
            s.residue_a, s.residue_b = balance_a, balance_b
        else:
            if balance_a < s.residue_a or balance_b < s.residue_b:
                raise PoolInvariantError(["inv_reserves_within_balances"])
            s.reserve_a = balance_a - s.residue_a
            s.reserve_b = balance_b - s.residue_b
        return s.reserve_a, s.reserve_b

    def rollback(self) -> None:
        """Compensate journaled transfers (newest first) and drop the working ledger."""
        try:
            for move in reversed(self._journal):
                if move.to == self.pool_address:
                    _invoke(
                        f"refund transfer({move.asset}, pool -> {move.sender}, {move.amount})",
                        self.port.transfer, move.asset, move.sender, move.amount,
                    )
                else:
                    _invoke(
                        f"reclaim transfer_from({move.asset}, {move.to} -> pool, {move.amount})",
                        self.port.transfer_from, move.asset, move.to, self.pool_address, move.amount,
                    )
        except PoolError as exc:
            logger.error(
                "Rollback failed; pool ledger unchanged but port balances may be inconsistent",
                extra={"event": "pool.rollback_failed", "moves": len(self._journal), "error": str(exc)},
            )
            raise RollbackFailed(f"compensating transfer failed: {exc}") from exc
        finally:
            self._journal.clear()
