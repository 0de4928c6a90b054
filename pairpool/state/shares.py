"""
Ownership share tracking for a single pool.

Shares are tracked separately from asset balances and never leave the pool's
ledger; there is no share transfer operation.
"""

from __future__ import annotations

from typing import Dict

from .balances import Amount, Holder


class ShareTable:
    """
    Share balance table mapping holder -> share amount.

    Notes:
    - Share balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    """

    def __init__(self, balances: Dict[Holder, Amount] | None = None) -> None:
        self._balances: Dict[Holder, Amount] = {}
        for holder, amount in (balances or {}).items():
            self.set(holder, amount)

    def get(self, holder: Holder) -> Amount:
        """Get share balance for holder. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    def set(self, holder: Holder, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Share balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def add(self, holder: Holder, delta: int) -> None:
        """Add delta to a share balance (delta may be negative)."""
        current = self.get(holder)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient share balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(holder, new_balance)

    def subtract(self, holder: Holder, delta: Amount) -> None:
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(holder, -delta)

    def total(self) -> Amount:
        return sum(self._balances.values())

    def holders(self) -> list[Holder]:
        return sorted(self._balances)

    def copy(self) -> "ShareTable":
        clone = ShareTable()
        clone._balances = dict(self._balances)
        return clone

    def __repr__(self) -> str:
        return f"ShareTable({len(self._balances)} holders)"
