"""
Multi-asset balance tracking.

Implements BalanceTable[Holder, AssetId] -> Amount. The in-memory transfer port
keeps its ledger here; the pool itself only ever sees balances through the port.
"""

from typing import Dict, Tuple


# Type aliases
Holder = str  # account / contract address
AssetId = str  # asset identifier (e.g. token address)
Amount = int  # Non-negative integer (arbitrary precision, range-checked at the edges)


class BalanceTable:
    """
    Balance table mapping (holder, asset) -> amount.

    Zero balances are dropped to keep the table sparse. Do not rely on dict
    iteration order; sort keys explicitly where a stable order matters.
    """

    def __init__(self):
        self._balances: Dict[Tuple[Holder, AssetId], Amount] = {}

    def get(self, holder: Holder, asset: AssetId) -> Amount:
        """Get balance for (holder, asset). Returns 0 if not found."""
        return self._balances.get((holder, asset), 0)

    def set(self, holder: Holder, asset: AssetId, amount: Amount) -> None:
        """
        Set balance for (holder, asset).

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop((holder, asset), None)
        else:
            self._balances[(holder, asset)] = amount

    def add(self, holder: Holder, asset: AssetId, delta: int) -> None:
        """
        Add delta to balance (delta may be negative).

        Raises:
            ValueError: If resulting balance would be negative
        """
        current = self.get(holder, asset)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(holder, asset, new_balance)

    def subtract(self, holder: Holder, asset: AssetId, delta: Amount) -> None:
        """Subtract a non-negative amount from a balance."""
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(holder, asset, -delta)

    def move(self, asset: AssetId, sender: Holder, to: Holder, amount: Amount) -> None:
        """
        Move `amount` of `asset` from `sender` to `to`, all or nothing.

        Raises:
            ValueError: If amount is negative or `sender` cannot cover it
        """
        if amount < 0:
            raise ValueError(f"Amount must be non-negative: {amount}")
        # Debit first: if it raises, nothing has changed.
        self.subtract(sender, asset, amount)
        self.add(to, asset, amount)

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
