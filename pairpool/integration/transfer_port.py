"""
Asset transfer boundary.

The pool never owns asset balances itself; it asks a `TransferPort` to move
assets and to report balances. A port must be all-or-nothing per call: either
exactly `amount` moves and the call returns True, or nothing moves and it
returns False. The engine still treats every port as untrusted (see
`pairpool.core.pool`).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..state.balances import AssetId, Amount, BalanceTable, Holder


@runtime_checkable
class TransferPort(Protocol):
    def transfer_from(self, asset: AssetId, sender: Holder, to: Holder, amount: Amount) -> bool:
        ...

    def transfer(self, asset: AssetId, to: Holder, amount: Amount) -> bool:
        ...

    def balance_of(self, asset: AssetId, holder: Holder) -> Amount:
        ...


class InMemoryTransferPort:
    """
    Reference port backed by a `BalanceTable`.

    `transfer` moves from `pool_address`, the holder the pool is registered
    under. `mint` seeds balances for tests and offline tooling.
    """

    def __init__(self, pool_address: Holder, balances: BalanceTable | None = None) -> None:
        if not isinstance(pool_address, str) or not pool_address:
            raise ValueError("pool_address must be a non-empty string")
        self.pool_address = pool_address
        self.balances = balances if balances is not None else BalanceTable()

    def mint(self, holder: Holder, asset: AssetId, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"mint amount must be non-negative: {amount}")
        self.balances.add(holder, asset, amount)

    def transfer_from(self, asset: AssetId, sender: Holder, to: Holder, amount: Amount) -> bool:
        if amount < 0 or self.balances.get(sender, asset) < amount:
            return False
        self.balances.move(asset, sender, to, amount)
        return True

    def transfer(self, asset: AssetId, to: Holder, amount: Amount) -> bool:
        return self.transfer_from(asset, self.pool_address, to, amount)

    def balance_of(self, asset: AssetId, holder: Holder) -> Amount:
        return self.balances.get(holder, asset)

    def __repr__(self) -> str:
        return f"InMemoryTransferPort(pool_address={self.pool_address!r}, {self.balances!r})"
