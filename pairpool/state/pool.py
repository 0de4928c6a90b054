"""
Pool ledger: reserves, total shares and per-holder share balances.

`PoolState` is plain state with no behaviour beyond lookups and snapshots.
The liquidity and swap engines only ever mutate a working copy taken under the
owning `LiquidityPool`'s lock; once a state is published as committed it is
never mutated again, so readers can use it without locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from ..kernels.numeric import U256_MAX
from .balances import AssetId, Amount, Holder
from .shares import ShareTable


@dataclass
class PoolState:
    """
    State of a two-asset liquidity pool.

    Attributes:
        asset_a: First asset identifier (immutable after creation)
        asset_b: Second asset identifier (immutable after creation)
        reserve_a: Reserve amount for asset_a
        reserve_b: Reserve amount for asset_b
        total_shares: Outstanding ownership shares
        residue_a: Port balance of asset_a the pool holds but does not account for
        residue_b: Port balance of asset_b the pool holds but does not account for
        shares: Per-holder share balances
    """
    asset_a: AssetId
    asset_b: AssetId
    reserve_a: Amount = 0
    reserve_b: Amount = 0
    total_shares: Amount = 0
    residue_a: Amount = 0
    residue_b: Amount = 0
    shares: ShareTable = field(default_factory=ShareTable)

    def __post_init__(self):
        if not isinstance(self.asset_a, str) or not self.asset_a:
            raise ValueError("asset_a must be a non-empty string")
        if not isinstance(self.asset_b, str) or not self.asset_b:
            raise ValueError("asset_b must be a non-empty string")
        if self.asset_a == self.asset_b:
            raise ValueError(f"Pool assets must differ: {self.asset_a}")
        if self.reserve_a < 0 or self.reserve_b < 0:
            raise ValueError(
                f"Reserves must be non-negative: ({self.reserve_a}, {self.reserve_b})"
            )
        if self.total_shares < 0:
            raise ValueError(f"total_shares must be non-negative: {self.total_shares}")
        if self.residue_a < 0 or self.residue_b < 0:
            raise ValueError(
                f"Residue must be non-negative: ({self.residue_a}, {self.residue_b})"
            )

    def has_pair(self, asset_x: AssetId, asset_y: AssetId) -> bool:
        return {asset_x, asset_y} == {self.asset_a, self.asset_b} and asset_x != asset_y

    def get_reserves(self, asset_in: AssetId, asset_out: AssetId) -> Tuple[Amount, Amount]:
        """Return `(reserve_in, reserve_out)` oriented to the given direction."""
        if asset_in == self.asset_a and asset_out == self.asset_b:
            return self.reserve_a, self.reserve_b
        if asset_in == self.asset_b and asset_out == self.asset_a:
            return self.reserve_b, self.reserve_a
        raise ValueError(f"Invalid direction: {asset_in} -> {asset_out}")

    def shares_of(self, holder: Holder) -> Amount:
        return self.shares.get(holder)

    def snapshot(self) -> "PoolState":
        """Independent copy that an operation can mutate without affecting readers."""
        return PoolState(
            asset_a=self.asset_a,
            asset_b=self.asset_b,
            reserve_a=self.reserve_a,
            reserve_b=self.reserve_b,
            total_shares=self.total_shares,
            residue_a=self.residue_a,
            residue_b=self.residue_b,
            shares=self.shares.copy(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "asset_a": self.asset_a,
            "asset_b": self.asset_b,
            "reserve_a": self.reserve_a,
            "reserve_b": self.reserve_b,
            "total_shares": self.total_shares,
            "residue_a": self.residue_a,
            "residue_b": self.residue_b,
            "shares": {holder: self.shares.get(holder) for holder in self.shares.holders()},
        }


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------


def inv_empty_iff_unfunded(s: PoolState) -> bool:
    return (s.total_shares == 0) == (s.reserve_a == 0 and s.reserve_b == 0)


def inv_shares_sum_to_total(s: PoolState) -> bool:
    return s.shares.total() == s.total_shares


def inv_uint256_bounds(s: PoolState) -> bool:
    values = (s.reserve_a, s.reserve_b, s.total_shares, s.residue_a, s.residue_b)
    return all(0 <= v <= U256_MAX for v in values)


INVARIANT_REGISTRY: dict[str, Callable[[PoolState], bool]] = {
    "inv_empty_iff_unfunded": inv_empty_iff_unfunded,
    "inv_shares_sum_to_total": inv_shares_sum_to_total,
    "inv_uint256_bounds": inv_uint256_bounds,
}


def check_invariants(
    state: PoolState,
    *,
    balances: Optional[Tuple[Amount, Amount]] = None,
    k_before: Optional[int] = None,
) -> list[str]:
    """
    Return the list of violated invariant IDs (empty = all pass).

    `balances` is the port's reported `(balance_a, balance_b)` for the pool, which
    must cover reserves plus residue;
    `k_before` is the pre-swap reserve product. Both checks are skipped when
    the argument is omitted.
    """
    violations = [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(state)
    ]
    if balances is not None:
        balance_a, balance_b = balances
        if (
            state.reserve_a + state.residue_a > balance_a
            or state.reserve_b + state.residue_b > balance_b
        ):
            violations.append("inv_reserves_within_balances")
    if k_before is not None and state.reserve_a * state.reserve_b < k_before:
        violations.append("inv_product_non_decreasing")
    return violations
