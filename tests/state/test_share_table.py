# [TESTER] v1

from __future__ import annotations

import pytest

from pairpool.state.balances import BalanceTable
from pairpool.state.shares import ShareTable


def test_share_table_is_sparse_and_non_negative() -> None:
    table = ShareTable()
    table.add("alice", 10)
    table.add("bob", 5)
    table.subtract("alice", 10)
    assert table.get("alice") == 0
    assert table.holders() == ["bob"]
    assert table.total() == 5
    with pytest.raises(ValueError, match="Insufficient share balance"):
        table.subtract("bob", 6)
    assert table.get("bob") == 5


def test_share_table_copy_is_independent() -> None:
    table = ShareTable({"alice": 3})
    clone = table.copy()
    clone.add("alice", 1)
    assert table.get("alice") == 3
    assert clone.get("alice") == 4


def test_balance_table_move_is_all_or_nothing() -> None:
    table = BalanceTable()
    table.set("alice", "A", 10)
    with pytest.raises(ValueError, match="Insufficient balance"):
        table.move("A", "alice", "bob", 11)
    assert table.get("alice", "A") == 10
    assert table.get("bob", "A") == 0

    table.move("A", "alice", "bob", 4)
    assert table.get("alice", "A") == 6
    assert table.get("bob", "A") == 4
