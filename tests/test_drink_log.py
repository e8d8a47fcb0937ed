"""Tests for the persisted drink log."""

from datetime import datetime, timezone

import pytest

from drink_safer.drink_log import DrinkLog


@pytest.fixture
def log(tmp_path):
    return DrinkLog(str(tmp_path / "data" / "drinks.db"))


def test_empty(log):
    assert log.entries() == []
    assert len(log) == 0


def test_add_drink(log):
    entry = log.add_drink("Beer", 12, 5.0)
    assert entry.drink_type == "Beer"
    assert entry.volume == 12.0
    assert entry.alcohol_content == 5.0
    assert entry.timestamp.tzinfo is not None
    assert log.entries() == [entry]


def test_ids_are_unique(log):
    a = log.add_drink("Beer", 12, 5.0)
    b = log.add_drink("Beer", 12, 5.0)
    assert a.id != b.id


def test_insertion_order_preserved(log):
    names = ["Wine", "Beer", "Spirits", "Cider"]
    for name in names:
        log.add_drink(name, 5, 10)
    assert [e.drink_type for e in log.entries()] == names


def test_uses_clock(tmp_path):
    fixed = datetime(2024, 9, 21, 22, 30, tzinfo=timezone.utc)
    log = DrinkLog(str(tmp_path / "drinks.db"), clock=lambda: fixed)
    log.add_drink("Beer", 12, 5.0)
    assert log.entries()[0].timestamp == fixed


def test_persists_across_instances(tmp_path):
    path = str(tmp_path / "drinks.db")
    DrinkLog(path).add_drink("Wine", 5, 12)
    reopened = DrinkLog(path)
    assert [e.drink_type for e in reopened.entries()] == ["Wine"]


def test_add_then_delete_round_trip(log):
    log.add_drink("Beer", 12, 5.0)
    log.add_drink("Wine", 5, 12.0)
    before = log.entries()

    log.add_drink("Spirits", 1.5, 40.0)
    log.delete_drinks({2})
    assert log.entries() == before


def test_delete_uses_positions_before_deletion(log):
    for name in ("a", "b", "c", "d"):
        log.add_drink(name, 1, 1)
    removed = log.delete_drinks([0, 2])
    assert [e.drink_type for e in removed] == ["a", "c"]
    assert [e.drink_type for e in log.entries()] == ["b", "d"]


def test_delete_out_of_range_ignored(log):
    log.add_drink("Beer", 12, 5.0)
    assert log.delete_drinks([5, -1]) == []
    assert len(log) == 1


def test_clear(log):
    log.add_drink("Beer", 12, 5.0)
    log.add_drink("Beer", 12, 5.0)
    log.clear()
    assert log.entries() == []


def test_subscribe_notifies_on_change(log):
    seen = []
    unsubscribe = log.subscribe(lambda entries: seen.append(len(entries)))

    log.add_drink("Beer", 12, 5.0)
    log.add_drink("Wine", 5, 12.0)
    log.delete_drinks([0])
    log.delete_drinks([9])  # nothing removed, no notification
    assert seen == [1, 2, 1]

    unsubscribe()
    log.add_drink("Beer", 12, 5.0)
    assert seen == [1, 2, 1]
