import logging

import pytest

from poisonbar.core import GameState, fingerprint
from poisonbar.search import TranspositionTable


def test_round_trip_for_inserted_fingerprints() -> None:
    table = TranspositionTable(64)
    stored = {}
    for index, state in enumerate([GameState(3, 3, 1, 1), GameState(2, 5, 0, 4), GameState(6, 6, 2, 0)]):
        score = 1.0 if index % 2 == 0 else -1.0
        assert table.insert(fingerprint(state), score)
        stored[fingerprint(state)] = score

    for key, score in stored.items():
        assert table.lookup(key) == score
    assert len(table) == 3


def test_lookup_on_empty_table_misses() -> None:
    table = TranspositionTable(16)
    assert table.lookup(fingerprint(GameState(2, 2, 0, 0))) is None
    assert table.misses == 1


def test_colliding_keys_probe_forward() -> None:
    table = TranspositionTable(8)
    for key, score in ((3, 1.0), (11, -1.0), (19, 0.5)):
        assert table.insert(key, score)

    assert list(table.items()) == [(3, 1.0), (11, -1.0), (19, 0.5)]
    assert table.lookup(11) == -1.0
    assert table.lookup(19) == 0.5
    assert table.lookup(27) is None


def test_probe_wraps_around_end_of_table() -> None:
    table = TranspositionTable(4)
    table.insert(3, 1.0)
    table.insert(7, -1.0)
    assert [key for key, _ in table.items()] == [7, 3]
    assert table.lookup(7) == -1.0


def test_capacity_two_with_three_colliding_inserts() -> None:
    table = TranspositionTable(2)

    assert table.insert(0, 1.0)
    assert table.lookup(0) == 1.0

    assert table.insert(2, -1.0)
    assert len(table) == 2
    assert table.is_saturated

    assert not table.insert(4, 1.0)
    assert len(table) == 2
    assert table.dropped == 1
    assert list(table.items()) == [(0, 1.0), (2, -1.0)]


def test_saturated_table_refuses_lookups(caplog) -> None:
    table = TranspositionTable(2)
    table.insert(5, 1.0)
    table.insert(6, -1.0)

    with caplog.at_level(logging.DEBUG, logger="poisonbar.search.transposition"):
        assert table.lookup(5) is None
        assert table.lookup(6) is None
    assert "completely filled" in caplog.text


def test_insert_into_full_table_warns(caplog) -> None:
    table = TranspositionTable(1)
    table.insert(1, 1.0)
    with caplog.at_level(logging.WARNING, logger="poisonbar.search.transposition"):
        assert not table.insert(2, 1.0)
    assert "completely filled" in caplog.text


def test_probe_cap_abandons_insert(caplog) -> None:
    table = TranspositionTable(10, max_probes=2)
    for key in (0, 1, 2):
        assert table.insert(key, 1.0)

    with caplog.at_level(logging.WARNING, logger="poisonbar.search.transposition"):
        assert not table.insert(10, -1.0)
    assert "abandoned" in caplog.text
    assert len(table) == 3
    assert table.lookup(10) is None

    assert table.insert(3, -1.0)
    assert table.lookup(3) == -1.0


def test_reset_clears_every_entry() -> None:
    table = TranspositionTable(8)
    for key in range(6):
        table.insert(key, float(key))
    table.reset()

    assert len(table) == 0
    assert list(table.items()) == []
    for key in range(6):
        assert table.lookup(key) is None

    table.reset()
    assert len(table) == 0


def test_reset_restores_saturated_table() -> None:
    table = TranspositionTable(2)
    table.insert(9, 1.0)
    table.insert(10, 1.0)
    assert table.lookup(9) is None
    table.reset()
    assert table.insert(9, -1.0)
    assert table.lookup(9) == -1.0


def test_stats_report_usage() -> None:
    table = TranspositionTable(4)
    table.insert(1, 1.0)
    table.lookup(1)
    table.lookup(2)
    stats = table.stats()
    assert stats["entries"] == 1
    assert stats["capacity"] == 4
    assert stats["load_factor"] == 0.25
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 0.5


@pytest.mark.parametrize("capacity", [0, -3])
def test_capacity_must_be_positive(capacity) -> None:
    with pytest.raises(ValueError):
        TranspositionTable(capacity)
