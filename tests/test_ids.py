"""Tests for instance ID generation."""

from kanbanmd.ids import SequentialIds, generate_instance_id, next_id


def test_next_id_none():
    """None returns starting ID."""
    assert next_id(None) == "1"


def test_next_id_numeric():
    """Numeric IDs increment."""
    assert next_id("1") == "2"
    assert next_id("9") == "10"
    assert next_id("99") == "100"


def test_next_id_alpha():
    """Non-numeric IDs produce 1 followed by zeros."""
    assert next_id("fish") == "10000"
    assert next_id("a") == "10"


def test_next_id_padded_numeric():
    assert next_id("007") == "8"


def test_sequential_ids_are_deterministic():
    first, second = SequentialIds(), SequentialIds()
    assert [first() for _ in range(3)] == ["1", "2", "3"]
    assert [second() for _ in range(3)] == ["1", "2", "3"]


def test_sequential_ids_prefix_and_start():
    ids = SequentialIds(prefix="item-", start="41")
    assert ids() == "item-42"
    assert ids() == "item-43"


def test_generate_instance_id_unique():
    ids = {generate_instance_id() for _ in range(200)}
    assert len(ids) == 200
    assert all(len(i) == 12 for i in ids)
