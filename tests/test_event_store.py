"""
Tests for the in-memory event store.
"""

import numpy as np
import pytest

from episodic_memory.vector.index import IEventStore, InMemoryEventStore
from episodic_memory.vector.types import Event


def _store_with(count):
    store = InMemoryEventStore()
    for i in range(count):
        store.append(1000 + i * 200, [float(i), 1.0])
    return store


def test_event_store_interface():
    """InMemoryEventStore implements the IEventStore interface."""
    assert isinstance(InMemoryEventStore(), IEventStore)


def test_append_assigns_sequential_ids():
    store = _store_with(3)

    assert len(store) == 3
    assert [event.id for event in store] == [0, 1, 2]
    assert [event.timestamp for event in store] == [1000, 1200, 1400]


def test_append_creates_event_with_first_vector():
    store = InMemoryEventStore()
    event = store.append(5, [1.0, 0.0], "hello", {"source": "test"})

    assert event.vectors == [[1.0, 0.0]]
    assert event.texts == ["hello"]
    assert event.metadata == [{"source": "test"}]


def test_append_skips_missing_payloads():
    store = InMemoryEventStore()
    event = store.append(5, [1.0], None, None)

    assert event.texts == []
    assert event.metadata == []


def test_get_and_last():
    store = _store_with(2)

    assert store.get(0).timestamp == 1000
    assert store.get(1) is store.last()
    assert store.get(2) is None
    assert store.get(-1) is None


def test_last_on_empty_store():
    assert InMemoryEventStore().last() is None


def test_neighbors_nearest_first():
    """Neighbors alternate earlier/later, nearest distance first."""
    store = _store_with(5)
    ids = [event.id for event in store.neighbors(2, 2)]

    assert ids == [1, 3, 0, 4]


def test_neighbors_clipped_at_edges():
    store = _store_with(3)

    assert [event.id for event in store.neighbors(0, 2)] == [1, 2]
    assert [event.id for event in store.neighbors(2, 1)] == [1]
    assert store.neighbors(1, 0) == []


def test_replace_renumbers_events():
    store = _store_with(1)
    loaded = [Event(id=7, timestamp=1, vectors=[[1.0]]), Event(id=9, timestamp=2, vectors=[[2.0]])]

    store.replace(loaded)

    assert len(store) == 2
    assert [event.id for event in store] == [0, 1]
    assert store.last().timestamp == 2


def test_clear_store():
    store = _store_with(3)
    store.clear()

    assert len(store) == 0
    assert store.last() is None


def test_snapshot_is_a_copy():
    """Mutating a snapshot does not change the store."""
    store = _store_with(2)
    snapshot = store.snapshot()
    snapshot.pop()

    assert len(store) == 2


class TestEvent:
    """Event record behaviour."""

    def test_append_keeps_arrival_order(self):
        event = Event(id=0, timestamp=0)
        event.append([1.0], "a")
        event.append([2.0])
        event.append([3.0], "c", {"k": 1})

        assert event.vectors == [[1.0], [2.0], [3.0]]
        assert event.texts == ["a", "c"]
        assert event.metadata == [{"k": 1}]

    def test_falsy_payloads_are_not_appended(self):
        event = Event(id=0, timestamp=0)
        event.append([1.0], "", {})

        assert event.texts == []
        assert event.metadata == []

    def test_append_without_truth_value_mutates_nothing(self):
        """A payload whose truthiness raises leaves the event unchanged."""
        event = Event(id=0, timestamp=0, vectors=[[1.0]])

        with pytest.raises(ValueError):
            event.append([2.0], None, np.array([1, 2]))

        assert event.vectors == [[1.0]]
        assert event.metadata == []

    def test_to_dict_excludes_id(self):
        event = Event(id=3, timestamp=42, vectors=[[1.0, 2.0]], texts=["t"], metadata=[{"m": 1}])

        assert event.to_dict() == {
            "timestamp": 42,
            "vectors": [[1.0, 2.0]],
            "texts": ["t"],
            "metadata": [{"m": 1}],
        }

    def test_from_dict_tolerates_missing_payload_lists(self):
        event = Event.from_dict(4, {"timestamp": 1, "vectors": [[0.5]]})

        assert event.id == 4
        assert event.texts == []
        assert event.metadata == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
