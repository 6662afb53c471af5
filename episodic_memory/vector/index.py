"""
Event store: the ordered, append-only sequence of events.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional

from .types import Event


class IEventStore(ABC):
    """Abstract interface for event storage operations."""

    @abstractmethod
    def append(self, timestamp: int, vector: List[float], text=None, metadata=None) -> Event:
        """Create a new event holding ``vector`` and append it to the store."""
        pass

    @abstractmethod
    def get(self, event_id: int) -> Optional[Event]:
        """Return the event with ``event_id``, or None if it does not exist."""
        pass

    @abstractmethod
    def last(self) -> Optional[Event]:
        """Return the most recent event, or None if the store is empty."""
        pass

    @abstractmethod
    def replace(self, events: List[Event]) -> None:
        """Replace the whole store contents, renumbering event ids."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all events from the store."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[Event]:
        pass

    def neighbors(self, event_id: int, window: int) -> List[Event]:
        """Events within ``window`` positions of ``event_id``, nearest first.

        For each distance the earlier event precedes the later one.
        """
        result = []
        for offset in range(1, window + 1):
            before = self.get(event_id - offset)
            if before is not None:
                result.append(before)
            after = self.get(event_id + offset)
            if after is not None:
                result.append(after)
        return result


class InMemoryEventStore(IEventStore):
    """In-memory event store. An event's id is its index in the store."""

    def __init__(self):
        self._events: List[Event] = []

    def append(self, timestamp: int, vector: List[float], text=None, metadata=None) -> Event:
        """Create a new event holding ``vector`` and append it to the store."""
        event = Event(id=len(self._events), timestamp=timestamp)
        event.append(vector, text, metadata)
        self._events.append(event)
        return event

    def get(self, event_id: int) -> Optional[Event]:
        """Return the event with ``event_id``, or None if it does not exist."""
        if 0 <= event_id < len(self._events):
            return self._events[event_id]
        return None

    def last(self) -> Optional[Event]:
        """Return the most recent event, or None if the store is empty."""
        if not self._events:
            return None
        return self._events[-1]

    def replace(self, events: List[Event]) -> None:
        """Replace the whole store contents, renumbering event ids."""
        for position, event in enumerate(events):
            event.id = position
        self._events = list(events)

    def clear(self) -> None:
        """Remove all events from the store."""
        self._events = []

    def snapshot(self) -> List[Event]:
        """Shallow copy of the event list in creation order."""
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)
