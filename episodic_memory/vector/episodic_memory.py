"""
Episodic vector memory: groups incoming vectors into time-bounded events
and answers similarity queries with the temporal context of each match.
"""

import threading
from typing import Any, Callable, List, Optional, Sequence

from episodic_memory.core.config import (
    chronological_results_enabled,
    get_event_time_threshold,
    get_memory_path,
    get_temporal_context_window,
)
from episodic_memory.core.errors import InvalidInput, PersistenceError
from episodic_memory.util.logging import logger

from .index import InMemoryEventStore
from .persistence import load_events, save_events
from .retrieval import expand_with_context, flatten_vectors, score_events, top_k_events
from .segmentation import SegmentDecision, decide, wall_clock_ms
from .similarity import validate_vector
from .types import Event, ScoredEvent


class EpisodicVectorMemory:
    """
    In-process episodic memory over embedding vectors.

    Each ``add`` either extends the current event or, once more than
    ``event_time_threshold`` ms have passed since that event started, opens
    a new one. ``query`` ranks events by mean cosine similarity and returns
    the vectors of the top ``k`` events plus up to
    ``temporal_context_window`` neighbors on each side of every match.
    """

    def __init__(self, event_time_threshold: Optional[int] = None,
                 temporal_context_window: Optional[int] = None,
                 clock: Optional[Callable[[], int]] = None,
                 chronological_results: Optional[bool] = None):
        """
        Args:
            event_time_threshold: Gap in ms before ingest forces a new event
            temporal_context_window: Neighbor events added on each side of a hit
            clock: Zero-argument callable returning wall-clock milliseconds
            chronological_results: Re-sort expanded events by creation order
        """
        if event_time_threshold is None:
            event_time_threshold = get_event_time_threshold()
        if temporal_context_window is None:
            temporal_context_window = get_temporal_context_window()
        if chronological_results is None:
            chronological_results = chronological_results_enabled()

        if event_time_threshold < 0:
            raise InvalidInput("event_time_threshold must be >= 0")
        if isinstance(temporal_context_window, bool) or not isinstance(temporal_context_window, int) \
                or temporal_context_window < 0:
            raise InvalidInput("temporal_context_window must be a non-negative integer")

        self.event_time_threshold = event_time_threshold
        self.temporal_context_window = temporal_context_window
        self.chronological_results = bool(chronological_results)
        self._clock = clock or wall_clock_ms

        self._store = InMemoryEventStore()
        self._current_event: Optional[Event] = None
        self._last_event_timestamp: Optional[int] = None
        self._lock = threading.RLock()

    @property
    def memory_store(self) -> List[Event]:
        """Events in creation order."""
        return self._store.snapshot()

    @property
    def current_event(self) -> Optional[Event]:
        return self._current_event

    @property
    def last_event_timestamp(self) -> Optional[int]:
        return self._last_event_timestamp

    def __len__(self) -> int:
        return len(self._store)

    def add(self, vector: Sequence[float], text: Any = None, metadata: Any = None) -> 'EpisodicVectorMemory':
        """Ingest one vector with optional text and metadata.

        Raises:
            InvalidInput: if ``vector`` is not a sequence of finite numbers,
                or if ``text`` or ``metadata`` has no truth value. The store
                is left untouched.
        """
        values = validate_vector(vector)
        try:
            has_text = bool(text)
            has_metadata = bool(metadata)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"text and metadata must have a truth value: {e}") from e
        text = text if has_text else None
        metadata = metadata if has_metadata else None

        with self._lock:
            now = self._clock()
            decision = decide(now, self._last_event_timestamp,
                              self._current_event is not None, self.event_time_threshold)

            if decision is SegmentDecision.NEW_EVENT:
                gap = None if self._last_event_timestamp is None else now - self._last_event_timestamp
                self._current_event = self._store.append(now, values, text, metadata)
                self._last_event_timestamp = now
                logger.log_segment(self._current_event.id, now, gap)
            else:
                self._current_event.append(values, text, metadata)

            logger.log_ingest(self._current_event.id, len(values), has_text, has_metadata)

        return self

    def score_events(self, query_vector: Sequence[float]) -> List[ScoredEvent]:
        """Every event with its mean cosine similarity to ``query_vector``, best first."""
        values = validate_vector(query_vector, name="Query vector")
        with self._lock:
            return score_events(self._store, values)

    def query_events(self, query_vector: Sequence[float], k: int = 1) -> List[Event]:
        """Top ``k`` events expanded with their temporal neighbors.

        Raises:
            InvalidInput: for a malformed query vector, a negative or
                non-integer ``k``, or a dimension mismatch with stored vectors.
        """
        values = validate_vector(query_vector, name="Query vector")

        with self._lock:
            hits = top_k_events(self._store, values, k)
            events = expand_with_context(self._store, hits, self.temporal_context_window,
                                         chronological=self.chronological_results)

        logger.log_query(k, [hit.event.id for hit in hits], [event.id for event in events],
                         sum(len(event.vectors) for event in events))
        return events

    def query(self, query_vector: Sequence[float], k: int = 1) -> List[List[float]]:
        """Vectors of the top ``k`` events and their temporal context.

        Returns an empty list when the store is empty.
        """
        return flatten_vectors(self.query_events(query_vector, k))

    def save(self, path: Optional[str] = None) -> None:
        """Write the whole event store to ``path`` (default: configured path)."""
        path = path or get_memory_path()
        with self._lock:
            events = self._store.snapshot()
            try:
                save_events(events, path)
            except PersistenceError as e:
                logger.log_persistence("save", path, status="failed", error=str(e))
                raise
        logger.log_persistence("save", path, len(events))

    def load(self, path: Optional[str] = None) -> None:
        """Replace the event store with the document at ``path``.

        A missing file leaves an empty store. The last loaded event becomes
        the current event.
        """
        path = path or get_memory_path()
        try:
            events = load_events(path)
        except PersistenceError as e:
            logger.log_persistence("load", path, status="failed", error=str(e))
            raise

        with self._lock:
            self._store.replace(events)
            self._current_event = self._store.last()
            self._last_event_timestamp = self._current_event.timestamp if self._current_event else None
        logger.log_persistence("load", path, len(events))

    def clear(self) -> None:
        """Remove every event and reset the current event."""
        with self._lock:
            self._store.clear()
            self._current_event = None
            self._last_event_timestamp = None
