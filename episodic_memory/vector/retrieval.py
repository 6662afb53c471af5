"""
Retrieval engine: scores every event against a query, keeps the top k and
expands each hit with its temporal neighbors.
"""

from typing import List, Sequence

from episodic_memory.core.errors import InvalidInput

from .index import IEventStore
from .similarity import mean_similarity
from .types import Event, ScoredEvent


def score_events(store: IEventStore, query_vector: Sequence[float]) -> List[ScoredEvent]:
    """Score every event by mean cosine similarity, best first.

    The sort is stable, so events with equal scores stay in chronological
    order.
    """
    scored = [ScoredEvent(event=event, score=mean_similarity(query_vector, event.vectors))
              for event in store]
    return sorted(scored, key=lambda item: item.score, reverse=True)


def top_k_events(store: IEventStore, query_vector: Sequence[float], k: int) -> List[ScoredEvent]:
    """Return at most ``k`` best-scoring events."""
    if isinstance(k, bool) or not isinstance(k, int) or k < 0:
        raise InvalidInput(f"k must be a non-negative integer, got {k!r}")
    if k == 0 or len(store) == 0:
        return []
    return score_events(store, query_vector)[:k]


def expand_with_context(store: IEventStore, hits: List[ScoredEvent], window: int,
                        chronological: bool = False) -> List[Event]:
    """Add up to ``window`` neighbors on each side of every hit.

    Hits are processed in rank order; each hit is followed by its own
    neighbors before the next hit is considered. Events already collected
    are skipped. With ``chronological`` the final list is sorted by event id.
    """
    collected: List[Event] = []
    seen = set()

    def collect(event: Event) -> None:
        if event.id not in seen:
            seen.add(event.id)
            collected.append(event)

    for hit in hits:
        collect(hit.event)
        for neighbor in store.neighbors(hit.event.id, window):
            collect(neighbor)

    if chronological:
        collected.sort(key=lambda event: event.id)

    return collected


def flatten_vectors(events: List[Event]) -> List[List[float]]:
    """Concatenate the vectors of ``events`` in order."""
    vectors = []
    for event in events:
        vectors.extend(event.vectors)
    return vectors
