"""
Episodic vector memory - time-segmented events over embedding vectors,
retrieved with their temporal context.
"""

# Package initialization for vector module
from .types import Event, ScoredEvent
from .index import IEventStore, InMemoryEventStore
from .segmentation import SegmentDecision, decide, wall_clock_ms
from .similarity import cosine_similarity, mean_similarity, validate_vector
from .persistence import load_events, save_events
from .episodic_memory import EpisodicVectorMemory

__all__ = [
    'Event',
    'ScoredEvent',
    'IEventStore',
    'InMemoryEventStore',
    'SegmentDecision',
    'decide',
    'wall_clock_ms',
    'cosine_similarity',
    'mean_similarity',
    'validate_vector',
    'load_events',
    'save_events',
    'EpisodicVectorMemory'
]
