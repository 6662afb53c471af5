"""Episodic vector memory store."""

from .core.config import VERSION as __version__
from .core.errors import InvalidInput, PersistenceError
from .vector import EpisodicVectorMemory, Event, ScoredEvent

__all__ = [
    'EpisodicVectorMemory',
    'Event',
    'ScoredEvent',
    'InvalidInput',
    'PersistenceError',
]
