"""
Record types shared by the event store, retrieval engine and persistence.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Event:
    """A contiguous run of vectors sharing one temporal window."""

    id: int
    """Position of the event in its store; dedup and neighbor lookup key"""

    timestamp: int
    """Wall-clock creation time in milliseconds"""

    vectors: List[List[float]] = field(default_factory=list)
    """Vectors in arrival order"""

    texts: List[Any] = field(default_factory=list)
    """Text labels; only present ones are appended"""

    metadata: List[Any] = field(default_factory=list)
    """Metadata payloads; only present ones are appended"""

    def append(self, vector: List[float], text: Any = None, metadata: Any = None) -> None:
        """Extend the event with one vector and its optional payloads."""
        has_text = bool(text)
        has_metadata = bool(metadata)
        self.vectors.append(vector)
        if has_text:
            self.texts.append(text)
        if has_metadata:
            self.metadata.append(metadata)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to the persisted document shape."""
        return {
            "timestamp": self.timestamp,
            "vectors": [list(v) for v in self.vectors],
            "texts": list(self.texts),
            "metadata": list(self.metadata),
        }

    @classmethod
    def from_dict(cls, event_id: int, data: Dict[str, Any]) -> 'Event':
        """Create an event from a persisted record."""
        return cls(
            id=event_id,
            timestamp=data["timestamp"],
            vectors=[[float(x) for x in v] for v in data["vectors"]],
            texts=list(data.get("texts", [])),
            metadata=list(data.get("metadata", [])),
        )


@dataclass
class ScoredEvent:
    """An event paired with its mean cosine similarity to a query."""

    event: Event
    score: float
