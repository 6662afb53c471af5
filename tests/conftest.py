"""
Shared fixtures for episodic memory tests.
"""

import pytest

from episodic_memory.vector import EpisodicVectorMemory


class FakeClock:
    """Controllable millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    """A fake clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def memory(clock):
    """Memory with a 100ms threshold, window of 2 and a fake clock."""
    return EpisodicVectorMemory(event_time_threshold=100, temporal_context_window=2, clock=clock)


@pytest.fixture
def make_events(memory, clock):
    """Add one single-vector event per vector, each past the threshold."""
    def _make(vectors, gap=150):
        for i, vector in enumerate(vectors):
            if i:
                clock.advance(gap)
            memory.add(vector, f"event {i}", {"index": i})
        return memory
    return _make
