"""
Segmentation policy: decides on each ingest whether to extend the current
event or start a new one, from the gap since the current event started.
"""

import time
from enum import Enum
from typing import Optional

from episodic_memory.core.config import DEFAULT_EVENT_TIME_THRESHOLD_MS


class SegmentDecision(Enum):
    EXTEND = "extend"
    NEW_EVENT = "new_event"


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


def decide(current_time: int, last_event_timestamp: Optional[int], has_current_event: bool,
           threshold: int = DEFAULT_EVENT_TIME_THRESHOLD_MS) -> SegmentDecision:
    """Return NEW_EVENT when there is no current event or the gap exceeds ``threshold``.

    The gap is measured from the start of the current event, not from the
    most recent vector, so a busy event may outlast the threshold.
    """
    if not has_current_event or last_event_timestamp is None:
        return SegmentDecision.NEW_EVENT

    if current_time - last_event_timestamp > threshold:
        return SegmentDecision.NEW_EVENT

    return SegmentDecision.EXTEND
