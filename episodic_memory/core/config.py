"""
Configuration for the episodic memory store.
Values come from the environment (optionally a .env file); constructor
arguments always take precedence.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from episodic_memory.core.errors import InvalidInput

load_dotenv()

# Segmentation: gap (ms) since the current event started before a new event is forced
DEFAULT_EVENT_TIME_THRESHOLD_MS = 300000  # 5 minutes

# Retrieval: neighboring events pulled in on each side of a match
DEFAULT_TEMPORAL_CONTEXT_WINDOW = 2

# Persistence
DEFAULT_MEMORY_PATH = "./data/episodic_memory.json"

VERSION = "1.0.0"


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidInput(f"{name} must be an integer, got {raw!r}")


def get_event_time_threshold() -> int:
    """Get the segmentation threshold in milliseconds."""
    return _int_from_env("EVENT_TIME_THRESHOLD_MS", DEFAULT_EVENT_TIME_THRESHOLD_MS)


def get_temporal_context_window() -> int:
    """Get the number of neighbor events expanded on each side of a hit."""
    return _int_from_env("TEMPORAL_CONTEXT_WINDOW", DEFAULT_TEMPORAL_CONTEXT_WINDOW)


def chronological_results_enabled() -> bool:
    """Check if query results are re-sorted chronologically."""
    return os.getenv("CHRONOLOGICAL_RESULTS", "false").lower() == "true"


def get_memory_path() -> str:
    """Get the default save/load path."""
    return os.getenv("EPISODIC_MEMORY_PATH", DEFAULT_MEMORY_PATH)


def debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def ensure_memory_directory(path: str = None) -> None:
    """Ensure the directory holding the memory file exists."""
    Path(path or get_memory_path()).parent.mkdir(parents=True, exist_ok=True)


def validate_memory_config():
    """Validate memory configuration and return any issues."""
    issues = []

    for name in ("EVENT_TIME_THRESHOLD_MS", "TEMPORAL_CONTEXT_WINDOW"):
        raw = os.getenv(name)
        if raw is None:
            continue
        try:
            value = int(raw)
        except ValueError:
            issues.append(f"{name} must be an integer, got {raw!r}")
            continue
        if value < 0:
            issues.append(f"{name} must be >= 0")

    return issues


def get_episodic_memory(**overrides):
    """Build an EpisodicVectorMemory from the configured values.

    Keyword arguments are passed to the constructor and override the
    environment.
    """
    from episodic_memory.vector.episodic_memory import EpisodicVectorMemory

    options = {
        "event_time_threshold": get_event_time_threshold(),
        "temporal_context_window": get_temporal_context_window(),
        "chronological_results": chronological_results_enabled(),
    }
    options.update(overrides)
    return EpisodicVectorMemory(**options)
