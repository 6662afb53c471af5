"""
Error taxonomy for the episodic memory store.
"""

from typing import Optional


class InvalidInput(ValueError):
    """Raised for malformed vectors, queries or construction parameters."""
    pass


class PersistenceError(Exception):
    """Raised when the event store cannot be saved or loaded."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
