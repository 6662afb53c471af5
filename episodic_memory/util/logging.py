"""
Structured operation logging for the episodic memory store.
"""

import logging
from typing import Any, Dict, Sequence

from episodic_memory.core.config import debug_enabled


class StructuredLogger:
    """Structured logger for ingest, segmentation, retrieval and persistence."""

    def __init__(self, name: str = "episodic_memory"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None,
                      level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_ingest(self, event_id: int, dimension: int, has_text: bool, has_metadata: bool):
        """Log a vector appended to an event."""
        details = {
            "event_id": event_id,
            "dimension": dimension,
            "text": has_text,
            "metadata": has_metadata,
        }
        self.log_operation("memory.add", "success", details, level=logging.DEBUG)

    def log_segment(self, event_id: int, timestamp: int, gap_ms: int = None):
        """Log the creation of a new event."""
        details = {"event_id": event_id, "timestamp": timestamp}
        if gap_ms is not None:
            details["gap_ms"] = gap_ms

        self.log_operation("memory.segment", "new_event", details)

    def log_query(self, k: int, hit_ids: Sequence[int], result_ids: Sequence[int], vector_count: int):
        """Log a completed retrieval."""
        details = {
            "k": k,
            "hits": list(hit_ids),
            "events": list(result_ids),
            "vectors": vector_count,
        }
        self.log_operation("memory.query", "success", details, level=logging.DEBUG)

    def log_persistence(self, operation: str, path: str, event_count: int = None,
                        status: str = "success", error: str = None):
        """Log a save or load."""
        details = {"path": str(path)}
        if event_count is not None:
            details["events"] = event_count
        if error:
            details["error"] = error[:100]

        level = logging.ERROR if status == "failed" else logging.INFO
        self.log_operation(f"persistence.{operation}", status, details, level=level)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
