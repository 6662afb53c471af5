"""
Persistence adapter: saves the event store as a JSON document and loads it
back, replacing the store wholesale.
"""

import json
import math
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, List, Union

from pydantic import BaseModel, StrictFloat, StrictInt, TypeAdapter, ValidationError, field_validator

from episodic_memory.core.config import ensure_memory_directory
from episodic_memory.core.errors import PersistenceError

from .types import Event


class EventRecordModel(BaseModel):
    """One persisted event."""

    timestamp: Union[StrictInt, StrictFloat]
    vectors: List[List[Union[StrictInt, StrictFloat]]]
    texts: List[Any] = []
    metadata: List[Any] = []

    @field_validator('vectors')
    @classmethod
    def vectors_must_be_finite(cls, v):
        if not v:
            raise ValueError('event must hold at least one vector')
        for vector in v:
            if not vector:
                raise ValueError('vectors cannot be empty')
            if not all(math.isfinite(x) for x in vector):
                raise ValueError('vectors must contain only finite numbers')
        return v


_document_adapter = TypeAdapter(List[EventRecordModel])


def _file_mode(target: Path) -> int:
    """Permission bits for a saved file: keep an existing file's mode, else honor the umask."""
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def save_events(events: List[Event], path: Union[str, Path]) -> None:
    """Write ``events`` to ``path`` as UTF-8 JSON, overwriting any existing file.

    The document is written to a temporary file beside ``path`` and moved
    into place, so a failed save leaves the previous file intact.

    Raises:
        PersistenceError: on any I/O or serialization failure.
    """
    target = Path(path)
    document = [event.to_dict() for event in events]

    tmp_name = None
    try:
        ensure_memory_directory(str(target))
        payload = json.dumps(document, indent=2, allow_nan=False)
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(payload)
        os.chmod(tmp_name, _file_mode(target))
        os.replace(tmp_name, target)
        tmp_name = None
    except (OSError, TypeError, ValueError) as e:
        raise PersistenceError(f"Failed to save memory to {target}: {e}", path=str(target)) from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)


def load_events(path: Union[str, Path]) -> List[Event]:
    """Read the document at ``path`` and return its events in stored order.

    A missing file yields an empty list.

    Raises:
        PersistenceError: on any other read, parse or validation failure.
    """
    target = Path(path)
    try:
        with open(target, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PersistenceError(f"Failed to read memory from {target}: {e}", path=str(target)) from e

    try:
        records = _document_adapter.validate_python(raw)
    except ValidationError as e:
        raise PersistenceError(
            f"Malformed memory document {target}: {e.error_count()} validation error(s)",
            path=str(target),
        ) from e

    return [Event.from_dict(position, record.model_dump()) for position, record in enumerate(records)]
