"""
Vector validation and cosine similarity.
"""

import numbers
from typing import Any, List, Sequence

import numpy as np

from episodic_memory.core.errors import InvalidInput


def validate_vector(vector: Any, name: str = "Vector") -> List[float]:
    """Check that ``vector`` is a non-empty sequence of finite numbers.

    Accepts lists, tuples and one-dimensional numpy arrays. Returns the
    vector as a plain list of floats.

    Raises:
        InvalidInput: if the value is not a sequence or holds anything
            other than finite real numbers.
    """
    if isinstance(vector, np.ndarray):
        if vector.ndim != 1:
            raise InvalidInput(f"{name} must be one-dimensional, got shape {vector.shape}.")
        vector = vector.tolist()
    elif not isinstance(vector, (list, tuple)):
        raise InvalidInput(f"{name} must be an array of numbers.")

    if len(vector) == 0:
        raise InvalidInput(f"{name} must not be empty.")

    values = []
    for item in vector:
        # bool is an Integral; exclude it explicitly
        if isinstance(item, bool) or not isinstance(item, numbers.Real):
            raise InvalidInput(f"{name} must contain only numbers.")
        value = float(item)
        if not np.isfinite(value):
            raise InvalidInput(f"{name} must contain only finite numbers.")
        values.append(value)

    return values


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two equal-length vectors; 0.0 if either has zero norm."""
    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    if vec_a.shape != vec_b.shape:
        raise InvalidInput(
            f"Vector dimension {vec_a.shape[0]} does not match dimension {vec_b.shape[0]}"
        )

    norm_a = np.linalg.norm(vec_a)
    norm_b = np.linalg.norm(vec_b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(vec_a, vec_b) / (norm_a * norm_b))


def mean_similarity(query: Sequence[float], vectors: Sequence[Sequence[float]]) -> float:
    """Arithmetic mean of the cosine similarity between ``query`` and each vector."""
    if not vectors:
        return 0.0

    dimension = len(query)
    for vector in vectors:
        if len(vector) != dimension:
            raise InvalidInput(
                f"Query vector dimension {dimension} does not match stored dimension {len(vector)}"
            )

    matrix = np.asarray(vectors, dtype=np.float64)
    query_array = np.asarray(query, dtype=np.float64)

    query_norm = np.linalg.norm(query_array)
    if query_norm == 0:
        return 0.0

    norms = np.linalg.norm(matrix, axis=1)
    dots = matrix @ query_array
    # Zero-norm stored vectors contribute 0 to the mean
    scores = np.zeros(len(matrix), dtype=np.float64)
    nonzero = norms > 0
    scores[nonzero] = dots[nonzero] / (norms[nonzero] * query_norm)

    return float(scores.mean())
