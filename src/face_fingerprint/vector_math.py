# src/face_fingerprint/vector_math.py
"""Vector helpers shared by the embedding, scoring and averaging code."""
import math
from typing import Sequence, Union

import numpy as np

from .exceptions import ShapeMismatchError

VectorLike = Union[np.ndarray, Sequence[float]]


def as_vector(values: VectorLike) -> np.ndarray:
    """
    Return ``values`` as a 1-D float64 array (no copy if already one).

    Raises:
        ShapeMismatchError: if ``values`` is not one-dimensional.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ShapeMismatchError(1, arr.ndim, f"Embedding must be one-dimensional, got shape {arr.shape}.")
    return arr


def freeze(vector: np.ndarray) -> np.ndarray:
    """Mark an embedding read-only so callers cannot mutate it in place."""
    vector.setflags(write=False)
    return vector


def dot(a: VectorLike, b: VectorLike) -> float:
    """Sequential dot product of two equal-length vectors."""
    a = as_vector(a)
    b = as_vector(b)
    total = 0.0
    for x, y in zip(a.tolist(), b.tolist()):
        total += x * y
    return total


def l2_norm(v: VectorLike) -> float:
    """Euclidean length, accumulated in index order."""
    return math.sqrt(dot(v, v))


def normalize(v: VectorLike) -> np.ndarray:
    """
    Scale ``v`` to unit length.

    A vector whose norm is exactly zero is returned unchanged rather than
    divided by zero. The result is a new read-only array.
    """
    vec = as_vector(v)
    norm = l2_norm(vec)
    if norm == 0:
        return freeze(vec.copy())
    return freeze(vec / norm)
