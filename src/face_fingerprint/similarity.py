# src/face_fingerprint/similarity.py
"""Cosine similarity between embeddings."""
import logging
import math

from .vector_math import VectorLike, as_vector

logger = logging.getLogger(__name__)

# Cosine similarity at or above this value counts as the same identity.
SIMILARITY_THRESHOLD = 0.75


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """
    Cosine similarity of two embeddings.

    Returns 0.0 instead of failing when the lengths differ or either vector
    has zero norm. The result is not clamped, so rounding can put it a few
    ulps outside [-1, 1] (``cosine_similarity(e, e)`` may exceed 1.0).
    """
    a = as_vector(a)
    b = as_vector(b)
    if a.shape[0] != b.shape[0]:
        logger.debug(f"Similarity of mismatched lengths {a.shape[0]} and {b.shape[0]} is 0.")
        return 0.0

    dot_product = 0.0
    norm1 = 0.0
    norm2 = 0.0
    for x, y in zip(a.tolist(), b.tolist()):
        dot_product += x * y
        norm1 += x * x
        norm2 += y * y

    denominator = math.sqrt(norm1) * math.sqrt(norm2)
    if denominator == 0:
        logger.debug("Similarity with a zero-norm embedding is 0.")
        return 0.0
    return dot_product / denominator


def are_same_person(a: VectorLike, b: VectorLike) -> bool:
    """True when two embeddings meet the matching threshold."""
    return cosine_similarity(a, b) >= SIMILARITY_THRESHOLD
