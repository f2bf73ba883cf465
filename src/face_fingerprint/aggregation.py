# src/face_fingerprint/aggregation.py
"""Cluster representatives: the renormalised mean of several embeddings."""
import logging
from typing import Sequence

import numpy as np

from .exceptions import ShapeMismatchError
from .vector_math import VectorLike, as_vector, freeze, normalize

logger = logging.getLogger(__name__)


def average_embedding(embeddings: Sequence[VectorLike]) -> np.ndarray:
    """
    Average a group of embeddings into a single centroid.

    * no embeddings -> an empty vector
    * one embedding -> that embedding unchanged, without renormalising
    * several -> elementwise mean, then L2-normalised

    Raises:
        ShapeMismatchError: if the embeddings do not all share one length.
    """
    if len(embeddings) == 0:
        return freeze(np.zeros(0, dtype=np.float64))
    if len(embeddings) == 1:
        return as_vector(embeddings[0])

    vectors = [as_vector(e) for e in embeddings]
    length = vectors[0].shape[0]
    for vec in vectors[1:]:
        if vec.shape[0] != length:
            logger.error(f"Cannot average embeddings of lengths {length} and {vec.shape[0]}.")
            raise ShapeMismatchError(length, vec.shape[0])

    average = np.zeros(length, dtype=np.float64)
    for vec in vectors:
        average += vec
    average /= len(vectors)
    logger.debug(f"Averaged {len(vectors)} embeddings of length {length}.")
    return normalize(average)
