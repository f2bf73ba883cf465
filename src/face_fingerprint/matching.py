# src/face_fingerprint/matching.py
"""Best-match search over a small candidate set."""
import logging
from typing import NamedTuple, Optional, Sequence

from .similarity import SIMILARITY_THRESHOLD, cosine_similarity
from .vector_math import VectorLike

logger = logging.getLogger(__name__)


class MatchResult(NamedTuple):
    """Position of the best candidate and its unclamped cosine similarity."""
    index: int
    score: float


def find_best_match(target: VectorLike, candidates: Sequence[VectorLike]) -> Optional[MatchResult]:
    """
    Return the most similar candidate if it meets :data:`SIMILARITY_THRESHOLD`.

    Candidates are scanned in order and the best is replaced only on a strict
    improvement, so the lowest index wins a tie. Returns ``None`` when there
    are no candidates or none is similar enough.
    """
    best_index = -1
    best_score = float("-inf")

    for i, candidate in enumerate(candidates):
        score = cosine_similarity(target, candidate)
        logger.debug(f"Candidate {i}: similarity={score:.4f}")
        if score > best_score:
            best_score = score
            best_index = i

    if best_index >= 0 and best_score >= SIMILARITY_THRESHOLD:
        logger.debug(f"Best match: index={best_index}, similarity={best_score:.4f}")
        return MatchResult(best_index, best_score)

    logger.debug(f"No match above threshold among {len(candidates)} candidates.")
    return None
