# src/face_fingerprint/server/routes/vectors.py
import logging

from fastapi import APIRouter, HTTPException

from ..models import AverageRequest, AverageResponse, MatchRequest, MatchResponse
from ...aggregation import average_embedding
from ...exceptions import ShapeMismatchError
from ...matching import find_best_match

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["Vectors"])


@router.post("/match", response_model=MatchResponse)
async def api_match(body: MatchRequest):
    """Best candidate for the target embedding, or nulls when nothing matches."""
    logger.info(f"Received match request with {len(body.candidates)} candidates.")
    result = find_best_match(body.target, body.candidates)
    if result is None:
        return MatchResponse()
    return MatchResponse(index=result.index, similarity=result.score)


@router.post("/average", response_model=AverageResponse)
async def api_average(body: AverageRequest):
    """Centroid of a group of embeddings."""
    logger.info(f"Received average request with {len(body.embeddings)} embeddings.")
    try:
        centroid = average_embedding(body.embeddings)
    except ShapeMismatchError as e:
        logger.warning(f"Average rejected: {e.message} (Code: {e.code})")
        raise HTTPException(status_code=422, detail=e.message)
    return AverageResponse(embedding=centroid.tolist())
