# src/face_fingerprint/server/routes/compare.py
import logging
import time

from fastapi import APIRouter, File, UploadFile, HTTPException, Depends

from ..models import CompareResponse, EmbedResponse
from ..dependencies import get_initialized_processor
from ...core import FaceProcessor
from ...exceptions import ImageLoadError
from ...similarity import SIMILARITY_THRESHOLD, cosine_similarity
from ...utils import decode_image

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["Compare"])


async def _embed_upload(upload: UploadFile, processor: FaceProcessor):
    """Decode an uploaded face crop and return its embedding."""
    try:
        await upload.seek(0)
        data = await upload.read()
    finally:
        await upload.close()

    try:
        image = decode_image(data)
    except ImageLoadError as e:
        logger.warning(f"Image loading failed for '{upload.filename}': {e.message} (Code: {e.code})")
        raise HTTPException(status_code=422, detail=f"Failed to load image '{upload.filename}'. ({e.code})")

    embedding = processor.get_embedding(image)
    if embedding is None:
        logger.error(f"No embedding produced for '{upload.filename}'")
        raise HTTPException(status_code=422, detail=f"Could not generate an embedding for '{upload.filename}'.")
    return embedding


@router.post("/embed", response_model=EmbedResponse)
async def api_embed_face(
    image: UploadFile = File(..., description="Cropped face image."),
    processor: FaceProcessor = Depends(get_initialized_processor),
):
    """Returns the embedding of an uploaded face crop."""
    start_time = time.time()
    logger.info(f"Received embed request. Image: {image.filename}")
    embedding = await _embed_upload(image, processor)
    elapsed_ms = int((time.time() - start_time) * 1000)
    return EmbedResponse(embedding=embedding.tolist(), size=int(embedding.shape[0]), elapsed_ms=elapsed_ms)


@router.post("/compare", response_model=CompareResponse)
async def api_compare_faces(
    image1: UploadFile = File(..., description="First face crop."),
    image2: UploadFile = File(..., description="Second face crop."),
    processor: FaceProcessor = Depends(get_initialized_processor),
):
    """Compares two uploaded face crops."""
    start_time = time.time()
    logger.info(f"Received compare request. Image1: {image1.filename}, Image2: {image2.filename}")
    embedding1 = await _embed_upload(image1, processor)
    embedding2 = await _embed_upload(image2, processor)
    similarity = cosine_similarity(embedding1, embedding2)
    elapsed_ms = int((time.time() - start_time) * 1000)
    logger.info(f"Comparison result: similarity={similarity:.4f} ({elapsed_ms} ms)")
    return CompareResponse(
        similarity=similarity,
        is_match=similarity >= SIMILARITY_THRESHOLD,
        threshold=SIMILARITY_THRESHOLD,
        elapsed_ms=elapsed_ms,
    )
