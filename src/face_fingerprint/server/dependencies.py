# src/face_fingerprint/server/dependencies.py
import logging
from fastapi import Request, HTTPException
from ..core import FaceProcessor

logger = logging.getLogger(__name__)

async def get_initialized_processor(request: Request) -> FaceProcessor:
    """Dependency for HTTP routes to get the processor instance."""
    processor = getattr(request.app.state, "face_processor", None)
    if processor is None:
        logger.error("Face processor not available in app state (initialization likely failed during startup).")
        raise HTTPException(status_code=503, detail="Face processing service is unavailable (initialization failed).")
    return processor
