# src/face_fingerprint/server/main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from .routes import compare, vectors
from .. import core as core_func
from ..exceptions import ModelError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup: Initializing FaceProcessor...")
    try:
        # Reuses the instance the CLI configured, or creates the default one
        processor = core_func.get_processor()
        _ = processor.extractor
        app.state.face_processor = processor
        logger.info(f"Face processor with backend '{processor.backend}' is initialized and ready.")
    except ModelError as e:
        logger.critical(f"CRITICAL - Model Initialization Error during startup (lifespan): {e}", exc_info=True)
        app.state.face_processor = None

    yield

    logger.info("Application shutdown: Cleaning up resources...")
    app.state.face_processor = None


app = FastAPI(
    title="Face Fingerprint API",
    description="API for embedding, comparing, matching and averaging face fingerprints.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(compare.router)
app.include_router(vectors.router)


@app.get("/", tags=["Root"])
async def read_root():
    """Basic service info."""
    return {
        "service": "face-fingerprint",
        "input_size": core_func.INPUT_SIZE,
        "embedding_size": core_func.EMBEDDING_SIZE,
        "similarity_threshold": core_func.SIMILARITY_THRESHOLD,
    }
