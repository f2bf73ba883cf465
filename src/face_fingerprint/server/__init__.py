# src/face_fingerprint/server/__init__.py
"""Web server (REST API) logic."""
import logging
import uvicorn

logger = logging.getLogger(__name__)

APP_MODULE_STR = "face_fingerprint.server.main:app"

def start_server(host: str = "0.0.0.0", port: int = 8080, workers: int = 1, reload: bool = False):
    """
    Starts the FastAPI server using Uvicorn.
    """
    logger.info(f"Attempting to start API server on {host}:{port} with {workers} workers.")
    logger.info(f"Reloading enabled: {reload}")
    uvicorn.run(
        APP_MODULE_STR,
        host=host,
        port=port,
        workers=workers,
        reload=reload,
        log_level="info",
    )
    # uvicorn.run blocks until the server is stopped
    logger.info("Uvicorn server process has finished.")
