# src/face_fingerprint/core.py
"""Face processing service built on the embedding backends."""
import logging
import threading
import time
from pathlib import Path
from typing import Optional, Any, Dict, Sequence, Tuple

import numpy as np

from .embedding import EMBEDDING_SIZE, INPUT_SIZE, EmbeddingExtractor, get_extractor
from .exceptions import (
    FaceFingerprintError,
    ImageLoadError,
    ModelError,
    EmbeddingError,
)
from .image_source import ImageSource
from .matching import find_best_match
from .similarity import SIMILARITY_THRESHOLD, cosine_similarity
from .utils import load_image
from .vector_math import VectorLike

logger = logging.getLogger(__name__)


class FaceProcessor:
    """Embedding and comparison service around a pluggable backend."""

    def __init__(self, backend: str = "grid", config: Optional[dict] = None):
        self.backend = backend
        self.config = config or {}
        self._extractor: Optional[EmbeddingExtractor] = None
        self._initialized = False
        self._init_lock = threading.Lock()
        logger.info(f"FaceProcessor created for backend '{backend}' (lazy init).")

    def _initialize(self):
        """Create the backend exactly once, even with concurrent first use."""
        with self._init_lock:
            if self._initialized:
                return
            logger.info(f"Initializing embedding backend '{self.backend}'...")
            try:
                self._extractor = get_extractor(self.backend)
            except ValueError as e:
                logger.error(f"Embedding backend initialization failed: {e}")
                raise ModelError(str(e)) from e
            self._initialized = True
            logger.info(f"Embedding backend '{self.backend}' initialized.")

    @property
    def is_available(self) -> bool:
        return self._initialized

    @property
    def extractor(self) -> EmbeddingExtractor:
        """Get the initialized embedding backend."""
        if not self._initialized:
            self._initialize()
        return self._extractor

    def dispose(self):
        with self._init_lock:
            self._extractor = None
            self._initialized = False
        logger.info(f"FaceProcessor for backend '{self.backend}' disposed.")

    def get_embedding(self, image: ImageSource) -> Optional[np.ndarray]:
        """Embedding for an already loaded face crop, or None."""
        return self.extractor.extract(image)

    def get_embedding_from_path(self, image_path: Path) -> np.ndarray:
        """Loads a face crop and returns its embedding."""
        image = load_image(image_path) # Can raise FileNotFoundError, ImageLoadError
        embedding = self.get_embedding(image)
        if embedding is None:
            logger.error(f"Failed to generate embedding for {image_path}")
            raise EmbeddingError(f"Failed to generate embedding for {image_path}")
        logger.debug(f"Extracted embedding for {image_path}")
        return embedding

    def compare(self, image1_path: Path, image2_path: Path) -> Dict[str, Any]:
        """Compare two face crops and return detailed results"""
        logger.info(f"Starting comparison between '{image1_path}' and '{image2_path}'")
        start_time = time.time()
        try:
            embedding1 = self.get_embedding_from_path(image1_path)
            embedding2 = self.get_embedding_from_path(image2_path)
        except (FileNotFoundError, ImageLoadError, EmbeddingError, ModelError) as e:
            logger.error(f"Comparison failed during processing: {e}")
            raise
        except Exception as e:
            logger.error(f"Unexpected error during FaceProcessor.compare: {e}", exc_info=True)
            raise FaceFingerprintError(9999, f"Unexpected comparison error: {e}") from e

        similarity = cosine_similarity(embedding1, embedding2)
        logger.info(f"Similarity calculated: {similarity:.4f}")
        return {
            "similarity": similarity,
            "is_match": similarity >= SIMILARITY_THRESHOLD,
            "processing_time_sec": round(time.time() - start_time, 4),
            "image1": str(image1_path.resolve()),
            "image2": str(image2_path.resolve()),
            "backend": self.backend,
        }


# --- Module-level Instance ---
_face_processor_instance: Optional[FaceProcessor] = None
_instance_lock = threading.Lock()


def initialize_global_processor(backend: str = "grid", config: Optional[dict] = None,
                                force_reinitialize: bool = False) -> FaceProcessor:
    """Create (once) and initialize the shared FaceProcessor."""
    global _face_processor_instance
    with _instance_lock:
        if _face_processor_instance is not None and not force_reinitialize:
            return _face_processor_instance
        processor = FaceProcessor(backend=backend, config=config)
        processor.extractor  # fail fast on a bad backend name
        _face_processor_instance = processor
        return processor


def get_processor() -> FaceProcessor:
    """The shared FaceProcessor, initialized with defaults on first use."""
    if _face_processor_instance is None:
        return initialize_global_processor()
    return _face_processor_instance


# --- Core API Functions ---

def compare_faces(img_path1: str, img_path2: str,
                  processor: Optional[FaceProcessor] = None) -> Optional[float]:
    """
    Compares two face crops.

    Returns:
        The cosine similarity score if successful, otherwise None.
    """
    processor = processor or get_processor()
    logger.info(f"Executing compare_faces for '{img_path1}' and '{img_path2}'")
    try:
        result = processor.compare(Path(img_path1), Path(img_path2))
    except FileNotFoundError as e:
        logger.error(f"Comparison failed: Image file not found - {e}")
        return None
    except FaceFingerprintError as e:
        logger.error(f"Comparison failed: {e.message} (Code: {e.code})")
        return None
    logger.debug(f"Comparison details: {result}")
    return result["similarity"]


def extract_features(image_path: str, processor: Optional[FaceProcessor] = None) -> list:
    """
    Extracts the embedding of a face crop as a list of floats.

    Raises:
        FileNotFoundError, ImageLoadError, EmbeddingError, ModelError
    """
    processor = processor or get_processor()
    logger.info(f"Executing extract_features for '{image_path}'")
    embedding = processor.get_embedding_from_path(Path(image_path))
    logger.info(f"Successfully extracted {embedding.shape[0]} features for '{image_path}'.")
    return embedding.tolist()


def search_similar_face(target: VectorLike,
                        gallery: Sequence[Tuple[str, VectorLike]]) -> Optional[Tuple[str, float]]:
    """
    Searches a gallery of (id, embedding) pairs for the best match.

    Returns:
        (matched_id, similarity) for the best match at or above the
        threshold, or None.
    """
    if not gallery:
        logger.warning("Face search skipped: gallery is empty.")
        return None
    logger.info(f"Searching for similar face among {len(gallery)} entries.")
    start_time = time.time()
    match = find_best_match(target, [embedding for _, embedding in gallery])
    logger.info(f"Gallery search completed in {time.time() - start_time:.4f}s.")
    if match is None:
        logger.info("No similar face found above the threshold.")
        return None
    matched_id = gallery[match.index][0]
    logger.info(f"Best match found: ID={matched_id}, Similarity={match.score:.4f}")
    return matched_id, match.score
