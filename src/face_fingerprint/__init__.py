# src/face_fingerprint/__init__.py
# Perceptual face fingerprints: grid-statistics embeddings, cosine matching
# and identity grouping. Logging is configured by the CLI, not here.

from .aggregation import average_embedding
from .embedding import EMBEDDING_SIZE, INPUT_SIZE, EmbeddingExtractor, GridEmbeddingExtractor, generate
from .image_source import ArrayImageSource, ImageSource
from .matching import MatchResult, find_best_match
from .similarity import SIMILARITY_THRESHOLD, are_same_person, cosine_similarity
from .vector_math import normalize

__version__ = "0.1.0"

__all__ = [
    "ArrayImageSource",
    "EMBEDDING_SIZE",
    "EmbeddingExtractor",
    "GridEmbeddingExtractor",
    "INPUT_SIZE",
    "ImageSource",
    "MatchResult",
    "SIMILARITY_THRESHOLD",
    "are_same_person",
    "average_embedding",
    "cosine_similarity",
    "find_best_match",
    "generate",
    "normalize",
]
