# src/face_fingerprint/embedding.py
"""
Face embedding backends.

:class:`EmbeddingExtractor` is the interface the rest of the package relies
on: it turns an :class:`~face_fingerprint.image_source.ImageSource` into a
fixed-length vector, or ``None`` when no embedding can be produced.
Similarity, matching and averaging only see the returned vectors, so a
trained-model backend can replace the grid backend without touching them.

:class:`GridEmbeddingExtractor` is the perceptual backend. It resizes the
face crop to 112x112 grayscale, splits it into an 8x8 grid of 14x14 cells
and records, per cell in row-major order, the mean luminance mapped into
roughly [-1, 1] and the luminance standard deviation scaled by 1/127.5.
The resulting 128 values are L2-normalised.
"""
import logging
import math
from typing import List, Optional

import numpy as np

from .image_source import ImageSource
from .vector_math import normalize

logger = logging.getLogger(__name__)

INPUT_SIZE = 112
GRID_SIZE = 8
CELL_SIZE = INPUT_SIZE // GRID_SIZE
EMBEDDING_SIZE = GRID_SIZE * GRID_SIZE * 2


class EmbeddingExtractor:
    """Base class for all embedding backends."""

    name = "base"
    embedding_size = EMBEDDING_SIZE

    def extract(self, image: ImageSource) -> Optional[np.ndarray]:
        """Return the embedding for ``image`` or ``None`` on failure."""
        raise NotImplementedError


class GridEmbeddingExtractor(EmbeddingExtractor):
    """Grid mean/deviation statistics over a 112x112 grayscale crop."""

    name = "grid"

    def extract(self, image: ImageSource) -> Optional[np.ndarray]:
        try:
            return self._generate(image)
        except Exception as e:
            # One bad crop must not abort a batch; report "no embedding".
            logger.error(f"Embedding generation failed: {e}", exc_info=True)
            return None

    def _generate(self, image: ImageSource) -> np.ndarray:
        gray = image.resize(INPUT_SIZE, INPUT_SIZE).grayscale()
        raw: List[float] = []
        for gy in range(GRID_SIZE):
            for gx in range(GRID_SIZE):
                mean, std = _cell_statistics(gray, gx, gy)
                raw.append((mean / 127.5) - 1.0)
                raw.append(std / 127.5)
        logger.debug(f"Computed {len(raw)} raw grid features.")
        return normalize(raw)


def _cell_statistics(gray: ImageSource, gx: int, gy: int):
    """Mean and standard deviation of luminance for one grid cell."""
    total = 0.0
    total_sq = 0.0
    count = 0
    for y in range(gy * CELL_SIZE, (gy + 1) * CELL_SIZE):
        for x in range(gx * CELL_SIZE, (gx + 1) * CELL_SIZE):
            value = gray.luminance(x, y)
            total += value
            total_sq += value * value
            count += 1
    mean = total / count
    variance = (total_sq / count) - (mean * mean)
    # Accumulation error can leave a tiny negative variance on flat cells.
    return mean, math.sqrt(abs(variance))


_default_extractor = GridEmbeddingExtractor()


def generate(image: ImageSource) -> Optional[np.ndarray]:
    """Generate a normalised 128-value embedding with the grid backend."""
    return _default_extractor.extract(image)


BACKENDS = {
    GridEmbeddingExtractor.name: GridEmbeddingExtractor,
}


def get_extractor(backend: str = "grid") -> EmbeddingExtractor:
    """Factory returning an extractor instance for a backend name."""
    try:
        return BACKENDS[backend.lower()]()
    except KeyError:
        raise ValueError(f"Unknown embedding backend '{backend}'. Available: {sorted(BACKENDS)}")
