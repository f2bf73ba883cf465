# src/face_fingerprint/utils.py
"""Utility functions."""
import json
import logging
from typing import List
from pathlib import Path
import cv2
import numpy as np

from .exceptions import InvalidInputError, ImageLoadError
from .image_source import ArrayImageSource

logger = logging.getLogger(__name__)

def load_image(image_path: Path) -> ArrayImageSource:
    """
    Loads an image from the specified path using OpenCV.

    Args:
        image_path: Path object pointing to the image file.

    Returns:
        An ArrayImageSource wrapping the BGR pixels.

    Raises:
        FileNotFoundError: If the image file does not exist.
        ImageLoadError: If the image file cannot be decoded by OpenCV.
    """
    absolute_path_str = str(image_path.resolve())
    logger.debug(f"Attempting to load image: {absolute_path_str}")

    if not image_path.is_file():
        logger.error(f"Image file not found at: {absolute_path_str}")
        raise FileNotFoundError(f"No such file or directory: '{absolute_path_str}'")

    img = cv2.imread(absolute_path_str)
    if img is None:
        # Corrupt file or unsupported format
        logger.error(f"Failed to load image using OpenCV (cv2.imread returned None): {absolute_path_str}")
        raise ImageLoadError(f"Could not load image file: {absolute_path_str}")

    logger.debug(f"Successfully loaded image {absolute_path_str} with shape {img.shape}")
    return ArrayImageSource(img)


def decode_image(data: bytes) -> ArrayImageSource:
    """Decodes an encoded image (PNG, JPEG, ...) held in memory."""
    if not data:
        raise ImageLoadError("Empty image data.")
    buf = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buf, cv2.IMREAD_COLOR)
    if img is None:
        logger.error(f"cv2.imdecode could not decode {len(data)} bytes.")
        raise ImageLoadError("Could not decode image data.")
    return ArrayImageSource(img)


def parse_embedding(text: str) -> List[float]:
    """Parses a JSON array of numbers into a list of floats."""
    try:
        values = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON format for embedding: {text[:80]}")
        raise InvalidInputError(f"Invalid JSON embedding: {e}") from e
    if not isinstance(values, list) or not all(
        isinstance(v, (int, float)) and not isinstance(v, bool) for v in values
    ):
        raise InvalidInputError("Embedding must be a JSON array of numbers.")
    return [float(v) for v in values]
