# src/face_fingerprint/image_source.py
"""Image access capability used by the embedding generator."""
import logging
from typing import Protocol, runtime_checkable

import cv2
import numpy as np

from .exceptions import ImageLoadError

logger = logging.getLogger(__name__)


@runtime_checkable
class ImageSource(Protocol):
    """Anything that can be resized, grayscaled and read by pixel."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def resize(self, width: int, height: int) -> "ImageSource": ...

    def grayscale(self) -> "ImageSource": ...

    def luminance(self, x: int, y: int) -> float: ...


class ArrayImageSource:
    """
    ImageSource backed by an OpenCV/NumPy array.

    Accepts a 2-D grayscale array or a 3-D array with 1, 3 (BGR) or 4 (BGRA)
    channels, the layout returned by ``cv2.imread``.
    """

    def __init__(self, pixels: np.ndarray):
        arr = np.asarray(pixels)
        if arr.ndim not in (2, 3):
            raise ImageLoadError(f"Unsupported image array with {arr.ndim} dimensions.")
        if arr.ndim == 3 and arr.shape[2] not in (1, 3, 4):
            raise ImageLoadError(f"Unsupported channel count: {arr.shape[2]}.")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ImageLoadError("Image has zero width or height.")
        self._pixels = arr

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    def resize(self, width: int, height: int) -> "ArrayImageSource":
        if width <= 0 or height <= 0:
            raise ImageLoadError(f"Invalid resize target {width}x{height}.")
        if (self.width, self.height) == (width, height):
            return self
        try:
            resized = cv2.resize(self._pixels, (width, height), interpolation=cv2.INTER_LINEAR)
        except cv2.error as e:
            raise ImageLoadError(f"Resize to {width}x{height} failed: {e}") from e
        logger.debug(f"Resized image {self.width}x{self.height} -> {width}x{height}")
        return ArrayImageSource(resized)

    def grayscale(self) -> "ArrayImageSource":
        arr = self._pixels
        if arr.ndim == 2:
            return self
        if arr.shape[2] == 1:
            return ArrayImageSource(arr[:, :, 0])
        code = cv2.COLOR_BGRA2GRAY if arr.shape[2] == 4 else cv2.COLOR_BGR2GRAY
        try:
            gray = cv2.cvtColor(arr, code)
        except cv2.error as e:
            raise ImageLoadError(f"Grayscale conversion failed: {e}") from e
        return ArrayImageSource(gray)

    def luminance(self, x: int, y: int) -> float:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ImageLoadError(f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} image.")
        value = self._pixels[y, x]
        if np.ndim(value) > 0:
            # Color pixel read without grayscale conversion; use the first channel.
            value = value[0]
        return float(value)
