from pathlib import Path

import cv2
import numpy as np
import pytest

from face_fingerprint.image_source import ArrayImageSource


def _noise(seed: int, shape=(112, 112)) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=shape, dtype=np.uint8)


def _gradient() -> np.ndarray:
    row = np.linspace(0, 255, 112).astype(np.uint8)
    return np.tile(row, (112, 1))


@pytest.fixture
def gray_image():
    return ArrayImageSource(np.full((112, 112), 127, dtype=np.uint8))


@pytest.fixture
def noise_image():
    return ArrayImageSource(_noise(0))


@pytest.fixture
def gradient_image():
    return ArrayImageSource(_gradient())


@pytest.fixture
def write_png(tmp_path):
    """Writes a pixel array to a PNG under tmp_path and returns its path."""

    def _write(name: str, pixels: np.ndarray) -> Path:
        path = tmp_path / name
        assert cv2.imwrite(str(path), pixels)
        return path

    return _write


@pytest.fixture
def face_files(write_png):
    """Two copies of one crop and one unrelated crop."""
    gradient = _gradient()
    return {
        "a": write_png("a.png", gradient),
        "a_copy": write_png("a_copy.png", gradient.copy()),
        "other": write_png("other.png", 255 - gradient),
    }
