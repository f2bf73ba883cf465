import math

import numpy as np
import pytest

from face_fingerprint.embedding import (
    EMBEDDING_SIZE,
    INPUT_SIZE,
    GridEmbeddingExtractor,
    generate,
    get_extractor,
)
from face_fingerprint.exceptions import ImageLoadError
from face_fingerprint.image_source import ArrayImageSource
from face_fingerprint.vector_math import l2_norm


class _BrokenSource:
    """ImageSource whose pixel reads fail."""

    width = INPUT_SIZE
    height = INPUT_SIZE

    def resize(self, width, height):
        return self

    def grayscale(self):
        return self

    def luminance(self, x, y):
        raise ImageLoadError("sensor offline")


class _ResizeFails(_BrokenSource):
    def resize(self, width, height):
        raise RuntimeError("codec error")


def test_constants():
    assert INPUT_SIZE == 112
    assert EMBEDDING_SIZE == 128


def test_generate_returns_128_unit_values(noise_image):
    embedding = generate(noise_image)
    assert embedding is not None
    assert embedding.shape == (128,)
    assert math.isclose(l2_norm(embedding), 1.0, rel_tol=1e-12)


def test_uniform_gray_image_features(gray_image):
    embedding = generate(gray_image)
    mean_feature = (127 / 127.5) - 1.0
    assert mean_feature == pytest.approx(-0.00392, abs=1e-5)
    # 64 equal mean features and zero deviations normalise to -1/8 and 0
    assert embedding[0::2].tolist() == pytest.approx([-0.125] * 64, abs=1e-12)
    assert embedding[1::2].tolist() == [0.0] * 64


def test_uniform_gray_matches_reference_computation(gray_image):
    mean_feature = (127 / 127.5) - 1.0
    raw = [mean_feature, 0.0] * 64
    norm = 0.0
    for value in raw:
        norm += value * value
    norm = math.sqrt(norm)
    expected = [value / norm for value in raw]
    assert generate(gray_image).tolist() == expected


def test_generation_is_deterministic(noise_image):
    first = generate(noise_image)
    second = generate(noise_image)
    assert first.tobytes() == second.tobytes()


def test_cells_are_row_major(gradient_image):
    # Horizontal ramp: mean feature rises left to right within each cell row
    embedding = generate(gradient_image)
    row0 = embedding[0:16:2]
    assert all(a < b for a, b in zip(row0, row0[1:]))
    row1 = embedding[16:32:2]
    np.testing.assert_allclose(row0, row1)


def test_color_and_resized_input(gray_image):
    bgr = ArrayImageSource(np.full((224, 200, 3), 127, dtype=np.uint8))
    np.testing.assert_allclose(generate(bgr), generate(gray_image), atol=1e-12)


def test_flat_mid_gray_passes_through_unnormalised():
    image = ArrayImageSource(np.full((112, 112), 127.5, dtype=np.float64))
    embedding = generate(image)
    assert embedding is not None
    assert embedding.tolist() == [0.0] * 128


def test_pixel_read_failure_is_none_not_zeros():
    assert generate(_BrokenSource()) is None


def test_resize_failure_is_none():
    assert GridEmbeddingExtractor().extract(_ResizeFails()) is None


def test_zero_sized_image_rejected():
    with pytest.raises(ImageLoadError):
        ArrayImageSource(np.zeros((0, 0), dtype=np.uint8))


def test_get_extractor():
    assert isinstance(get_extractor("grid"), GridEmbeddingExtractor)
    assert isinstance(get_extractor("GRID"), GridEmbeddingExtractor)
    with pytest.raises(ValueError):
        get_extractor("arcface")


def test_flat_float_crop_with_rounding_variance():
    # 0.1 is not exact in binary, so sumSq/n - mean^2 comes out slightly negative
    image = ArrayImageSource(np.full((112, 112), 0.1, dtype=np.float64))
    embedding = generate(image)
    assert embedding is not None
    assert embedding.shape == (128,)
    assert all(abs(v) < 1e-9 for v in embedding[1::2].tolist())
    assert embedding[0::2].tolist() == pytest.approx([-0.125] * 64, abs=1e-12)
