"""Shared fixtures for image processor tests."""

import numpy as np
import pytest

from imgproc import PixelBuffer


def gray(value: int, alpha: int = 255) -> tuple:
    return (value, value, value, alpha)


@pytest.fixture
def scenario_buffer() -> PixelBuffer:
    """2x2 gray buffer whose average is (87, 87, 87)."""
    return PixelBuffer.from_pixels(2, 2, [gray(100), gray(200), gray(0), gray(50)])


@pytest.fixture
def mixed_buffer() -> PixelBuffer:
    """2x2 buffer with distinct channels and alphas; average red is 87."""
    return PixelBuffer.from_pixels(
        2,
        2,
        [
            (100, 100, 100, 255),
            (200, 50, 50, 128),
            (0, 0, 0, 255),
            (50, 200, 10, 0),
        ],
    )


@pytest.fixture
def random_buffer() -> PixelBuffer:
    """Reproducible noisy 37x23 buffer with random alpha."""
    rng = np.random.default_rng(1234)
    data = rng.integers(0, 256, size=(23, 37, 4), dtype=np.uint8)
    return PixelBuffer(37, 23, data)


@pytest.fixture
def empty_buffer() -> PixelBuffer:
    return PixelBuffer(0, 0)
