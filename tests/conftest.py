"""
Pytest fixtures for filterstag tests
"""

import numpy as np
import pytest

from filterstag import PixelBuffer


@pytest.fixture
def gray_buffer() -> PixelBuffer:
    """4x4 solid mid-gray, fully opaque."""
    return PixelBuffer.solid(4, 4, (128, 128, 128, 255))


@pytest.fixture
def noisy_array() -> np.ndarray:
    """Seeded random 16x12 RGBA array with varying alpha."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(12, 16, 4), dtype=np.uint8)


@pytest.fixture
def noisy_buffer(noisy_array) -> PixelBuffer:
    return PixelBuffer.from_array(noisy_array)


@pytest.fixture
def palette_buffer() -> PixelBuffer:
    """A row of saturated and mid-saturated colors."""
    colors = [
        (255, 0, 0, 255),
        (0, 200, 0, 255),
        (30, 60, 220, 255),
        (200, 120, 40, 128),
        (90, 180, 160, 255),
        (170, 60, 130, 10),
    ]
    array = np.array([colors], dtype=np.uint8)
    return PixelBuffer.from_array(array)
