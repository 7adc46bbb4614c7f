"""Median noise reduction.

Each color channel is replaced by the median of a square window centred
on the pixel. The window side is ``2 * radius + 1``, so it is always odd
and the median is the middle element of the sorted window values.

## Boundary handling

Pixels closer than ``radius`` to the image edge have no full window and
are copied verbatim. Alpha is always copied from the source pixel.

Usage:
    from filterstag.filters.noise_filters import median

    result = median(rgba, radius=1)  # 3x3 window
"""
import numpy as np
from scipy.ndimage import median_filter


def median(image: np.ndarray, radius: int = 1) -> np.ndarray:
    """Apply median filter for noise reduction (u8).

    Args:
        image: RGBA uint8 array (H, W, 4)
        radius: Window half size (1 = 3x3 window, 2 = 5x5, etc.)

    Returns:
        Filtered RGBA uint8 array, border and alpha copied from the input
    """
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected RGBA image (H, W, 4), got shape {image.shape}")
    if radius < 1:
        raise ValueError(f"radius must be >= 1, got {radius}")

    h, w = image.shape[:2]
    result = image.copy()
    size = 2 * radius + 1
    if h < size or w < size:
        return result

    interior = (slice(radius, h - radius), slice(radius, w - radius))
    for ch in range(3):
        # Interior windows never touch the padding, so the mode is irrelevant
        filtered = median_filter(image[:, :, ch], size=size, mode='nearest')
        result[interior + (ch,)] = filtered[interior]
    return result
