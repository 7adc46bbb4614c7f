"""Grayscale conversion with contrast and brightness.

Luma uses the ITU-R BT.601 luminosity coefficients:

    L = 0.299*R + 0.587*G + 0.114*B

Contrast and brightness are applied to the luma before it is written
back to all three color channels:

| Parameter | Range | Mapping |
|-----------|-------|---------|
| contrast | -100..100 | factor (contrast + 100) / 100, i.e. 0.5..2.5 around 128 |
| brightness | -100..100 | offset (brightness / 100) * 255 |

Usage:
    from filterstag.filters.grayscale import grayscale_contrast_brightness

    result = grayscale_contrast_brightness(rgba, contrast=20, brightness=-10)
"""
import numpy as np

from .convert import store_u8

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def luma(image: np.ndarray) -> np.ndarray:
    """BT.601 luma of an RGBA uint8 array as float64 (H, W)."""
    r = image[:, :, 0].astype(np.float64)
    g = image[:, :, 1].astype(np.float64)
    b = image[:, :, 2].astype(np.float64)
    wr, wg, wb = LUMA_WEIGHTS
    return wr * r + wg * g + wb * b


def grayscale_contrast_brightness(
    image: np.ndarray,
    contrast: float = 0.0,
    brightness: float = 0.0,
) -> np.ndarray:
    """Convert RGBA image to grayscale and adjust contrast and brightness.

    Args:
        image: RGBA uint8 array (H, W, 4)
        contrast: -100 to 100, 0 = no change
        brightness: -100 to 100, 0 = no change

    Returns:
        RGBA uint8 array (H, W, 4) with R=G=B and alpha unchanged
    """
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected RGBA image (H, W, 4), got shape {image.shape}")

    contrast_factor = (contrast + 100.0) / 100.0
    brightness_offset = (brightness / 100.0) * 255.0

    gray = luma(image)
    gray = (gray - 128.0) * contrast_factor + 128.0
    gray = store_u8(gray + brightness_offset)

    result = np.empty_like(image)
    result[:, :, 0] = gray
    result[:, :, 1] = gray
    result[:, :, 2] = gray
    result[:, :, 3] = image[:, :, 3]
    return result
