"""3x3 convolution sharpening.

Kernel for a given ``amount``:

     0  -a   0
    -a  1+4a -a
     0  -a   0

The kernel weights sum to 1, so flat regions are unchanged.

## Boundary handling

The one-pixel border is copied verbatim from the input; only pixels with
a full 3x3 neighbourhood are convolved. Alpha is never convolved.

Usage:
    from filterstag.filters.sharpen_filters import sharpen, sharpen_kernel

    result = sharpen(rgba, amount=1.0)
"""
import numpy as np

from .convert import store_u8


def sharpen_kernel(amount: float = 1.0) -> np.ndarray:
    """Return the 3x3 sharpen kernel for ``amount``."""
    edge = -amount
    center = 1.0 + 4.0 * amount
    return np.array([
        [0.0, edge, 0.0],
        [edge, center, edge],
        [0.0, edge, 0.0],
    ])


def sharpen(image: np.ndarray, amount: float = 1.0) -> np.ndarray:
    """Sharpen image using convolution (u8).

    Args:
        image: RGBA uint8 array (H, W, 4)
        amount: Sharpening strength, 0.0 = no change

    Returns:
        Sharpened RGBA uint8 array, border and alpha copied from the input
    """
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected RGBA image (H, W, 4), got shape {image.shape}")

    h, w = image.shape[:2]
    result = image.copy()
    if h < 3 or w < 3:
        return result

    kernel = sharpen_kernel(amount)
    rgb = image[:, :, :3].astype(np.float64)
    acc = np.zeros((h - 2, w - 2, 3), dtype=np.float64)
    for ky in range(3):
        for kx in range(3):
            weight = kernel[ky, kx]
            if weight == 0.0:
                continue
            acc += rgb[ky:ky + h - 2, kx:kx + w - 2] * weight

    result[1:-1, 1:-1, :3] = store_u8(acc)
    return result
