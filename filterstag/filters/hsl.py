"""Shared RGB <-> HSL math for the hue and saturation filters.

All functions are vectorized over numpy arrays. Channels are normalized
floats in [0, 1]; hue is a fraction of a full turn in [0, 1).

RGB -> HSL:
    L = (max + min) / 2
    S = d / (2 - max - min) if L > 0.5 else d / (max + min)
    H from the channel holding the max (R first, then G, then B)

HSL -> RGB:
    q = L * (1 + S) if L < 0.5 else L + S - L * S
    p = 2 * L - q
    R, G, B = hue2rgb(p, q, H + 1/3), hue2rgb(p, q, H), hue2rgb(p, q, H - 1/3)

Usage:
    from filterstag.filters.hsl import rotate_hue, scale_saturation

    result = rotate_hue(rgba, degrees=90)
    result = scale_saturation(rgba, factor=1.5)
"""
import numpy as np

from .convert import round_u8


def rgb_to_hsl(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Convert normalized RGB channels to (H, S, L)."""
    maxc = np.maximum(np.maximum(r, g), b)
    minc = np.minimum(np.minimum(r, g), b)
    lightness = (maxc + minc) / 2.0
    delta = maxc - minc

    chromatic = delta != 0
    safe_delta = np.where(chromatic, delta, 1.0)

    denom = np.where(lightness > 0.5, 2.0 - maxc - minc, maxc + minc)
    safe_denom = np.where(chromatic, denom, 1.0)
    saturation = np.where(chromatic, delta / safe_denom, 0.0)

    hue_r = ((g - b) / safe_delta + np.where(g < b, 6.0, 0.0)) / 6.0
    hue_g = ((b - r) / safe_delta + 2.0) / 6.0
    hue_b = ((r - g) / safe_delta + 4.0) / 6.0
    hue = np.select([maxc == r, maxc == g], [hue_r, hue_g], default=hue_b)
    hue = np.where(chromatic, hue, 0.0)

    return hue, saturation, lightness


def hue2rgb(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Piecewise helper sampling one channel of the HSL double cone."""
    t = np.where(t < 0.0, t + 1.0, t)
    t = np.where(t > 1.0, t - 1.0, t)
    return np.select(
        [t < 1.0 / 6.0, t < 0.5, t < 2.0 / 3.0],
        [p + (q - p) * 6.0 * t, q, p + (q - p) * (2.0 / 3.0 - t) * 6.0],
        default=p,
    )


def hsl_to_rgb(h: np.ndarray, s: np.ndarray, l: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Convert (H, S, L) back to normalized RGB channels."""
    q = np.where(l < 0.5, l * (1.0 + s), l + s - l * s)
    p = 2.0 * l - q

    achromatic = s == 0
    r = np.where(achromatic, l, hue2rgb(p, q, h + 1.0 / 3.0))
    g = np.where(achromatic, l, hue2rgb(p, q, h))
    b = np.where(achromatic, l, hue2rgb(p, q, h - 1.0 / 3.0))
    return r, g, b


def _split(image: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected RGBA image (H, W, 4), got shape {image.shape}")
    rgb = image[:, :, :3].astype(np.float64) / 255.0
    return rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2]


def _merge(image: np.ndarray, r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    result = np.empty_like(image)
    result[:, :, 0] = round_u8(r * 255.0)
    result[:, :, 1] = round_u8(g * 255.0)
    result[:, :, 2] = round_u8(b * 255.0)
    result[:, :, 3] = image[:, :, 3]
    return result


def transform_hsl(image: np.ndarray, hue_shift: float = 0.0, saturation_factor: float = 1.0) -> np.ndarray:
    """Round-trip an RGBA image through HSL, shifting hue and scaling saturation.

    Args:
        image: RGBA uint8 array (H, W, 4)
        hue_shift: Hue offset as a fraction of a turn, wrapped into [0, 1)
        saturation_factor: Multiplier for S, result clamped into [0, 1]

    Returns:
        RGBA uint8 array with alpha unchanged
    """
    r, g, b = _split(image)
    h, s, l = rgb_to_hsl(r, g, b)
    if hue_shift:
        h = np.mod(h + hue_shift, 1.0)
    if saturation_factor != 1.0:
        s = np.clip(s * saturation_factor, 0.0, 1.0)
    return _merge(image, *hsl_to_rgb(h, s, l))


def rotate_hue(image: np.ndarray, degrees: float = 0.0) -> np.ndarray:
    """Rotate the hue of every pixel by ``degrees`` around the color wheel."""
    return transform_hsl(image, hue_shift=(degrees / 360.0) % 1.0)


def scale_saturation(image: np.ndarray, factor: float = 1.0) -> np.ndarray:
    """Multiply HSL saturation by ``factor`` (0 = grayscale, 1 = unchanged)."""
    return transform_hsl(image, saturation_factor=max(0.0, factor))
