"""
filterstag - A layered, deterministic RGBA filter engine for Python
"""

from .exceptions import FilterStagError, InvalidDimensions, OutOfBounds, LayerNotFound
from .pixel_buffer import PixelBuffer
from .filters import (
    Filter,
    FilterVariant,
    GrayscaleContrastBrightness,
    GaussianBlur,
    HueRotate,
    Saturation,
    Sharpen,
    MedianNoiseReduction,
    apply_filter,
    default_palette,
)
from .layers import FilterLayer, LayerStack, MoveDirection
from .codec import decode, encode
from .session import ImageSession, RenderResult

__all__ = [
    # Errors
    "FilterStagError",
    "InvalidDimensions",
    "OutOfBounds",
    "LayerNotFound",
    # Data model
    "PixelBuffer",
    # Filters
    "Filter",
    "FilterVariant",
    "GrayscaleContrastBrightness",
    "GaussianBlur",
    "HueRotate",
    "Saturation",
    "Sharpen",
    "MedianNoiseReduction",
    "apply_filter",
    "default_palette",
    # Layers
    "FilterLayer",
    "LayerStack",
    "MoveDirection",
    # Codec
    "decode",
    "encode",
    # Session
    "ImageSession",
    "RenderResult",
]

__version__ = "0.1.0"
