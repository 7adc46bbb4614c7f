# filterstag Filters Module
"""
Dataclass-based filter variants for the layer stack.

All filters hold only scalar, range-clamped parameters, are JSON
serializable and map one RGBA PixelBuffer to a new one of the same size.
"""

from .base import (
    Filter,
    FILTER_REGISTRY,
    FILTER_ALIASES,
    register_filter,
    register_alias,
    lookup_filter,
    apply_filter,
    param,
    ParamSpec,
    # Documentation classes
    FilterInfo,
    ParameterInfo,
    get_all_filters_info,
)

from .color import (
    GrayscaleContrastBrightness,
    HueRotate,
    Saturation,
)

from .spatial import (
    GaussianBlur,
    Sharpen,
    MedianNoiseReduction,
)

# Every concrete variant the engine knows about
FilterVariant = (
    GrayscaleContrastBrightness
    | GaussianBlur
    | HueRotate
    | Saturation
    | Sharpen
    | MedianNoiseReduction
)


def default_palette() -> list[Filter]:
    """One fresh template of each filter, in menu order."""
    return [
        GaussianBlur(),
        GrayscaleContrastBrightness(),
        HueRotate(),
        Sharpen(),
        Saturation(),
        MedianNoiseReduction(),
    ]


__all__ = [
    # Base
    'Filter',
    'FilterVariant',
    'FILTER_REGISTRY',
    'FILTER_ALIASES',
    'register_filter',
    'register_alias',
    'lookup_filter',
    'apply_filter',
    'param',
    'ParamSpec',
    'FilterInfo',
    'ParameterInfo',
    'get_all_filters_info',
    # Color
    'GrayscaleContrastBrightness',
    'HueRotate',
    'Saturation',
    # Spatial
    'GaussianBlur',
    'Sharpen',
    'MedianNoiseReduction',
    # Palette
    'default_palette',
]
