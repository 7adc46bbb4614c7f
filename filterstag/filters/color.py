# filterstag Filters - Color
"""
Per-pixel color filters: black & white, hue rotation and saturation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .base import Filter, param, register_alias, register_filter
from .grayscale import grayscale_contrast_brightness
from .hsl import rotate_hue, scale_saturation


@register_filter
@dataclass
class GrayscaleContrastBrightness(Filter):
    """Convert to grayscale with contrast and brightness controls.

    contrast: -100 to 100, 0 = unchanged
    brightness: -100 to 100, 0 = unchanged
    """

    filter_id: ClassVar[str] = 'black-and-white'
    display_name: ClassVar[str] = 'Black & White'
    description: ClassVar[str] = 'Convert to grayscale with contrast and brightness controls'

    contrast: float = param(0.0, -100.0, 100.0, step=1, description='Contrast around mid-gray')
    brightness: float = param(0.0, -100.0, 100.0, step=1, description='Brightness offset')
    _primary_param = 'contrast'

    def transform(self, pixels: np.ndarray) -> np.ndarray:
        return grayscale_contrast_brightness(pixels, self.contrast, self.brightness)


@register_filter
@dataclass
class HueRotate(Filter):
    """Rotate colors around the color wheel.

    degrees: Rotation angle, wrapped into [0, 360)
    """

    filter_id: ClassVar[str] = 'hue-rotate'
    display_name: ClassVar[str] = 'Hue Rotate'
    description: ClassVar[str] = 'Rotate colors around the color wheel'

    degrees: float = param(0.0, wrap=360.0, step=1, description='Rotation in degrees')
    _primary_param = 'degrees'

    def transform(self, pixels: np.ndarray) -> np.ndarray:
        return rotate_hue(pixels, self.degrees)


@register_filter
@dataclass
class Saturation(Filter):
    """Adjust color intensity.

    saturation: Percent of the original saturation, 0 = grayscale, 100 = unchanged
    """

    filter_id: ClassVar[str] = 'saturation'
    display_name: ClassVar[str] = 'Saturation'
    description: ClassVar[str] = 'Adjust color intensity'

    saturation: float = param(100.0, 0.0, 200.0, step=1, description='Saturation in percent')
    _primary_param = 'saturation'

    def transform(self, pixels: np.ndarray) -> np.ndarray:
        return scale_saturation(pixels, self.saturation / 100.0)


register_alias('gray', GrayscaleContrastBrightness)
register_alias('bw', GrayscaleContrastBrightness)
register_alias('hue', HueRotate)
register_alias('sat', Saturation)
register_alias('desaturate', Saturation, saturation=0)
