# filterstag Filters - Spatial
"""
Neighbourhood filters: Gaussian blur, sharpen and median noise reduction.

Boundary policies differ between them. The blur clamps samples to the
nearest edge pixel; sharpen and noise reduction leave border pixels
without a full neighbourhood untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .base import Filter, param, register_alias, register_filter
from .blur_filters import gaussian_blur, gaussian_kernel
from .noise_filters import median
from .sharpen_filters import sharpen


@register_filter
@dataclass
class GaussianBlur(Filter):
    """Apply a smooth blur effect to the image.

    radius: Kernel radius in pixels (1-10)
    sigma: Standard deviation of the Gaussian (0.5-5)
    """

    filter_id: ClassVar[str] = 'gaussian-blur'
    display_name: ClassVar[str] = 'Gaussian Blur'
    description: ClassVar[str] = 'Apply a smooth blur effect to the image'

    radius: int = param(3, 1, 10, step=1, integer=True, description='Size of the blur kernel')
    sigma: float = param(2.0, 0.5, 5.0, step=0.1, description='Smoothness of the blur')
    _primary_param = 'radius'

    @property
    def kernel(self) -> np.ndarray:
        """The normalized 1-D kernel for the current parameters."""
        return gaussian_kernel(self.radius, self.sigma)

    def transform(self, pixels: np.ndarray) -> np.ndarray:
        return gaussian_blur(pixels, self.radius, self.sigma)


@register_filter
@dataclass
class Sharpen(Filter):
    """Enhance edges and details in the image.

    amount: Sharpening strength (0-3), 0 = unchanged
    """

    filter_id: ClassVar[str] = 'sharpen'
    display_name: ClassVar[str] = 'Sharpen'
    description: ClassVar[str] = 'Enhance edges and details in the image'

    amount: float = param(1.0, 0.0, 3.0, step=0.1, description='Sharpening strength')
    _primary_param = 'amount'

    def transform(self, pixels: np.ndarray) -> np.ndarray:
        return sharpen(pixels, self.amount)


@register_filter
@dataclass
class MedianNoiseReduction(Filter):
    """Reduce image noise and graininess.

    strength: Window half size (1-5), 1 = 3x3 window, 5 = 11x11 window
    """

    filter_id: ClassVar[str] = 'noise-reduction'
    display_name: ClassVar[str] = 'Noise Reduction'
    description: ClassVar[str] = 'Reduce image noise and graininess'

    strength: int = param(1, 1, 5, step=1, integer=True, description='Median window half size')
    _primary_param = 'strength'

    @property
    def window_size(self) -> int:
        return 2 * self.strength + 1

    def transform(self, pixels: np.ndarray) -> np.ndarray:
        return median(pixels, self.strength)


register_alias('blur', GaussianBlur)
register_alias('sharp', Sharpen)
register_alias('denoise', MedianNoiseReduction)
register_alias('median', MedianNoiseReduction)
