"""
Tests for the shared HSL math and the hue / saturation filters.
"""

import numpy as np
import pytest

from filterstag import HueRotate, LayerStack, PixelBuffer, Saturation
from filterstag.filters.hsl import hsl_to_rgb, rgb_to_hsl, rotate_hue, scale_saturation


def _rgb(*values):
    return tuple(np.array([v / 255.0]) for v in values)


def _max_diff(a: PixelBuffer, b: PixelBuffer) -> int:
    return int(np.max(np.abs(a.array.astype(int) - b.array.astype(int))))


class TestRgbToHsl:
    """Forward conversion."""

    @pytest.mark.parametrize('color, hue', [
        ((255, 0, 0), 0.0),
        ((0, 255, 0), 1 / 3),
        ((0, 0, 255), 2 / 3),
        ((255, 0, 255), 5 / 6),
    ])
    def test_primary_hues(self, color, hue):
        h, s, l = rgb_to_hsl(*_rgb(*color))
        assert h[0] == pytest.approx(hue)
        assert s[0] == pytest.approx(1.0)
        assert l[0] == pytest.approx(0.5)

    def test_gray_has_no_hue_or_saturation(self):
        h, s, l = rgb_to_hsl(*_rgb(90, 90, 90))
        assert h[0] == 0.0
        assert s[0] == 0.0
        assert l[0] == pytest.approx(90 / 255)

    def test_light_color_saturation_branch(self):
        """L > 0.5 uses d / (2 - max - min)."""
        h, s, l = rgb_to_hsl(*_rgb(255, 200, 200))
        mx, mn = 1.0, 200 / 255
        assert l[0] > 0.5
        assert s[0] == pytest.approx((mx - mn) / (2 - mx - mn))

    def test_round_trip(self, noisy_array):
        rgb = noisy_array[:, :, :3].astype(np.float64) / 255.0
        r, g, b = hsl_to_rgb(*rgb_to_hsl(rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2]))
        assert np.allclose(r, rgb[:, :, 0])
        assert np.allclose(g, rgb[:, :, 1])
        assert np.allclose(b, rgb[:, :, 2])


class TestHueRotate:
    """Hue rotation filter."""

    def test_red_to_green(self):
        image = np.array([[(255, 0, 0, 255)]], dtype=np.uint8)
        assert tuple(rotate_hue(image, 120)[0, 0]) == (0, 255, 0, 255)

    def test_red_to_blue(self):
        image = np.array([[(255, 0, 0, 255)]], dtype=np.uint8)
        assert tuple(rotate_hue(image, 240)[0, 0]) == (0, 0, 255, 255)

    def test_negative_rotation_wraps(self, palette_buffer):
        assert HueRotate(degrees=-120).apply(palette_buffer) == HueRotate(degrees=240).apply(palette_buffer)

    def test_full_turn_is_identity(self, noisy_buffer):
        full = HueRotate(degrees=360)
        assert full.degrees == 0
        result = full.apply(noisy_buffer)
        assert result == HueRotate(degrees=0).apply(noisy_buffer)
        assert _max_diff(result, noisy_buffer) <= 1

    def test_preserves_alpha(self, noisy_buffer):
        result = HueRotate(degrees=77).apply(noisy_buffer)
        assert np.array_equal(result.array[:, :, 3], noisy_buffer.array[:, :, 3])

    def test_gray_pixels_unchanged(self, gray_buffer):
        assert HueRotate(degrees=200).apply(gray_buffer) == gray_buffer

    @pytest.mark.parametrize('d1, d2', [(30, 60), (200, 250), (90, 270), (359, 2)])
    def test_two_rotations_add_up(self, palette_buffer, d1, d2):
        """Two stacked rotations match a single rotation by the sum, within rounding."""
        stack = LayerStack()
        stack.add(HueRotate(degrees=d1))
        stack.add(HueRotate(degrees=d2))

        combined = stack.compose(palette_buffer)
        single = HueRotate(degrees=(d1 + d2) % 360).apply(palette_buffer)

        assert _max_diff(combined, single) <= 3


class TestSaturation:
    """Saturation filter."""

    def test_zero_is_grayscale(self, noisy_buffer):
        result = Saturation(saturation=0).apply(noisy_buffer).array
        assert np.array_equal(result[:, :, 0], result[:, :, 1])
        assert np.array_equal(result[:, :, 1], result[:, :, 2])

    def test_zero_uses_hsl_lightness(self):
        image = np.array([[(200, 100, 50, 255)]], dtype=np.uint8)
        assert tuple(scale_saturation(image, 0.0)[0, 0]) == (125, 125, 125, 255)

    def test_hundred_is_identity(self, noisy_buffer):
        result = Saturation(saturation=100).apply(noisy_buffer)
        assert _max_diff(result, noisy_buffer) <= 1

    def test_boost_increases_spread(self):
        image = np.array([[(150, 100, 100, 255)]], dtype=np.uint8)
        result = scale_saturation(image, 2.0)[0, 0, :3].astype(int)
        assert result.max() - result.min() > 50

    def test_saturation_clamped_at_one(self):
        """A fully saturated color cannot get more saturated."""
        image = np.array([[(255, 0, 0, 255)]], dtype=np.uint8)
        assert np.array_equal(scale_saturation(image, 2.0), image)

    def test_preserves_alpha(self, noisy_buffer):
        result = Saturation(saturation=150).apply(noisy_buffer)
        assert np.array_equal(result.array[:, :, 3], noisy_buffer.array[:, :, 3])

    def test_shares_round_trip_with_hue_rotate(self, noisy_buffer):
        """Neutral hue and saturation settings go through the same conversion."""
        assert Saturation(saturation=100).apply(noisy_buffer) == HueRotate(degrees=0).apply(noisy_buffer)
