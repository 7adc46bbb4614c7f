"""
Tests for the PixelBuffer data model.
"""

import numpy as np
import pytest

from filterstag import PixelBuffer, InvalidDimensions, OutOfBounds


class TestConstruction:
    """Constructing buffers from raw bytes and arrays."""

    def test_from_bytes(self):
        data = bytes([255, 0, 0, 255, 0, 0, 255, 128])
        buffer = PixelBuffer(2, 1, data)

        assert buffer.width == 2
        assert buffer.height == 1
        assert buffer.pixels == data
        assert len(buffer) == 8

    def test_from_int_sequence(self):
        buffer = PixelBuffer(1, 1, [1, 2, 3, 4])
        assert buffer.get_pixel(0, 0) == (1, 2, 3, 4)

    def test_length_mismatch_raises(self):
        """Byte count must equal width * height * 4."""
        with pytest.raises(InvalidDimensions):
            PixelBuffer(2, 2, bytes(15))

    def test_invalid_dimensions_is_value_error(self):
        with pytest.raises(ValueError):
            PixelBuffer(1, 1, b'')

    def test_negative_dimensions_raise(self):
        with pytest.raises(InvalidDimensions):
            PixelBuffer(-1, 2, b'')

    def test_empty_buffer(self):
        buffer = PixelBuffer(0, 0, b'')
        assert buffer.is_empty
        assert buffer.pixels == b''
        assert buffer == PixelBuffer.empty()

    def test_from_array_rejects_rgb(self):
        with pytest.raises(InvalidDimensions):
            PixelBuffer.from_array(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_solid_defaults_alpha(self):
        buffer = PixelBuffer.solid(3, 2, (10, 20, 30))
        assert buffer.size == (3, 2)
        assert buffer.get_pixel(2, 1) == (10, 20, 30, 255)


class TestImmutability:
    """Buffers never change after construction."""

    def test_array_is_read_only(self):
        buffer = PixelBuffer.solid(2, 2, (1, 2, 3, 4))
        with pytest.raises(ValueError):
            buffer.array[0, 0, 0] = 9

    def test_source_bytearray_is_copied(self):
        data = bytearray([1, 2, 3, 4])
        buffer = PixelBuffer(1, 1, data)
        data[0] = 99
        assert buffer.get_pixel(0, 0) == (1, 2, 3, 4)

    def test_source_array_is_copied(self):
        array = np.zeros((1, 1, 4), dtype=np.uint8)
        buffer = PixelBuffer.from_array(array)
        array[0, 0, 0] = 50
        assert buffer.get_pixel(0, 0)[0] == 0

    def test_to_array_is_writable_copy(self):
        buffer = PixelBuffer.solid(1, 1, (5, 5, 5, 5))
        copy = buffer.to_array()
        copy[0, 0, 0] = 0
        assert buffer.get_pixel(0, 0) == (5, 5, 5, 5)


class TestPixelAccess:
    """Reading single pixels."""

    def test_row_major_layout(self):
        data = bytes(range(24))  # 3x2
        buffer = PixelBuffer(3, 2, data)
        assert buffer.get_pixel(0, 0) == (0, 1, 2, 3)
        assert buffer.get_pixel(2, 0) == (8, 9, 10, 11)
        assert buffer.get_pixel(0, 1) == (12, 13, 14, 15)

    @pytest.mark.parametrize('x, y', [(-1, 0), (0, -1), (3, 0), (0, 2)])
    def test_out_of_bounds(self, x, y):
        buffer = PixelBuffer(3, 2, bytes(24))
        with pytest.raises(OutOfBounds):
            buffer.get_pixel(x, y)

    def test_out_of_bounds_is_index_error(self):
        with pytest.raises(IndexError):
            PixelBuffer.empty().get_pixel(0, 0)

    def test_equality_and_hash(self):
        a = PixelBuffer.solid(2, 2, (1, 2, 3, 4))
        b = PixelBuffer(2, 2, bytes([1, 2, 3, 4] * 4))
        assert a == b
        assert hash(a) == hash(b)
        assert a != PixelBuffer.solid(4, 1, (1, 2, 3, 4))
