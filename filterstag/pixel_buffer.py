# filterstag - PixelBuffer
"""
RGBA raster data model shared by every filter.

A PixelBuffer is value-like: its pixel array is read-only, and filters
always return a new buffer instead of modifying their input.

## Layout

| Property | Value |
|----------|-------|
| Channel order | R, G, B, A |
| Bit depth | uint8, 0-255 |
| Memory order | row-major, no padding |
| Array shape | (height, width, 4) |

Usage:
    from filterstag import PixelBuffer

    buffer = PixelBuffer(2, 1, bytes([255, 0, 0, 255, 0, 0, 255, 255]))
    buffer.get_pixel(1, 0)  # (0, 0, 255, 255)
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from .exceptions import InvalidDimensions, OutOfBounds

CHANNELS = 4


def _freeze(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


class PixelBuffer:
    """Immutable width/height-tagged RGBA byte raster."""

    __slots__ = ('_width', '_height', '_array')

    def __init__(
        self,
        width: int,
        height: int,
        pixels: bytes | bytearray | memoryview | Sequence[int] | np.ndarray,
    ):
        width = int(width)
        height = int(height)
        if width < 0 or height < 0:
            raise InvalidDimensions(
                width, height, 0,
                f"Buffer dimensions must be non-negative, got {width}x{height}",
            )

        if isinstance(pixels, np.ndarray):
            flat = np.array(pixels, dtype=np.uint8).reshape(-1)
        elif isinstance(pixels, (bytes, bytearray, memoryview)):
            # Copy so later writes to a caller's bytearray cannot leak in
            flat = np.frombuffer(bytes(pixels), dtype=np.uint8).copy()
        else:
            flat = np.asarray(list(pixels), dtype=np.uint8)

        if flat.size != width * height * CHANNELS:
            raise InvalidDimensions(width, height, int(flat.size))

        self._width = width
        self._height = height
        self._array = _freeze(flat.reshape(height, width, CHANNELS))

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelBuffer:
        """Wrap an (H, W, 4) array. The data is copied unless already read-only uint8."""
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise InvalidDimensions(
                array.shape[1] if array.ndim > 1 else 0,
                array.shape[0] if array.ndim > 0 else 0,
                int(array.size),
                f"Expected RGBA array (H, W, 4), got shape {array.shape}",
            )
        buffer = cls.__new__(cls)
        buffer._height, buffer._width = int(array.shape[0]), int(array.shape[1])
        if array.dtype == np.uint8 and not array.flags.writeable and array.flags.c_contiguous:
            buffer._array = array
        else:
            buffer._array = _freeze(np.ascontiguousarray(array, dtype=np.uint8).copy())
        return buffer

    @classmethod
    def solid(cls, width: int, height: int, color: Iterable[int]) -> PixelBuffer:
        """Create a buffer filled with a single RGBA color."""
        rgba = tuple(color)
        if len(rgba) == 3:
            rgba = (*rgba, 255)
        array = np.empty((int(height), int(width), CHANNELS), dtype=np.uint8)
        array[:, :] = rgba
        return cls.from_array(array)

    @classmethod
    def empty(cls) -> PixelBuffer:
        """The 0x0 buffer."""
        return cls(0, 0, b'')

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        """(width, height)"""
        return self._width, self._height

    @property
    def is_empty(self) -> bool:
        """True if the buffer has no pixels."""
        return self._width == 0 or self._height == 0

    @property
    def array(self) -> np.ndarray:
        """Read-only (H, W, 4) uint8 view of the pixels."""
        return self._array

    @property
    def pixels(self) -> bytes:
        """Pixel data as RGBA bytes, row-major."""
        return self._array.tobytes()

    def to_array(self) -> np.ndarray:
        """Writable copy of the pixels as an (H, W, 4) uint8 array."""
        return self._array.copy()

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the (R, G, B, A) channels at column ``x``, row ``y``.

        :raises OutOfBounds: if (x, y) lies outside the buffer.
        """
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise OutOfBounds(x, y, self._width, self._height)
        r, g, b, a = self._array[y, x]
        return int(r), int(g), int(b), int(a)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._array, other._array)

    def __hash__(self) -> int:
        return hash((self._width, self._height, self.pixels))

    def __len__(self) -> int:
        return self._array.size

    def __repr__(self) -> str:
        return f"PixelBuffer({self._width}x{self._height})"
