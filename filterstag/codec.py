# filterstag - Codec
"""
Pillow-backed decoding and encoding of PixelBuffers.

The engine itself only works on raw RGBA buffers; these helpers are the
boundary to file formats such as PNG or JPEG.

Usage:
    from filterstag.codec import decode, encode

    buffer = decode(Path("photo.jpg").read_bytes())
    png_bytes = encode(buffer)
"""

from __future__ import annotations

import io
import logging

from PIL import Image as PILImage, UnidentifiedImageError

from .config import settings
from .exceptions import InvalidDimensions
from .pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def decode(data: bytes, max_pixels: int | None = None) -> PixelBuffer:
    """Decode encoded image bytes (PNG, JPEG, ...) into an RGBA buffer.

    :param data: Encoded image file contents.
    :param max_pixels: Upper bound on width * height, defaults to
        ``settings.MAX_IMAGE_PIXELS``.
    :raises ValueError: if the bytes are not a decodable image.
    :raises InvalidDimensions: if the image exceeds ``max_pixels``.
    """
    limit = settings.MAX_IMAGE_PIXELS if max_pixels is None else max_pixels
    try:
        with PILImage.open(io.BytesIO(data)) as image:
            width, height = image.size
            if width * height > limit:
                raise InvalidDimensions(
                    width, height, width * height * 4,
                    f"Image {width}x{height} exceeds the limit of {limit} pixels",
                )
            rgba = image.convert("RGBA")
            pixels = rgba.tobytes()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Cannot decode image: {e}") from e

    logger.debug(f"Decoded {len(data)} bytes into {width}x{height} RGBA")
    return PixelBuffer(width, height, pixels)


def to_pil(buffer: PixelBuffer) -> PILImage.Image:
    """Convert a buffer to a PIL RGBA image."""
    return PILImage.frombytes("RGBA", buffer.size, buffer.pixels)


def from_pil(image: PILImage.Image) -> PixelBuffer:
    """Convert a PIL image of any mode to a buffer."""
    rgba = image.convert("RGBA")
    return PixelBuffer(rgba.width, rgba.height, rgba.tobytes())


def encode(buffer: PixelBuffer, format: str | None = None, **options) -> bytes:
    """Encode a buffer into image file bytes.

    :param buffer: The pixels to encode.
    :param format: Pillow format name, defaults to ``settings.ENCODE_FORMAT``.
        Formats without alpha support (JPEG) receive an RGB image.
    :param options: Passed through to ``PIL.Image.save``, e.g. ``quality=90``.
    :raises ValueError: for empty buffers or unknown formats.
    """
    if buffer.is_empty:
        raise ValueError("Cannot encode an empty buffer")

    fmt = (format or settings.ENCODE_FORMAT).upper()
    if fmt == "JPG":
        fmt = "JPEG"

    image = to_pil(buffer)
    if fmt in ("JPEG", "BMP"):
        image = image.convert("RGB")

    output = io.BytesIO()
    try:
        image.save(output, format=fmt, **options)
    except KeyError as e:
        raise ValueError(f"Unknown image format: {fmt}") from e

    data = output.getvalue()
    logger.debug(f"Encoded {buffer.width}x{buffer.height} as {fmt} ({len(data)} bytes)")
    return data
