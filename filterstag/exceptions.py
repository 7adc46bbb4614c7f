"""Error types raised by the filter engine.

Every error is a local, recoverable condition. Each one also derives from
the builtin exception a caller would naturally catch for it.
"""


class FilterStagError(Exception):
    """Base class for all filterstag errors."""


class InvalidDimensions(FilterStagError, ValueError):
    """Pixel data length does not match ``width * height * 4``."""

    def __init__(self, width: int, height: int, length: int, message: str | None = None):
        self.width = width
        self.height = height
        self.length = length
        if message is None:
            message = (
                f"Expected {width * height * 4} bytes for a {width}x{height} RGBA "
                f"buffer, got {length}"
            )
        super().__init__(message)


class OutOfBounds(FilterStagError, IndexError):
    """Pixel access outside the declared width/height."""

    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        super().__init__(f"Pixel ({x}, {y}) outside {width}x{height} buffer")


class LayerNotFound(FilterStagError, KeyError):
    """A stack mutation referenced an unknown layer id."""

    def __init__(self, layer_id: str):
        self.layer_id = layer_id
        super().__init__(layer_id)

    def __str__(self) -> str:
        return f"No layer with id {self.layer_id!r}"
