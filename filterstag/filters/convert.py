"""Float to uint8 channel conversion.

Two rounding conventions are used by the filters:

- ``store_u8``: clamp to 0-255 then round half to even. This is what
  storing a float into a clamped 8-bit channel does.
- ``round_u8``: round half up, then clamp. Used where a filter rounds
  explicitly before storing.
"""
import numpy as np


def store_u8(values: np.ndarray) -> np.ndarray:
    """Clamp and round-half-even float values into a uint8 array."""
    return np.rint(np.clip(values, 0.0, 255.0)).astype(np.uint8)


def round_u8(values: np.ndarray) -> np.ndarray:
    """Round-half-up float values and clamp them into a uint8 array."""
    return np.clip(np.floor(values + 0.5), 0.0, 255.0).astype(np.uint8)
