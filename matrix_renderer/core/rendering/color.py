"""
Color Decoding
==============

Packed ``0x??RRGGBB`` colors to opaque RGBA tuples.
"""

from typing import NamedTuple


class Color(NamedTuple):
    """RGBA color, 8 bits per channel. Usable directly as a Pillow pixel value."""

    r: int
    g: int
    b: int
    a: int = 255


BACKGROUND_COLOR = Color(0, 0, 0, 255)
STROKE_COLOR = Color(50, 50, 50, 185)


def decode_color(value: int) -> Color:
    """Decode a packed 32-bit color. Bits above 23 are ignored; alpha is always 255."""
    return Color((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255)
