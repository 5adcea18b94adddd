"""
Matrix Model
============

Immutable color matrix: dimensions plus a flat sequence of packed colors.
"""

from dataclasses import dataclass, field
from typing import Tuple

from .exceptions import DimensionMismatchError, IndexOutOfRangeError, InvalidInputError

MAX_ENCODED_COLOR = 0xFFFFFFFF


@dataclass(frozen=True)
class Matrix:
    """
    A ``rows`` x ``columns`` grid of packed 32-bit colors.

    The bitmap is addressed with ``bitmap[x * rows + y]``. Existing reference
    images depend on this layout, so it must not be changed to the row-major
    ``y * columns + x``.
    """

    rows: int
    columns: int
    bitmap: Tuple[int, ...] = field(repr=False)

    def __post_init__(self) -> None:
        for name in ("rows", "columns"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidInputError(f"{name} must be a positive integer, got {value!r}")

        bitmap = tuple(self.bitmap)
        for value in bitmap:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInputError(f"Bitmap entries must be integers, got {value!r}")
            if not 0 <= value <= MAX_ENCODED_COLOR:
                raise InvalidInputError(f"Bitmap entry {value} is not an unsigned 32-bit value")

        expected = self.rows * self.columns
        if len(bitmap) != expected:
            raise DimensionMismatchError(expected=expected, actual=len(bitmap))

        object.__setattr__(self, "bitmap", bitmap)

    @property
    def size(self) -> Tuple[int, int]:
        """Matrix size as ``(columns, rows)``."""
        return self.columns, self.rows

    def pixel_at(self, x: int, y: int) -> int:
        """Return the packed color at column ``x``, row ``y``."""
        if y < 0 or y >= self.rows:
            raise IndexOutOfRangeError("y out of bound")
        if x < 0 or x >= self.columns:
            raise IndexOutOfRangeError("x out of bound")
        return self.bitmap[x * self.rows + y]
