"""
Rendering Errors
================

Exception hierarchy shared by the rendering core and the API layer.
Every error carries an ``error_code`` that ends up in the HTTP error body.
"""

from typing import Optional


class RenderError(Exception):
    """Base class for all matrix rendering errors."""

    error_code = "RENDER_ERROR"


class InvalidInputError(RenderError):
    """Raised when a matrix or a pixel size is malformed or out of range."""

    error_code = "INVALID_INPUT"


class DimensionMismatchError(InvalidInputError):
    """Raised when the bitmap length does not equal rows * columns."""

    error_code = "DIMENSION_MISMATCH"

    def __init__(self, expected: int, actual: int, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message or f"Bitmap length {actual} does not match rows * columns = {expected}"
        )


class IndexOutOfRangeError(RenderError, IndexError):
    """Raised when a pixel is requested outside the matrix bounds."""

    error_code = "INDEX_OUT_OF_RANGE"
