"""
Renderer Base
=============

Common interface for matrix renderers.
"""

from abc import ABC, abstractmethod
from typing import Any

from PIL import Image

from matrix_renderer.config.logging import get_logger
from matrix_renderer.core.exceptions import InvalidInputError
from matrix_renderer.core.matrix import Matrix

logger = get_logger(__name__)


class BaseRenderer(ABC):
    """
    Stateless transformation from ``(Matrix, pixel_size)`` to an RGBA image.

    Implementations allocate a fresh image per call and keep no state between
    calls, so a single instance may be shared across threads.
    """

    name = "base"

    def __init__(self) -> None:
        self.logger: Any = logger.bind(renderer=self.name)

    @abstractmethod
    def render(self, matrix: Matrix, pixel_size: int) -> Image.Image:
        """Render ``matrix`` with each cell occupying ``pixel_size`` pixels per side."""

    @staticmethod
    def _check_pixel_size(pixel_size: int) -> None:
        if isinstance(pixel_size, bool) or not isinstance(pixel_size, int) or pixel_size < 1:
            raise InvalidInputError(f"Pixel size must be a positive integer, got {pixel_size!r}")
