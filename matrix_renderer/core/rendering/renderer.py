"""
Renderer Selection
==================

Maps render modes to renderer implementations and provides the single
entry point used by the API layer.
"""

from enum import Enum
from typing import Dict, Type, Union

from PIL import Image

from matrix_renderer.config.logging import get_logger
from matrix_renderer.core.exceptions import InvalidInputError
from matrix_renderer.core.matrix import Matrix
from .base import BaseRenderer
from .block_renderer import BlockRenderer
from .circle_renderer import CircleRenderer

logger = get_logger(__name__)


class RenderMode(str, Enum):
    """Visual style of the rendered image."""

    BLOCK = "block"
    REALISTIC = "realistic"


class RendererFactory:
    """Factory for creating renderers."""

    _renderers: Dict[RenderMode, Type[BaseRenderer]] = {
        RenderMode.BLOCK: BlockRenderer,
        RenderMode.REALISTIC: CircleRenderer,
    }

    @classmethod
    def create(cls, mode: Union[RenderMode, str] = RenderMode.BLOCK) -> BaseRenderer:
        """
        Create a renderer instance.

        Args:
            mode: Render mode or its string value

        Returns:
            Renderer for the requested mode

        Raises:
            InvalidInputError: If the mode is unknown
        """
        try:
            mode = RenderMode(mode)
        except ValueError:
            raise InvalidInputError(f"Unknown render mode: {mode!r}")
        return cls._renderers[mode]()

    @classmethod
    def available_modes(cls) -> list[str]:
        """List the supported render mode names."""
        return [mode.value for mode in cls._renderers]


def render_matrix(
    matrix: Matrix, pixel_size: int, mode: Union[RenderMode, str] = RenderMode.BLOCK
) -> Image.Image:
    """
    Render a matrix in the requested mode.

    Args:
        matrix: Validated color matrix
        pixel_size: Side length in pixels of one matrix cell
        mode: Render mode

    Returns:
        RGBA image sized (columns * pixel_size, rows * pixel_size), with the
        pixel size rounded up to odd in realistic mode
    """
    renderer = RendererFactory.create(mode)

    logger.info(
        "Rendering matrix",
        mode=renderer.name,
        rows=matrix.rows,
        columns=matrix.columns,
        pixel_size=pixel_size,
    )

    image = renderer.render(matrix, pixel_size)

    logger.info("Matrix rendered", mode=renderer.name, width=image.width, height=image.height)
    return image
