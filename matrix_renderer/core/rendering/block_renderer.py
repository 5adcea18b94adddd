"""
Block Renderer
==============

Paints every matrix cell as a solid ``pixel_size`` x ``pixel_size`` square.
"""

from PIL import Image

from matrix_renderer.core.matrix import Matrix
from .base import BaseRenderer
from .color import decode_color


class BlockRenderer(BaseRenderer):
    """Block-mode renderer."""

    name = "block"

    def render(self, matrix: Matrix, pixel_size: int) -> Image.Image:
        self._check_pixel_size(pixel_size)

        width, height = matrix.columns * pixel_size, matrix.rows * pixel_size
        # Every pixel is covered by exactly one block, no background needed
        image = Image.new("RGBA", (width, height))

        for x in range(matrix.columns):
            for y in range(matrix.rows):
                color = decode_color(matrix.pixel_at(x, y))
                left, top = x * pixel_size, y * pixel_size
                image.paste(color, (left, top, left + pixel_size, top + pixel_size))

        self.logger.debug("Block render completed", width=width, height=height)
        return image
