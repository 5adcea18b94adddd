"""
Circle Renderer
===============

"Realistic" mode: every matrix cell becomes a filled disc with a dark outline
on an opaque black background.

All pixel writes are plain overwrites. The stroke color has a partial alpha
but is written as-is, never composited over the fill. The bitmap values are
treated as premultiplied; the PNG encoder converts them to straight alpha.
"""

import math
from typing import Any

from PIL import Image

from matrix_renderer.core.matrix import Matrix
from .base import BaseRenderer
from .color import BACKGROUND_COLOR, STROKE_COLOR, Color, decode_color


def normalize_pixel_size(pixel_size: int) -> int:
    """Round an even pixel size up to the next odd value so discs center on a pixel."""
    if pixel_size % 2 == 0:
        return pixel_size + 1
    return pixel_size


def _put(pixels: Any, size: tuple, x: int, y: int, color: Color) -> None:
    # Points outside the image are dropped
    if 0 <= x < size[0] and 0 <= y < size[1]:
        pixels[x, y] = color


def fill_circle(image: Image.Image, color: Color, center_x: int, center_y: int, radius: int) -> None:
    """
    Fill a disc by testing every point of its bounding square.

    Costs O(radius^2) per disc. Pixel sizes are capped well below 30, so this
    stays cheaper than maintaining a scanline fill.
    """
    pixels = image.load()
    radius_square = radius * radius
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if dx * dx + dy * dy <= radius_square:
                _put(pixels, image.size, center_x + dx, center_y + dy, color)


def draw_circle(image: Image.Image, color: Color, center_x: int, center_y: int, radius: int) -> None:
    """
    Stroke a circle outline.

    Walks the first 45 degree octant (x from 0 to radius*cos(pi/4)) and mirrors
    each point eight ways around the center.
    """
    pixels = image.load()
    limit = int(radius * math.cos(math.pi / 4))
    for x in range(limit + 1):
        y = int(math.sqrt(radius * radius - x * x))
        for px, py in (
            (center_x + x, center_y + y),
            (center_x + x, center_y - y),
            (center_x - x, center_y + y),
            (center_x - x, center_y - y),
            (center_x + y, center_y + x),
            (center_x + y, center_y - x),
            (center_x - y, center_y + x),
            (center_x - y, center_y - x),
        ):
            _put(pixels, image.size, px, py, color)


class CircleRenderer(BaseRenderer):
    """Realistic-mode renderer."""

    name = "realistic"

    def __init__(self, stroke_color: Color = STROKE_COLOR, background_color: Color = BACKGROUND_COLOR):
        super().__init__()
        self.stroke_color = stroke_color
        self.background_color = background_color

    def render(self, matrix: Matrix, pixel_size: int) -> Image.Image:
        self._check_pixel_size(pixel_size)

        pixel_size = normalize_pixel_size(pixel_size)
        radius = pixel_size // 2

        width, height = matrix.columns * pixel_size, matrix.rows * pixel_size
        image = Image.new("RGBA", (width, height), self.background_color)

        for x in range(matrix.columns):
            for y in range(matrix.rows):
                color = decode_color(matrix.pixel_at(x, y))
                center_x = x * pixel_size + radius
                center_y = y * pixel_size + radius
                fill_circle(image, color, center_x, center_y, radius)
                # Stroke after fill so the outline wins on boundary pixels
                draw_circle(image, self.stroke_color, center_x, center_y, radius)

        self.logger.debug(
            "Realistic render completed",
            width=width,
            height=height,
            pixel_size=pixel_size,
            radius=radius,
        )
        return image
