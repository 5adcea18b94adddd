"""
Rendering Module
===============

Rasterization of color matrices into RGBA bitmaps.

Components:
- color: Packed color decoding
- block_renderer: Solid square per matrix cell
- circle_renderer: Stroked, filled disc per matrix cell
- renderer: Mode selection and the render entry point
- png_encoder: Lossless PNG serialization of rendered bitmaps
"""

from .color import Color, decode_color, BACKGROUND_COLOR, STROKE_COLOR
from .block_renderer import BlockRenderer
from .circle_renderer import CircleRenderer
from .renderer import RenderMode, RendererFactory, render_matrix
from .png_encoder import PNGEncodingError, PNGResult, encode_png

__all__ = [
    "Color",
    "decode_color",
    "BACKGROUND_COLOR",
    "STROKE_COLOR",
    "BlockRenderer",
    "CircleRenderer",
    "RenderMode",
    "RendererFactory",
    "render_matrix",
    "PNGEncodingError",
    "PNGResult",
    "encode_png",
]
