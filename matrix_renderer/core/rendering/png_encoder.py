"""
PNG Encoder
===========

Lossless PNG serialization of rendered bitmaps using Pillow.
"""

from typing import Any, Dict, Optional, Tuple
import io

from PIL import Image
from pydantic import BaseModel, Field

from matrix_renderer.config.logging import get_logger
from matrix_renderer.core.exceptions import RenderError

logger = get_logger(__name__)


class PNGEncodingError(RenderError):
    """Exception raised when PNG encoding fails."""

    error_code = "PNG_ENCODING_ERROR"


class PNGResult(BaseModel):
    """Encoded PNG and its metadata."""

    png_data: bytes = Field(..., description="PNG binary data", exclude=True)
    width: int = Field(..., description="Image width")
    height: int = Field(..., description="Image height")
    file_size: int = Field(..., description="File size in bytes")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Generation metadata")


def unpremultiply(pixel: Tuple[int, int, int, int]) -> Tuple[int, int, int, int]:
    """
    Convert a premultiplied RGBA pixel to straight alpha with 16-bit integer math.

    Rendered bitmaps hold premultiplied values, so translucent pixels are
    converted on the way out. The truncating arithmetic keeps encoded pixels
    identical to the reference images; Pillow's "RGBa" conversion rounds
    differently.
    """
    r, g, b, a = pixel
    if a == 255:
        return pixel
    if a == 0:
        return (0, 0, 0, 0)
    alpha = a * 0x101
    red, green, blue = (((c * 0x101 * 0xFFFF // alpha) >> 8) & 0xFF for c in (r, g, b))
    return red, green, blue, a


def _to_straight_alpha(image: Image.Image) -> Image.Image:
    if image.mode != "RGBA" or image.getchannel("A").getextrema() == (255, 255):
        return image
    converted = image.copy()
    cache: Dict[Tuple[int, int, int, int], Tuple[int, int, int, int]] = {}
    for pixel in image.getdata():
        if pixel not in cache:
            cache[pixel] = unpremultiply(pixel)
    converted.putdata([cache[pixel] for pixel in image.getdata()])
    return converted


def encode_png(image: Image.Image, metadata: Optional[Dict[str, Any]] = None) -> PNGResult:
    """
    Encode an RGBA image as PNG.

    Translucent pixels are written with straight alpha, see ``unpremultiply``.

    Args:
        image: Rendered image
        metadata: Extra metadata to attach to the result

    Returns:
        PNGResult containing PNG data and metadata

    Raises:
        PNGEncodingError: If Pillow fails to encode the image
    """
    output = io.BytesIO()
    try:
        _to_straight_alpha(image).save(output, format="PNG")
    except (OSError, ValueError) as e:
        logger.error("PNG encoding error", error=str(e))
        raise PNGEncodingError(f"Unable to encode resulting image: {e}") from e

    png_data = output.getvalue()
    result = PNGResult(
        png_data=png_data,
        width=image.width,
        height=image.height,
        file_size=len(png_data),
        metadata={"mode": image.mode, **(metadata or {})},
    )

    logger.debug("PNG encoding completed", file_size=result.file_size)
    return result
