"""
Render Routes
=============

FastAPI routes turning a JSON color matrix into a PNG image.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from matrix_renderer.config.logging import get_logger
from matrix_renderer.config.settings import Settings
from matrix_renderer.api.dependencies import get_current_settings
from matrix_renderer.core.rendering.png_encoder import PNGResult, encode_png
from matrix_renderer.core.rendering.renderer import RenderMode, render_matrix
from matrix_renderer.models.schemas import MatrixPayload, parse_pixel_size

logger = get_logger(__name__)

router = APIRouter(tags=["Rendering"])


def _render_to_png(payload: MatrixPayload, pixel_size: int, mode: RenderMode) -> PNGResult:
    matrix = payload.to_matrix()
    image = render_matrix(matrix, pixel_size, mode)
    return encode_png(image, metadata={"render_mode": mode.value, "pixel_size": pixel_size})


async def render_matrix_to_png(
    payload: MatrixPayload, raw_pixel_size: Optional[str], mode: RenderMode, settings: Settings
) -> PNGResult:
    """
    Validate the pixel size, render the matrix and encode the result.
    Used by the route handlers and integration tests.

    Args:
        payload: Decoded request body
        raw_pixel_size: Raw ``pixSize`` query value, if any
        mode: Render mode
        settings: Application settings holding the pixel size bounds

    Returns:
        PNGResult with the encoded image
    """
    pixel_size = parse_pixel_size(
        raw_pixel_size,
        default=settings.default_pixel_size,
        minimum=settings.min_pixel_size,
        maximum=settings.max_pixel_size,
    )
    # Rendering is CPU bound, keep it off the event loop
    return await run_in_threadpool(_render_to_png, payload, pixel_size, mode)


def _png_response(result: PNGResult) -> Response:
    return Response(
        content=result.png_data,
        media_type="image/png",
        headers={"Content-Length": str(result.file_size)},
    )


@router.post("/renderImage", response_class=Response)
async def render_image(
    payload: MatrixPayload,
    pix_size: Optional[str] = Query(None, alias="pixSize"),
    settings: Settings = Depends(get_current_settings),
) -> Response:
    """Render a matrix as a grid of solid squares."""
    logger.info("Block render requested", rows=payload.rows, columns=payload.columns)
    result = await render_matrix_to_png(payload, pix_size, RenderMode.BLOCK, settings)
    return _png_response(result)


@router.post("/renderRealistic", response_class=Response)
async def render_realistic_image(
    payload: MatrixPayload,
    pix_size: Optional[str] = Query(None, alias="pixSize"),
    settings: Settings = Depends(get_current_settings),
) -> Response:
    """Render a matrix as a grid of stroked, filled discs."""
    logger.info("Realistic render requested", rows=payload.rows, columns=payload.columns)
    result = await render_matrix_to_png(payload, pix_size, RenderMode.REALISTIC, settings)
    return _png_response(result)
