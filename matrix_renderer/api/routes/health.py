"""
Health Routes
=============

FastAPI routes for health check and service info endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends

from matrix_renderer.config.settings import Settings
from matrix_renderer.core.rendering.renderer import RendererFactory
from matrix_renderer.models.schemas import HealthStatus
from matrix_renderer.api.dependencies import get_current_settings

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthStatus)
async def health_check(settings: Settings = Depends(get_current_settings)) -> HealthStatus:
    """Basic health check endpoint."""
    return HealthStatus(
        status="healthy",
        version=settings.app_version,
        render_modes=RendererFactory.available_modes(),
    )


@router.get("/", tags=["General"])
async def root(settings: Settings = Depends(get_current_settings)) -> dict[str, Any]:
    """
    Root endpoint with basic API information.
    """
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Render a matrix of packed colors as a PNG image",
        "docs_url": "/docs" if settings.enable_docs else None,
        "health_check": "/health",
        "endpoints": {
            "render_block": "POST /renderImage?pixSize=N",
            "render_realistic": "POST /renderRealistic?pixSize=N",
        },
        "pixel_size": {
            "default": settings.default_pixel_size,
            "min": settings.min_pixel_size,
            "max": settings.max_pixel_size,
        },
    }
