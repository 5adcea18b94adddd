"""
FastAPI Application
==================

Application factory for the matrix rendering service. Nothing is registered
at import time; ``create_app`` builds and returns a configured instance.
"""

from contextlib import asynccontextmanager
import uuid
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from matrix_renderer.config.settings import get_settings, Settings
from matrix_renderer.config.logging import get_logger, setup_logging
from matrix_renderer.core.exceptions import (
    RenderError,
    InvalidInputError,
    IndexOutOfRangeError,
)
from matrix_renderer.api.routes.render import router as render_router
from matrix_renderer.api.routes.health import router as health_router
from matrix_renderer.models.schemas import ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    logger.info(
        "Starting matrix renderer",
        environment=settings.environment,
        default_pixel_size=settings.default_pixel_size,
    )
    try:
        yield
    finally:
        logger.info("Shutting down matrix renderer")


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    error_code: str,
    details: Optional[dict] = None,
) -> JSONResponse:
    error_response = ErrorResponse(
        error=error,
        error_code=error_code,
        details=details,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=status_code, content=error_response.model_dump(mode="json"))


def _status_for(exc: RenderError) -> int:
    # Out-of-range access only happens on malformed input, so it is a client error
    if isinstance(exc, (InvalidInputError, IndexOutOfRangeError)):
        return 400
    return 500


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the structured error handlers to ``app``."""

    @app.exception_handler(RenderError)
    async def render_error_handler(request: Request, exc: RenderError) -> JSONResponse:
        """Map rendering errors to structured error responses."""
        status_code = _status_for(exc)
        log = logger.warning if status_code < 500 else logger.error
        log(
            "Render error",
            error_code=exc.error_code,
            error_message=str(exc),
            status_code=status_code,
            request_id=getattr(request.state, "request_id", None),
        )
        return _error_response(request, status_code, str(exc), exc.error_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Reject malformed JSON bodies with 400 instead of FastAPI's default 422."""
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        logger.warning(
            "Invalid request",
            errors=errors,
            request_id=getattr(request.state, "request_id", None),
        )
        return _error_response(
            request,
            400,
            "Invalid JSON: request body does not describe a matrix",
            InvalidInputError.error_code,
            details={"errors": errors},
        )

    @app.exception_handler(HTTPException)
    async def custom_http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Custom HTTP exception handler with structured error response."""
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "HTTP exception",
            status_code=exc.status_code,
            detail=exc.detail,
            request_id=getattr(request.state, "request_id", None),
        )
        return _error_response(request, exc.status_code, str(exc.detail), str(exc.status_code))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """General exception handler for unexpected errors."""
        logger.error(
            "Unhandled exception",
            exception=str(exc),
            request_id=getattr(request.state, "request_id", None),
            exc_info=True,
        )
        settings: Settings = request.app.state.settings
        return _error_response(
            request,
            500,
            "Internal server error",
            "INTERNAL_ERROR",
            details={"exception": str(exc)} if settings.debug else None,
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function for creating FastAPI app instance.
    Used by the development server, tests and external deployment scripts.

    Args:
        settings: Settings to build the app with, defaults to the global settings

    Returns:
        FastAPI application instance
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Render a matrix of packed colors as a PNG image",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url="/redoc" if settings.enable_docs else None,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_hosts,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):  # type: ignore
        """Add request ID to all requests."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response

    register_exception_handlers(app)

    app.include_router(render_router)
    app.include_router(health_router)

    return app


# Development server runner
def run_development_server() -> None:
    """Run development server with auto-reload."""
    settings = get_settings()
    uvicorn.run(
        "matrix_renderer.api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run_development_server()
