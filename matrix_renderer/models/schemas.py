"""
Pydantic Models and Schemas
===========================

Request/response models for the HTTP layer and the pixSize parameter parser.
Request models only check the wire shape; the core Matrix enforces the
dimension invariant when a payload is converted.
"""

from typing import Optional, List, Dict, Any, Literal, Annotated
import re
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.types import StrictInt

from matrix_renderer.core.exceptions import InvalidInputError
from matrix_renderer.core.matrix import MAX_ENCODED_COLOR, Matrix


EncodedColor = Annotated[StrictInt, Field(ge=0, le=MAX_ENCODED_COLOR)]

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Request Models
class MatrixPayload(BaseModel):
    """JSON body of the render endpoints."""

    model_config = ConfigDict(extra="ignore")

    rows: StrictInt = Field(..., ge=1, description="Number of matrix rows")
    columns: StrictInt = Field(..., ge=1, description="Number of matrix columns")
    bitmap: List[EncodedColor] = Field(
        ..., description="Packed 0xRRGGBB colors, length rows * columns"
    )

    def to_matrix(self) -> Matrix:
        """Convert to the core model, validating bitmap length and value range."""
        return Matrix(rows=self.rows, columns=self.columns, bitmap=tuple(self.bitmap))


def parse_pixel_size(
    raw: Optional[str], default: int = 4, minimum: int = 1, maximum: int = 29
) -> int:
    """
    Parse the optional ``pixSize`` query parameter.

    Args:
        raw: Raw parameter value, None or empty when absent
        default: Value used when the parameter is absent
        minimum: Smallest accepted value
        maximum: Largest accepted value

    Returns:
        The validated pixel size

    Raises:
        InvalidInputError: If the value is not an integer within bounds
    """
    if raw is None or raw == "":
        return default

    # Plain ASCII decimal only: no whitespace, underscores or other digit sets
    size = int(raw) if INTEGER_PATTERN.fullmatch(raw) else None

    if size is None or size < minimum or size > maximum:
        raise InvalidInputError(
            f"Invalid pixSize parameter (should be an int between {minimum} and {maximum}): {raw}"
        )
    return size


# Health Check Models
class HealthStatus(BaseModel):
    """Health check status."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(..., description="Overall status")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")
    version: str = Field(..., description="Application version")
    render_modes: List[str] = Field(default_factory=list, description="Available render modes")


# Error Models
class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")


__all__ = [
    "MatrixPayload",
    "parse_pixel_size",
    "HealthStatus",
    "ErrorResponse",
]
