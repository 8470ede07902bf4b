"""
Common API response models.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ErrorResponse(BaseModel):
    """Standard API error response."""

    success: bool = Field(default=False, description="Always false for errors")
    message: str = Field(..., description="Error message")
    error: Any | None = Field(None, description="Detailed error information")
    error_code: str | None = Field(None, description="Error code for programmatic handling")
    timestamp: str = Field(default_factory=_timestamp, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Health check message")
    version: str | None = Field(None, description="Service version")
    uptime: float | None = Field(None, description="Service uptime in seconds")
    dependencies: dict[str, str] | None = Field(None, description="Dependency status")
