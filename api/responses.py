"""
Standardized API response models.
Error bodies are produced by the handlers in api.middleware; these models
document them in the OpenAPI schema.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    """Detailed error information"""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    details: Optional[Any] = Field(None, description="Additional error details")


class ErrorResponse(BaseModel):
    """Standardized error response"""

    success: bool = Field(False, description="Always false for errors")
    error: ErrorDetail = Field(..., description="Error details")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")
    database: Optional[str] = Field(None, description="Database connectivity")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")


class DeletedResponse(BaseModel):
    status: str = "ok"
    deleted: str


# Shared `responses=` entries for routers
COMMON_ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing or unknown coach"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
}
