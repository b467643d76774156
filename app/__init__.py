"""
App package - Application configuration and core utilities.
Contains settings and the service-layer exception hierarchy.
"""

from app.config import settings
from app.exceptions import (
    CoachDeskError,
    ServiceValidationError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    ExternalServiceError,
)

__all__ = [
    "settings",
    "CoachDeskError",
    "ServiceValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "ExternalServiceError",
]
