from typing import Any, Mapping, Optional


class CoachDeskError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Internal error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(CoachDeskError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"


class UnauthorizedError(CoachDeskError):
    """Raised when the calling coach cannot be identified."""

    http_status = 401
    default_message = "Unauthorized"


class ForbiddenError(CoachDeskError):
    """Raised when the caller is known but may not touch the resource."""

    http_status = 403
    default_message = "Forbidden"


class NotFoundError(CoachDeskError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"


class ConflictError(CoachDeskError):
    """Raised when a resource conflict occurs (e.g., duplicate entry)."""

    http_status = 409
    default_message = "Conflict"


class ExternalServiceError(CoachDeskError):
    """Raised when an upstream service (Open Food Facts) fails or times out."""

    http_status = 503
    default_message = "External service unavailable"
