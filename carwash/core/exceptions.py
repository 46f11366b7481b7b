"""
Domain exceptions.
Raised by services and turned into {"success": false, ...} responses by the
handlers in carwash.core.error_handlers.
"""
from typing import Any, List, Optional


class ApiError(Exception):
    """Base class for errors that carry an HTTP status and a client-facing message"""

    status_code: int = 500
    code: Optional[str] = None

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class BadRequestError(ApiError):
    """Malformed or out-of-range input (past dates, beyond booking window, ...)"""
    status_code = 400


class UnauthorizedError(ApiError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized", errors: Optional[List[Any]] = None):
        super().__init__(message, errors)


class ForbiddenError(ApiError):
    status_code = 403

    def __init__(self, message: str = "Forbidden", errors: Optional[List[Any]] = None):
        super().__init__(message, errors)


class NotFoundError(ApiError):
    """Entity is absent or not owned by the caller"""
    status_code = 404

    def __init__(self, message: str = "Resource not found", errors: Optional[List[Any]] = None):
        super().__init__(message, errors)


class ConflictError(ApiError):
    """Duplicate unique fields or conflicting state"""
    status_code = 409


class SlotUnavailableError(ConflictError):
    """The requested slot has no free staff at admission time"""
    code = "SLOT_UNAVAILABLE"
