"""
Domain errors raised by the feed engine and campus stores.

Each error carries the HTTP status and error code the API layer reports, so
routes can let them propagate to the exception handler in ``main``.
"""
from typing import Any, Dict, Optional


class UniHubError(Exception):
    """Base class for all expected, request-scoped failures."""

    status_code = 400
    error_code = "BAD_REQUEST"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(UniHubError):
    """Empty content, unknown enum value or otherwise malformed input."""

    status_code = 422
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, {"field": field} if field else None)
        self.field = field


class NotAuthorized(UniHubError):
    """The caller does not own the record or lacks the role capability."""

    status_code = 403
    error_code = "FORBIDDEN"


class NotFound(UniHubError):
    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, id: Any = None):
        message = f"{resource} not found" if id is None else f"{resource} '{id}' not found"
        super().__init__(message)


class StorageError(UniHubError):
    """The database rejected or failed a statement."""

    status_code = 500
    error_code = "STORAGE_ERROR"
