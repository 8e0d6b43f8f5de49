"""Error types raised by the badge store and rendered by the API."""

from typing import Any, Dict, Optional

from .schemas import ErrorResponse


def error_envelope(message: str, error: Optional[str] = None) -> Dict[str, Any]:
    """Failure body shared by every error path; ``error`` is dropped when unset."""
    return ErrorResponse(message=message, error=error).model_dump(exclude_none=True)


class BadgeError(Exception):
    """Base error carrying an HTTP status and a client-facing message."""

    status_code: int = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error


class ValidationError(BadgeError):
    """Required input missing or nothing to do."""

    status_code = 400


class NotFoundError(BadgeError):
    """No badge matches the requested id."""

    status_code = 404

    def __init__(self, message: str = "Badge not found", error: Optional[str] = None):
        super().__init__(message, error)


class StorageError(BadgeError):
    """The database rejected or failed to run a statement."""

    status_code = 500
