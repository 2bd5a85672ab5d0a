"""Application exception hierarchy.

Every caller-visible failure is raised as an ``AppException`` subclass. Each
subclass carries the Connect error code and the HTTP status the API layer
uses when rendering it, so services never deal with transport details.
"""
import traceback
from typing import Any


class AppException(Exception):
    """Base class for errors surfaced to API callers."""

    code = "internal"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_connect_error(self) -> dict[str, Any]:
        """Render as a Connect protocol error body."""
        return {"code": self.code, "message": self.message}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(AppException):
    """Malformed or missing input."""

    code = "invalid_argument"
    status_code = 400


class AuthenticationError(AppException):
    """Missing or invalid caller identity."""

    code = "unauthenticated"
    status_code = 401


class PermissionDeniedError(AppException):
    """Authenticated, but not allowed to touch the target resource."""

    code = "permission_denied"
    status_code = 403


class ResourceNotFoundError(AppException):
    """Referenced entity does not exist."""

    code = "not_found"
    status_code = 404


class AlreadyExistsError(AppException):
    """Uniqueness violation (email or display name)."""

    code = "already_exists"
    status_code = 409


class InternalError(AppException):
    """Persistence or infrastructure failure."""

    code = "internal"
    status_code = 500


def format_exception_for_logging(exc: BaseException) -> str:
    """Format an exception with its traceback for a single log record."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
