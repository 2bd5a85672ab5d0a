"""Utility modules."""

from galleryblue.utils.error_handling import (
    AlreadyExistsError,
    AppException,
    AuthenticationError,
    InternalError,
    PermissionDeniedError,
    ResourceNotFoundError,
    ValidationError,
    format_exception_for_logging,
)
from galleryblue.utils.logging_config import setup_logging

__all__ = [
    # Error handling
    "AlreadyExistsError",
    "AppException",
    "AuthenticationError",
    "InternalError",
    "PermissionDeniedError",
    "ResourceNotFoundError",
    "ValidationError",
    "format_exception_for_logging",
    # Logging
    "setup_logging",
]
