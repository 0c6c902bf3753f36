"""Error handling module with RFC 7807 Problem Details."""

from taskgate.core.errors.exceptions import (
    AppException,
    NotFoundError,
    UnauthorizedError,
    UnknownPermissionError,
    ValidationError,
)


__all__ = [
    "AppException",
    "NotFoundError",
    "UnauthorizedError",
    "UnknownPermissionError",
    "ValidationError",
]
