"""Domain exceptions for the access-control core.

Evaluation itself never raises: every authorization query has a boolean
answer. These exceptions cover the edges around it (an absent session,
malformed configuration, unknown routes) and are converted to RFC 7807
Problem Details responses by the exception handlers.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("Route not found", resource="route", resource_id=path)
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ValidationError(AppException):
    """Raised when configuration or request data fails validation.

    Example:
        raise ValidationError(
            "Invalid navigation config",
            errors=[{"field": "items.0.title", "message": "Field required"}]
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class UnknownPermissionError(ValidationError):
    """Raised when a requirement names permissions missing from the catalog.

    Example:
        raise UnknownPermissionError(["veiw tasks"], source="Tasks")
    """

    message = "Unknown permission name"
    error_code = "unknown_permission"

    def __init__(
        self,
        names: list[str],
        source: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        details["unknown_permissions"] = list(names)
        if source:
            details["source"] = source
        where = f" in {source!r}" if source else ""
        message = kwargs.pop(
            "message", f"Unknown permission(s){where}: {', '.join(names)}"
        )
        self.names = list(names)
        self.source = source
        super().__init__(message=message, details=details, **kwargs)


class UnauthorizedError(AppException):
    """Raised when an authenticated session is required but absent.

    Example:
        raise UnauthorizedError("No active session")
    """

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401

