"""Centralized exception hierarchy for the application.

All custom exceptions inherit from AppException, which provides:
- A fixed error kind (one of the six categories every endpoint reports)
- HTTP status code derived from the kind
- Machine-readable error code
- Optional details dict for additional context

Exception handlers in main.py convert these to JSON envelopes of the form
``{"success": false, "error_code": ..., "message": ..., "details": ...}``.
"""

from enum import Enum
from typing import Any

from locals_api.core.repository import RepositoryError, RepositoryErrorKind


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class AppException(Exception):
    """Base exception for all application errors.

    Provides a consistent structure for error responses with:
    - message: Human-readable error description
    - error_code: Machine-readable code (e.g., "AUTH_FAILED")
    - kind: Error category, which fixes the HTTP status code
    - details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        kind: ErrorKind = ErrorKind.INTERNAL,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.kind = kind
        self.details = details or {}
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the error envelope for JSON serialization."""
        return {
            "success": False,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidInputError(AppException):
    """Request is malformed or violates a business rule on its input."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        payload = dict(details or {})
        if field:
            payload["field"] = field
        super().__init__(message, "INVALID_INPUT", ErrorKind.INVALID_INPUT, payload)


class AuthenticationError(AppException):
    """User authentication failed (invalid credentials, expired token, etc.)."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, "AUTH_FAILED", ErrorKind.UNAUTHORIZED)


class AuthorizationError(AppException):
    """User is authenticated but lacks permission for this action."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message, "FORBIDDEN", ErrorKind.FORBIDDEN)


class ResourceNotFoundError(AppException):
    """Requested resource does not exist."""

    def __init__(self, resource: str, identifier: str | None = None):
        msg = f"{resource} not found"
        if identifier:
            msg = f"{resource} not found: {identifier}"
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            ErrorKind.NOT_FOUND,
            {"resource": resource, "id": identifier}
            if identifier
            else {"resource": resource},
        )


class ResourceExistsError(AppException):
    """Resource already exists (duplicate key, unique constraint violation)."""

    def __init__(self, resource: str, field: str | None = None):
        msg = f"{resource} already exists"
        if field:
            msg = f"{resource} with this {field} already exists"
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_EXISTS",
            ErrorKind.CONFLICT,
            {"resource": resource, "field": field} if field else {"resource": resource},
        )


class InternalError(AppException):
    """Unexpected failure; the message never carries engine internals."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, "INTERNAL_ERROR", ErrorKind.INTERNAL)


def from_repository_error(
    error: RepositoryError,
    *,
    resource: str,
    unique_field: str | None = None,
    operation: str = "process",
) -> AppException:
    """Translate a repository failure into the application taxonomy.

    Unique violations become conflicts, foreign key violations become
    invalid input, anything else is an internal error with a generic message.
    """
    if error.kind is RepositoryErrorKind.UNIQUE_VIOLATION:
        return ResourceExistsError(resource, unique_field)
    if error.kind is RepositoryErrorKind.FOREIGN_KEY_VIOLATION:
        return InvalidInputError(
            f"Cannot {operation} {resource.lower()}: "
            "it is referenced by other records"
        )
    return InternalError(f"Failed to {operation} {resource.lower()}")
