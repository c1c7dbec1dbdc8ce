"""Domain exceptions for the Mr Cars admin dashboard.

Defines domain-level exceptions that represent business rule violations
and failed collaborator calls. Presentation layer maps them to HTTP
responses in exception handlers.

Fan-out query failures are not exceptions at this level: aggregators
degrade them to zero/empty results. Mutation failures surface as
MutationOutcome values and only become MutationFailedException at the
HTTP boundary.
"""

from typing import Any


class DashboardException(Exception):
    """Base exception for all dashboard application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DashboardException):
    """Raised when input validation fails (e.g. unknown status or field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(DashboardException):
    """Raised when no valid session accompanies a request."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthProviderException(DashboardException):
    """Raised when the auth provider rejects a call (reset link, sign-out).

    The message is the provider's own text so it can be shown to the user.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        details = {"provider_status": status_code} if status_code else {}
        super().__init__(message, "AUTH_PROVIDER_ERROR", details)


class ResourceNotFoundException(DashboardException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'notification', 'orders').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class StoreException(DashboardException):
    """Raised by the collection store client when a remote call fails."""

    def __init__(
        self,
        message: str,
        collection: str | None = None,
        status_code: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if collection:
            details["collection"] = collection
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, "STORE_ERROR", details)


class MutationFailedException(DashboardException):
    """Raised at the HTTP boundary when a gateway write was rejected remotely."""

    def __init__(self, message: str, reason: str | None = None) -> None:
        details = {"reason": reason} if reason else {}
        super().__init__(message, "REMOTE_WRITE_FAILED", details)


class RealtimeNotConfiguredException(DashboardException):
    """Raised when a realtime endpoint is called but its secret is not configured."""

    def __init__(self) -> None:
        super().__init__(
            "Database webhook is not configured (DB_WEBHOOK_SECRET is not set).",
            "SERVICE_UNAVAILABLE",
        )
