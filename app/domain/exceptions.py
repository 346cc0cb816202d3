"""Domain exceptions for the EarProbe media service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class EarProbeException(Exception):
    """Base exception for all EarProbe application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

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
        """Return the JSON body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(EarProbeException):
    """Raised when input validation fails (empty message, bad image encoding, missing field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(EarProbeException):
    """Raised when the caller cannot be verified (missing, invalid or expired token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ResourceNotFoundException(EarProbeException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'media', 'patient', 'identity').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AccessDeniedException(EarProbeException):
    """Raised when an identity lacks the permission required for a media operation.

    The API surfaces this exactly like ResourceNotFoundException so that
    unauthorized callers cannot probe for the existence of records. The
    resource and action are kept in details for logging only.
    """

    def __init__(self, resource_type: str, resource_id: str, action: str) -> None:
        super().__init__(
            f"Permission denied: {action} on {resource_type} {resource_id}",
            "ACCESS_DENIED",
            {
                "resource_type": resource_type,
                "resource_id": resource_id,
                "action": action,
            },
        )
        self.resource_type = resource_type
        self.resource_id = resource_id

    def as_not_found(self) -> ResourceNotFoundException:
        """Return the not-found equivalent shown to the caller."""
        return ResourceNotFoundException(self.resource_type, self.resource_id)


class StorageUnavailableException(EarProbeException):
    """Raised when neither the primary nor the fallback storage tier accepted the bytes."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Image could not be saved; storage is unavailable",
            "STORAGE_UNAVAILABLE",
            {"reason": reason},
        )
