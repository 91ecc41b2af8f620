"""
Domain exceptions for Ghostagotchi.

Purpose
-------
Define the domain-specific exception hierarchy. Services raise these for
business rule violations and caller mistakes; the request boundary turns them
into error envelopes through the exception registry.

Design Notes
------------
- All domain exceptions inherit from `GhostDomainException`.
- Each exception carries:
  - `message`: human-readable description (for logs)
  - `details`: structured context used by the registry templates
  - `severity`: `ErrorSeverity` value for logging
  - `is_retryable`: whether the caller may retry unchanged
  - `error_code`: short, stable identifier for programmatic use
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ghostagotchi.core.exceptions import ErrorSeverity


class GhostDomainException(Exception):
    """
    Base exception for all Ghostagotchi domain-level errors.

    Args:
        message: Human-readable error message
        details: Additional structured data about the error
        severity: Error severity level for logging handlers
        is_retryable: Whether the operation can be retried
        error_code: Optional code for programmatic handling
    """

    DEFAULT_SEVERITY: ErrorSeverity = ErrorSeverity.ERROR
    DEFAULT_RETRYABLE: bool = False

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[ErrorSeverity] = None,
        is_retryable: Optional[bool] = None,
        error_code: Optional[str] = None,
    ) -> None:
        self.message: str = message
        self.details: Dict[str, Any] = details or {}
        self.severity: ErrorSeverity = severity or self.DEFAULT_SEVERITY
        self.is_retryable: bool = (
            is_retryable if is_retryable is not None else self.DEFAULT_RETRYABLE
        )
        self.error_code: str = error_code or self.__class__.__name__
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
        }

    def __str__(self) -> str:
        details_str = f" | Details: {self.details}" if self.details else ""
        return f"[{self.error_code}] {self.message}{details_str}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"severity={self.severity.value!r}, "
            f"is_retryable={self.is_retryable!r}"
            ")"
        )


class NotFoundError(GhostDomainException):
    """
    Raised when a requested resource does not exist.

    Args:
        resource_type: Type of resource (e.g., "Pet", "Route")
        identifier: Optional identifier for the missing resource
    """

    DEFAULT_SEVERITY = ErrorSeverity.INFO

    def __init__(self, resource_type: str, identifier: Optional[Any] = None) -> None:
        self.resource_type = resource_type
        self.identifier = identifier

        if identifier is not None:
            message = f"{resource_type} not found: {identifier}"
        else:
            message = f"{resource_type} not found"

        super().__init__(
            message,
            details={
                "resource_type": resource_type,
                "identifier": identifier,
            },
            error_code=f"{resource_type.upper()}_NOT_FOUND",
        )


class ValidationError(GhostDomainException):
    """
    Raised when caller input fails domain validation.

    Args:
        field: Name of the field that failed validation
        message: User-facing explanation of why validation failed
    """

    DEFAULT_SEVERITY = ErrorSeverity.INFO

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.validation_message = message
        super().__init__(
            f"Validation error for {field}: {message}",
            details={
                "field": field,
                "validation_message": message,
            },
            error_code=f"VALIDATION_{field.upper()}",
        )


class ConflictError(GhostDomainException):
    """
    Raised when a uniqueness rule would be violated.

    Args:
        resource_type: Resource whose uniqueness is at stake ("Pet", "Username")
        reason: User-facing explanation
    """

    DEFAULT_SEVERITY = ErrorSeverity.INFO

    def __init__(self, resource_type: str, reason: str) -> None:
        self.resource_type = resource_type
        self.reason = reason
        super().__init__(
            f"{resource_type} conflict: {reason}",
            details={"resource_type": resource_type, "reason": reason},
            error_code=f"{resource_type.upper()}_CONFLICT",
        )


class AuthError(GhostDomainException):
    """Raised when a request carries no usable identity."""

    DEFAULT_SEVERITY = ErrorSeverity.INFO

    def __init__(self, reason: str = "Authentication required") -> None:
        self.reason = reason
        super().__init__(
            f"Unauthorized: {reason}",
            details={"reason": reason},
            error_code="UNAUTHORIZED",
        )


class MethodNotAllowedError(GhostDomainException):
    """Raised when a known route is called with an unsupported method."""

    DEFAULT_SEVERITY = ErrorSeverity.INFO

    def __init__(self, method: str, path: str) -> None:
        self.method = method
        self.path = path
        super().__init__(
            f"Method {method} not allowed on {path}",
            details={"method": method, "path": path},
            error_code="METHOD_NOT_ALLOWED",
        )


class RequestTimeoutError(GhostDomainException):
    """Raised when a bounded operation ran out of time."""

    DEFAULT_SEVERITY = ErrorSeverity.WARNING
    DEFAULT_RETRYABLE = True

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(
            f"{operation} timed out: {reason}",
            details={"operation": operation, "reason": reason},
            error_code="REQUEST_TIMEOUT",
        )


class InternalError(GhostDomainException):
    """
    Wraps an unexpected failure with an operation-specific public message.

    The original exception is kept as ``__cause__`` and never shown to callers.
    """

    DEFAULT_SEVERITY = ErrorSeverity.ERROR

    def __init__(self, operation: str, public_message: str) -> None:
        self.operation = operation
        self.public_message = public_message
        super().__init__(
            f"Unexpected failure during {operation}",
            details={"operation": operation, "public_message": public_message},
            error_code="INTERNAL_ERROR",
        )
