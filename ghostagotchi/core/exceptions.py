"""
Infrastructure exceptions for Ghostagotchi.

Purpose
-------
Define the exception hierarchy for infrastructure-level concerns: configuration
errors and language-model service failures. These are
engineering problems, never game rules.

Design Notes
------------
- All infrastructure exceptions inherit from `GhostInfrastructureException`.
- Each exception carries:
  - `message`: human-readable description
  - `details`: additional structured context (dict)
  - `severity`: `ErrorSeverity` value for logging/alerting
  - `is_retryable`: whether the operation can be retried
  - `error_code`: short, stable identifier for programmatic use
- The request boundary translates these into error envelopes; the chat
  orchestrator turns language-model failures into explicit outcomes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels for logging and alerting."""

    DEBUG = "debug"
    INFO = "info"  # validation failures, missing resources
    WARNING = "warning"  # handled but worth a look
    ERROR = "error"
    CRITICAL = "critical"


class GhostInfrastructureException(Exception):
    """
    Base exception for all Ghostagotchi infrastructure-level errors.

    Args:
        message: Human-readable error message
        details: Additional structured data about the error
        severity: Error severity level for logging handlers
        is_retryable: Whether the operation can be retried
        error_code: Optional code for programmatic handling

    Example:
        >>> raise GhostInfrastructureException(
        ...     "Database connection failed",
        ...     {"host": "localhost", "port": 5432}
        ... )
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


class ConfigurationError(GhostInfrastructureException):
    """
    Raised when a configuration key is invalid or missing.

    Args:
        config_key: The configuration key that has issues
        message: Description of the configuration problem
    """

    DEFAULT_SEVERITY = ErrorSeverity.CRITICAL

    def __init__(self, config_key: str, message: str) -> None:
        self.config_key = config_key
        super().__init__(
            f"Configuration error for {config_key}: {message}",
            details={"config_key": config_key, "message": message},
            error_code="CONFIG_ERROR",
        )


class ExternalServiceError(GhostInfrastructureException):
    """
    Raised when an external dependency (the language-model API) fails.

    Args:
        service: Name of the external service
        original_error: The underlying SDK or transport exception
    """

    DEFAULT_SEVERITY = ErrorSeverity.WARNING

    def __init__(
        self,
        service: str,
        original_error: Optional[Exception] = None,
        message: Optional[str] = None,
    ) -> None:
        self.service = service
        self.original_error = original_error
        reason = message or (str(original_error) if original_error else "request failed")
        super().__init__(
            f"{service} unavailable: {reason}",
            details={
                "service": service,
                "error": reason,
                "error_type": (
                    type(original_error).__name__ if original_error else None
                ),
            },
            error_code="EXTERNAL_SERVICE_ERROR",
        )


class LanguageModelTimeoutError(ExternalServiceError):
    """Raised when the language-model call exceeds its deadline."""

    def __init__(self, service: str, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            service,
            message=f"no response within {timeout_seconds:g}s",
        )
        self.details["timeout_seconds"] = timeout_seconds
        self.error_code = "LANGUAGE_MODEL_TIMEOUT"
