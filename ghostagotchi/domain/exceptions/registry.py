"""
Exception template registry for Ghostagotchi.

Purpose
-------
Single source of truth for exception-to-response mappings. Each template
carries the HTTP-style status and short title used in the error envelope, a
message template interpolated from the exception's ``details``, optional
help text for the Discord embed, and a severity for styling.

Lookup walks the exception's MRO, so a subclass without its own entry uses
its parent's template.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ghostagotchi.core.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    GhostInfrastructureException,
    LanguageModelTimeoutError,
)
from ghostagotchi.modules.shared.exceptions import (
    AuthError,
    ConflictError,
    ErrorSeverity,
    GhostDomainException,
    InternalError,
    MethodNotAllowedError,
    NotFoundError,
    RequestTimeoutError,
    ValidationError,
)


class ExceptionTemplate:
    """Template for formatting exception messages."""

    def __init__(
        self,
        status: int,
        title: str,
        template: str,
        help_text: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        self.status = status
        self.title = title
        self.template = template
        self.help_text = help_text
        self.severity = severity

    def format(self, exception: Exception) -> Dict[str, Any]:
        """
        Format exception using template.

        Returns:
            Dict with 'status', 'title', 'description', 'help_text', 'severity'
        """
        details = {}
        if isinstance(exception, (GhostDomainException, GhostInfrastructureException)):
            details = exception.details.copy()

        try:
            description = self.template.format(**details)
        except KeyError:
            description = str(exception)

        return {
            "status": self.status,
            "title": self.title,
            "description": description,
            "help_text": self.help_text,
            "severity": self.severity,
        }


# ============================================================================
# EXCEPTION TEMPLATE REGISTRY
# ============================================================================

EXCEPTION_TEMPLATES: Dict[type, ExceptionTemplate] = {
    # Domain Exceptions
    ValidationError: ExceptionTemplate(
        status=400,
        title="Bad Request",
        template="{validation_message}",
        help_text="Please check your input and try again.",
        severity=ErrorSeverity.INFO,
    ),
    AuthError: ExceptionTemplate(
        status=401,
        title="Unauthorized",
        template="{reason}",
        severity=ErrorSeverity.INFO,
    ),
    NotFoundError: ExceptionTemplate(
        status=404,
        title="Not Found",
        template="{resource_type} not found",
        severity=ErrorSeverity.INFO,
    ),
    MethodNotAllowedError: ExceptionTemplate(
        status=405,
        title="Method Not Allowed",
        template="Method {method} not allowed",
        severity=ErrorSeverity.INFO,
    ),
    RequestTimeoutError: ExceptionTemplate(
        status=408,
        title="Request Timeout",
        template="{reason}",
        help_text="Give it a moment and try again.",
        severity=ErrorSeverity.WARNING,
    ),
    ConflictError: ExceptionTemplate(
        status=409,
        title="Conflict",
        template="{reason}",
        severity=ErrorSeverity.INFO,
    ),
    InternalError: ExceptionTemplate(
        status=500,
        title="Internal Server Error",
        template="{public_message}",
        help_text="The issue has been logged. If this persists, contact support.",
        severity=ErrorSeverity.ERROR,
    ),
    # Infrastructure Exceptions
    LanguageModelTimeoutError: ExceptionTemplate(
        status=408,
        title="Request Timeout",
        template="The ghost is taking too long to respond. Please try again.",
        severity=ErrorSeverity.WARNING,
    ),
    ExternalServiceError: ExceptionTemplate(
        status=500,
        title="Internal Server Error",
        template="The {service} service is temporarily unavailable.",
        severity=ErrorSeverity.ERROR,
    ),
    ConfigurationError: ExceptionTemplate(
        status=500,
        title="Internal Server Error",
        template="A system configuration error occurred. Please contact support.",
        help_text="Error code: CONFIG_ERROR",
        severity=ErrorSeverity.CRITICAL,
    ),
}


def get_exception_template(exception: Exception) -> Optional[ExceptionTemplate]:
    """
    Get the template for an exception, falling back along its MRO.

    Returns:
        ExceptionTemplate if found, None otherwise
    """
    for exception_type in type(exception).__mro__:
        template = EXCEPTION_TEMPLATES.get(exception_type)
        if template is not None:
            return template
    return None
