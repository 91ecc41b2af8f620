"""
Error Response Service for Ghostagotchi.

Purpose
-------
Turns domain and infrastructure exceptions into a transport-neutral error
description: status, short title, user-facing message, stable code, help
text and severity. The request boundary builds the error envelope from it;
the Discord layer builds an error embed from the same dict.

Non-Responsibilities
--------------------
- Logging (handled by the boundary and services)
- Exception creation or domain logic
- Discord embed creation (delegated to EmbedFactory)
"""

from __future__ import annotations

from typing import Any, Dict

from ghostagotchi.core.exceptions import GhostInfrastructureException
from ghostagotchi.domain.exceptions.registry import get_exception_template
from ghostagotchi.modules.shared.exceptions import ErrorSeverity, GhostDomainException


class ErrorResponseService:
    """
    Service for formatting exceptions into response descriptions.

    Separates what went wrong (the exception) from how it is communicated
    (status code, title and message).
    """

    async def format_error(self, error: Exception) -> Dict[str, Any]:
        """
        Format an exception into a response structure.

        Returns:
            Dict containing:
                - status: HTTP-style status code
                - error: Short error title ("Not Found")
                - message: User-facing description ("Pet not found")
                - code: Stable error code, when the exception carries one
                - help_text: Optional guidance for the user
                - severity: ErrorSeverity for styling

        Example:
            >>> response = await error_service.format_error(NotFoundError("Pet"))
            >>> response["status"], response["error"], response["message"]
            (404, 'Not Found', 'Pet not found')
        """
        template = get_exception_template(error)

        if template is None:
            return self._format_fallback_error(error)

        formatted = template.format(error)
        return {
            "status": formatted["status"],
            "error": formatted["title"],
            "message": formatted["description"],
            "code": getattr(error, "error_code", None),
            "help_text": formatted["help_text"],
            "severity": formatted["severity"],
        }

    def _format_fallback_error(self, error: Exception) -> Dict[str, Any]:
        """Generic 500 for exceptions without a registered template."""
        if isinstance(error, (GhostDomainException, GhostInfrastructureException)):
            severity = error.severity
            code = error.error_code
        else:
            severity = ErrorSeverity.ERROR
            code = "INTERNAL_ERROR"

        return {
            "status": 500,
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "code": code,
            "help_text": "The issue has been logged. If this persists, contact support.",
            "severity": severity,
        }
