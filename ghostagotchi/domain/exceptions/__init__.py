"""
Domain exceptions package for Ghostagotchi.

Exports
-------
- Domain exception classes (defined in modules.shared.exceptions)
- EXCEPTION_TEMPLATES: Registry mapping exception types to response templates
"""

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

from .registry import EXCEPTION_TEMPLATES, ExceptionTemplate, get_exception_template

__all__ = [
    "GhostDomainException",
    "AuthError",
    "ConflictError",
    "InternalError",
    "MethodNotAllowedError",
    "NotFoundError",
    "RequestTimeoutError",
    "ValidationError",
    "ErrorSeverity",
    "EXCEPTION_TEMPLATES",
    "ExceptionTemplate",
    "get_exception_template",
]
