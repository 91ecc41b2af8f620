"""
Ghostagotchi Shared Module

Domain-level foundations for the feature modules:
- BaseService: logging and config access for services
- BaseRepository: type-safe database access patterns
- Domain exceptions: caller-facing errors and business rule violations
- InputValidator: request field validation with structured error raising
"""

from __future__ import annotations

from .base_repository import BaseRepository
from .base_service import BaseService
from .exceptions import (
    AuthError,
    ConflictError,
    GhostDomainException,
    InternalError,
    MethodNotAllowedError,
    NotFoundError,
    RequestTimeoutError,
    ValidationError,
)
from .validators import InputValidator

__all__ = [
    "BaseRepository",
    "BaseService",
    "GhostDomainException",
    "AuthError",
    "ConflictError",
    "InternalError",
    "MethodNotAllowedError",
    "NotFoundError",
    "RequestTimeoutError",
    "ValidationError",
    "InputValidator",
]
