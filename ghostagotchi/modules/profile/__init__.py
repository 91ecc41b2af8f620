"""Profile module: the owner's public username."""

from .repository import ProfileRepository
from .service import ProfileService

__all__ = ["ProfileRepository", "ProfileService"]
