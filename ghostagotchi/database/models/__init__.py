"""
Database Models Package
=======================

SQLAlchemy ORM models for Ghostagotchi.

All models:
- Are schema-only, no business logic
- Use Mapped[] syntax with mapped_column()
- Inherit from the shared Base and mixins
- Declare explicit foreign keys with CASCADE rules

Importing this package registers every table on ``Base.metadata``.
"""

from ghostagotchi.core.database.base import Base

from .message import ChatMessage
from .pet import Pet
from .profile import Profile

__all__ = [
    "Base",
    "ChatMessage",
    "Pet",
    "Profile",
]
