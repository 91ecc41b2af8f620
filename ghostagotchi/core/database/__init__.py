"""
Database subsystem for Ghostagotchi.

Provides the async SQLAlchemy engine, session management and health checks,
plus the ORM base classes and mixins for model definitions.
"""

from ghostagotchi.core.database.base import (
    Base,
    IdMixin,
    TimestampMixin,
    utc_now,
)
from ghostagotchi.core.database.service import (
    DatabaseInitializationError,
    DatabaseNotInitializedError,
    DatabaseService,
)

__all__ = [
    # ORM Base & Mixins
    "Base",
    "IdMixin",
    "TimestampMixin",
    "utc_now",
    # Main service
    "DatabaseService",
    # Exceptions
    "DatabaseInitializationError",
    "DatabaseNotInitializedError",
]
