"""
Profile: one per identity, carrying the optional public username.
Schema only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ghostagotchi.core.database.base import Base, TimestampMixin

if TYPE_CHECKING:
    from .pet import Pet


class Profile(Base, TimestampMixin):
    """
    Public identity record.

    Schema-only:
    - id: the owner identity string (primary key, not generated)
    - username: optional, globally unique when set
    """

    __tablename__ = "profiles"
    __table_args__ = (
        Index("ix_profiles_username", "username", unique=True),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    pet: Mapped[Optional["Pet"]] = relationship(
        "Pet",
        back_populates="profile",
        uselist=False,
    )
