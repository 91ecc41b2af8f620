"""
Pet: the single ghost owned by a profile.
Schema only; stat rules live in ghostagotchi.domain.models.pet.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    CheckConstraint,
    ColumnElement,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ghostagotchi.core.database.base import Base, TimestampMixin

if TYPE_CHECKING:
    from .message import ChatMessage
    from .profile import Profile


def _new_pet_id() -> str:
    return str(uuid.uuid4())


class Pet(Base, TimestampMixin):
    """
    Ghost pet.

    Schema-only:
    - id: opaque UUID string
    - owner_id: FK to profiles.id, unique (one pet per owner)
    - name, experience, hunger, mood
    - last_fed_at / last_played_at: advisory timestamps
    - created_at (from TimestampMixin): basis for the leaderboard age

    ``level`` is not a column. It is derived from experience on the instance
    and as a SQL expression for ordering.
    """

    __tablename__ = "pets"
    __table_args__ = (
        Index("ix_pets_owner_id", "owner_id", unique=True),
        Index("ix_pets_ranking", "experience", "created_at"),
        CheckConstraint("experience >= 0", name="ck_pets_experience_non_negative"),
        CheckConstraint("hunger BETWEEN 0 AND 100", name="ck_pets_hunger_range"),
        CheckConstraint("mood BETWEEN 0 AND 100", name="ck_pets_mood_range"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_pet_id)
    owner_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    hunger: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    mood: Mapped[int] = mapped_column(Integer, nullable=False, default=100)

    last_fed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    last_played_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    profile: Mapped["Profile"] = relationship("Profile", back_populates="pet")
    messages: Mapped[List["ChatMessage"]] = relationship(
        "ChatMessage",
        back_populates="pet",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @hybrid_property
    def level(self) -> int:
        return self.experience // 100 + 1

    @level.inplace.expression
    @classmethod
    def _level_expression(cls) -> ColumnElement[int]:
        return cls.experience // 100 + 1
