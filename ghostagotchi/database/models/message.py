"""
ChatMessage: one line of a conversation between an owner and their ghost.
Schema only. Rows are written best-effort by the chat service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ghostagotchi.core.database.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from .pet import Pet


class ChatMessage(Base, IdMixin, TimestampMixin):
    """
    Stored chat line.

    Schema-only:
    - pet_id (FK to pets)
    - sender: "user" or "ghost"
    - message: the text as sent or received
    """

    SENDER_USER = "user"
    SENDER_GHOST = "ghost"

    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_pet_created", "pet_id", "created_at"),
        CheckConstraint("sender IN ('user', 'ghost')", name="ck_messages_sender"),
    )

    pet_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender: Mapped[str] = mapped_column(String(10), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    pet: Mapped["Pet"] = relationship("Pet", back_populates="messages")
