"""Chat message repository: append-only writes to the ``messages`` table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghostagotchi.database.models import ChatMessage
from ghostagotchi.modules.shared.base_repository import BaseRepository

if TYPE_CHECKING:
    from logging import Logger

    from sqlalchemy.ext.asyncio import AsyncSession


class ChatMessageRepository(BaseRepository[ChatMessage]):
    """Repository for the ChatMessage model."""

    def __init__(self, logger: Logger) -> None:
        super().__init__(ChatMessage, logger)

    def create(
        self, session: AsyncSession, pet_id: str, sender: str, message: str
    ) -> ChatMessage:
        return self.add(
            session, ChatMessage(pet_id=pet_id, sender=sender, message=message)
        )
