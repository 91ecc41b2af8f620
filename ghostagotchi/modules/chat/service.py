"""
Chat Service
============

Purpose
-------
Lets an owner talk to their ghost through an external language model.

Flow
----
1. Validate the message (1 to 500 characters after trimming)
2. Load the owner's pet for the persona (NotFoundError if none)
3. Call the model once, bounded by ``Config.CHAT_TIMEOUT_SECONDS``
4. Resolve to a ``ChatOutcome``:
   - SUCCEEDED: the model's reply (or a fixed line for an empty completion)
   - TIMED_OUT: the deadline expired and the call was cancelled
   - DEGRADED: the model failed; an in-character fallback reply is returned
5. On success, store both lines of the exchange if enabled

Model failures never raise out of ``chat()``; only validation and a missing
pet do. Storage failures are logged and dropped.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

from ghostagotchi.core.database.service import DatabaseService
from ghostagotchi.core.exceptions import LanguageModelTimeoutError
from ghostagotchi.core.logging.logger import get_logger
from ghostagotchi.database.models import ChatMessage
from ghostagotchi.modules.chat.prompts import build_ghost_prompt
from ghostagotchi.modules.chat.repository import ChatMessageRepository
from ghostagotchi.modules.pet.repository import PetRepository
from ghostagotchi.modules.shared.base_service import BaseService
from ghostagotchi.modules.shared.exceptions import NotFoundError
from ghostagotchi.modules.shared.validators import InputValidator

if TYPE_CHECKING:
    from logging import Logger

    from ghostagotchi.core.config.config import Config
    from ghostagotchi.core.llm.client import LanguageModelClient


MESSAGE_MAX_LENGTH = 500

EMPTY_COMPLETION_REPLY = "Boo! 👻 I seem to have lost my voice for a moment. Try again?"
DEGRADED_REPLY = "Oops! 👻 My ghostly connection got a bit fuzzy. Can you say that again?"
DEGRADED_ERROR = "OpenAI API temporarily unavailable"
TIMEOUT_MESSAGE = "The ghost is taking too long to respond. Please try again."


class ChatStatus(str, Enum):
    SUCCEEDED = "succeeded"
    TIMED_OUT = "timed_out"
    DEGRADED = "degraded"


@dataclass(frozen=True)
class ChatOutcome:
    """
    Terminal state of one chat request.

    ``reply`` is empty for TIMED_OUT; ``error`` is set only for DEGRADED.
    """

    status: ChatStatus
    pet_name: str
    reply: str = ""
    tokens_used: int = 0
    error: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"reply": self.reply, "pet_name": self.pet_name}
        if self.status is ChatStatus.DEGRADED:
            payload["error"] = self.error
        else:
            payload["tokens_used"] = self.tokens_used
        return payload


def validate_message(message: Any) -> str:
    return InputValidator.validate_text(
        message,
        field_name="message",
        label="Message",
        max_length=MESSAGE_MAX_LENGTH,
    )


class ChatService(BaseService):
    """
    Chat orchestrator.

    Public Methods
    --------------
    - chat() -> ChatOutcome for one owner message
    """

    def __init__(
        self,
        config: type[Config],
        logger: Logger,
        llm: LanguageModelClient,
    ) -> None:
        super().__init__(config, logger)
        self._llm = llm
        self._pets = PetRepository(logger=get_logger(f"{__name__}.PetRepository"))
        self._messages = ChatMessageRepository(
            logger=get_logger(f"{__name__}.ChatMessageRepository")
        )

    async def chat(self, owner_id: str, message: Any) -> ChatOutcome:
        """
        Send ``message`` to the owner's ghost.

        Raises:
            ValidationError: Message is blank or longer than 500 characters
            NotFoundError: The owner has no pet
        """
        text = validate_message(message)

        self.log_operation("chat", owner_id=owner_id, message_length=len(text))

        async with DatabaseService.get_session() as session:
            pet = await self._pets.find_by_owner(session, owner_id)
            if pet is None:
                raise NotFoundError("Pet")
            pet_id, pet_name = pet.id, pet.name

        timeout = self.get_config("CHAT_TIMEOUT_SECONDS", 10.0)

        try:
            completion = await asyncio.wait_for(
                self._llm.complete(
                    build_ghost_prompt(pet_name, text),
                    max_tokens=self.get_config("CHAT_MAX_TOKENS", 150),
                    temperature=self.get_config("CHAT_TEMPERATURE", 0.8),
                    presence_penalty=self.get_config("CHAT_PRESENCE_PENALTY", 0.6),
                    frequency_penalty=self.get_config("CHAT_FREQUENCY_PENALTY", 0.3),
                ),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, LanguageModelTimeoutError):
            self.log.warning(
                "Chat model call timed out",
                extra={"owner_id": owner_id, "timeout_seconds": timeout},
            )
            return ChatOutcome(status=ChatStatus.TIMED_OUT, pet_name=pet_name)
        except Exception as exc:
            self.log_error("chat", exc, owner_id=owner_id)
            return ChatOutcome(
                status=ChatStatus.DEGRADED,
                pet_name=pet_name,
                reply=DEGRADED_REPLY,
                error=DEGRADED_ERROR,
            )

        reply = completion.text or EMPTY_COMPLETION_REPLY

        if self.get_config("CHAT_STORE_MESSAGES", True):
            await self._store_exchange(pet_id, text, reply)

        return ChatOutcome(
            status=ChatStatus.SUCCEEDED,
            pet_name=pet_name,
            reply=reply,
            tokens_used=completion.total_tokens,
        )

    async def _store_exchange(self, pet_id: str, text: str, reply: str) -> None:
        """Persist both sides of the exchange; never raises."""
        try:
            async with DatabaseService.get_transaction() as session:
                self._messages.create(session, pet_id, ChatMessage.SENDER_USER, text)
                self._messages.create(session, pet_id, ChatMessage.SENDER_GHOST, reply)
        except Exception as exc:
            self.log.warning(
                "Failed to store chat messages",
                extra={
                    "pet_id": pet_id,
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                },
            )


__all__ = [
    "ChatOutcome",
    "ChatService",
    "ChatStatus",
    "DEGRADED_ERROR",
    "DEGRADED_REPLY",
    "EMPTY_COMPLETION_REPLY",
    "TIMEOUT_MESSAGE",
]
