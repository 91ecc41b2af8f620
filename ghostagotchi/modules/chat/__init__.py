"""Chat module: talk to your ghost through the language model."""

from .prompts import build_ghost_prompt
from .repository import ChatMessageRepository
from .service import ChatOutcome, ChatService, ChatStatus

__all__ = [
    "ChatMessageRepository",
    "ChatOutcome",
    "ChatService",
    "ChatStatus",
    "build_ghost_prompt",
]
