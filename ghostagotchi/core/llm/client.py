"""
Language-model client.

Thin async wrapper over the OpenAI chat completions API. The wrapper makes
exactly one HTTP attempt per call (``max_retries=0``) and translates SDK
failures into infrastructure exceptions so callers never import ``openai``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from ghostagotchi.core.exceptions import (
    ExternalServiceError,
    LanguageModelTimeoutError,
)
from ghostagotchi.core.logging.logger import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "OpenAI"


@dataclass(frozen=True)
class ChatPrompt:
    """One role-tagged message of a chat prompt."""

    role: str
    content: str

    def as_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class Completion:
    """Result of a completion call: generated text plus token accounting."""

    text: str
    total_tokens: int
    model: str


class LanguageModelClient:
    """
    Async chat-completion client.

    Args:
        api_key: OpenAI API key
        model: Chat model name
        request_timeout: Transport-level timeout in seconds
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        request_timeout: Optional[float] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self.model = model
        self._timeout = request_timeout

        client_kwargs: Dict[str, Any] = {"api_key": api_key, "max_retries": 0}
        if request_timeout is not None:
            client_kwargs["timeout"] = request_timeout

        self._client = client or AsyncOpenAI(**client_kwargs)

    async def complete(
        self,
        messages: List[ChatPrompt],
        *,
        max_tokens: int,
        temperature: float,
        presence_penalty: float = 0.0,
        frequency_penalty: float = 0.0,
    ) -> Completion:
        """
        Run one chat completion.

        Raises:
            LanguageModelTimeoutError: The SDK gave up waiting for a response
            ExternalServiceError: Any other failure, including a malformed response
        """
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[m.as_dict() for m in messages],
                max_tokens=max_tokens,
                temperature=temperature,
                presence_penalty=presence_penalty,
                frequency_penalty=frequency_penalty,
            )
            text = ""
            if response.choices:
                text = response.choices[0].message.content or ""
            total_tokens = response.usage.total_tokens if response.usage else 0
        except openai.APITimeoutError as exc:
            logger.warning(
                "Language model request timed out",
                extra={"model": self.model, "timeout": self._timeout},
            )
            raise LanguageModelTimeoutError(SERVICE_NAME, self._timeout or 0.0) from exc
        except Exception as exc:
            logger.warning(
                "Language model request failed",
                extra={
                    "model": self.model,
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                },
            )
            raise ExternalServiceError(SERVICE_NAME, exc) from exc

        logger.debug(
            "Language model completion received",
            extra={"model": self.model, "total_tokens": total_tokens},
        )

        return Completion(text=text, total_tokens=total_tokens, model=self.model)

    async def close(self) -> None:
        await self._client.close()
