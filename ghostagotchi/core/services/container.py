"""
Service Container
=================

Purpose
-------
Builds every domain service once, wires them into the request boundary and
hands them to the bot.

Responsibilities
----------------
- Construct the language-model client from Config
- Construct the pet, profile, chat and leaderboard services
- Construct the error formatter, auth provider and request boundary
- Close owned resources (the LLM HTTP client) on shutdown

Non-Responsibilities
--------------------
- Database lifecycle (DatabaseService is initialized by main.py)
- Bot lifecycle (GhostBot)
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Dict, Optional

from ghostagotchi.api.auth import DiscordAuthProvider
from ghostagotchi.api.boundary import RequestBoundary
from ghostagotchi.core.llm.client import LanguageModelClient
from ghostagotchi.core.logging.logger import get_logger
from ghostagotchi.core.services.error_response_service import ErrorResponseService
from ghostagotchi.modules.chat.service import ChatService
from ghostagotchi.modules.leaderboard.service import LeaderboardService
from ghostagotchi.modules.pet.service import PetService
from ghostagotchi.modules.profile.service import ProfileService

if TYPE_CHECKING:
    from logging import Logger

    from ghostagotchi.api.auth import AuthProvider
    from ghostagotchi.core.config.config import Config


_NOT_INITIALIZED = "ServiceContainer not initialized. Call initialize() first."


class ServiceContainer:
    """
    Dependency container for the domain services.

    Usage:
        container = ServiceContainer(Config, logger)
        await container.initialize()
        response = await container.boundary.handle(request)
    """

    def __init__(
        self,
        config: type[Config],
        logger: Logger,
        llm_client: Optional[LanguageModelClient] = None,
        auth_provider: Optional[AuthProvider] = None,
    ) -> None:
        self._config = config
        self._logger = logger

        self._llm: Optional[LanguageModelClient] = llm_client
        self._owns_llm = llm_client is None
        self._auth: AuthProvider = auth_provider or DiscordAuthProvider()

        self._pet: Optional[PetService] = None
        self._profile: Optional[ProfileService] = None
        self._chat: Optional[ChatService] = None
        self._leaderboard: Optional[LeaderboardService] = None
        self._errors: Optional[ErrorResponseService] = None
        self._boundary: Optional[RequestBoundary] = None

        self._initialized = False
        self._service_init_times: Dict[str, float] = {}

    # ========================================================================
    # Lifecycle
    # ========================================================================

    async def initialize(self) -> None:
        if self._initialized:
            self._logger.warning("ServiceContainer already initialized")
            return

        init_start = time.perf_counter()
        self._logger.info("Service container initialization starting...")

        try:
            if self._llm is None:
                self._llm = LanguageModelClient(
                    api_key=self._config.OPENAI_API_KEY,
                    model=self._config.OPENAI_MODEL,
                    request_timeout=self._config.CHAT_TIMEOUT_SECONDS,
                )

            self._pet = self._create_service("pet", PetService)
            self._profile = self._create_service("profile", ProfileService)
            self._leaderboard = self._create_service("leaderboard", LeaderboardService)
            self._chat = self._create_service("chat", ChatService, llm=self._llm)

            self._errors = ErrorResponseService()
            self._boundary = RequestBoundary(
                pet_service=self._pet,
                chat_service=self._chat,
                profile_service=self._profile,
                leaderboard_service=self._leaderboard,
                auth_provider=self._auth,
                error_service=self._errors,
            )

            self._initialized = True
            self._logger.info(
                "Service container initialized successfully",
                extra={
                    "total_time_seconds": round(time.perf_counter() - init_start, 3),
                    "service_count": len(self._service_init_times),
                },
            )
        except Exception as e:
            self._logger.critical(
                "Service container initialization failed - bot cannot start",
                exc_info=True,
                extra={"error": str(e)},
            )
            raise

    def _create_service(self, name: str, cls: type, **deps: Any) -> Any:
        """Instantiate a service with timing and its own logger."""
        start = time.perf_counter()
        try:
            instance = cls(
                config=self._config,
                logger=get_logger(f"{cls.__module__}.{cls.__name__}"),
                **deps,
            )
        except Exception:
            self._logger.error(f"Failed to initialize {name}", exc_info=True)
            raise

        duration = time.perf_counter() - start
        self._service_init_times[name] = duration
        self._logger.debug(f"Initialized {name} in {duration:.3f}s")
        return instance

    async def shutdown(self) -> None:
        if not self._initialized:
            return

        self._logger.info("Shutting down service container...")

        if self._owns_llm and self._llm is not None:
            await self._llm.close()

        self._initialized = False
        self._logger.info("Service container shut down")

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def boundary(self) -> RequestBoundary:
        if not self._initialized or self._boundary is None:
            raise RuntimeError(_NOT_INITIALIZED)
        return self._boundary

    @property
    def errors(self) -> ErrorResponseService:
        if not self._initialized or self._errors is None:
            raise RuntimeError(_NOT_INITIALIZED)
        return self._errors

    @property
    def pet(self) -> PetService:
        if not self._initialized or self._pet is None:
            raise RuntimeError(_NOT_INITIALIZED)
        return self._pet

    @property
    def chat(self) -> ChatService:
        if not self._initialized or self._chat is None:
            raise RuntimeError(_NOT_INITIALIZED)
        return self._chat
