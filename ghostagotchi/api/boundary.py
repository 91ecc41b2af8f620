"""
Request Boundary
================

Purpose
-------
Transport-neutral dispatcher in front of the services. Takes an
``ApiRequest``, returns an ``ApiResponse``; it never raises.

Pipeline
--------
1. Route lookup        -> 404 for an unknown path
2. Method check        -> 405 for a known path with the wrong method
3. Authentication      -> 401 when the route needs an owner and has none
4. Required fields     -> 400 "Missing required fields: ..."
5. Handler             -> success envelope
6. Exceptions          -> error envelope through ErrorResponseService;
                          anything unexpected is logged with its traceback
                          and answered with the route's 500 message

Routes
------
    GET  /pet           own pet with username
    POST /pet           adopt {name}
    POST /pet/feed      feed
    POST /pet/play      play
    POST /chat          chat {message}
    GET  /profile       own profile
    POST /profile       set username {username}
    GET  /leaderboard   public ranking ?limit=
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Dict, Optional, Tuple

from ghostagotchi.api.envelope import ApiRequest, ApiResponse, error, success
from ghostagotchi.core.logging.logger import LogContext, get_logger
from ghostagotchi.modules.chat.service import TIMEOUT_MESSAGE, ChatStatus
from ghostagotchi.modules.shared.exceptions import (
    GhostDomainException,
    InternalError,
    MethodNotAllowedError,
    NotFoundError,
    RequestTimeoutError,
    ValidationError,
)
from ghostagotchi.modules.shared.validators import InputValidator

if TYPE_CHECKING:
    from ghostagotchi.api.auth import AuthProvider
    from ghostagotchi.core.services.error_response_service import ErrorResponseService
    from ghostagotchi.modules.chat.service import ChatService
    from ghostagotchi.modules.leaderboard.service import LeaderboardService
    from ghostagotchi.modules.pet.service import PetService
    from ghostagotchi.modules.profile.service import ProfileService

logger = get_logger(__name__)

Handler = Callable[[ApiRequest, Optional[str]], Awaitable[ApiResponse]]

GENERIC_FAILURE = "An unexpected error occurred"


@dataclass(frozen=True)
class Endpoint:
    """One (path, method) pair: its handler and the checks run before it."""

    operation: str
    handler: Handler
    failure_message: str
    auth_required: bool = True
    required_fields: Tuple[str, ...] = ()


class RequestBoundary:
    """Route table plus the validation and error-mapping pipeline."""

    def __init__(
        self,
        pet_service: PetService,
        chat_service: ChatService,
        profile_service: ProfileService,
        leaderboard_service: LeaderboardService,
        auth_provider: AuthProvider,
        error_service: ErrorResponseService,
    ) -> None:
        self._pets = pet_service
        self._chat = chat_service
        self._profiles = profile_service
        self._leaderboard = leaderboard_service
        self._auth = auth_provider
        self._errors = error_service
        self._routes = self._build_routes()

    def _build_routes(self) -> Dict[str, Dict[str, Endpoint]]:
        pet_failure = "Failed to process pet request"
        return {
            "/pet": {
                "GET": Endpoint("get_pet", self._get_pet, pet_failure),
                "POST": Endpoint(
                    "adopt", self._adopt, pet_failure, required_fields=("name",)
                ),
            },
            "/pet/feed": {
                "POST": Endpoint("feed", self._feed, "Failed to feed pet"),
            },
            "/pet/play": {
                "POST": Endpoint("play", self._play, "Failed to play with pet"),
            },
            "/chat": {
                "POST": Endpoint(
                    "chat",
                    self._send_chat,
                    "Failed to process chat message",
                    required_fields=("message",),
                ),
            },
            "/profile": {
                "GET": Endpoint(
                    "get_profile", self._get_profile, "Failed to fetch profile"
                ),
                "POST": Endpoint(
                    "update_profile",
                    self._update_profile,
                    "Failed to update profile",
                    required_fields=("username",),
                ),
            },
            "/leaderboard": {
                "GET": Endpoint(
                    "leaderboard",
                    self._list_leaderboard,
                    "Failed to fetch leaderboard",
                    auth_required=False,
                ),
            },
        }

    @property
    def routes(self) -> Dict[str, Tuple[str, ...]]:
        """Path -> allowed methods, for help output."""
        return {path: tuple(methods) for path, methods in self._routes.items()}

    # ========================================================================
    # DISPATCH
    # ========================================================================

    async def handle(self, request: ApiRequest) -> ApiResponse:
        method = request.method.upper()
        principal_id = request.principal.user_id if request.principal else None

        with LogContext(
            user_id=principal_id,
            command=f"{method} {request.path}",
            component="api",
        ):
            endpoint: Optional[Endpoint] = None
            try:
                endpoint = self._resolve(method, request.path)

                owner_id: Optional[str] = None
                if endpoint.auth_required:
                    owner_id = self._auth.authenticate(request)

                missing = InputValidator.missing_fields(
                    request.body, endpoint.required_fields
                )
                if missing:
                    raise ValidationError(
                        "body", f"Missing required fields: {', '.join(missing)}"
                    )

                response = await endpoint.handler(request, owner_id)

            except GhostDomainException as exc:
                logger.info(
                    f"Request rejected: {exc.error_code}",
                    extra={
                        "operation": endpoint.operation if endpoint else None,
                        "error_code": exc.error_code,
                    },
                )
                return await self._error_response(exc)

            except Exception as exc:
                operation = endpoint.operation if endpoint else "dispatch"
                logger.error(
                    f"Unhandled error during {operation}: {exc}",
                    extra={
                        "operation": operation,
                        "error_type": type(exc).__name__,
                    },
                    exc_info=True,
                )
                internal = InternalError(
                    operation,
                    endpoint.failure_message if endpoint else GENERIC_FAILURE,
                )
                internal.__cause__ = exc
                return await self._error_response(internal)

            logger.debug(
                f"Request handled: {method} {request.path}",
                extra={"operation": endpoint.operation, "status": response.status},
            )
            return response

    def _resolve(self, method: str, path: str) -> Endpoint:
        methods = self._routes.get(path)
        if methods is None:
            raise NotFoundError("Route", path)

        endpoint = methods.get(method)
        if endpoint is None:
            raise MethodNotAllowedError(method, path)

        return endpoint

    async def _error_response(self, exc: Exception) -> ApiResponse:
        formatted = await self._errors.format_error(exc)
        return error(
            formatted["status"],
            formatted["error"],
            message=formatted["message"],
            code=formatted["code"],
        )

    # ========================================================================
    # HANDLERS
    # ========================================================================

    async def _get_pet(self, request: ApiRequest, owner_id: Optional[str]) -> ApiResponse:
        return success(await self._pets.get_pet(owner_id))

    async def _adopt(self, request: ApiRequest, owner_id: Optional[str]) -> ApiResponse:
        pet = await self._pets.adopt(owner_id, request.body.get("name"))
        return success(pet, status=201, message="Pet created successfully")

    async def _feed(self, request: ApiRequest, owner_id: Optional[str]) -> ApiResponse:
        result = await self._pets.feed(owner_id)
        message = result.pop("message")
        return success(result, message=message)

    async def _play(self, request: ApiRequest, owner_id: Optional[str]) -> ApiResponse:
        result = await self._pets.play(owner_id)
        message = result.pop("message")
        return success(result, message=message)

    async def _send_chat(self, request: ApiRequest, owner_id: Optional[str]) -> ApiResponse:
        outcome = await self._chat.chat(owner_id, request.body.get("message"))
        if outcome.status is ChatStatus.TIMED_OUT:
            raise RequestTimeoutError("chat", TIMEOUT_MESSAGE)
        return success(outcome.to_payload())

    async def _get_profile(self, request: ApiRequest, owner_id: Optional[str]) -> ApiResponse:
        profile = await self._profiles.get_profile(owner_id)
        if profile is None:
            raise NotFoundError("Profile", owner_id)
        return success(profile)

    async def _update_profile(
        self, request: ApiRequest, owner_id: Optional[str]
    ) -> ApiResponse:
        profile = await self._profiles.update_username(
            owner_id, request.body.get("username")
        )
        return success(profile, message="Profile updated successfully")

    async def _list_leaderboard(
        self, request: ApiRequest, owner_id: Optional[str]
    ) -> ApiResponse:
        return success(await self._leaderboard.list_top(request.query.get("limit")))
