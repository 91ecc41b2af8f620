"""
Authentication seam.

The core only needs an opaque owner identity string. The Discord transport
fills in a ``Principal`` from the invoking user; ``DiscordAuthProvider``
accepts it or raises ``AuthError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

from ghostagotchi.modules.shared.exceptions import AuthError

if TYPE_CHECKING:
    from ghostagotchi.api.envelope import ApiRequest


@dataclass(frozen=True)
class Principal:
    """Caller identity as seen by the transport."""

    user_id: str
    is_bot: bool = False
    display_name: Optional[str] = None


class AuthProvider(Protocol):
    def authenticate(self, request: ApiRequest) -> str:
        """Return the owner identity, or raise AuthError."""
        ...


class DiscordAuthProvider:
    """Trusts the principal discord.py attached, rejecting bot accounts."""

    def authenticate(self, request: ApiRequest) -> str:
        principal = request.principal
        if principal is None or not principal.user_id:
            raise AuthError()
        if principal.is_bot:
            raise AuthError("Bot accounts cannot own pets")
        return principal.user_id
