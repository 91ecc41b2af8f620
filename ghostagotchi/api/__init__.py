"""
Transport-neutral API surface.

The Discord cogs, and any other transport, build ``ApiRequest`` values and
hand them to ``RequestBoundary.handle``.
"""

from .auth import AuthProvider, DiscordAuthProvider, Principal
from .boundary import Endpoint, RequestBoundary
from .envelope import ApiRequest, ApiResponse, error, success

__all__ = [
    "ApiRequest",
    "ApiResponse",
    "AuthProvider",
    "DiscordAuthProvider",
    "Endpoint",
    "Principal",
    "RequestBoundary",
    "error",
    "success",
]
