"""
Request and response envelopes for the transport-neutral API.

Success bodies are ``{"data": ..., "message": ...}``; error bodies are
``{"error": ..., "message": ..., "code": ...}``. Optional keys are omitted
rather than sent as null.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from ghostagotchi.api.auth import Principal


@dataclass(frozen=True)
class ApiRequest:
    method: str
    path: str
    principal: Optional[Principal] = None
    body: Dict[str, Any] = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ApiResponse:
    status: int
    body: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def data(self) -> Any:
        return self.body.get("data")

    @property
    def message(self) -> Optional[str]:
        return self.body.get("message")


def success(data: Any, status: int = 200, message: Optional[str] = None) -> ApiResponse:
    body: Dict[str, Any] = {"data": data}
    if message is not None:
        body["message"] = message
    return ApiResponse(status=status, body=body)


def error(
    status: int,
    error: str,
    message: Optional[str] = None,
    code: Optional[str] = None,
) -> ApiResponse:
    body: Dict[str, Any] = {"error": error}
    if message is not None:
        body["message"] = message
    if code is not None:
        body["code"] = code
    return ApiResponse(status=status, body=body)
