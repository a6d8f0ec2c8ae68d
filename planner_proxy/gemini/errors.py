from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from planner_proxy.core.errors import GatewayError


@dataclass
class ProxyError(Exception):
    """HTTP-facing error rendered as ``{"error": {...}}``."""

    status_code: int
    message: str
    error_type: str = "invalid_request_error"
    code: str | None = None

    def __str__(self) -> str:
        return self.message

    def to_error(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "type": self.error_type,
            "code": self.code,
        }


def error_type_for_status(status_code: int) -> str:
    if status_code == 429:
        return "rate_limit_error"
    if status_code >= 500:
        return "server_error"
    return "invalid_request_error"


def map_gemini_error(exc: Exception) -> ProxyError:
    """Map any exception raised while proxying to a ``ProxyError``."""

    if isinstance(exc, ProxyError):
        return exc

    if isinstance(exc, GatewayError):
        return ProxyError(
            status_code=exc.status_code,
            message=exc.message,
            error_type=error_type_for_status(exc.status_code),
            code=exc.code,
        )

    return ProxyError(
        status_code=500,
        message=f"Unexpected server error: {exc}",
        error_type="server_error",
        code="internal_error",
    )
