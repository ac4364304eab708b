"""Failure records attached to response outcomes."""

from __future__ import annotations

from typing import Any


class ApiClientError(Exception):
    """Base error for all client failures."""

    kind = "client"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        context: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.context = context


class TransportError(ApiClientError):
    """Raised when no HTTP response could be obtained or its body could not be read."""

    kind = "transport"


class HttpStatusError(ApiClientError):
    """Recorded when the server answered with a status outside 2xx."""

    kind = "http"

    def __init__(self, message: str, *, status_code: int, context: Any | None = None) -> None:
        super().__init__(message, status_code=status_code, context=context)


class DecodeError(ApiClientError):
    """Raised by strict decoding when a body is not valid JSON."""

    kind = "decode"


class OrchestrationError(ApiClientError):
    """Raised when batch bookkeeping itself fails, as opposed to a single unit."""

    kind = "orchestration"


__all__ = [
    "ApiClientError",
    "DecodeError",
    "HttpStatusError",
    "OrchestrationError",
    "TransportError",
]
