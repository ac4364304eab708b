"""HTTP transport built on top of httpx."""

from __future__ import annotations

from typing import AsyncIterator, Mapping

import httpx

from ..errors import TransportError
from ..logger import BoundLogger, create_logger
from .base import ReadResult


class HttpStreamReader:
    """Pulls raw body chunks from a streamed httpx response."""

    def __init__(self, response: httpx.Response, logger: BoundLogger) -> None:
        self._response = response
        self._chunks: AsyncIterator[bytes] = response.aiter_bytes()
        self._logger = logger
        self._released = False

    async def read(self) -> ReadResult:
        try:
            chunk = await self._chunks.__anext__()
        except StopAsyncIteration:
            return ReadResult(done=True)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Timed out reading stream from {self._response.url}") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Stream read from {self._response.url} failed: {exc}") from exc
        self._logger.trace("HTTP chunk <- %s bytes=%d", self._response.url, len(chunk))
        return ReadResult(done=False, value=chunk)

    async def release(self) -> None:
        if self._released:
            return
        self._released = True
        await self._response.aclose()


class HttpResponse:
    def __init__(self, response: httpx.Response, logger: BoundLogger) -> None:
        self._response = response
        self._logger = logger
        self._headers = {k.lower(): v for k, v in response.headers.items()}

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def ok(self) -> bool:
        return self._response.is_success

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    async def text(self) -> str:
        try:
            await self._response.aread()
        except httpx.TimeoutException as exc:
            raise TransportError(f"Timed out reading body from {self._response.url}") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Cannot read body from {self._response.url}: {exc}") from exc
        finally:
            await self._response.aclose()
        return self._response.text

    def reader(self) -> HttpStreamReader | None:
        if self._response.is_stream_consumed or self._response.is_closed:
            return None
        return HttpStreamReader(self._response, self._logger)

    async def aclose(self) -> None:
        await self._response.aclose()


class HttpTransport:
    """Default transport: one httpx.AsyncClient, every response streamed."""

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient()
        self._owns_client = client is None
        self._logger = (logger or create_logger()).child("http")

    async def open(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> HttpResponse:
        request = self._client.build_request(method, url, headers=dict(headers), content=body)
        try:
            self._logger.debug("HTTP %s %s bytes=%d", method, url, len(body or ""))
            response = await self._client.send(request, stream=True)
        except httpx.TimeoutException as exc:
            raise TransportError(f"HTTP request to {url} timed out") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Cannot connect to {url}: {exc}") from exc
        self._logger.debug("HTTP <- %s status=%s", url, response.status_code)
        return HttpResponse(response, self._logger)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = ["HttpResponse", "HttpStreamReader", "HttpTransport"]
