"""Common transport abstractions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol, runtime_checkable


@dataclass(frozen=True)
class ReadResult:
    """One pull from a progressive body reader."""

    done: bool
    value: bytes | None = None


@runtime_checkable
class StreamReader(Protocol):
    async def read(self) -> ReadResult: ...

    async def release(self) -> None: ...


@runtime_checkable
class TransportResponse(Protocol):
    @property
    def status(self) -> int: ...

    @property
    def ok(self) -> bool: ...

    @property
    def headers(self) -> Mapping[str, str]: ...

    async def text(self) -> str: ...

    def reader(self) -> StreamReader | None: ...

    async def aclose(self) -> None: ...


@runtime_checkable
class Transport(Protocol):
    async def open(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> TransportResponse: ...

    async def aclose(self) -> None: ...


__all__ = ["ReadResult", "StreamReader", "Transport", "TransportResponse"]
