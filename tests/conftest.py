from __future__ import annotations

import asyncio
from typing import Mapping

import pytest

from apiclient.transport.base import ReadResult


class DummyReader:
    def __init__(self, records: list[ReadResult | Exception], *, release_error: Exception | None = None) -> None:
        self._records = list(records)
        self._release_error = release_error
        self.release_count = 0
        self.reads = 0

    async def read(self) -> ReadResult:
        self.reads += 1
        if not self._records:
            return ReadResult(done=True)
        record = self._records.pop(0)
        if isinstance(record, Exception):
            raise record
        return record

    async def release(self) -> None:
        self.release_count += 1
        if self._release_error is not None:
            raise self._release_error


class DummyResponse:
    def __init__(
        self,
        status: int = 200,
        body: str = "",
        *,
        headers: Mapping[str, str] | None = None,
        chunks: list[ReadResult | Exception] | None = None,
        text_error: Exception | None = None,
        readable: bool = True,
        release_error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.status = status
        self.headers = dict(headers or {})
        self._body = body
        self._text_error = text_error
        self._readable = readable
        self._delay = delay
        self.stream_reader = DummyReader(chunks or [], release_error=release_error)
        self.reader_calls = 0
        self.close_count = 0

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def text(self) -> str:
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._text_error is not None:
            raise self._text_error
        return self._body

    def reader(self) -> DummyReader | None:
        self.reader_calls += 1
        return self.stream_reader if self._readable else None

    async def aclose(self) -> None:
        self.close_count += 1


class DummyTransport:
    """Answers by URL; a mapped exception is raised instead of returned."""

    def __init__(self, routes: Mapping[str, DummyResponse | Exception]) -> None:
        self.routes = dict(routes)
        self.calls: list[dict[str, object]] = []
        self.closed = False

    async def open(self, method: str, url: str, *, headers: Mapping[str, str], body: str | None = None):
        self.calls.append({"method": method, "url": url, "headers": dict(headers), "body": body})
        answer = self.routes[url]
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def aclose(self) -> None:
        self.closed = True


def chunk(text: str | bytes) -> ReadResult:
    value = text.encode("utf-8") if isinstance(text, str) else text
    return ReadResult(done=False, value=value)


@pytest.fixture
def recorder():
    return EventRecorder()


class EventRecorder:
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def payloads(self, name: str) -> list[object]:
        return [payload for event, payload in self.events if event == name]

    def stream_observer(self):
        from apiclient.observers import StreamObserver

        return StreamObserver(
            on_start=lambda: self.events.append(("start", None)),
            on_chunk=lambda text: self.events.append(("chunk", text)),
            on_finish=lambda outcome: self.events.append(("finish", outcome)),
            on_failure=lambda outcome: self.events.append(("failure", outcome)),
        )

    def batch_observer(self):
        from apiclient.observers import BatchObserver

        return BatchObserver(
            on_start=lambda: self.events.append(("start", None)),
            on_unit=lambda outcome: self.events.append(("unit", outcome)),
            on_finished=lambda outcome: self.events.append(("finished", outcome)),
            on_failure=lambda outcome: self.events.append(("failure", outcome)),
        )
