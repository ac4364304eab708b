"""Request executor: single sends, progressive streams and parallel batches."""

from __future__ import annotations

import asyncio
import codecs
import os
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Mapping, Sequence

from .completion import is_stream_complete
from .errors import OrchestrationError
from .logger import BoundLogger, create_logger, normalize_level
from .observers import BatchObserver, StreamObserver
from .parser import extract_error_message
from .request import RequestSpec
from .transport import HttpTransport, StreamReader, Transport, TransportResponse
from .types import ResponseOutcome, batch_summary

ENV_LOG_LEVEL = "APICLIENT_LOG_LEVEL"
ENV_USER_AGENT = "APICLIENT_USER_AGENT"


@dataclass
class ClientOptions:
    default_headers: Mapping[str, str] | None = None
    transport: Transport | None = None
    logger: object | None = None
    log_level: str = "info"
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "ClientOptions":
        env = os.environ if environ is None else environ
        headers: dict[str, str] = {}
        user_agent = env.get(ENV_USER_AGENT)
        if user_agent:
            headers["User-Agent"] = user_agent
        options = cls(
            default_headers=headers or None,
            log_level=normalize_level(env.get(ENV_LOG_LEVEL)),
        )
        return replace(options, **overrides)


class ApiClient:
    """Runs requests through a transport and normalizes every outcome."""

    def __init__(
        self,
        *,
        transport: Transport | None = None,
        default_headers: Mapping[str, str] | None = None,
        logger: object | None = None,
        log_level: str = "info",
        encoding: str = "utf-8",
    ) -> None:
        options = ClientOptions(
            default_headers=default_headers,
            transport=transport,
            logger=logger,
            log_level=log_level,
            encoding=encoding,
        )
        self._logger: BoundLogger = create_logger(logger=options.logger, level=options.log_level)
        self._transport = options.transport or HttpTransport(logger=self._logger)
        self._owns_transport = options.transport is None
        self._default_headers = dict(options.default_headers or {})
        self._encoding = options.encoding

    @classmethod
    def from_options(cls, options: ClientOptions) -> "ApiClient":
        return cls(
            transport=options.transport,
            default_headers=options.default_headers,
            logger=options.logger,
            log_level=options.log_level,
            encoding=options.encoding,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_transport:
            await self._transport.aclose()

    async def send(self, request: RequestSpec) -> ResponseOutcome:
        try:
            response = await self._open(request)
            body = await response.text()
            outcome = ResponseOutcome.for_success(response, body)
        except Exception as exc:
            self._logger.warn("%s %s failed: %s", request.method, request.url, exc)
            return ResponseOutcome.for_error(exc)

        if not response.ok:
            self._logger.warn(
                "%s %s answered status=%s: %s",
                request.method,
                request.url,
                response.status,
                extract_error_message(body),
            )
        return outcome

    async def stream(
        self,
        request: RequestSpec,
        observer: StreamObserver | None = None,
    ) -> ResponseOutcome:
        """Stream a response body through ``observer`` and return the final outcome.

        Chunks are handed to ``on_chunk`` in arrival order. The stream ends when
        the transport reports end of body or a chunk carries a completion marker
        (see :func:`apiclient.completion.is_stream_complete`). The reader is
        released exactly once whichever way the stream ends.
        """
        observer = observer or StreamObserver()
        conclusion = _Conclusion(observer)
        response: TransportResponse | None = None
        reader: StreamReader | None = None

        try:
            response = await self._open(request)
            reader = response.reader() if response.ok else None
            if reader is None:
                outcome = ResponseOutcome.for_http_error(
                    response, f"Failed to fetch stream. Status: {response.status}"
                )
                self._logger.warn(
                    "Stream %s %s rejected: %s (%s)",
                    request.method,
                    request.url,
                    outcome.failure_reason,
                    await self._error_detail(response) if not response.ok else "no readable body",
                )
                conclusion.fail(outcome)
                return outcome

            observer.on_start()
            decoder = codecs.getincrementaldecoder(self._encoding)(errors="replace")
            parts: list[str] = []

            while True:
                record = await reader.read()
                if record.value:
                    fragment = decoder.decode(record.value)
                    if fragment:
                        self._logger.trace("Stream chunk chars=%d", len(fragment))
                        parts.append(fragment)
                        observer.on_chunk(fragment)

                if is_stream_complete(record.done, record.value):
                    tail = decoder.decode(b"", final=True)
                    if tail:
                        parts.append(tail)
                        observer.on_chunk(tail)
                    outcome = ResponseOutcome.for_success(response, "".join(parts))
                    self._logger.debug("Stream %s finished chars=%d", request.url, len(outcome.body or ""))
                    conclusion.finish(outcome)
                    return outcome
        except Exception as exc:
            if conclusion.concluded:
                raise
            self._logger.warn("Stream %s %s failed: %s", request.method, request.url, exc)
            outcome = ResponseOutcome.for_error(exc)
            conclusion.fail(outcome)
            return outcome
        finally:
            if reader is not None:
                await self._quietly(reader.release, "stream reader")
            elif response is not None:
                await self._quietly(response.aclose, "response")

    async def batch_send_parallel(
        self,
        requests: Sequence[RequestSpec],
        observer: BatchObserver | None = None,
    ) -> list[ResponseOutcome]:
        """Send every request concurrently and report a summary once all settle.

        Per-request failures are reported through ``on_unit`` and counted in
        the summary. Only a failure of the batch bookkeeping itself reaches
        ``on_failure``; the exception is then re-raised.
        """
        observer = observer or BatchObserver()
        pending = list(requests)
        if not pending:
            observer.on_finished(batch_summary([]))
            return []

        tasks: list[asyncio.Task[ResponseOutcome]] = []
        try:
            observer.on_start()
            tasks = [asyncio.create_task(self._run_unit(request, observer)) for request in pending]
            results = list(await asyncio.gather(*tasks))
            summary = batch_summary(results)
        except Exception as exc:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            self._logger.error("Batch of %d requests aborted: %s", len(pending), exc)
            error = OrchestrationError(f"Batch execution failed: {exc}", context=exc)
            observer.on_failure(ResponseOutcome.for_error(error))
            raise

        self._logger.info(
            "Batch finished total=%d failed=%d status=%d",
            len(results),
            sum(1 for outcome in results if not outcome.is_successful),
            summary.status_code,
        )
        observer.on_finished(summary)
        return results

    async def _run_unit(self, request: RequestSpec, observer: BatchObserver) -> ResponseOutcome:
        outcome = await self.send(request)
        observer.on_unit(outcome)
        return outcome

    async def _open(self, request: RequestSpec) -> TransportResponse:
        headers = dict(self._default_headers)
        headers.update(request.headers)
        body = request.body if request.carries_body else None
        self._logger.debug("%s %s", request.method, request.url)
        return await self._transport.open(request.method, request.url, headers=headers, body=body)

    async def _error_detail(self, response: TransportResponse) -> str:
        try:
            return extract_error_message(await response.text())
        except Exception as exc:
            return f"body unavailable: {exc}"

    async def _quietly(self, close: Callable[[], Awaitable[None]], what: str) -> None:
        try:
            await close()
        except Exception as exc:
            self._logger.debug("Ignoring failure while releasing %s: %s", what, exc)


class _Conclusion:
    """One-shot guard: the first terminal signal wins, later ones are dropped."""

    def __init__(self, observer: StreamObserver) -> None:
        self._observer = observer
        self.concluded = False

    def finish(self, outcome: ResponseOutcome) -> None:
        if self._claim():
            self._observer.on_finish(outcome)

    def fail(self, outcome: ResponseOutcome) -> None:
        if self._claim():
            self._observer.on_failure(outcome)

    def _claim(self) -> bool:
        if self.concluded:
            return False
        self.concluded = True
        return True


__all__ = ["ApiClient", "ClientOptions"]
