"""The normalized result type returned by every execution path."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .errors import ApiClientError, HttpStatusError, TransportError
from .parser import decode_lenient, is_json_content_type
from .transport.base import TransportResponse

MULTI_STATUS = 207


@dataclass(frozen=True)
class ResponseOutcome:
    """Outcome of one request attempt.

    ``status_code`` 0 means no HTTP response was obtained, in which case
    ``failure`` is always set. A non-2xx status can be present with or
    without a failure record; either way ``is_successful`` is False.
    """

    status_code: int = 0
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | None = None
    failure: ApiClientError | None = None

    def __post_init__(self) -> None:
        if self.status_code == 0 and self.failure is None:
            raise ValueError("An outcome without a status code must record a failure")
        object.__setattr__(self, "headers", dict(self.headers or {}))

    @property
    def is_successful(self) -> bool:
        return self.failure is None and 200 <= self.status_code < 300

    @property
    def failure_reason(self) -> str | None:
        return str(self.failure) if self.failure is not None else None

    def get_header(self, name: str) -> str | None:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def parse_json_body(self) -> Any | None:
        return decode_lenient(self.body)

    def as_map(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "statusCode": self.status_code,
            "successful": self.is_successful,
            "body": self.body,
        }
        if self.failure is not None:
            result["error"] = self.failure_reason
        if is_json_content_type(self.get_header("content-type")):
            decoded = self.parse_json_body()
            if decoded is not None:
                result["json"] = decoded
        return result

    @classmethod
    def for_error(cls, error: BaseException) -> "ResponseOutcome":
        if isinstance(error, ApiClientError):
            failure = error
        else:
            failure = TransportError(str(error) or type(error).__name__, context=error)
        return cls(status_code=0, failure=failure)

    @classmethod
    def for_success(cls, response: TransportResponse, body: str | None) -> "ResponseOutcome":
        return cls(status_code=response.status, headers=dict(response.headers), body=body)

    @classmethod
    def for_http_error(cls, response: TransportResponse, message: str) -> "ResponseOutcome":
        failure = HttpStatusError(message, status_code=response.status)
        return cls(status_code=response.status, headers=dict(response.headers), failure=failure)


def batch_summary(outcomes: Iterable[ResponseOutcome]) -> ResponseOutcome:
    """Fold per-unit outcomes into one outcome whose body is a JSON report."""
    results = list(outcomes)
    successful = sum(1 for outcome in results if outcome.is_successful)
    failed = len(results) - successful
    report = {
        "total": len(results),
        "successful": successful,
        "failed": failed,
        "results": [outcome.as_map() for outcome in results],
    }
    return ResponseOutcome(
        status_code=200 if failed == 0 else MULTI_STATUS,
        headers={"content-type": "application/json"},
        body=json.dumps(report),
    )


__all__ = ["MULTI_STATUS", "ResponseOutcome", "batch_summary"]
