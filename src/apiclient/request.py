"""Request descriptions and the convenience factories that build them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"

ChatMessage = Mapping[str, str]


@dataclass(frozen=True)
class RequestSpec:
    """One HTTP request to issue. ``body`` is already serialized text."""

    method: str
    url: str
    body: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", dict(self.headers or {}))

    @property
    def carries_body(self) -> bool:
        return self.method != "GET" and bool(self.body)

    @classmethod
    def create(
        cls,
        method: str,
        url: str,
        body: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> "RequestSpec":
        return cls(method=method, url=url, body=body, headers=dict(headers or {}))

    @classmethod
    def get(cls, url: str, headers: Mapping[str, str] | None = None) -> "RequestSpec":
        return cls.create("GET", url, None, headers)

    @classmethod
    def post(cls, url: str, body: str | None, headers: Mapping[str, str] | None = None) -> "RequestSpec":
        return cls.create("POST", url, body, headers)

    @classmethod
    def put(cls, url: str, body: str | None, headers: Mapping[str, str] | None = None) -> "RequestSpec":
        return cls.create("PUT", url, body, headers)

    @classmethod
    def delete(cls, url: str, headers: Mapping[str, str] | None = None) -> "RequestSpec":
        return cls.create("DELETE", url, None, headers)

    @classmethod
    def patch(cls, url: str, body: str | None, headers: Mapping[str, str] | None = None) -> "RequestSpec":
        return cls.create("PATCH", url, body, headers)

    @classmethod
    def create_json(
        cls,
        method: str,
        url: str,
        payload: Any,
        headers: Mapping[str, str] | None = None,
    ) -> "RequestSpec":
        merged = {"Content-Type": JSON_CONTENT_TYPE}
        merged.update(headers or {})
        return cls.create(method, url, json.dumps(payload), merged)

    @classmethod
    def post_json(cls, url: str, payload: Any, headers: Mapping[str, str] | None = None) -> "RequestSpec":
        return cls.create_json("POST", url, payload, headers)

    @classmethod
    def put_json(cls, url: str, payload: Any, headers: Mapping[str, str] | None = None) -> "RequestSpec":
        return cls.create_json("PUT", url, payload, headers)

    @classmethod
    def patch_json(cls, url: str, payload: Any, headers: Mapping[str, str] | None = None) -> "RequestSpec":
        return cls.create_json("PATCH", url, payload, headers)

    @classmethod
    def chat(cls, url: str, body: "ChatBody", headers: Mapping[str, str] | None = None) -> "RequestSpec":
        merged: dict[str, str] = {}
        if body.is_sse:
            merged["Accept"] = EVENT_STREAM_CONTENT_TYPE
        merged.update(headers or {})
        return cls.post_json(url, body.to_json_object(), merged)


@dataclass(frozen=True)
class ChatBody:
    """Body of a chat-completions style request.

    ``is_sse`` only selects the ``Accept`` header; it is never serialized.
    """

    model: str | None = None
    messages: Sequence[ChatMessage] = ()
    stream: bool = False
    temperature: float | None = None
    is_sse: bool = False

    @classmethod
    def chat(
        cls,
        model: str | None,
        messages: Sequence[ChatMessage],
        stream: bool = False,
        temperature: float | None = None,
    ) -> "ChatBody":
        return cls(model=model, messages=tuple(messages), stream=stream, temperature=temperature)

    @classmethod
    def sse(
        cls,
        model: str | None,
        messages: Sequence[ChatMessage],
        temperature: float | None = None,
    ) -> "ChatBody":
        return cls(model=model, messages=tuple(messages), stream=True, temperature=temperature, is_sse=True)

    @classmethod
    def chat_message(cls, content: str, stream: bool = False) -> "ChatBody":
        return cls.chat(None, [{"role": "user", "content": content}], stream)

    def to_json_object(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [dict(message) for message in self.messages],
            "stream": self.stream,
            "temperature": self.temperature,
        }
        return {key: value for key, value in payload.items() if value is not None}


__all__ = ["ChatBody", "ChatMessage", "RequestSpec"]
