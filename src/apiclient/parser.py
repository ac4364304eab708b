"""Body decoding helpers shared by outcomes and the batch summary."""

from __future__ import annotations

import json
import re
from typing import Any

from .errors import DecodeError

_SINGLE_QUOTED_KEY = re.compile(r"([{,]\s*)'([^']+)'(\s*:)")
_SINGLE_QUOTED_VALUE = re.compile(r":\s*'([^']*?)'")

_DECODE_ERRORS = (TypeError, ValueError, RecursionError)


def decode_lenient(text: str | None) -> Any | None:
    """Decode ``text`` as JSON, tolerating wrapping quotes and single quotes.

    A strict parse is tried first. If that fails, one pair of surrounding
    quotes is stripped, single-quoted keys and values are rewritten with
    double quotes, and the result is parsed again. ``None`` is returned when
    both passes fail; this function never raises.
    """
    if not text:
        return None
    try:
        parsed = json.loads(text)
    except _DECODE_ERRORS:
        return _decode_normalized(text)

    # A JSON string holding a single-quoted object, e.g. "{'a': 'b'}".
    # Strings that are already valid JSON are returned unchanged.
    if isinstance(parsed, str) and parsed.strip()[:1] in {"{", "["}:
        try:
            json.loads(parsed)
        except _DECODE_ERRORS:
            inner = _decode_normalized(parsed)
            if inner is not None:
                return inner
    return parsed


def _decode_normalized(text: str) -> Any | None:
    try:
        return json.loads(_normalize_quotes(text))
    except _DECODE_ERRORS:
        return None


def decode_strict(text: str | None) -> Any:
    if text is None:
        raise DecodeError("Response body is empty")
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise DecodeError(f"Invalid JSON response: {exc}", context=text) from exc


def _normalize_quotes(text: str) -> str:
    processed = text
    if len(processed) >= 2 and processed[0] == processed[-1] and processed[0] in {'"', "'"}:
        processed = processed[1:-1]
    processed = _SINGLE_QUOTED_KEY.sub(r'\1"\2"\3', processed)
    return _SINGLE_QUOTED_VALUE.sub(r': "\1"', processed)


def is_json_content_type(value: str | None) -> bool:
    return bool(value) and "json" in value.lower()


def extract_error_message(body: str | None) -> str:
    """Pull a readable message out of an error body for log lines."""
    if not body:
        return "Error occurred"
    parsed = decode_lenient(body)
    if isinstance(parsed, dict):
        for key in ("message", "error"):
            if key in parsed:
                message = parsed[key]
                if isinstance(message, dict) and "message" in message:
                    message = message["message"]
                return message if isinstance(message, str) else str(message)
    return body.strip() or "Error occurred"


__all__ = ["decode_lenient", "decode_strict", "extract_error_message", "is_json_content_type"]
