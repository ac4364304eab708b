"""Decides when a progressively delivered body has logically ended."""

from __future__ import annotations

import json
import re

SSE_DONE_TOKEN = "data: [DONE]"

_DONE_MARKER = re.compile(r'"done"\s*:\s*true')


def is_stream_complete(done: bool, chunk: bytes | None) -> bool:
    """Return True once a stream should be treated as finished.

    The transport's own end-of-stream flag always wins. Otherwise the chunk is
    inspected for an SSE ``data: [DONE]`` sentinel or for a JSON line whose
    ``done`` field is ``true``. Inspection errors mean "not finished yet".
    """
    if done:
        return True
    if not chunk:
        return False

    try:
        text = chunk.decode("utf-8", errors="replace")
        if SSE_DONE_TOKEN in text:
            return True
        if _DONE_MARKER.search(text):
            return any(_line_marks_done(line) for line in text.splitlines())
    except Exception:
        return False
    return False


def _line_marks_done(line: str) -> bool:
    stripped = line.strip()
    if not stripped:
        return False
    try:
        frame = json.loads(stripped)
    except ValueError:
        return False
    return isinstance(frame, dict) and frame.get("done") is True


__all__ = ["SSE_DONE_TOKEN", "is_stream_complete"]
