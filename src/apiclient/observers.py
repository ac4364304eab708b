"""Callback bundles for streaming and batch execution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .types import ResponseOutcome


def _noop(*_args: object) -> None:
    return None


@dataclass
class StreamObserver:
    """``on_start`` fires at most once, then ``on_chunk`` per fragment.

    Exactly one of ``on_finish`` / ``on_failure`` fires per stream.
    """

    on_start: Callable[[], None] = _noop
    on_chunk: Callable[[str], None] = _noop
    on_finish: Callable[["ResponseOutcome"], None] = _noop
    on_failure: Callable[["ResponseOutcome"], None] = _noop


@dataclass
class BatchObserver:
    """``on_unit`` reports units in completion order; ``on_finished`` gets the summary."""

    on_start: Callable[[], None] = _noop
    on_unit: Callable[["ResponseOutcome"], None] = _noop
    on_finished: Callable[["ResponseOutcome"], None] = _noop
    on_failure: Callable[["ResponseOutcome"], None] = _noop


__all__ = ["BatchObserver", "StreamObserver"]
