"""Level-filtered logging wrapper shared by the executor and its transports."""

from __future__ import annotations

import logging
from typing import Any, Literal, NamedTuple, Protocol

LogLevel = Literal["trace", "debug", "info", "warn", "error"]

DEFAULT_LOGGER_NAME = "apiclient"

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


class LoggerProtocol(Protocol):
    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warn(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


class _Level(NamedTuple):
    rank: int
    stdlib: int


_LEVELS: dict[LogLevel, _Level] = {
    "trace": _Level(0, TRACE_LEVEL),
    "debug": _Level(1, logging.DEBUG),
    "info": _Level(2, logging.INFO),
    "warn": _Level(3, logging.WARNING),
    "error": _Level(4, logging.ERROR),
}

_ALIASES: dict[str, LogLevel] = {
    "warning": "warn",
    "critical": "error",
    "fatal": "error",
}


def normalize_level(level: str | None, default: LogLevel = "info") -> LogLevel:
    """Map names such as ``WARNING`` or ``Debug`` onto a known level."""
    if not level:
        return default
    name = level.strip().lower()
    name = _ALIASES.get(name, name)
    return name if name in _LEVELS else default  # type: ignore[return-value]


class BoundLogger:
    """Emits to a stdlib logger, or any object with per-level methods.

    Records below ``level`` are dropped before formatting. Failures inside
    the sink are swallowed.
    """

    def __init__(self, logger: Any | None = None, *, level: LogLevel = "info") -> None:
        self._sink = logger or _default_logger()
        self._level = level
        self._threshold = _LEVELS[level].rank

    @property
    def level(self) -> LogLevel:
        return self._level

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.emit("trace", msg, *args, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.emit("debug", msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.emit("info", msg, *args, **kwargs)

    def warn(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.emit("warn", msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.emit("error", msg, *args, **kwargs)

    def emit(self, level: LogLevel, msg: str, *args: Any, **kwargs: Any) -> None:
        spec = _LEVELS[level]
        if spec.rank < self._threshold:
            return
        try:
            if isinstance(self._sink, logging.Logger) or hasattr(self._sink, "log"):
                self._sink.log(spec.stdlib, msg, *args, **kwargs)
                return
            method = getattr(self._sink, level, None)
            if callable(method):
                method(msg, *args, **kwargs)
        except Exception:
            pass

    def child(self, name: str) -> "BoundLogger":
        """Sub-logger such as ``apiclient.http``; duck-typed sinks are shared."""
        sink = self._sink.getChild(name) if isinstance(self._sink, logging.Logger) else self._sink
        return BoundLogger(sink, level=self._level)


def _default_logger() -> logging.Logger:
    logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(TRACE_LEVEL)
    return logger


def create_logger(*, logger: Any | None = None, level: str | None = "info") -> BoundLogger:
    if isinstance(logger, BoundLogger):
        return logger
    return BoundLogger(logger, level=normalize_level(level))


__all__ = ["BoundLogger", "LogLevel", "LoggerProtocol", "create_logger", "normalize_level"]
