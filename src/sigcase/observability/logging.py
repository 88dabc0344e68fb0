"""Structured key/value logging for sigcase components.

Every entry carries an event name plus context merged from three places, later
ones winning: the active ``log_context`` scope, the logger's bound context and
the call-site keywords. Output goes through a single process-wide renderer
(human console lines or JSON lines) chosen by ``configure_logging``; worker
threads share it.

Quick Start:
    >>> from sigcase.observability import configure_logging, get_logger
    >>> configure_logging(format="console", level="debug")
    >>> log = get_logger("sigcase.registry")
    >>> log.debug("signature cached", input="Question", output="Answer")
    # => 10:30:45.120 [debug] sigcase.registry: signature cached input="Question" output="Answer"
"""

from __future__ import annotations

import logging
import sys
import threading
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

from sigcase.foundation.errors import JsonDict, JsonValue

if TYPE_CHECKING:
    from types import TracebackType

_scope: ContextVar[JsonDict] = ContextVar("sigcase_log_scope", default={})


# ─────────────────────────────────────────────────────────────────────────────
# Entries & Renderers
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One rendered event."""

    timestamp: float
    level: str
    event: str
    context: JsonDict
    logger: str | None = None

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_clock(self) -> str:
        """HH:MM:SS.mmm in UTC."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


@runtime_checkable
class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


_ANSI = {"dim": "\033[2m", "bold": "\033[1m", "key": "\033[36m", "reset": "\033[0m"}
_LEVEL_ANSI = {"debug": "\033[2m", "info": "\033[32m", "warning": "\033[33m", "error": "\033[31m"}


@dataclass(slots=True)
class ConsoleRenderer:
    """Single-line human output: ``clock [level] logger: event key=value ...``."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None

    def __post_init__(self) -> None:
        if self.colors is None:
            isatty = getattr(self.output, "isatty", None)
            self.colors = bool(isatty and isatty())

    def _paint(self, text: str, style: str) -> str:
        return f"{style}{text}{_ANSI['reset']}" if self.colors and style else text

    def render(self, entry: LogEntry) -> None:
        head = f"{entry.logger}: {entry.event}" if entry.logger else entry.event
        line = [
            self._paint(entry.ts_clock, _ANSI["dim"]),
            self._paint(f"[{entry.level}]", _LEVEL_ANSI.get(entry.level, "")),
            self._paint(head, _ANSI["bold"]),
        ]
        line += [f"{self._paint(k, _ANSI['key'])}={_console_value(v)}"
                 for k, v in sorted(entry.context.items()) if k != "exc_info"]
        print(" ".join(line), file=self.output)
        if tb := entry.context.get("exc_info"):
            print(tb, file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """One JSON object per line."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        import orjson
        record: JsonDict = {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event}
        if entry.logger:
            record["logger"] = entry.logger
        record.update(entry.context)
        self.output.write(orjson.dumps(record, option=orjson.OPT_NON_STR_KEYS | orjson.OPT_APPEND_NEWLINE,
                                       default=str).decode())


@dataclass(slots=True)
class NoOpRenderer:
    """Discards everything."""

    def render(self, entry: LogEntry) -> None:
        pass


def _console_value(v: object) -> str:
    match v:
        case str():
            return f'"{v}"'
        case bool():
            return str(v).lower()
        case dict() | list() | tuple():
            return f"<{len(v)} items>"
        case _:
            return str(v)


# ─────────────────────────────────────────────────────────────────────────────
# Process-wide Configuration
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class _Config:
    renderer: LogRenderer | None = None
    level: int = logging.INFO


_config = _Config()
_config_lock = threading.Lock()

_RENDERERS = {
    "console": lambda output, colors: ConsoleRenderer(output=output or sys.stderr, colors=colors),
    "json": lambda output, colors: JsonRenderer(output=output or sys.stdout),
    "none": lambda output, colors: NoOpRenderer(),
}


def configure_logging(
    format: str | None = None,  # noqa: A002
    level: str | None = None,
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Install the process-wide renderer and threshold.

    Args:
        format: "console", "json" or "none"
        level: Level name, case-insensitive
        output: Stream for console/json output
        colors: Force ANSI colors on or off (auto-detected when None)

    Unset arguments fall back to ``SIGCASE_LOG_*`` / ``SIGCASE_DEBUG`` settings.
    """
    from sigcase.foundation.config import get_settings
    settings = get_settings()
    format = format or settings.logging.format
    if format not in _RENDERERS:
        raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    threshold = logging.getLevelName((level or settings.effective_log_level).upper())
    if not isinstance(threshold, int):
        raise ValueError(f"Unknown level: {level}")

    renderer = _RENDERERS[format](output, settings.logging.colors if colors is None else colors)
    with _config_lock:
        _config.renderer = renderer
        _config.level = threshold
    return renderer


def _current_renderer() -> LogRenderer:
    if (renderer := _config.renderer) is None:
        with _config_lock:
            if _config.renderer is None:
                _config.renderer = ConsoleRenderer()
            renderer = _config.renderer
    return renderer


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class BoundLogger:
    """Named logger with bound context; ``bind`` returns a new logger.

    The threshold is read at log time, so module-level loggers follow later
    ``configure_logging`` calls.

    Example:
        >>> log = get_logger("sigcase.validate").bind(path="input")
        >>> log.debug("validation failed", code="EMPTY_VALUE")
    """

    name: str | None = None
    context: JsonDict = field(default_factory=dict)

    def bind(self, **kw: JsonValue) -> BoundLogger:
        return BoundLogger(self.name, {**self.context, **kw})

    def is_enabled_for(self, level: int) -> bool:
        return level >= _config.level

    def _emit(self, level: int, event: str, kw: JsonDict) -> None:
        if level < _config.level:
            return
        ctx = {**_scope.get(), **self.context, **kw}
        entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event, ctx, self.name)
        _current_renderer().render(entry)

    def debug(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.DEBUG, event, kw)

    def info(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.INFO, event, kw)

    def warning(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.WARNING, event, kw)

    def error(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.ERROR, event, kw)

    def exception(self, event: str, **kw: JsonValue) -> None:
        """Error entry with the active traceback under ``exc_info``."""
        import traceback
        self._emit(logging.ERROR, event, {**kw, "exc_info": traceback.format_exc()})


def get_logger(name: str | None = None, **context: JsonValue) -> BoundLogger:
    return BoundLogger(name, dict(context))


class log_context:
    """Scope extra context onto every entry logged inside the ``with`` block.

    Scopes are per thread / task (ContextVar).
    """

    __slots__ = ("_extra", "_token")

    def __init__(self, **kw: JsonValue) -> None:
        self._extra = kw
        self._token = None

    def __enter__(self) -> log_context:
        self._token = _scope.set({**_scope.get(), **self._extra})
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        if self._token is not None:
            _scope.reset(self._token)
            self._token = None
