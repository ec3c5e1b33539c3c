"""Structured logging with bound context.

Provides a small structured logger used across faultline:
- Context binding (binding name, step index, exception type)
- Human-readable console output, JSON lines for production
- Level and format defaults taken from FaultlineSettings

Quick Start:
    >>> from faultline.observability import get_logger, configure_logging
    >>>
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("faultline.evaluate")
    >>> log.debug("short-circuit", binding="user", message="not found")
"""

from __future__ import annotations

import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol, TextIO, runtime_checkable

from faultline.foundation.errors import safe_str

JsonDict = dict[str, Any]


# ─────────────────────────────────────────────────────────────────────────────
# Core Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context. Immutable - bind() returns a new logger with merged context.

    The level is resolved at log time from configure_logging() unless pinned
    explicitly, so module-level loggers pick up later configuration.

    Example:
        >>> log = BoundLogger(context={"logger": "faultline.bridge"})
        >>> log.debug("trapped exception", exc_type="ValueError")
        # => 10:30:45.123 [debug] trapped exception exc_type="ValueError" logger="faultline.bridge"
    """

    context: JsonDict = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int | None = None

    def bind(self, **kw: Any) -> BoundLogger:
        """Create new logger with additional bound context."""
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer, _level=self._level)

    def is_enabled_for(self, level: int) -> bool:
        return level >= (self._level if self._level is not None else _default_level.get())

    def _log(self, level: int, event: str, **kw: Any) -> None:
        if not self.is_enabled_for(level):
            return
        (self._renderer or _get_renderer()).render(
            LogEntry(time.time(), _level_name(level), event, {**self.context, **kw}))

    def debug(self, event: str, **kw: Any) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: Any) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: Any) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: Any) -> None: self._log(logging.ERROR, event, **kw)


@dataclass(slots=True)
class LogEntry:
    """Immutable log entry with all context."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable console output: `time [level] event key=value ...`, context keys sorted."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = auto-detect
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = getattr(self.output, "isatty", lambda: False)()

    def render(self, entry: LogEntry) -> None:
        p = _ANSI if self.colors else _PLAIN
        head = f"{p.level(entry.level)}[{entry.level}]{p.reset} {p.event}{entry.event}{p.reset}"
        if self.show_timestamp:
            head = f"{p.muted}{entry.ts_human}{p.reset} {head}"
        fields = " ".join(f"{p.key}{k}{p.reset}={_render_value(v, p)}" for k, v in sorted(entry.context.items()))
        print(f"{head} {fields}" if fields else head, file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation. Values orjson cannot encode are rendered with str()."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        import orjson
        line = orjson.dumps({"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context},
                            option=orjson.OPT_NON_STR_KEYS, default=safe_str)
        print(line.decode(), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer for testing."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


_renderer: ContextVar[LogRenderer | None] = ContextVar("faultline_log_renderer", default=None)
_default_level: ContextVar[int] = ContextVar("faultline_log_level", default=logging.INFO)


def configure_logging(
    format: str | None = None,  # noqa: A002 - shadows builtin but matches stdlib
    level: str | None = None,
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Configure global structured logging. Format: "console" (human), "json" (machine), "none".

    Unset arguments fall back to FaultlineSettings (FAULTLINE_LOG_FORMAT, FAULTLINE_LOG_LEVEL).
    """
    from faultline.foundation.config import get_settings

    settings = get_settings()
    format = format or settings.logging.format
    level = level or settings.effective_log_level
    _default_level.set(getattr(logging, level.upper(), logging.INFO))
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json": renderer = JsonRenderer(output=output or sys.stdout)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _renderer.set(renderer)
    return renderer


def get_logger(name: str | None = None, **initial_context: Any) -> BoundLogger:
    """Get a structured logger with optional initial context. Name is added to context as 'logger'."""
    return BoundLogger(context={**initial_context, **({"logger": name} if name else {})})


def _get_renderer() -> LogRenderer:
    if (renderer := _renderer.get()) is None:
        _renderer.set(renderer := ConsoleRenderer())
    return renderer


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class _Palette:
    """Escape codes by role; the plain palette renders every role as ''."""

    reset: str = ""
    muted: str = ""
    event: str = ""
    key: str = ""
    text: str = ""
    scalar: str = ""
    levels: tuple[tuple[str, str], ...] = ()

    def level(self, name: str) -> str:
        return dict(self.levels).get(name, self.muted)


_ANSI = _Palette(
    reset="\033[0m", muted="\033[2m", event="\033[1m", key="\033[36m", text="\033[33m", scalar="\033[34m",
    levels=(("info", "\033[32m"), ("warning", "\033[33m"), ("error", "\033[31m")),
)
_PLAIN = _Palette()


def _level_name(level: int) -> str:
    return logging.getLevelName(level).lower()


def _render_value(v: object, p: _Palette) -> str:
    match v:
        case str(): return f'{p.text}"{v}"{p.reset}'
        case bool() | None: return f"{p.scalar}{str(v).lower()}{p.reset}"
        case int() | float(): return f"{p.scalar}{v}{p.reset}"
        case BaseException(): return f'{p.text}{type(v).__name__}("{safe_str(v)}"){p.reset}'
        case dict() | list() | tuple(): return f"{p.muted}<{type(v).__name__} of {len(v)}>{p.reset}"
        case _: return safe_str(v)
