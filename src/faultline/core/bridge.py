"""Exception bridge: run code and turn raised exceptions into failed values.

Catch boundary:
- Exception subclasses are returned as values (classified failed)
- KeyboardInterrupt, SystemExit, GeneratorExit are never caught
- MemoryError and RecursionError propagate while
  FAULTLINE_BRIDGE_PROPAGATE_FATAL is on (the default)
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, ParamSpec, TypeVar

from faultline.foundation.config import get_settings
from faultline.foundation.errors import safe_str
from faultline.observability import get_logger

P = ParamSpec("P")
T = TypeVar("T")

_log = get_logger("faultline.bridge")

FATAL_EXCEPTIONS: tuple[type[BaseException], ...] = (MemoryError, RecursionError)


def attempt_call(thunk: Callable[[], T]) -> T | Exception:
    """Call `thunk`; return its value, or the exception it raised.

    Example:
        >>> attempt_call(lambda: int("42"))
        42
        >>> attempt_call(lambda: int("x"))
        ValueError("invalid literal for int() with base 10: 'x'")
    """
    try:
        return thunk()
    except Exception as exc:
        if isinstance(exc, FATAL_EXCEPTIONS) and get_settings().bridge.propagate_fatal:
            raise
        if _log.is_enabled_for(logging.DEBUG):
            _log.debug("trapped exception", exc_type=type(exc).__name__, error=safe_str(exc))
        return exc


def attempt_fn(fn: Callable[P, T]) -> Callable[P, T | Exception]:
    """Decorator routing every call of `fn` through attempt_call.

    Example:
        >>> @attempt_fn
        ... def parse(s: str) -> int:
        ...     return int(s)
        >>> is_failed(parse("nope"))
        True
    """
    @wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T | Exception:
        return attempt_call(lambda: fn(*args, **kwargs))
    return wrapper
