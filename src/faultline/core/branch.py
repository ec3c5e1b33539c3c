"""Branch on a single value's classification."""

from __future__ import annotations

from typing import Any, Callable

from .classify import is_failed


def if_ok(value: Any, on_ok: Callable[[Any], Any], on_failed: Callable[[Any], Any] | None = None) -> Any:
    """on_ok(value) when ok; on_failed(value) when failed (value itself without on_failed)."""
    if not is_failed(value):
        return on_ok(value)
    return on_failed(value) if on_failed is not None else value


def when_ok(value: Any, fn: Callable[[Any], Any]) -> Any:
    return value if is_failed(value) else fn(value)


def when_failed(value: Any, fn: Callable[[Any], Any]) -> Any:
    return fn(value) if is_failed(value) else value
