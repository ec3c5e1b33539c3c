"""Open classification of arbitrary values as ok or failed.

Every value classifies as exactly one of ok/failed. Dispatch priority:
1. None              -> ok, message "None"
2. Failure           -> failed, data/message from its fields
3. BaseException     -> failed, message str(exc), data from FailureError.data
4. registered types  -> closest registered class in the value's MRO
5. anything else     -> ok, message str(value)

New types plug in through the registry without touching this module:

    >>> @register_classification
    ... class HttpResponse:
    ...     @staticmethod
    ...     def is_failed(r): return r.status >= 400
    ...     @staticmethod
    ...     def data(r): return r.status
    ...     @staticmethod
    ...     def message(r): return r.reason
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable

from faultline.foundation.errors import Failure, FailureError, safe_str
from faultline.observability import get_logger

_log = get_logger("faultline.classify")


@dataclass(frozen=True, slots=True)
class Verdict:
    """Full classification of a single value."""

    failed: bool
    data: Any = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return not self.failed


@runtime_checkable
class Classification(Protocol):
    """Classification strategy for one type (and its subclasses)."""

    def is_failed(self, value: Any) -> bool: ...
    def data(self, value: Any) -> Any: ...
    def message(self, value: Any) -> str: ...


def _never_failed(_: object) -> bool:
    return False


def _no_data(_: object) -> None:
    return None


@dataclass(frozen=True, slots=True)
class FunctionClassification:
    """Classification assembled from plain callables. Unset parts default to the ok-value behavior."""

    is_failed: Callable[[Any], bool] = _never_failed
    data: Callable[[Any], Any] = _no_data
    message: Callable[[Any], str] = safe_str


_NONE_VERDICT = Verdict(failed=False, data=None, message="None")
_BUILTIN_KINDS: tuple[type, ...] = (type(None), Failure, BaseException)


class ClassifierRegistry:
    """Registry mapping types to their Classification.

    Writes are serialized with a lock and swap in fresh dicts; reads never
    lock and always see a consistent snapshot. Lookups walk the value type's
    MRO so registering a base class covers its subclasses.
    """

    __slots__ = ("_entries", "_cache", "_lock")

    def __init__(self) -> None:
        self._entries: dict[type, Classification] = {}
        self._cache: dict[type, Classification | None] = {}
        self._lock = threading.RLock()

    def register(self, cls: type, classification: Classification, *, replace: bool = False) -> None:
        """Register a classification for `cls` and its subclasses.

        Raises:
            TypeError: If cls is not a type or classification lacks the protocol methods
            ValueError: If cls is a built-in kind or already registered (without replace)
        """
        if not isinstance(cls, type):
            raise TypeError(f"Expected a type, got {cls!r}")
        if issubclass(cls, _BUILTIN_KINDS):
            raise ValueError(f"'{cls.__name__}' has a built-in classification that cannot be overridden")
        if not isinstance(classification, Classification):
            raise TypeError(f"{classification!r} does not implement is_failed/data/message")
        with self._lock:
            if cls in self._entries and not replace:
                raise ValueError(f"Classification for '{cls.__name__}' already registered. Pass replace=True.")
            self._entries = {**self._entries, cls: classification}
            self._cache = {}

    def unregister(self, cls: type) -> bool:
        """Remove the classification for `cls`. Returns True if found."""
        with self._lock:
            if cls not in self._entries:
                return False
            self._entries = {k: v for k, v in self._entries.items() if k is not cls}
            self._cache = {}
            return True

    def lookup(self, cls: type) -> Classification | None:
        """Closest registered classification for `cls`, or None."""
        cache = self._cache
        try:
            return cache[cls]
        except KeyError:
            pass
        entries = self._entries
        found = next((entries[base] for base in cls.__mro__ if base in entries), None)
        cache[cls] = found
        return found

    def __contains__(self, cls: object) -> bool:
        return cls in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    # ─── Queries ─────────────────────────────────────────────────────

    def is_failed(self, value: object) -> bool:
        """Fast path used by the evaluators: never renders a message."""
        if value is None:
            return False
        if isinstance(value, (Failure, BaseException)):
            return True
        if (c := self.lookup(type(value))) is None:
            return False
        return self._failed(c, value) is not False

    def classify(self, value: object) -> Verdict:
        """Classify `value` completely. Never raises.

        The ok/failed answer always agrees with is_failed(). Only a raising
        is_failed() marks the value failed; a raising data() or message()
        falls back to None or str(value).
        """
        if value is None:
            return _NONE_VERDICT
        if isinstance(value, Failure):
            return Verdict(failed=True, data=value.data, message=safe_str(value.message))
        if isinstance(value, BaseException):
            data = value.data if isinstance(value, FailureError) else None
            return Verdict(failed=True, data=data, message=safe_str(value))
        if (c := self.lookup(type(value))) is None:
            return Verdict(failed=False, data=None, message=safe_str(value))
        if isinstance(failed := self._failed(c, value), Exception):
            return Verdict(failed=True, data=failed, message=safe_str(failed))
        try:
            data = c.data(value)
        except Exception as exc:
            self._report(value, exc, part="data")
            data = None
        try:
            message = safe_str(c.message(value))
        except Exception as exc:
            self._report(value, exc, part="message")
            message = safe_str(value)
        return Verdict(failed=failed, data=data, message=message)

    def _failed(self, c: Classification, value: object) -> bool | Exception:
        """c.is_failed(value) as a bool, or the exception it raised."""
        try:
            return bool(c.is_failed(value))
        except Exception as exc:
            self._report(value, exc, part="is_failed")
            return exc

    @staticmethod
    def _report(value: object, exc: Exception, *, part: str) -> None:
        _log.warning("classification raised", value_type=type(value).__qualname__, part=part,
                     exc_type=type(exc).__name__, error=safe_str(exc))


# ═════════════════════════════════════════════════════════════════════════════
# Global Registry & Module-Level API
# ═════════════════════════════════════════════════════════════════════════════

_registry = ClassifierRegistry()


def get_classifier() -> ClassifierRegistry:
    """Get the process-wide classifier registry."""
    return _registry


def reset_classifier() -> ClassifierRegistry:
    """Replace the global registry with an empty one (useful for testing)."""
    global _registry
    _registry = ClassifierRegistry()
    return _registry


def register_classification(
    cls: type,
    classification: Classification | None = None,
    *,
    failed: Callable[[Any], bool] | None = None,
    data: Callable[[Any], Any] | None = None,
    message: Callable[[Any], str] | None = None,
    replace: bool = False,
) -> type:
    """Register how instances of `cls` classify. Returns `cls`, so it doubles as a class decorator.

    Accepts a full Classification, individual callables, or nothing when
    `cls` itself implements is_failed/data/message as static or class methods.

    Example:
        >>> register_classification(Response, failed=lambda r: not r.ok, message=lambda r: r.reason)
    """
    if classification is None:
        if failed is None and data is None and message is None:
            if not isinstance(cls, Classification):
                raise TypeError(f"'{getattr(cls, '__name__', cls)}' does not implement is_failed/data/message; "
                                "pass a classification or callables")
            classification = cls  # type: ignore[assignment]
        else:
            classification = FunctionClassification(
                is_failed=failed or _never_failed,
                data=data or _no_data,
                message=message or safe_str,
            )
    _registry.register(cls, classification, replace=replace)
    return cls


def is_failed(value: object) -> bool:
    """True when `value` classifies as failed."""
    return _registry.is_failed(value)


def is_ok(value: object) -> bool:
    return not _registry.is_failed(value)


def classify(value: object) -> Verdict:
    return _registry.classify(value)


def failure_data(value: object) -> Any:
    """Failure payload of `value`; None for values without one."""
    return _registry.classify(value).data


def failure_message(value: object) -> str:
    """Message of `value`: the failure message, or str(value) for ok values."""
    return _registry.classify(value).message
