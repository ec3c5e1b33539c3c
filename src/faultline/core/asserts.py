"""Predicate-to-failure adapters for use inside binding chains.

    >>> attempt_all(
    ...     {"name": lambda s: assert_not_empty(form.get("name"), "name is required")},
    ...     lambda s: s.name.title(),
    ... )
"""

from __future__ import annotations

from numbers import Number
from typing import Any, Callable, TypeVar

from faultline.foundation.errors import Failure, fail

T = TypeVar("T")


def assert_with(pred: Callable[[T], Any], value: T, message: str) -> T | Failure:
    """Return `value` if pred(value) is truthy, else fail(None, message)."""
    return value if pred(value) else fail(None, message)


def assert_not_none(value: T, message: str = "Value must not be None") -> T | Failure:
    return assert_with(lambda v: v is not None, value, message)


assert_some = assert_not_none


def assert_none(value: T, message: str = "Value must be None") -> T | Failure:
    return assert_with(lambda v: v is None, value, message)


def _not_empty(value: Any) -> bool:
    try:
        return value is not None and len(value) > 0
    except TypeError:
        return False


def assert_not_empty(value: T, message: str = "Value must not be empty") -> T | Failure:
    """Passes sized values with at least one element; None and unsized values fail."""
    return assert_with(_not_empty, value, message)


def assert_number(value: T, message: str = "Value must be a number") -> T | Failure:
    """Passes numbers.Number instances other than bool."""
    return assert_with(lambda v: isinstance(v, Number) and not isinstance(v, bool), value, message)
