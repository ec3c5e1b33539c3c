"""Failure-handler tag.

An else-branch may be a plain fallback value or a function that inspects the
failure. Functions must be marked explicitly, otherwise a callable fallback
would be ambiguous:

    >>> attempt_all({"x": lambda s: fail(None, "boom")}, lambda s: s.x, "fallback")
    'fallback'
    >>> attempt_all({"x": lambda s: fail(None, "boom")}, lambda s: s.x,
    ...             mark_as_handler(failure_message))
    'boom'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Callable, Generic, TypeVar

from .classify import is_failed

T = TypeVar("T")


class BranchKind(StrEnum):
    """What an else-branch is."""
    VALUE = "value"
    HANDLER = "handler"


@dataclass(frozen=True, slots=True)
class FailureHandler(Generic[T]):
    """Callable tagged as receiving the failed result."""

    fn: Callable[[Any], T]
    kind: BranchKind = BranchKind.HANDLER

    def __call__(self, failed: Any) -> T:
        return self.fn(failed)


def mark_as_handler(fn: Callable[[Any], T]) -> FailureHandler[T]:
    """Tag `fn` as a failure handler. Works as a decorator.

    Raises:
        TypeError: If fn is not callable
    """
    if isinstance(fn, FailureHandler):
        return fn
    if not callable(fn):
        raise TypeError(f"Only callables can be marked as failure handlers, got {type(fn).__name__}")
    return FailureHandler(fn)


def branch_kind(branch: object) -> BranchKind:
    return branch.kind if isinstance(branch, FailureHandler) else BranchKind.VALUE


def invoke_else(branch: Any, failed: Any) -> Any:
    """Resolve an else-branch against a failed result."""
    if branch_kind(branch) is BranchKind.HANDLER:
        return branch(failed)
    return branch


def attempt(handler: Callable[[Any], T], value: Any) -> Any:
    """Return handler(value) if value failed, otherwise value unchanged."""
    return handler(value) if is_failed(value) else value
