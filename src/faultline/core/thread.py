"""Threading combinators: pipe a value through steps, stopping at the first failure.

A step is a callable or a partial call `(fn, *args)`:
- ok_thread places the running value first:  fn(value, *args)
- ok_thread_last places it last:             fn(*args, value)

    >>> ok_thread("  42 ", str.strip, int, (divmod, 5))
    (8, 2)
    >>> ok_thread_last([3, 1, 2], (map, str), (sorted,), (",".join,))
    '1,2,3'

All of them are binding chains underneath, so they share attempt_all's
short-circuit and laziness guarantees.
"""

from __future__ import annotations

import warnings
from typing import Any, Callable

from faultline.foundation.config import get_settings
from faultline.foundation.errors import BindingError

from .evaluate import Step, attempt_all

ThreadStep = Callable[[Any], Any] | tuple[Any, ...]

_VALUE = "value"


def _check_step(step: ThreadStep) -> tuple[Callable[..., Any], tuple[Any, ...]]:
    if isinstance(step, tuple):
        if not step or not callable(step[0]):
            raise BindingError(f"partial step must be (callable, *args), got {step!r}")
        return step[0], step[1:]
    if not callable(step):
        raise BindingError(f"step must be callable or a (callable, *args) tuple, got {type(step).__name__}")
    return step, ()


def _scoped(step: ThreadStep, *, last: bool) -> Step:
    fn, args = _check_step(step)
    if last:
        return lambda s: fn(*args, s[_VALUE])
    return lambda s: fn(s[_VALUE], *args)


def as_ok_thread(seed: Any, name: str, *steps: Step) -> Any:
    """Rebind `name` to seed, then to each step's result; stop at the first failure.

    Each step receives the Scope with `name` bound to the previous value.

    Example:
        >>> as_ok_thread(5, "n", lambda s: s.n + 1, lambda s: s.n * 10)
        60
        >>> as_ok_thread(5, "n")
        5
    """
    return attempt_all([(name, lambda _: seed), *((name, step) for step in steps)], lambda s: s[name])


def ok_thread(seed: Any, *steps: ThreadStep) -> Any:
    """Thread `seed` through steps as the leading argument, short-circuiting on failure."""
    return as_ok_thread(seed, _VALUE, *(_scoped(step, last=False) for step in steps))


def ok_thread_last(seed: Any, *steps: ThreadStep) -> Any:
    """Thread `seed` through steps as the trailing argument, short-circuiting on failure."""
    return as_ok_thread(seed, _VALUE, *(_scoped(step, last=True) for step in steps))


# ═════════════════════════════════════════════════════════════════════════════
# Deprecated
# ═════════════════════════════════════════════════════════════════════════════


def _deprecated(name: str, replacement: str) -> None:
    if get_settings().evaluation.warn_deprecated:
        warnings.warn(f"{name}() is deprecated; use {replacement}()", DeprecationWarning, stacklevel=3)


def attempt_thread(seed: Any, *steps: ThreadStep) -> Any:
    """Deprecated: use ok_thread.

    With no steps the seed is returned as given, without classifying it.
    """
    _deprecated("attempt_thread", "ok_thread")
    if not steps:
        return seed
    return ok_thread(seed, *steps)


def attempt_thread_last(seed: Any, *steps: ThreadStep) -> Any:
    """Deprecated: use ok_thread_last.

    With no steps the seed is returned as given, without classifying it.
    """
    _deprecated("attempt_thread_last", "ok_thread_last")
    if not steps:
        return seed
    return ok_thread_last(seed, *steps)
