"""faultline - open result classification and short-circuiting combinators.

Any value is a result: None and plain values are ok, Failure values and
exceptions are failed, and other types can register their own rules.
Chains of dependent steps stop at the first failure without relying on
exceptions for control flow.

Quick Start:
    >>> from faultline import attempt_all, fail, failure_message, mark_as_handler
    >>>
    >>> def parse_age(raw: str):
    ...     return int(raw) if raw.isdigit() else fail(raw, "not a number: %s", raw)
    >>>
    >>> attempt_all(
    ...     {
    ...         "age": lambda s: parse_age("42"),
    ...         "group": lambda s: "adult" if s.age >= 18 else fail(s.age, "too young"),
    ...     },
    ...     lambda s: f"{s.group} ({s.age})",
    ... )
    'adult (42)'

Trapping exceptions:
    >>> from faultline import try_all, is_failed
    >>> result = try_all({"n": lambda s: int("x")}, lambda s: s.n)
    >>> is_failed(result)
    True

Threading:
    >>> from faultline import ok_thread
    >>> ok_thread(" 7 ", str.strip, int, (pow, 2))
    49
"""

from __future__ import annotations

__version__ = "0.1.0"

# Failure values & errors
from .foundation.errors import BindingError, Failure, FailureError, FaultlineError, fail

# Settings
from .foundation.config import FaultlineSettings, clear_settings_cache, get_settings

# Logging
from .observability import configure_logging, get_logger

# Core
from .core import (
    FATAL_EXCEPTIONS,
    BranchKind,
    Classification,
    ClassifierRegistry,
    FailureHandler,
    FunctionClassification,
    Scope,
    Verdict,
    as_ok_thread,
    assert_none,
    assert_not_empty,
    assert_not_none,
    assert_number,
    assert_some,
    assert_with,
    attempt,
    attempt_all,
    attempt_call,
    attempt_fn,
    attempt_thread,
    attempt_thread_last,
    classify,
    failure_data,
    failure_message,
    get_classifier,
    if_ok,
    invoke_else,
    is_failed,
    is_ok,
    mark_as_handler,
    ok_thread,
    ok_thread_last,
    register_classification,
    reset_classifier,
    try_all,
    when_failed,
    when_ok,
)

__all__ = [
    "__version__",
    # Failure values & errors
    "Failure", "fail", "FaultlineError", "FailureError", "BindingError",
    # Classification
    "is_failed", "is_ok", "failure_data", "failure_message", "classify", "Verdict",
    "Classification", "FunctionClassification", "ClassifierRegistry",
    "register_classification", "get_classifier", "reset_classifier",
    # Exception bridge
    "attempt_call", "attempt_fn", "FATAL_EXCEPTIONS",
    # Evaluators
    "Scope", "attempt_all", "try_all",
    # Handlers
    "BranchKind", "FailureHandler", "mark_as_handler", "invoke_else", "attempt",
    # Threading
    "ok_thread", "ok_thread_last", "as_ok_thread", "attempt_thread", "attempt_thread_last",
    # Branching
    "if_ok", "when_ok", "when_failed",
    # Assertions
    "assert_with", "assert_not_none", "assert_some", "assert_none", "assert_not_empty", "assert_number",
    # Settings & logging
    "FaultlineSettings", "get_settings", "clear_settings_cache", "configure_logging", "get_logger",
]
