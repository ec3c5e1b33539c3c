"""Classification, evaluators, and combinators."""

from .asserts import assert_none, assert_not_empty, assert_not_none, assert_number, assert_some, assert_with
from .branch import if_ok, when_failed, when_ok
from .bridge import FATAL_EXCEPTIONS, attempt_call, attempt_fn
from .classify import (
    Classification,
    ClassifierRegistry,
    FunctionClassification,
    Verdict,
    classify,
    failure_data,
    failure_message,
    get_classifier,
    is_failed,
    is_ok,
    register_classification,
    reset_classifier,
)
from .evaluate import Scope, attempt_all, try_all
from .handler import BranchKind, FailureHandler, attempt, invoke_else, mark_as_handler
from .thread import as_ok_thread, attempt_thread, attempt_thread_last, ok_thread, ok_thread_last

__all__ = [
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
]
