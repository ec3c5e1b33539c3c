"""Tests for attempt_all / try_all binding chains.

Validates:
- Ordered, lazy evaluation with scope threading
- Short-circuit on first failure (later steps never run)
- Else-branch handling (handlers vs plain values)
- Exception propagation vs trapping
"""

from __future__ import annotations

import pytest

from faultline import (
    BindingError,
    FailureError,
    Scope,
    attempt_all,
    fail,
    failure_data,
    failure_message,
    is_failed,
    mark_as_handler,
    try_all,
)


class Counter:
    """Records calls so tests can assert a step never ran."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, value: object = "side effect") -> object:
        self.calls += 1
        return value


# ═════════════════════════════════════════════════════════════════════════════
# attempt_all
# ═════════════════════════════════════════════════════════════════════════════


def test_all_bindings_succeed() -> None:
    result = attempt_all({"x": lambda s: "a", "y": lambda s: "b"}, lambda s: s.x + s.y)
    assert result == "ab"


def test_later_bindings_see_earlier_names() -> None:
    result = attempt_all(
        [
            ("a", lambda s: 2),
            ("b", lambda s: s.a * 10),
            ("c", lambda s: s["a"] + s["b"]),
        ],
        lambda s: (s.a, s.b, s.c),
    )
    assert result == (2, 20, 22)


def test_short_circuit_returns_failure_unchanged() -> None:
    boom = fail(None, "boom")
    side_effect = Counter()
    body = Counter()

    result = attempt_all({"x": lambda s: boom, "y": lambda s: side_effect()}, body)

    assert result is boom
    assert side_effect.calls == 0
    assert body.calls == 0


def test_exception_value_short_circuits() -> None:
    """A returned (not raised) exception classifies as failed."""
    err = ValueError("returned")
    side_effect = Counter()

    result = attempt_all({"x": lambda s: err, "y": lambda s: side_effect()}, lambda s: s.y)

    assert result is err
    assert side_effect.calls == 0


def test_none_binding_does_not_short_circuit() -> None:
    assert attempt_all({"x": lambda s: None}, lambda s: s.x is None) is True


def test_each_step_runs_once_in_order() -> None:
    order: list[str] = []

    def step(name: str) -> object:
        return lambda s: order.append(name) or name

    attempt_all([("a", step("a")), ("b", step("b")), ("c", step("c"))], lambda s: None)
    assert order == ["a", "b", "c"]


def test_zero_bindings_runs_body() -> None:
    assert attempt_all({}, lambda s: len(s)) == 0
    assert attempt_all([], lambda s: "body") == "body"


def test_body_failure_returned_without_else() -> None:
    f = fail(None, "body failed")
    assert attempt_all({"x": lambda s: 1}, lambda s: f) is f


def test_rebinding_same_name() -> None:
    result = attempt_all([("n", lambda s: 1), ("n", lambda s: s.n + 1), ("n", lambda s: s.n * 5)], lambda s: s.n)
    assert result == 10


def test_step_exceptions_propagate() -> None:
    """attempt_all does not trap exceptions; programming errors surface."""
    with pytest.raises(ZeroDivisionError):
        attempt_all({"x": lambda s: 1 / 0}, lambda s: s.x)


# ═════════════════════════════════════════════════════════════════════════════
# Else Branch
# ═════════════════════════════════════════════════════════════════════════════


def test_else_handler_receives_failure() -> None:
    result = attempt_all({"x": lambda s: fail(None, "boom")}, lambda s: s.x, mark_as_handler(failure_message))
    assert result == "boom"


def test_else_plain_value_returned_verbatim() -> None:
    assert attempt_all({"x": lambda s: fail(None, "boom")}, lambda s: s.x, "fallback") == "fallback"


def test_else_unmarked_callable_is_a_value() -> None:
    """Callables are only invoked when marked as handlers."""
    fallback = Counter()
    result = attempt_all({"x": lambda s: fail(None, "boom")}, lambda s: s.x, fallback)

    assert result is fallback
    assert fallback.calls == 0


def test_else_applies_to_failed_body() -> None:
    result = attempt_all(
        {"x": lambda s: 5},
        lambda s: fail(s.x, "too small"),
        mark_as_handler(lambda f: f"{failure_message(f)}: {failure_data(f)}"),
    )
    assert result == "too small: 5"


def test_else_ignored_on_success() -> None:
    handler = Counter()
    assert attempt_all({"x": lambda s: 5}, lambda s: s.x * 2, mark_as_handler(handler)) == 10
    assert handler.calls == 0


def test_else_none_is_a_real_fallback() -> None:
    assert attempt_all({"x": lambda s: fail(None, "boom")}, lambda s: s.x, None) is None


# ═════════════════════════════════════════════════════════════════════════════
# try_all
# ═════════════════════════════════════════════════════════════════════════════


def test_try_all_traps_step_exceptions() -> None:
    side_effect = Counter()

    result = try_all({"x": lambda s: int("bad"), "y": lambda s: side_effect()}, lambda s: s.y)

    assert isinstance(result, ValueError)
    assert is_failed(result)
    assert side_effect.calls == 0


def test_try_all_preserves_failure_error_data() -> None:
    def load(_: Scope) -> object:
        raise FailureError("user not found", data={"id": 7})

    result = try_all({"user": load}, lambda s: s.user)

    assert failure_data(result) == {"id": 7}
    assert failure_message(result) == "user not found"


def test_try_all_traps_unprintable_exception() -> None:
    class UnprintableError(Exception):
        def __str__(self) -> str:
            raise RuntimeError("str exploded")

    def load(_: Scope) -> object:
        raise UnprintableError()

    result = try_all({"x": load}, lambda s: s.x)

    assert isinstance(result, UnprintableError)
    assert "UnprintableError" in failure_message(result)


def test_try_all_with_handler() -> None:
    result = try_all({"x": lambda s: {}["missing"]}, lambda s: s.x, mark_as_handler(lambda e: type(e).__name__))
    assert result == "KeyError"


def test_try_all_success() -> None:
    assert try_all({"x": lambda s: 2, "y": lambda s: s.x + 1}, lambda s: s.x * s.y) == 6


def test_try_all_does_not_wrap_body() -> None:
    with pytest.raises(RuntimeError, match="from body"):
        try_all({"x": lambda s: 1}, lambda s: (_ for _ in ()).throw(RuntimeError("from body")))


# ═════════════════════════════════════════════════════════════════════════════
# Scope & Validation
# ═════════════════════════════════════════════════════════════════════════════


def test_scope_is_read_only_mapping() -> None:
    scope = Scope({"a": 1}).bind("b", 2)

    assert dict(scope) == {"a": 1, "b": 2}
    assert scope.a == 1
    assert "b" in scope
    with pytest.raises(AttributeError, match="not bound"):
        scope.missing
    with pytest.raises(AttributeError):
        scope.a = 5  # type: ignore[misc]
    with pytest.raises(KeyError):
        scope["missing"]


def test_steps_receive_snapshots() -> None:
    seen: list[Scope] = []
    attempt_all([("a", lambda s: seen.append(s) or 1), ("b", lambda s: seen.append(s) or 2)], lambda s: None)

    assert dict(seen[0]) == {}
    assert dict(seen[1]) == {"a": 1}


@pytest.mark.parametrize(
    "bindings",
    [
        [("x", "not callable")],
        [("not an identifier", lambda s: 1)],
        [(3, lambda s: 1)],
        [("x",)],
        ["xy"],
    ],
)
def test_malformed_chain_rejected_before_running(bindings: list[object]) -> None:
    side_effect = Counter()
    chain = [("first", lambda s: side_effect()), *bindings]

    with pytest.raises(BindingError):
        attempt_all(chain, lambda s: None)  # type: ignore[arg-type]
    assert side_effect.calls == 0


def test_body_must_be_callable() -> None:
    with pytest.raises(BindingError, match="body"):
        attempt_all({"x": lambda s: 1}, "body")  # type: ignore[arg-type]


def test_binding_error_is_type_error() -> None:
    with pytest.raises(TypeError):
        try_all({"x": 1}, lambda s: None)  # type: ignore[dict-item]


@pytest.mark.parametrize("name", ["values", "items", "keys", "get", "bind"])
def test_names_shadowed_by_scope_attributes_rejected(name: str) -> None:
    side_effect = Counter()

    with pytest.raises(BindingError, match="shadows"):
        attempt_all([("first", lambda s: side_effect()), (name, lambda s: [1, 2])], lambda s: getattr(s, name))
    assert side_effect.calls == 0


def test_ordinary_names_resolve_as_attributes() -> None:
    assert attempt_all({"value": lambda s: [1, 2], "total": lambda s: sum(s.value)}, lambda s: s.total) == 3
