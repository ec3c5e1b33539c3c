"""Short-circuiting evaluation of binding chains.

A binding chain is an ordered list of (name, step) pairs. Each step is a
callable receiving a Scope of the names bound before it. Steps run in order;
the first failed value stops the chain and becomes the result. When every
step succeeds the body runs with the full scope.

    >>> attempt_all(
    ...     {
    ...         "user": lambda s: find_user(42),
    ...         "account": lambda s: find_account(s.user),
    ...     },
    ...     lambda s: s.account.balance,
    ...     mark_as_handler(lambda f: f"lookup failed: {failure_message(f)}"),
    ... )

attempt_all lets exceptions from steps propagate; try_all converts them into
failed values through attempt_call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable

from faultline.foundation.config import get_settings
from faultline.foundation.errors import BindingError
from faultline.observability import get_logger

from .bridge import attempt_call
from .classify import failure_message, is_failed
from .handler import invoke_else

Step = Callable[["Scope"], Any]
Bindings = Mapping[str, Step] | Iterable[tuple[str, Step]]

_log = get_logger("faultline.evaluate")
_UNSET: Any = object()


class Scope(Mapping[str, Any]):
    """Read-only view of the names bound so far. Supports `scope["x"]` and `scope.x`.

    Names of Scope's own attributes (get, items, keys, values, bind) cannot be bound.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        object.__setattr__(self, "_values", dict(values) if values else {})

    def bind(self, name: str, value: Any) -> Scope:
        """New scope with `name` (re)bound to `value`."""
        return Scope({**self._values, name: value})

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __getattr__(self, name: str) -> Any:
        if name == "_values":
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"'{name}' is not bound in this scope") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Scope is read-only")

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Scope({self._values!r})"


# Attribute access resolves these before bound names, so they cannot be bound.
_RESERVED_NAMES = frozenset(dir(Scope))


def _normalize(bindings: Bindings) -> list[tuple[str, Step]]:
    """Validate the whole chain up front so no step runs for a malformed chain."""
    raw = list(bindings.items()) if isinstance(bindings, Mapping) else list(bindings)
    pairs: list[tuple[str, Step]] = []
    for pair in raw:
        try:
            name, step = pair
        except (TypeError, ValueError):
            raise BindingError(f"expected a (name, step) pair, got {pair!r}") from None
        if not isinstance(name, str) or not name.isidentifier():
            raise BindingError("name must be an identifier string", name=repr(name))
        if name in _RESERVED_NAMES:
            raise BindingError("name shadows a Scope attribute", name=name)
        if not callable(step):
            raise BindingError(f"step must be callable, got {type(step).__name__}", name=name)
        pairs.append((name, step))
    return pairs


def _evaluate(bindings: Bindings, body: Step, else_: Any, trap: bool) -> Any:
    pairs = _normalize(bindings)
    if not callable(body):
        raise BindingError(f"body must be callable, got {type(body).__name__}")
    trace = get_settings().evaluation.trace_steps

    scope = Scope()
    for index, (name, step) in enumerate(pairs):
        value = attempt_call(lambda: step(scope)) if trap else step(scope)
        failed = is_failed(value)
        if trace:
            _log.debug("binding evaluated", binding=name, index=index, failed=failed)
        if failed:
            if _log.is_enabled_for(logging.DEBUG):
                _log.debug("short-circuit", binding=name, index=index, message=failure_message(value))
            return value if else_ is _UNSET else invoke_else(else_, value)
        scope = scope.bind(name, value)

    result = body(scope)
    if else_ is not _UNSET and is_failed(result):
        return invoke_else(else_, result)
    return result


def attempt_all(bindings: Bindings, body: Step, else_: Any = _UNSET) -> Any:
    """Evaluate a binding chain, short-circuiting on the first failed value.

    Args:
        bindings: Mapping or (name, step) pairs; each step receives the Scope so far
        body: Called with the full Scope once every binding succeeded
        else_: Fallback for a failed result. A FailureHandler is called with
            the failure; any other value is returned as is.

    Raises:
        BindingError: If the chain or body is malformed (before any step runs)
    """
    return _evaluate(bindings, body, else_, trap=False)


def try_all(bindings: Bindings, body: Step, else_: Any = _UNSET) -> Any:
    """attempt_all, with each binding step run through attempt_call.

    Exceptions raised by steps become failed values; the body is not wrapped.
    """
    return _evaluate(bindings, body, else_, trap=True)
