"""Exception types for faultline.

Failed values are returned, not raised. These exceptions cover the two places
where raising is still the right tool:
- misuse of the library itself (malformed binding chains, bad steps)
- callers that need to leave result-land and raise a failure as an exception
"""

from __future__ import annotations

from typing import Any, Self


def safe_str(value: object) -> str:
    """str(value), falling back to the default object repr when __str__ raises."""
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


class FaultlineError(Exception):
    """Base class for all exceptions raised by faultline."""


class BindingError(FaultlineError, TypeError):
    """A binding chain, step, or body has the wrong shape.

    Raised before any step of the offending chain runs.
    """

    def __init__(self, message: str, *, name: str | None = None) -> None:
        self.name = name
        super().__init__(f"binding '{name}': {message}" if name else message)


class FailureError(FaultlineError):
    """Exception carrying a structured payload.

    The classifier reads `data` as the failure data when a FailureError is
    classified, so raising one inside `try_all` keeps the payload intact.

    Example:
        >>> exc = FailureError("user not found", data={"id": 7})
        >>> failure_data(exc)
        {'id': 7}
    """

    __slots__ = ("data",)

    def __init__(self, message: str = "", data: Any = None) -> None:
        self.data = data
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)

    @classmethod
    def create(cls, message: str, data: Any = None) -> Self:
        """Factory mirroring `fail()` argument order (message first here)."""
        return cls(message, data=data)
