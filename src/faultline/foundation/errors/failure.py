"""The Failure value object and its constructor.

Uses a frozen Pydantic model so failures are immutable, structurally equal,
and serializable. `fail()` bypasses validation via model_construct since the
data payload is deliberately unconstrained.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import FailureError


class Failure(BaseModel):
    """Explicit failed value carrying arbitrary data and a message.

    Always classified as failed. Constructed once and never mutated; two
    failures are equal when their data and message are equal.

    Example:
        >>> f = Failure(data={"field": "email"}, message="invalid email")
        >>> f.message
        'invalid email'
        >>> f == fail({"field": "email"}, "invalid email")
        True
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        extra="forbid",
        revalidate_instances="never",
        json_schema_extra={"title": "Failure", "examples": [{"data": None, "message": "boom"}]},
    )

    data: Any = Field(default=None, description="Arbitrary payload describing the failure")
    message: str = Field(default="", description="Human-readable failure message")

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"Failure(data={self.data!r}, message={self.message!r})"

    def __hash__(self) -> int:
        try:
            return hash((Failure, self.data, self.message))
        except TypeError:
            # unhashable payloads hash by message only; equality stays structural
            return hash((Failure, self.message))

    def to_exception(self) -> FailureError:
        """Convert to a raisable FailureError carrying the same data."""
        return FailureError(self.message, data=self.data)


def fail(data: Any, message: str = "", *args: Any) -> Failure:
    """Construct a Failure.

    With extra positional args the message is treated as a printf-style
    template: `fail(None, "missing %s", "x").message == "missing x"`. Non-str
    messages are converted with str().

    Raises:
        TypeError: If args do not match the template's placeholders
    """
    message = str(message)
    if args:
        message = message % args
    return Failure.model_construct(data=data, message=message)
