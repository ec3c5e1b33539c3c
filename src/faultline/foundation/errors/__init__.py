"""Failure values and exception types.

- Failure/fail: the explicit failed value and its constructor
- FailureError: exception carrying a structured payload
- FaultlineError/BindingError: library misuse
- safe_str: message rendering that never raises
"""

from .errors import BindingError, FailureError, FaultlineError, safe_str
from .failure import Failure, fail

__all__ = [
    "Failure", "fail",
    "FaultlineError", "FailureError", "BindingError", "safe_str",
]
