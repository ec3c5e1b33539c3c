"""Foundation: failure values, exception types, configuration."""

from .config import FaultlineSettings, clear_settings_cache, get_settings
from .errors import BindingError, Failure, FailureError, FaultlineError, fail

__all__ = [
    "Failure", "fail", "FaultlineError", "FailureError", "BindingError",
    "FaultlineSettings", "get_settings", "clear_settings_cache",
]
