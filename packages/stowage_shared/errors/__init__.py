"""Public shared error API for Stowage components."""

from . import codes
from .factories import make_error, policy_error, validation_error
from .normalize import exception_to_error
from .types import ErrorCategory, ErrorDetail

__all__ = [
    "ErrorCategory",
    "ErrorDetail",
    "codes",
    "exception_to_error",
    "make_error",
    "policy_error",
    "validation_error",
]
