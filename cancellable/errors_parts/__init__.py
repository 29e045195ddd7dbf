"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `cancellable.errors` for the stable surface.
"""

from .cancel_error import CancelError
from .classification import classify_exception, is_cancel_error
from .error_code import ErrorCode
from .invalid_step_sequence_error import InvalidStepSequenceError

__all__ = [
    "CancelError",
    "ErrorCode",
    "InvalidStepSequenceError",
    "classify_exception",
    "is_cancel_error",
]
