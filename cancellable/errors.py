"""Task error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``cancellable.errors_parts`` to maintain a stable import path while
enforcing the one-class-per-file governance rule.
"""

from .errors_parts.cancel_error import CancelError
from .errors_parts.classification import classify_exception, is_cancel_error
from .errors_parts.error_code import ErrorCode
from .errors_parts.invalid_step_sequence_error import InvalidStepSequenceError

__all__ = [
    "CancelError",
    "ErrorCode",
    "InvalidStepSequenceError",
    "classify_exception",
    "is_cancel_error",
]
