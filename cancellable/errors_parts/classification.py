"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Only the exception type is consulted; message text never changes the result.
"""
from __future__ import annotations

import asyncio

from .cancel_error import CancelError
from .error_code import ErrorCode
from .invalid_step_sequence_error import InvalidStepSequenceError


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ``CancelError`` and ``asyncio.CancelledError``.
        2. Timeout exceptions (sync/async).
        3. ``InvalidStepSequenceError``.
        4. Any other ``Exception`` is ``FAILED``.
        5. ``UNKNOWN`` fallback for other ``BaseException`` subclasses.
    """
    if isinstance(exc, (CancelError, asyncio.CancelledError)):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, InvalidStepSequenceError):
        return ErrorCode.INVALID
    if isinstance(exc, Exception):
        return ErrorCode.FAILED
    return ErrorCode.UNKNOWN


def is_cancel_error(error: object) -> bool:
    """Return ``True`` only for :class:`CancelError` instances."""
    return isinstance(error, CancelError)


__all__ = [
    "classify_exception",
    "is_cancel_error",
]
