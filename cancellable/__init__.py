"""cancellable package

Run generator-based task bodies as asyncio operations that can be cancelled
cooperatively from outside their call stack.

Purpose:
    A task body is a generator function. Each ``yield`` hands the runner an
    awaitable to wait for, an exception to raise at that point, or a plain
    value to get back. Cancelling a running task throws a
    :class:`CancelError` into the body at its current ``yield`` so its own
    ``try/except/finally`` decides the outcome.

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create`, :class:`CancellableTask`, :class:`Invocation`
    - Control: :func:`cancel`, :func:`is_cancelled`, :func:`is_cancel_error`
    - Exceptions: :class:`CancelError`, :class:`InvalidStepSequenceError`
    - Namespace bundle: ``Cancellable``

Example:
    >>> @create
    ... def fetch(url):
    ...     try:
    ...         body = yield download(url)
    ...         return body
    ...     except CancelError:
    ...         return None
"""

from types import SimpleNamespace

from .api import cancel, is_cancel_error, is_cancelled
from .errors import CancelError, ErrorCode, InvalidStepSequenceError
from .runner import CancellableTask, Invocation, StepBody, TaskStatus, create

__version__ = "0.1.0"

Cancellable = SimpleNamespace(
    CancelError=CancelError,
    create=create,
    cancel=cancel,
    is_cancelled=is_cancelled,
    is_cancel_error=is_cancel_error,
)

__all__ = [
    "__version__",
    "CancelError",
    "ErrorCode",
    "InvalidStepSequenceError",
    "CancellableTask",
    "Invocation",
    "StepBody",
    "TaskStatus",
    "create",
    "cancel",
    "is_cancelled",
    "is_cancel_error",
    "Cancellable",
]
