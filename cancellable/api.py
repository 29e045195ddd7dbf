"""Free-function cancellation API.

``cancel``, ``is_cancelled`` and ``is_cancel_error`` accept either a
:class:`~cancellable.runner.CancellableTask` (acting on its latest call) or an
:class:`~cancellable.runner.Invocation` (acting on that call only).
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Union, runtime_checkable

from .errors import is_cancel_error


@runtime_checkable
class SupportsCancel(Protocol):
    """Anything exposing the task cancellation controls."""

    def cancel(self, message: Optional[str] = None) -> None: ...

    def is_cancelled(self) -> bool: ...


def cancel(
    tasks: Union[SupportsCancel, Iterable[SupportsCancel]],
    message: Optional[str] = None,
) -> None:
    """Cancel one task or each task of an iterable with ``message``.

    Tasks that already settled (or never ran) are skipped silently.
    """
    targets = [tasks] if isinstance(tasks, SupportsCancel) else list(tasks)
    for task in targets:
        task.cancel(message)


def is_cancelled(task: SupportsCancel) -> bool:
    """Whether a cancellation was accepted while ``task`` was running."""
    return task.is_cancelled()


__all__ = [
    "SupportsCancel",
    "cancel",
    "is_cancelled",
    "is_cancel_error",
]
