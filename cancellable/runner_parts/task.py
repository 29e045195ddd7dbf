"""Cancellable task factory.

``create(fn)`` wraps a generator function (the task body) into a callable
:class:`CancellableTask`. Each call starts a fresh :class:`Invocation` on the
running event loop and returns it. The task keeps a reference to its latest
invocation so ``task.cancel()`` / ``task.is_cancelled()`` act on the most
recent call; callers that run the same task concurrently should keep the
returned invocations and cancel those instead.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from typing import Any, Callable, Generator, Optional

from ..errors import InvalidStepSequenceError
from .invocation import Invocation

StepBody = Callable[..., Generator[Any, Any, Any]]


class CancellableTask:
    """Callable wrapper around a task body.

    Usable directly (``create(body)``) or as a decorator (``@create``).
    """

    def __init__(self, fn: StepBody) -> None:
        if not callable(fn):
            raise TypeError(f"task body must be callable, got {type(fn).__name__}")
        self._fn = fn
        self._name: str = getattr(fn, "__qualname__", None) or repr(fn)
        self._latest: Optional[Invocation] = None
        functools.update_wrapper(self, fn)

    @property
    def latest(self) -> Optional[Invocation]:
        """Most recent invocation, or ``None`` before the first call."""
        return self._latest

    def __call__(self, *args: Any, **kwargs: Any) -> Invocation:
        """Start the body with ``args``/``kwargs`` and return its invocation.

        Must be called while an event loop is running. The body runs
        synchronously up to its first ``yield`` before this returns.
        """
        loop = asyncio.get_running_loop()
        sequence = self._fn(*args, **kwargs)
        if not inspect.isgenerator(sequence):
            if inspect.iscoroutine(sequence):
                sequence.close()
            raise InvalidStepSequenceError(self._name, type(sequence).__name__)
        invocation = Invocation(self._name, sequence, loop)
        self._latest = invocation
        return invocation

    def cancel(self, message: Optional[str] = None) -> None:
        """Cancel the latest invocation; a no-op if none is running."""
        if self._latest is not None:
            self._latest.cancel(message)

    def is_cancelled(self) -> bool:
        return self._latest is not None and self._latest.is_cancelled()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellableTask({self._name})"


def create(fn: StepBody) -> CancellableTask:
    """Wrap the generator function ``fn`` into a :class:`CancellableTask`."""
    return CancellableTask(fn)


__all__ = ["CancellableTask", "StepBody", "create"]
