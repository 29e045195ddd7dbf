"""Cancellation error type.

Defines the public ``CancelError`` thrown into a running step sequence when
its task is cancelled. Kept isolated to satisfy one-class-per-file policy.
"""

from __future__ import annotations

from typing import Optional

from ..config.defaults import DEFAULT_CANCEL_MESSAGE


class CancelError(RuntimeError):
    """Raised at a step sequence's suspension point when its task is cancelled.

    Unlike :class:`asyncio.CancelledError` this is an ordinary ``Exception``,
    so a task body observes it with plain ``except`` clauses and may recover.

    Attributes:
        message: The message passed to ``cancel`` (``None`` when omitted).
    """

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message if message is not None else DEFAULT_CANCEL_MESSAGE)
        self.message = message

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancelError(message={self.message!r})"


__all__ = ["CancelError"]
