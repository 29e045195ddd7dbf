"""Internal state holder for task invocations.

Dataclass used by ``Invocation`` and ``CancellationChannel`` to track the
run status and cancellation flag of one call. Module scoped to keep those
classes focused and to comply with one-class-per-file policy for public types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    """Lifecycle of one invocation: ``IDLE -> RUNNING -> SETTLED``."""

    IDLE = "idle"
    RUNNING = "running"
    SETTLED = "settled"


@dataclass
class RunState:
    """Mutable state of one invocation.

    ``cancelled`` is never reset once set; ``message`` keeps the message of the
    first accepted cancellation.
    """

    status: TaskStatus = TaskStatus.IDLE
    cancelled: bool = False
    message: Optional[str] = None

    @property
    def running(self) -> bool:
        return self.status is TaskStatus.RUNNING

    def mark_cancelled(self, message: Optional[str]) -> None:
        if not self.cancelled:
            self.cancelled = True
            self.message = message


__all__ = ["TaskStatus", "RunState"]
