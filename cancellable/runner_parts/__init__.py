"""Runner parts package.

Re-exports the step driver, cancellation channel and task types for optional
direct imports. Prefer importing from `cancellable.runner` for the stable
surface.
"""

from .cancellation_channel import CancellationChannel
from .invocation import Invocation
from .state import RunState, TaskStatus
from .step_driver import StepDriver
from .task import CancellableTask, StepBody, create

__all__ = [
    "CancellableTask",
    "CancellationChannel",
    "Invocation",
    "RunState",
    "StepBody",
    "StepDriver",
    "TaskStatus",
    "create",
]
