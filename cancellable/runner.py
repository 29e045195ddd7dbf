"""Cancellable step-sequence runner (public API facade).

Purpose
-------
Expose the task factory and its supporting types via the canonical
``cancellable.runner`` import path while the concrete implementations live
under ``runner_parts`` for organization.

Notes
-----
- ``create`` turns a generator function into a ``CancellableTask``.
- Calling a task returns an ``Invocation``: awaitable, and the per-call
  cancellation handle.
- ``StepDriver`` and ``CancellationChannel`` are exported for callers that
  want to drive a generator without the task wrapper.
"""

from .runner_parts.cancellation_channel import CancellationChannel
from .runner_parts.invocation import Invocation
from .runner_parts.state import RunState, TaskStatus
from .runner_parts.step_driver import StepDriver
from .runner_parts.task import CancellableTask, StepBody, create

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
