"""Single call of a cancellable task.

An ``Invocation`` owns the run state, step driver and cancellation channel of
one call and settles through a race between the driver's outcome and the
channel's side channel. It is awaitable and doubles as the per-call
cancellation handle.
"""

from __future__ import annotations

import asyncio
import itertools
from typing import Any, Generator, Optional

from ..config import get_settings
from ..errors import classify_exception
from ..log_support import LogContext
from ..logging import get_logger, normalized_log_event
from .cancellation_channel import CancellationChannel
from .state import RunState, TaskStatus
from .step_driver import StepDriver

logger = get_logger(__name__)

_ids = itertools.count(1)


class Invocation:
    """Handle for one running (or settled) call of a task.

    ``await invocation`` returns the step sequence's final value or raises its
    failure, including an uncaught :class:`~cancellable.errors.CancelError`.
    """

    def __init__(
        self,
        name: str,
        sequence: Generator[Any, Any, Any],
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self.id = next(_ids)
        self.name = name
        self._state = RunState()
        self._ctx = LogContext(task=name, invocation_id=self.id)
        self._driver = StepDriver(sequence)
        self._channel = CancellationChannel(self._state, self._driver, loop)

        self._state.status = TaskStatus.RUNNING
        self._driver.start()
        self._emit("task.start", phase="start")
        self._future: asyncio.Task = loop.create_task(self._settle(), name=f"{name}#{self.id}")

    # API -----------------------------------------------------------------
    @property
    def state(self) -> TaskStatus:
        return self._state.status

    def cancel(self, message: Optional[str] = None) -> None:
        """Throw a ``CancelError`` into the step sequence.

        Safe to invoke multiple times or after settlement.
        """
        if self._channel.trigger(message) is not None:
            self._emit("task.cancel", phase="cancel", message=message)

    def is_cancelled(self) -> bool:
        return self._state.cancelled

    @property
    def cancel_message(self) -> Optional[str]:
        """Message of the first accepted cancellation, if any."""
        return self._state.message

    def done(self) -> bool:
        return self._future.done()

    def result(self) -> Any:
        return self._future.result()

    def exception(self) -> Optional[BaseException]:
        return self._future.exception()

    def __await__(self) -> Generator[Any, None, Any]:
        return self._future.__await__()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"Invocation(name={self.name!r}, id={self.id}, "
            f"status={self._state.status.value}, cancelled={self._state.cancelled})"
        )

    # Settlement ------------------------------------------------------------
    async def _settle(self) -> Any:
        driven = asyncio.ensure_future(self._driver.run())
        side = self._channel.side_channel
        try:
            await asyncio.wait({driven, side}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            driven.cancel()
            driven.add_done_callback(lambda _: self._driver.close())
            if side.done():
                side.exception()
            else:
                side.cancel()
            self._finish(error=asyncio.CancelledError())
            raise

        # The side channel is only set while the driver is still running, so a
        # done side channel settled first.
        winner = side if side.done() else driven
        if winner is side:
            if driven.done():
                _retrieve(driven)
            else:
                driven.add_done_callback(_retrieve)
        else:
            side.cancel()

        error = asyncio.CancelledError() if winner.cancelled() else winner.exception()
        self._finish(error=error)
        return winner.result()

    def _finish(self, error: Optional[BaseException]) -> None:
        self._state.status = TaskStatus.SETTLED
        self._emit(
            "task.settle",
            phase="settle",
            error_code=classify_exception(error).value if error is not None else None,
            error_type=type(error).__name__ if error is not None else None,
        )

    def _emit(self, event: str, *, phase: str, **fields: Any) -> None:
        if not get_settings().log_events:
            return
        normalized_log_event(
            logger,
            event,
            self._ctx,
            phase=phase,
            status=self._state.status.value,
            cancelled=self._state.cancelled,
            **fields,
        )


def _retrieve(future: asyncio.Future) -> None:
    """Consume the outcome of a discarded driver so it is not reported."""
    if not future.cancelled():
        future.exception()


__all__ = ["Invocation"]
