"""Per-invocation cancellation channel.

Turns an external ``cancel(message)`` request into a ``CancelError`` thrown
into the step sequence at its current suspension point. When the sequence can
no longer receive it (it already finished and only its return value is being
awaited) the error goes to a side channel future instead, which takes part in
the invocation's settlement race.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from ..errors import CancelError
from .state import RunState
from .step_driver import StepDriver


class CancellationChannel:
    """Cancellation control surface of one invocation.

    Triggers are accepted only while the invocation is running and its driver
    has not yet produced an outcome; afterwards they are no-ops. The side
    channel can therefore only be set before the driver finishes, which is
    what lets it win a tie in the settlement race.
    """

    def __init__(
        self,
        state: RunState,
        driver: StepDriver,
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self._state = state
        self._driver = driver
        self._side: asyncio.Future = loop.create_future()

    @property
    def side_channel(self) -> asyncio.Future:
        """Future rejected with a cancellation the sequence could not receive."""
        return self._side

    def trigger(self, message: Optional[str] = None) -> Optional[CancelError]:
        """Request cancellation; returns the new error, or ``None`` if ignored."""
        # The driver's outcome is final once it closed, even before settlement.
        if not self._state.running or self._driver.closed:
            return None
        error = CancelError(message)
        self._state.mark_cancelled(message)
        if not self._driver.interrupt(error) and not self._side.done():
            self._side.set_exception(error)
        return error


__all__ = ["CancellationChannel"]
