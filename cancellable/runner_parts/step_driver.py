"""Generator step driver.

Advances one step sequence (a generator) to completion on the running event
loop. Each yielded item is resolved before the generator is resumed:

* an exception instance is thrown back in without being awaited;
* an awaitable is awaited, its value sent back or its error thrown back;
* any other value is sent straight back.

An error queued through :meth:`StepDriver.interrupt` is thrown in at the
current suspension point instead, taking priority over an item that is ready
at the same time. Only one item is outstanding at a time and the generator is
never resumed re-entrantly.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Generator, Optional, Tuple

_SEND = "send"
_THROW = "throw"


def _discard(item: Any) -> None:
    """Close a coroutine that will never be awaited."""
    if inspect.iscoroutine(item):
        item.close()


def _consume(future: asyncio.Future) -> None:
    """Mark a future's outcome as retrieved."""
    if not future.cancelled():
        future.exception()


class StepDriver:
    """Drive a generator, awaiting what it yields, until it finishes.

    ``start`` performs the first advance synchronously; ``run`` is the
    coroutine that resolves the remaining items and returns the generator's
    return value (awaited if it is awaitable) or raises its failure.
    """

    def __init__(self, sequence: Generator[Any, Any, Any]) -> None:
        self._sequence = sequence
        self._started = False
        self._finished = False
        self._item: Any = None
        self._value: Any = None
        self._error: Optional[BaseException] = None
        self._queued: Optional[BaseException] = None
        self._waiter: Optional[asyncio.Future] = None
        self._closed = False

    @property
    def finished(self) -> bool:  # noqa: D401 - short form
        """Whether the generator has returned or raised."""
        return self._finished

    @property
    def closed(self) -> bool:
        """Whether the outcome is decided and the generator closed."""
        return self._closed

    def start(self) -> None:
        """Advance the generator to its first yield.

        An ``Exception`` raised by the body before its first yield is kept and
        re-raised by ``run``.
        """
        if self._started:
            return
        self._started = True
        try:
            self._advance(_SEND, None)
        except Exception as exc:
            self._error = exc

    def interrupt(self, error: BaseException) -> bool:
        """Queue ``error`` for delivery at the current suspension point.

        Returns ``False`` when the generator has finished and can no longer
        receive it. A second error queued before the first was delivered is
        dropped.
        """
        if self._finished:
            return False
        if self._queued is None:
            self._queued = error
            if self._waiter is not None and not self._waiter.done():
                self._waiter.set_result(None)
        return True

    async def run(self) -> Any:
        self.start()
        try:
            if self._error is not None:
                raise self._error
            while not self._finished:
                verb, arg = await self._resolve(self._item)
                self._advance(verb, arg)
            queued = self._take_interrupt()
            if queued is not None:
                raise queued
            if inspect.isawaitable(self._value):
                return await self._value
            return self._value
        finally:
            self.close()

    def close(self) -> None:
        """Close the generator and any coroutine it yielded that was never awaited."""
        self._closed = True
        _discard(self._item)
        self._item = None
        self._sequence.close()

    def _advance(self, verb: str, arg: Any) -> None:
        try:
            if verb == _THROW:
                self._item = self._sequence.throw(arg)
            else:
                self._item = self._sequence.send(arg)
        except StopIteration as stop:
            self._finished = True
            self._value = stop.value
        except BaseException as exc:
            self._finished = True
            queued = self._take_interrupt()
            if queued is not None:
                raise queued from exc
            raise

    def _take_interrupt(self) -> Optional[BaseException]:
        queued, self._queued = self._queued, None
        return queued

    async def _resolve(self, item: Any) -> Tuple[str, Any]:
        self._item = None
        queued = self._take_interrupt()
        if queued is not None:
            _discard(item)
            return _THROW, queued
        if isinstance(item, BaseException):
            return _THROW, item
        if not inspect.isawaitable(item):
            return _SEND, item

        # Futures and tasks belong to the caller; anything else is wrapped here.
        owned = not isinstance(item, asyncio.Future)
        pending = asyncio.ensure_future(item)
        self._waiter = asyncio.get_running_loop().create_future()
        try:
            await asyncio.wait({pending, self._waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            if owned:
                pending.cancel()
            raise
        finally:
            if not self._waiter.done():
                self._waiter.cancel()
            self._waiter = None

        queued = self._take_interrupt()
        if queued is not None:
            if not pending.done():
                if owned:
                    pending.cancel()
            else:
                _consume(pending)
            return _THROW, queued
        if pending.cancelled():
            return _THROW, asyncio.CancelledError()
        error = pending.exception()
        if error is not None:
            return _THROW, error
        return _SEND, pending.result()


__all__ = ["StepDriver"]
