"""Shared awaitables for runner tests."""

from __future__ import annotations

import asyncio
from typing import Any, List


async def fail_after(delay: float, error: BaseException) -> Any:
    await asyncio.sleep(delay)
    raise error


async def record_cancellation(events: List[str], delay: float = 10.0) -> None:
    """Sleep for ``delay``; note in ``events`` if cancelled first."""
    events.append("started")
    try:
        await asyncio.sleep(delay)
    except asyncio.CancelledError:
        events.append("cancelled")
        raise
