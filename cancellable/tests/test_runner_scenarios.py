"""End-to-end scenarios for cancellable tasks.

Covers normal completion, yielded error objects, rejected awaitables,
cancellation caught by the body, and batch cancellation of independent tasks.
"""
from __future__ import annotations

import asyncio
from unittest.mock import Mock

import pytest

from cancellable import Cancellable, CancelError, cancel, create, is_cancel_error, is_cancelled
from cancellable.tests.helpers import fail_after


def test_runs_to_completion_with_return_value():
    after_delay = Mock()

    def body(arg):
        total = yield 1 + arg
        yield asyncio.sleep(0.05)
        yield after_delay(total)
        return total

    async def main():
        task = create(body)
        value = await task(1)
        return task, value

    task, value = asyncio.run(main())
    assert value == 2  # nosec B101 - pytest assert in tests
    after_delay.assert_called_once_with(2)
    assert is_cancelled(task) is False  # nosec B101 - pytest assert in tests


def test_yielded_error_is_thrown_into_body():
    after_error = Mock()
    seen = []

    def body():
        try:
            yield ValueError("Whoops")
            yield after_error()
        except ValueError as exc:
            seen.append(is_cancel_error(exc))
            return exc

    async def main():
        task = create(body)
        return task, await task()

    task, value = asyncio.run(main())
    assert isinstance(value, ValueError) and str(value) == "Whoops"  # nosec B101 - pytest assert in tests
    assert seen == [False]  # nosec B101 - pytest assert in tests
    assert is_cancelled(task) is False  # nosec B101 - pytest assert in tests
    after_error.assert_not_called()


def test_uncaught_yielded_error_rejects_with_same_instance():
    error = RuntimeError("Whoops")

    def body():
        yield error

    async def main():
        task = create(body)
        with pytest.raises(RuntimeError) as info:
            await task()
        return task, info.value

    task, raised = asyncio.run(main())
    assert raised is error  # nosec B101 - pytest assert in tests
    assert is_cancelled(task) is False  # nosec B101 - pytest assert in tests


def test_rejected_awaitable_is_thrown_into_body():
    after_rejection = Mock()

    def body():
        try:
            yield fail_after(0, KeyError("Whoops"))
            yield after_rejection()
        except KeyError as exc:
            assert not is_cancel_error(exc)  # nosec B101 - pytest assert in tests
            return exc.args[0]

    async def main():
        task = create(body)
        return task, await task()

    task, value = asyncio.run(main())
    assert value == "Whoops"  # nosec B101 - pytest assert in tests
    assert is_cancelled(task) is False  # nosec B101 - pytest assert in tests
    after_rejection.assert_not_called()


def test_uncaught_rejection_rejects_task_with_reason():
    reason = LookupError("gone")

    def body():
        yield fail_after(0.01, reason)
        return "unreachable"

    async def main():
        task = create(body)
        with pytest.raises(LookupError) as info:
            await task()
        return task, info.value

    task, raised = asyncio.run(main())
    assert raised is reason  # nosec B101 - pytest assert in tests
    assert is_cancelled(task) is False  # nosec B101 - pytest assert in tests


def test_cancel_is_caught_by_body_and_task_resolves():
    after_delay = Mock()

    def body():
        try:
            yield asyncio.sleep(0.1)
            yield after_delay()
        except CancelError as exc:
            return exc

    async def main():
        task = create(body)
        invocation = task()
        cancel(task, "Took too long")
        return task, await invocation

    task, value = asyncio.run(main())
    assert is_cancel_error(value)  # nosec B101 - pytest assert in tests
    assert value.message == "Took too long"  # nosec B101 - pytest assert in tests
    assert is_cancelled(task) is True  # nosec B101 - pytest assert in tests
    after_delay.assert_not_called()


def test_uncaught_cancel_rejects_with_cancel_error():
    def body():
        yield asyncio.sleep(0.1)
        return "finished"

    async def main():
        task = create(body)
        invocation = task()
        await asyncio.sleep(0.01)
        cancel(task, "stop")
        with pytest.raises(CancelError) as info:
            await invocation
        return task, info.value

    task, raised = asyncio.run(main())
    assert raised.message == "stop"  # nosec B101 - pytest assert in tests
    assert is_cancelled(task) is True  # nosec B101 - pytest assert in tests


def test_cancel_list_of_tasks_cancels_each_independently():
    def body():
        try:
            yield asyncio.sleep(0.1)
        except CancelError as exc:
            return exc

    async def main():
        first = create(body)
        second = create(body)
        runs = (first(), second())
        cancel([first, second], "CANCELLING")
        results = await asyncio.gather(*runs)
        return first, second, results

    first, second, results = asyncio.run(main())
    assert is_cancelled(first) and is_cancelled(second)  # nosec B101 - pytest assert in tests
    assert [r.message for r in results] == ["CANCELLING", "CANCELLING"]  # nosec B101 - pytest assert in tests
    assert results[0] is not results[1]  # nosec B101 - pytest assert in tests


def test_cancel_after_settlement_is_noop():
    def body():
        yield asyncio.sleep(0)
        return "ok"

    async def main():
        task = create(body)
        value = await task()
        cancel(task, "too late")
        cancel([task, task])
        return task, value

    task, value = asyncio.run(main())
    assert value == "ok"  # nosec B101 - pytest assert in tests
    assert is_cancelled(task) is False  # nosec B101 - pytest assert in tests


def test_namespace_bundle_exposes_public_api():
    def body():
        try:
            yield asyncio.sleep(0.1)
        except Cancellable.CancelError as exc:
            return exc

    async def main():
        task = Cancellable.create(body)
        invocation = task()
        Cancellable.cancel(task)
        return task, await invocation

    task, value = asyncio.run(main())
    assert Cancellable.is_cancel_error(value)  # nosec B101 - pytest assert in tests
    assert value.message is None  # nosec B101 - pytest assert in tests
    assert Cancellable.is_cancelled(task)  # nosec B101 - pytest assert in tests
