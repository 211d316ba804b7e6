"""Unit tests for the rate-limited request queue."""

from __future__ import annotations

import asyncio

import pytest

from larkexport.runtime.rest import RequestQueue, delay_for_rate

DELAY = 0.02
# asyncio timers may fire up to one clock tick early
TOLERANCE = 0.002


def test_delay_for_rate():
    """Test 40 requests/second gives 25ms spacing."""
    assert delay_for_rate(40) == pytest.approx(0.025)
    assert RequestQueue.for_rate(40).delay == pytest.approx(0.025)


def test_delay_for_rate_rejects_non_positive():
    with pytest.raises(ValueError):
        delay_for_rate(0)


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        RequestQueue(-1)


class TestRequestQueueOrdering:
    """Test FIFO execution and spacing."""

    @pytest.mark.asyncio
    async def test_start_order_matches_submission_order(self):
        queue = RequestQueue(DELAY)
        loop = asyncio.get_running_loop()
        starts: list[tuple[int, float]] = []

        def make_task(i: int):
            async def task() -> int:
                starts.append((i, loop.time()))
                await asyncio.sleep(0)
                return i

            return task

        futures = [queue.submit(make_task(i)) for i in range(5)]
        results = await asyncio.gather(*futures)

        assert results == [0, 1, 2, 3, 4]
        assert [i for i, _ in starts] == [0, 1, 2, 3, 4]
        for (_, prev), (_, nxt) in zip(starts, starts[1:]):
            assert nxt - prev >= DELAY - TOLERANCE

    @pytest.mark.asyncio
    async def test_no_two_tasks_run_concurrently(self):
        queue = RequestQueue(0)
        running = 0
        max_running = 0

        async def task() -> None:
            nonlocal running, max_running
            running += 1
            max_running = max(max_running, running)
            await asyncio.sleep(0.005)
            running -= 1

        await asyncio.gather(*(queue.submit(task) for _ in range(4)))

        assert max_running == 1

    @pytest.mark.asyncio
    async def test_concurrent_submitters_share_one_drain_loop(self):
        queue = RequestQueue(0)
        order: list[str] = []

        def make_task(label: str):
            async def task() -> str:
                order.append(label)
                return label

            return task

        async def submitter(prefix: str) -> list[str]:
            results = []
            for i in range(3):
                results.append(await queue.submit(make_task(f"{prefix}{i}")))
            return results

        a, b = await asyncio.gather(submitter("a"), submitter("b"))

        assert a == ["a0", "a1", "a2"]
        assert b == ["b0", "b1", "b2"]
        # Interleaved in submission order, never concurrently
        assert order == ["a0", "b0", "a1", "b1", "a2", "b2"]

    @pytest.mark.asyncio
    async def test_spacing_holds_across_drain_loops(self):
        """Test a new drain loop still waits for the delay after the last start."""
        queue = RequestQueue(DELAY)
        loop = asyncio.get_running_loop()
        starts: list[float] = []

        async def task() -> None:
            starts.append(loop.time())

        await queue.submit(task)
        assert queue.draining is False
        await queue.submit(task)

        assert starts[1] - starts[0] >= DELAY - TOLERANCE

    @pytest.mark.asyncio
    async def test_first_task_starts_immediately(self):
        queue = RequestQueue(1.0)
        loop = asyncio.get_running_loop()
        before = loop.time()
        started: list[float] = []

        async def task() -> None:
            started.append(loop.time())

        await queue.submit(task)

        assert started[0] - before < 0.5


class TestRequestQueueFailures:
    """Test failure isolation."""

    @pytest.mark.asyncio
    async def test_failure_is_isolated_to_its_handle(self):
        queue = RequestQueue(0)
        ran: list[int] = []

        def make_task(i: int):
            async def task() -> int:
                ran.append(i)
                if i == 1:
                    raise RuntimeError("boom")
                return i

            return task

        futures = [queue.submit(make_task(i)) for i in range(4)]
        results = await asyncio.gather(*futures, return_exceptions=True)

        assert ran == [0, 1, 2, 3]
        assert results[0] == 0
        assert isinstance(results[1], RuntimeError)
        assert results[2:] == [2, 3]

    @pytest.mark.asyncio
    async def test_failed_task_is_not_retried(self):
        queue = RequestQueue(0)
        calls = 0

        async def task() -> None:
            nonlocal calls
            calls += 1
            raise ValueError("nope")

        with pytest.raises(ValueError):
            await queue.submit(task)
        await queue.join()

        assert calls == 1

    @pytest.mark.asyncio
    async def test_self_cancelled_task_does_not_stop_the_loop(self):
        queue = RequestQueue(0)
        ran: list[str] = []

        async def cancels_itself() -> None:
            ran.append("t1")
            raise asyncio.CancelledError()

        async def normal() -> str:
            ran.append("t2")
            return "ok"

        f1 = queue.submit(cancels_itself)
        f2 = queue.submit(normal)

        assert await f2 == "ok"
        assert ran == ["t1", "t2"]
        assert f1.cancelled()
        await queue.join()
        assert queue.draining is False


class TestRequestQueueState:
    """Test draining flag and pending list lifecycle."""

    @pytest.mark.asyncio
    async def test_flag_resets_when_empty(self):
        queue = RequestQueue(0)

        async def task() -> int:
            return 1

        future = queue.submit(task)
        assert queue.draining is True

        await future
        await queue.join()

        assert queue.draining is False
        assert queue.pending == 0

    @pytest.mark.asyncio
    async def test_submit_while_draining_does_not_start_second_loop(self):
        queue = RequestQueue(0)
        gate = asyncio.Event()

        async def blocking() -> str:
            await gate.wait()
            return "first"

        async def second() -> str:
            return "second"

        f1 = queue.submit(blocking)
        drain_task = queue._drain_task
        f2 = queue.submit(second)

        assert queue._drain_task is drain_task
        assert queue.pending == 2

        gate.set()
        assert await f1 == "first"
        assert await f2 == "second"

    @pytest.mark.asyncio
    async def test_instances_do_not_share_state(self):
        q1 = RequestQueue(0)
        q2 = RequestQueue(0)
        gate = asyncio.Event()

        async def blocking() -> None:
            await gate.wait()

        f = q1.submit(blocking)

        assert q1.draining is True
        assert q2.draining is False
        assert q2.pending == 0

        gate.set()
        await f

    @pytest.mark.asyncio
    async def test_cancelled_drain_cancels_pending_handles(self):
        queue = RequestQueue(0)
        gate = asyncio.Event()

        async def blocking() -> None:
            await gate.wait()

        async def later() -> None:
            return None

        f1 = queue.submit(blocking)
        f2 = queue.submit(later)
        await asyncio.sleep(0)

        queue._drain_task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await queue._drain_task

        assert queue.draining is False
        assert f1.cancelled()
        assert f2.cancelled()
