"""Rate-limited FIFO request queue.

Architecture:
    All API-bound work is funnelled through one ``RequestQueue`` per
    connector. ``submit`` appends a zero-argument coroutine function and
    returns a future; a single drain loop runs the queued tasks one at a time
    in submission order.

Design Decisions:
    - Single-flight drain: ``submit`` checks and sets ``_draining``
      synchronously, so concurrent submitters never start a second loop
    - Failure isolation: a failing or self-cancelled task resolves only its
      own future; the loop logs the failure and moves on
    - Spacing: consecutive task starts are at least ``delay`` seconds apart,
      also across drain loops (the last start time survives the loop)
    - No retries and no per-task timeout; the transport's request timeout
      bounds each task
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from ..telemetry import log_queue_drain_complete, log_queue_task_failed

logger = logging.getLogger(__name__)

T = TypeVar("T")

Task = Callable[[], Awaitable[Any]]


def delay_for_rate(requests_per_second: float) -> float:
    """Minimum spacing (seconds) between requests for a per-second budget.

    Examples:
        >>> delay_for_rate(40)
        0.025
    """
    if requests_per_second <= 0:
        raise ValueError("requests_per_second must be positive")
    return 1.0 / requests_per_second


class RequestQueue:
    """Serializes tasks with a fixed minimum delay between task starts."""

    def __init__(self, delay: float) -> None:
        """Initialize request queue.

        Args:
            delay: Minimum seconds between the starts of consecutive tasks
        """
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self._delay = delay
        self._pending: deque[tuple[Task, asyncio.Future[Any]]] = deque()
        self._draining = False
        self._drain_task: asyncio.Task[None] | None = None
        self._last_started: float | None = None

    @classmethod
    def for_rate(cls, requests_per_second: float) -> RequestQueue:
        return cls(delay_for_rate(requests_per_second))

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> int:
        """Number of tasks waiting to start."""
        return len(self._pending)

    @property
    def draining(self) -> bool:
        return self._draining

    def submit(self, task: Callable[[], Awaitable[T]]) -> asyncio.Future[T]:
        """Queue ``task`` and return a future resolving to its result."""
        loop = asyncio.get_running_loop()
        future: asyncio.Future[T] = loop.create_future()
        self._pending.append((task, future))
        if not self._draining:
            self._draining = True
            self._drain_task = loop.create_task(self._drain())
        return future

    async def join(self) -> None:
        """Wait until the active drain loop (if any) has emptied the queue."""
        if self._drain_task is not None and not self._drain_task.done():
            await asyncio.shield(self._drain_task)

    async def _drain(self) -> None:
        loop = asyncio.get_running_loop()
        executed = 0
        failed = 0
        logger.debug("Request queue drain started", extra={"pending": len(self._pending)})
        try:
            while self._pending:
                await self._wait_for_slot(loop)
                task, future = self._pending.popleft()
                self._last_started = loop.time()
                executed += 1
                try:
                    result = await task()
                except asyncio.CancelledError:
                    current = asyncio.current_task()
                    if current is not None and current.cancelling():
                        # The drain itself is being cancelled
                        future.cancel()
                        raise
                    failed += 1
                    log_queue_task_failed(
                        error_type="CancelledError",
                        error_message="task cancelled itself",
                        pending=len(self._pending),
                    )
                    future.cancel()
                except Exception as e:
                    failed += 1
                    log_queue_task_failed(
                        error_type=type(e).__name__,
                        error_message=str(e),
                        pending=len(self._pending),
                    )
                    if not future.done():
                        future.set_exception(e)
                else:
                    if not future.done():
                        future.set_result(result)
        finally:
            self._draining = False
            # Only reached with leftovers when the loop itself was cancelled
            while self._pending:
                _, future = self._pending.popleft()
                future.cancel()
            log_queue_drain_complete(executed=executed, failed=failed)

    async def _wait_for_slot(self, loop: asyncio.AbstractEventLoop) -> None:
        if self._last_started is None:
            return
        wait = self._last_started + self._delay - loop.time()
        if wait > 0:
            await asyncio.sleep(wait)
