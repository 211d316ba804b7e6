"""Page execution logic for token-paginated list endpoints.

This module provides the PageExecutor class which drives a continuation-token
pagination run through the request queue, one queued task per page, and
accumulates the returned records.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import partial
from time import perf_counter
from typing import TYPE_CHECKING, Any

from ...models.page import PageResult
from ..telemetry import log_page_fetched, log_pagination_complete, log_pagination_error

if TYPE_CHECKING:
    from ..rest.queue import RequestQueue

FetchPage = Callable[[str | None], Awaitable[PageResult]]
OnPage = Callable[[PageResult], None]


class PageExecutor:
    """Executes a pagination run and aggregates page items.

    Every page fetch is submitted to the shared request queue, so pagination
    runs started concurrently still hit the API one call at a time.
    """

    def __init__(self, queue: RequestQueue, *, endpoint_id: str) -> None:
        """Initialize page executor.

        Args:
            queue: Request queue all page fetches are submitted to
            endpoint_id: Endpoint identifier used in telemetry
        """
        self._queue = queue
        self._endpoint_id = endpoint_id

    async def execute(
        self,
        *,
        fetch_page: FetchPage,
        on_page: OnPage | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch pages until the server reports no more.

        Args:
            fetch_page: Async function taking the continuation token (None for
                the first page) and returning the parsed page
            on_page: Optional callback invoked after every received page

        Returns:
            All items in page order

        Raises:
            ApiError: The first page failure; items from earlier pages are
                discarded
        """
        items: list[dict[str, Any]] = []
        page_token: str | None = None
        has_more = True
        page_index = 0
        run_start = perf_counter()

        while has_more:
            page_index += 1
            page_start = perf_counter()
            try:
                page = await self._queue.submit(partial(fetch_page, page_token))
            except Exception as e:
                log_pagination_error(
                    endpoint_id=self._endpoint_id,
                    page_index=page_index,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise

            items.extend(page.items)
            page_token = page.page_token
            has_more = page.has_more

            log_page_fetched(
                endpoint_id=self._endpoint_id,
                page_index=page_index,
                items=len(page.items),
                total=len(items),
                has_more=has_more,
                latency_ms=(perf_counter() - page_start) * 1000.0,
            )
            if on_page is not None:
                on_page(page)

        log_pagination_complete(
            endpoint_id=self._endpoint_id,
            pages=page_index,
            total=len(items),
            total_latency_ms=(perf_counter() - run_start) * 1000.0,
        )
        return items
