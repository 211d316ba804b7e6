"""Feishu/Lark REST connector.

Architecture:
    This connector owns one authenticated ``RESTTransport``, one
    ``RestRunner`` and one ``RequestQueue``. Every API call it makes (every
    page of every pagination run, plus credential validation) is a separate
    task on that queue, so concurrent callers share a single rate budget.

    Queue state belongs to the connector instance; two connectors never share
    a queue.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from larkexport.connectors.feishu.config import (
    AUTH_ERROR_CODES,
    PAGE_SIZE,
    RATE_LIMIT_CODES,
    REQUEST_TIMEOUT,
    REQUESTS_PER_SECOND,
    get_base_url,
)
from larkexport.core import (
    AuthenticationFailedError,
    CredentialInvalidator,
    CredentialProvider,
    ExportError,
    Region,
    TokenValidationError,
)
from larkexport.models import PageResult, sort_messages
from larkexport.runtime.pagination import PageExecutor, ProgressTracker
from larkexport.runtime.rest import RequestQueue, RESTTransport, RestRunner

from .endpoints import get_endpoint_adapter, get_endpoint_spec

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, bool], None]


class FeishuRESTConnector:
    """Feishu/Lark REST connector for chat and message retrieval."""

    def __init__(
        self,
        credentials: CredentialProvider,
        invalidator: CredentialInvalidator | None = None,
        *,
        region: Region = Region.FEISHU,
        base_url: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
        requests_per_second: float = REQUESTS_PER_SECOND,
        page_size: int = PAGE_SIZE,
    ) -> None:
        """Initialize Feishu REST connector.

        Args:
            credentials: Supplies the bearer token for every call
            invalidator: Clears credentials on authentication failure. Defaults
                to ``credentials`` when that object also implements
                ``invalidate`` (e.g. ``InMemoryCredentialStore``)
            region: API deployment (Feishu or Lark)
            base_url: Override the region's base URL
            timeout: Per-request timeout in seconds
            requests_per_second: Queue budget; 40 gives a 25 ms spacing
            page_size: Records requested per page
        """
        if invalidator is None:
            if not hasattr(credentials, "invalidate"):
                raise ValueError("An invalidator is required when credentials cannot invalidate")
            invalidator = credentials  # type: ignore[assignment]
        self.region = region
        self.page_size = page_size
        self._transport = RESTTransport(
            base_url or get_base_url(region),
            credentials=credentials,
            invalidator=invalidator,
            timeout=timeout,
            auth_error_codes=AUTH_ERROR_CODES,
            rate_limit_codes=RATE_LIMIT_CODES,
        )
        self._runner = RestRunner(self._transport)
        self._queue = RequestQueue.for_rate(requests_per_second)
        self._invalidator = invalidator
        logger.info("Feishu REST connector initialized", extra={"region": region.value})

    @property
    def queue(self) -> RequestQueue:
        return self._queue

    async def fetch(
        self, endpoint_id: str, params: dict[str, Any], page_token: str | None = None
    ) -> Any:
        """Fetch a single page from a Feishu REST endpoint.

        This call goes straight to the transport; pagination runs wrap it in
        queued tasks.

        Raises:
            ValueError: If endpoint_id is not found in registry
        """
        spec = get_endpoint_spec(endpoint_id)
        if spec is None:
            raise ValueError(f"Unknown REST endpoint: {endpoint_id}")

        adapter_cls = get_endpoint_adapter(endpoint_id)
        if adapter_cls is None:
            raise ValueError(f"No adapter found for endpoint: {endpoint_id}")

        return await self._runner.run(
            spec=spec, adapter=adapter_cls(), params=params, page_token=page_token
        )

    async def fetch_all_chats(self) -> list[dict[str, Any]]:
        """Fetch every chat visible to the current token.

        Returns:
            Raw chat records in server order

        Raises:
            ApiError: On the first failed page (no partial result)
        """
        params = {"page_size": self.page_size}

        async def fetch_page(page_token: str | None) -> PageResult:
            return await self.fetch("chat_list", params, page_token)

        executor = PageExecutor(self._queue, endpoint_id="chat_list")
        return await executor.execute(fetch_page=fetch_page)

    async def fetch_all_messages(
        self,
        chat_id: str,
        start_time_ms: int,
        end_time_ms: int | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch all messages of a chat inside a time window.

        Args:
            chat_id: Chat identifier
            start_time_ms: Inclusive window start (epoch milliseconds)
            end_time_ms: Inclusive window end, or None for an open end
            on_progress: Called after every page with
                ``(processed, estimated_total, has_more)``

        Returns:
            Raw message records sorted by ``create_time`` ascending

        Raises:
            ApiError: On the first failed page (no partial result)
        """
        params = {
            "chat_id": chat_id,
            "start_time_ms": start_time_ms,
            "end_time_ms": end_time_ms,
            "page_size": self.page_size,
        }
        tracker = ProgressTracker(self.page_size)

        async def fetch_page(page_token: str | None) -> PageResult:
            return await self.fetch("message_list", params, page_token)

        def on_page(page: PageResult) -> None:
            estimate = tracker.update(len(page.items), page.has_more)
            if on_progress is not None:
                on_progress(estimate.processed, estimate.estimated_total, estimate.has_more)

        logger.info(
            "Fetching messages",
            extra={"chat_id": chat_id, "start_time_ms": start_time_ms, "end_time_ms": end_time_ms},
        )
        executor = PageExecutor(self._queue, endpoint_id="message_list")
        messages = await executor.execute(fetch_page=fetch_page, on_page=on_page)
        tracker.finalize()
        return sort_messages(messages)  # type: ignore[return-value]

    async def validate_credentials(self) -> None:
        """Check the current token with a one-chat list call.

        Raises:
            TokenValidationError: If the call fails for any reason; stored
                credentials have been invalidated critically by then
        """
        params = {"page_size": 1}
        try:
            await self._queue.submit(lambda: self.fetch("chat_list", params))
        except AuthenticationFailedError as e:
            raise TokenValidationError(f"API token validation failed: {e}") from e
        except ExportError as e:
            self._invalidator.invalidate(critical=True)
            raise TokenValidationError(f"API token validation failed: {e}") from e
        logger.info("API token validated")

    async def close(self) -> None:
        await self._queue.join()
        await self._transport.close()

    async def __aenter__(self) -> FeishuRESTConnector:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
