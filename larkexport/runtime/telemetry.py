"""Structured logging for queue and pagination operations.

This module provides telemetry hooks emitting structured logs (snake_case
event names plus ``extra`` fields) for observability.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    endpoint_id: str,
    page_index: int,
    items: int,
    total: int,
    has_more: bool,
    latency_ms: float | None = None,
) -> None:
    """Log a single received page.

    Args:
        endpoint_id: Endpoint identifier
        page_index: One-based index of the page in this pagination run
        items: Number of records on this page
        total: Records accumulated so far
        has_more: Whether the server reported more pages
        latency_ms: Latency in milliseconds including queue wait (optional)
    """
    logger.info(
        "page_fetched",
        extra={
            "endpoint_id": endpoint_id,
            "page_index": page_index,
            "items": items,
            "total": total,
            "has_more": has_more,
            "latency_ms": latency_ms,
        },
    )


def log_pagination_complete(
    *,
    endpoint_id: str,
    pages: int,
    total: int,
    total_latency_ms: float | None = None,
) -> None:
    """Log the end of a pagination run."""
    logger.info(
        "pagination_complete",
        extra={
            "endpoint_id": endpoint_id,
            "pages": pages,
            "total": total,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_pagination_error(
    *,
    endpoint_id: str,
    page_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a page fetch that aborted its pagination run."""
    logger.error(
        "pagination_error",
        extra={
            "endpoint_id": endpoint_id,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_queue_task_failed(*, error_type: str, error_message: str, pending: int) -> None:
    """Log a queued task that failed; the queue keeps draining."""
    logger.error(
        "queue_task_failed",
        extra={
            "error_type": error_type,
            "error_message": error_message,
            "pending": pending,
        },
    )


def log_queue_drain_complete(*, executed: int, failed: int) -> None:
    logger.debug("queue_drain_complete", extra={"executed": executed, "failed": failed})
