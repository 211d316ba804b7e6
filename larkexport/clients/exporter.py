"""Chat history export orchestration.

Fetches message records for a selection of chats and reports the outcome per
chat. Formatting and writing files are left to the caller.

Failure policy:
- ``AuthenticationFailedError`` (including a missing credential) aborts the
  whole export. Credentials have already been invalidated; the caller must
  re-authenticate.
- Any other API failure marks only the affected chat as failed; remaining
  chats are still exported.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from ..connectors.feishu import FeishuRESTConnector
from ..core import ApiError, AuthenticationFailedError, ValidationError

logger = logging.getLogger(__name__)

ChatProgressCallback = Callable[[str, int, int, bool], None]


@dataclass
class ChatExport:
    """Outcome of exporting one chat."""

    chat_id: str
    messages: list[dict[str, Any]] = field(default_factory=list)
    error: ApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ExportReport:
    """Outcome of an export run, one entry per requested chat."""

    chats: list[ChatExport] = field(default_factory=list)

    @property
    def succeeded(self) -> list[ChatExport]:
        return [c for c in self.chats if c.ok]

    @property
    def failed(self) -> list[ChatExport]:
        return [c for c in self.chats if not c.ok]

    @property
    def total_messages(self) -> int:
        return sum(len(c.messages) for c in self.chats)


class ChatHistoryExporter:
    """Exports message history for several chats through one connector."""

    def __init__(self, connector: FeishuRESTConnector) -> None:
        self._connector = connector

    async def export(
        self,
        chat_ids: Iterable[str],
        start_time_ms: int,
        end_time_ms: int | None = None,
        on_progress: ChatProgressCallback | None = None,
    ) -> ExportReport:
        """Export every chat in ``chat_ids`` one after another.

        Raises:
            ValidationError: If the window starts after it ends
            AuthenticationFailedError: As soon as any chat hits one
        """
        if end_time_ms is not None and start_time_ms > end_time_ms:
            raise ValidationError("Start date cannot be after end date")

        report = ExportReport()
        for chat_id in chat_ids:
            progress = None
            if on_progress is not None:
                progress = _bind_chat(on_progress, chat_id)
            try:
                messages = await self._connector.fetch_all_messages(
                    chat_id, start_time_ms, end_time_ms, on_progress=progress
                )
            except AuthenticationFailedError:
                logger.error("Export aborted by authentication failure", extra={"chat_id": chat_id})
                raise
            except ApiError as e:
                logger.warning(
                    "Chat export failed",
                    extra={"chat_id": chat_id, "error_type": type(e).__name__, "error": str(e)},
                )
                report.chats.append(ChatExport(chat_id=chat_id, error=e))
                continue
            report.chats.append(ChatExport(chat_id=chat_id, messages=messages))

        logger.info(
            "Export finished",
            extra={
                "chats": len(report.chats),
                "failed": len(report.failed),
                "messages": report.total_messages,
            },
        )
        return report


def _bind_chat(callback: ChatProgressCallback, chat_id: str) -> Callable[[int, int, bool], None]:
    def progress(processed: int, estimated_total: int, has_more: bool) -> None:
        callback(chat_id, processed, estimated_total, has_more)

    return progress
