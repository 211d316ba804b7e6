"""Helpers for raw message records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

MessageRecord = Mapping[str, Any]


def create_time_ms(message: MessageRecord) -> int:
    """Creation time in epoch milliseconds; 0 when missing or malformed.

    Examples:
        >>> create_time_ms({"create_time": "1700000000123"})
        1700000000123
        >>> create_time_ms({})
        0
    """
    try:
        return int(message.get("create_time"))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0


def sort_messages(messages: Iterable[MessageRecord]) -> list[MessageRecord]:
    """Stable sort by creation time, oldest first."""
    return sorted(messages, key=create_time_ms)


def sender_identifier(message: MessageRecord) -> str:
    """First available sender id: user_id, then open_id, then union_id."""
    sender_id = (message.get("sender") or {}).get("sender_id") or {}
    return (
        sender_id.get("user_id")
        or sender_id.get("open_id")
        or sender_id.get("union_id")
        or "UnknownID"
    )
