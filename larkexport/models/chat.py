"""Helpers for raw chat records.

Chat records are the API's ``im/v1/chats`` items, passed through unmodified
as dicts. These helpers only read them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

ChatRecord = Mapping[str, Any]


def display_name(chat: ChatRecord) -> str:
    """Human-readable chat name.

    Examples:
        >>> display_name({"chat_id": "oc_123", "name": "Team"})
        'Team'
        >>> display_name({"chat_id": "oc_1234567890", "chat_type": "group"})
        'Group Chat (oc_12345...)'
    """
    name = (chat.get("name") or "").strip()
    if name:
        return name
    if chat.get("chat_type") == "p2p":
        return "Direct Message"
    return f"Group Chat ({str(chat.get('chat_id', ''))[:8]}...)"


def sort_chats(chats: Iterable[ChatRecord]) -> list[ChatRecord]:
    """Groups first, then by display name (case-insensitive)."""
    return sorted(
        chats,
        key=lambda chat: (chat.get("chat_type") != "group", display_name(chat).lower()),
    )


def filter_chats(chats: Iterable[ChatRecord], search_text: str | None) -> list[ChatRecord]:
    """Chats whose display name, description or id contains ``search_text``."""
    chats = list(chats)
    if not search_text or not search_text.strip():
        return chats
    needle = search_text.lower()
    return [
        chat
        for chat in chats
        if needle in display_name(chat).lower()
        or needle in (chat.get("description") or "").lower()
        or needle in str(chat.get("chat_id", "")).lower()
    ]
