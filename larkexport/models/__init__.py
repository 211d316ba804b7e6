"""Data models.

Architecture:
    Pagination metadata is modelled with frozen Pydantic v2 models
    (``PageResult``, ``ProgressEstimate``). Chat and message records stay raw
    dicts exactly as the API returned them; ``chat`` and ``message`` hold
    read-only helpers over those dicts.
"""

from .chat import display_name, filter_chats, sort_chats
from .message import create_time_ms, sender_identifier, sort_messages
from .page import PageResult, ProgressEstimate

__all__ = [
    "PageResult",
    "ProgressEstimate",
    # Record helpers
    "display_name",
    "sort_chats",
    "filter_chats",
    "create_time_ms",
    "sort_messages",
    "sender_identifier",
]
