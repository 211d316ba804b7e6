"""Feishu message list endpoint definition and adapter.

Lists messages of one chat inside a time window, oldest first. Start and end
times travel as millisecond-epoch strings; an open end omits ``end_time``.
"""

from __future__ import annotations

import math
from typing import Any

from larkexport.connectors.feishu.config import MESSAGE_LIST_PATH, MESSAGE_SORT_ORDER, PAGE_SIZE
from larkexport.runtime.rest import RestEndpointSpec

from .common import PageAdapter


def format_timestamp_ms(timestamp_ms: float) -> str:
    """Render a millisecond timestamp the way the API expects it.

    Examples:
        >>> format_timestamp_ms(1700000000123.9)
        '1700000000123'
    """
    return str(math.floor(timestamp_ms))


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for the message list endpoint."""
    q: dict[str, Any] = {
        "container_id_type": "chat",
        "container_id": params["chat_id"],
        "start_time": format_timestamp_ms(params["start_time_ms"]),
    }
    if params.get("end_time_ms") is not None:
        q["end_time"] = format_timestamp_ms(params["end_time_ms"])
    q["page_size"] = int(params.get("page_size") or PAGE_SIZE)
    q["sort_type"] = MESSAGE_SORT_ORDER
    return q


SPEC = RestEndpointSpec(
    id="message_list",
    method="GET",
    build_path=lambda _params: MESSAGE_LIST_PATH,
    build_query=build_query,
    page_token_field="page_token",
)


class Adapter(PageAdapter):
    """Adapter for parsing a message list response into a PageResult."""
