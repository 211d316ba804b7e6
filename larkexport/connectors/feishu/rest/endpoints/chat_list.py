"""Feishu chat list endpoint definition and adapter.

Lists the chats the tenant token's bot belongs to, 50 per page.
"""

from __future__ import annotations

from typing import Any

from larkexport.connectors.feishu.config import CHAT_LIST_PATH, PAGE_SIZE, USER_ID_TYPE
from larkexport.runtime.rest import RestEndpointSpec

from .common import PageAdapter


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for the chat list endpoint."""
    return {
        "page_size": int(params.get("page_size") or PAGE_SIZE),
        "user_id_type": params.get("user_id_type", USER_ID_TYPE),
    }


SPEC = RestEndpointSpec(
    id="chat_list",
    method="GET",
    build_path=lambda _params: CHAT_LIST_PATH,
    build_query=build_query,
    page_token_field="page_token",
)


class Adapter(PageAdapter):
    """Adapter for parsing a chat list response into a PageResult."""
