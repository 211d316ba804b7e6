"""Shared Feishu/Lark connector constants.

This module centralizes URLs, endpoint paths, pagination sizes, rate limits
and reserved API codes so the connector can stay small and focused.
"""

from __future__ import annotations

from larkexport.core import Region

# Feishu (mainland) and Lark (international) expose the same open API
BASE_URLS = {
    Region.FEISHU: "https://open.feishu.cn",
    Region.LARK: "https://open.larksuite.com",
}

CHAT_LIST_PATH = "/open-apis/im/v1/chats"
MESSAGE_LIST_PATH = "/open-apis/im/v1/messages"

PAGE_SIZE = 50
USER_ID_TYPE = "open_id"
MESSAGE_SORT_ORDER = "create_time_asc"

REQUEST_TIMEOUT = 15.0  # seconds

# im/v1/messages allows ~50 QPS per tenant token; stay below it
REQUESTS_PER_SECOND = 40

# Reserved values of the response body's ``code`` field
SUCCESS_CODE = 0
TOKEN_INVALID_CODE = 99991663
TOKEN_EXPIRED_CODE = 99991664
RATE_LIMIT_CODE = 99991672

AUTH_ERROR_CODES = frozenset({TOKEN_INVALID_CODE, TOKEN_EXPIRED_CODE})
RATE_LIMIT_CODES = frozenset({RATE_LIMIT_CODE})


def get_base_url(region: Region) -> str:
    """Get REST base URL for a region.

    Examples:
        >>> get_base_url(Region.FEISHU)
        'https://open.feishu.cn'
        >>> get_base_url(Region.LARK)
        'https://open.larksuite.com'
    """
    return BASE_URLS[region]
