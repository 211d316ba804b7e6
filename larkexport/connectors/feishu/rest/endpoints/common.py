"""Shared parsing for Feishu list endpoints.

Both list endpoints wrap their page in the same envelope:
``{"code": 0, "msg": "...", "data": {"items": [...], "page_token": ..., "has_more": ...}}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from larkexport.core import ResponseFormatError
from larkexport.models import PageResult
from larkexport.runtime.rest import ResponseAdapter


class PageAdapter(ResponseAdapter):
    """Parses a list response envelope into a ``PageResult``.

    A missing ``data`` object is an empty last page. Any other shape mismatch
    raises ``ResponseFormatError``.
    """

    def parse(self, response: Any, params: dict[str, Any]) -> PageResult:
        if not isinstance(response, Mapping):
            raise ResponseFormatError(
                f"Expected a JSON object, got {type(response).__name__}"
            )
        data = response.get("data")
        try:
            return PageResult.model_validate(data or {})
        except ValidationError as e:
            raise ResponseFormatError(
                f"Malformed page in response: {e.error_count()} invalid field(s)"
            ) from e
