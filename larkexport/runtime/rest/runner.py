"""REST request runner using endpoint specs and response adapters.

An endpoint is described declaratively by a ``RestEndpointSpec`` (path and
query builders plus the continuation token field) and parsed by a
``ResponseAdapter``. ``RestRunner`` glues both to the authenticated transport;
it never touches the request queue, which callers wrap around ``run``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .transport import RESTTransport


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # "GET" | "POST"
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None
    # Query parameter carrying the continuation token (None: not paginated)
    page_token_field: str | None = None


class ResponseAdapter:
    def parse(self, response: Any, params: dict[str, Any]) -> Any:
        return response


class RestRunner:
    """Executes endpoint specs over a ``RESTTransport``."""

    def __init__(self, transport: RESTTransport) -> None:
        self._transport = transport

    def build_query(
        self, spec: RestEndpointSpec, params: dict[str, Any], page_token: str | None = None
    ) -> dict[str, Any] | None:
        """Build query parameters, attaching ``page_token`` when present."""
        query = spec.build_query(params) if spec.build_query else None
        if page_token and spec.page_token_field:
            query = {**(query or {}), spec.page_token_field: page_token}
        return query

    async def run(
        self,
        *,
        spec: RestEndpointSpec,
        adapter: ResponseAdapter,
        params: dict[str, Any],
        page_token: str | None = None,
    ) -> Any:
        path = spec.build_path(params)
        query = self.build_query(spec, params, page_token)
        headers = spec.build_headers(params) if spec.build_headers else None

        if spec.method.upper() == "GET":
            data = await self._transport.get(path, params=query, headers=headers)
        else:
            data = await self._transport.post(path, json_body=query, headers=headers)

        return adapter.parse(data, params)
