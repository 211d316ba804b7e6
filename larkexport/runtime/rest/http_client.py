"""HTTP client helper."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp


@dataclass(frozen=True)
class HTTPResponse:
    """Completed response snapshot, detached from the aiohttp connection."""

    status: int
    reason: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


class HTTPClient:
    """Async HTTP client wrapper.

    Unlike ``raise_for_status`` style clients, every completed response is
    returned as-is; deciding what counts as a failure is the transport's job.
    """

    def __init__(self, base_url: str | None = None, timeout: float = 15.0) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _url(self, url: str) -> str:
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> HTTPResponse:
        """Send a request and return the decoded response."""
        async with self.session.request(
            method, self._url(url), params=params, json=json_body, headers=headers
        ) as response:
            try:
                body = await response.json(content_type=None)
            except (json.JSONDecodeError, UnicodeDecodeError):
                body = None
            return HTTPResponse(
                status=response.status,
                reason=response.reason,
                headers=dict(response.headers),
                body=body,
            )

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> HTTPResponse:
        """GET request."""
        return await self.request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> HTTPResponse:
        """POST request."""
        return await self.request("POST", url, json_body=json, headers=headers)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
