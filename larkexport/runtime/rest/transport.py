"""Authenticated REST transport.

Architecture:
    Every API call passes through ``RESTTransport.request`` which composes
    three explicit steps:

    1. Outbound: resolve a bearer token from the credential provider and
       attach it. A missing token invalidates credentials critically and
       fails the call before anything is sent.
    2. Send through ``HTTPClient``; transport-level exceptions are mapped to
       ``RequestCancelledError`` / ``NetworkError`` / ``RequestSetupError``.
    3. Inbound: classify the response by the body's ``code`` field and the
       HTTP status.

    Classification happens here and nowhere else. Authentication failures
    invoke the invalidator exactly once, with ``critical=True``, before the
    error is raised.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Mapping
from typing import Any, NoReturn

import aiohttp

from ...core.credentials import CredentialInvalidator, CredentialProvider
from ...core.exceptions import (
    ApiError,
    AuthenticationFailedError,
    HttpError,
    MissingCredentialError,
    NetworkError,
    RateLimitError,
    RequestCancelledError,
    RequestSetupError,
)
from .http_client import HTTPClient, HTTPResponse

logger = logging.getLogger(__name__)

SUCCESS_CODE = 0
AUTH_FAILURE_STATUSES = frozenset({401, 403})
RATE_LIMIT_STATUS = 429


class RESTTransport:
    """REST transport that authenticates and classifies every call."""

    def __init__(
        self,
        base_url: str,
        *,
        credentials: CredentialProvider,
        invalidator: CredentialInvalidator,
        timeout: float = 15.0,
        auth_error_codes: frozenset[int] = frozenset(),
        rate_limit_codes: frozenset[int] = frozenset(),
    ) -> None:
        self._http = HTTPClient(base_url=base_url, timeout=timeout)
        self._credentials = credentials
        self._invalidator = invalidator
        self._auth_error_codes = auth_error_codes
        self._rate_limit_codes = rate_limit_codes

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return await self.request("GET", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return await self.request("POST", path, json_body=json_body, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send an authenticated request and return the classified body."""
        headers = await self._authorize(headers)
        response = await self._send(method, path, params=params, json_body=json_body, headers=headers)
        return self._classify(response, method, path)

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> RESTTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ----------------------
    # Outbound
    # ----------------------
    async def _authorize(self, headers: dict[str, str] | None) -> dict[str, str]:
        try:
            token = self._credentials.get_token()
            if inspect.isawaitable(token):
                token = await token
        except Exception as exc:
            logger.error("Failed to resolve API token", extra={"error": str(exc)})
            self._invalidate()
            raise MissingCredentialError("API token is missing") from exc
        if not token:
            logger.error("Credential provider returned an empty token")
            self._invalidate()
            raise MissingCredentialError("API token is missing")
        return {**(headers or {}), "Authorization": f"Bearer {token}"}

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None,
        json_body: Any,
        headers: dict[str, str],
    ) -> HTTPResponse:
        try:
            return await self._http.request(
                method, path, params=params, json_body=json_body, headers=headers
            )
        except asyncio.CancelledError as exc:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            logger.warning("Request cancelled", extra={"method": method, "path": path})
            raise RequestCancelledError(f"Request cancelled: {method} {path}") from exc
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as exc:
            logger.error(
                "No response received",
                extra={"method": method, "path": path, "error_type": type(exc).__name__},
            )
            raise NetworkError(
                f"API request failed for {method} {path} ({type(exc).__name__})"
            ) from exc
        except (aiohttp.ClientError, ValueError, TypeError, RuntimeError) as exc:
            logger.error("Request setup failed", extra={"method": method, "path": path, "error": str(exc)})
            raise RequestSetupError(f"API request setup failed: {exc}") from exc

    # ----------------------
    # Inbound
    # ----------------------
    def _classify(self, response: HTTPResponse, method: str, path: str) -> Any:
        body = response.body
        code = _status_code_field(body)
        message = body.get("msg") if isinstance(body, Mapping) else None

        if response.status >= 400:
            logger.error(
                "API error response",
                extra={"method": method, "path": path, "status": response.status, "body": body},
            )
            if response.status in AUTH_FAILURE_STATUSES:
                self._invalidate()
                raise AuthenticationFailedError(
                    f"Authentication failed (HTTP {response.status})",
                    code=code,
                    status_code=response.status,
                )
            if response.status == RATE_LIMIT_STATUS:
                retry_after = _retry_after(response.headers)
                if retry_after is not None:
                    logger.info("Server suggested retry delay", extra={"retry_after": retry_after})
                raise RateLimitError(
                    "Rate limit exceeded (HTTP 429)",
                    code=code,
                    status_code=response.status,
                    retry_after=retry_after,
                )
            if code is not None and code != SUCCESS_CODE:
                self._raise_for_code(code, message, response.status)
            raise HttpError(
                f"HTTP Error: {response.status} {response.reason or ''}".rstrip(),
                status_code=response.status,
                reason=response.reason,
            )

        if code is None or code == SUCCESS_CODE:
            return body

        logger.warning(
            "API returned error code",
            extra={"method": method, "path": path, "code": code, "api_msg": message},
        )
        self._raise_for_code(code, message, response.status)

    def _raise_for_code(self, code: int, message: str | None, status: int) -> NoReturn:
        if code in self._auth_error_codes:
            self._invalidate()
            raise AuthenticationFailedError(
                f"Authentication failed (Code: {code})", code=code, status_code=status
            )
        if code in self._rate_limit_codes:
            raise RateLimitError(f"Rate limit exceeded (Code: {code})", code=code, status_code=status)
        raise ApiError(f"API Error: {message} (Code: {code})", code=code, status_code=status)

    def _invalidate(self) -> None:
        logger.error("Invalidating stored credentials", extra={"critical": True})
        self._invalidator.invalidate(critical=True)


def _status_code_field(body: Any) -> int | None:
    if not isinstance(body, Mapping):
        return None
    code = body.get("code")
    if isinstance(code, bool) or not isinstance(code, int):
        return None
    return code


def _retry_after(headers: Mapping[str, str]) -> float | None:
    for name, value in headers.items():
        if name.lower() == "retry-after":
            try:
                return max(float(value), 0.0)
            except (TypeError, ValueError):
                return None
    return None
