"""Credential provider/invalidator interfaces and an in-memory store.

Architecture:
    The retrieval layer never holds a token. Every outbound call asks a
    ``CredentialProvider`` for one, and every authentication failure asks a
    ``CredentialInvalidator`` to clear stored state. Both are protocols so the
    real store (keychain, encrypted file, ...) can live outside this package.

Design Decisions:
    - Protocols over base classes: any object with the right methods works
    - ``get_token`` may return a value or an awaitable; the transport awaits
      either
    - Single-slot critical failure callback, set at construction
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import MissingCredentialError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(hours=24)
EXPIRY_BUFFER = timedelta(minutes=5)


class CredentialProvider(Protocol):
    """Supplies a bearer token on demand."""

    def get_token(self) -> str | Awaitable[str]:
        """Return the current bearer token.

        Raises:
            MissingCredentialError: If no token is stored
        """
        ...


class CredentialInvalidator(Protocol):
    """Clears stored credential state."""

    def invalidate(self, critical: bool = False) -> None:
        """Clear stored credentials.

        Args:
            critical: Also notify the upstream observer that the session must
                restart from authentication
        """
        ...


class Credential(BaseModel):
    """Bearer token plus an advisory expiry.

    ``expires_at`` is a hint only; live API calls decide validity.
    """

    token: str = Field(..., min_length=1)
    expires_at: datetime | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class InMemoryCredentialStore:
    """Process-local credential store implementing both protocols."""

    def __init__(self, on_critical_failure: Callable[[], None] | None = None) -> None:
        self._credential: Credential | None = None
        self._on_critical_failure = on_critical_failure

    @property
    def credential(self) -> Credential | None:
        return self._credential

    @property
    def is_authenticated(self) -> bool:
        return self._credential is not None

    def set_token(self, token: str, ttl: timedelta = DEFAULT_TOKEN_TTL) -> Credential:
        """Store a token with a placeholder expiry ``ttl`` from now."""
        if not token or not token.strip():
            raise MissingCredentialError("API token cannot be empty")
        self._credential = Credential(token=token, expires_at=datetime.now(UTC) + ttl)
        logger.info("Stored API token", extra={"expires_at": self._credential.expires_at})
        return self._credential

    def get_token(self) -> str:
        if self._credential is None:
            logger.error("No API token available")
            raise MissingCredentialError("API token is missing")
        return self._credential.token

    def expiry_hint_reached(self, buffer: timedelta = EXPIRY_BUFFER) -> bool:
        """Whether the advisory expiry (minus ``buffer``) has passed.

        A reached hint means the token should be re-validated, not discarded.
        """
        if self._credential is None or self._credential.expires_at is None:
            return False
        return datetime.now(UTC) >= self._credential.expires_at - buffer

    def invalidate(self, critical: bool = False) -> None:
        logger.info("Clearing stored API token", extra={"critical": critical})
        self._credential = None
        if critical and self._on_critical_failure is not None:
            self._on_critical_failure()
