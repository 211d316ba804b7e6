"""Custom exception hierarchy.

Every failure coming out of the transport is classified exactly once into one
of the ``ApiError`` subclasses below. Paginators, the request queue and the
exporter never reclassify; they only decide whether to abort.
"""

from __future__ import annotations


class ExportError(Exception):
    """Base exception for all library errors."""

    pass


class ApiError(ExportError):
    """Error returned by (or while talking to) the messaging API.

    ``code`` is the platform's numeric status field when the response body
    carried one; ``status_code`` is the HTTP status when a response arrived.
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class AuthenticationFailedError(ApiError):
    """Credential rejected by the API.

    Raised only after stored credentials have been invalidated critically.
    """

    pass


class MissingCredentialError(AuthenticationFailedError):
    """No credential available to attach to a request."""

    pass


class RateLimitError(ApiError):
    """API rate limit exceeded."""

    def __init__(
        self,
        message: str,
        code: int | None = None,
        status_code: int | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, code=code, status_code=status_code)
        self.retry_after = retry_after


class HttpError(ApiError):
    """HTTP error status without a structured API body."""

    def __init__(self, message: str, status_code: int, reason: str | None = None) -> None:
        super().__init__(message, status_code=status_code)
        self.reason = reason


class ResponseFormatError(ApiError):
    """Successful response whose body does not have the expected shape."""

    pass


class RequestCancelledError(ApiError):
    """Request was cancelled before a response arrived."""

    pass


class NetworkError(ApiError):
    """No response received (connection failure or timeout)."""

    pass


class RequestSetupError(ApiError):
    """Request could not be built or sent."""

    pass


class TokenValidationError(ExportError):
    """A freshly supplied token failed its validation call."""

    pass


class ValidationError(ExportError):
    """Invalid caller input."""

    pass
