"""Core components."""

from .credentials import (
    Credential,
    CredentialInvalidator,
    CredentialProvider,
    InMemoryCredentialStore,
)
from .enums import Region
from .exceptions import (
    ApiError,
    AuthenticationFailedError,
    ExportError,
    HttpError,
    MissingCredentialError,
    NetworkError,
    RateLimitError,
    RequestCancelledError,
    RequestSetupError,
    ResponseFormatError,
    TokenValidationError,
    ValidationError,
)

__all__ = [
    "Credential",
    "CredentialProvider",
    "CredentialInvalidator",
    "InMemoryCredentialStore",
    "Region",
    # Exceptions
    "ExportError",
    "ApiError",
    "AuthenticationFailedError",
    "MissingCredentialError",
    "RateLimitError",
    "HttpError",
    "RequestCancelledError",
    "NetworkError",
    "RequestSetupError",
    "ResponseFormatError",
    "TokenValidationError",
    "ValidationError",
]
