"""larkexport - Feishu/Lark chat history retrieval."""

from .core import (
    ApiError,
    AuthenticationFailedError,
    Credential,
    CredentialInvalidator,
    CredentialProvider,
    ExportError,
    HttpError,
    InMemoryCredentialStore,
    MissingCredentialError,
    NetworkError,
    RateLimitError,
    Region,
    RequestCancelledError,
    RequestSetupError,
    ResponseFormatError,
    TokenValidationError,
    ValidationError,
)
from .connectors.feishu import FeishuRESTConnector
from .clients import ChatExport, ChatHistoryExporter, ExportReport
from .models import PageResult, ProgressEstimate
from .runtime.rest import RequestQueue

__version__ = "0.1.0"

__all__ = [
    # Connectors and clients
    "FeishuRESTConnector",
    "ChatHistoryExporter",
    "ChatExport",
    "ExportReport",
    "RequestQueue",
    # Credentials
    "Credential",
    "CredentialProvider",
    "CredentialInvalidator",
    "InMemoryCredentialStore",
    "Region",
    # Models
    "PageResult",
    "ProgressEstimate",
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
