"""REST runtime abstractions."""

from .http_client import HTTPClient, HTTPResponse
from .queue import RequestQueue, delay_for_rate
from .runner import ResponseAdapter, RestEndpointSpec, RestRunner
from .transport import RESTTransport

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "RESTTransport",
    "RequestQueue",
    "delay_for_rate",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
]
