"""HTTP transport: typed errors, deadlines and body classification."""

from .classify import classify_body, extract_error_message
from .endpoints import API_ENDPOINTS, build_endpoint
from .http import ApiTransport, TokenProvider

__all__ = [
    "API_ENDPOINTS",
    "ApiTransport",
    "TokenProvider",
    "build_endpoint",
    "classify_body",
    "extract_error_message",
]
