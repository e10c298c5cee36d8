"""Connector layer for the Freelo REST API.

Key components:
- AuthStrategy / BasicAuth: credential holders that produce auth headers
- RequestPolicy: timeout and identifying headers
- AsyncHTTPClient: httpx wrapper performing single authenticated requests
- FreeloError hierarchy: typed failures with caller-ready messages
"""

from .base import (
    API_ERROR_PREFIX,
    DEFAULT_POLICY,
    FREELO_API_BASE_URL,
    AuthenticationError,
    AuthStrategy,
    BasicAuth,
    ConfigurationError,
    FreeloAPIError,
    FreeloError,
    RateLimitError,
    RequestPolicy,
    ResourceNotFoundError,
    UnsupportedOperationError,
)
from .http_client import AsyncHTTPClient, HTTPResponse, map_error

__all__ = [
    # Auth
    "AuthStrategy",
    "BasicAuth",
    # Policy
    "RequestPolicy",
    "DEFAULT_POLICY",
    "FREELO_API_BASE_URL",
    # Errors
    "API_ERROR_PREFIX",
    "FreeloError",
    "ConfigurationError",
    "UnsupportedOperationError",
    "FreeloAPIError",
    "AuthenticationError",
    "ResourceNotFoundError",
    "RateLimitError",
    # HTTP client
    "AsyncHTTPClient",
    "HTTPResponse",
    "map_error",
]
