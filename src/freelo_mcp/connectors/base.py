"""Core connector abstractions for the Freelo API.

Defines the pieces every request is built from:
- AuthStrategy: Authentication method abstraction (HTTP Basic for Freelo)
- RequestPolicy: Timeouts and identifying headers
- FreeloError hierarchy: Typed exceptions with a caller-ready message

Nothing here performs network I/O; see http_client for that.
"""

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

FREELO_API_BASE_URL = "https://api.freelo.io/v1"
API_ERROR_PREFIX = "Freelo API error"


# =============================================================================
# Authentication Strategies
# =============================================================================


@dataclass(frozen=True)
class AuthStrategy:
    """Base authentication strategy (data holder)."""

    def get_headers(self) -> Dict[str, str]:
        """Get authentication headers for requests."""
        return {}


@dataclass(frozen=True)
class BasicAuth(AuthStrategy):
    """HTTP Basic authentication.

    Freelo uses the account email as username and the API key as password.
    Frozen: the pair is shared by every request for the process lifetime.
    """

    username: str = ""
    password: str = field(default="", repr=False)

    def encode(self) -> str:
        """Return base64(username:password)."""
        raw = f"{self.username}:{self.password}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def get_headers(self) -> Dict[str, str]:
        """Get authorization header."""
        return {"Authorization": f"Basic {self.encode()}"}


# =============================================================================
# Request Policy
# =============================================================================


@dataclass
class RequestPolicy:
    """Policy for HTTP requests: timeouts and identifying headers.

    There is no retry or rate-limit configuration; every
    request is a single round trip.
    """

    timeout: float = 30.0  # seconds, handed to httpx as-is
    user_agent: str = "freelo-mcp"

    @classmethod
    def for_identity(cls, identity: str, timeout: float = 30.0) -> "RequestPolicy":
        """Build a policy whose User-Agent names the calling account."""
        return cls(timeout=timeout, user_agent=f"freelo-mcp ({identity})")


DEFAULT_POLICY = RequestPolicy()


# =============================================================================
# Error Hierarchy
# =============================================================================


class FreeloError(Exception):
    """Base exception for everything raised by the Freelo client.

    ``message`` is safe to hand back to an MCP host verbatim.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(FreeloError):
    """Credentials are missing or blank."""

    pass


class UnsupportedOperationError(FreeloError):
    """The Freelo API has no endpoint for the requested operation."""

    pass


class FreeloAPIError(FreeloError):
    """A request failed, either remotely or in transport.

    Transport faults (DNS, connect, timeout) carry ``status_code=None``;
    otherwise it is the HTTP status returned by Freelo.
    """

    def __init__(
        self,
        reason: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(f"{API_ERROR_PREFIX}: {reason}", details)
        self.reason = reason
        self.status_code = status_code


class AuthenticationError(FreeloAPIError):
    """Credentials rejected (401) or access denied (403)."""

    pass


class ResourceNotFoundError(FreeloAPIError):
    """Requested resource not found (404)."""

    pass


class RateLimitError(FreeloAPIError):
    """Rate limit exceeded (429). Reported, never retried."""

    def __init__(
        self,
        reason: str,
        status_code: Optional[int] = 429,
        details: Optional[Dict[str, Any]] = None,
        retry_after: Optional[float] = None,
    ):
        super().__init__(reason, status_code, details)
        self.retry_after = retry_after
