"""Async HTTP executor for the Freelo API.

Wraps httpx with the Freelo request contract:
- HTTP Basic authentication on every request (never overridable)
- Identifying User-Agent and JSON content type
- Error mapping to the FreeloAPIError hierarchy

One request, one round trip: no retries, no backoff, no rate limiting.
Tests inject an ``httpx.MockTransport`` instead of touching the network.
"""

import json as json_module
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import httpx

from .base import (
    DEFAULT_POLICY,
    FREELO_API_BASE_URL,
    AuthenticationError,
    AuthStrategy,
    FreeloAPIError,
    RateLimitError,
    RequestPolicy,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)


@dataclass
class HTTPResponse:
    """Simplified HTTP response wrapper."""

    status_code: int
    headers: Dict[str, str]
    body: bytes
    reason_phrase: str = ""
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        """Check if status code indicates success (2xx)."""
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON."""
        return json_module.loads(self.body)


def _extract_error_reason(response: HTTPResponse) -> Tuple[str, Dict[str, Any]]:
    """Pull a human-readable reason out of an error response.

    Prefers the body's ``message`` field, then ``error``, then the status line.
    """
    fallback = f"API request failed: {response.status_code} {response.reason_phrase}".rstrip()
    try:
        data = response.json()
    except ValueError:
        return fallback, {}

    if not isinstance(data, dict):
        return fallback, {}

    reason = data.get("message") or data.get("error") or fallback
    return str(reason), data


def map_error(response: HTTPResponse) -> FreeloAPIError:
    """Map a non-2xx response to the appropriate FreeloAPIError."""
    reason, details = _extract_error_reason(response)
    status_code = response.status_code

    if status_code in (401, 403):
        return AuthenticationError(reason, status_code, details)
    elif status_code == 404:
        return ResourceNotFoundError(reason, status_code, details)
    elif status_code == 429:
        retry_after = response.headers.get("retry-after")
        try:
            retry_seconds = float(retry_after) if retry_after else None
        except ValueError:
            retry_seconds = None
        return RateLimitError(reason, status_code, details, retry_after=retry_seconds)
    else:
        return FreeloAPIError(reason, status_code, details)


class AsyncHTTPClient:
    """Credential-bound async HTTP client.

    Every request targets ``base_url`` and carries the auth strategy's
    headers. A fresh ``httpx.AsyncClient`` is opened per request, so
    concurrent calls share nothing but the (immutable) auth and policy.
    """

    def __init__(
        self,
        auth: AuthStrategy,
        policy: Optional[RequestPolicy] = None,
        base_url: str = FREELO_API_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize async HTTP client.

        Args:
            auth: Authentication strategy for requests
            policy: Request policy (timeout, User-Agent)
            base_url: Base URL for all requests
            transport: Optional httpx transport (used by tests)
        """
        self.auth = auth
        self.policy = policy or DEFAULT_POLICY
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def _build_headers(
        self,
        extra_headers: Optional[Dict[str, str]] = None,
        send_json: bool = True,
    ) -> httpx.Headers:
        """Build request headers including auth and defaults.

        Merging is case-insensitive and auth headers are applied last, so
        callers cannot replace them.
        """
        headers = httpx.Headers({"User-Agent": self.policy.user_agent})
        if send_json:
            headers["Content-Type"] = "application/json"

        if extra_headers:
            headers.update(extra_headers)

        headers.update(self.auth.get_headers())
        return headers

    def _get_url(self, path: str) -> str:
        """Build full URL from a resource path such as ``/task/42``."""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        send_json: bool = True,
    ) -> HTTPResponse:
        """Make a single HTTP request.

        Args:
            method: HTTP method
            path: URL path (relative to base_url)
            json: JSON body to send
            headers: Additional headers, merged over the defaults
            send_json: Whether to send ``Content-Type: application/json``

        Returns:
            HTTPResponse for a 2xx status

        Raises:
            FreeloAPIError: On non-2xx status, an unencodable header or any
                transport fault
        """
        url = self._get_url(path)
        try:
            request_headers = self._build_headers(headers, send_json=send_json)
        except UnicodeEncodeError as e:
            # httpx only accepts ASCII header values
            logger.warning("%s %s has a non-ASCII header: %s", method, path, e)
            raise FreeloAPIError(f"Invalid request header: {e}") from e
        start_time = time.monotonic()

        try:
            async with httpx.AsyncClient(
                timeout=self.policy.timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json,
                    headers=request_headers,
                )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed in transport: %s", method, path, e)
            raise FreeloAPIError(str(e) or type(e).__name__) from e

        result = HTTPResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            reason_phrase=response.reason_phrase,
            elapsed_seconds=time.monotonic() - start_time,
        )
        logger.debug(
            "%s %s -> %s (%.3fs)", method, path, result.status_code, result.elapsed_seconds
        )

        if not result.ok:
            error = map_error(result)
            logger.warning("%s %s returned %s: %s", method, path, result.status_code, error.reason)
            raise error

        return result

    async def request_json(self, method: str, path: str, **kwargs) -> Any:
        """Make a request and decode the JSON body without validating it."""
        response = await self.request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise FreeloAPIError(f"Invalid JSON response: {e}", response.status_code) from e

    async def request_bytes(self, path: str) -> bytes:
        """GET a binary payload; only auth and identity headers are sent."""
        response = await self.request("GET", path, send_json=False)
        return response.body

    async def get(self, path: str, **kwargs) -> Any:
        """Async HTTP GET returning decoded JSON."""
        return await self.request_json("GET", path, **kwargs)
