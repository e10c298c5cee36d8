"""Freelo API client.

Documentation: https://freelo.docs.apiary.io/

Read-only accessors layered on AsyncHTTPClient. Each accessor performs
exactly one request and reshapes the payload; none of them retries,
caches or follows pagination.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from freelo_mcp.config import Config, config
from freelo_mcp.connectors import (
    FREELO_API_BASE_URL,
    AsyncHTTPClient,
    BasicAuth,
    ConfigurationError,
    FreeloAPIError,
    RequestPolicy,
    UnsupportedOperationError,
)
from freelo_mcp.models import SubtasksPage

logger = logging.getLogger(__name__)


class FreeloClient:
    """Authenticated, read-only access to Freelo resources."""

    def __init__(
        self,
        email: str,
        api_key: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Bind the client to one Freelo account.

        Args:
            email: Account email (Basic auth username)
            api_key: Freelo API key (Basic auth password)
            timeout: Transport timeout in seconds
            transport: Optional httpx transport (used by tests)

        Raises:
            ConfigurationError: If either credential is blank
        """
        if not email:
            raise ConfigurationError(
                "Freelo email is required. Set FREELO_EMAIL environment variable."
            )
        if not api_key:
            raise ConfigurationError(
                "Freelo API key is required. Set FREELO_API_KEY environment variable."
            )

        self.auth = BasicAuth(username=email, password=api_key)
        self.http = AsyncHTTPClient(
            auth=self.auth,
            policy=RequestPolicy.for_identity(email, timeout=timeout),
            base_url=FREELO_API_BASE_URL,
            transport=transport,
        )

    async def get_task(self, task_id: int) -> Dict[str, Any]:
        """Get task details by ID, including comments and their files."""
        return await self.http.get(f"/task/{task_id}")

    async def list_task_subtasks(self, task_id: int) -> List[Dict[str, Any]]:
        """List subtasks of a task.

        Only the first page is returned; the pagination envelope is dropped
        and no further pages are requested.
        """
        payload = await self.http.get(f"/task/{task_id}/subtasks")
        try:
            page = SubtasksPage.model_validate(payload)
        except ValidationError as e:
            raise FreeloAPIError(f"Unexpected subtasks response: {e.error_count()} invalid field(s)") from e

        if page.total is not None and page.total > len(page.data.subtasks):
            logger.debug(
                "Task %s has %s subtasks; returning first page of %s",
                task_id,
                page.total,
                len(page.data.subtasks),
            )
        return page.data.subtasks

    async def download_file(self, file_uuid: str) -> bytes:
        """Download a file by UUID (GET /file/{uuid}).

        UUIDs are found in ``comments[].files[]`` of a task.
        """
        return await self.http.request_bytes(f"/file/{file_uuid}")

    async def list_task_attachments(self, task_id: int) -> List[Dict[str, Any]]:
        """Not supported by the Freelo API.

        Files are included in task comments; use get_task() instead.
        """
        raise UnsupportedOperationError(
            "API does not support /task/{id}/attachments endpoint. "
            "Files are included in task comments. Use get_task() instead."
        )

    async def get_attachment(self, attachment_id: int) -> Dict[str, Any]:
        """Not supported by the Freelo API.

        Files use UUIDs and are served by /file/{uuid}; use download_file().
        """
        raise UnsupportedOperationError(
            "API does not support /attachments/{id} endpoint. "
            "Files use UUIDs. Use download_file(uuid) instead."
        )


def create_freelo_client(
    cfg: Optional[Config] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FreeloClient:
    """Create a client from FREELO_EMAIL / FREELO_API_KEY."""
    cfg = cfg or config

    if not cfg.email:
        raise ConfigurationError(
            "FREELO_EMAIL environment variable is not set. "
            "Please configure it in your MCP server settings."
        )
    if not cfg.api_key:
        raise ConfigurationError(
            "FREELO_API_KEY environment variable is not set. "
            "Please configure it in your MCP server settings."
        )

    return FreeloClient(cfg.email, cfg.api_key, timeout=cfg.timeout_s, transport=transport)
