"""MCP server exposing the Freelo tools.

Tools are registered on a FastMCP instance; run over stdio with
``freelo-mcp serve`` or ``python -m freelo_mcp``.
"""

import logging
from typing import Annotated, Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from freelo_mcp import tools
from freelo_mcp.config import config, setup_logging

logger = logging.getLogger(__name__)

READ_ONLY = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": True,
}

mcp = FastMCP("freelo-mcp")


@mcp.tool(
    name="freelo_get_task",
    description=(
        "Get detailed information about a specific Freelo task by its ID. Returns task name, "
        "description, author, assignee, dates, priority, state, project, task list, comments "
        "(with files), and all other task details."
    ),
    annotations={"title": "Get Freelo Task", **READ_ONLY},
)
async def freelo_get_task(
    task_id: Annotated[int, Field(gt=0, description="The unique ID of the task to retrieve")],
) -> Dict[str, Any]:
    return await tools.get_task(task_id)


@mcp.tool(
    name="freelo_list_task_subtasks",
    description=(
        "List all subtasks of a specific Freelo task. Returns subtask names, states, "
        "assignees, and completion statistics. Only the first page of subtasks is returned."
    ),
    annotations={"title": "List Freelo Task Subtasks", **READ_ONLY},
)
async def freelo_list_task_subtasks(
    task_id: Annotated[
        int, Field(gt=0, description="The unique ID of the task to retrieve subtasks for")
    ],
) -> Dict[str, Any]:
    return await tools.list_task_subtasks(task_id)


@mcp.tool(
    name="freelo_download_file",
    description=(
        "Download a file from Freelo using its UUID. Files are found in task comments. "
        "Downloads the file to a temporary directory and returns the file path. Get file "
        "UUIDs by retrieving task details with freelo_get_task."
    ),
    annotations={
        "title": "Download Freelo File",
        **READ_ONLY,
        # Writes a new local file on every call.
        "idempotentHint": False,
    },
)
async def freelo_download_file(
    file_uuid: Annotated[
        str, Field(description="The UUID of the file to download (found in task comments)")
    ],
    filename: Annotated[
        Optional[str], Field(description="Optional filename to save as (otherwise uses UUID)")
    ] = None,
) -> Dict[str, Any]:
    return await tools.download_file(file_uuid, filename)


def run(transport: str = "stdio") -> None:
    """Configure logging and serve until the host disconnects."""
    setup_logging()
    config.ensure_directories()
    logger.info("Starting freelo-mcp server (%s transport)", transport)
    mcp.run(transport=transport)
