"""MCP tool implementations.

Each tool returns a JSON-serializable dict: ``{"success": True, ...}`` on
success or ``{"success": False, "error": <message>}`` on any Freelo or
input failure. Formatting helpers turn raw API records into the flatter
shape presented to the assistant.
"""

import logging
import re
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from freelo_mcp.client import FreeloClient, create_freelo_client
from freelo_mcp.config import config
from freelo_mcp.connectors import FreeloError
from freelo_mcp.models import Comment, File, Project, Subtask, Task, TaskList, User

logger = logging.getLogger(__name__)

PRIORITY_LABELS = {"l": "Low", "m": "Medium", "h": "High"}
COMPLETED_STATES = {"completed", "finished"}
MAX_FILENAME_LENGTH = 200


# =============================================================================
# Tool Inputs
# =============================================================================


class TaskIdInput(BaseModel):
    """Input for tools addressing a single task."""

    model_config = ConfigDict(extra="forbid")

    task_id: int = Field(..., gt=0, description="The unique ID of the task")


class DownloadFileInput(BaseModel):
    """Input for downloading a file."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    file_uuid: UUID = Field(..., description="The UUID of the file (found in task comments)")
    filename: Optional[str] = Field(
        default=None, description="Optional filename to save as (otherwise uses UUID)"
    )


# =============================================================================
# Formatting Helpers
# =============================================================================


def format_priority(priority: Optional[str]) -> Optional[str]:
    """Map l/m/h to Low/Medium/High; unknown values pass through."""
    if priority is None:
        return None
    return PRIORITY_LABELS.get(priority, priority)


def format_file_size(size_bytes: Optional[int]) -> str:
    """Format a byte count as e.g. "1.5 KB" (base 1024)."""
    if not size_bytes or size_bytes <= 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size_bytes)
    i = 0
    while value >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    value_str = ("%.2f" % value).rstrip("0").rstrip(".")
    return f"{value_str} {units[i]}"


def sanitize_filename(filename: str) -> str:
    """Replace unsafe characters with "_", collapse runs, cap the length."""
    cleaned = re.sub(r"[^a-zA-Z0-9._-]", "_", filename)
    cleaned = re.sub(r"_{2,}", "_", cleaned)
    return cleaned[:MAX_FILENAME_LENGTH]


def _format_user(user: Optional[User], with_email: bool = True) -> Optional[Dict[str, Any]]:
    if user is None:
        return None
    out: Dict[str, Any] = {"id": user.id, "name": user.fullname}
    if with_email:
        out["email"] = user.email
    return out


def _format_container(
    container: Optional[Union[Project, TaskList]], with_state: bool = True
) -> Optional[Dict[str, Any]]:
    if container is None:
        return None
    out: Dict[str, Any] = {"id": container.id, "name": container.name}
    if with_state:
        out["state"] = container.state.state if container.state else None
    return out


def _format_file(file: File) -> Dict[str, Any]:
    return {
        "uuid": file.uuid,
        "filename": file.filename,
        "size": file.size,
        "sizeFormatted": format_file_size(file.size),
        "caption": file.caption,
        "description": file.description,
        "uploadedAt": file.date_add,
    }


def _format_comment(comment: Comment) -> Dict[str, Any]:
    return {
        "id": comment.id,
        "content": comment.content,
        "isDescription": bool(comment.is_description),
        "createdAt": comment.date_add,
        "author": _format_user(comment.author),
        "files": [_format_file(f) for f in comment.files],
    }


def format_task(task: Task) -> Dict[str, Any]:
    """Flatten a task for presentation."""
    return {
        "id": task.id,
        "name": task.name,
        "description": task.description or "(no description)",
        "priority": format_priority(task.priority_enum),
        "state": (task.state.state if task.state else None) or "unknown",
        "completed": bool(task.completed),
        # Dates
        "created": task.date_add,
        "dueDate": task.due_date,
        "dueDateEnd": task.due_date_end,
        "completedDate": task.date_complete,
        # People
        "author": _format_user(task.author),
        "assignee": _format_user(task.worker),
        # Organization
        "project": _format_container(task.project),
        "taskList": _format_container(task.tasklist),
        "tags": task.tags,
        "timeEstimate": task.time_estimate,
        # Comments and files
        "comments": [_format_comment(c) for c in task.comments],
        "totalComments": len(task.comments),
    }


def format_subtask(subtask: Subtask) -> Dict[str, Any]:
    """Flatten a subtask for presentation."""
    return {
        "id": subtask.id,
        "name": subtask.name,
        "state": subtask.state.state if subtask.state else None,
        "createdAt": subtask.date_add,
        "dueDate": subtask.due_date,
        "dueDateEnd": subtask.due_date_end,
        "commentsCount": subtask.count_comments,
        "subtasksCount": subtask.count_subtasks,
        "author": _format_user(subtask.author, with_email=False),
        "assignee": _format_user(subtask.worker, with_email=False),
        "project": _format_container(subtask.project, with_state=False),
        "taskList": _format_container(subtask.tasklist, with_state=False),
    }


def subtask_statistics(subtasks: List[Dict[str, Any]]) -> Dict[str, int]:
    """Count completed subtasks (state "completed" or "finished")."""
    total = len(subtasks)
    completed = sum(1 for s in subtasks if s["state"] in COMPLETED_STATES)
    return {
        "total": total,
        "completed": completed,
        "remaining": total - completed,
        "completionPercentage": round(completed / total * 100) if total else 0,
    }


def _describe_validation(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in e['loc']) or 'value'}: {e['msg']}" for e in error.errors()
    )


def _failure(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


# =============================================================================
# Tools
# =============================================================================


async def get_task(task_id: int, client: Optional[FreeloClient] = None) -> Dict[str, Any]:
    """Get detailed information about a task, including comments and files."""
    try:
        params = TaskIdInput(task_id=task_id)
    except ValidationError as e:
        return _failure(f"Invalid input: {_describe_validation(e)}")

    try:
        client = client or create_freelo_client()
        task = Task.model_validate(await client.get_task(params.task_id))
    except FreeloError as e:
        logger.info("freelo_get_task(%s) failed: %s", task_id, e)
        return _failure(e.message)
    except ValidationError as e:
        return _failure(f"Unexpected task data from Freelo: {_describe_validation(e)}")

    return {"success": True, "task": format_task(task)}


async def list_task_subtasks(
    task_id: int, client: Optional[FreeloClient] = None
) -> Dict[str, Any]:
    """List subtasks of a task (first page) with completion statistics."""
    try:
        params = TaskIdInput(task_id=task_id)
    except ValidationError as e:
        return _failure(f"Invalid input: {_describe_validation(e)}")

    try:
        client = client or create_freelo_client()
        raw = await client.list_task_subtasks(params.task_id)
        subtasks = [format_subtask(Subtask.model_validate(s)) for s in raw]
    except FreeloError as e:
        logger.info("freelo_list_task_subtasks(%s) failed: %s", task_id, e)
        return _failure(e.message)
    except ValidationError as e:
        return _failure(f"Unexpected subtask data from Freelo: {_describe_validation(e)}")

    return {
        "success": True,
        "taskId": params.task_id,
        "statistics": subtask_statistics(subtasks),
        "subtasks": subtasks,
    }


async def download_file(
    file_uuid: str,
    filename: Optional[str] = None,
    client: Optional[FreeloClient] = None,
    download_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Download a file by UUID and save it under the download directory."""
    try:
        params = DownloadFileInput(file_uuid=file_uuid, filename=filename)
    except ValidationError as e:
        return _failure(f"Invalid input: {_describe_validation(e)}")

    uuid_str = str(params.file_uuid)
    name = sanitize_filename(params.filename) if params.filename else uuid_str

    try:
        client = client or create_freelo_client()
        content = await client.download_file(uuid_str)
    except FreeloError as e:
        logger.info("freelo_download_file(%s) failed: %s", uuid_str, e)
        return _failure(e.message)

    target_dir = download_dir or config.download_dir
    file_path = target_dir / f"{int(time.time() * 1000)}-{name}"
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)
        size = file_path.stat().st_size
    except OSError as e:
        logger.warning("Could not save %s to %s: %s", uuid_str, file_path, e)
        return _failure(f"Failed to save file: {e}")

    return {
        "success": True,
        "file": {
            "uuid": uuid_str,
            "filename": name,
            "filePath": str(file_path),
            "size": size,
            "sizeFormatted": format_file_size(size),
        },
        "message": f"File successfully downloaded to: {file_path}",
    }
