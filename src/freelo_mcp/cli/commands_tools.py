"""Tool commands: call a Freelo tool once from the shell.

Commands:
- task: Show a task with comments and files
- subtasks: List a task's subtasks with statistics
- download: Download a file by UUID
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from freelo_mcp import tools
from freelo_mcp.cli.app import app, run_tool


@app.command(name="task")
def task(
    task_id: int = typer.Argument(..., help="Freelo task ID"),
):
    """Show details of a task.

    Example:
        freelo-mcp task 12345
    """
    run_tool(tools.get_task(task_id))


@app.command(name="subtasks")
def subtasks(
    task_id: int = typer.Argument(..., help="Freelo task ID"),
):
    """List subtasks of a task (first page only)."""
    run_tool(tools.list_task_subtasks(task_id))


@app.command(name="download")
def download(
    file_uuid: str = typer.Argument(..., help="File UUID (from task comments)"),
    filename: Optional[str] = typer.Option(None, "--filename", "-f", help="Save as this name"),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Directory to save into (default: FREELO_DOWNLOAD_DIR)"
    ),
):
    """Download a file by UUID."""
    run_tool(tools.download_file(file_uuid, filename, download_dir=output_dir))
