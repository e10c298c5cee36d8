"""CLI app setup and common utilities.

This module creates the main Typer app and provides shared helpers
used by all commands.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Dict, Optional

import typer
from typer import Typer

from freelo_mcp.config import setup_logging

# Initialize Typer app
app = Typer(
    name="freelo-mcp",
    help="Freelo MCP bridge: read-only Freelo tools for AI assistants.",
)


@app.callback()
def init_app(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: FREELO_LOG_LEVEL or INFO)",
        envvar="FREELO_LOG_LEVEL",
    ),
):
    """Configure logging before any command runs."""
    setup_logging(log_level)


def run_tool(coro: Awaitable[Dict[str, Any]]) -> None:
    """Run a tool coroutine, print its JSON result, exit 1 on failure."""
    result = asyncio.run(coro)
    typer.echo(json.dumps(result, indent=2, ensure_ascii=False))
    if not result.get("success"):
        raise typer.Exit(1)
