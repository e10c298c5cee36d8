"""Server command: run the MCP server."""

from __future__ import annotations

import typer

from freelo_mcp.cli.app import app


@app.command(name="serve")
def serve(
    transport: str = typer.Option(
        "stdio", "--transport", "-t", help="MCP transport (stdio, sse, streamable-http)"
    ),
):
    """Run the MCP server (stdio by default, for desktop assistant hosts)."""
    from freelo_mcp.server import run

    run(transport=transport)
