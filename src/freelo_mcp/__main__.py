"""Run the MCP server: ``python -m freelo_mcp``."""

from freelo_mcp.server import run

if __name__ == "__main__":
    run()
