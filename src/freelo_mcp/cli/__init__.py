"""CLI package for freelo-mcp.

The main Typer app is created in app.py and commands are registered
from each module on import.
"""

import freelo_mcp.cli.commands_server  # noqa: F401, E402
import freelo_mcp.cli.commands_tools  # noqa: F401, E402
from freelo_mcp.cli.app import app

__all__ = ["app"]
