"""freelo-mcp: read-only Freelo API access for MCP hosts.

Layers:
- connectors: credential-bound HTTP executor and error hierarchy
- client: Freelo resource accessors
- tools / server: MCP tool layer
- cli: Typer command-line interface
"""

from freelo_mcp.client import FreeloClient, create_freelo_client
from freelo_mcp.connectors import (
    ConfigurationError,
    FreeloAPIError,
    FreeloError,
    UnsupportedOperationError,
)

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "FreeloAPIError",
    "FreeloClient",
    "FreeloError",
    "UnsupportedOperationError",
    "create_freelo_client",
]
