"""Configuration and environment handling for freelo-mcp."""

import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class Config:
    """Central configuration object."""

    def __init__(self):
        # Get project root
        self.project_root = Path(__file__).parent.parent.parent

        # Load .env file if it exists
        env_path = self.project_root / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        # Credentials (validated by the client factory, not here)
        self.email: Optional[str] = os.getenv("FREELO_EMAIL") or None
        self.api_key: Optional[str] = os.getenv("FREELO_API_KEY") or None

        # Transport timeout handed to httpx
        self.timeout_s: float = float(os.getenv("FREELO_TIMEOUT_S", "30"))

        # Downloads
        self.download_dir: Path = Path(
            os.getenv("FREELO_DOWNLOAD_DIR", str(Path(tempfile.gettempdir()) / "freelo-files"))
        )

        # Logging
        self.log_level: str = os.getenv("FREELO_LOG_LEVEL", "INFO")

    def ensure_directories(self) -> None:
        """Create the download directory if it doesn't exist."""
        self.download_dir.mkdir(parents=True, exist_ok=True)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging.

    Always logs to stderr: stdout is reserved for the MCP stdio protocol.
    """
    logging.basicConfig(
        level=(level or config.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# Global config instance
config = Config()
