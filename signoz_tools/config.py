"""
Configuration for the SigNoz tools.

Credentials come from the environment (optionally populated from a .env
file by the server entry point).
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from . import __version__

QUERY_RANGE_PATH = "/api/v4/query_range"
DEFAULT_TIMEOUT = 20.0
USER_AGENT = f"signoz-mcp-server/{__version__}"


class SigNozConfig(BaseModel):
    """Connection settings for a SigNoz instance."""

    base_url: str = Field(description="SigNoz base URL, e.g. https://signoz.example.com")
    api_key: str = Field(description="API key sent in the SIGNOZ-API-KEY header")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    user_agent: str = Field(default=USER_AGENT, description="User-Agent header value")

    @property
    def endpoint(self) -> str:
        return self.base_url.rstrip("/") + QUERY_RANGE_PATH

    @classmethod
    def from_env(cls) -> "SigNozConfig":
        """Create configuration from environment variables.

        Environment variables:
            SIGNOZ_API_BASE_URL: Base URL of the SigNoz instance (required)
            SIGNOZ_API_KEY: API key (required)
            SIGNOZ_TIMEOUT: Request timeout in seconds (default: 20)

        Raises:
            ValueError: If a required variable is missing or empty.
        """
        base_url = os.environ.get("SIGNOZ_API_BASE_URL")
        api_key = os.environ.get("SIGNOZ_API_KEY")

        missing = [name for name, value in (("SIGNOZ_API_BASE_URL", base_url), ("SIGNOZ_API_KEY", api_key)) if not value]
        if missing:
            raise ValueError(f"{' and '.join(missing)} not set")

        return cls(
            base_url=base_url,
            api_key=api_key,
            timeout=float(os.environ.get("SIGNOZ_TIMEOUT", DEFAULT_TIMEOUT)),
        )


def load_env(env_file: Path | str | None = None) -> bool:
    """Populate os.environ from a .env file without overriding existing variables.

    Args:
        env_file: Path to the .env file. If None, searches from the current directory.

    Returns:
        True if a file was found and loaded.
    """
    if env_file is not None:
        path = Path(env_file)
        if not path.exists():
            raise FileNotFoundError(f"Env file not found: {path}")
        return load_dotenv(path)
    return load_dotenv()
