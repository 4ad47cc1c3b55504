"""
Configuration management for the recipe catalog client.

This module centralizes environment variable loading from the .env file at project root.
It is imported by the gateways and by the backend configuration (api/config.py) so that
.env is loaded before anything reads the environment.

When .env does not exist, load_dotenv() is a no-op and the process environment is used.

Environment Variables:
- CATALOG_BACKEND_URL: Optional, backend base URL (defaults to http://localhost:4000)
- CATALOG_REQUEST_TIMEOUT: Optional, HTTP timeout in seconds (transport default when unset)
- CATALOG_DECIMAL_SEPARATOR: Optional, decimal separator for displayed quantities (defaults to ",")
- CATALOG_LOG_LEVEL: Optional, logging level name (defaults to INFO)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_BACKEND_URL = "http://localhost:4000"


class ConfigError(RuntimeError):
    """Raised when an environment variable holds a value that cannot be used."""
    pass


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Existing environment variables take precedence (override=False).
    Safe to call multiple times.
    """
    # catalog/config.py -> catalog/ -> project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


load_env_file()


def _read_env(key: str) -> Optional[str]:
    value = os.getenv(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


class ClientConfig:
    """Configuration for the catalog client (gateways, formatting, logging)."""

    @staticmethod
    def get_backend_url() -> str:
        """
        Get the backend API base URL.

        Returns:
            Backend URL with trailing slash removed (default: http://localhost:4000)
        """
        url = _read_env("CATALOG_BACKEND_URL") or DEFAULT_BACKEND_URL
        return url.rstrip("/")

    @staticmethod
    def get_request_timeout() -> Optional[float]:
        """
        Get the HTTP timeout for backend calls, in seconds.

        Returns:
            Timeout as float, or None to keep the transport default

        Raises:
            ConfigError: If CATALOG_REQUEST_TIMEOUT is not a positive number
        """
        raw = _read_env("CATALOG_REQUEST_TIMEOUT")
        if raw is None:
            return None
        try:
            timeout = float(raw)
        except ValueError as e:
            raise ConfigError(f"CATALOG_REQUEST_TIMEOUT must be a number, got {raw!r}") from e
        if timeout <= 0:
            raise ConfigError(f"CATALOG_REQUEST_TIMEOUT must be positive, got {raw!r}")
        return timeout

    @staticmethod
    def get_decimal_separator() -> str:
        """Get the decimal separator used to display quantities (default: ",")."""
        # Not stripped: a single space is not a valid separator anyway
        return os.getenv("CATALOG_DECIMAL_SEPARATOR") or ","

    @staticmethod
    def get_log_level() -> str:
        """Get the logging level name (default: "INFO")."""
        return (_read_env("CATALOG_LOG_LEVEL") or "INFO").upper()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the catalog processes.

    Args:
        level: Logging level name; defaults to CATALOG_LOG_LEVEL
    """
    level_name = level or ClientConfig.get_log_level()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
