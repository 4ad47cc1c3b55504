"""
Configuration for the catalog REST service.

Importing this module loads the project .env file (through catalog.config) and
configures logging, so it should be imported first in api/main.py.

Environment Variables:
- PORT: Optional, HTTP port for `python -m api.main` (defaults to 4000)
- CATALOG_SEED_DEMO: Optional, seed the store with the demo dataset at startup (defaults to true)
- CATALOG_LOG_LEVEL: Optional, logging level name (defaults to INFO)
"""

import os

from catalog.config import ConfigError, configure_logging, load_env_file

DEFAULT_PORT = 4000

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

load_env_file()
configure_logging()


class BackendConfig:
    """Configuration for the REST service."""

    @staticmethod
    def get_port() -> int:
        """
        Get the HTTP port.

        Returns:
            Port number (default: 4000)

        Raises:
            ConfigError: If PORT is not a valid port number
        """
        raw = os.getenv("PORT", "").strip()
        if not raw:
            return DEFAULT_PORT
        try:
            port = int(raw)
        except ValueError as e:
            raise ConfigError(f"PORT must be an integer, got {raw!r}") from e
        if not 0 < port < 65536:
            raise ConfigError(f"PORT must be between 1 and 65535, got {port}")
        return port

    @staticmethod
    def seed_demo_data() -> bool:
        """
        Whether to seed the store with the demo dataset at startup.

        Raises:
            ConfigError: If CATALOG_SEED_DEMO is not a recognizable boolean
        """
        raw = os.getenv("CATALOG_SEED_DEMO", "").strip().lower()
        if not raw:
            return True
        if raw in _TRUE_VALUES:
            return True
        if raw in _FALSE_VALUES:
            return False
        raise ConfigError(f"CATALOG_SEED_DEMO must be a boolean, got {raw!r}")
