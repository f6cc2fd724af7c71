"""Configuration loader for the Minecraft sign-in client

Values come from, in order of precedence:
1. Environment variables
2. A .env file (never overrides a variable that is already set)
3. The default passed by the caller
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlsplit

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")


class ConfigLoader:
    """Reads typed settings from the environment"""

    def __init__(self, env_path: Optional[str] = None):
        """
        Args:
            env_path: Path to a .env file. Defaults to '.env' in the
                current directory; a missing file is not an error.
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        if self.env_path.is_file():
            load_dotenv(dotenv_path=self.env_path, override=False)
            logger.debug(f"Loaded settings from {self.env_path}")
        else:
            logger.debug(f"No .env file at {self.env_path}")

    def get(self, env_var: str, default: Any) -> Any:
        """Return the variable coerced to the type of default, or default when unset

        Booleans accept true/1/yes/on. An int or float that fails to parse
        logs a warning and yields the default.
        """
        raw = os.getenv(env_var)
        if raw is None:
            return default

        # bool before int: bool is a subclass of int
        if isinstance(default, bool):
            return raw.strip().lower() in _TRUE_VALUES
        if isinstance(default, (int, float)):
            try:
                return type(default)(raw)
            except ValueError:
                logger.warning(
                    f"{env_var}={raw!r} is not a valid {type(default).__name__}, using default {default}"
                )
                return default
        return raw

    def get_url(self, env_var: str, default: str) -> str:
        """Return an http(s) URL override, or default when unset or unusable"""
        value = self.get(env_var, default)
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            logger.warning(f"{env_var}={value!r} is not an http(s) URL, using {default}")
            return default
        return value


_config_loader = None


def get_config_loader() -> ConfigLoader:
    """Get or create the process-wide ConfigLoader"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def reset_config_loader() -> None:
    """Drop the process-wide instance so the next call re-reads the .env file"""
    global _config_loader
    _config_loader = None
