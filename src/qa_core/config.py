"""
Configuration Loader
--------------------

This module centralises configuration management.  It loads settings
from a YAML file (``config/config.yaml`` under the working directory,
or the path named by ``QA_CORE_CONFIG``) and overlays environment
variables, including those defined in a ``.env`` file.  When a key
exists in both places the environment variable takes precedence.

Keys are dotted paths into the YAML structure; the matching environment
variable is the key upper-cased with dots replaced by underscores, so
``driver.browser`` can be overridden with ``DRIVER_BROWSER``.

Recognised keys:

``report.dir``
    Directory that receives report artefacts (default ``reports``).
``report.screenshots_dir``
    Screenshot directory (default ``<report.dir>/images``).
``driver.factory``
    ``module:callable`` returning a driver, called with the config.
``driver.platform``
    ``web`` (Selenium) or ``android``/``ios`` (Appium).
``driver.browser`` / ``driver.headless`` / ``driver.remote_url`` /
``driver.capabilities``
    Inputs to the built-in driver factories.
``executor.max_workers``
    Default pool size of :class:`~qa_core.executor.ParallelExecutor`.
"""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

from .utils.logger import get_logger


_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off", ""}


class Config:
    """Load YAML and environment based configuration values."""

    def __init__(self, yaml_path: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None) -> None:
        # Load environment variables from .env file if present
        load_dotenv()
        self.logger = get_logger(__name__)

        if yaml_path is None:
            yaml_path = os.getenv("QA_CORE_CONFIG") or Path.cwd() / "config" / "config.yaml"
        self.yaml_path = Path(yaml_path)

        self.data: dict[str, Any] = {}
        if self.yaml_path.exists():
            try:
                with open(self.yaml_path, "r", encoding="utf-8") as f:
                    self.data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as exc:
                self.logger.error("Failed to load YAML config from %s: %s", self.yaml_path, exc)
        else:
            self.logger.debug("Configuration file %s not found, using defaults", self.yaml_path)

        for dotted_key, value in (overrides or {}).items():
            self.set(dotted_key, value)

    def get(self, dotted_key: str, default: Any = None) -> Any:
        """Retrieve a configuration value.

        Values are looked up in the environment first, then in the YAML
        structure.  Dotted keys (e.g. `report.dir`) traverse nested
        dictionaries.
        """
        env_key = dotted_key.upper().replace(".", "_")
        env_val = os.getenv(env_key)
        if env_val is not None:
            return env_val
        current: Any = self.data
        for part in dotted_key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def get_bool(self, dotted_key: str, default: bool = False) -> bool:
        """Retrieve a value as a boolean, accepting the usual string spellings."""
        value = self.get(dotted_key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        self.logger.warning("Unrecognised boolean %r for %s, using %s", value, dotted_key, default)
        return default

    def get_int(self, dotted_key: str, default: int) -> int:
        value = self.get(dotted_key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            self.logger.warning("Invalid integer %r for %s, using %s", value, dotted_key, default)
            return default

    def set(self, dotted_key: str, value: Any) -> None:
        """Set a value in the YAML layer, creating intermediate sections."""
        parts = dotted_key.split(".")
        current = self.data
        for part in parts[:-1]:
            current = current.setdefault(part, {})
        current[parts[-1]] = value

    def require(self, dotted_key: str) -> Any:
        """Retrieve a configuration value or log an error if missing."""
        value = self.get(dotted_key)
        if value is None:
            self.logger.error("Missing required configuration value: %s", dotted_key)
        return value


__all__ = ["Config"]
