"""Configuration service for TaskLite.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json
- Writing a default config on first run
- Dotted-key access (``api.endpoint``) for the ``config`` commands
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from tasklite.models.config_models import AppConfig
from tasklite.utils.logger import get_logger

logger = get_logger("config")


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Resolve the platform directories and create them."""

        self.config_dir = Path(user_config_dir("tasklite"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("tasklite"))
        self.storage_dir = self.data_dir / "storage"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """The loaded configuration, read on first access."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Read config.json, writing the defaults on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            logger.info("no config at %s, writing defaults", self.config_path)
            self._config = AppConfig()
            self.save_config()
        except (OSError, ValidationError) as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Write config.json with owner-only permissions."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        """Replace the configuration with the defaults and save it."""
        self._config = AppConfig()
        self.save_config()
        return self._config

    def get(self, key: str) -> Any:
        """Read a dotted key such as ``api.endpoint``.

        Raises:
            KeyError: If any segment of the key does not exist
        """
        node: Any = self.config
        for part in key.split("."):
            if not isinstance(node, BaseModel) or part not in type(node).model_fields:
                raise KeyError(key)
            node = getattr(node, part)
        return node

    def set(self, key: str, value: Any) -> None:
        """Set a dotted key, validate the whole config and save it.

        Raises:
            KeyError: If the key does not exist
            ValueError: If the new value does not validate
        """
        parent_path, _, leaf = key.rpartition(".")
        data = self.config.model_dump()
        node = data
        for part in parent_path.split(".") if parent_path else []:
            if not isinstance(node.get(part), dict):
                raise KeyError(key)
            node = node[part]
        if leaf not in node or isinstance(node[leaf], dict):
            raise KeyError(key)
        node[leaf] = value

        try:
            self._config = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {e.errors()[0]['msg']}") from e
        self.save_config()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Process-wide ConfigService with its config already loaded."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
