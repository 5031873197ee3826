"""Configuration service for managing todolist configuration.

This module provides the ConfigService class, which is the single source of truth
for configuration management. It handles:

- Loading and saving config.json
- Context management (list, add, remove, switch)
- Dotted-key access to settings such as ``output.format`` or ``ui.page_size``
- Config file initialization with a default context on first run
"""

from __future__ import annotations

import uuid
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from todolist_service.models.config_models import AppConfig, Context

APP_NAME = "todolist_service"

# Settings reachable through get/set/reset; contexts have their own commands
SETTING_SECTIONS = ("output", "ui")


class ConfigService:
    """Service for managing application configuration.

    The configuration is read lazily from ``config.json`` in the user config
    directory and written back after every change.
    """

    def __init__(self):
        """Initialize the config service."""
        self.config_dir = Path(user_config_dir(APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(APP_NAME))

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage, creating it on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = self.create_default_config()
        except (OSError, ValidationError) as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self):
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def create_default_config(self) -> AppConfig:
        """Create a configuration with one local context and a fresh owner id."""
        context = Context(
            name="default",
            source=str(self.data_dir / "todolist.db"),
            owner_id=str(uuid.uuid4()),
            description="Local SQLite storage",
        )
        self._config = AppConfig(
            current_context_name=context.name, contexts=[context]
        )
        self.save_config()
        return self._config

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @staticmethod
    def _split_key(key: str) -> list[str]:
        parts = key.split(".")
        if len(parts) != 2 or parts[0] not in SETTING_SECTIONS:
            raise KeyError(key)
        return parts

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a setting
        """
        section, name = self._split_key(key)
        model: BaseModel = getattr(self.config, section)
        if name not in type(model).model_fields:
            raise KeyError(key)
        return getattr(model, name)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        The whole configuration is re-validated, so an out-of-range value
        raises ``pydantic.ValidationError`` and nothing is saved.

        Raises:
            KeyError: If the key does not name a setting
        """
        section, name = self._split_key(key)
        data = self.config.model_dump()
        if name not in data[section]:
            raise KeyError(key)
        data[section][name] = value

        self._config = AppConfig.model_validate(data)
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset one setting, or all settings, to defaults.

        Contexts are kept: they carry the owner ids that tasks belong to.
        """
        defaults = AppConfig()
        if key is not None:
            section, name = self._split_key(key)
            self.set(key, getattr(getattr(defaults, section), name))
            return

        self._config = self.config.model_copy(
            update={section: getattr(defaults, section) for section in SETTING_SECTIONS}
        )
        self.save_config()

    def settings(self) -> dict[str, Any]:
        """Flattened view of every dotted setting and its value."""
        return {
            f"{section}.{name}": value
            for section in SETTING_SECTIONS
            for name, value in getattr(self.config, section).model_dump().items()
        }

    # ------------------------------------------------------------------
    # Contexts
    # ------------------------------------------------------------------

    def list_contexts(self) -> list[Context]:
        """List all available contexts."""
        return self.config.contexts

    def get_current_context(self) -> Context:
        """Get the currently active context.

        Raises:
            ValueError: If the current context is not configured
        """
        return self.config.get_current_context()

    def use_context(self, name: str) -> Context:
        """Set the current context by name."""
        context = self.config.get_context(name)
        self.config.current_context_name = context.name
        self.save_config()
        return context

    def add_context(self, context: Context):
        """Add a new context to the configuration."""
        self.config.add_context(context)
        self.save_config()

    def remove_context(self, name: str):
        """Remove a context from the configuration."""
        self.config.remove_context(name)
        self.save_config()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
