"""
Configuration management for the AOT account monitor.
"""

import os
import re
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .config_schema import AOTMonitorConfig, validate_config_dict

_ENV_PATTERN = re.compile(r"^\$\{([A-Za-z_][A-Za-z0-9_]*)\}$")


def _resolve_env(value: Any) -> Any:
    """Replace ``${VAR}`` placeholders with environment values, recursively."""
    if isinstance(value, dict):
        return {k: _resolve_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_env(v) for v in value]
    if isinstance(value, str):
        match = _ENV_PATTERN.match(value)
        if match:
            return os.getenv(match.group(1))
    return value


class ConfigManager:
    """Manages application configuration from YAML files and environment variables."""

    def __init__(
        self, config_path: Optional[Union[str, Path]] = None, validate: bool = True
    ):
        """Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file. If None, uses default.
            validate: Whether to validate configuration against schema.
        """
        self.config_path = (
            Path(config_path) if config_path else self._get_default_config_path()
        )
        self._config: Optional[dict[str, Any]] = None
        self._validated_config: Optional[AOTMonitorConfig] = None
        self._load_config()

        if validate:
            self._validate_config()

    @classmethod
    def from_dict(cls, config: dict[str, Any], validate: bool = True) -> "ConfigManager":
        """Build a manager from an in-memory dictionary (no file involved)."""
        instance = cls.__new__(cls)
        instance.config_path = None
        instance._config = _resolve_env(config)
        instance._validated_config = None
        if validate:
            instance._validate_config()
        return instance

    def _get_default_config_path(self) -> Path:
        """Get the default configuration file path."""
        env_path = os.getenv("AOT_MONITOR_CONFIG")
        if env_path:
            return Path(env_path)
        return Path(__file__).parent.parent.parent.parent / "config" / "monitor.yaml"

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, encoding="utf-8") as file:
                self._config = _resolve_env(yaml.safe_load(file) or {})
        except FileNotFoundError as e:
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}"
            ) from e
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML configuration: {e}") from e

    def _validate_config(self) -> None:
        """Validate configuration against schema."""
        if self._config is None:
            raise ValueError("No configuration loaded")

        try:
            self._validated_config = validate_config_dict(self._config)
        except ValueError as e:
            raise ValueError(
                f"Configuration validation failed in {self.config_path}:\n{e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by key with dotted path support.

        Examples:
            >>> config.get('monitor.tick_interval')  # Returns 10
            >>> config.get('nonexistent.key', 'default')  # Returns 'default'
        """
        value: Any = self._config or {}
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value with dotted path support.

        The validated model is rebuilt so typed accessors see the change.
        """
        if self._config is None:
            self._config = {}

        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

        if self._validated_config is not None:
            self._validate_config()

    def has(self, key: str) -> bool:
        """Check if a configuration key exists."""
        sentinel = object()
        return self.get(key, sentinel) is not sentinel

    def get_validated_config(self) -> AOTMonitorConfig:
        """Get the validated configuration object.

        Raises:
            ValueError: If configuration is not validated
        """
        if self._validated_config is None:
            raise ValueError("Configuration has not been validated")
        return self._validated_config
