"""
Configuration loader for gql_fetch.

This module handles loading client configuration from configuration files
and environment variables.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

try:
    import yaml

    HAS_YAML = True
except ImportError:
    yaml = None
    HAS_YAML = False

from .models import ClientConfig


class ConfigLoader:
    """Configuration loader with support for files and environment variables."""

    def __init__(self, env_prefix: str = "GQL_FETCH_") -> None:
        """
        Initialize configuration loader.

        Args:
            env_prefix: Prefix of the environment variables to read
        """
        self.config_paths: List[Path] = [
            Path("gql_fetch.yaml"),
            Path("gql_fetch.yml"),
            Path("gql_fetch.json"),
            Path.home() / ".gql_fetch" / "config.yaml",
            Path.home() / ".gql_fetch" / "config.json",
        ]
        self.env_prefix = env_prefix

    def load_config(
        self,
        config_file: Optional[Union[str, Path]] = None,
        **overrides: Any,
    ) -> ClientConfig:
        """
        Load configuration from all available sources.

        Environment variables override file values; keyword overrides win
        over both.

        Args:
            config_file: Specific config file to load
            **overrides: Top-level configuration values

        Returns:
            Validated ClientConfig
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_from_file(config_file)
        if file_config:
            config_data.update(file_config)

        env_config = self._load_from_environment()
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        if overrides:
            config_data = self._deep_merge(config_data, overrides)

        return ClientConfig(**config_data)

    def _load_from_file(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")
            return self._parse_config_file(config_path)

        for config_path in self.config_paths:
            if config_path.exists():
                return self._parse_config_file(config_path)

        return None

    def _parse_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Parse configuration file based on extension."""
        suffix = config_path.suffix.lower()
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if suffix in (".yaml", ".yml"):
                    if not HAS_YAML or yaml is None:
                        raise ValueError(
                            "PyYAML is required for YAML config files. Install with: pip install PyYAML"
                        )
                    return yaml.safe_load(f) or {}
                elif suffix == ".json":
                    return json.load(f) or {}
                else:
                    raise ValueError(
                        f"Unsupported config file format: {config_path.suffix}"
                    )
        except (OSError, ValueError) as e:
            raise ValueError(f"Failed to parse config file {config_path}: {e}") from e

    def _load_from_environment(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        # Map environment variables to config structure
        env_mappings = {
            f"{self.env_prefix}ENDPOINT": ("endpoint",),
            f"{self.env_prefix}REQUEST_TIMEOUT": ("request_timeout",),
            f"{self.env_prefix}CONNECT_TIMEOUT": ("connect_timeout",),
            f"{self.env_prefix}USER_AGENT": ("user_agent",),
            f"{self.env_prefix}BODY_SNIPPET_LIMIT": ("body_snippet_limit",),
            # Logging
            f"{self.env_prefix}LOG_LEVEL": ("logging", "level"),
            f"{self.env_prefix}LOG_FORMAT": ("logging", "format"),
            f"{self.env_prefix}LOG_STRUCTURED": ("logging", "enable_structured"),
        }

        for env_var, config_path in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                converted_value = self._convert_env_value(value)

                current = config
                for key in config_path[:-1]:
                    current = current.setdefault(key, {})
                current[config_path[-1]] = converted_value

        # Bearer token shortcut for the Authorization header
        token = os.getenv(f"{self.env_prefix}TOKEN")
        if token:
            config.setdefault("headers", {})["Authorization"] = f"Bearer {token}"

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate type."""
        lower = value.lower()
        if lower in ("true", "yes", "on"):
            return True
        if lower in ("false", "no", "off"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    def _deep_merge(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(config_file: Optional[Union[str, Path]] = None, **overrides: Any) -> ClientConfig:
    """Load configuration with the default loader."""
    return ConfigLoader().load_config(config_file, **overrides)
