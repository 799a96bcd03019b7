#!/usr/bin/env python3
"""Hierarchical configuration manager for bracelint.

This module provides configuration management with:
- 4-level precedence hierarchy
- YAML config files
- Environment variable overrides (BRACELINT_*)
- Per-rule option lookup

Example:
    >>> config = ConfigManager()
    >>> config.load_file(".bracelint.yaml")
    >>> config.get_rule_options("block-closing-brace-empty-line-before")
    ('always-multi-line', {'except': ['after-closing-brace']})
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import yaml

from bracelint.core.constants import (
    DEFAULT_CONFIG,
    NEWLINE_CRLF,
    NEWLINE_LF,
    ConfigKey,
    ErrorCode,
)
from bracelint.core.validators import ValidationError, validate_rule_config
from bracelint.infrastructure.logger import get_logger

if TYPE_CHECKING:
    from bracelint.rules.engine import RuleContext

ENV_PREFIX = "BRACELINT_"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    USER_CONFIG = 2
    ENVIRONMENT = 3
    RUNTIME = 4  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe hierarchical configuration manager.

    Manages configuration from multiple sources with precedence:
    1. Compiled defaults (lowest)
    2. User config file (YAML)
    3. Environment variables (BRACELINT_*)
    4. Runtime updates (highest)
    """

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional config file to load
            load_environment: Whether to read BRACELINT_* variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()
        self._logger = get_logger()

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        with self._lock:
            self._config[source] = config_data

        self._logger.debug("Loaded config file", path=str(path), source=source.name)

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from dictionary.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level
        """
        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Only top-level scalar settings are read:
        BRACELINT_FIX=true, BRACELINT_NEWLINE=crlf, BRACELINT_LOGGING_LEVEL=DEBUG
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX):].lower().split("_")

            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})

            current[parts[-1]] = self._parse_env_value(parts[-1], value)

        if env_config:
            with self._lock:
                self._config[ConfigSource.ENVIRONMENT] = {ConfigKey.ROOT: env_config}

    def _parse_env_value(self, name: str, value: str) -> Any:
        """Parse environment variable value.

        Args:
            name: Last key segment
            value: String value from environment

        Returns:
            Parsed value
        """
        if name == ConfigKey.NEWLINE:
            return {"lf": NEWLINE_LF, "crlf": NEWLINE_CRLF}.get(value.lower(), value)

        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "bracelint.logging.level")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return value

            return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        current = config

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]

        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            current = self._config.setdefault(source, {})

            parts = key.split(".")
            for part in parts[:-1]:
                current = current.setdefault(part, {})

            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        with self._lock:
            merged: Dict[str, Any] = {}

            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])

            return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get_rule_options(self, rule_name: str) -> Optional[Tuple[Any, Optional[Dict[str, Any]]]]:
        """Get the configured options for a rule.

        Rule entries are never merged across sources; the highest-precedence
        entry wins as a whole.

        Args:
            rule_name: Rule to look up

        Returns:
            Tuple of (primary, secondary), or None when the rule is not configured

        Raises:
            ConfigError: If the entry has the wrong shape
        """
        rules = self.get(f"{ConfigKey.ROOT}.{ConfigKey.RULES}", {})
        if not isinstance(rules, dict) or rules.get(rule_name) is None:
            return None

        try:
            return validate_rule_config(rule_name, rules[rule_name])
        except ValidationError as e:
            raise ConfigError(str(e), e.error_code)

    def get_context(self) -> "RuleContext":
        """Build the rule context from the ``fix`` and ``newline`` settings."""
        from bracelint.rules.engine import RuleContext

        return RuleContext(
            fix=bool(self.get(f"{ConfigKey.ROOT}.{ConfigKey.FIX}", False)),
            newline=self.get(f"{ConfigKey.ROOT}.{ConfigKey.NEWLINE}"),
        )

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        with self._lock:
            if source:
                if source in self._config and source != ConfigSource.COMPILED_DEFAULTS:
                    del self._config[source]
            else:
                for s in [s for s in self._config if s != ConfigSource.COMPILED_DEFAULTS]:
                    del self._config[s]


# Global config manager instance
_global_config: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[str] = None) -> ConfigManager:
    """Get or create global configuration manager.

    Args:
        config_file: Optional config file to load

    Returns:
        Global configuration manager
    """
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager(config_file)
    return _global_config


def set_global_config(config: Optional[ConfigManager]) -> None:
    """Set the global configuration manager.

    Args:
        config: Configuration manager to use globally, or None to reset
    """
    global _global_config
    _global_config = config
