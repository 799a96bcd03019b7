"""bracelint Infrastructure Layer.

Services used by the rules:
- Logger: Structured logging system
- ConfigManager: Hierarchical YAML/environment configuration
"""

from .logger import Logger, LogLevel, get_logger, set_global_logger
from .config_manager import ConfigError
from .config_manager import ConfigManager as Config
from .config_manager import ConfigSource, get_config_manager, set_global_config

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "get_logger",
    "set_global_logger",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "Config",
    "get_config_manager",
    "set_global_config",
]
