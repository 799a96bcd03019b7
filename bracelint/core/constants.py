"""
bracelint Core: Constants and Type Definitions

This module provides project-wide constants, error codes, and configuration
keys shared by the rules, the tree helpers and the configuration layer.
"""
from enum import IntEnum
from typing import TypeAlias

# Version information
BRACELINT_VERSION = "1.0.0"

# Newline conventions accepted in fix mode
NEWLINE_LF = "\n"
NEWLINE_CRLF = "\r\n"


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for bracelint operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad option value, malformed pattern
    NOT_FOUND = 2  # Config file or rule doesn't exist
    INTERNAL_ERROR = 6  # Bug in bracelint


# Type aliases for clarity
RuleName: TypeAlias = str
Severity: TypeAlias = str


# Node type names used by the tree model
class NodeType:
    """Node type discriminators."""

    ROOT = "root"
    RULE = "rule"
    AT_RULE = "atrule"
    DECLARATION = "decl"
    COMMENT = "comment"


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    ROOT = "bracelint"
    FIX = "fix"
    NEWLINE = "newline"
    RULES = "rules"
    LOGGING = "logging"
    SEVERITY = "severity"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        ConfigKey.FIX: False,
        ConfigKey.NEWLINE: NEWLINE_LF,
        ConfigKey.SEVERITY: "error",
        ConfigKey.RULES: {},
        ConfigKey.LOGGING: {
            "level": "INFO",
        },
    }
}
