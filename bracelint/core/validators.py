"""
bracelint Core: Option Validators.

This module validates the primary and secondary options handed to a rule
before the rule touches the tree. A rejected option aborts the rule.
"""
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bracelint.core.constants import ErrorCode


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def is_string(value: Any) -> bool:
    """Check if the value is a string."""
    return isinstance(value, str)


def is_regexp(value: Any) -> bool:
    """Check if the value is a compiled regular expression."""
    return isinstance(value, re.Pattern)


def is_number(value: Any) -> bool:
    """Check if the value is a number (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_boolean(value: Any) -> bool:
    """Check if the value is a boolean."""
    return isinstance(value, bool)


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def validate_primary(rule_name: str, actual: Any, possible: Sequence[Any]) -> bool:
    """Validate a rule's primary option.

    Args:
        rule_name: Rule being configured
        actual: Value supplied by the user
        possible: Allowed values

    Returns:
        True if valid

    Raises:
        ValidationError: If the value is missing or not allowed
    """
    if actual is None:
        raise ValidationError(f'Expected option value for rule "{rule_name}"')

    if isinstance(actual, (list, tuple, dict)) or actual not in possible:
        raise ValidationError(f'Invalid option value "{actual}" for rule "{rule_name}"')

    return True


def validate_secondary(
    rule_name: str,
    actual: Any,
    possible: Dict[str, Sequence[Any]],
    optional: bool = True,
) -> bool:
    """Validate a rule's secondary options object.

    Args:
        rule_name: Rule being configured
        actual: Options mapping supplied by the user
        possible: Allowed option names and their allowed values
        optional: Whether the options object may be omitted

    Returns:
        True if valid

    Raises:
        ValidationError: If the mapping has an unknown name or a bad value
    """
    if actual is None:
        if optional:
            return True
        raise ValidationError(f'Expected option value for rule "{rule_name}"')

    if not isinstance(actual, dict):
        raise ValidationError(f'Invalid option value "{actual}" for rule "{rule_name}"')

    for name, value in actual.items():
        if name not in possible:
            raise ValidationError(f'Invalid option name "{name}" for rule "{rule_name}"')

        for item in _as_list(value):
            if item not in possible[name]:
                raise ValidationError(
                    f'Invalid value "{item}" for option "{name}" of rule "{rule_name}"'
                )

    return True


def validate_options(
    rule_name: str,
    primary: Any,
    possible_primary: Sequence[Any],
    secondary: Any = None,
    possible_secondary: Optional[Dict[str, Sequence[Any]]] = None,
    optional: bool = True,
) -> bool:
    """Validate primary and secondary options together.

    Args:
        rule_name: Rule being configured
        primary: Primary option value
        possible_primary: Allowed primary values
        secondary: Secondary options mapping
        possible_secondary: Allowed secondary option names and values
        optional: Whether the secondary options may be omitted

    Returns:
        True if valid

    Raises:
        ValidationError: On the first invalid value
    """
    validate_primary(rule_name, primary, possible_primary)
    validate_secondary(rule_name, secondary, possible_secondary or {}, optional)
    return True


def validate_rule_config(rule_name: str, entry: Any) -> Tuple[Any, Optional[Dict[str, Any]]]:
    """Split a rule's configuration entry into primary and secondary options.

    An entry is either the primary value alone or a two-item list of
    ``[primary, secondary]``.

    Args:
        rule_name: Rule being configured
        entry: Raw configuration value

    Returns:
        Tuple of (primary, secondary)

    Raises:
        ValidationError: If the entry has the wrong shape
    """
    if isinstance(entry, (list, tuple)):
        if len(entry) == 0 or len(entry) > 2:
            raise ValidationError(f'Invalid option value "{entry}" for rule "{rule_name}"')
        primary = entry[0]
        secondary = entry[1] if len(entry) == 2 else None
        if secondary is not None and not isinstance(secondary, dict):
            raise ValidationError(
                f'Invalid option value "{secondary}" for rule "{rule_name}"'
            )
        return primary, secondary

    return entry, None
