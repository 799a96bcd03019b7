#!/usr/bin/env python3
r"""Matching of option values against user-supplied strings and regexes.

Rule options such as ``except`` or ``ignore`` hold comparisons written by
users. A comparison is a string, a compiled regex, or a list of those:
- Plain strings are compared literally
- Strings wrapped in slashes (``"/^foo/"``) are regexes
- A trailing ``i`` after the closing slash (``"/^foo/i"``) ignores case
- Lists match if any element matches (first match wins)

Example:
    >>> matches("foo-bar", ["baz", "/^foo/"])
    MatchResult(match='foo-bar', pattern='/^foo/', substring='foo')
    >>> options_matches({"except": "after-closing-brace"}, "except", "after-closing-brace")
    True
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Mapping, Optional, Sequence, Union

from bracelint.core.constants import ErrorCode
from bracelint.core.validators import ValidationError


class PatternError(ValidationError):
    """A slash-delimited string that does not compile as a regex."""

    def __init__(self, message: str, pattern: str):
        super().__init__(message, ErrorCode.INVALID_INPUT)
        self.pattern = pattern


@dataclass(frozen=True)
class LiteralPattern:
    """A string compared with ``==``."""

    text: str


@dataclass(frozen=True)
class RegexPattern:
    """A regex written with the slash convention."""

    source: str
    case_insensitive: bool = False

    def compile(self) -> "re.Pattern[str]":
        """Compile (or fetch from cache) the expression.

        Raises:
            PatternError: If the source is not a valid regex
        """
        return _compile(self.source, self.case_insensitive)


ParsedPattern = Union[LiteralPattern, RegexPattern]
Comparison = Union[str, "re.Pattern[str]", Sequence[Union[str, "re.Pattern[str]"]]]


@dataclass(frozen=True)
class MatchResult:
    """Details of a successful match.

    ``pattern`` is the comparison element exactly as the caller supplied it.
    """

    match: str
    pattern: Any
    substring: str


@lru_cache(maxsize=256)
def _compile(source: str, case_insensitive: bool) -> "re.Pattern[str]":
    flags = re.IGNORECASE if case_insensitive else 0
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise PatternError(f"Invalid regular expression /{source}/: {e}", source) from e


def parse_pattern(value: str) -> ParsedPattern:
    """Classify a comparison string as a literal or a regex.

    A string is a regex when it starts with ``/`` and ends with either
    ``/`` or ``/i``. Strings shorter than two characters are always literal.

    Args:
        value: Comparison string

    Returns:
        LiteralPattern or RegexPattern
    """
    if not isinstance(value, str):
        raise TypeError(f"Expected a string pattern, got {type(value).__name__}")

    if len(value) >= 2 and value[0] == "/":
        if value[-1] == "/":
            return RegexPattern(value[1:-1])
        if value[-2] == "/" and value[-1] == "i":
            return RegexPattern(value[1:-2], case_insensitive=True)

    return LiteralPattern(value)


def _as_sequence(value: Any) -> Sequence[Any]:
    if isinstance(value, (list, tuple)):
        return value
    return (value,)


class PatternMatcher:
    """A comparison parsed once and matched many times.

    Entries keep the caller's order; the first matching entry wins.
    """

    def __init__(self, comparison: Comparison):
        """Initialize pattern matcher.

        Args:
            comparison: String, compiled regex, or a list of them
        """
        self._entries: List[tuple] = []
        for item in _as_sequence(comparison):
            if isinstance(item, str):
                self._entries.append((item, parse_pattern(item)))
            else:
                self._entries.append((item, item))

    def match(self, input: Union[str, Sequence[str]]) -> Optional[MatchResult]:
        """Match one string or each string of a list, stopping at the first hit.

        Args:
            input: String or list of strings

        Returns:
            MatchResult for the first hit, or None

        Raises:
            PatternError: If a slash-delimited entry is not a valid regex
        """
        for value in _as_sequence(input):
            for supplied, pattern in self._entries:
                result = self._match_entry(value, supplied, pattern)
                if result is not None:
                    return result
        return None

    def _match_entry(self, value: str, supplied: Any, pattern: Any) -> Optional[MatchResult]:
        if isinstance(pattern, RegexPattern):
            pattern = pattern.compile()

        if isinstance(pattern, re.Pattern):
            found = pattern.search(value)
            if found is None:
                return None
            return MatchResult(match=value, pattern=supplied, substring=found.group(0) or "")

        expected = pattern.text if isinstance(pattern, LiteralPattern) else pattern
        if value == expected:
            return MatchResult(match=value, pattern=supplied, substring=value)
        return None

    def __len__(self) -> int:
        """Return number of entries."""
        return len(self._entries)


def matches(input: Union[str, Sequence[str]], comparison: Comparison) -> Optional[MatchResult]:
    """Match a string, or any string of a list, against a comparison.

    Args:
        input: String or list of strings
        comparison: String, compiled regex, or a list of them

    Returns:
        MatchResult for the first hit, or None when nothing matches

    Raises:
        PatternError: If a slash-delimited string is not a valid regex
    """
    return PatternMatcher(comparison).match(input)


def options_matches(options: Optional[Mapping[str, Any]], property_name: str, input: Any) -> bool:
    """Check if a rule option holds a comparison matching ``input``.

    Args:
        options: Secondary options mapping (may be None)
        property_name: Option name, e.g. "except"
        input: Value to look for; non-strings never match

    Returns:
        True if the option is set and matches
    """
    if not options or not isinstance(input, str):
        return False

    comparison = options.get(property_name)
    if not comparison:
        return False

    return matches(input, comparison) is not None
