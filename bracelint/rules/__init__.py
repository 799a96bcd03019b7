"""bracelint Rules System.

This module provides option matching and the lint rules:
- patterns: literal / slash-regex matching of rule options
- engine: report sink, per-statement outcomes, rule base class, runner
- BlockClosingBraceEmptyLineBefore: empty lines before closing braces
"""

from .patterns import (
    LiteralPattern,
    MatchResult,
    PatternError,
    PatternMatcher,
    RegexPattern,
    matches,
    options_matches,
    parse_pattern,
)
from .engine import (
    FixAction,
    Fixed,
    FixSkipped,
    LintResult,
    LintRule,
    LintWarning,
    NoViolation,
    Outcome,
    Reported,
    RuleContext,
    RuleEngine,
    RuleMeta,
    apply_outcome,
    rule_messages,
)
from .block_closing_brace_empty_line_before import BlockClosingBraceEmptyLineBefore

__all__ = [
    # Pattern matching
    "LiteralPattern",
    "RegexPattern",
    "MatchResult",
    "PatternError",
    "PatternMatcher",
    "matches",
    "options_matches",
    "parse_pattern",
    # Rule engine
    "FixAction",
    "Fixed",
    "FixSkipped",
    "LintResult",
    "LintRule",
    "LintWarning",
    "NoViolation",
    "Outcome",
    "Reported",
    "RuleContext",
    "RuleEngine",
    "RuleMeta",
    "apply_outcome",
    "rule_messages",
    # Rules
    "BlockClosingBraceEmptyLineBefore",
]
