#!/usr/bin/env python3
"""Rule plumbing shared by lint rules.

This module provides:
- LintWarning / LintResult: the report sink rules write to
- Outcome variants: the per-statement decision a rule returns
- LintRule: base class that validates options, walks and applies outcomes
- RuleEngine: runs configured rules over a tree

Rules decide, the engine acts: ``LintRule.evaluate`` never touches the tree
or the result, ``apply_outcome`` does.

Example:
    >>> engine = RuleEngine()
    >>> engine.add_rule(BlockClosingBraceEmptyLineBefore("never"))
    >>> result = engine.run(root)
    >>> [w.text for w in result.warnings]
    ['Unexpected empty line before closing brace (block-closing-brace-empty-line-before)']
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Type

from bracelint.core.validators import ValidationError
from bracelint.infrastructure.logger import get_logger
from bracelint.tree.fix import add_empty_line_after, remove_empty_lines_after
from bracelint.tree.nodes import Node, Root


class FixAction(Enum):
    """Whitespace edit requested by a rule."""

    ADD_EMPTY_LINE = "add-empty-line"
    REMOVE_EMPTY_LINES = "remove-empty-lines"


_FIXERS: Dict[FixAction, Callable[[Node, str], Node]] = {
    FixAction.ADD_EMPTY_LINE: add_empty_line_after,
    FixAction.REMOVE_EMPTY_LINES: remove_empty_lines_after,
}


@dataclass
class RuleContext:
    """How a rule is being run."""

    fix: bool = False
    newline: Optional[str] = None


@dataclass(frozen=True)
class RuleMeta:
    """Descriptive metadata for a rule."""

    url: str
    fixable: bool = False
    deprecated: bool = False


@dataclass
class LintWarning:
    """A single problem reported by a rule."""

    rule: str
    text: str
    node: Optional[Node] = None
    index: Optional[int] = None
    severity: str = "error"


@dataclass
class LintResult:
    """Everything reported while linting one tree."""

    source: Optional[str] = None
    warnings: List[LintWarning] = field(default_factory=list)
    invalid_option_warnings: List[str] = field(default_factory=list)

    def warn(
        self,
        text: str,
        rule: str,
        node: Optional[Node] = None,
        index: Optional[int] = None,
        severity: str = "error",
    ) -> LintWarning:
        """Record a warning.

        Args:
            text: Message shown to the user
            rule: Name of the reporting rule
            node: Offending node
            index: Offset into the node's serialization
            severity: "error" or "warning"

        Returns:
            The recorded warning
        """
        warning = LintWarning(rule=rule, text=text, node=node, index=index, severity=severity)
        self.warnings.append(warning)
        return warning

    @property
    def errored(self) -> bool:
        """True if any warning has error severity, or options were rejected."""
        return bool(self.invalid_option_warnings) or any(
            w.severity == "error" for w in self.warnings
        )


class Outcome:
    """Base class for per-statement decisions."""


@dataclass(frozen=True)
class NoViolation(Outcome):
    """The statement complies; nothing to do."""


@dataclass(frozen=True)
class Reported(Outcome):
    """The statement violates the rule and must be reported."""

    warning: LintWarning


@dataclass(frozen=True)
class Fixed(Outcome):
    """The statement violates the rule and will be rewritten."""

    statement: Node
    action: FixAction
    newline: str


@dataclass(frozen=True)
class FixSkipped(Outcome):
    """Fix mode was requested without a newline; the violation is dropped.

    Nothing is reported and nothing is rewritten.
    """

    statement: Node


NO_VIOLATION = NoViolation()


def rule_messages(rule_name: str, **messages: str) -> Dict[str, str]:
    """Suffix every message with the rule name.

    Args:
        rule_name: Rule the messages belong to
        **messages: Message key to text

    Returns:
        Dict of message key to final text
    """
    return {key: f"{text} ({rule_name})" for key, text in messages.items()}


def apply_outcome(outcome: Outcome, result: LintResult) -> None:
    """Carry out a rule's decision on the tree or the result.

    Args:
        outcome: Decision returned by ``LintRule.evaluate``
        result: Report sink
    """
    if isinstance(outcome, Reported):
        result.warnings.append(outcome.warning)
    elif isinstance(outcome, Fixed):
        _FIXERS[outcome.action](outcome.statement, outcome.newline)


class LintRule(ABC):
    """Abstract base class for lint rules.

    Subclasses implement:
    - validate_options(): raise ValidationError on bad options
    - statements(): the nodes to evaluate, in order
    - evaluate(): the decision for one node
    """

    rule_name: str = ""
    meta: Optional[RuleMeta] = None

    def __init__(
        self,
        primary: Any,
        secondary_options: Optional[Dict[str, Any]] = None,
        severity: str = "error",
    ):
        """Initialize rule.

        Args:
            primary: Primary option
            secondary_options: Optional secondary options mapping
            severity: Severity given to reported warnings
        """
        self.primary = primary
        self.secondary_options = secondary_options
        self.severity = severity
        self._logger = get_logger()

    @abstractmethod
    def validate_options(self) -> None:
        """Check the options; raise ValidationError if they are invalid."""

    @abstractmethod
    def statements(self, root: Root) -> Iterable[Node]:
        """Nodes this rule looks at."""

    @abstractmethod
    def evaluate(self, statement: Node, context: RuleContext) -> Outcome:
        """Decide what to do about one node."""

    def validate(self, result: LintResult) -> bool:
        """Validate options, recording a rejection on the result.

        Args:
            result: Report sink

        Returns:
            True if the rule may run
        """
        try:
            self.validate_options()
        except ValidationError as e:
            self._logger.warning("Invalid rule options", rule=self.rule_name, error=str(e))
            result.invalid_option_warnings.append(str(e))
            return False
        return True

    def check(
        self,
        root: Root,
        result: Optional[LintResult] = None,
        context: Optional[RuleContext] = None,
    ) -> LintResult:
        """Run the rule over a tree.

        Args:
            root: Tree to lint
            result: Report sink (a new one is created if omitted)
            context: Fix settings (report-only if omitted)

        Returns:
            The report sink
        """
        result = result if result is not None else LintResult()
        context = context or RuleContext()

        if not self.validate(result):
            return result

        reported = fixed = 0
        with self._logger.add_context(rule=self.rule_name):
            for statement in self.statements(root):
                outcome = self.evaluate(statement, context)
                apply_outcome(outcome, result)
                if isinstance(outcome, Reported):
                    reported += 1
                elif isinstance(outcome, Fixed):
                    fixed += 1

            self._logger.info("Rule finished", warnings=reported, fixed=fixed)

        return result


class RuleEngine:
    """Runs a list of configured rules over a tree, in the order added."""

    def __init__(self, context: Optional[RuleContext] = None):
        """Initialize rule engine.

        Args:
            context: Fix settings shared by every rule
        """
        self._rules: List[LintRule] = []
        self._context = context or RuleContext()

    @classmethod
    def from_config(cls, config: Any, rule_classes: Iterable[Type[LintRule]]) -> "RuleEngine":
        """Build an engine from a ConfigManager.

        Rules missing from the configuration are left out. The configured
        logging level is applied to the global logger.

        Args:
            config: ConfigManager to read options from
            rule_classes: Rule classes that may be enabled

        Returns:
            Configured engine
        """
        engine = cls(config.get_context())
        get_logger().set_level(config.get("bracelint.logging.level", "INFO"))
        severity = config.get("bracelint.severity", "error")
        for rule_class in rule_classes:
            options = config.get_rule_options(rule_class.rule_name)
            if options is None:
                continue
            primary, secondary = options
            engine.add_rule(rule_class(primary, secondary, severity=severity))
        return engine

    def add_rule(self, rule: LintRule) -> None:
        """Add rule to engine."""
        self._rules.append(rule)

    def remove_rule(self, name: str) -> bool:
        """Remove rule by name.

        Returns:
            True if rule was found and removed
        """
        for i, rule in enumerate(self._rules):
            if rule.rule_name == name:
                self._rules.pop(i)
                return True
        return False

    def get_rules(self) -> List[LintRule]:
        """Get all rules."""
        return self._rules.copy()

    def run(self, root: Root, source: Optional[str] = None) -> LintResult:
        """Lint a tree with every rule.

        Args:
            root: Tree to lint
            source: Label for the result (e.g. a file name)

        Returns:
            Combined result
        """
        result = LintResult(source=source)
        for rule in self._rules:
            rule.check(root, result, self._context)
        return result

    def __len__(self) -> int:
        """Return number of rules."""
        return len(self._rules)
