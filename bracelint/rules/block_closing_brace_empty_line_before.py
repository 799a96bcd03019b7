#!/usr/bin/env python3
"""block-closing-brace-empty-line-before

Require or disallow an empty line before the closing brace of blocks.

Options:
- ``"always-multi-line"``: multi-line blocks need an empty line before ``}``
- ``"never"``: no block may have an empty line before ``}``

Secondary options:
- ``except: ["after-closing-brace"]``: reverse the primary option for
  at-rules whose block holds no declarations (only nested blocks)

Example:
    >>> rule = BlockClosingBraceEmptyLineBefore("always-multi-line")
    >>> result = rule.check(root)
"""

import re
from typing import Iterator

from bracelint.core.constants import NodeType
from bracelint.core.validators import validate_options
from bracelint.rules.engine import (
    NO_VIOLATION,
    FixAction,
    Fixed,
    FixSkipped,
    LintRule,
    LintWarning,
    Outcome,
    Reported,
    RuleContext,
    RuleMeta,
    rule_messages,
)
from bracelint.rules.patterns import options_matches
from bracelint.tree.nodes import BlockStatement, Node, Root
from bracelint.tree.utils import block_string, has_empty_line, is_single_line_string

RULE_NAME = "block-closing-brace-empty-line-before"

ALWAYS_MULTI_LINE = "always-multi-line"
NEVER = "never"
AFTER_CLOSING_BRACE = "after-closing-brace"

messages = rule_messages(
    RULE_NAME,
    expected="Expected empty line before closing brace",
    rejected="Unexpected empty line before closing brace",
)

meta = RuleMeta(
    url="https://stylelint.io/user-guide/rules/block-closing-brace-empty-line-before",
    fixable=True,
    deprecated=True,
)

_STRAY_SEMICOLONS = re.compile(r";+")


class BlockClosingBraceEmptyLineBefore(LintRule):
    """Empty line before the closing brace of rules and at-rules."""

    rule_name = RULE_NAME
    meta = meta

    def validate_options(self) -> None:
        validate_options(
            RULE_NAME,
            self.primary,
            [ALWAYS_MULTI_LINE, NEVER],
            self.secondary_options,
            {"except": [AFTER_CLOSING_BRACE]},
            optional=True,
        )

    def statements(self, root: Root) -> Iterator[Node]:
        """Every rule, then every at-rule, each in document order."""
        rules: list = []
        at_rules: list = []
        root.walk_rules(rules.append)
        root.walk_at_rules(at_rules.append)
        return iter(rules + at_rules)

    def expects_empty_line(self, statement: BlockStatement) -> bool:
        """Whether an empty line should precede the statement's closing brace."""
        if (
            options_matches(self.secondary_options, "except", AFTER_CLOSING_BRACE)
            and statement.type == NodeType.AT_RULE
            and NodeType.DECLARATION not in statement.child_types
        ):
            return self.primary == NEVER

        return self.primary == ALWAYS_MULTI_LINE and not is_single_line_string(
            block_string(statement)
        )

    def evaluate(self, statement: Node, context: RuleContext) -> Outcome:
        if not isinstance(statement, BlockStatement):
            return NO_VIOLATION
        if not statement.has_block or statement.has_empty_block:
            return NO_VIOLATION

        before = _STRAY_SEMICOLONS.sub("", statement.raws.get("after") or "", count=1)

        statement_string = statement.to_string()
        index = len(statement_string) - 1
        if index > 0 and statement_string[index - 1] == "\r":
            index -= 1

        expected = self.expects_empty_line(statement)
        actual = has_empty_line(before)

        self._logger.debug(
            "Checked closing brace",
            statement=statement.type,
            index=index,
            expected=expected,
            actual=actual,
        )

        if expected == actual:
            return NO_VIOLATION

        if context.fix:
            # TODO: decide whether a missing newline should be reported instead of dropped
            if not isinstance(context.newline, str):
                self._logger.debug("Fix skipped, no newline configured", index=index)
                return FixSkipped(statement)

            action = FixAction.ADD_EMPTY_LINE if expected else FixAction.REMOVE_EMPTY_LINES
            return Fixed(statement, action, context.newline)

        return Reported(
            LintWarning(
                rule=RULE_NAME,
                text=messages["expected"] if expected else messages["rejected"],
                node=statement,
                index=index,
                severity=self.severity,
            )
        )
