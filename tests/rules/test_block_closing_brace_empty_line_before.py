#!/usr/bin/env python3
"""Tests for the block-closing-brace-empty-line-before rule."""

import pytest

from bracelint.rules.block_closing_brace_empty_line_before import (
    RULE_NAME,
    BlockClosingBraceEmptyLineBefore,
    messages,
    meta,
)
from bracelint.rules.engine import (
    FixAction,
    Fixed,
    FixSkipped,
    LintResult,
    NoViolation,
    Reported,
    RuleContext,
)
from bracelint.tree.nodes import AtRule, Comment, Declaration, Rule

EXPECTED = messages["expected"]
REJECTED = messages["rejected"]
FIX = RuleContext(fix=True, newline="\n")


def lint(root, primary, secondary=None, context=None):
    rule = BlockClosingBraceEmptyLineBefore(primary, secondary)
    return rule.check(root, LintResult(), context)


class TestMetadata:
    """Tests for rule name, messages and meta."""

    def test_rule_name(self):
        """Test the rule name."""
        assert RULE_NAME == "block-closing-brace-empty-line-before"
        assert BlockClosingBraceEmptyLineBefore.rule_name == RULE_NAME

    def test_messages(self):
        """Test messages carry the rule name."""
        assert EXPECTED == (
            "Expected empty line before closing brace (block-closing-brace-empty-line-before)"
        )
        assert REJECTED == (
            "Unexpected empty line before closing brace (block-closing-brace-empty-line-before)"
        )

    def test_meta(self):
        """Test rule metadata."""
        assert meta.fixable is True
        assert meta.deprecated is True
        assert meta.url.endswith("/block-closing-brace-empty-line-before")
        assert BlockClosingBraceEmptyLineBefore.meta is meta


class TestAlwaysMultiLine:
    """Tests for the "always-multi-line" option."""

    def test_multi_line_without_empty_line_reports(self, build_rule, build_root):
        """Test a multi-line block without an empty line is reported."""
        rule = build_rule()
        assert rule.to_string() == ".a {\n  color: red;\n}"

        result = lint(build_root(rule), "always-multi-line")

        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert warning.text == EXPECTED
        assert warning.rule == RULE_NAME
        assert warning.node is rule
        assert warning.index == len(rule.to_string()) - 1
        assert warning.index == 19

    def test_multi_line_with_empty_line_passes(self, build_rule, build_root):
        """Test a multi-line block with an empty line is accepted."""
        result = lint(build_root(build_rule(after="\n\n")), "always-multi-line")
        assert result.warnings == []

    def test_empty_line_with_indentation_passes(self, build_rule, build_root):
        """Test whitespace on the empty line still counts."""
        result = lint(build_root(build_rule(after="\n  \t\n")), "always-multi-line")
        assert result.warnings == []

    def test_crlf_empty_line_passes(self, build_rule, build_root):
        """Test CRLF line endings are understood."""
        rule = build_rule(decl_before="\r\n  ", after="\r\n\r\n")
        assert lint(build_root(rule), "always-multi-line").warnings == []

    def test_single_line_block_passes(self, build_rule, build_root):
        """Test single-line blocks need no empty line."""
        rule = build_rule(decl_before=" ", after=" ")
        assert rule.to_string() == ".a { color: red; }"
        assert lint(build_root(rule), "always-multi-line").warnings == []

    def test_stray_semicolons_ignored(self, build_rule, build_root):
        """Test extra semicolons before the brace do not hide the empty line."""
        rule = build_rule(after=";;\n\n")
        assert lint(build_root(rule), "always-multi-line").warnings == []

    def test_nested_blocks_checked(self, media_with_rule, build_root):
        """Test rules nested in at-rules are checked too."""
        result = lint(build_root(media_with_rule), "always-multi-line")

        assert [w.text for w in result.warnings] == [EXPECTED, EXPECTED]
        assert result.warnings[0].node is media_with_rule.nodes[0]
        assert result.warnings[1].node is media_with_rule


class TestNever:
    """Tests for the "never" option."""

    def test_multi_line_with_empty_line_reports(self, build_rule, build_root):
        """Test an empty line before the brace is rejected."""
        result = lint(build_root(build_rule(after="\n\n")), "never")

        assert len(result.warnings) == 1
        assert result.warnings[0].text == REJECTED

    def test_single_line_body_with_empty_line_reports(self, build_rule, build_root):
        """Test the rejection applies whatever the body looks like."""
        rule = build_rule(decl_before=" ", after=" \n\n")
        result = lint(build_root(rule), "never")
        assert [w.text for w in result.warnings] == [REJECTED]

    def test_without_empty_line_passes(self, build_rule, build_root):
        """Test blocks without an empty line are accepted."""
        root = build_root(build_rule(), build_rule(decl_before=" ", after=" "))
        assert lint(root, "never").warnings == []


class TestExceptAfterClosingBrace:
    """Tests for except: ["after-closing-brace"]."""

    OPTIONS = {"except": ["after-closing-brace"]}

    def test_at_rule_without_declarations_inverts_always(self, media_with_rule, build_root):
        """Test the at-rule expects no empty line while the nested rule still does."""
        result = lint(build_root(media_with_rule), "always-multi-line", self.OPTIONS)

        assert len(result.warnings) == 1
        assert result.warnings[0].node is media_with_rule.nodes[0]
        assert result.warnings[0].text == EXPECTED

    def test_at_rule_without_declarations_inverts_never(self, media_with_rule, build_root):
        """Test "never" turns into an expected empty line for the at-rule."""
        result = lint(build_root(media_with_rule), "never", self.OPTIONS)

        assert len(result.warnings) == 1
        assert result.warnings[0].node is media_with_rule
        assert result.warnings[0].text == EXPECTED

    def test_inverted_expectation_satisfied(self, media_with_rule, build_root):
        """Test an at-rule with the inverted expectation met is accepted."""
        media_with_rule.raws["after"] = "\n\n"
        assert lint(build_root(media_with_rule), "never", self.OPTIONS).warnings == []

    def test_inversion_ignores_single_line(self, build_rule, build_at_rule, build_root):
        """Test the inverted expectation does not depend on the block spanning lines."""
        inner = build_rule(decl_before=" ", after=" ", before=" ")
        media = build_at_rule(children=[inner], after=" ")
        result = lint(build_root(media), "never", self.OPTIONS)
        assert [w.node for w in result.warnings] == [media]

    def test_at_rule_with_declaration_unaffected(self, build_at_rule, build_root):
        """Test an at-rule holding a declaration keeps the primary option."""
        decl = Declaration("font-family", "x", raws={"before": "\n  "})
        font_face = build_at_rule(name="font-face", params="", children=[decl], semicolon=True)
        assert font_face.to_string() == "@font-face {\n  font-family: x;\n}"

        result = lint(build_root(font_face), "always-multi-line", self.OPTIONS)
        assert [w.text for w in result.warnings] == [EXPECTED]

    def test_rules_unaffected(self, build_rule, build_root):
        """Test style rules keep the primary option even without declarations."""
        rule = build_rule(decls=(), children=[Comment("x", raws={"before": "\n  "})])
        result = lint(build_root(rule), "always-multi-line", self.OPTIONS)
        assert [w.text for w in result.warnings] == [EXPECTED]

    def test_scalar_except_value(self, media_with_rule, build_root):
        """Test a scalar except value works like a list."""
        result = lint(build_root(media_with_rule), "never", {"except": "after-closing-brace"})
        assert [w.node for w in result.warnings] == [media_with_rule]


class TestSkippedStatements:
    """Tests for statements the rule never reports."""

    @pytest.mark.parametrize("primary", ["always-multi-line", "never"])
    @pytest.mark.parametrize("secondary", [None, {"except": ["after-closing-brace"]}])
    def test_empty_block(self, build_rule, build_at_rule, build_root, primary, secondary):
        """Test empty blocks are skipped."""
        rule = build_rule(decls=(), after="\n\n")
        media = build_at_rule(after="\n\n")
        assert rule.to_string() == ".a {\n\n}"

        assert lint(build_root(rule, media), primary, secondary).warnings == []

    @pytest.mark.parametrize("primary", ["always-multi-line", "never"])
    @pytest.mark.parametrize("secondary", [None, {"except": ["after-closing-brace"]}])
    def test_blockless_at_rule(self, build_root, primary, secondary):
        """Test at-rules without a block are skipped."""
        at_import = AtRule("import", "'a.css'", raws={"after": "\n\n"})
        assert at_import.to_string() == "@import 'a.css'"

        assert lint(build_root(at_import), primary, secondary).warnings == []

    def test_non_statement_nodes(self):
        """Test evaluate() ignores nodes that are not rules or at-rules."""
        rule = BlockClosingBraceEmptyLineBefore("never")
        outcome = rule.evaluate(Declaration("color", "red"), RuleContext())
        assert isinstance(outcome, NoViolation)


class TestIndex:
    """Tests for the reported closing-brace index."""

    def test_index_points_at_brace(self, build_rule, build_root):
        """Test the index is the position of the closing brace."""
        rule = build_rule(after="\n\n")
        warning = lint(build_root(rule), "never").warnings[0]
        assert rule.to_string()[warning.index] == "}"

    def test_index_skips_carriage_return(self, build_rule, build_root):
        """Test a carriage return right before the brace shifts the index back."""
        rule = build_rule(after="\n\n\r")
        string = rule.to_string()
        warning = lint(build_root(rule), "never").warnings[0]

        assert string.endswith("\r}")
        assert warning.index == len(string) - 2


class TestEvaluate:
    """Tests for the per-statement decision."""

    def test_no_violation(self, build_rule):
        """Test a compliant statement."""
        outcome = BlockClosingBraceEmptyLineBefore("never").evaluate(build_rule(), RuleContext())
        assert isinstance(outcome, NoViolation)

    def test_reported(self, build_rule):
        """Test a violation without fix mode is a report."""
        statement = build_rule()
        rule = BlockClosingBraceEmptyLineBefore("always-multi-line", severity="warning")
        outcome = rule.evaluate(statement, RuleContext())

        assert isinstance(outcome, Reported)
        assert outcome.warning.node is statement
        assert outcome.warning.severity == "warning"

    def test_fixed_add(self, build_rule):
        """Test fix mode asks for an empty line to be added."""
        statement = build_rule()
        outcome = BlockClosingBraceEmptyLineBefore("always-multi-line").evaluate(statement, FIX)
        assert outcome == Fixed(statement, FixAction.ADD_EMPTY_LINE, "\n")

    def test_fixed_remove(self, build_rule):
        """Test fix mode asks for empty lines to be removed."""
        statement = build_rule(after="\n\n")
        outcome = BlockClosingBraceEmptyLineBefore("never").evaluate(statement, FIX)
        assert outcome == Fixed(statement, FixAction.REMOVE_EMPTY_LINES, "\n")

    def test_evaluate_does_not_mutate(self, build_rule):
        """Test deciding leaves the tree untouched."""
        statement = build_rule()
        BlockClosingBraceEmptyLineBefore("always-multi-line").evaluate(statement, FIX)
        assert statement.raws["after"] == "\n"


class TestFix:
    """Tests for fix mode."""

    def test_adds_empty_line(self, build_rule, build_root):
        """Test a missing empty line is inserted and nothing is reported."""
        rule = build_rule()
        result = lint(build_root(rule), "always-multi-line", context=FIX)

        assert result.warnings == []
        assert rule.to_string() == ".a {\n  color: red;\n\n}"

    def test_bare_rule(self, build_root):
        """Test a rule built without an after raw is fixed too."""
        rule = Rule(".a", [Declaration("color", "red", raws={"before": "\n  "})])
        root = build_root(rule)
        assert len(lint(root, "always-multi-line").warnings) == 1

        result = lint(root, "always-multi-line", context=FIX)

        assert result.warnings == []
        assert rule.to_string() == ".a {\n  color: red\n\n}"
        assert lint(root, "always-multi-line").warnings == []

    def test_removes_empty_lines(self, build_rule, build_root):
        """Test unwanted empty lines are collapsed."""
        rule = build_rule(after="\n\n\n")
        result = lint(build_root(rule), "never", context=FIX)

        assert result.warnings == []
        assert rule.to_string() == ".a {\n  color: red;\n}"

    def test_crlf_newline(self, build_rule, build_root):
        """Test the configured newline is used."""
        rule = build_rule(decl_before="\r\n  ", after="\r\n")
        lint(build_root(rule), "always-multi-line", context=RuleContext(fix=True, newline="\r\n"))
        assert rule.to_string() == ".a {\r\n  color: red;\r\n\r\n}"

    def test_fixes_inverted_at_rule(self, media_with_rule, build_root):
        """Test fix mode honours the except option."""
        root = build_root(media_with_rule)
        lint(root, "never", {"except": ["after-closing-brace"]}, FIX)
        assert media_with_rule.raws["after"] == "\n\n"
        assert media_with_rule.nodes[0].raws["after"] == "\n  "

    @pytest.mark.parametrize(
        "primary,after",
        [
            ("always-multi-line", "\n"),
            ("always-multi-line", ""),
            ("always-multi-line", ";\n"),
            ("never", "\n\n"),
            ("never", "\n  \n\n  "),
            ("never", ";\n\n"),
        ],
    )
    def test_fix_is_idempotent(self, build_rule, build_root, primary, after):
        """Test one fix makes the statement compliant and a second changes nothing."""
        rule = build_rule(after=after)
        root = build_root(rule)

        lint(root, primary, context=FIX)
        fixed = root.to_string()

        assert lint(root, primary).warnings == []
        lint(root, primary, context=FIX)
        assert root.to_string() == fixed


class TestFixWithoutNewline:
    """Fix mode without a newline drops the violation silently.

    This is current behaviour, kept on purpose but questionable: the
    violation is neither fixed nor reported.
    """

    def test_outcome_is_fix_skipped(self, build_rule):
        """Test the decision names the skip."""
        statement = build_rule()
        rule = BlockClosingBraceEmptyLineBefore("always-multi-line")
        outcome = rule.evaluate(statement, RuleContext(fix=True, newline=None))
        assert outcome == FixSkipped(statement)

    def test_nothing_reported_or_changed(self, build_rule, build_root):
        """Test no warning and no edit."""
        rule = build_rule()
        result = lint(build_root(rule), "always-multi-line", context=RuleContext(fix=True))

        assert result.warnings == []
        assert rule.raws["after"] == "\n"


class TestInvalidOptions:
    """Tests for rejected options."""

    @pytest.mark.parametrize(
        "primary,secondary",
        [
            ("always", None),
            (None, None),
            (["never"], None),
            ("never", {"except": ["first-nested"]}),
            ("never", {"ignore": ["after-closing-brace"]}),
            ("never", "after-closing-brace"),
        ],
    )
    def test_rule_aborts(self, build_rule, build_root, primary, secondary):
        """Test bad options abort the rule before traversal."""
        rule = build_rule(after="\n\n")
        result = lint(build_root(rule), primary, secondary, FIX)

        assert result.warnings == []
        assert len(result.invalid_option_warnings) == 1
        assert RULE_NAME in result.invalid_option_warnings[0]
        assert rule.raws["after"] == "\n\n"
        assert result.errored


class TestTraversal:
    """Tests for traversal order."""

    def test_rules_before_at_rules(self, build_rule, media_with_rule, build_root):
        """Test rules are reported first, then at-rules, each in document order."""
        first = media_with_rule.nodes[0]
        second = build_rule(selector=".b", before="\n")
        root = build_root(media_with_rule, second)

        result = lint(root, "always-multi-line")
        assert [w.node for w in result.warnings] == [first, second, media_with_rule]

    def test_statements(self, build_rule, media_with_rule, build_root):
        """Test statements() yields every rule then every at-rule."""
        second = build_rule(selector=".b")
        root = build_root(media_with_rule, second)
        rule = BlockClosingBraceEmptyLineBefore("never")

        assert list(rule.statements(root)) == [media_with_rule.nodes[0], second, media_with_rule]

    def test_result_created_when_omitted(self, build_rule, build_root):
        """Test check() works without an explicit result or context."""
        result = BlockClosingBraceEmptyLineBefore("never").check(build_root(build_rule(after="\n\n")))
        assert len(result.warnings) == 1
