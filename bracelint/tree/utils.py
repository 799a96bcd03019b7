#!/usr/bin/env python3
"""Helpers for reading blocks and whitespace off tree nodes."""

import re
from typing import Optional

from bracelint.tree.nodes import BlockStatement, Node

_EMPTY_LINE = re.compile(r"\n[\r\t ]*\n")
_LINE_BREAK = re.compile(r"[\n\r]")


def raw_node_string(node: Node) -> str:
    """Serialize a node including its own ``before`` raw."""
    return node.raws.get("before", "") + node.to_string()


def before_block_string(statement: Node, no_raw_before: bool = False) -> str:
    """Return the text of a statement up to its opening brace.

    Args:
        statement: Rule or at-rule
        no_raw_before: Leave out the statement's ``before`` raw

    Returns:
        Everything preceding ``{``
    """
    result = "" if no_raw_before else statement.raws.get("before", "")

    if isinstance(statement, BlockStatement):
        result += statement.head()

    return result + statement.raws.get("between", " ")


def block_string(statement: Node) -> Optional[str]:
    """Return a statement's block, braces included, or None if it has none."""
    if not isinstance(statement, BlockStatement) or not statement.has_block:
        return None
    return raw_node_string(statement)[len(before_block_string(statement)):]


def has_empty_line(string: Optional[str]) -> bool:
    """Check if a string contains at least one empty line."""
    if not string:
        return False
    return bool(_EMPTY_LINE.search(string))


def is_single_line_string(string: str) -> bool:
    """Check if a string has no line breaks."""
    return not _LINE_BREAK.search(string)
