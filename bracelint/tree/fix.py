#!/usr/bin/env python3
"""Whitespace edits applied by rules in fix mode.

Both primitives touch only ``node.raws["after"]``, the text between a
statement's last child and its closing brace.
"""

import re

from bracelint.tree.nodes import Node

_LINE_BREAK = re.compile(r"\r?\n")
_EMPTY_LINES = re.compile(r"(\r?\n\s*\n)+")


def add_empty_line_after(node: Node, newline: str) -> Node:
    """Make sure an empty line precedes the node's closing brace.

    Args:
        node: Statement to edit
        newline: Newline sequence to insert

    Returns:
        The same node
    """
    after = node.raws.get("after")
    if not isinstance(after, str):
        return node

    last_segment = after.split(";")[-1]

    if not _LINE_BREAK.search(last_segment):
        node.raws["after"] = after + newline * 2
    else:
        node.raws["after"] = _LINE_BREAK.sub(lambda m: newline + m.group(0), after, count=1)

    return node


def remove_empty_lines_after(node: Node, newline: str) -> Node:
    """Collapse every empty line before the node's closing brace.

    Args:
        node: Statement to edit
        newline: Newline sequence each run of empty lines collapses to

    Returns:
        The same node
    """
    after = node.raws.get("after")
    node.raws["after"] = _EMPTY_LINES.sub(lambda m: newline, after) if after else ""
    return node
