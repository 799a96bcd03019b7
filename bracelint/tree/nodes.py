#!/usr/bin/env python3
"""Style-sheet syntax tree nodes.

This module provides the tree the rules walk and edit:
- Root, Rule, AtRule, Declaration and Comment nodes
- Raw whitespace kept per node so serialization is lossless
- Depth-first walking in document order

Building the tree is the caller's job; nothing here parses text.

Example:
    >>> rule = Rule(".a", raws={"between": " ", "after": "\\n", "semicolon": True})
    >>> rule.append(Declaration("color", "red", raws={"before": "\\n  "}))
    >>> rule.to_string()
    '.a {\\n  color: red;\\n}'
"""

from typing import Any, Callable, Dict, Iterator, List, Optional

from bracelint.core.constants import NodeType


class Node:
    """Base class for every tree node."""

    type: str = ""

    def __init__(self, raws: Optional[Dict[str, Any]] = None):
        """Initialize node.

        Args:
            raws: Raw whitespace and punctuation around the node
        """
        self.parent: Optional["Container"] = None
        self.raws: Dict[str, Any] = dict(raws or {})

    def to_string(self) -> str:
        """Serialize the node, excluding its own ``before`` raw."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.to_string()!r}>"


class Declaration(Node):
    """A ``prop: value`` declaration."""

    type = NodeType.DECLARATION

    def __init__(self, prop: str, value: str, important: bool = False, raws=None):
        super().__init__(raws)
        self.prop = prop
        self.value = value
        self.important = important

    def to_string(self) -> str:
        string = self.prop + self.raws.get("between", ": ") + self.value
        if self.important:
            string += self.raws.get("important", " !important")
        return string


class Comment(Node):
    """A ``/* ... */`` comment."""

    type = NodeType.COMMENT

    def __init__(self, text: str, raws=None):
        super().__init__(raws)
        self.text = text

    def to_string(self) -> str:
        return "/*" + self.raws.get("left", " ") + self.text + self.raws.get("right", " ") + "*/"


class Container(Node):
    """Node that may hold child nodes.

    ``nodes`` is None for a node without a block at all, and a (possibly
    empty) list once a block exists.
    """

    def __init__(self, nodes: Optional[List[Node]] = None, raws=None):
        super().__init__(raws)
        self.nodes: Optional[List[Node]] = None
        if nodes is not None:
            self.nodes = []
            self.append(*nodes)

    def append(self, *children: Node) -> "Container":
        """Append children, creating the block if needed."""
        if self.nodes is None:
            self.nodes = []
        for child in children:
            child.parent = self
            self.nodes.append(child)
        return self

    def _stringify_body(self) -> str:
        if not self.nodes:
            return ""

        last = len(self.nodes) - 1
        while last > 0 and self.nodes[last].type == NodeType.COMMENT:
            last -= 1

        semicolon = bool(self.raws.get("semicolon", False))
        parts = []
        for i, child in enumerate(self.nodes):
            parts.append(child.raws.get("before", ""))
            parts.append(child.to_string())
            if _takes_semicolon(child) and (i != last or semicolon):
                parts.append(";")
        return "".join(parts)

    def _stringify_block(self, start: str) -> str:
        return (
            start
            + self.raws.get("between", " ")
            + "{"
            + self._stringify_body()
            + self.raws.get("after", "")
            + "}"
        )

    def descendants(self) -> Iterator[Node]:
        """Yield every descendant depth-first in document order."""
        for child in list(self.nodes or []):
            yield child
            if isinstance(child, Container):
                yield from child.descendants()

    def walk(self, callback: Callable[[Node], None]) -> None:
        """Call ``callback`` for every descendant."""
        for node in self.descendants():
            callback(node)

    def walk_rules(self, callback: Callable[["Rule"], None]) -> None:
        """Call ``callback`` for every descendant rule."""
        for node in self.descendants():
            if node.type == NodeType.RULE:
                callback(node)

    def walk_at_rules(self, callback: Callable[["AtRule"], None]) -> None:
        """Call ``callback`` for every descendant at-rule."""
        for node in self.descendants():
            if node.type == NodeType.AT_RULE:
                callback(node)


class Root(Container):
    """Top of the tree."""

    type = NodeType.ROOT

    def __init__(self, nodes: Optional[List[Node]] = None, raws=None):
        super().__init__(nodes if nodes is not None else [], raws)

    def to_string(self) -> str:
        return self._stringify_body() + self.raws.get("after", "")


class BlockStatement(Container):
    """Shared surface of rules and at-rules.

    A statement with a block always carries an ``after`` raw, ``""`` unless
    given, so fixes have a string to edit.
    """

    def append(self, *children: Node) -> "BlockStatement":
        super().append(*children)
        self.raws.setdefault("after", "")
        return self

    @property
    def has_block(self) -> bool:
        return self.nodes is not None

    @property
    def has_empty_block(self) -> bool:
        return self.has_block and len(self.nodes) == 0

    @property
    def child_types(self) -> List[str]:
        return [child.type for child in self.nodes or []]

    def head(self) -> str:
        """Text before the block's ``between`` raw."""
        raise NotImplementedError

    def to_string(self) -> str:
        if self.has_block:
            return self._stringify_block(self.head())
        return self.head() + self.raws.get("between", "")


class Rule(BlockStatement):
    """A style rule: ``selector { ... }``."""

    type = NodeType.RULE

    def __init__(self, selector: str, nodes: Optional[List[Node]] = None, raws=None):
        super().__init__(nodes if nodes is not None else [], raws)
        self.selector = selector

    def head(self) -> str:
        return self.selector


class AtRule(BlockStatement):
    """An at-rule: ``@name params`` with an optional block."""

    type = NodeType.AT_RULE

    def __init__(self, name: str, params: str = "", nodes: Optional[List[Node]] = None, raws=None):
        super().__init__(nodes, raws)
        self.name = name
        self.params = params

    def head(self) -> str:
        return "@" + self.name + self.raws.get("afterName", " " if self.params else "") + self.params


def _takes_semicolon(node: Node) -> bool:
    if node.type == NodeType.DECLARATION:
        return True
    return node.type == NodeType.AT_RULE and not node.has_block
