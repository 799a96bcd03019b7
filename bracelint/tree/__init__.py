"""bracelint Tree - style-sheet nodes and the helpers rules use on them."""

from .nodes import AtRule, BlockStatement, Comment, Container, Declaration, Node, Root, Rule

__all__ = [
    "AtRule",
    "BlockStatement",
    "Comment",
    "Container",
    "Declaration",
    "Node",
    "Root",
    "Rule",
]
