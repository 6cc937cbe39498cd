"""JSX accessors.

Grammar notes:
- Fragments are ``jsx_element`` nodes whose opening tag has no name (current
  grammars) or ``jsx_fragment`` nodes (older grammars).
- Spread attributes and spread children are ``jsx_expression`` nodes wrapping a
  ``spread_element``.
- Member tag names are ``member_expression`` (``nested_identifier`` in older
  grammars); namespaced names are ``jsx_namespace_name``.
"""

from __future__ import annotations

from tree_sitter import Node

from blockfold.nodes.base import first_significant_child
from blockfold.utils.constants import COMMENT_TYPES, JSX_TREE_TYPES

_TAG_TYPES = frozenset({"jsx_opening_element", "jsx_closing_element"})


def is_jsx_tree(node: Node) -> bool:
    """Element, self-closing element or fragment."""
    return node.type in JSX_TREE_TYPES


def opening_element(node: Node) -> Node | None:
    """The opening tag carrying name and attributes (the node itself when self-closing)."""
    if node.type == "jsx_self_closing_element":
        return node
    if node.type != "jsx_element":
        return None
    tag = node.child_by_field_name("open_tag")
    if tag is not None:
        return tag
    for child in node.children:
        if child.type == "jsx_opening_element":
            return child
    return None


def tag_name(node: Node) -> Node | None:
    """Name node of an element, ``None`` for fragments."""
    tag = opening_element(node)
    if tag is None:
        return None
    return tag.child_by_field_name("name")


def is_fragment(node: Node) -> bool:
    if node.type == "jsx_fragment":
        return True
    return node.type == "jsx_element" and tag_name(node) is None


def attributes(node: Node) -> list[Node]:
    """``jsx_attribute`` and spread ``jsx_expression`` nodes, in source order."""
    tag = opening_element(node)
    if tag is None:
        return []
    return [child for child in tag.named_children if child.type in ("jsx_attribute", "jsx_expression")]


def children(node: Node) -> list[Node]:
    """Child nodes between the opening and closing tags."""
    if node.type == "jsx_self_closing_element":
        return []
    return [
        child
        for child in node.named_children
        if child.type not in _TAG_TYPES and child.type not in COMMENT_TYPES
    ]


def attribute_name(attribute: Node, data: bytes) -> str:
    name = first_significant_child(attribute)
    if name is None:
        return ""
    return data[name.start_byte : name.end_byte].decode("utf-8")


def attribute_value(attribute: Node) -> Node | None:
    """Value after ``=``, ``None`` for bare boolean attributes."""
    seen_equals = False
    for child in attribute.children:
        if child.type == "=":
            seen_equals = True
        elif seen_equals and child.is_named and child.type not in COMMENT_TYPES:
            return child
    return None


def container_expression(container: Node) -> Node | None:
    """Expression inside ``{...}``; ``None`` when empty or comment-only."""
    return first_significant_child(container)


def spread_argument(node: Node) -> Node | None:
    """Argument of a ``spread_element``, ``None`` for any other node."""
    if node.type != "spread_element":
        return None
    return first_significant_child(node)
