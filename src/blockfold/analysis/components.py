"""Component recognition.

A block argument is compiled only when it looks like a component: a function
or arrow expression that is named like one (leading uppercase letter), sits in
a declaration named like one, or returns a UI tree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from blockfold.nodes import (
    ancestors,
    first_significant_child,
    function_parent,
    node_text,
    same_node,
    significant_children,
    unwrap,
    walk,
)
from blockfold.utils.constants import (
    COMPONENT_FUNCTION_TYPES,
    DEFAULT_NAME,
    FUNCTION_TYPES,
    JSX_TREE_TYPES,
)

if TYPE_CHECKING:
    from tree_sitter import Node

_NAMED_FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",
        "generator_function",
    }
)

# Operators whose result may be either operand
_SELECTING_OPERATORS = frozenset({"&&", "||", "??"})


def is_componentish_name(name: str) -> bool:
    """Names starting with an uppercase ASCII letter."""
    return bool(name) and "A" <= name[0] <= "Z"


def _own_name(node: Node, data: bytes) -> str | None:
    kind = node.type
    if kind in _NAMED_FUNCTION_TYPES:
        name = node.child_by_field_name("name")
        if name is not None:
            return node_text(data, name)
    elif kind == "variable_declarator":
        name = node.child_by_field_name("name")
        if name is not None and name.type == "identifier":
            return node_text(data, name)
    elif kind == "method_definition":
        name = node.child_by_field_name("name")
        if name is not None and name.type in ("property_identifier", "identifier"):
            return node_text(data, name)
    return None


def descriptive_name(node: Node, data: bytes, default: str = DEFAULT_NAME) -> str:
    """Name of the nearest named declaration containing *node* (itself included)."""
    own = _own_name(node, data)
    if own is not None:
        return own
    for ancestor in ancestors(node):
        own = _own_name(ancestor, data)
        if own is not None:
            return own
    return default


def block_name(node: Node, data: bytes, default: str = DEFAULT_NAME) -> str:
    """Base for generated names: the descriptive name, ``JSX_``-prefixed unless component-ish."""
    name = descriptive_name(node, data, default)
    if is_componentish_name(name):
        return name
    return f"JSX_{name}"


def is_ui_expression(node: Node | None) -> bool:
    """Whether an expression evaluates to a UI tree on some path."""
    if node is None:
        return False
    node = unwrap(node)
    if node.type in JSX_TREE_TYPES:
        return True
    if node.type == "ternary_expression":
        return is_ui_expression(node.child_by_field_name("consequence")) or is_ui_expression(
            node.child_by_field_name("alternative")
        )
    if node.type == "binary_expression":
        operator = node.child_by_field_name("operator")
        if operator is None or operator.type not in _SELECTING_OPERATORS:
            return False
        return is_ui_expression(node.child_by_field_name("left")) or is_ui_expression(
            node.child_by_field_name("right")
        )
    if node.type == "sequence_expression":
        operands = significant_children(node)
        return bool(operands) and is_ui_expression(operands[-1])
    return False


def returns_ui_tree(function: Node) -> bool:
    """Whether *function* returns a UI tree from its own body (closures excluded)."""
    body = function.child_by_field_name("body")
    if body is None:
        return False
    if body.type != "statement_block":
        return is_ui_expression(body)

    found = False

    def visit(node: Node) -> bool:
        nonlocal found
        if found:
            return False
        if node.type in FUNCTION_TYPES and not same_node(node, function):
            return False
        if node.type == "return_statement" and same_node(function_parent(node), function):
            if is_ui_expression(first_significant_child(node)):
                found = True
            return False
        return True

    walk(body, visit)
    return found


def is_component(node: Node, data: bytes) -> bool:
    """Function or arrow expression recognized as a component."""
    if node.type not in COMPONENT_FUNCTION_TYPES:
        return False
    own = _own_name(node, data)
    if own is not None and is_componentish_name(own):
        return True
    if is_componentish_name(descriptive_name(node, data, "")):
        return True
    return returns_ui_tree(node)
