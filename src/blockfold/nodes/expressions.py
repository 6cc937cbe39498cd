"""Expression helpers: wrapper unwrapping, literals, function shapes."""

from __future__ import annotations

import re

from tree_sitter import Node

from blockfold.nodes.base import first_significant_child, significant_children
from blockfold.utils.constants import GENERATOR_TYPES, WRAPPER_TYPES

_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")


def unwrap(node: Node) -> Node:
    """Strip parentheses and type-only wrappers (``as``, ``satisfies``, ``!``, ``<T>``)."""
    while node.type in WRAPPER_TYPES:
        if node.type == "type_assertion":
            inner = significant_children(node)[-1:]
            inner_node = inner[0] if inner else None
        else:
            inner_node = first_significant_child(node)
        if inner_node is None:
            return node
        node = inner_node
    return node


def unwrap_to(node: Node, *types: str) -> Node | None:
    """The unwrapped node when its type is one of *types*, else ``None``."""
    inner = unwrap(node)
    if inner.type in types:
        return inner
    return None


def _replace_escape(match: re.Match[str]) -> str:
    escape = match.group(1)
    if escape.startswith("u{"):
        return chr(int(escape[2:-1], 16))
    if escape[0] in "ux" and len(escape) > 1:
        return chr(int(escape[1:], 16))
    if escape in ("\n", "\r\n", "\r", "\u2028", "\u2029"):
        return ""
    return _ESCAPES.get(escape, escape)


def string_value(text: str) -> str:
    """Value of a JS string literal given its source text (quotes included)."""
    return _ESCAPE_RE.sub(_replace_escape, text[1:-1])


def call_arguments(call: Node) -> list[Node]:
    """Argument nodes of a call expression (empty for tagged templates)."""
    arguments = call.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return []
    return significant_children(arguments)


def function_name(function: Node, data: bytes) -> str | None:
    name = function.child_by_field_name("name")
    if name is None:
        return None
    return data[name.start_byte : name.end_byte].decode("utf-8")


def is_async_function(function: Node) -> bool:
    return any(child.type == "async" for child in function.children)


def is_generator_function(function: Node) -> bool:
    if function.type in GENERATOR_TYPES:
        return True
    return any(child.type == "*" for child in function.children)


def function_body(function: Node) -> Node | None:
    return function.child_by_field_name("body")


def has_expression_body(function: Node) -> bool:
    """Arrow functions whose body is an expression (an implicit return)."""
    if function.type != "arrow_function":
        return False
    body = function_body(function)
    return body is not None and body.type != "statement_block"
