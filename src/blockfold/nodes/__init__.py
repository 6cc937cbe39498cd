"""Helpers over tree-sitter syntax nodes.

blockfold does not define its own AST: the compiler works directly on the
immutable tree-sitter tree and records text edits. This package groups the
node-level queries it needs.

Modules:
- base: traversal, comments and annotations, ancestors
- expressions: unwrapping, literals, function shapes
- jsx: element, attribute and child accessors
"""

from __future__ import annotations

from blockfold.nodes.base import (
    ancestors,
    first_significant_child,
    function_parent,
    has_annotation,
    leading_comments,
    line_indent,
    node_text,
    root_statement,
    same_node,
    significant_children,
    walk,
)
from blockfold.nodes.expressions import (
    call_arguments,
    function_body,
    function_name,
    has_expression_body,
    is_async_function,
    is_generator_function,
    string_value,
    unwrap,
    unwrap_to,
)

__all__ = [
    "ancestors",
    "call_arguments",
    "first_significant_child",
    "function_body",
    "function_name",
    "function_parent",
    "has_annotation",
    "has_expression_body",
    "is_async_function",
    "is_generator_function",
    "leading_comments",
    "line_indent",
    "node_text",
    "root_statement",
    "same_node",
    "significant_children",
    "string_value",
    "unwrap",
    "unwrap_to",
    "walk",
]
