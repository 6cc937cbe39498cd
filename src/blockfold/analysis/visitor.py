"""Shared traversals for the extraction pass.

Provides the two walks the compiler needs: every call expression of a file
in document order, and the top-level UI trees owned by one component.
Both honor the annotation protocol: a node whose leading comment carries a
marker is neither reported nor descended into.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from blockfold.nodes import function_parent, has_annotation, same_node
from blockfold.utils.constants import FUNCTION_TYPES, JSX_TREE_TYPES

if TYPE_CHECKING:
    from tree_sitter import Node


def iter_calls(root: Node, data: bytes, skip_markers: Sequence[str] = ()) -> Iterator[Node]:
    """Yield call expressions under *root* in pre-order.

    Calls and UI trees annotated with one of *skip_markers* are skipped
    together with everything inside them.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        kind = node.type
        if (kind == "call_expression" or kind in JSX_TREE_TYPES) and skip_markers:
            if has_annotation(data, node, *skip_markers):
                continue
        if kind == "call_expression":
            yield node
        stack.extend(reversed(node.children))


def find_ui_roots(component: Node, data: bytes, skip_markers: Sequence[str] = ()) -> list[Node]:
    """UI trees whose nearest enclosing function is *component*, in document order.

    Nested UI trees belong to their outermost tree and are not reported.
    Closures inside *component* own their UI trees and are not entered.
    """
    roots: list[Node] = []
    stack = list(reversed(component.children))
    while stack:
        node = stack.pop()
        kind = node.type
        if kind in FUNCTION_TYPES:
            continue
        if kind in JSX_TREE_TYPES:
            if skip_markers and has_annotation(data, node, *skip_markers):
                continue
            if same_node(function_parent(node), component):
                roots.append(node)
            continue
        stack.extend(reversed(node.children))
    return roots
