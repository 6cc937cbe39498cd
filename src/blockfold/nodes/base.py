"""Structural helpers over tree-sitter nodes.

tree-sitter nodes are immutable views into a parsed tree. These helpers add
the navigation the compiler needs: comment-aware siblings, leading comment
lookup for annotations, nearest function parent and root statement.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from tree_sitter import Node

from blockfold.utils.constants import COMMENT_TYPES, FUNCTION_TYPES


def node_text(data: bytes, node: Node) -> str:
    """Source text of *node* decoded from the parsed bytes."""
    return data[node.start_byte : node.end_byte].decode("utf-8")


def same_node(a: Node | None, b: Node | None) -> bool:
    """Identity of two node views (tree-sitter hands out fresh wrappers)."""
    if a is None or b is None:
        return a is b
    return a.id == b.id


def significant_children(node: Node) -> list[Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type not in COMMENT_TYPES]


def first_significant_child(node: Node) -> Node | None:
    for child in node.named_children:
        if child.type not in COMMENT_TYPES:
            return child
    return None


def leading_comments(node: Node) -> list[Node]:
    """Comments written immediately before *node*.

    Walks previous siblings while they are comments. When *node* opens its
    parent (nothing but comments before it), the parent's leading comments
    lead *node* as well.
    """
    comments: list[Node] = []
    current = node
    while current is not None:
        prev = current.prev_sibling
        while prev is not None and prev.type in COMMENT_TYPES:
            comments.append(prev)
            prev = prev.prev_sibling
        if prev is not None:
            break
        current = current.parent
    return comments


def has_annotation(data: bytes, node: Node, *markers: str) -> bool:
    """Whether a leading comment of *node* contains any of *markers*."""
    for comment in leading_comments(node):
        text = node_text(data, comment)
        if any(marker in text for marker in markers):
            return True
    return False


def ancestors(node: Node) -> Iterator[Node]:
    current = node.parent
    while current is not None:
        yield current
        current = current.parent


def function_parent(node: Node) -> Node | None:
    """Nearest enclosing function-like node, ``None`` at program level."""
    for ancestor in ancestors(node):
        if ancestor.type in FUNCTION_TYPES:
            return ancestor
    return None


def root_statement(node: Node) -> Node:
    """The program-level statement containing *node*."""
    current = node
    parent = current.parent
    while parent is not None and parent.type != "program":
        current = parent
        parent = current.parent
    return current


def walk(node: Node, visit: Callable[[Node], bool]) -> None:
    """Pre-order traversal; *visit* returns False to skip a node's children."""
    stack = [node]
    while stack:
        current = stack.pop()
        if visit(current):
            stack.extend(reversed(current.children))


def line_indent(data: bytes, offset: int) -> str:
    """Whitespace between the start of the line and *offset*, if nothing else is there."""
    line_start = data.rfind(b"\n", 0, offset) + 1
    prefix = data[line_start:offset]
    if prefix.strip():
        return ""
    return prefix.decode("utf-8")
