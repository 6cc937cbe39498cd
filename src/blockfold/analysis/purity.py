"""Compile-time literal analysis.

Determines whether an expression is a guaranteed literal: a value fully known
at compile time, independent of props, state or any binding. Guaranteed
literals never need a portal and may stay inline in a template when
``inline_static_values`` is enabled.

Literal Rules:
    - Strings, numbers, booleans, ``null``, ``undefined``: literal
    - Template strings without substitutions: literal
    - Unary, binary and ternary operations over literals: literal
    - Parentheses and type-only wrappers: transparent
    - Anything else (identifiers, calls, members, JSX): not literal

Conservative: an unknown node type is never a literal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from blockfold.nodes import significant_children
from blockfold.utils.constants import LITERAL_TYPES, WRAPPER_TYPES

if TYPE_CHECKING:
    from tree_sitter import Node

# Unary operators whose result depends only on the operand's value
_PURE_UNARY_OPERATORS = frozenset({"!", "-", "+", "~", "typeof", "void"})


class LiteralAnalyzer:
    """Decide whether expressions are compile-time literals.

    Stateless; one instance may be shared between files and threads.

    Example:
            >>> analyzer = LiteralAnalyzer()
            >>> analyzer.analyze(parse("-1 + 2").root.child(0).child(0))
            True

    """

    __slots__ = ()

    def analyze(self, node: Node | None) -> bool:
        """Return True when *node* is a guaranteed literal."""
        if node is None:
            return False
        if node.type in LITERAL_TYPES:
            return True
        if node.type in WRAPPER_TYPES:
            inner = significant_children(node)
            return bool(inner) and self.analyze(inner[-1] if node.type == "type_assertion" else inner[0])
        handler = getattr(self, f"_visit_{node.type}", None)
        if handler is None:
            return False
        return bool(handler(node))

    def _visit_template_string(self, node: Node) -> bool:
        """Template strings are literal without ``${}`` substitutions."""
        return not any(child.type == "template_substitution" for child in node.children)

    def _visit_unary_expression(self, node: Node) -> bool:
        operator = node.child_by_field_name("operator")
        if operator is None or operator.type not in _PURE_UNARY_OPERATORS:
            return False
        return self.analyze(node.child_by_field_name("argument"))

    def _visit_binary_expression(self, node: Node) -> bool:
        return self.analyze(node.child_by_field_name("left")) and self.analyze(
            node.child_by_field_name("right")
        )

    def _visit_ternary_expression(self, node: Node) -> bool:
        return (
            self.analyze(node.child_by_field_name("condition"))
            and self.analyze(node.child_by_field_name("consequence"))
            and self.analyze(node.child_by_field_name("alternative"))
        )


_ANALYZER = LiteralAnalyzer()


def is_guaranteed_literal(node: Node | None) -> bool:
    """Module-level shortcut over a shared `LiteralAnalyzer`."""
    return _ANALYZER.analyze(node)
