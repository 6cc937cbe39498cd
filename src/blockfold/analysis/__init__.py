"""Static analysis for the block extraction pass.

Modules:
- scope: lexical scopes, bindings and unique name generation
- bindings: import registration and block call recognition
- components: component and UI tree recognition, descriptive names
- purity: compile-time literal detection
- visitor: call and UI root traversals

Example:
        >>> from blockfold.parser import parse
        >>> from blockfold.analysis import BindingResolver, build_scopes
        >>> tree = parse('import { block } from "million/react"; block(() => <a />)')
        >>> scopes = build_scopes(tree.root, tree.data)
        >>> resolver = BindingResolver(tree, scopes)
        >>> table = resolver.register_all()
        >>> len(table.identifiers)
        1

"""

from __future__ import annotations

from blockfold.analysis.bindings import BindingResolver, BindingTable
from blockfold.analysis.components import (
    block_name,
    descriptive_name,
    is_component,
    is_componentish_name,
    is_ui_expression,
    returns_ui_tree,
)
from blockfold.analysis.purity import LiteralAnalyzer, is_guaranteed_literal
from blockfold.analysis.scope import Binding, Scope, ScopeTable, binding_identifiers, build_scopes
from blockfold.analysis.visitor import find_ui_roots, iter_calls

__all__ = [
    "Binding",
    "BindingResolver",
    "BindingTable",
    "LiteralAnalyzer",
    "Scope",
    "ScopeTable",
    "binding_identifiers",
    "block_name",
    "build_scopes",
    "descriptive_name",
    "find_ui_roots",
    "is_component",
    "is_componentish_name",
    "is_guaranteed_literal",
    "is_ui_expression",
    "iter_calls",
    "returns_ui_tree",
]
