"""Hidden runtime import injection.

Provides the mixin that emits ``import { compiledBlock as _compiledBlock }``
once per file, after any directive prologue, and hands out the local name.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from blockfold.nodes import significant_children

if TYPE_CHECKING:
    from tree_sitter import Node

    from blockfold._types import ImportDefinition
    from blockfold.analysis import ScopeTable
    from blockfold.compiler.edits import SourceEditor
    from blockfold.config import CompilerConfig
    from blockfold.parser import SourceTree


def _is_directive(statement: Node) -> bool:
    """``"use client";`` style statements: a lone string expression."""
    if statement.type != "expression_statement":
        return False
    inner = significant_children(statement)
    return len(inner) == 1 and inner[0].type == "string"


def import_statement(definition: ImportDefinition, local: str) -> str:
    """Source text importing *definition* under the name *local*."""
    source = json.dumps(definition.source)
    if definition.kind == "default":
        return f"import {local} from {source};"
    if definition.name == local:
        return f"import {{ {local} }} from {source};"
    return f"import {{ {definition.name} as {local} }} from {source};"


class ImportInjectionMixin:
    """Mixin emitting imports of compiler-only runtime exports.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks.

    """

    # ─────────────────────────────────────────────────────────────────────────
    # Host attributes and cross-mixin dependencies (type-check only)
    # ─────────────────────────────────────────────────────────────────────────
    if TYPE_CHECKING:
        _config: CompilerConfig
        _tree: SourceTree
        _data: bytes
        _scopes: ScopeTable
        _editor: SourceEditor
        _hidden: dict[str, str]

    def _hidden_import(self, export: str) -> str:
        """Local name of a hidden runtime export, importing it on first use."""
        local = self._hidden.get(export)
        if local is not None:
            return local
        definition = self._config.hidden(export)
        local = self._scopes.generate_uid(definition.name or export)
        self._hidden[export] = local

        offset, prefix = self._import_position()
        self._editor.insert(
            offset, [prefix, import_statement(definition, local), "\n"], leading=True
        )
        return local

    def _import_position(self) -> tuple[int, str]:
        """Offset of the first statement after the directive prologue.

        Returns the offset and the text needed before the import when it has
        to be appended after the last directive instead.
        """
        last_directive = None
        for statement in significant_children(self._tree.root):
            if statement.type == "hash_bang_line":
                continue
            if _is_directive(statement):
                last_directive = statement
                continue
            return statement.start_byte, ""
        if last_directive is not None:
            return last_directive.end_byte, "\n"
        return 0, ""
