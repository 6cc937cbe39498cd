"""Top-level dispatch for ``block(Component)`` calls.

Provides the mixin deciding whether a call is compiled, running UI tree
extraction over the component and replacing the call.

Dispatch:
    1. The callee must resolve to the ``block`` entry point.
    2. Calls annotated with a skip marker are left alone.
    3. At least one argument is required.
    4. A bare identifier argument is left alone.
    5. The argument must unwrap to a component.
    6. Async and generator components are deoptimized.
    7. Every top-level UI tree of the component is extracted.
    8. Expression-bodied arrows are hoisted; other components replace the
       call directly.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from blockfold.analysis import block_name, find_ui_roots, is_component
from blockfold.compiler.metadata import HoistedComponent
from blockfold.compiler.transforms.deopt import deopt_reason
from blockfold.nodes import (
    call_arguments,
    has_annotation,
    has_expression_body,
    line_indent,
    root_statement,
    unwrap,
)

if TYPE_CHECKING:
    from tree_sitter import Node

    from blockfold.analysis import BindingResolver, ScopeTable
    from blockfold.compiler.edits import Part, SourceEditor
    from blockfold.compiler.metadata import CompiledBlock
    from blockfold.config import CompilerConfig
    from blockfold.diagnostics import Diagnostic
    from blockfold.exceptions import ErrorCode
    from blockfold.parser import SourceTree

logger = logging.getLogger(__name__)


class BlockTransformMixin:
    """Mixin compiling recognized block calls.

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
        _resolver: BindingResolver
        _editor: SourceEditor
        _hoisted: list[HoistedComponent]

        # From JSXExtractionMixin
        def _transform_jsx(self, root: Node) -> CompiledBlock | None: ...

        # From DeoptMixin
        def _deopt(
            self, call: Node, argument: Node, component: Node, code: ErrorCode
        ) -> Diagnostic: ...

    def _transform_call(self, call: Node) -> bool:
        """Compile *call* if it is a block call; return whether it was rewritten."""
        if not self._resolver.is_block_call(call):
            return False
        if has_annotation(self._data, call, *self._config.skip_markers):
            return False
        arguments = call_arguments(call)
        if not arguments:
            return False
        argument = arguments[0]
        component = unwrap(argument)
        if component.type == "identifier":
            return False
        if not is_component(component, self._data):
            return False

        code = deopt_reason(component)
        if code is not None:
            self._deopt(call, argument, component, code)
            return True

        for root in find_ui_roots(component, self._data, self._config.skip_markers):
            self._transform_jsx(root)

        if has_expression_body(component):
            self._hoist(call, component)
        else:
            self._replace_call(call, [self._editor.span(component)])
        return True

    def _replace_call(self, call: Node, parts: list[Part]) -> None:
        """Replace *call*, parenthesized when it starts an expression statement.

        A function expression at the start of a statement would otherwise
        be read back as a declaration, as in ``block(function A() {}).x = 1``.
        """
        node = call
        while node.parent is not None and node.parent.start_byte == call.start_byte:
            node = node.parent
            if node.type == "expression_statement":
                parts = ["(", *parts, ")"]
                break
        self._editor.replace_node(call, parts)

    def _hoist(self, call: Node, component: Node) -> HoistedComponent:
        """Move an expression-bodied component into its own flagged declaration.

        Generates, before the root statement:
            const _Name = () => ...;
            _Name._c = true;

        and replaces the call with ``_Name``.
        """
        name = self._scopes.generate_uid(
            block_name(component, self._data, self._config.default_name)
        )
        statement = root_statement(call)
        indent = line_indent(self._data, statement.start_byte)
        self._editor.insert(
            statement.start_byte,
            [
                f"const {name} = ",
                self._editor.span(component),
                f";\n{indent}{name}.{self._config.compiled_flag} = true;\n{indent}",
            ],
        )
        self._editor.replace_node(call, [name])

        lineno, column = self._tree.position(component)
        hoisted = HoistedComponent(name, lineno, column)
        self._hoisted.append(hoisted)
        logger.debug("Hoisted component %s from line %d", name, lineno)
        return hoisted
