"""Deoptimization of block calls that cannot be compiled.

An async or generator component never returns a UI tree synchronously, so it
cannot become a render function. The call is rewritten to its plain argument,
``block(async () => ...)`` becoming ``async () => ...``, and a diagnostic is
recorded. Compilation of the rest of the file continues.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from blockfold.diagnostics import Diagnostic
from blockfold.exceptions import ErrorCode
from blockfold.nodes import is_async_function, is_generator_function

if TYPE_CHECKING:
    from tree_sitter import Node

    from blockfold.compiler.edits import Part, SourceEditor
    from blockfold.config import CompilerConfig
    from blockfold.parser import SourceTree

logger = logging.getLogger(__name__)

_REASONS: dict[ErrorCode, tuple[str, str]] = {
    ErrorCode.DEOPT_ASYNC_COMPONENT: (
        "Async components cannot be compiled into blocks",
        "move data loading out of the component or drop block()",
    ),
    ErrorCode.DEOPT_GENERATOR_COMPONENT: (
        "Generator components cannot be compiled into blocks",
        "return the UI tree directly instead of yielding it",
    ),
}


def deopt_reason(component: Node) -> ErrorCode | None:
    """Code explaining why *component* cannot be compiled, if it cannot."""
    if is_async_function(component):
        return ErrorCode.DEOPT_ASYNC_COMPONENT
    if is_generator_function(component):
        return ErrorCode.DEOPT_GENERATOR_COMPONENT
    return None


class DeoptMixin:
    """Mixin rewriting uncompilable block calls to their argument.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks.

    """

    # ─────────────────────────────────────────────────────────────────────────
    # Host attributes and cross-mixin dependencies (type-check only)
    # ─────────────────────────────────────────────────────────────────────────
    if TYPE_CHECKING:
        _config: CompilerConfig
        _tree: SourceTree
        _editor: SourceEditor
        _diagnostics: list[Diagnostic]

        # From BlockTransformMixin
        def _replace_call(self, call: Node, parts: list[Part]) -> None: ...

    def _deopt(self, call: Node, argument: Node, component: Node, code: ErrorCode) -> Diagnostic:
        self._replace_call(call, [self._editor.span(argument)])

        message, hint = _REASONS[code]
        diagnostic = Diagnostic.at(self._tree, component, message, code, hint=hint)
        self._diagnostics.append(diagnostic)
        if not self._config.mute_diagnostics:
            logger.warning("%s", diagnostic.format_compact())
        return diagnostic
