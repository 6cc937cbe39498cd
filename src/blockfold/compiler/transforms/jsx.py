"""UI tree extraction for the block compiler.

Provides the mixin that partitions one top-level UI tree into a static
template and ordered dynamic slots, emits its compiled-block declaration and
replaces the tree with an element referencing it.

Extraction order is load-bearing: slots are numbered left to right,
attributes before children, depth first, and the generated element passes
them back in the same order.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from blockfold.analysis import block_name, is_guaranteed_literal
from blockfold.compiler.metadata import CompiledBlock, Slot
from blockfold.nodes import (
    has_annotation,
    line_indent,
    node_text,
    root_statement,
    unwrap_to,
)
from blockfold.nodes.jsx import (
    attribute_name,
    attribute_value,
    attributes,
    children,
    container_expression,
    spread_argument,
    tag_name,
)
from blockfold.utils.constants import (
    JSX_ELEMENT_TYPES,
    JSX_TREE_TYPES,
    MEMBER_TAG_TYPES,
    SLOT_SOURCE_NAME,
)

if TYPE_CHECKING:
    from tree_sitter import Node

    from blockfold.analysis import ScopeTable
    from blockfold.compiler.edits import Edit, SourceEditor
    from blockfold.config import CompilerConfig
    from blockfold.parser import SourceTree

logger = logging.getLogger(__name__)

_COMPONENT_TAG = re.compile(r"^[A-Z_]")

# Children that are static text
_TEXT_TYPES = frozenset({"jsx_text", "html_character_reference"})


@dataclass(slots=True)
class ExtractionState:
    """Mutable state of one UI tree's extraction.

    Attributes:
        source: Name of the render function's slot parameter.
        slots: ``(key, node, portal)`` in extraction order.
        overlays: Template edits replacing extracted positions.
        portals: Keys of portal slots.

    """

    source: str
    slots: list[tuple[str, Node, bool]] = field(default_factory=list)
    overlays: list[Edit] = field(default_factory=list)
    portals: list[str] = field(default_factory=list)


class JSXExtractionMixin:
    """Mixin compiling UI trees into compiled-block declarations.

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
        _blocks: list[CompiledBlock]

        # From ImportInjectionMixin
        def _hidden_import(self, export: str) -> str: ...

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def _transform_jsx(self, root: Node) -> CompiledBlock | None:
        """Compile one top-level UI tree in place.

        Generates, before the root statement:
            const _Name = _compiledBlock(_props => <template>, {
              name: "_Name",
              portals: ["v0"]
            });

        and replaces the tree with ``/*@million jsx-skip*/<_Name v0={...} />``.
        """
        config = self._config
        if has_annotation(self._data, root, *config.skip_markers):
            return None

        state = ExtractionState(source=self._scopes.generate_uid(SLOT_SOURCE_NAME))
        self._extract(state, root, top=True)

        name = self._scopes.generate_uid(block_name(root, self._data, config.default_name))
        constructor = self._hidden_import("compiledBlock")
        editor = self._editor

        # Parts are filled in once the edit exists so spans can exclude it
        root_edit = editor.replace_node(root, [])
        root_edit.parts.append(f"/*{config.jsx_skip_annotation}*/<{name}")
        for key, node, _portal in state.slots:
            root_edit.parts.extend(
                [f" {key}={{", editor.span(node, exclude=root_edit), "}"]
            )
        root_edit.parts.append(" />")

        statement = root_statement(root)
        indent = line_indent(self._data, statement.start_byte)
        param = state.source if state.slots else "()"
        options = [f'{indent}  name: "{name}"']
        if state.portals:
            keys = ", ".join(json.dumps(key) for key in state.portals)
            options.append(f"{indent}  portals: [{keys}]")
        editor.insert(
            statement.start_byte,
            [
                f"const {name} = {constructor}({param} => ",
                editor.span(root, state.overlays, exclude=root_edit),
                ", {\n" + ",\n".join(options) + f"\n{indent}}});\n{indent}",
            ],
        )

        lineno, column = self._tree.position(root)
        block = CompiledBlock(
            name=name,
            slots=tuple(
                Slot(key, node_text(self._data, node), portal)
                for key, node, portal in state.slots
            ),
            portals=tuple(state.portals),
            render_param=state.source if state.slots else None,
            lineno=lineno,
            col_offset=column,
        )
        self._blocks.append(block)
        logger.debug(
            "Compiled block %s at line %d: %d slots, %d portals",
            name,
            lineno,
            len(block.slots),
            len(block.portals),
        )
        return block

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def _is_component_element(self, node: Node) -> bool:
        """Elements naming a user component, or carrying a ``ref``."""
        if node.type not in JSX_ELEMENT_TYPES:
            return False
        name = tag_name(node)
        if name is not None:
            if name.type in MEMBER_TAG_TYPES:
                return True
            if name.type == "identifier" and _COMPONENT_TAG.match(node_text(self._data, name)):
                return True
        return any(
            attr.type == "jsx_attribute" and attribute_name(attr, self._data) == "ref"
            for attr in attributes(node)
        )

    def _push(self, state: ExtractionState, node: Node, top: bool, portal: bool) -> None:
        key = f"v{len(state.slots)}"
        reference = f"{state.source}.{key}"
        state.overlays.append(
            self._editor.overlay(node, [reference if top else f"{{{reference}}}"])
        )
        portal = portal and not is_guaranteed_literal(node)
        state.slots.append((key, node, portal))
        if portal:
            state.portals.append(key)

    def _extract(self, state: ExtractionState, node: Node, top: bool) -> None:
        if has_annotation(self._data, node, *self._config.skip_markers):
            return
        if self._is_component_element(node):
            self._push(state, node, top, portal=True)
            return
        for attr in attributes(node):
            self._extract_attribute(state, attr)
        for child in children(node):
            self._extract_child(state, child)

    def _extract_expression(self, state: ExtractionState, expression: Node) -> None:
        tree = unwrap_to(expression, *JSX_TREE_TYPES)
        if tree is not None:
            self._extract(state, tree, top=True)
            return
        if self._config.inline_static_values and is_guaranteed_literal(expression):
            return
        self._push(state, expression, top=True, portal=False)

    def _extract_attribute(self, state: ExtractionState, attr: Node) -> None:
        if attr.type == "jsx_expression":
            # {...props}
            expression = container_expression(attr)
            argument = spread_argument(expression) if expression is not None else None
            if argument is not None:
                self._extract_expression(state, argument)
            return
        value = attribute_value(attr)
        if value is None or value.type == "string":
            return
        if value.type in JSX_TREE_TYPES:
            self._extract(state, value, top=False)
        elif value.type == "jsx_expression":
            expression = container_expression(value)
            if expression is not None:
                self._extract_expression(state, expression)

    def _extract_child(self, state: ExtractionState, child: Node) -> None:
        kind = child.type
        if kind in _TEXT_TYPES:
            return
        if kind in JSX_TREE_TYPES:
            self._extract(state, child, top=False)
        elif kind == "jsx_expression":
            expression = container_expression(child)
            if expression is None:
                return
            argument = spread_argument(expression)
            self._extract_expression(state, argument if argument is not None else expression)
