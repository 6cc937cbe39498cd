"""Import binding resolution.

Maps the local names bound by ``import`` declarations to the runtime exports
they denote, then answers whether a call's callee refers to the ``block``
entry point for the active mode.

Resolution goes through lexical bindings: a callee spelled ``block`` matches
only when its binding is the one created by a recognized import specifier, so
a local ``function block() {}`` or a shadowing parameter never matches.

Example:
        >>> tree = parse('import { block as b } from "million/react"; b(() => 1)')
        >>> resolver = BindingResolver(tree, build_scopes(tree.root, tree.data))
        >>> _ = resolver.register_all()
        >>> resolver.table.identifiers
        {0: ImportDefinition(kind='named', source='million/react', mode='client', name='block')}

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from blockfold.nodes import node_text, significant_children, string_value, unwrap
from blockfold.utils.constants import IMPORTS

if TYPE_CHECKING:
    from tree_sitter import Node

    from blockfold._types import ImportDefinition, ImportRegistry, Mode
    from blockfold.analysis.scope import ScopeTable
    from blockfold.parser import SourceTree

logger = logging.getLogger(__name__)

_TYPE_ONLY_TOKENS = frozenset({"type", "typeof"})


@dataclass(slots=True)
class BindingTable:
    """Per-file association of binding uids to runtime exports.

    Attributes:
        identifiers: uid of a default or named import binding -> definition.
        namespaces: uid of a namespace import binding -> definitions reachable
            through it, in registration order.

    """

    identifiers: dict[int, ImportDefinition] = field(default_factory=dict)
    namespaces: dict[int, list[ImportDefinition]] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.identifiers or self.namespaces)


def _is_type_only(node: Node) -> bool:
    return any(child.type in _TYPE_ONLY_TOKENS for child in node.children)


class BindingResolver:
    """Build and query the `BindingTable` of one parsed file."""

    __slots__ = ("_data", "_mode", "_registry", "_root", "_scopes", "_target", "table")

    def __init__(
        self,
        tree: SourceTree,
        scopes: ScopeTable,
        registry: ImportRegistry | None = None,
        mode: Mode = "client",
        target: str = "block",
    ) -> None:
        self._data = tree.data
        self._scopes = scopes
        self._registry = IMPORTS if registry is None else registry
        self._mode = mode
        self._target = target
        self.table = BindingTable()
        self._root = tree.root

    @property
    def target(self) -> ImportDefinition | None:
        """Definition of the recognized entry point for the active mode."""
        entry = self._registry.get(self._target)
        if entry is None:
            return None
        return entry.get(self._mode)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_all(self) -> BindingTable:
        """Register every program-level import declaration."""
        for statement in significant_children(self._root):
            if statement.type == "import_statement":
                self.register(statement)
        return self.table

    def register(self, statement: Node) -> None:
        """Register the specifiers of one import declaration."""
        if _is_type_only(statement):
            return
        source_node = statement.child_by_field_name("source")
        if source_node is None:
            return
        source = string_value(node_text(self._data, source_node))

        definitions = [
            entry[self._mode]
            for entry in self._registry.values()
            if self._mode in entry and entry[self._mode].source == source
        ]
        if not definitions:
            return
        logger.debug("Registering imports from %r (%s mode)", source, self._mode)

        for clause in significant_children(statement):
            if clause.type != "import_clause":
                continue
            for part in significant_children(clause):
                if part.type == "identifier":
                    self._register_default(part, definitions)
                elif part.type == "namespace_import":
                    self._register_namespace(part, definitions)
                elif part.type == "named_imports":
                    for specifier in significant_children(part):
                        if specifier.type == "import_specifier" and not _is_type_only(specifier):
                            self._register_named(specifier, definitions)

    def _register_default(self, local: Node, definitions: list[ImportDefinition]) -> None:
        binding = self._scopes.declared_by(local)
        if binding is None:
            return
        for definition in definitions:
            if definition.kind == "default":
                self.table.identifiers[binding.uid] = definition

    def _register_namespace(self, namespace: Node, definitions: list[ImportDefinition]) -> None:
        for local in significant_children(namespace):
            binding = self._scopes.declared_by(local)
            if binding is None:
                continue
            self.table.namespaces.setdefault(binding.uid, []).extend(definitions)

    def _register_named(self, specifier: Node, definitions: list[ImportDefinition]) -> None:
        imported = specifier.child_by_field_name("name")
        if imported is None:
            return
        local = specifier.child_by_field_name("alias")
        if local is None:
            local = imported
        binding = self._scopes.declared_by(local)
        if binding is None:
            return
        text = node_text(self._data, imported)
        name = string_value(text) if imported.type == "string" else text
        for definition in definitions:
            if definition.kind == "named" and definition.name == name:
                self.table.identifiers[binding.uid] = definition
            elif definition.kind == "default" and name == "default":
                self.table.identifiers[binding.uid] = definition

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve_callee(self, call: Node) -> ImportDefinition | None:
        """Runtime export a call's callee refers to, if any."""
        callee = call.child_by_field_name("function")
        if callee is None:
            return None
        callee = unwrap(callee)

        if callee.type == "identifier":
            binding = self._scopes.resolve(callee, node_text(self._data, callee))
            if binding is None:
                return None
            return self.table.identifiers.get(binding.uid)

        if callee.type == "member_expression":
            if any(child.type == "optional_chain" for child in callee.children):
                return None
            obj = callee.child_by_field_name("object")
            prop = callee.child_by_field_name("property")
            if obj is None or prop is None or prop.type != "property_identifier":
                return None
            obj = unwrap(obj)
            if obj.type != "identifier":
                return None
            binding = self._scopes.resolve(obj, node_text(self._data, obj))
            if binding is None:
                return None
            member = node_text(self._data, prop)
            for definition in self.table.namespaces.get(binding.uid, ()):
                if definition.kind == "named" and definition.name == member:
                    return definition
            return None

        return None

    def is_block_call(self, call: Node) -> bool:
        """Whether *call* invokes the recognized entry point for the active mode."""
        if not self.table:
            return False
        target = self.target
        return target is not None and self.resolve_callee(call) == target
