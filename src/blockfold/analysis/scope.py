"""Lexical scope analysis for one source file.

Builds the scope chain (program, function, block, class, catch, for) and a
`Binding` for every declared name, so a call's callee can be resolved to the
declaration it actually refers to rather than matched by spelling.

Rules followed:
- ``var`` declarations hoist to the nearest function (or program) scope.
- ``let``/``const``/``class`` bind in the enclosing block scope.
- Function declarations bind in the enclosing scope; their parameters and
  body share one function scope.
- A named function or class expression binds its own name inside itself.
- Redeclaring a name in the same scope replaces the earlier binding
  (last write wins).

Unique names are generated against every identifier spelled anywhere in the
file plus the names generated so far, so a generated name can never capture
or shadow an existing one regardless of where it is inserted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

from tree_sitter import Node

from blockfold.nodes import significant_children
from blockfold.utils.constants import FUNCTION_TYPES

ScopeKind = Literal["program", "function", "block", "class"]
BindingKind = Literal["module", "var", "let", "const", "function", "class", "param", "catch"]

# Node types whose text is a name someone may be relying on
_NAME_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "type_identifier",
        "statement_identifier",
    }
)

_FUNCTION_EXPRESSIONS = frozenset({"function_expression", "function", "generator_function"})
_FUNCTION_DECLARATIONS = frozenset({"function_declaration", "generator_function_declaration"})

_INVALID_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9$_]")
_TRAILING_DIGITS = re.compile(r"\d+$")


@dataclass(eq=False, slots=True)
class Binding:
    """A declared local name.

    Bindings are identified by ``uid``, assigned in declaration order by the
    scope builder; lookup tables key on it.
    """

    uid: int
    name: str
    kind: BindingKind
    scope: Scope
    node: Node


@dataclass(eq=False, slots=True)
class Scope:
    kind: ScopeKind
    node: Node
    parent: Scope | None = None
    bindings: dict[str, Binding] = field(default_factory=dict)

    def lookup(self, name: str) -> Binding | None:
        """Resolve *name* through this scope and its parents."""
        scope: Scope | None = self
        while scope is not None:
            binding = scope.bindings.get(name)
            if binding is not None:
                return binding
            scope = scope.parent
        return None

    @property
    def function_scope(self) -> Scope:
        """Nearest scope ``var`` declarations hoist to."""
        scope = self
        while scope.kind not in ("function", "program") and scope.parent is not None:
            scope = scope.parent
        return scope


class ScopeTable:
    """Scopes, bindings and used names of one parsed file."""

    __slots__ = ("_declarations", "_next_uid", "_scopes", "_uids", "names", "program")

    def __init__(self, program: Node):
        self.program = Scope("program", program)
        self._scopes: dict[int, Scope] = {program.id: self.program}
        self._declarations: dict[int, Binding] = {}
        self._next_uid = 0
        self._uids: set[str] = set()
        self.names: set[str] = set()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_scope(self, kind: ScopeKind, node: Node, parent: Scope) -> Scope:
        scope = Scope(kind, node, parent)
        self._scopes[node.id] = scope
        return scope

    def declare(self, scope: Scope, identifier: Node, name: str, kind: BindingKind) -> Binding:
        binding = Binding(self._next_uid, name, kind, scope, identifier)
        self._next_uid += 1
        scope.bindings[name] = binding
        self._declarations[identifier.id] = binding
        return binding

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def scope_for(self, node: Node) -> Scope:
        """Innermost scope containing *node*."""
        current: Node | None = node
        while current is not None:
            scope = self._scopes.get(current.id)
            if scope is not None:
                return scope
            current = current.parent
        return self.program

    def resolve(self, identifier: Node, name: str) -> Binding | None:
        """Binding that *name*, spelled at *identifier*, refers to."""
        return self.scope_for(identifier).lookup(name)

    def declared_by(self, identifier: Node) -> Binding | None:
        """Binding introduced by a declaring identifier node."""
        return self._declarations.get(identifier.id)

    def is_used(self, name: str) -> bool:
        return name in self.names or name in self._uids

    def generate_uid(self, name: str = "temp") -> str:
        """Reserve a fresh ``_name``, ``_name2``, ``_name3``... identifier."""
        base = _INVALID_IDENTIFIER_CHARS.sub("", name).lstrip("_")
        base = _TRAILING_DIGITS.sub("", base) or "temp"
        if base[0].isdigit():
            base = f"_{base}"
        i = 1
        while True:
            candidate = f"_{base}" if i == 1 else f"_{base}{i}"
            i += 1
            if not self.is_used(candidate):
                break
        self._uids.add(candidate)
        return candidate


def build_scopes(program: Node, data: bytes) -> ScopeTable:
    """Walk a parsed program and build its `ScopeTable`."""
    table = ScopeTable(program)
    builder = _ScopeBuilder(table, data)
    builder.run(program)
    return table


def binding_identifiers(pattern: Node | None) -> list[Node]:
    """Identifier nodes a declaration pattern binds, left to right."""
    if pattern is None:
        return []
    kind = pattern.type
    if kind in ("identifier", "shorthand_property_identifier_pattern"):
        return [pattern]
    if kind in ("required_parameter", "optional_parameter"):
        return binding_identifiers(pattern.child_by_field_name("pattern"))
    if kind in ("assignment_pattern", "object_assignment_pattern"):
        return binding_identifiers(pattern.child_by_field_name("left"))
    if kind == "pair_pattern":
        return binding_identifiers(pattern.child_by_field_name("value"))
    if kind in ("object_pattern", "array_pattern", "rest_pattern"):
        found: list[Node] = []
        for child in significant_children(pattern):
            found.extend(binding_identifiers(child))
        return found
    return []


class _ScopeBuilder:
    """Iterative walk assigning every node to a scope."""

    __slots__ = ("_data", "_table")

    def __init__(self, table: ScopeTable, data: bytes):
        self._table = table
        self._data = data

    def _text(self, node: Node) -> str:
        return self._data[node.start_byte : node.end_byte].decode("utf-8")

    def _declare_pattern(self, scope: Scope, pattern: Node | None, kind: BindingKind) -> None:
        for identifier in binding_identifiers(pattern):
            self._table.declare(scope, identifier, self._text(identifier), kind)

    def _declare_params(self, scope: Scope, function: Node) -> None:
        single = function.child_by_field_name("parameter")
        if single is not None:
            self._declare_pattern(scope, single, "param")
            return
        params = function.child_by_field_name("parameters")
        if params is None:
            return
        for param in significant_children(params):
            self._declare_pattern(scope, param, "param")

    def run(self, program: Node) -> None:
        table = self._table
        stack: list[tuple[Node, Scope]] = [(program, table.program)]
        while stack:
            node, scope = stack.pop()
            inner = self._enter(node, scope)
            stack.extend((child, inner) for child in reversed(node.children))

    def _enter(self, node: Node, scope: Scope) -> Scope:
        """Record what *node* declares; return the scope of its children."""
        kind = node.type
        table = self._table

        if kind in _NAME_TYPES:
            table.names.add(self._text(node))
            return scope

        if kind == "import_statement":
            self._declare_imports(node)
            return scope

        if kind in FUNCTION_TYPES:
            if kind in _FUNCTION_DECLARATIONS:
                name = node.child_by_field_name("name")
                if name is not None:
                    table.declare(scope, name, self._text(name), "function")
            inner = table.add_scope("function", node, scope)
            if kind in _FUNCTION_EXPRESSIONS:
                name = node.child_by_field_name("name")
                if name is not None:
                    table.declare(inner, name, self._text(name), "function")
            self._declare_params(inner, node)
            return inner

        if kind in ("class_declaration", "abstract_class_declaration", "class"):
            name = node.child_by_field_name("name")
            inner = table.add_scope("class", node, scope)
            if name is not None:
                target = inner if kind == "class" else scope
                table.declare(target, name, self._text(name), "class")
            return inner

        if kind == "variable_declaration":
            for declarator in significant_children(node):
                if declarator.type == "variable_declarator":
                    self._declare_pattern(
                        scope.function_scope, declarator.child_by_field_name("name"), "var"
                    )
            return scope

        if kind == "lexical_declaration":
            declaration_kind = node.child_by_field_name("kind")
            binding_kind: BindingKind = "const"
            if declaration_kind is not None and self._text(declaration_kind) == "let":
                binding_kind = "let"
            for declarator in significant_children(node):
                if declarator.type == "variable_declarator":
                    self._declare_pattern(
                        scope, declarator.child_by_field_name("name"), binding_kind
                    )
            return scope

        if kind == "statement_block":
            parent = node.parent
            if parent is not None and parent.type in FUNCTION_TYPES:
                return scope
            return table.add_scope("block", node, scope)

        if kind in ("for_statement", "switch_body"):
            return table.add_scope("block", node, scope)

        if kind == "for_in_statement":
            inner = table.add_scope("block", node, scope)
            declaration_kind = node.child_by_field_name("kind")
            if declaration_kind is not None:
                keyword = self._text(declaration_kind)
                target = inner.function_scope if keyword == "var" else inner
                binding_kind = "var" if keyword == "var" else ("let" if keyword == "let" else "const")
                self._declare_pattern(target, node.child_by_field_name("left"), binding_kind)
            return inner

        if kind == "catch_clause":
            inner = table.add_scope("block", node, scope)
            self._declare_pattern(inner, node.child_by_field_name("parameter"), "catch")
            return inner

        return scope

    def _declare_imports(self, statement: Node) -> None:
        program = self._table.program
        for clause in significant_children(statement):
            if clause.type != "import_clause":
                continue
            for part in significant_children(clause):
                if part.type == "identifier":
                    self._table.declare(program, part, self._text(part), "module")
                elif part.type == "namespace_import":
                    for local in significant_children(part):
                        if local.type == "identifier":
                            self._table.declare(program, local, self._text(local), "module")
                elif part.type == "named_imports":
                    for specifier in significant_children(part):
                        if specifier.type != "import_specifier":
                            continue
                        local = specifier.child_by_field_name("alias")
                        if local is None:
                            local = specifier.child_by_field_name("name")
                        if local is not None and local.type == "identifier":
                            self._table.declare(program, local, self._text(local), "module")
