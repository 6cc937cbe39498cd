"""Tests for lexical scope analysis and unique name generation."""

from __future__ import annotations

import pytest

from blockfold import parse
from blockfold.analysis import binding_identifiers, build_scopes

from .conftest import find_nodes


def _scopes(source: str, language: str | None = None):
    tree = parse(source, language=language)
    return tree, build_scopes(tree.root, tree.data)


def _identifiers(tree, name: str) -> list:
    return [node for node in find_nodes(tree.root, "identifier") if tree.text(node) == name]


class TestDeclarations:
    """Which scope each declaration form binds in."""

    def test_imports_bind_at_program_level(self):
        tree, scopes = _scopes(
            'import def, { block as b, For } from "million/react";\n'
            'import * as ns from "million/react";\n'
        )
        program = scopes.program.bindings
        assert set(program) == {"def", "b", "For", "ns"}
        assert all(binding.kind == "module" for binding in program.values())

    def test_parameter_shadows_import(self):
        tree, scopes = _scopes(
            'import { block } from "million/react";\nfunction f(block) { return block(1); }\n'
        )
        use = _identifiers(tree, "block")[-1]
        binding = scopes.resolve(use, "block")
        assert binding is not None
        assert binding.kind == "param"

    def test_var_hoists_to_function_scope(self):
        tree, scopes = _scopes("function f() { if (x) { var y = 1; } return y; }")
        use = _identifiers(tree, "y")[-1]
        binding = scopes.resolve(use, "y")
        assert binding is not None
        assert binding.kind == "var"
        assert binding.scope.kind == "function"

    def test_let_binds_in_block_scope(self):
        tree, scopes = _scopes("function f() { if (x) { let y = 1; } return y; }")
        use = _identifiers(tree, "y")[-1]
        assert scopes.resolve(use, "y") is None

    def test_const_kind_recorded(self):
        tree, scopes = _scopes("const a = 1; let b = 2;")
        assert scopes.program.bindings["a"].kind == "const"
        assert scopes.program.bindings["b"].kind == "let"

    def test_function_declaration_binds_in_enclosing_scope(self):
        tree, scopes = _scopes("function block() {}\nblock();")
        assert scopes.program.bindings["block"].kind == "function"

    def test_named_function_expression_binds_inside_itself(self):
        tree, scopes = _scopes("const f = function inner() { return inner; };")
        assert "inner" not in scopes.program.bindings
        use = _identifiers(tree, "inner")[-1]
        binding = scopes.resolve(use, "inner")
        assert binding is not None
        assert binding.kind == "function"

    def test_class_declaration(self):
        tree, scopes = _scopes("class Widget {}")
        assert scopes.program.bindings["Widget"].kind == "class"

    def test_catch_parameter(self):
        tree, scopes = _scopes("try {} catch (err) { report(err); }")
        use = _identifiers(tree, "err")[-1]
        binding = scopes.resolve(use, "err")
        assert binding is not None
        assert binding.kind == "catch"

    def test_for_of_let_binds_in_loop(self):
        tree, scopes = _scopes("for (const item of items) { use(item); }\nitem;")
        uses = _identifiers(tree, "item")
        assert scopes.resolve(uses[1], "item") is not None
        assert scopes.resolve(uses[-1], "item") is None

    def test_redeclaration_last_write_wins(self):
        tree, scopes = _scopes("var a = 1; var a = 2;")
        declarations = _identifiers(tree, "a")
        assert scopes.program.bindings["a"] is scopes.declared_by(declarations[-1])

    def test_uids_follow_declaration_order(self):
        tree, scopes = _scopes("const a = 1; const b = 2;")
        bindings = scopes.program.bindings
        assert bindings["a"].uid < bindings["b"].uid


class TestPatterns:
    """Identifiers bound by destructuring patterns."""

    def test_destructuring(self):
        tree, scopes = _scopes("const { a, b: c, ...rest } = obj; const [d, , e = 1] = arr;")
        assert {"a", "c", "rest", "d", "e"} <= set(scopes.program.bindings)
        assert "b" not in scopes.program.bindings

    def test_binding_identifiers_of_none(self):
        assert binding_identifiers(None) == []

    def test_arrow_single_parameter(self):
        tree, scopes = _scopes("const f = x => x;")
        use = _identifiers(tree, "x")[-1]
        binding = scopes.resolve(use, "x")
        assert binding is not None
        assert binding.kind == "param"

    def test_typescript_parameters(self):
        tree, scopes = _scopes(
            "function f(block: Fn, opt?: number) { return block(opt); }", language="typescript"
        )
        use = _identifiers(tree, "block")[-1]
        binding = scopes.resolve(use, "block")
        assert binding is not None
        assert binding.kind == "param"


class TestGenerateUid:
    """Unique names never collide with anything spelled in the file."""

    def test_first_name_has_no_suffix(self):
        _, scopes = _scopes("const App = 1;")
        assert scopes.generate_uid("App") == "_App"

    def test_subsequent_names_count_up(self):
        _, scopes = _scopes("const App = 1;")
        assert [scopes.generate_uid("App") for _ in range(3)] == ["_App", "_App2", "_App3"]

    def test_existing_identifier_is_avoided(self):
        _, scopes = _scopes("const _props = 1;")
        assert scopes.generate_uid("props") == "_props2"

    def test_property_names_are_avoided(self):
        _, scopes = _scopes("obj._App = 1;")
        assert scopes.generate_uid("App") == "_App2"

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("_props3", "_props"),
            ("JSX_render", "_JSX_render"),
            ("", "_temp"),
            ("a-b", "_ab"),
        ],
    )
    def test_base_normalization(self, name, expected):
        _, scopes = _scopes("x;")
        assert scopes.generate_uid(name) == expected

    def test_default_base(self):
        _, scopes = _scopes("x;")
        assert scopes.generate_uid() == "_temp"

    def test_is_used(self):
        _, scopes = _scopes("const value = 1;")
        assert scopes.is_used("value")
        assert not scopes.is_used("_value")
        scopes.generate_uid("value")
        assert scopes.is_used("_value")
