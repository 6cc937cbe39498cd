"""Pytest configuration and fixtures for blockfold tests."""

from __future__ import annotations

import pytest

from blockfold import Compiler, parse
from blockfold.analysis import BindingResolver, build_scopes

BLOCK_IMPORT = 'import { block } from "million/react";\n'
HIDDEN_IMPORT = 'import { compiledBlock as _compiledBlock } from "million/react";\n'


@pytest.fixture
def compiler():
    """Create a Compiler with the default configuration."""
    return Compiler()


@pytest.fixture
def server_compiler():
    """Create a Compiler in server mode."""
    return Compiler(mode="server")


@pytest.fixture
def inline_compiler():
    """Create a Compiler that keeps guaranteed literals inline."""
    return Compiler(inline_static_values=True)


@pytest.fixture
def resolve():
    """Parse source and return a resolver with every import registered."""

    def _resolve(source: str, **kwargs) -> BindingResolver:
        tree = parse(source, language=kwargs.pop("language", None))
        resolver = BindingResolver(tree, build_scopes(tree.root, tree.data), **kwargs)
        resolver.register_all()
        return resolver

    return _resolve


def find_nodes(root, node_type: str) -> list:
    """Every node of *node_type* under *root*, in document order."""
    found = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == node_type:
            found.append(node)
        stack.extend(reversed(node.children))
    return found


def assert_unchanged(result, source: str) -> None:
    """Assert the compile result is byte-identical to its input.

    Args:
        result: CompileResult to check.
        source: The compiled input.
    """
    assert result.code == source, (
        f"Output differs from input:\n  Input: {source!r}\n  Output: {result.code!r}"
    )
    assert not result.changed
    assert result.blocks == ()


def assert_contains(code: str, *expected_parts: str) -> None:
    """Assert compiled code contains all expected parts.

    Args:
        code: The compiled output.
        expected_parts: Strings that should all be present in the output.
    """
    for part in expected_parts:
        assert part in code, (
            f"Compiled output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {code!r}"
        )
