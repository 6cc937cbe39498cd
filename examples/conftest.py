"""Pytest configuration for the blockfold examples.

Every example directory holds an ``app.py`` that compiles JSX modules when
it is imported, plus a test module checking what it produced.

Fixtures:
    example_app: the sibling app.py, executed in a fresh module namespace.
    example_results: every CompileResult the app produced, in order.
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from types import ModuleType

import pytest

from blockfold import CompileResult


@pytest.fixture
def example_app(request: pytest.FixtureRequest):
    """Run the app.py next to the test file and return its module.

    Apps may call ``logging.basicConfig``; handlers they add to the root
    logger are removed again after the test.
    """
    app_path = Path(request.path).parent / "app.py"
    spec = importlib.util.spec_from_file_location(
        f"blockfold_example_{app_path.parent.name}", app_path
    )
    assert spec is not None and spec.loader is not None

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
        yield module
    finally:
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
        root.setLevel(level)


@pytest.fixture
def example_results(example_app: ModuleType) -> list[CompileResult]:
    """Compile results exposed by the app as ``result`` or ``results``."""
    results = list(getattr(example_app, "results", ()))
    if isinstance(getattr(example_app, "result", None), CompileResult):
        results.insert(0, example_app.result)
    assert results, f"{example_app.__file__} exposes no compile results"
    assert all(isinstance(result, CompileResult) for result in results)
    return results
