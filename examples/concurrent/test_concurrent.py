"""Tests for the concurrent compilation example."""

from blockfold import Compiler


class TestConcurrentApp:
    """Verify 8 threads compile correctly without cross-contamination."""

    def test_all_modules_compiled(self, example_app) -> None:
        assert len(example_app.results) == 8
        assert all(result.changed for result in example_app.results)

    def test_generated_names_per_module(self, example_app) -> None:
        """Names are unique per file; trailing digits are dropped from the base."""
        for i, result in enumerate(example_app.results):
            assert result.filename == f"Page{i}.jsx"
            assert [block.name for block in result.blocks] == ["_Page"]
            assert [hoisted.name for hoisted in result.hoisted] == ["_Page2"]

    def test_portals(self, example_app) -> None:
        for i, result in enumerate(example_app.results):
            (block,) = result.blocks
            assert [slot.source for slot in block.slots] == [
                "tags.map((tag) => <li>{tag}</li>)",
                f"<Sidebar{i} />",
            ]
            assert block.portals == ("v1",)

    def test_no_cross_contamination(self, example_app) -> None:
        """Each module should only mention its own component."""
        for i, result in enumerate(example_app.results):
            for j in range(8):
                if j != i:
                    assert f"page-{j}" not in result.code
                    assert f"Sidebar{j}" not in result.code

    def test_matches_sequential_compilation(self, example_app) -> None:
        sequential = Compiler()
        for result, source in zip(example_app.results, example_app.modules.values()):
            assert sequential.compile(source, filename=result.filename).code == result.code

    def test_outputs_recompile_unchanged(self, example_app, example_results) -> None:
        assert len(example_results) == 8
        for result in example_results:
            again = example_app.compiler.compile(result.code, filename=result.filename)
            assert not again.changed
