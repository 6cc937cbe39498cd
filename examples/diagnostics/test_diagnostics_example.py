"""Tests for the diagnostics example."""

from blockfold import ErrorCode


class TestDiagnosticsApp:
    """Verify deoptimizations are reported and the rest compiles."""

    def test_codes(self, example_app) -> None:
        assert [d.code for d in example_app.diagnostics] == [
            ErrorCode.DEOPT_ASYNC_COMPONENT,
            ErrorCode.DEOPT_GENERATOR_COMPONENT,
        ]

    def test_compact_messages(self, example_app) -> None:
        assert example_app.compact == [
            "B-DEO-001: Async components cannot be compiled into blocks (src/Profile.jsx:3:23)",
            "B-DEO-002: Generator components cannot be compiled into blocks (src/Profile.jsx:5:20)",
        ]

    def test_deoptimized_calls_are_unwrapped(self, example_app) -> None:
        code = example_app.result.code
        assert "const Profile = async ({ id }) => <section>{await load(id)}</section>;" in code
        assert "const Feed = function* Feed() {\n  yield <ul />;\n};" in code

    def test_rest_of_file_compiles(self, example_app) -> None:
        assert [block.name for block in example_app.result.blocks] == ["_Badge"]

    def test_parse_error(self, example_app) -> None:
        error = example_app.parse_error
        assert error is not None
        assert error.filename == "Broken.jsx"
        assert error.code.category == "parser"

    def test_output_recompiles_without_diagnostics(self, example_app, example_results) -> None:
        (result,) = example_results
        again = example_app.compiler.compile(result.code, filename=result.filename)
        assert again.code == result.code
        assert again.diagnostics == ()
