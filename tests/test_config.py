"""Tests for compiler configuration."""

from __future__ import annotations

import dataclasses

import pytest

from blockfold import (
    DEFAULT_CONFIG,
    HIDDEN_IMPORTS,
    IMPORTS,
    Compiler,
    CompilerConfig,
    ImportDefinition,
)


class TestCompilerConfig:
    def test_defaults(self):
        config = CompilerConfig()
        assert config.mode == "client"
        assert config.imports is IMPORTS
        assert config.hidden_imports is HIDDEN_IMPORTS
        assert config.inline_static_values is False
        assert config.compiled_flag == "_c"
        assert config.skip_markers == ("@million skip", "@million jsx-skip")

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.mode = "server"  # type: ignore[misc]

    def test_invalid_mode(self):
        with pytest.raises(ValueError, match="mode must be one of"):
            CompilerConfig(mode="edge")  # type: ignore[arg-type]

    def test_hidden_follows_mode(self):
        assert CompilerConfig(mode="server").hidden("compiledBlock") == ImportDefinition(
            "named", "million/react-server", "server", "compiledBlock"
        )

    def test_named_definition_requires_name(self):
        with pytest.raises(ValueError):
            ImportDefinition("named", "million/react", "client")

    def test_export_key(self):
        assert ImportDefinition("default", "lib", "client").export_key == "default"
        assert IMPORTS["block"]["client"].export_key == "named:block"


class TestCompilerOverrides:
    def test_default_config_shared(self):
        assert Compiler().config is DEFAULT_CONFIG

    def test_keyword_overrides(self):
        compiler = Compiler(mode="server", inline_static_values=True)
        assert compiler.config.mode == "server"
        assert compiler.config.inline_static_values is True
        assert DEFAULT_CONFIG.mode == "client"

    def test_overrides_apply_to_base(self):
        base = CompilerConfig(compiled_flag="_compiled")
        compiler = Compiler(base, mode="server")
        assert compiler.config.compiled_flag == "_compiled"
        assert compiler.config.mode == "server"

    def test_unknown_override(self):
        with pytest.raises(TypeError):
            Compiler(not_a_field=True)

    def test_custom_flag_and_default_name(self):
        compiler = Compiler(compiled_flag="_compiled", default_name="View")
        result = compiler.compile(
            'import { block } from "million/react";\nblock(() => <div />);\n'
        )
        assert "_View2._compiled = true;" in result.code

    def test_language_override(self):
        compiler = Compiler(language="tsx")
        result = compiler.compile("const x = (y as number);\n", filename="a.js")
        assert result.language == "tsx"


class TestCompileFile:
    def test_reads_and_detects_language(self, compiler, tmp_path):
        path = tmp_path / "App.tsx"
        path.write_text(
            'import { block } from "million/react";\n'
            "const App = block((props: Props) => <div>{props.x}</div>);\n",
            encoding="utf-8",
        )
        result = compiler.compile_file(path)
        assert result.language == "tsx"
        assert result.filename == str(path)
        assert [block.name for block in result.blocks] == ["_App"]
