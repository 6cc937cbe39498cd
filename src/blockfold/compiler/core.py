"""blockfold Compiler Core: the Compiler and per-file compilation.

The Compiler turns every recognized ``block(Component)`` call of a source
file into a compiled block. Uses a mixin-based design for maintainability.

Design Principles:
1. **Edits, not regeneration**: record offset edits, render once at the end;
   text no edit touches is emitted byte for byte
2. **Binding-based recognition**: calls are matched through lexical bindings,
   never by spelling
3. **Per-file state**: everything mutable lives in one `FileCompiler`, so a
   `Compiler` can be shared between threads

Pipeline:
    source ─▶ parse ─▶ build_scopes ─▶ BindingResolver ─▶ transforms ─▶ render

Example:
        >>> from blockfold import Compiler
        >>> result = Compiler().compile(
        ...     'import { block } from "million/react";\\n'
        ...     "const App = block((props) => <div>{props.x}</div>);\\n",
        ...     filename="App.jsx",
        ... )
        >>> [block.name for block in result.blocks]
        ['_App']

"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from blockfold.analysis import BindingResolver, build_scopes, iter_calls
from blockfold.compiler.edits import SourceEditor
from blockfold.compiler.transforms import TransformMixin
from blockfold.config import DEFAULT_CONFIG, CompilerConfig
from blockfold.parser import parse

if TYPE_CHECKING:
    from blockfold.compiler.metadata import CompiledBlock, HoistedComponent
    from blockfold.diagnostics import Diagnostic
    from blockfold.parser import SourceTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompileResult:
    """Output of compiling one file.

    Attributes:
        code: Rewritten source; identical to the input when nothing matched.
        blocks: Compiled-block declarations emitted, in emission order.
        hoisted: Components hoisted into their own declarations.
        diagnostics: Advisory diagnostics (deoptimizations).
        language: Grammar the file was parsed with.
        filename: File name passed to the compiler, if any.
        changed: Whether ``code`` differs from the input.

    """

    code: str
    blocks: tuple[CompiledBlock, ...] = ()
    hoisted: tuple[HoistedComponent, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    language: str = "javascript"
    filename: str | None = None
    changed: bool = False


class FileCompiler(TransformMixin):
    """Compilation state of one parsed file.

    Created by `Compiler.compile` for each file and discarded afterwards.
    Not thread-safe; never shared.

    Attributes:
        _config: Active configuration
        _tree: Parsed file
        _data: UTF-8 source bytes the tree's offsets refer to
        _scopes: Scopes, bindings and used names
        _resolver: Import bindings of the file
        _editor: Recorded edits
        _blocks: Compiled blocks emitted so far
        _hoisted: Components hoisted so far
        _diagnostics: Diagnostics recorded so far
        _hidden: Hidden export -> local name already imported

    """

    __slots__ = (
        "_blocks",
        "_config",
        "_data",
        "_diagnostics",
        "_editor",
        "_hidden",
        "_hoisted",
        "_resolver",
        "_scopes",
        "_tree",
    )

    def __init__(self, config: CompilerConfig, tree: SourceTree):
        self._config = config
        self._tree = tree
        self._data = tree.data
        self._scopes = build_scopes(tree.root, tree.data)
        self._resolver = BindingResolver(
            tree, self._scopes, registry=config.imports, mode=config.mode
        )
        self._editor = SourceEditor(tree.data)
        self._blocks: list[CompiledBlock] = []
        self._hoisted: list[HoistedComponent] = []
        self._diagnostics: list[Diagnostic] = []
        self._hidden: dict[str, str] = {}

    def run(self) -> None:
        """Visit every call expression once, in document order."""
        if not self._resolver.register_all():
            return
        for call in iter_calls(self._tree.root, self._data, (self._config.skip_annotation,)):
            self._transform_call(call)

    def result(self) -> CompileResult:
        tree = self._tree
        code = self._editor.render() if self._editor.changed else tree.source
        return CompileResult(
            code=code,
            blocks=tuple(self._blocks),
            hoisted=tuple(self._hoisted),
            diagnostics=tuple(self._diagnostics),
            language=tree.language,
            filename=tree.filename,
            changed=code != tree.source,
        )


class Compiler:
    """Compile ``block()`` components into compiled blocks.

    Holds only immutable configuration; one instance may compile many files,
    from several threads at once.

    Example:
            >>> compiler = Compiler(mode="server")
            >>> compiler.compile("const x = 1;\\n").changed
            False

    Configuration:
            >>> from blockfold import CompilerConfig
            >>> compiler = Compiler(CompilerConfig(inline_static_values=True))

    """

    __slots__ = ("_config",)

    def __init__(self, config: CompilerConfig | None = None, **overrides: Any) -> None:
        """Initialize with a configuration and optional field overrides.

        Args:
            config: Base configuration. Uses DEFAULT_CONFIG if not provided.
            **overrides: `CompilerConfig` fields replacing the base values.

        Raises:
            ValueError: ``mode`` is neither ``"client"`` nor ``"server"``.
            TypeError: An override names no `CompilerConfig` field.
        """
        base = config or DEFAULT_CONFIG
        self._config = replace(base, **overrides) if overrides else base

    @property
    def config(self) -> CompilerConfig:
        return self._config

    def compile(self, source: str, filename: str | None = None) -> CompileResult:
        """Compile one file's source text.

        Args:
            source: File contents.
            filename: Used to pick the grammar and in diagnostics.

        Returns:
            CompileResult with the rewritten code and metadata.

        Raises:
            ParseError: The source does not parse.
            LanguageNotAvailableError: The grammar is unknown or not installed.
        """
        tree = parse(source, language=self._config.language, filename=filename)
        file = FileCompiler(self._config, tree)
        file.run()
        result = file.result()
        logger.debug(
            "Compiled %s: %d blocks, %d hoisted, %d diagnostics",
            filename or "<source>",
            len(result.blocks),
            len(result.hoisted),
            len(result.diagnostics),
        )
        return result

    def compile_file(self, path: str | os.PathLike[str], encoding: str = "utf-8") -> CompileResult:
        """Read and compile a file; the path selects the grammar."""
        path = Path(path)
        return self.compile(path.read_text(encoding=encoding), filename=str(path))
