"""Block compiler: rewrite ``block()`` calls into compiled blocks.

Modules:
- core: Compiler, FileCompiler and CompileResult
- edits: offset-based source editor
- metadata: compiled block, slot and hoisting records
- transforms: call dispatch, UI tree extraction, imports, deopt
"""

from __future__ import annotations

from blockfold.compiler.core import CompileResult, Compiler, FileCompiler
from blockfold.compiler.edits import Edit, SourceEditor, Span
from blockfold.compiler.metadata import CompiledBlock, HoistedComponent, Slot

__all__ = [
    "CompileResult",
    "CompiledBlock",
    "Compiler",
    "Edit",
    "FileCompiler",
    "HoistedComponent",
    "Slot",
    "SourceEditor",
    "Span",
]
