"""Advisory diagnostics produced during compilation.

Diagnostics never abort compilation. The compiler collects them on the
`CompileResult` and, unless muted, logs their compact form at WARNING.

Example:
    ```
    B-DEO-001: Async components cannot be compiled into blocks
      --> src/App.jsx:4:19
         |
       3 | import { block } from "million/react";
    >  4 | const App = block(async () => <div />);
         |                   ^
         |
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from blockfold import terminal
from blockfold.exceptions import ErrorCode, SourceSnippet, build_source_snippet, format_location

if TYPE_CHECKING:
    from tree_sitter import Node

    from blockfold.parser import SourceTree


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One advisory message tied to a source location.

    Attributes:
        message: Human-readable description.
        code: Searchable error code.
        lineno: 1-based line of the offending node.
        col_offset: 0-based column of the offending node.
        filename: File the node belongs to, if known.
        snippet: Source lines around the location.
        hint: Optional suggestion for the user.

    """

    message: str
    code: ErrorCode
    lineno: int
    col_offset: int
    filename: str | None = None
    snippet: SourceSnippet | None = None
    hint: str | None = None

    @classmethod
    def at(
        cls,
        tree: SourceTree,
        node: Node,
        message: str,
        code: ErrorCode,
        hint: str | None = None,
    ) -> Diagnostic:
        """Build a diagnostic pointing at *node*."""
        lineno, column = tree.position(node)
        return cls(
            message=message,
            code=code,
            lineno=lineno,
            col_offset=column,
            filename=tree.filename,
            snippet=build_source_snippet(tree.source, lineno, column=column),
            hint=hint,
        )

    @property
    def location(self) -> str:
        return format_location(self.filename, self.lineno, self.col_offset)

    def format_compact(self) -> str:
        """Single line: ``CODE: message (file:line:col)``."""
        return f"{self.code.value}: {self.message} ({self.location})"

    def format(self) -> str:
        """Multi-line rendering with the source snippet and hint."""
        parts = [
            f"{terminal.error_code(self.code.value)}: {terminal.warning_mark(self.message)}",
            f"  --> {terminal.location(self.location)}",
        ]
        if self.snippet is not None:
            parts.append(self.snippet.format())
        if self.hint:
            parts.append(f"  {terminal.hint('hint:')} {self.hint}")
        return "\n".join(parts)

    def __str__(self) -> str:
        return self.format_compact()
