"""Parser error handling for blockfold.

Provides ParseError with source context, pointing at the first ERROR or
MISSING node tree-sitter produced for the file.
"""

from __future__ import annotations

from blockfold.exceptions import BlockfoldError, ErrorCode, format_location


class ParseError(BlockfoldError):
    """Source text that tree-sitter could not parse cleanly.

    Displays the offending line with a caret under the error column, in the
    same layout as deoptimization diagnostics.
    """

    code: ErrorCode | None = ErrorCode.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        lineno: int,
        col_offset: int,
        source: str | None = None,
        filename: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source = source
        self.filename = filename
        if code is not None:
            self.code = code
        super().__init__(self._format())

    def _format(self) -> str:
        location = format_location(self.filename, self.lineno, self.col_offset)
        header = f"Parse Error: {self.message}\n  --> {location}"
        if not self.source:
            return header
        lines = self.source.splitlines()
        if not 0 < self.lineno <= len(lines):
            return header
        pointer = " " * self.col_offset + "^"
        return f"{header}\n   |\n{self.lineno:>3} | {lines[self.lineno - 1]}\n   | {pointer}"
