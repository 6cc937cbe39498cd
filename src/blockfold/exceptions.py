"""Exceptions and source snippets for blockfold.

Exception Hierarchy:
BlockfoldError (base)
├── ParseError                  # Source does not parse; the file fails
└── LanguageNotAvailableError   # Unknown language or grammar not installed

Only these environment-level failures leave the compiler. Conditions local
to one call site (non-matching calls, deoptimizations) are absorbed by the
pass and surface as `Diagnostic` values instead, see `blockfold.diagnostics`.

Example:
    ```
    B-PAR-001: Unexpected syntax
      --> src/App.jsx:3:12
       |
      3 | const App = block(() => <div>;
       |                              ^
       |
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from blockfold import terminal

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable codes for blockfold errors and diagnostics.

    Format: B-{CATEGORY}-{NUMBER}
    Categories: PAR (parser), LNG (language loading), DEO (deoptimization)
    """

    # Parser errors (B-PAR-xxx)
    SYNTAX_ERROR = "B-PAR-001"
    MISSING_TOKEN = "B-PAR-002"

    # Language loading (B-LNG-xxx)
    UNKNOWN_LANGUAGE = "B-LNG-001"
    GRAMMAR_NOT_INSTALLED = "B-LNG-002"

    # Deoptimizations (B-DEO-xxx)
    DEOPT_ASYNC_COMPONENT = "B-DEO-001"
    DEOPT_GENERATOR_COMPONENT = "B-DEO-002"

    @property
    def category(self) -> str:
        """Error category: ``parser``, ``language`` or ``deopt``."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "parser",
            "LNG": "language",
            "DEO": "deopt",
        }.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Source lines around a reported location.

    Attributes:
        lines: ``(line_number, content)`` pairs around the location.
        error_line: 1-based line of the location.
        column: Optional 0-based column for the caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        parts: list[str] = [terminal.dim_text("     |")]
        for lineno, content in self.lines:
            parts.append(terminal.format_source_line(lineno, content, lineno == self.error_line))
        if self.column is not None:
            caret = " " * self.column + "^"
            parts.append(f"{terminal.dim_text('     |')} {terminal.error_line(caret)}")
        parts.append(terminal.dim_text("     |"))
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet from file source.

    Args:
        source: Full source text.
        error_line: 1-based line number to highlight.
        context_lines: Lines shown before and after the highlighted one.
        column: Optional column offset for the caret pointer.
    """
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


def format_location(filename: str | None, lineno: int | None, col_offset: int | None) -> str:
    """``file:line:col`` with missing parts dropped."""
    location = filename or "<source>"
    if lineno:
        location += f":{lineno}"
        if col_offset is not None:
            location += f":{col_offset + 1}"
    return location


class BlockfoldError(Exception):
    """Base exception for all blockfold errors.

    Attributes:
        code: Optional ErrorCode identifying the failure.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format as ``CODE: message`` without traceback noise."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class LanguageNotAvailableError(BlockfoldError):
    """The requested grammar is unknown or its package is not installed.

    Example:
            >>> get_language("coffeescript")
        LanguageNotAvailableError: Unknown language 'coffeescript'

    """

    code: ErrorCode | None = ErrorCode.UNKNOWN_LANGUAGE

    def __init__(self, language: str, reason: str | None = None, code: ErrorCode | None = None):
        self.language = language
        self.reason = reason
        if code is not None:
            self.code = code
        message = f"Unknown language {language!r}"
        if reason:
            message = f"Language {language!r} is not available: {reason}"
        super().__init__(message)
