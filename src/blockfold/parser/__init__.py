"""Source front end: parse JavaScript/TypeScript files with tree-sitter.

The compiler never rebuilds source text from the tree. It keeps the parsed
bytes next to the tree and records edits against byte offsets, so every
node's text is a slice of `SourceTree.data`.
"""

from __future__ import annotations

from dataclasses import dataclass

from tree_sitter import Node, Parser, Tree

from blockfold.exceptions import ErrorCode
from blockfold.parser.errors import ParseError
from blockfold.parser.languages import (
    available_languages,
    clear_language_cache,
    get_language,
    language_for_filename,
    normalize_language,
)


@dataclass(frozen=True, slots=True)
class SourceTree:
    """A parsed source file.

    Attributes:
        source: Original text.
        data: UTF-8 bytes the tree's offsets refer to.
        tree: tree-sitter syntax tree.
        language: Grammar name used to parse.
        filename: Optional file name for diagnostics.
    """

    source: str
    data: bytes
    tree: Tree
    language: str
    filename: str | None = None

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        """Source text of *node*."""
        return self.data[node.start_byte : node.end_byte].decode("utf-8")

    def position(self, node: Node) -> tuple[int, int]:
        """1-based line and 0-based column of *node*'s first character."""
        row, _ = node.start_point
        line_start = self.data.rfind(b"\n", 0, node.start_byte) + 1
        column = len(self.data[line_start : node.start_byte].decode("utf-8"))
        return row + 1, column


def parse(source: str, language: str | None = None, filename: str | None = None) -> SourceTree:
    """Parse *source* into a `SourceTree`.

    Args:
        source: File contents.
        language: Grammar name; detected from *filename* when omitted.
        filename: Used for grammar detection and error locations.

    Raises:
        ParseError: The source contains syntax errors.
        LanguageNotAvailableError: The grammar is unknown or not installed.
    """
    name = normalize_language(language) if language else language_for_filename(filename)
    parser = Parser(get_language(name))
    data = source.encode("utf-8")
    tree = parser.parse(data)
    result = SourceTree(source=source, data=data, tree=tree, language=name, filename=filename)
    if tree.root_node.has_error:
        raise _syntax_error(result)
    return result


def _syntax_error(result: SourceTree) -> ParseError:
    stack = [result.root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            lineno, column = result.position(node)
            if node.is_missing:
                return ParseError(
                    f"Missing {node.type!r}",
                    lineno,
                    column,
                    source=result.source,
                    filename=result.filename,
                    code=ErrorCode.MISSING_TOKEN,
                )
            return ParseError(
                "Unexpected syntax",
                lineno,
                column,
                source=result.source,
                filename=result.filename,
            )
        # Depth-first, leftmost error first
        stack.extend(reversed([child for child in node.children if child.has_error]))
    lineno, column = result.position(result.root)
    return ParseError("Unexpected syntax", lineno, column, result.source, result.filename)


__all__ = [
    "ParseError",
    "SourceTree",
    "available_languages",
    "clear_language_cache",
    "get_language",
    "language_for_filename",
    "normalize_language",
    "parse",
]
