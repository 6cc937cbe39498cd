"""Offset-based source editing.

The compiler never regenerates code from the tree. Every rewrite is recorded
as an `Edit` against byte offsets of the original source, and the output is
produced in one pass by `SourceEditor.render`. Text no edit touches is
emitted byte for byte.

Moved code is expressed with `Span` parts: a span re-renders a range of the
original source at render time, so edits recorded after the span was created
(inner block calls compiled later in the traversal) still show up in the
moved copy.

Ordering Rules:
    - Edits are applied left to right by start offset.
    - At the same offset, insertions come before replacements, wider
      replacements before narrower ones, overlay edits before registered
      ones, then creation order.
    - An edit starting inside an already applied replacement is dropped
      from that rendering; the replacement's own spans render it instead.

Example:
        >>> editor = SourceEditor(b"f(a, b)")
        >>> _ = editor.replace(2, 3, ["x"])
        >>> _ = editor.insert(0, ["g();\\n"])
        >>> editor.render()
        'g();\\nf(x, b)'

"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tree_sitter import Node


@dataclass(frozen=True, slots=True)
class Span:
    """A range of the original source, rendered with the edits inside it.

    Attributes:
        start: First byte offset.
        end: Byte offset past the last byte.
        overlay: Unregistered edits applied only to this rendering; they take
            precedence over registered edits covering the same range.
        exclude: A registered edit this rendering ignores (the edit that
            replaces the spanned range itself).

    """

    start: int
    end: int
    overlay: tuple[Edit, ...] = ()
    exclude: Edit | None = None


Part = str | Span


@dataclass(eq=False, slots=True)
class Edit:
    """Replace ``[start, end)`` with *parts*; ``start == end`` inserts."""

    start: int
    end: int
    parts: list[Part]
    seq: int
    overlay: bool = False

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end


def _sort_key(edit: Edit) -> tuple[int, int, int, int, int]:
    return (
        edit.start,
        0 if edit.is_insertion else 1,
        -edit.end,
        0 if edit.overlay else 1,
        edit.seq,
    )


@dataclass(slots=True)
class SourceEditor:
    """Records edits against one source buffer and renders the result."""

    data: bytes
    edits: list[Edit] = field(default_factory=list)
    _seq: int = field(default=0, init=False, repr=False)
    _leading: int = field(default=0, init=False, repr=False)

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def replace(self, start: int, end: int, parts: Iterable[Part]) -> Edit:
        """Register a replacement of ``[start, end)``."""
        edit = Edit(start, end, list(parts), self._next_seq())
        self.edits.append(edit)
        return edit

    def replace_node(self, node: Node, parts: Iterable[Part]) -> Edit:
        return self.replace(node.start_byte, node.end_byte, parts)

    def insert(self, offset: int, parts: Iterable[Part], *, leading: bool = False) -> Edit:
        """Register an insertion at *offset*.

        With ``leading=True`` the insertion goes before every other insertion
        at that offset, including ones recorded earlier.
        """
        if leading:
            self._leading -= 1
            seq = self._leading
        else:
            seq = self._next_seq()
        edit = Edit(offset, offset, list(parts), seq)
        self.edits.append(edit)
        return edit

    def overlay(self, node: Node, parts: Iterable[Part]) -> Edit:
        """Build an unregistered edit for use in a `Span` overlay."""
        return Edit(node.start_byte, node.end_byte, list(parts), self._next_seq(), overlay=True)

    def span(
        self,
        node: Node,
        overlay: Sequence[Edit] = (),
        exclude: Edit | None = None,
    ) -> Span:
        return Span(node.start_byte, node.end_byte, tuple(overlay), exclude)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def changed(self) -> bool:
        return bool(self.edits)

    def render(self) -> str:
        """Apply every registered edit to the whole buffer."""
        out: list[bytes] = []
        self._render_range(0, len(self.data), self.edits, out, boundaries=True)
        return b"".join(out).decode("utf-8")

    def render_span(self, span: Span) -> str:
        out: list[bytes] = []
        self._write_span(span, out)
        return b"".join(out).decode("utf-8")

    def _write_span(self, span: Span, out: list[bytes]) -> None:
        edits = [edit for edit in self.edits if edit is not span.exclude]
        edits.extend(span.overlay)
        self._render_range(span.start, span.end, edits, out, boundaries=False)

    def _render_range(
        self,
        start: int,
        end: int,
        edits: Iterable[Edit],
        out: list[bytes],
        *,
        boundaries: bool,
    ) -> None:
        selected = []
        for edit in edits:
            if edit.start < start or edit.end > end:
                continue
            # Insertions at a span's edges belong to the surrounding code
            if not boundaries and edit.is_insertion and edit.start in (start, end):
                continue
            selected.append(edit)
        selected.sort(key=_sort_key)

        pos = start
        for edit in selected:
            if edit.start < pos:
                continue
            out.append(self.data[pos : edit.start])
            for part in edit.parts:
                if isinstance(part, Span):
                    self._write_span(part, out)
                else:
                    out.append(part.encode("utf-8"))
            pos = edit.end
        out.append(self.data[pos:end])
