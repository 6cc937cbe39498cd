"""Tests for the offset-based source editor."""

from __future__ import annotations

from blockfold.compiler import SourceEditor, Span
from blockfold.compiler.edits import Edit


def _editor(text: str) -> SourceEditor:
    return SourceEditor(text.encode("utf-8"))


class TestRendering:
    """Applying registered edits to the whole buffer."""

    def test_no_edits_is_identity(self):
        editor = _editor("const a = 1;\n")
        assert not editor.changed
        assert editor.render() == "const a = 1;\n"

    def test_replace(self):
        editor = _editor("f(a, b)")
        editor.replace(2, 3, ["x"])
        assert editor.changed
        assert editor.render() == "f(x, b)"

    def test_insert(self):
        editor = _editor("b;")
        editor.insert(0, ["a;\n"])
        assert editor.render() == "a;\nb;"

    def test_insertions_keep_creation_order(self):
        editor = _editor("z;")
        editor.insert(0, ["x;"])
        editor.insert(0, ["y;"])
        assert editor.render() == "x;y;z;"

    def test_leading_insertion_goes_first(self):
        editor = _editor("z;")
        editor.insert(0, ["x;"])
        editor.insert(0, ["import;"], leading=True)
        assert editor.render() == "import;x;z;"

    def test_insertion_before_replacement_at_same_offset(self):
        editor = _editor("abc")
        editor.replace(0, 1, ["X"])
        editor.insert(0, ["<"])
        assert editor.render() == "<Xbc"

    def test_nested_replacement_is_dropped(self):
        editor = _editor("abcdef")
        editor.replace(1, 5, ["-"])
        editor.replace(2, 3, ["!"])
        assert editor.render() == "a-f"

    def test_wider_replacement_wins_at_same_start(self):
        editor = _editor("abcdef")
        editor.replace(1, 2, ["!"])
        editor.replace(1, 5, ["-"])
        assert editor.render() == "a-f"

    def test_multibyte_text(self):
        editor = _editor("é(a)")
        editor.replace(3, 4, ["ü"])
        assert editor.render() == "é(ü)"


class TestSpans:
    """Moved copies of the original source."""

    def test_span_renders_inner_edits(self):
        editor = _editor("f(a + b);")
        editor.replace(2, 3, ["x"])
        editor.insert(0, ["const c = ", Span(2, 7), ";\n"])
        assert editor.render() == "const c = x + b;\nf(x + b);"

    def test_span_sees_edits_recorded_later(self):
        editor = _editor("f(a);")
        editor.insert(0, [Span(0, 4), ";\n"])
        editor.replace(2, 3, ["late"])
        assert editor.render() == "f(late);\nf(late);"

    def test_span_excludes_edits_at_its_edges(self):
        editor = _editor("ab")
        editor.insert(0, ["<"])
        editor.insert(2, [">"])
        editor.insert(1, ["|"])
        assert editor.render_span(Span(0, 2)) == "a|b"

    def test_exclude(self):
        editor = _editor("f(a);")
        call = editor.replace(0, 4, ["g"])
        assert editor.render_span(Span(0, 4, exclude=call)) == "f(a)"
        assert editor.render() == "g;"

    def test_overlay_takes_precedence(self):
        editor = _editor("f(a);")
        editor.replace(2, 3, ["registered"])
        overlay = Edit(2, 3, ["overlay"], seq=99, overlay=True)
        assert editor.render_span(Span(0, 4, overlay=(overlay,))) == "f(overlay)"
        assert editor.render() == "f(registered);"

    def test_self_referencing_replacement(self):
        editor = _editor("<div>{x}</div>")
        root = editor.replace(0, 14, [])
        root.parts.extend(["<B v0={", Span(6, 7, exclude=root), "} />"])
        assert editor.render() == "<B v0={x} />"
