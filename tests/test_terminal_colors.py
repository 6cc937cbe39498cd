"""Tests for terminal color utilities used by diagnostics."""

from blockfold import terminal


class TestColorDetection:
    """Test terminal color detection logic."""

    def test_should_use_colors_respects_no_color(self, monkeypatch):
        """NO_COLOR disables colors when FORCE_COLOR is unset."""
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setenv("NO_COLOR", "1")
        assert not terminal._should_use_colors()

    def test_should_use_colors_respects_force_color(self, monkeypatch):
        """FORCE_COLOR overrides NO_COLOR."""
        monkeypatch.setenv("NO_COLOR", "1")
        monkeypatch.setenv("FORCE_COLOR", "1")
        assert terminal._should_use_colors()

    def test_supports_color_reads_cached_decision(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", False)
        assert not terminal.supports_color()
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        assert terminal.supports_color()

    def test_colorize_returns_plain_when_disabled(self, monkeypatch):
        """colorize returns plain text when colors are disabled."""
        monkeypatch.setattr(terminal, "_USE_COLORS", False)
        result = terminal.colorize("Error", "red", "bold")
        assert result == "Error"
        assert "\033[" not in result

    def test_colorize_adds_codes_when_enabled(self, monkeypatch):
        """colorize adds ANSI codes when enabled."""
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        result = terminal.colorize("Error", "red", "bold")
        assert "\033[31m" in result  # red
        assert "\033[1m" in result  # bold
        assert result.endswith("\033[0m")

    def test_colorize_without_styles_is_plain(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        assert terminal.colorize("Error") == "Error"

    def test_strip_colors_removes_ansi_codes(self):
        """strip_colors removes all ANSI escape sequences."""
        colored = "\033[31m\033[1mError\033[0m"
        plain = terminal.strip_colors(colored)
        assert plain == "Error"


class TestSemanticHelpers:
    """Test semantic color helper functions."""

    def test_error_code_formatting(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        result = terminal.error_code("B-DEO-001")
        assert "B-DEO-001" in result
        assert "\033[91m" in result

    def test_location_formatting(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        result = terminal.location("App.jsx:4:19")
        assert "App.jsx:4:19" in result
        assert "\033[36m" in result

    def test_hint_formatting(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        result = terminal.hint("hint:")
        assert "hint:" in result
        assert "\033[92m" in result

    def test_warning_mark_formatting(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", True)
        result = terminal.warning_mark("Async components cannot be compiled")
        assert "\033[95m" in result

    def test_helpers_plain_when_disabled(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", False)
        for helper in (
            terminal.error_code,
            terminal.location,
            terminal.hint,
            terminal.warning_mark,
            terminal.line_number,
            terminal.error_line,
            terminal.dim_text,
        ):
            assert helper("text") == "text"


class TestSourceLineFormatting:
    """Test numbered source line rendering."""

    def test_error_line_has_marker(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", False)
        assert terminal.format_source_line(4, "const x = 1;", is_error=True) == ">  4 | const x = 1;"

    def test_context_line_has_no_marker(self, monkeypatch):
        monkeypatch.setattr(terminal, "_USE_COLORS", False)
        assert terminal.format_source_line(12, "foo();") == "  12 | foo();"
