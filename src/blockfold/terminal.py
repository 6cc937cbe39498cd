"""Terminal color helpers for compiler diagnostics.

ANSI styling with TTY detection. Honors NO_COLOR (https://no-color.org/)
and FORCE_COLOR. The decision is taken once at import time.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_CODES = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "yellow": "\033[33m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_magenta": "\033[95m",
}

Style = Literal[
    "reset", "bold", "dim", "red", "yellow", "magenta", "cyan",
    "bright_red", "bright_green", "bright_magenta",
]

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stderr.isatty()


_USE_COLORS = _should_use_colors()


def supports_color() -> bool:
    """Whether diagnostics are styled."""
    return _USE_COLORS


def colorize(text: str, *styles: Style) -> str:
    """Wrap *text* in the given ANSI styles when colors are enabled."""
    if not _USE_COLORS or not styles:
        return text
    prefix = "".join(_CODES[style] for style in styles)
    return f"{prefix}{text}{_CODES['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI escape sequences from *text*."""
    return _ANSI_ESCAPE.sub("", text)


def warning_mark(text: str) -> str:
    return colorize(text, "bright_magenta", "bold")


def error_code(text: str) -> str:
    return colorize(text, "bright_red", "bold")


def location(text: str) -> str:
    return colorize(text, "cyan")


def line_number(text: str) -> str:
    return colorize(text, "yellow")


def error_line(text: str) -> str:
    return colorize(text, "bright_red")


def hint(text: str) -> str:
    return colorize(text, "bright_green")


def dim_text(text: str) -> str:
    return colorize(text, "dim")


def format_source_line(lineno: int, content: str, is_error: bool = False) -> str:
    """Format one numbered source line, marking the offending one with ``>``."""
    marker = ">" if is_error else " "
    number = line_number(f"{marker}{lineno:>3}")
    body = error_line(content) if is_error else dim_text(content)
    return f"{number} | {body}"
