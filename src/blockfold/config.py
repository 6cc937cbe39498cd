"""Compiler configuration.

Immutable settings shared by every file a `Compiler` compiles. Override
individual fields with `dataclasses.replace` or with keyword arguments to
`Compiler`:

    >>> from blockfold import Compiler
    >>> compiler = Compiler(mode="server", inline_static_values=True)
    >>> compiler.config.mode
    'server'

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from blockfold._types import MODES
from blockfold.utils.constants import (
    COMPILED_FLAG,
    DEFAULT_NAME,
    HIDDEN_IMPORTS,
    IMPORTS,
    JSX_SKIP_ANNOTATION,
    SKIP_ANNOTATION,
)

if TYPE_CHECKING:
    from blockfold._types import ImportDefinition, ImportRegistry, Mode


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    """Configuration for the block extraction pass.

    Attributes:
        mode: ``"client"`` or ``"server"``; selects which runtime module
            definitions are recognized and emitted.
        imports: Exports recognized in user code (``block``, ``For``).
        hidden_imports: Exports only the compiler emits (``compiledBlock``).
        skip_annotation: Comment marker meaning "never compile this subtree".
        jsx_skip_annotation: Comment marker written on generated elements.
        inline_static_values: Keep guaranteed literals inside templates
            instead of extracting them into slots.
        compiled_flag: Property set to ``true`` on hoisted components.
        default_name: Descriptive name used when no declaration names a tree.
        language: Grammar override; detected from the filename when ``None``.
        mute_diagnostics: Record diagnostics without logging them.

    """

    mode: Mode = "client"
    imports: ImportRegistry = field(default_factory=lambda: IMPORTS)
    hidden_imports: ImportRegistry = field(default_factory=lambda: HIDDEN_IMPORTS)
    skip_annotation: str = SKIP_ANNOTATION
    jsx_skip_annotation: str = JSX_SKIP_ANNOTATION
    inline_static_values: bool = False
    compiled_flag: str = COMPILED_FLAG
    default_name: str = DEFAULT_NAME
    language: str | None = None
    mute_diagnostics: bool = False

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {self.mode!r}")

    @property
    def skip_markers(self) -> tuple[str, ...]:
        """Markers that exclude a call or UI tree from compilation."""
        return (self.skip_annotation, self.jsx_skip_annotation)

    def hidden(self, export: str) -> ImportDefinition:
        """Definition of a compiler-emitted export for the active mode."""
        return self.hidden_imports[export][self.mode]


# Default configuration instance
DEFAULT_CONFIG = CompilerConfig()
