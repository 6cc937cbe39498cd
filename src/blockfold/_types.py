"""Shared value types for blockfold.

Import definitions describe one exported symbol of the block runtime
(``block``, ``For``, ``compiledBlock``) for one compilation mode. They come
from a static registry, never from user code, and compare by value.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

Mode = Literal["client", "server"]
ExportKind = Literal["default", "named"]

MODES: tuple[Mode, ...] = ("client", "server")


@dataclass(frozen=True, slots=True)
class ImportDefinition:
    """One recognized export of the runtime.

    Attributes:
        kind: ``"default"`` for a default export, ``"named"`` otherwise.
        source: Module specifier the export is imported from.
        mode: Compilation mode this definition belongs to.
        name: Export name for named exports, ``None`` for default exports.

    """

    kind: ExportKind
    source: str
    mode: Mode
    name: str | None = None

    def __post_init__(self) -> None:
        if self.kind == "named" and not self.name:
            raise ValueError("named import definitions require a name")

    @property
    def export_key(self) -> str:
        """``default`` or ``named:<name>``, the key used in diagnostics."""
        if self.kind == "default":
            return "default"
        return f"named:{self.name}"


# export id -> mode -> definition
ImportRegistry = Mapping[str, Mapping[Mode, ImportDefinition]]


def named(name: str, client: str, server: str) -> dict[Mode, ImportDefinition]:
    """Build the per-mode definitions of a named export."""
    return {
        "client": ImportDefinition("named", client, "client", name),
        "server": ImportDefinition("named", server, "server", name),
    }


def default(client: str, server: str) -> dict[Mode, ImportDefinition]:
    """Build the per-mode definitions of a default export."""
    return {
        "client": ImportDefinition("default", client, "client"),
        "server": ImportDefinition("default", server, "server"),
    }
