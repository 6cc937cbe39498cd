"""Compilation metadata reported alongside the rewritten code.

All records are frozen snapshots taken while a file is compiled; none of
them hold tree-sitter nodes, so they stay valid after the tree is gone.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Slot:
    """One extracted dynamic value.

    Attributes:
        key: Positional key, ``v0``, ``v1``...
        source: Source text of the extracted expression.
        portal: Whether the value is a nested component rendered out of band.

    """

    key: str
    source: str
    portal: bool = False


@dataclass(frozen=True, slots=True)
class CompiledBlock:
    """A compiled-block declaration emitted for one UI tree.

    Attributes:
        name: Unique declared name (``_App``).
        slots: Extracted values in key order.
        portals: Keys of the portal slots, in key order.
        render_param: Name of the render function's slot parameter, ``None``
            when no slot was extracted.
        lineno: 1-based line of the original UI tree.
        col_offset: 0-based column of the original UI tree.

    """

    name: str
    slots: tuple[Slot, ...]
    portals: tuple[str, ...]
    render_param: str | None
    lineno: int
    col_offset: int

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(slot.key for slot in self.slots)


@dataclass(frozen=True, slots=True)
class HoistedComponent:
    """An expression-bodied component moved into its own declaration."""

    name: str
    lineno: int
    col_offset: int
