"""Property-based tests for block compilation using Hypothesis.

Generated JSX trees check the ordering and stability guarantees of the
extraction pass over shapes no hand-written test covers.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from blockfold import Compiler

from .strategies import GeneratedTree, block_module, component_element, structural_element

_COMPILER = Compiler()


class TestExtractionProperties:
    """Slots follow source order and match the generated tree."""

    @given(tree=structural_element())
    @settings(max_examples=150)
    def test_slots_in_source_order(self, tree):
        result = _COMPILER.compile(block_module(tree))
        (block,) = result.blocks
        assert tuple(slot.source for slot in block.slots) == tree.slots
        assert block.keys == tuple(f"v{i}" for i in range(len(tree.slots)))

    @given(tree=structural_element())
    @settings(max_examples=150)
    def test_portal_count(self, tree):
        (block,) = _COMPILER.compile(block_module(tree)).blocks
        assert len(block.portals) == tree.portals
        assert all(slot.portal == (slot.key in block.portals) for slot in block.slots)

    @given(tree=structural_element())
    @settings(max_examples=100)
    def test_replacement_passes_every_slot(self, tree):
        result = _COMPILER.compile(block_module(tree))
        (block,) = result.blocks
        expected = "".join(f" {slot.key}={{{slot.source}}}" for slot in block.slots)
        assert f"/*@million jsx-skip*/<{block.name}{expected} />" in result.code

    @given(tree=component_element())
    def test_component_children_are_portals(self, tree):
        wrapped = GeneratedTree(f"<div>{tree.source}</div>", tree.slots, tree.portals)
        (block,) = _COMPILER.compile(block_module(wrapped)).blocks
        assert block.portals == ("v0",)
        assert block.slots[0].source == tree.source


class TestStability:
    """Compilation is deterministic and idempotent."""

    @given(tree=structural_element())
    @settings(max_examples=100)
    def test_deterministic(self, tree):
        source = block_module(tree)
        assert _COMPILER.compile(source).code == Compiler().compile(source).code

    @given(tree=structural_element())
    @settings(max_examples=100)
    def test_idempotent(self, tree):
        first = _COMPILER.compile(block_module(tree))
        second = _COMPILER.compile(first.code)
        assert second.code == first.code
        assert not second.changed

    @given(text=st.from_regex(r"[a-z][a-z ]{0,10}", fullmatch=True))
    def test_files_without_block_calls_are_untouched(self, text):
        source = f"const view = () => <p>{text}</p>;\n"
        result = _COMPILER.compile(source)
        assert result.code == source
        assert not result.changed
