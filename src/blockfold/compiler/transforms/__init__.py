"""Source transforms for the block compiler.

Provides the mixins that turn recognized block calls into compiled-block
declarations.

The transforms package is organized into logical modules:
- block: call dispatch, hoisting and call replacement
- jsx: UI tree extraction and compiled-block emission
- imports: hidden runtime import injection
- deopt: rewriting uncompilable calls to their argument

Uses inline TYPE_CHECKING declarations for host attributes.

"""

from __future__ import annotations

from blockfold.compiler.transforms.block import BlockTransformMixin
from blockfold.compiler.transforms.deopt import DeoptMixin
from blockfold.compiler.transforms.imports import ImportInjectionMixin
from blockfold.compiler.transforms.jsx import JSXExtractionMixin


class TransformMixin(
    BlockTransformMixin,
    JSXExtractionMixin,
    ImportInjectionMixin,
    DeoptMixin,
):
    """Combined mixin for every source transform.

    This class combines all transform mixins into a single interface that
    can be inherited by the per-file compiler.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks in each individual mixin.

    """
