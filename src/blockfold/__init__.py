"""blockfold: compile ``block()`` components into static templates plus slots.

A source-to-source pass for JavaScript/TypeScript files with JSX. Every
recognized ``block(Component)`` call becomes a compiled block: the
component's UI tree as a static template, its dynamic expressions as ordered
slots, and nested components as portals rendered out of band.

Quickstart:
    >>> from blockfold import Compiler
    >>> result = Compiler().compile(
    ...     'import { block } from "million/react";\\n'
    ...     "const App = block((props) => <div>{props.x}</div>);\\n"
    ... )
    >>> print(result.code)
    import { compiledBlock as _compiledBlock } from "million/react";
    import { block } from "million/react";
    const _App = _compiledBlock(_props => <div>{_props.v0}</div>, {
      name: "_App"
    });
    const _App2 = (props) => /*@million jsx-skip*/<_App v0={props.x} />;
    _App2._c = true;
    const App = _App2;
    <BLANKLINE>

Files:
    >>> result = Compiler(mode="server").compile_file("src/App.tsx")

Architecture:
Source → tree-sitter → Scopes → Binding Resolver → Extraction Pass → Source Editor

Pipeline stages:
1. **Parser**: tree-sitter grammar chosen from the file suffix
2. **Scopes**: lexical bindings and every name used in the file
3. **Binding Resolver**: which local names are the runtime's ``block``
4. **Extraction Pass**: slots, portals, compiled-block declarations
5. **Source Editor**: applies offset edits; untouched text is kept verbatim

Thread-Safety:
A `Compiler` holds only immutable configuration. Each `compile()` call owns
its parser, scopes, binding table and editor, so files may be compiled in
parallel from one shared instance. Grammar objects are loaded once per
process and cached behind a lock.

Annotations:
``/* @million skip */`` before a call or UI tree leaves it byte for byte
unchanged. ``/*@million jsx-skip*/`` marks generated elements so a second
pass over compiled output changes nothing.

"""

from blockfold._types import ImportDefinition, ImportRegistry, Mode
from blockfold.analysis import BindingResolver, ScopeTable, build_scopes
from blockfold.compiler import (
    CompiledBlock,
    CompileResult,
    Compiler,
    HoistedComponent,
    Slot,
)
from blockfold.config import DEFAULT_CONFIG, CompilerConfig
from blockfold.diagnostics import Diagnostic
from blockfold.exceptions import (
    BlockfoldError,
    ErrorCode,
    LanguageNotAvailableError,
    SourceSnippet,
    build_source_snippet,
)
from blockfold.parser import (
    ParseError,
    SourceTree,
    available_languages,
    clear_language_cache,
    parse,
)
from blockfold.utils.constants import HIDDEN_IMPORTS, IMPORTS

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "HIDDEN_IMPORTS",
    "IMPORTS",
    "BindingResolver",
    "BlockfoldError",
    "CompileResult",
    "CompiledBlock",
    "Compiler",
    "CompilerConfig",
    "Diagnostic",
    "ErrorCode",
    "HoistedComponent",
    "ImportDefinition",
    "ImportRegistry",
    "LanguageNotAvailableError",
    "Mode",
    "ParseError",
    "ScopeTable",
    "Slot",
    "SourceSnippet",
    "SourceTree",
    "__version__",
    "available_languages",
    "build_scopes",
    "build_source_snippet",
    "clear_language_cache",
    "parse",
]


# Free-threading declaration (PEP 703)
def __getattr__(name: str) -> object:
    """Module-level getattr for the free-threading declaration."""
    if name == "_Py_mod_gil":
        # 0 = Py_MOD_GIL_NOT_USED
        return 0
    raise AttributeError(f"module 'blockfold' has no attribute {name!r}")
