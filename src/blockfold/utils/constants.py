"""Shared constants for blockfold.

Runtime import registry, annotation markers and the tree-sitter node type
groups the analysis and compiler modules dispatch on.
"""

from __future__ import annotations

from blockfold._types import ImportRegistry, named

# Comment markers recognized on calls and JSX nodes
SKIP_ANNOTATION = "@million skip"
JSX_SKIP_ANNOTATION = "@million jsx-skip"

CLIENT_SOURCE = "million/react"
SERVER_SOURCE = "million/react-server"

# Exports recognized in user code
IMPORTS: ImportRegistry = {
    "block": named("block", CLIENT_SOURCE, SERVER_SOURCE),
    "For": named("For", CLIENT_SOURCE, SERVER_SOURCE),
}

# Exports only ever emitted by the compiler
HIDDEN_IMPORTS: ImportRegistry = {
    "compiledBlock": named("compiledBlock", CLIENT_SOURCE, SERVER_SOURCE),
}

# Name of the flag property set on hoisted components
COMPILED_FLAG = "_c"

# Base name of the render function's slot parameter
SLOT_SOURCE_NAME = "props"

DEFAULT_NAME = "Anonymous"

# ---------------------------------------------------------------------------
# Node type groups (tree-sitter javascript / typescript / tsx grammars)
# ---------------------------------------------------------------------------

FUNCTION_TYPES: frozenset[str] = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)

# Function-like nodes usable as a block component argument
COMPONENT_FUNCTION_TYPES: frozenset[str] = frozenset(
    {
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
    }
)

GENERATOR_TYPES: frozenset[str] = frozenset(
    {"generator_function", "generator_function_declaration"}
)

JSX_ELEMENT_TYPES: frozenset[str] = frozenset({"jsx_element", "jsx_self_closing_element"})

JSX_TREE_TYPES: frozenset[str] = frozenset(
    {"jsx_element", "jsx_self_closing_element", "jsx_fragment"}
)

# Wrappers that do not change the wrapped expression's value
WRAPPER_TYPES: frozenset[str] = frozenset(
    {
        "parenthesized_expression",
        "as_expression",
        "satisfies_expression",
        "non_null_expression",
        "type_assertion",
    }
)

COMMENT_TYPES: frozenset[str] = frozenset({"comment", "html_comment"})

LITERAL_TYPES: frozenset[str] = frozenset(
    {"string", "number", "true", "false", "null", "undefined"}
)

# Element names that always denote a user component
MEMBER_TAG_TYPES: frozenset[str] = frozenset({"member_expression", "nested_identifier"})

SUFFIX_LANGUAGES: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}
