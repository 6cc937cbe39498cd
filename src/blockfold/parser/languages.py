"""Grammar loading for the tree-sitter front end.

Language objects are process-wide: each grammar is loaded on first use and
then served from a cache for the life of the process. `clear_language_cache`
drops the cache (tests, interpreter teardown).

Grammar packages:
    javascript  → tree_sitter_javascript.language()  (JS + JSX)
    typescript  → tree_sitter_typescript.language_typescript()
    tsx         → tree_sitter_typescript.language_tsx()
"""

from __future__ import annotations

import importlib
import threading
from pathlib import PurePath

from tree_sitter import Language

from blockfold.exceptions import ErrorCode, LanguageNotAvailableError
from blockfold.utils.constants import SUFFIX_LANGUAGES

# language name -> (module, factory function)
_GRAMMARS: dict[str, tuple[str, str]] = {
    "javascript": ("tree_sitter_javascript", "language"),
    "typescript": ("tree_sitter_typescript", "language_typescript"),
    "tsx": ("tree_sitter_typescript", "language_tsx"),
}

_ALIASES = {"js": "javascript", "jsx": "javascript", "ts": "typescript"}

_cache: dict[str, Language] = {}
_lock = threading.Lock()


def available_languages() -> tuple[str, ...]:
    """Names accepted by `get_language`."""
    return tuple(_GRAMMARS)


def normalize_language(name: str) -> str:
    """Resolve aliases (``jsx`` → ``javascript``) and validate *name*."""
    key = _ALIASES.get(name.lower(), name.lower())
    if key not in _GRAMMARS:
        raise LanguageNotAvailableError(name)
    return key


def language_for_filename(filename: str | None, default: str = "javascript") -> str:
    """Pick a grammar from the file suffix, falling back to *default*."""
    if not filename:
        return normalize_language(default)
    suffix = PurePath(filename).suffix.lower()
    return SUFFIX_LANGUAGES.get(suffix, normalize_language(default))


def get_language(name: str) -> Language:
    """Return the tree-sitter Language for *name*, loading it once."""
    key = normalize_language(name)
    language = _cache.get(key)
    if language is not None:
        return language
    with _lock:
        language = _cache.get(key)
        if language is None:
            language = _load(key)
            _cache[key] = language
    return language


def clear_language_cache() -> None:
    """Forget every loaded grammar."""
    with _lock:
        _cache.clear()


def _load(key: str) -> Language:
    module_name, factory = _GRAMMARS[key]
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise LanguageNotAvailableError(
            key,
            f"install the {module_name.replace('_', '-')} package",
            code=ErrorCode.GRAMMAR_NOT_INSTALLED,
        ) from exc
    return Language(getattr(module, factory)())
