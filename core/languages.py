"""
Extension-to-grammar lookup.

The lookup table is built once at import from LANGUAGE_GRAMMARS and exposed as
a read-only mapping, so worker threads can read it without locking.
"""

import os
from types import MappingProxyType
from typing import Final, Mapping

from constants import LANGUAGE_GRAMMARS
from models import LanguageGrammar


def _build_extension_table(
    grammars: tuple[LanguageGrammar, ...],
) -> Mapping[str, LanguageGrammar]:
    table: dict[str, LanguageGrammar] = {}
    for grammar in grammars:
        for ext in grammar.extensions:
            if ext in table:
                raise ValueError(
                    f"Extension {ext} is mapped to both {table[ext].name} and {grammar.name}"
                )
            table[ext] = grammar
    return MappingProxyType(table)


EXTENSION_TO_GRAMMAR: Final[Mapping[str, LanguageGrammar]] = _build_extension_table(
    LANGUAGE_GRAMMARS
)


def file_extension(path: str) -> str:
    """
    Return the extension of a path: everything from the last dot of its base name.

    Unlike Path.suffix, dotfiles keep their whole name (".bashrc" -> ".bashrc").
    A name without a dot has no extension.
    """
    name = os.path.basename(path)
    idx = name.rfind(".")
    if idx < 0:
        return ""
    return name[idx:]


def lookup(extension: str) -> LanguageGrammar | None:
    """Return the grammar registered for an exact, case-sensitive extension."""
    return EXTENSION_TO_GRAMMAR.get(extension)


def detect_language(path: str) -> LanguageGrammar | None:
    """
    Detect the comment grammar of a file from its extension.

    Args:
        path: File path, absolute or relative.

    Returns:
        The matching LanguageGrammar, or None for files without an extension
        or with an unrecognized one.
    """
    return lookup(file_extension(path))
