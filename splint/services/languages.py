from enum import StrEnum
from functools import cache
from pathlib import Path
from typing import Final

import tree_sitter_python as tspython
import tree_sitter_rust as tsrust
from tree_sitter import Language


class LanguageName(StrEnum):
    RUST = "rust"
    PYTHON = "python"


SUFFIXES: Final[dict[str, LanguageName]] = {
    ".rs": LanguageName.RUST,
    ".py": LanguageName.PYTHON,
    ".pyi": LanguageName.PYTHON,
}

# Nodes emitted as a single Literal token, whatever their inner structure.
LITERAL_NODE_TYPES: Final[dict[LanguageName, frozenset[str]]] = {
    LanguageName.RUST: frozenset(
        {
            "string_literal",
            "raw_string_literal",
            "char_literal",
            "integer_literal",
            "float_literal",
        }
    ),
    LanguageName.PYTHON: frozenset({"string", "integer", "float"}),
}

# Nodes that never produce tokens.
SKIPPED_NODE_TYPES: Final[dict[LanguageName, frozenset[str]]] = {
    LanguageName.RUST: frozenset({"line_comment", "block_comment"}),
    LanguageName.PYTHON: frozenset({"comment", "line_continuation"}),
}


# Characters that only appear inside literals; outside one they mean an
# unterminated literal.
STRAY_CHARACTERS: Final[dict[LanguageName, frozenset[str]]] = {
    LanguageName.RUST: frozenset({'"'}),
    LanguageName.PYTHON: frozenset({'"', "'"}),
}


@cache
def get_language(name: LanguageName) -> Language:
    """Load the tree-sitter grammar for a language.

    Args:
        name: Language to load.

    Returns:
        The shared, read-only grammar object.

    Raises:
        ValueError: If no grammar is bundled for the language.
    """
    if name == LanguageName.RUST:
        return Language(tsrust.language())
    elif name == LanguageName.PYTHON:
        return Language(tspython.language())
    else:
        raise ValueError(f"Unknown language: {name}")


def language_for_path(
    path: Path, default: LanguageName = LanguageName.RUST
) -> LanguageName:
    return SUFFIXES.get(path.suffix.lower(), default)
