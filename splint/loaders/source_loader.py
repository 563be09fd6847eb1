from __future__ import annotations

import glob
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Final

from splint.errors import SourceReadError
from splint.services.languages import SUFFIXES

logger = logging.getLogger(__name__)

GLOB_CHARS: Final[frozenset[str]] = frozenset("*?[")

DEFAULT_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".venv",
        "venv",
        "__pycache__",
        "node_modules",
        "target",
    }
)


def _iter_directory(root: Path) -> Iterable[Path]:
    for path in sorted(root.rglob("*")):
        if any(part in DEFAULT_EXCLUDE_DIRS for part in path.relative_to(root).parts):
            continue
        if path.is_file() and path.suffix.lower() in SUFFIXES:
            yield path


def expand_paths(locations: Iterable[str]) -> list[Path]:
    """Expand CLI locations into the files to lint.

    A location containing a glob character is expanded with recursive globbing,
    a directory is searched for files of a supported language, and anything
    else is taken as a file path as is. Duplicates are dropped, first
    occurrence wins.

    Args:
        locations: Paths, glob patterns or directories.

    Returns:
        Files in the order they were found.
    """
    files: list[Path] = []
    seen: set[Path] = set()

    def add(path: Path) -> None:
        if path not in seen:
            seen.add(path)
            files.append(path)

    for location in locations:
        if GLOB_CHARS.intersection(location):
            matched = sorted(glob.glob(location, recursive=True))
            logger.debug("Pattern %s matched %d path(s)", location, len(matched))
            for match in matched:
                path = Path(match)
                if path.is_file():
                    add(path)
            continue

        path = Path(location)
        if path.is_dir():
            for child in _iter_directory(path):
                add(child)
        else:
            add(path)

    return files


def read_source(path: Path) -> str:
    """Read a source file as UTF-8 text.

    Raises:
        SourceReadError: If the file cannot be read or decoded.
    """
    try:
        # Keeps "\r\n" intact; spans index the raw bytes.
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"Couldn't read source file {path}: {e}") from e
