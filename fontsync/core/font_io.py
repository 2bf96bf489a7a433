"""
Font I/O utilities for traversing and opening font files.
"""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from fontTools.ttLib import TTCollection, TTFont

from fontsync.config.paths import FONT_EXTENSIONS


def font_extension(path: Path) -> str:
    """Lower-case extension without the dot ("Foo.TTF" -> "ttf")."""
    return path.suffix.lower().lstrip(".")


def _raise_walk_error(error: OSError) -> None:
    raise error


def iter_font_files(
    directory: Path,
    extensions: tuple[str, ...] = FONT_EXTENSIONS,
) -> Iterator[Path]:
    """
    Recursively iterate over font files, sorted by directory then name.

    Args:
        directory: Directory tree to search
        extensions: Accepted extensions (lower case, no dot)

    Yields:
        Absolute paths to matching font files

    Raises:
        OSError: If any directory in the tree cannot be read
    """
    for root, dirs, files in os.walk(directory, onerror=_raise_walk_error):
        dirs.sort()
        for name in sorted(files):
            path = Path(root, name)
            if font_extension(path) in extensions:
                yield path.absolute()


@contextmanager
def open_font(path: Path) -> Iterator[TTFont]:
    """
    Context manager opening a single font read-only.

    Args:
        path: Path to font file

    Yields:
        TTFont instance (lazily loaded)
    """
    font = TTFont(path, lazy=True)
    try:
        yield font
    finally:
        font.close()


@contextmanager
def open_collection(path: Path) -> Iterator[TTCollection]:
    """
    Context manager opening a font collection read-only.

    Args:
        path: Path to .ttc file

    Yields:
        TTCollection instance (lazily loaded)
    """
    collection = TTCollection(path, lazy=True)
    try:
        yield collection
    finally:
        collection.close()
