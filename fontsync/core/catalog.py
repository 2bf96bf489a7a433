"""
Font discovery and deduplication.

Turns a source directory tree into an ordered list of install candidates.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from fontsync.config.paths import COLLECTION_NAME_SEPARATOR, FONT_EXTENSIONS
from fontsync.core.errors import SourceNotFoundError
from fontsync.core.font_io import font_extension, iter_font_files
from fontsync.core.identify import extract_family_names
from fontsync.utils.logging import logger


class DedupMode(Enum):
    """Which parts of a file name make two files the same font."""

    EXTENSION = "extension"  # (base name, extension): Foo.ttf and Foo.otf both kept
    BASENAME = "basename"  # base name only: Foo.otf preferred over Foo.ttf


@dataclass(frozen=True)
class FontFile:
    """A font file found on disk."""

    path: Path
    base_name: str
    extension: str  # lower case, no dot

    @classmethod
    def from_path(cls, path: Path) -> "FontFile":
        return cls(path=path, base_name=path.stem, extension=font_extension(path))

    def dedup_key(self, mode: DedupMode) -> tuple[str, ...]:
        if mode is DedupMode.BASENAME:
            return (self.base_name,)
        return (self.base_name, self.extension)


@dataclass(frozen=True)
class FontRecord:
    """Resolved install candidate for one dedup key."""

    path: Path
    extension: str
    family_names: tuple[str, ...]

    @property
    def family(self) -> str:
        """Display family; collection faces joined into one string."""
        return COLLECTION_NAME_SEPARATOR.join(self.family_names)

    @property
    def file_name(self) -> str:
        """File name used in the destination font directory."""
        return self.path.name


def _prefer(current: FontFile, candidate: FontFile) -> FontFile:
    """
    Pick the survivor between an already recorded file and a later one.

    Last discovered wins, except that a recorded .otf is never displaced by a
    later .ttf. That exception departs from plain last-wins on purpose so
    BASENAME mode prefers .otf regardless of enumeration order.
    """
    if current.extension == "otf" and candidate.extension == "ttf":
        return current
    return candidate


class FontCatalog:
    """
    Scans a source tree and collapses files sharing a dedup key.

    Args:
        mode: Dedup key definition
        identifier: Maps a font path to its family names
    """

    def __init__(
        self,
        mode: DedupMode = DedupMode.EXTENSION,
        identifier: Callable[[Path], list[str]] = extract_family_names,
    ):
        self.mode = mode
        self.identifier = identifier

    def discover(self, source_dir: Path) -> list[FontFile]:
        """
        Find font files and keep one per dedup key.

        Raises:
            SourceNotFoundError: If source_dir is not a directory
            OSError: If part of the tree cannot be read
        """
        if not source_dir.is_dir():
            raise SourceNotFoundError(str(source_dir))

        chosen: dict[tuple[str, ...], FontFile] = {}
        for path in iter_font_files(source_dir, FONT_EXTENSIONS):
            font_file = FontFile.from_path(path)
            key = font_file.dedup_key(self.mode)
            current = chosen.get(key)
            if current is None:
                chosen[key] = font_file
                continue
            survivor = _prefer(current, font_file)
            logger.debug(f"Duplicate font {key}: keeping {survivor.path}")
            chosen[key] = survivor

        return list(chosen.values())

    def scan(self, source_dir: Path) -> list[FontRecord]:
        """
        Discover, deduplicate and identify fonts under source_dir.

        Args:
            source_dir: Root of the source font tree

        Returns:
            One FontRecord per surviving file, in discovery order
        """
        records = []
        for font_file in self.discover(source_dir):
            names = self.identifier(font_file.path) or [font_file.base_name]
            records.append(
                FontRecord(
                    path=font_file.path,
                    extension=font_file.extension,
                    family_names=tuple(names),
                )
            )

        logger.info(f"Found {len(records)} fonts in {source_dir}")
        return records
