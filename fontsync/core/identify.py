"""
Font display-name extraction.

Maps a font file to the human-readable name Windows registers it under.
"""

from pathlib import Path

from fontTools.ttLib import TTFont

from fontsync.config.paths import COLLECTION_NAME_SEPARATOR
from fontsync.core.errors import NameExtractionError
from fontsync.core.font_io import font_extension, open_collection, open_font
from fontsync.utils.logging import logger

# nameID 4: Full font name
FULL_NAME_ID = 4


def primary_name(font: TTFont) -> str | None:
    """
    Primary display name of a single face.

    The full font name (nameID 4, e.g. "Arial Bold") is preferred, then the
    best family name the name table offers.

    Args:
        font: Opened font

    Returns:
        Name, or None if the name table carries neither
    """
    if "name" not in font:
        return None
    name_table = font["name"]
    name = name_table.getDebugName(FULL_NAME_ID) or name_table.getBestFamilyName()
    return name.strip() if name and name.strip() else None


def read_family_names(path: Path) -> list[str]:
    """
    Read names from a font file without any fallback.

    Args:
        path: Font file

    Returns:
        One name for .ttf/.otf, one per distinct face for .ttc, empty list
        for unsupported extensions

    Raises:
        NameExtractionError: If the file cannot be parsed or has no usable name
    """
    extension = font_extension(path)

    try:
        if extension in ("ttf", "otf"):
            with open_font(path) as font:
                names = [primary_name(font)]
        elif extension == "ttc":
            with open_collection(path) as collection:
                names = [primary_name(face) for face in collection.fonts]
        elif extension == "fon":
            # No portable family metadata in bitmap .fon files
            return [path.stem]
        else:
            return []
    except Exception as e:
        raise NameExtractionError(path, str(e) or type(e).__name__) from e

    unique = list(dict.fromkeys(n for n in names if n))
    if not unique:
        raise NameExtractionError(path, "no family name in name table")
    return unique


def extract_family_names(path: Path) -> list[str]:
    """
    Names for a font file, falling back to the base file name.

    Never raises: parse failures are logged as warnings.

    Args:
        path: Font file

    Returns:
        Family names; empty only for unsupported extensions
    """
    try:
        return read_family_names(path)
    except NameExtractionError as e:
        logger.warning(f"{e}; using file name '{path.stem}'")
        return [path.stem]


def identify(path: Path) -> str | None:
    """
    Single display string for a font file.

    Collection faces are joined the way Windows lists them ("Cambria & Cambria Math").

    Returns:
        Display name, or None for unsupported extensions
    """
    names = extract_family_names(path)
    return COLLECTION_NAME_SEPARATOR.join(names) if names else None
