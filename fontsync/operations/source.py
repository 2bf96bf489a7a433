"""
Source folder resolution.

The synced font folder is configured relative to a drive root because the
cloud client may live on any drive; every mounted root is probed in turn.
"""

import os
import string
import sys
from pathlib import Path

from fontsync.config.paths import POSIX_MOUNT_PARENTS, POSIX_USER_MOUNT_PARENTS
from fontsync.utils.logging import logger


def _child_dirs(parent: Path) -> list[Path]:
    try:
        return sorted(p for p in parent.iterdir() if p.is_dir())
    except OSError:
        return []


def windows_drive_roots() -> list[Path]:
    """Existing drive roots (C:\\, D:\\, ...)."""
    if hasattr(os, "listdrives"):
        return [Path(drive) for drive in os.listdrives()]
    return [
        Path(f"{letter}:\\")
        for letter in string.ascii_uppercase
        if Path(f"{letter}:\\").exists()
    ]


def posix_mount_roots() -> list[Path]:
    """The filesystem root followed by directories that typically hold mounts."""
    roots = [Path("/")]
    user = os.environ.get("USER")
    for parent in POSIX_MOUNT_PARENTS:
        roots.extend(_child_dirs(parent))
    if user:
        for parent in POSIX_USER_MOUNT_PARENTS:
            roots.extend(_child_dirs(parent / user))
    return list(dict.fromkeys(roots))


def mount_roots() -> list[Path]:
    """Mounted filesystem roots for the current platform."""
    if sys.platform == "win32":
        return windows_drive_roots()
    return posix_mount_roots()


def relative_parts(relative: str) -> Path:
    """Normalize a configured relative path, accepting either separator."""
    return Path(relative.replace("\\", "/").strip("/"))


def resolve_source(relative: str, roots: list[Path] | None = None) -> Path | None:
    """
    Find the source font folder under the first root that has it.

    Args:
        relative: Folder path relative to a drive or mount root
        roots: Roots to probe; defaults to mount_roots()

    Returns:
        Existing source directory, or None if no root has it
    """
    relative_path = relative_parts(relative)
    for root in roots if roots is not None else mount_roots():
        candidate = root / relative_path
        logger.debug(f"Probing {candidate}")
        if candidate.is_dir():
            return candidate
    return None
