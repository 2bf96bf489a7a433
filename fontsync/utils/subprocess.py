"""
Subprocess execution utilities with consistent error handling.
"""

import shutil
import subprocess
from pathlib import Path

from fontsync.utils.logging import logger


def run_command(
    cmd: list[str],
    description: str | None = None,
) -> subprocess.CompletedProcess | None:
    """
    Run a subprocess command with consistent logging and error handling.

    Failures are logged as warnings; the caller decides whether that matters.

    Args:
        cmd: Command and arguments to run
        description: Optional description for logging

    Returns:
        CompletedProcess result, or None if the command failed or could not start
    """
    if description:
        logger.info(description)

    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True)
        if result.stdout:
            logger.debug(result.stdout)
        return result
    except FileNotFoundError:
        logger.warning(f"Command not found: {cmd[0]}")
        return None
    except subprocess.CalledProcessError as e:
        logger.warning(f"Command failed: {' '.join(cmd)}")
        if e.stderr:
            logger.warning(e.stderr)
        return None


def run_fc_cache(font_dir: Path) -> subprocess.CompletedProcess | None:
    """
    Refresh the fontconfig cache for a font directory.

    Args:
        font_dir: Directory fonts were installed into

    Returns:
        CompletedProcess result, or None if fc-cache is missing or failed
    """
    if shutil.which("fc-cache") is None:
        logger.debug("fc-cache not on PATH; skipping font cache refresh")
        return None
    return run_command(
        ["fc-cache", "-f", str(font_dir)],
        f"Refreshing font cache for {font_dir}",
    )
