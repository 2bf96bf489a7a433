"""
Platform helpers: administrator rights, elevation and font-change notification.
"""

import ctypes
import os
import subprocess
import sys
from pathlib import Path

from fontsync.utils.logging import logger
from fontsync.utils.subprocess import run_fc_cache

HWND_BROADCAST = 0xFFFF
WM_FONTCHANGE = 0x001D
SMTO_ABORTIFHUNG = 0x0002
BROADCAST_TIMEOUT_MS = 5000

# ShellExecuteW returns a value greater than 32 on success
SHELL_EXECUTE_OK = 32


def is_windows() -> bool:
    return sys.platform == "win32"


def is_admin() -> bool:
    """Whether the process may write the machine-wide font store."""
    if is_windows():
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except OSError:
            return False
    return hasattr(os, "geteuid") and os.geteuid() == 0


def relaunch_elevated(argv: list[str], cwd: Path | None = None) -> bool:
    """
    Start this program again with administrator rights (Windows UAC prompt).

    Elevated processes otherwise start in the system directory, so the
    working directory is passed on explicitly.

    Args:
        argv: Arguments to pass to the new process (without the interpreter)
        cwd: Working directory for the new process; defaults to the current one

    Returns:
        True if the elevated process was started
    """
    params = subprocess.list2cmdline(argv)
    result = ctypes.windll.shell32.ShellExecuteW(
        None, "runas", sys.executable, params, str(cwd or Path.cwd()), 1
    )
    if result <= SHELL_EXECUTE_OK:
        logger.error(f"Failed to relaunch with administrator rights (code {result})")
        return False
    return True


def broadcast_font_change() -> None:
    """Tell running Windows applications the font table changed."""
    try:
        result = ctypes.c_ulong()
        ctypes.windll.user32.SendMessageTimeoutW(
            HWND_BROADCAST,
            WM_FONTCHANGE,
            0,
            0,
            SMTO_ABORTIFHUNG,
            BROADCAST_TIMEOUT_MS,
            ctypes.byref(result),
        )
    except OSError as e:
        logger.warning(f"Failed to broadcast font change: {e}")


def notify_font_change(font_dir: Path) -> None:
    """Let the operating system pick up added or removed fonts."""
    if is_windows():
        broadcast_font_change()
    else:
        run_fc_cache(font_dir)
