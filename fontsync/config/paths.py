"""
Filesystem and naming constants.

Centralizes extension, label and path definitions to avoid magic strings in individual modules.
"""

from pathlib import Path

# Font file extensions considered for installation (lower case, no dot)
FONT_EXTENSIONS = ("ttf", "otf", "ttc", "fon")

# Ledger display-name labels per extension
TYPE_LABELS = {
    "ttf": "(TrueType)",
    "otf": "(OpenType)",
    "ttc": "(TrueType Collection)",
    "fon": "(All Res)",
}
DEFAULT_TYPE_LABEL = "(Font)"

# Separator Windows uses between faces of a collection in one display name
COLLECTION_NAME_SEPARATOR = " & "

# Configuration lookup
CONFIG_ENV_VAR = "FONTSYNC_CONFIG"
DEFAULT_CONFIG_FILE = Path("fontsync.toml")

# Registry key holding the machine-wide font display names
FONTS_REGISTRY_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\Fonts"

# JSON ledger file name used on hosts without a font registry
JSON_LEDGER_NAME = "fontsync-ledger.json"

# POSIX directories whose children are mount points
POSIX_MOUNT_PARENTS = (Path("/mnt"), Path("/media"), Path("/Volumes"))

# Directories holding per-user mount directories (/media/<user>/<volume>)
POSIX_USER_MOUNT_PARENTS = (Path("/media"), Path("/run/media"))
