"""
Font ledger backends.

The ledger is the machine-wide mapping from a font display name
("Arial Bold (TrueType)") to the installed file name ("Arial-Bold.ttf").
"""

import json
import sys
from pathlib import Path
from typing import Protocol

from fontsync.config.paths import FONTS_REGISTRY_KEY
from fontsync.config.settings import Settings
from fontsync.core.errors import LedgerError
from fontsync.utils.logging import logger

# Optional Windows dependency
try:
    import winreg
except ImportError:
    winreg = None


class FontLedger(Protocol):
    """Display-name to file-name mapping owned by the operating system."""

    def entries(self) -> dict[str, str]: ...

    def get(self, name: str) -> str | None: ...

    def exists(self, name: str) -> bool: ...

    def write(self, name: str, value: str) -> None: ...

    def delete(self, name: str) -> bool: ...

    def find_by_substring_and_suffix(
        self, family: str, suffix: str
    ) -> list[tuple[str, str]]: ...


def matches_substring_and_suffix(name: str, value: str, family: str, suffix: str) -> bool:
    """
    Case-insensitive containment of family in name, and value ending in suffix.

    Substring matching means "Arial" also matches "Arial Narrow (TrueType)".
    """
    return family.casefold() in name.casefold() and value.casefold().endswith(
        suffix.casefold()
    )


class MemoryLedger:
    """In-process ledger."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._entries: dict[str, str] = dict(initial or {})

    def entries(self) -> dict[str, str]:
        return dict(self._entries)

    def get(self, name: str) -> str | None:
        return self._entries.get(name)

    def exists(self, name: str) -> bool:
        return name in self._entries

    def write(self, name: str, value: str) -> None:
        self._entries[name] = value

    def delete(self, name: str) -> bool:
        return self._entries.pop(name, None) is not None

    def find_by_substring_and_suffix(
        self, family: str, suffix: str
    ) -> list[tuple[str, str]]:
        return [
            (name, value)
            for name, value in self.entries().items()
            if matches_substring_and_suffix(name, value, family, suffix)
        ]


class JsonLedger(MemoryLedger):
    """
    Ledger persisted as a JSON object, for hosts without a font registry.

    Every write and delete is saved immediately; a failed save leaves the
    in-memory entries as they were.
    """

    def __init__(self, path: Path):
        self.path = path
        super().__init__(self._load())

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise LedgerError(f"Failed to read ledger {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise LedgerError(f"Ledger {self.path} is not a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _save(self) -> None:
        try:
            data = json.dumps(
                self._entries, indent=2, sort_keys=True, ensure_ascii=False
            ).encode("utf-8")
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(data)
        except (OSError, ValueError) as e:
            raise LedgerError(f"Failed to write ledger {self.path}: {e}") from e

    def _save_or_restore(self, previous: dict[str, str]) -> None:
        try:
            self._save()
        except LedgerError:
            self._entries = previous
            raise

    def write(self, name: str, value: str) -> None:
        previous = dict(self._entries)
        super().write(name, value)
        self._save_or_restore(previous)

    def delete(self, name: str) -> bool:
        previous = dict(self._entries)
        removed = super().delete(name)
        if removed:
            self._save_or_restore(previous)
        return removed


class RegistryLedger:
    """Windows font registry (HKLM\\...\\CurrentVersion\\Fonts)."""

    def __init__(self, key_path: str = FONTS_REGISTRY_KEY):
        if winreg is None:
            raise LedgerError("The Windows registry is not available on this platform")
        self.key_path = key_path

    def _open(self, access: int):
        try:
            return winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, self.key_path, 0, access)
        except OSError as e:
            raise LedgerError(f"Failed to open registry key {self.key_path}: {e}") from e

    def entries(self) -> dict[str, str]:
        result = {}
        with self._open(winreg.KEY_READ) as key:
            value_count = winreg.QueryInfoKey(key)[1]
            for i in range(value_count):
                name, value, _ = winreg.EnumValue(key, i)
                result[name] = str(value)
        return result

    def get(self, name: str) -> str | None:
        with self._open(winreg.KEY_READ) as key:
            try:
                value, _ = winreg.QueryValueEx(key, name)
            except FileNotFoundError:
                return None
        return str(value)

    def exists(self, name: str) -> bool:
        return self.get(name) is not None

    def write(self, name: str, value: str) -> None:
        with self._open(winreg.KEY_SET_VALUE) as key:
            try:
                winreg.SetValueEx(key, name, 0, winreg.REG_SZ, value)
            except OSError as e:
                raise LedgerError(f"Failed to write registry value '{name}': {e}") from e

    def delete(self, name: str) -> bool:
        with self._open(winreg.KEY_SET_VALUE) as key:
            try:
                winreg.DeleteValue(key, name)
            except FileNotFoundError:
                return False
            except OSError as e:
                raise LedgerError(f"Failed to delete registry value '{name}': {e}") from e
        return True

    def find_by_substring_and_suffix(
        self, family: str, suffix: str
    ) -> list[tuple[str, str]]:
        return [
            (name, value)
            for name, value in self.entries().items()
            if matches_substring_and_suffix(name, value, family, suffix)
        ]


def open_ledger(settings: Settings) -> FontLedger:
    """
    Ledger backend selected by settings.ledger.

    "auto" uses the registry on Windows and the JSON ledger elsewhere.
    """
    backend = settings.ledger
    if backend == "auto":
        backend = "registry" if sys.platform == "win32" else "json"

    if backend == "registry":
        logger.debug(f"Using registry ledger HKLM\\{FONTS_REGISTRY_KEY}")
        return RegistryLedger()

    logger.debug(f"Using JSON ledger {settings.json_ledger_path}")
    return JsonLedger(settings.json_ledger_path)
