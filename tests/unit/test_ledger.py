"""Tests for ledger backends."""

import sys
from pathlib import Path

import pytest

from fontsync.config.settings import Settings
from fontsync.core import ledger as ledger_module
from fontsync.core.errors import LedgerError
from fontsync.core.ledger import (
    JsonLedger,
    MemoryLedger,
    RegistryLedger,
    matches_substring_and_suffix,
    open_ledger,
)


def test_memory_ledger_write_get_delete():
    """Test basic ledger operations."""
    ledger = MemoryLedger()
    ledger.write("Arial Bold (TrueType)", "Arial-Bold.ttf")

    assert ledger.exists("Arial Bold (TrueType)")
    assert ledger.get("Arial Bold (TrueType)") == "Arial-Bold.ttf"
    assert ledger.delete("Arial Bold (TrueType)") is True
    assert ledger.delete("Arial Bold (TrueType)") is False
    assert ledger.get("Arial Bold (TrueType)") is None


def test_write_overwrites():
    """Test writing an existing name replaces its value."""
    ledger = MemoryLedger({"Foo (TrueType)": "old.ttf"})
    ledger.write("Foo (TrueType)", "new.ttf")
    assert ledger.entries() == {"Foo (TrueType)": "new.ttf"}


def test_find_is_case_insensitive_substring():
    """Test family matching ignores case and matches inside longer names."""
    ledger = MemoryLedger(
        {
            "Arial Narrow (TrueType)": "ARIALN.TTF",
            "Verdana (TrueType)": "verdana.ttf",
            "Arial (OpenType)": "arial.otf",
        }
    )

    assert ledger.find_by_substring_and_suffix("arial", ".ttf") == [
        ("Arial Narrow (TrueType)", "ARIALN.TTF")
    ]
    assert ledger.find_by_substring_and_suffix("Arial", ".otf") == [
        ("Arial (OpenType)", "arial.otf")
    ]
    assert ledger.find_by_substring_and_suffix("Garamond", ".ttf") == []


def test_suffix_must_match():
    """Test a name match with a different file type is not a match."""
    assert not matches_substring_and_suffix("Foo (TrueType)", "Foo.otf", "Foo", ".ttf")
    assert matches_substring_and_suffix("Foo (TrueType)", "Foo.TTF", "foo", ".ttf")


def test_json_ledger_persists(tmp_path):
    """Test writes survive reopening the JSON ledger."""
    path = tmp_path / "state" / "ledger.json"
    JsonLedger(path).write("Inter (TrueType)", "Inter.ttf")

    reopened = JsonLedger(path)
    assert reopened.get("Inter (TrueType)") == "Inter.ttf"

    reopened.delete("Inter (TrueType)")
    assert JsonLedger(path).entries() == {}


def test_json_ledger_missing_file_is_empty(tmp_path):
    assert JsonLedger(tmp_path / "none.json").entries() == {}


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_json_ledger_invalid_content(tmp_path, content):
    """Test an unreadable ledger file raises LedgerError."""
    path = tmp_path / "ledger.json"
    path.write_text(content)

    with pytest.raises(LedgerError):
        JsonLedger(path)


def test_open_ledger_json(tmp_path):
    """Test the JSON backend defaults to a file in the font directory."""
    settings = Settings(
        font_dir=tmp_path / "fonts",
        log_file=tmp_path / "fontsync.log",
        source_path="Fonts",
        ledger="json",
    )
    ledger = open_ledger(settings)

    assert isinstance(ledger, JsonLedger)
    assert ledger.path == tmp_path / "fonts" / "fontsync-ledger.json"


@pytest.mark.skipif(sys.platform == "win32", reason="registry exists on Windows")
def test_open_ledger_auto_off_windows(tmp_path):
    settings = Settings(
        font_dir=tmp_path / "fonts",
        log_file=tmp_path / "fontsync.log",
        source_path="Fonts",
    )
    assert isinstance(open_ledger(settings), JsonLedger)


def test_registry_ledger_without_winreg(monkeypatch):
    """Test the registry backend refuses to start without winreg."""
    monkeypatch.setattr(ledger_module, "winreg", None)
    with pytest.raises(LedgerError):
        RegistryLedger()


def test_json_ledger_unencodable_write_rolls_back(tmp_path):
    """Test a name that cannot be saved as UTF-8 leaves memory and disk unchanged."""
    path = tmp_path / "ledger.json"
    ledger = JsonLedger(path)
    ledger.write("Good (TrueType)", "Good.ttf")
    saved = path.read_bytes()

    with pytest.raises(LedgerError):
        ledger.write("A\udcff (All Res)", "A\udcff.fon")

    assert ledger.entries() == {"Good (TrueType)": "Good.ttf"}
    assert path.read_bytes() == saved

    ledger.write("Next (TrueType)", "Next.ttf")
    assert JsonLedger(path).entries() == {
        "Good (TrueType)": "Good.ttf",
        "Next (TrueType)": "Next.ttf",
    }


def test_json_ledger_failed_delete_rolls_back(tmp_path, monkeypatch):
    """Test an entry stays in memory when saving its removal fails."""
    path = tmp_path / "ledger.json"
    ledger = JsonLedger(path)
    ledger.write("Inter (TrueType)", "Inter.ttf")

    def refuse(self, data):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "write_bytes", refuse)

    with pytest.raises(LedgerError, match="Permission denied"):
        ledger.delete("Inter (TrueType)")

    assert ledger.get("Inter (TrueType)") == "Inter.ttf"
