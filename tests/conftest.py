"""Shared pytest fixtures."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTCollection, TTFont

from fontsync.config.settings import Settings
from fontsync.core.ledger import MemoryLedger
from fontsync.operations import source as source_module
from fontsync.pipeline import runner


def build_font(path: Path, family: str, style: str = "Regular") -> Path:
    """Write a minimal TrueType-outline font with the given names."""
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((400, 700))
    pen.lineTo((400, 0))
    pen.closePath()

    full_name = family if style == "Regular" else f"{family} {style}"

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef"])
    fb.setupCharacterMap({})
    fb.setupGlyf({".notdef": pen.glyph()})
    fb.setupHorizontalMetrics({".notdef": (500, 100)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable(
        {
            "familyName": family,
            "styleName": style,
            "fullName": full_name,
            "psName": full_name.replace(" ", "-"),
        }
    )
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path


def build_collection(path: Path, faces: list[Path]) -> Path:
    """Bundle existing fonts into a .ttc file."""
    collection = TTCollection()
    collection.fonts = [TTFont(face) for face in faces]
    path.parent.mkdir(parents=True, exist_ok=True)
    collection.save(str(path))
    collection.close()
    return path


@pytest.fixture
def make_font():
    """Factory fixture: make_font(path, family, style="Regular")."""
    return build_font


@pytest.fixture
def make_collection(tmp_path):
    """Factory fixture: make_collection(path, [(family, style), ...])."""

    def factory(path: Path, faces: list[tuple[str, str]]) -> Path:
        face_dir = tmp_path / "faces"
        face_paths = [
            build_font(face_dir / f"face{i}.ttf", family, style)
            for i, (family, style) in enumerate(faces)
        ]
        return build_collection(path, face_paths)

    return factory


@pytest.fixture
def source_dir(tmp_path):
    """Synced source folder, relative path 'OneDrive/Fonts' under tmp_path."""
    path = tmp_path / "OneDrive" / "Fonts"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def font_dir(tmp_path):
    """Destination font directory."""
    path = tmp_path / "Windows" / "Fonts"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def ledger():
    return MemoryLedger()


@pytest.fixture
def settings(tmp_path, font_dir):
    """Settings using the JSON ledger inside tmp_path."""
    return Settings(
        font_dir=font_dir,
        log_file=tmp_path / "logs" / "fontsync.log",
        source_path="OneDrive/Fonts",
        ledger="json",
        ledger_file=tmp_path / "ledger.json",
    )


@pytest.fixture
def tmp_roots(tmp_path, monkeypatch):
    """Resolve source folders against tmp_path instead of real mounts."""

    def resolve(relative, roots=None):
        return source_module.resolve_source(relative, roots=[tmp_path])

    monkeypatch.setattr(runner, "resolve_source", resolve)
    return [tmp_path]


@pytest.fixture
def font_change_calls(monkeypatch):
    """Record font-change notifications instead of touching the OS."""
    calls = []
    monkeypatch.setattr(runner, "notify_font_change", calls.append)
    return calls
