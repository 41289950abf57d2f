"""Tests for text2stroke.fonts.catalog."""

from pathlib import Path

import pytest

from text2stroke.fonts.catalog import discover_fonts, display_name
from text2stroke.models import SourceFormat


@pytest.fixture
def font_dir(tmp_path: Path) -> Path:
    """A directory tree with a mix of font files and noise."""
    root = tmp_path / "fonts"
    (root / "hershey").mkdir(parents=True)
    for name in ("romans", "futural", "japanese", "timesr", "cursive"):
        (root / "hershey" / f"{name}.jhf").write_text("", encoding="latin-1")
    (root / "zeta.svg").write_text("<svg/>", encoding="utf-8")
    (root / "Alpha.ttf").write_bytes(b"")
    (root / "README.txt").write_text("not a font", encoding="utf-8")
    return root


@pytest.mark.parametrize(
    "name, expected",
    [("futural", "Futura Light"), ("scripts", "Script Simplex"), ("myfont", "Myfont")],
)
def test_display_name(name: str, expected: str) -> None:
    assert display_name(name) == expected


def test_preferred_fonts_first(font_dir: Path) -> None:
    """Preferred Hershey faces lead, the rest follow by display name."""
    names = [entry.name for entry in discover_fonts(font_dir)]
    assert names == ["cursive", "futural", "romans", "Alpha", "timesr", "zeta"]


def test_english_only_filters_hershey(font_dir: Path) -> None:
    assert "japanese" not in [e.name for e in discover_fonts(font_dir)]
    assert "japanese" in [e.name for e in discover_fonts(font_dir, english_only=False)]


def test_entries_carry_format(font_dir: Path) -> None:
    formats = {e.name: e.source_format for e in discover_fonts(font_dir)}
    assert formats["futural"] is SourceFormat.STROKE
    assert formats["zeta"] is SourceFormat.LINE
    assert formats["Alpha"] is SourceFormat.OUTLINE


def test_missing_directory(tmp_path: Path) -> None:
    assert discover_fonts(tmp_path / "nowhere") == []
