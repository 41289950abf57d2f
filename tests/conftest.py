"""Pytest configuration and shared fixtures for text2stroke tests."""

import struct
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

# 'H' with two strokes: left stem, then (after a pen-up) right stem.
HERSHEY_H = "G]KFKY RYFYY"
# A short vertical bar used as filler for every other code point.
HERSHEY_BAR = "MWRMRW"


def hershey_line(glyph_id: int, data: str) -> str:
    """Format one .jhf record: 5-char id, 3-char vertex count, then data."""
    return f"{glyph_id:5d}{len(data) // 2:3d}{data}"


def build_hershey_font() -> str:
    """Lines 1..41: space, bars for '!'..'G', then 'H' (code 72) on line 41."""
    lines = [hershey_line(1, "JZ")]
    lines += [hershey_line(n, HERSHEY_BAR) for n in range(2, 41)]
    lines.append(hershey_line(41, HERSHEY_H))
    return "\n".join(lines) + "\n"


SVG_FONT = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg">
  <defs>
    <font id="TestLine" horiz-adv-x="500">
      <font-face font-family="Test Line" units-per-em="1000" ascent="800" descent="-200"/>
      <missing-glyph horiz-adv-x="500"/>
      <glyph unicode=" " glyph-name="space" horiz-adv-x="300"/>
      <glyph unicode="&#x41;" glyph-name="A" horiz-adv-x="500" d="M 0 0 L 250 700 L 500 0 M 100 250 L 400 250"/>
      <glyph unicode="&#66;" glyph-name="B" horiz-adv-x="450.5" d="M 0 0 L 0 700"/>
      <glyph unicode="l" d="M 0 0 L 0 750"/>
      <glyph unicode="x" horiz-adv-x="400"/>
      <glyph glyph-name="nounicode" d="M 0 0 L 10 10"/>
    </font>
  </defs>
</svg>
"""


def build_outline_font(path: Path) -> Path:
    """Write a tiny TrueType font with a space and a triangular 'A'."""
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "space", "A"])
    fb.setupCharacterMap({0x20: "space", 0x41: "A"})

    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((250, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    glyph_a = pen.glyph()
    empty = TTGlyphPen(None).glyph()

    fb.setupGlyf({".notdef": empty, "space": empty, "A": glyph_a})
    fb.setupHorizontalMetrics({".notdef": (500, 0), "space": (250, 0), "A": (600, 0)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Test Outline", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point config lookup at a file that does not exist, so defaults apply."""
    missing = tmp_path_factory.mktemp("config") / "missing.yaml"
    monkeypatch.setenv("T2S_CONFIG", str(missing))


@pytest.fixture
def hershey_content() -> str:
    """Return Hershey font text whose line 41 is a two-stroke 'H'."""
    return build_hershey_font()


@pytest.fixture
def hershey_file(tmp_path: Path, hershey_content: str) -> Path:
    """Write the sample Hershey font to a .jhf file."""
    path = tmp_path / "futural.jhf"
    path.write_text(hershey_content, encoding="latin-1")
    return path


@pytest.fixture
def svg_font_content() -> str:
    """Return a small single-line SVG font."""
    return SVG_FONT


@pytest.fixture
def svg_font_file(tmp_path: Path) -> Path:
    """Write the sample SVG font to disk."""
    path = tmp_path / "testline.svg"
    path.write_text(SVG_FONT, encoding="utf-8")
    return path


@pytest.fixture
def outline_font_file(tmp_path: Path) -> Path:
    """Build a TrueType font with fontTools.fontBuilder."""
    return build_outline_font(tmp_path / "testoutline.ttf")


def corrupt_table(path: Path, tag: str, count: int = 40) -> Path:
    """Overwrite the first ``count`` bytes of the sfnt table ``tag`` with 0xFF."""
    data = bytearray(path.read_bytes())
    (num_tables,) = struct.unpack(">H", data[4:6])
    for index in range(num_tables):
        entry = 12 + 16 * index
        table_tag, _, offset, length = struct.unpack(">4sLLL", data[entry : entry + 16])
        if table_tag == tag.encode("ascii"):
            size = min(count, length)
            data[offset : offset + size] = b"\xff" * size
            path.write_bytes(bytes(data))
            return path
    raise KeyError(tag)
