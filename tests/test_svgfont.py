"""Unit tests for text2stroke.fonts.svgfont (single-line SVG fonts)."""

from pathlib import Path

import pytest

from text2stroke.exceptions import FontNotFoundError
from text2stroke.fonts.svgfont import LineFontDecoder, resolve_unicode, scan_tags
from text2stroke.models import SourceFormat


@pytest.fixture
def decoder() -> LineFontDecoder:
    return LineFontDecoder()


class TestResolveUnicode:
    """Tests for resolve_unicode."""

    def test_hex_reference(self) -> None:
        assert resolve_unicode("&#x41;") == 65

    def test_decimal_reference(self) -> None:
        assert resolve_unicode("&#65;") == 65

    def test_literal_character(self) -> None:
        assert resolve_unicode("é") == 0xE9

    @pytest.mark.parametrize("value", [None, "", "ffi", "&#x110000;"])
    def test_unresolvable(self, value: str | None) -> None:
        assert resolve_unicode(value) is None


class TestLineFontDecoder:
    """Tests for LineFontDecoder.decode."""

    def test_metrics(self, decoder: LineFontDecoder, svg_font_content: str) -> None:
        table = decoder.decode(svg_font_content)
        assert table.source_format is SourceFormat.LINE
        assert table.units_per_em == 1000
        assert table.ascent == 800
        assert table.descent == -200
        assert table.default_advance_width == 500
        assert table.name == "TestLine"

    def test_glyphs_keyed_by_code_point(self, decoder: LineFontDecoder, svg_font_content: str) -> None:
        table = decoder.decode(svg_font_content)
        assert sorted(table.glyphs) == [ord("A"), ord("B"), ord("l")]
        assert table.lookup("A").path_data.startswith("M 0 0 L 250 700")

    def test_advance_widths(self, decoder: LineFontDecoder, svg_font_content: str) -> None:
        table = decoder.decode(svg_font_content)
        assert table.lookup("A").advance_width == 500
        assert table.lookup("B").advance_width == 450.5
        # no horiz-adv-x on the glyph: the font default applies
        assert table.lookup("l").advance_width == 500

    def test_glyph_without_path_skipped(self, decoder: LineFontDecoder, svg_font_content: str) -> None:
        table = decoder.decode(svg_font_content)
        assert table.lookup(" ") is None
        assert table.lookup("x") is None

    def test_glyph_bounds(self, decoder: LineFontDecoder, svg_font_content: str) -> None:
        bounds = decoder.decode(svg_font_content).lookup("A").bounds
        assert (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y) == (0, 0, 500, 700)

    def test_defaults_when_metrics_missing(self, decoder: LineFontDecoder) -> None:
        content = '<svg><font><glyph unicode="a" d="M0 0L1 1"/></font></svg>'
        table = decoder.decode(content)
        assert (table.units_per_em, table.ascent, table.descent) == (1000, 800, -200)
        assert table.default_advance_width == 500

    def test_font_face_wins_over_font(self, decoder: LineFontDecoder) -> None:
        content = (
            '<svg><font units-per-em="500" ascent="400">'
            '<font-face units-per-em="2048"/>'
            '<glyph unicode="a" d="M0 0L1 1"/></font></svg>'
        )
        table = decoder.decode(content)
        assert table.units_per_em == 2048
        assert table.ascent == 400

    def test_malformed_markup_falls_back_to_tag_scan(self, decoder: LineFontDecoder) -> None:
        content = (
            '<svg><font horiz-adv-x="600"><font-face units-per-em="1000">'
            '<glyph unicode="&#x41;" d="M0 0L10 10"><glyph unicode="B" d="M0 0L0 5" horiz-adv-x="320">'
        )
        table = decoder.decode(content)
        assert table.lookup("A").advance_width == 600
        assert table.lookup("B").advance_width == 320

    def test_decode_is_deterministic(self, decoder: LineFontDecoder, svg_font_content: str) -> None:
        assert decoder.decode(svg_font_content) == decoder.decode(svg_font_content)

    def test_decode_file(self, decoder: LineFontDecoder, svg_font_file: Path) -> None:
        table = decoder.decode_file(svg_font_file)
        assert table.path == svg_font_file
        assert len(table) == 3

    def test_decode_missing_file(self, decoder: LineFontDecoder, tmp_path: Path) -> None:
        with pytest.raises(FontNotFoundError):
            decoder.decode_file(tmp_path / "missing.svg")


class TestScanTags:
    """Tests for the tolerant tag tokenizer."""

    def test_single_and_double_quotes(self) -> None:
        doc = scan_tags("<font id='f'><glyph unicode=\"a\" d='M0 0'/>")
        assert doc.font == {"id": "f"}
        assert doc.glyphs == [{"unicode": "a", "d": "M0 0"}]

    def test_entities_unescaped(self) -> None:
        doc = scan_tags('<glyph unicode="&amp;" d="M0 0"/>')
        assert doc.glyphs[0]["unicode"] == "&"
