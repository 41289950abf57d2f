"""End-to-end tests for Text2StrokeConverter.

Tests run the full decode -> layout -> emit -> compose pipeline on the
sample fonts from conftest and check that errors come back as values.
"""

import json
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from text2stroke import Text2StrokeConverter
from text2stroke.config import Config
from text2stroke.fonts.cache import FontCache
from text2stroke.layout import MissingGlyphPolicy
from text2stroke.models import Margins, PageSpec

from conftest import corrupt_table

SVG = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def converter() -> Text2StrokeConverter:
    return Text2StrokeConverter()


class TestRender:
    """Successful renders."""

    def test_single_stroke_glyph(self, converter: Text2StrokeConverter, hershey_file: Path) -> None:
        """'H' at font size 25 renders one glyph at scale 1."""
        outcome = converter.render("H", hershey_file, font_size=25)
        assert outcome.success, outcome.errors
        result = outcome.result
        assert len(result.placed_glyphs) == 1
        root = ET.fromstring(result.document)
        path = root.find(f"{SVG}g").find(f"{SVG}path")
        assert path.get("transform") == "translate(0,0) scale(1)"
        assert path.get("d").count("M") == 2

    def test_fit_to_content_by_default(self, converter: Text2StrokeConverter, hershey_file: Path) -> None:
        outcome = converter.render("H", hershey_file, font_size=25)
        root = ET.fromstring(outcome.result.document)
        # 'H' spans x -7..7, y -12..7, plus 20 padding per side
        assert root.get("viewBox") == "0 0 54 59"
        assert outcome.result.metadata["page_spec"] is None

    def test_fixed_page(self, converter: Text2StrokeConverter, svg_font_file: Path) -> None:
        outcome = converter.render("AB", svg_font_file, font_size=100, page_size="4x6", rotated=True)
        root = ET.fromstring(outcome.result.document)
        assert (root.get("width"), root.get("height")) == ("6in", "4in")
        group = root.find(f"{SVG}g")
        # left margin 48px, top margin 48px plus ascent 800 * 0.1
        assert group.get("transform") == "translate(48,128)"

    def test_custom_margins(self, converter: Text2StrokeConverter, svg_font_file: Path) -> None:
        outcome = converter.render(
            "A", svg_font_file, font_size=100, page_size="4x6", margins=Margins.uniform(0)
        )
        group = ET.fromstring(outcome.result.document).find(f"{SVG}g")
        assert group.get("transform") == "translate(0,80)"

    def test_page_spec_object(self, converter: Text2StrokeConverter, svg_font_file: Path) -> None:
        spec = PageSpec(width=5, height=7)
        outcome = converter.render("A", svg_font_file, page_size=spec)
        assert outcome.result.metadata["page_spec"] == spec.to_dict()

    def test_outline_font(self, converter: Text2StrokeConverter, outline_font_file: Path) -> None:
        outcome = converter.render("A A", outline_font_file, font_size=100)
        assert outcome.success, outcome.errors
        paths = ET.fromstring(outcome.result.document).find(f"{SVG}g").findall(f"{SVG}path")
        assert len(paths) == 2
        assert all(p.get("transform") is None for p in paths)

    def test_metadata(self, converter: Text2StrokeConverter, hershey_file: Path) -> None:
        outcome = converter.render("HH\nH", hershey_file, font_size=40)
        metadata = outcome.result.metadata
        assert metadata["char_count"] == 4
        assert metadata["source_format"] == "stroke"
        assert metadata["font_size"] == 40
        assert metadata["font_name"] == "futural"
        assert metadata["line_count"] == 2

    def test_missing_characters_reported(self, converter: Text2StrokeConverter, hershey_file: Path) -> None:
        outcome = converter.render("HIH", hershey_file)
        assert outcome.success
        assert outcome.missing == ("I",)
        assert len(outcome.result.placed_glyphs) == 2

    def test_missing_policy_advance(self, hershey_file: Path) -> None:
        converter = Text2StrokeConverter(missing_policy=MissingGlyphPolicy.ADVANCE)
        outcome = converter.render("HIH", hershey_file, font_size=25)
        assert outcome.result.placed_glyphs[1].x == pytest.approx(27.5)

    def test_config_defaults_apply(self, hershey_file: Path) -> None:
        config = Config.from_dict({"render": {"font_size": 50, "stroke_width": 2}, "page": {"size": "4x6"}})
        outcome = Text2StrokeConverter(config=config).render("H", hershey_file)
        assert outcome.result.metadata["font_size"] == 50
        assert "stroke-width:2;" in outcome.result.document
        assert 'width="4in"' in outcome.result.document

    def test_fit_overrides_configured_page(self, hershey_file: Path) -> None:
        config = Config.from_dict({"page": {"size": "4x6"}})
        outcome = Text2StrokeConverter(config=config).render("H", hershey_file, font_size=25, page_size="fit")
        assert outcome.result.metadata["page_spec"] is None

    def test_font_decoded_once(self, hershey_file: Path) -> None:
        cache = FontCache()
        converter = Text2StrokeConverter(font_cache=cache)
        converter.render("H", hershey_file)
        table = cache.get(hershey_file)
        converter.render("HH", hershey_file)
        assert cache.get(hershey_file) is table
        assert len(cache) == 1

    def test_injected_empty_cache_is_kept(self, hershey_file: Path) -> None:
        """An empty cache is still the caller's cache, shared across converters."""
        cache = FontCache()
        first = Text2StrokeConverter(font_cache=cache)
        second = Text2StrokeConverter(font_cache=cache)
        assert first.font_cache is cache
        first.render("H", hershey_file)
        assert second.load_font(hershey_file) is cache.get(hershey_file)
        assert len(cache) == 1


class TestRenderErrors:
    """Errors are returned as values, never raised."""

    def test_missing_font(self, converter: Text2StrokeConverter, tmp_path: Path) -> None:
        outcome = converter.render("H", tmp_path / "missing.jhf")
        assert not outcome.success
        assert outcome.result is None
        assert "not found" in outcome.errors[0]

    def test_unsupported_font(self, converter: Text2StrokeConverter, tmp_path: Path) -> None:
        path = tmp_path / "font.pfb"
        path.write_bytes(b"\x80\x01")
        outcome = converter.render("H", path)
        assert not outcome.success
        assert "Unsupported" in outcome.errors[0]

    def test_bad_page_size(self, converter: Text2StrokeConverter, hershey_file: Path) -> None:
        outcome = converter.render("H", hershey_file, page_size="huge")
        assert not outcome.success
        assert "page size" in outcome.errors[0]

    def test_bad_font_size(self, converter: Text2StrokeConverter, hershey_file: Path) -> None:
        outcome = converter.render("H", hershey_file, font_size=0)
        assert not outcome.success

    def test_corrupt_outline_font(self, converter: Text2StrokeConverter, tmp_path: Path) -> None:
        path = tmp_path / "broken.ttf"
        path.write_bytes(b"garbage garbage garbage")
        outcome = converter.render("A", path)
        assert not outcome.success
        assert outcome.errors

    def test_corrupt_glyph_data(self, converter: Text2StrokeConverter, outline_font_file: Path) -> None:
        """Glyph data fontTools only reads at draw time still fails as a value."""
        corrupt_table(outline_font_file, "glyf")
        outcome = converter.render("A", outline_font_file)
        assert not outcome.success
        assert outcome.result is None
        assert outcome.errors

    def test_malformed_hershey_record(self, converter: Text2StrokeConverter, tmp_path: Path) -> None:
        """A record with a non-ASCII id is skipped; the render still succeeds."""
        path = tmp_path / "odd.jhf"
        path.write_text("    1  1JZ\n    \u00b2  1MWRMRW\n    3  3MWRMRW\n", encoding="latin-1")
        outcome = converter.render("!\"", path)
        assert outcome.success, outcome.errors
        assert outcome.missing == ("!",)
        assert len(outcome.result.placed_glyphs) == 1


class TestExport:
    """SVG and JSON export."""

    def test_render_to_file(self, converter: Text2StrokeConverter, hershey_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out" / "hello.svg"
        json_out = tmp_path / "out" / "hello.json"
        outcome = converter.render_to_file("HH", hershey_file, out, json_out, font_size=30)
        assert outcome.success
        assert outcome.output_path == out
        assert out.read_text(encoding="utf-8") == outcome.result.document

        data = json.loads(json_out.read_text(encoding="utf-8"))
        assert set(data) == {"text", "placed_glyphs", "document", "metadata"}
        assert data["text"] == "HH"
        assert data["placed_glyphs"][1]["x"] == pytest.approx(21)
        assert data["metadata"]["source_format"] == "stroke"

    def test_render_to_file_failure_writes_nothing(
        self, converter: Text2StrokeConverter, tmp_path: Path
    ) -> None:
        out = tmp_path / "never.svg"
        outcome = converter.render_to_file("H", tmp_path / "missing.jhf", out)
        assert not outcome.success
        assert not out.exists()
