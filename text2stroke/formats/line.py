"""Single-line SVG font capabilities.

SVG fonts are authored Y-up, so fragments flip the Y axis and the glyph
group is pushed down by the scaled ascent to land on the baseline.
"""

from __future__ import annotations

from pathlib import Path

from text2stroke.fonts.svgfont import LineFontDecoder
from text2stroke.formats.base import FontFormat, format_transform
from text2stroke.models import FontTable, Fragment, Glyph, PlacedGlyph, SourceFormat


class LineFormat(FontFormat):
    source_format = SourceFormat.LINE
    extensions = (".svg",)

    def __init__(self) -> None:
        self._decoder = LineFontDecoder()

    def decode(self, content: str, name: str = "") -> FontTable:
        return self._decoder.decode(content, name=name)

    def load(self, path: Path) -> FontTable:
        return self._decoder.decode_file(path)

    def layout_step(self, table: FontTable, glyph: Glyph, font_size: float, char_spacing: float) -> float:
        return glyph.advance_width * self.scale(table, font_size) * char_spacing

    def space_step(self, table: FontTable, glyph: Glyph | None, font_size: float, char_spacing: float) -> float:
        return table.default_advance_width * self.scale(table, font_size) * char_spacing

    def emit_fragment(
        self, table: FontTable, placed: PlacedGlyph, font_size: float, precision: int = 3
    ) -> Fragment | None:
        if not placed.path:
            return None
        s = self.scale(table, font_size)
        glyph = table.lookup(placed.character)
        bounds = glyph.bounds.transformed(s, -s, placed.x, placed.y) if glyph and glyph.bounds else None
        return Fragment(
            character=placed.character,
            d=placed.path,
            transform=format_transform(placed.x, placed.y, s, -s, precision=precision),
            bounds=bounds,
        )
