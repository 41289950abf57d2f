"""Hershey stroke-font capabilities."""

from __future__ import annotations

from pathlib import Path

from text2stroke.fonts.hershey import StrokeFontDecoder
from text2stroke.formats.base import FontFormat, format_transform
from text2stroke.models import FontTable, Fragment, Glyph, PlacedGlyph, SourceFormat

#: Hershey carries no usable advance metric, so every glyph steps by a fixed
#: fraction of the font size.
CHAR_ADVANCE_RATIO = 0.7
SPACE_ADVANCE_RATIO = 0.4


class StrokeFormat(FontFormat):
    source_format = SourceFormat.STROKE
    extensions = (".jhf",)

    def __init__(self) -> None:
        self._decoder = StrokeFontDecoder()

    def decode(self, content: str, name: str = "") -> FontTable:
        return self._decoder.decode(content, name=name)

    def load(self, path: Path) -> FontTable:
        return self._decoder.decode_file(path)

    def layout_step(self, table: FontTable, glyph: Glyph, font_size: float, char_spacing: float) -> float:
        return font_size * CHAR_ADVANCE_RATIO * char_spacing

    def space_step(self, table: FontTable, glyph: Glyph | None, font_size: float, char_spacing: float) -> float:
        return font_size * SPACE_ADVANCE_RATIO * char_spacing

    def emit_fragment(
        self, table: FontTable, placed: PlacedGlyph, font_size: float, precision: int = 3
    ) -> Fragment | None:
        if not placed.path:
            return None
        s = self.scale(table, font_size)
        glyph = table.lookup(placed.character)
        bounds = glyph.bounds.transformed(s, s, placed.x, placed.y) if glyph and glyph.bounds else None
        return Fragment(
            character=placed.character,
            d=placed.path,
            transform=format_transform(placed.x, placed.y, s, precision=precision),
            bounds=bounds,
        )
