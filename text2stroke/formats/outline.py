"""TrueType/OpenType capabilities, delegating glyph drawing to fontTools."""

from __future__ import annotations

from pathlib import Path

from text2stroke.exceptions import FontParseError
from text2stroke.fonts.outline import decode_outline, load_outline
from text2stroke.formats.base import FontFormat
from text2stroke.models import FontTable, Fragment, Glyph, PlacedGlyph, SourceFormat


class OutlineFormat(FontFormat):
    source_format = SourceFormat.OUTLINE
    extensions = (".ttf", ".otf", ".ttc", ".otc")

    def decode(self, content: bytes, name: str = "") -> FontTable:
        return decode_outline(content, name=name)

    def load(self, path: Path) -> FontTable:
        return load_outline(path)

    def layout_step(self, table: FontTable, glyph: Glyph, font_size: float, char_spacing: float) -> float:
        return glyph.advance_width * self.scale(table, font_size) * char_spacing

    def space_step(self, table: FontTable, glyph: Glyph | None, font_size: float, char_spacing: float) -> float:
        advance = glyph.advance_width if glyph is not None and glyph.advance_width > 0 else table.default_advance_width
        return advance * self.scale(table, font_size) * char_spacing

    def emit_fragment(
        self, table: FontTable, placed: PlacedGlyph, font_size: float, precision: int = 3
    ) -> Fragment | None:
        if not placed.path:
            return None
        if table.adapter is None:
            raise FontParseError(f"Outline table {table.name!r} has no font adapter")
        drawn = table.adapter.get_path(placed.character, placed.x, placed.y, font_size)
        if drawn is None or not drawn.d:
            return None
        return Fragment(character=placed.character, d=drawn.d, transform=None, bounds=drawn.bounds)
