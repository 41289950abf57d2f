"""Turn placed glyphs into positioned SVG path fragments."""

from __future__ import annotations

from text2stroke.formats.registry import get_format
from text2stroke.models import Emission, FontTable, Fragment, LayoutResult, PlacedGlyph


class PathEmitter:
    """Emit one :class:`Fragment` per drawable placed glyph.

    Whitespace and other path-less glyphs keep their slot in the layout but
    produce no fragment.
    """

    def __init__(self, precision: int = 3) -> None:
        self.precision = precision

    def emit(self, table: FontTable, placed: LayoutResult | tuple[PlacedGlyph, ...], font_size: float) -> Emission:
        handler = get_format(table.source_format)
        glyphs = placed.placed_glyphs if isinstance(placed, LayoutResult) else placed
        fragments: list[Fragment] = []
        for glyph in glyphs:
            fragment = handler.emit_fragment(table, glyph, font_size, self.precision)
            if fragment is not None:
                fragments.append(fragment)
        return Emission(fragments=tuple(fragments), offset_y=handler.baseline_offset(table, font_size))
