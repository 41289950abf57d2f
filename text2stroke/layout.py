"""Text layout: characters in, positioned glyphs out.

Lines are laid out top to bottom with a fixed line height of 1.5 times the
font size. Each line starts its cursor at x = 0; how far the cursor moves
after each character is decided by the table's format handler.
"""

from __future__ import annotations

import logging
import re
from enum import Enum

from text2stroke.exceptions import RenderError
from text2stroke.formats.base import FontFormat
from text2stroke.formats.registry import get_format
from text2stroke.models import FontTable, LayoutResult, PlacedGlyph

logger = logging.getLogger(__name__)

LINE_HEIGHT_RATIO = 1.5

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class MissingGlyphPolicy(str, Enum):
    """What to do with a non-whitespace character the font cannot draw."""

    #: Skip it entirely: no glyph, no cursor movement.
    DROP = "drop"
    #: Skip the glyph but move the cursor by the whitespace step.
    ADVANCE = "advance"


def split_lines(text: str) -> list[str]:
    return _LINE_BREAK.split(text)


class TextLayoutEngine:
    """Place the characters of ``text`` using a FontTable."""

    def __init__(self, missing_policy: MissingGlyphPolicy = MissingGlyphPolicy.DROP) -> None:
        self.missing_policy = MissingGlyphPolicy(missing_policy)

    def layout(
        self,
        table: FontTable,
        text: str,
        font_size: float,
        char_spacing: float = 1.0,
        page_rotated: bool = False,
        handler: FontFormat | None = None,
    ) -> LayoutResult:
        if font_size <= 0:
            raise RenderError(f"font_size must be positive, got {font_size}")
        if char_spacing < 0:
            raise RenderError(f"char_spacing must not be negative, got {char_spacing}")

        handler = handler or get_format(table.source_format)
        line_height = font_size * LINE_HEIGHT_RATIO
        placed: list[PlacedGlyph] = []
        missing: list[str] = []
        max_width = 0.0
        lines = split_lines(text)

        for line_index, line in enumerate(lines):
            x = 0.0
            y = line_index * line_height
            for character in line:
                glyph = table.glyphs.get(ord(character))
                if glyph is not None and glyph.has_path:
                    step = handler.layout_step(table, glyph, font_size, char_spacing)
                    placed.append(PlacedGlyph(character, glyph.path_data, x, y, line_index, step))
                    x += step
                elif character.isspace():
                    step = handler.space_step(table, glyph, font_size, char_spacing)
                    placed.append(PlacedGlyph(character, None, x, y, line_index, step))
                    x += step
                else:
                    missing.append(character)
                    logger.debug("No glyph for %r (U+%04X) in %s", character, ord(character), table.name)
                    if self.missing_policy is MissingGlyphPolicy.ADVANCE:
                        x += handler.space_step(table, None, font_size, char_spacing)
                max_width = max(max_width, x)

        return LayoutResult(
            placed_glyphs=tuple(placed),
            max_width=max_width,
            line_count=len(lines),
            line_height=line_height,
            missing=tuple(missing),
            page_rotated=page_rotated,
        )


def layout(
    table: FontTable,
    text: str,
    font_size: float,
    char_spacing: float = 1.0,
    page_rotated: bool = False,
    missing_policy: MissingGlyphPolicy = MissingGlyphPolicy.DROP,
) -> LayoutResult:
    """Functional shortcut for :meth:`TextLayoutEngine.layout`."""
    return TextLayoutEngine(missing_policy).layout(table, text, font_size, char_spacing, page_rotated)
