"""Base class for per-format font capabilities.

Each :class:`SourceFormat` has exactly one handler. The handler owns every
format-specific decision in the pipeline (how to decode a source, how far
the cursor moves after a glyph, and how a placed glyph becomes a path
fragment), so layout and emission never branch on the format themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from text2stroke.geometry import fmt_number
from text2stroke.models import FontTable, Fragment, Glyph, PlacedGlyph, SourceFormat


class FontFormat(ABC):
    """Capability interface for one font representation."""

    source_format: SourceFormat
    extensions: tuple[str, ...] = ()

    def can_handle(self, source: Any) -> bool:
        """Check if this handler can load the given source.

        Args:
            source: A path (str or Path) to a font file.

        Returns:
            True if the file extension belongs to this format.
        """
        if not isinstance(source, (str, Path)):
            return False
        return Path(source).suffix.lower() in self.extensions

    @abstractmethod
    def decode(self, content: Any, name: str = "") -> FontTable:
        """Decode in-memory font content into a FontTable."""

    @abstractmethod
    def load(self, path: Path) -> FontTable:
        """Read and decode a font file.

        Raises:
            FontNotFoundError: If the file does not exist.
            FontParseError: If the file cannot be read or decoded.
        """

    def scale(self, table: FontTable, font_size: float) -> float:
        """Font units to layout units."""
        return font_size / table.units_per_em

    @abstractmethod
    def layout_step(self, table: FontTable, glyph: Glyph, font_size: float, char_spacing: float) -> float:
        """Cursor advance after a drawable glyph."""

    @abstractmethod
    def space_step(self, table: FontTable, glyph: Glyph | None, font_size: float, char_spacing: float) -> float:
        """Cursor advance for whitespace that has no drawable glyph."""

    @abstractmethod
    def emit_fragment(
        self, table: FontTable, placed: PlacedGlyph, font_size: float, precision: int = 3
    ) -> Fragment | None:
        """Turn a placed glyph into a positioned path fragment."""

    def baseline_offset(self, table: FontTable, font_size: float) -> float:
        """Vertical shift of the glyph group so line 0 sits below the top edge."""
        return table.ascent * self.scale(table, font_size)


def format_transform(x: float, y: float, sx: float, sy: float | None = None, precision: int = 3) -> str:
    """``translate(x,y) scale(sx[,sy])`` with compact numbers."""
    translate = f"translate({fmt_number(x, precision)},{fmt_number(y, precision)})"
    if sy is None:
        return f"{translate} scale({fmt_number(sx, precision + 3)})"
    return f"{translate} scale({fmt_number(sx, precision + 3)},{fmt_number(sy, precision + 3)})"
