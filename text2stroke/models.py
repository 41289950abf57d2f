"""Data objects flowing through the decode -> layout -> emit -> compose pipeline."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from text2stroke.geometry import Bounds

if TYPE_CHECKING:
    from text2stroke.fonts.outline import OutlineFontAdapter

#: Pixels per inch of the internal coordinate space.
DPI = 96.0

#: Default per-side page margin, in inches.
DEFAULT_MARGIN = 0.5


class SourceFormat(str, Enum):
    """The three font representations the pipeline understands."""

    STROKE = "stroke"
    LINE = "line"
    OUTLINE = "outline"


@dataclass(frozen=True)
class Glyph:
    """One decoded glyph.

    ``path_data`` is SVG path syntax in font units; it is empty for glyphs
    that only carry an advance (whitespace).
    """

    path_data: str
    advance_width: float
    bounds: Bounds | None = None
    left: int | None = None
    right: int | None = None

    @property
    def has_path(self) -> bool:
        return bool(self.path_data and self.path_data.strip())


@dataclass(frozen=True)
class FontTable:
    """Unified glyph table produced by every decoder."""

    glyphs: Mapping[int, Glyph]
    source_format: SourceFormat
    units_per_em: float
    ascent: float
    descent: float
    default_advance_width: float
    name: str = ""
    path: Path | None = field(default=None, compare=False)
    adapter: OutlineFontAdapter | None = field(default=None, compare=False, repr=False)

    def lookup(self, character: str) -> Glyph | None:
        return self.glyphs.get(ord(character))

    def __len__(self) -> int:
        return len(self.glyphs)


@dataclass(frozen=True)
class PlacedGlyph:
    """A character positioned in layout space.

    ``path`` is None for whitespace, which still occupies its slot so the
    cursor advance is accounted for.
    """

    character: str
    path: str | None
    x: float
    y: float
    line_index: int
    advance_width: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "character": self.character,
            "path": self.path,
            "x": self.x,
            "y": self.y,
            "line_index": self.line_index,
            "advance_width": self.advance_width,
        }


@dataclass(frozen=True)
class LayoutResult:
    placed_glyphs: tuple[PlacedGlyph, ...]
    max_width: float
    line_count: int
    line_height: float
    missing: tuple[str, ...] = ()
    page_rotated: bool = False


@dataclass(frozen=True)
class Margins:
    """Per-side page margins in inches."""

    top: float = DEFAULT_MARGIN
    right: float = DEFAULT_MARGIN
    bottom: float = DEFAULT_MARGIN
    left: float = DEFAULT_MARGIN

    @classmethod
    def uniform(cls, value: float) -> Margins:
        return cls(value, value, value, value)

    def to_dict(self) -> dict[str, float]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}


@dataclass(frozen=True)
class PageSpec:
    """A fixed physical page; width and height are in inches."""

    width: float
    height: float
    rotated: bool = False
    margins: Margins = field(default_factory=Margins)

    @property
    def effective_size(self) -> tuple[float, float]:
        """(width, height) after applying the rotation swap."""
        if self.rotated:
            return self.height, self.width
        return self.width, self.height

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "rotated": self.rotated,
            "margins": self.margins.to_dict(),
        }


@dataclass(frozen=True)
class Fragment:
    """One emitted ``<path>``; ``bounds`` is in group (layout) space."""

    character: str
    d: str
    transform: str | None = None
    bounds: Bounds | None = None


@dataclass(frozen=True)
class Emission:
    fragments: tuple[Fragment, ...]
    offset_y: float = 0.0


@dataclass(frozen=True)
class RenderResult:
    """Output of a single render request."""

    text: str
    placed_glyphs: tuple[PlacedGlyph, ...]
    document: str
    metadata: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "placed_glyphs": [g.to_dict() for g in self.placed_glyphs],
            "document": self.document,
            "metadata": self.metadata,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
