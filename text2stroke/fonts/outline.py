"""TrueType/OpenType support through fontTools.

The outline format is not decoded by text2stroke itself: fontTools parses
the binary and draws glyphs through pens. This module only adapts that
capability to the FontTable shape used by layout and emission.
"""

from __future__ import annotations

import logging
import struct
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont, TTLibError

from text2stroke.exceptions import FontNotFoundError, FontParseError
from text2stroke.geometry import Bounds, fmt_number
from text2stroke.models import FontTable, Glyph, SourceFormat

logger = logging.getLogger(__name__)

PATH_PRECISION = 3

#: What fontTools raises for corrupt tables it only reads on first use.
BROKEN_FONT_ERRORS = (TTLibError, struct.error, IndexError, KeyError, AssertionError)


@dataclass(frozen=True)
class OutlinePath:
    """A glyph drawn in device units."""

    d: str
    advance_width: float
    bounds: Bounds | None


def _ntos(value: float) -> str:
    return fmt_number(value, PATH_PRECISION)


class OutlineFontAdapter:
    """Draw glyphs of a loaded :class:`~fontTools.ttLib.TTFont`.

    fontTools loads tables lazily and is not safe for concurrent drawing, so
    every draw holds an internal lock.
    """

    def __init__(self, ttfont: TTFont) -> None:
        self._font = ttfont
        self._lock = threading.RLock()
        self._cmap: dict[int, str] = ttfont.getBestCmap() or {}
        self._glyph_set = ttfont.getGlyphSet()
        self.units_per_em = float(ttfont["head"].unitsPerEm)
        self.ascent, self.descent = self._vertical_metrics(ttfont, self.units_per_em)

    @staticmethod
    def _vertical_metrics(ttfont: TTFont, units_per_em: float) -> tuple[float, float]:
        if "hhea" in ttfont:
            hhea = ttfont["hhea"]
            return float(hhea.ascent), float(hhea.descent)
        if "OS/2" in ttfont:
            os2 = ttfont["OS/2"]
            return float(os2.sTypoAscender), float(os2.sTypoDescender)
        return units_per_em * 0.8, -units_per_em * 0.2

    @property
    def codepoints(self) -> list[int]:
        return sorted(self._cmap)

    def family_name(self) -> str:
        name_table = self._font["name"] if "name" in self._font else None
        if name_table is None:
            return ""
        return str(name_table.getDebugName(16) or name_table.getDebugName(1) or "")

    def glyph_name(self, code: int) -> str | None:
        return self._cmap.get(code)

    def advance_width(self, code: int) -> float | None:
        """Advance in font units, or None for unmapped code points."""
        name = self.glyph_name(code)
        if name is None:
            return None
        with self._lock:
            try:
                return float(self._glyph_set[name].width)
            except BROKEN_FONT_ERRORS as exc:
                raise FontParseError(f"Cannot read metrics for glyph {name!r}: {exc}") from exc

    def font_unit_glyph(self, code: int) -> Glyph | None:
        """The glyph in font units (Y up), as stored in the FontTable."""
        name = self.glyph_name(code)
        if name is None:
            return None
        with self._lock:
            pen = SVGPathPen(self._glyph_set, ntos=_ntos)
            bounds_pen = BoundsPen(self._glyph_set)
            try:
                glyph = self._glyph_set[name]
                glyph.draw(pen)
                glyph.draw(bounds_pen)
            except BROKEN_FONT_ERRORS as exc:
                raise FontParseError(f"Cannot draw glyph {name!r}: {exc}") from exc
            d = pen.getCommands()
            box = bounds_pen.bounds
            width = float(glyph.width)
        return Glyph(path_data=d, advance_width=width, bounds=Bounds(*box) if box else None)

    def get_path(self, character: str, origin_x: float, origin_y: float, font_size: float) -> OutlinePath | None:
        """Draw ``character`` with its baseline origin at ``(origin_x, origin_y)``.

        Coordinates are scaled to ``font_size`` and flipped to screen
        orientation (Y down). Returns None for unmapped characters.
        """
        name = self.glyph_name(ord(character))
        if name is None:
            return None
        scale = font_size / self.units_per_em
        matrix = (scale, 0, 0, -scale, origin_x, origin_y)
        with self._lock:
            pen = SVGPathPen(self._glyph_set, ntos=_ntos)
            bounds_pen = BoundsPen(self._glyph_set)
            try:
                glyph = self._glyph_set[name]
                glyph.draw(TransformPen(pen, matrix))
                glyph.draw(TransformPen(bounds_pen, matrix))
            except BROKEN_FONT_ERRORS as exc:
                raise FontParseError(f"Cannot draw glyph {name!r}: {exc}") from exc
            d = pen.getCommands()
            box = bounds_pen.bounds
            advance = float(glyph.width) * scale
        return OutlinePath(d=d, advance_width=advance, bounds=Bounds(*box) if box else None)


class OutlineGlyphMap(Mapping):
    """Lazy, memoised ``code point -> Glyph`` view over an outline font.

    Large CJK fonts map tens of thousands of code points; drawing them all up
    front would make every font load slow.
    """

    def __init__(self, adapter: OutlineFontAdapter) -> None:
        self._adapter = adapter
        self._memo: dict[int, Glyph] = {}

    def __getitem__(self, code: int) -> Glyph:
        glyph = self._memo.get(code)
        if glyph is None:
            glyph = self._adapter.font_unit_glyph(code)
            if glyph is None:
                raise KeyError(code)
            self._memo[code] = glyph
        return glyph

    def __iter__(self) -> Iterator[int]:
        return iter(self._adapter.codepoints)

    def __len__(self) -> int:
        return len(self._adapter.codepoints)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, int) and self._adapter.glyph_name(code) is not None


def _open_ttfont(source: BytesIO | Path, font_number: int) -> TTFont:
    try:
        ttfont = TTFont(source, fontNumber=font_number, lazy=True)
        ttfont["head"]  # force the header to load so bad data fails here
        return ttfont
    except BROKEN_FONT_ERRORS as exc:
        raise FontParseError(f"Cannot parse outline font: {exc}") from exc


def table_from_ttfont(ttfont: TTFont, name: str = "", path: Path | None = None) -> FontTable:
    try:
        adapter = OutlineFontAdapter(ttfont)
    except BROKEN_FONT_ERRORS as exc:
        raise FontParseError(f"Outline font is missing required tables: {exc}") from exc
    space_advance = adapter.advance_width(ord(" "))
    default_advance = space_advance if space_advance else adapter.units_per_em / 2
    table = FontTable(
        glyphs=OutlineGlyphMap(adapter),
        source_format=SourceFormat.OUTLINE,
        units_per_em=adapter.units_per_em,
        ascent=adapter.ascent,
        descent=adapter.descent,
        default_advance_width=default_advance,
        name=name or adapter.family_name(),
        path=path,
        adapter=adapter,
    )
    logger.debug("Outline font %s: %d mapped code points", table.name, len(adapter.codepoints))
    return table


def decode_outline(data: bytes, name: str = "", font_number: int = 0) -> FontTable:
    """Build a FontTable from TrueType/OpenType bytes."""
    return table_from_ttfont(_open_ttfont(BytesIO(data), font_number), name=name)


def load_outline(path: Path, font_number: int = 0) -> FontTable:
    if not path.exists():
        raise FontNotFoundError(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise FontParseError(f"Cannot read outline font {path}: {exc}") from exc
    ttfont = _open_ttfont(BytesIO(data), font_number)
    return table_from_ttfont(ttfont, name=path.stem, path=path)
