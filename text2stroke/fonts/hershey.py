"""Hershey ``.jhf`` stroke-font decoder.

Each non-blank line is one glyph record::

    IIIIICCCLRxyxyxy...

``IIIII`` is the glyph id, ``CCC`` the vertex count, ``L``/``R`` the left and
right bearings, and the rest a packed stream of coordinate pairs. Every
coordinate is a single character offset from ``'R'`` (ASCII 82). The pair
``" R"`` lifts the pen; ``"R "`` at the start of the stream is a leading
marker. Neither draws anything.

Glyphs are numbered by line, not by the id column: line 1 is the space
character (code 32), line 34 is ``'A'`` and so on.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from text2stroke.exceptions import FontNotFoundError, FontParseError
from text2stroke.geometry import Bounds
from text2stroke.models import FontTable, Glyph, SourceFormat

logger = logging.getLogger(__name__)

ORIGIN = ord("R")
FIRST_CODE_OFFSET = 31
PEN_UP = " R"
LEADING_MARKER = "R "

#: Nominal full height of a Hershey glyph, used as its units-per-em.
UNITS_PER_EM = 25.0
DEFAULT_ASCENT = 25.0
DEFAULT_DESCENT = 0.0
#: 0.4 em, matching the layout's space fallback for this format.
DEFAULT_ADVANCE = UNITS_PER_EM * 0.4

# ASCII digits only; str.isdigit() also accepts the Latin-1 superscripts.
_NUMBER = re.compile(r"[0-9]+")
_LOOSE_RECORD = re.compile(r"^\s*([0-9]+)\s+([0-9]+)(.+)$")


class PenState(Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class HersheyRecord:
    """A parsed line before coordinate decoding."""

    glyph_id: int
    vertex_count: int
    data: str

    @property
    def bearings(self) -> str:
        return self.data[:2]

    @property
    def coordinates(self) -> str:
        return self.data[2:]


def parse_record(line: str) -> HersheyRecord | None:
    """Split one line into id, count and data; None if the shape is wrong."""
    head_id, head_count = line[0:5], line[5:8]
    if len(line) > 8 and _NUMBER.fullmatch(head_id.strip()) and _NUMBER.fullmatch(head_count.strip()):
        return HersheyRecord(int(head_id), int(head_count), line[8:])
    match = _LOOSE_RECORD.match(line)
    if match is None:
        return None
    return HersheyRecord(int(match.group(1)), int(match.group(2)), match.group(3))


def decode_point(pair: str) -> tuple[int, int]:
    return ord(pair[0]) - ORIGIN, ord(pair[1]) - ORIGIN


def decode_strokes(coords: str) -> list[tuple[str, int, int]]:
    """Run the pen state machine over a coordinate stream.

    Returns ``(command, x, y)`` triples where command is ``"M"`` or ``"L"``.
    """
    commands: list[tuple[str, int, int]] = []
    state = PenState.UP
    for index in range(0, len(coords) - 1, 2):
        pair = coords[index : index + 2]
        if pair == PEN_UP:
            state = PenState.UP
            continue
        if index == 0 and pair == LEADING_MARKER:
            continue
        x, y = decode_point(pair)
        if state is PenState.UP:
            commands.append(("M", x, y))
            state = PenState.DOWN
        else:
            commands.append(("L", x, y))
    return commands


def commands_to_path(commands: list[tuple[str, int, int]]) -> str:
    return " ".join(f"{op} {x} {y}" for op, x, y in commands)


class StrokeFontDecoder:
    """Decode Hershey font text into a :class:`FontTable`."""

    source_format = SourceFormat.STROKE

    def decode(self, content: str, name: str = "") -> FontTable:
        glyphs: dict[int, Glyph] = {}
        skipped = 0
        lines = [line.rstrip("\r\n") for line in content.split("\n") if line.strip()]

        for number, line in enumerate(lines, start=1):
            code = number + FIRST_CODE_OFFSET
            record = parse_record(line)
            if record is None:
                skipped += 1
                logger.debug("Skipping malformed Hershey line %d: %r", number, line[:40])
                continue
            glyph = self._decode_glyph(record)
            if glyph is not None:
                glyphs[code] = glyph

        if skipped:
            logger.debug("Skipped %d malformed Hershey records", skipped)

        ascent, descent = self._vertical_metrics(glyphs)
        return FontTable(
            glyphs=glyphs,
            source_format=SourceFormat.STROKE,
            units_per_em=UNITS_PER_EM,
            ascent=ascent,
            descent=descent,
            default_advance_width=DEFAULT_ADVANCE,
            name=name,
        )

    def decode_file(self, path: Path) -> FontTable:
        try:
            content = path.read_text(encoding="latin-1")
        except FileNotFoundError as exc:
            raise FontNotFoundError(path) from exc
        except OSError as exc:
            raise FontParseError(f"Cannot read Hershey font {path}: {exc}") from exc
        table = self.decode(content, name=path.stem)
        return replace(table, path=path)

    def _decode_glyph(self, record: HersheyRecord) -> Glyph | None:
        coords = record.coordinates
        if len(coords) < 2:
            return None
        commands = decode_strokes(coords)
        if not commands:
            return None
        left = right = None
        if len(record.bearings) == 2:
            left, right = decode_point(record.bearings)
        advance = float(right - left) if left is not None and right is not None and right > left else 0.0
        return Glyph(
            path_data=commands_to_path(commands),
            advance_width=advance,
            bounds=Bounds.from_points((x, y) for _, x, y in commands),
            left=left,
            right=right,
        )

    @staticmethod
    def _vertical_metrics(glyphs: dict[int, Glyph]) -> tuple[float, float]:
        boxes = [g.bounds for g in glyphs.values() if g.bounds is not None]
        if not boxes:
            return DEFAULT_ASCENT, DEFAULT_DESCENT
        # Hershey y grows downward, so the highest point has the smallest y.
        return float(-min(b.min_y for b in boxes)), float(-max(b.max_y for b in boxes))
