"""Path-data helpers backed by ``svg.path``."""

from __future__ import annotations

import logging

from svg.path import Close, Line, Move, parse_path

from text2stroke.geometry import Bounds

logger = logging.getLogger(__name__)

# Samples per curved segment when estimating bounds.
CURVE_SAMPLES = 16


def path_points(d: str) -> list[tuple[float, float]]:
    """Return the points that bound ``d``: endpoints, plus curve samples."""
    points: list[complex] = []
    for segment in parse_path(d):
        if isinstance(segment, Move):
            points.append(segment.end)
        elif isinstance(segment, (Line, Close)):
            points.extend((segment.start, segment.end))
        else:
            points.extend(segment.point(i / CURVE_SAMPLES) for i in range(CURVE_SAMPLES + 1))
    return [(p.real, p.imag) for p in points if p is not None]


def path_bounds(d: str) -> Bounds | None:
    """Bounding box of SVG path data, or None for empty/unparseable data."""
    if not d or not d.strip():
        return None
    try:
        return Bounds.from_points(path_points(d))
    except (ValueError, IndexError) as exc:
        logger.debug("Could not measure path %r: %s", d[:40], exc)
        return None
