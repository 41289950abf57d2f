"""Small geometry helpers shared by decoders, emitter and compositor."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]]) -> Bounds | None:
        """Return the box around ``points``, or None when there are none."""
        xs: list[float] = []
        ys: list[float] = []
        for x, y in points:
            xs.append(x)
            ys.append(y)
        if not xs:
            return None
        return cls(min(xs), min(ys), max(xs), max(ys))

    def union(self, other: Bounds | None) -> Bounds:
        if other is None:
            return self
        return Bounds(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def transformed(self, sx: float, sy: float, tx: float = 0.0, ty: float = 0.0) -> Bounds:
        """Map the box through ``translate(tx, ty) scale(sx, sy)``.

        Negative scales flip the box, so min/max are re-sorted.
        """
        x1, x2 = self.min_x * sx + tx, self.max_x * sx + tx
        y1, y2 = self.min_y * sy + ty, self.max_y * sy + ty
        return Bounds(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))


def union_all(boxes: Iterable[Bounds | None]) -> Bounds | None:
    """Union of every non-None box, or None if there is nothing to union."""
    result: Bounds | None = None
    for box in boxes:
        if box is None:
            continue
        result = box if result is None else result.union(box)
    return result


def fmt_number(value: float, precision: int = 3) -> str:
    """Format a coordinate compactly: ``4.0 -> "4"``, ``0.125 -> "0.125"``."""
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text
