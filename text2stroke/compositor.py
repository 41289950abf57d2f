"""Compose emitted fragments into a physically sized SVG document.

Two sizing modes:

* fit-to-content: the document hugs the drawn geometry plus a fixed padding,
  and its physical size follows from the 96 px/in coordinate space;
* fixed page: the document declares a page size in inches (swapped when
  rotated) and places the text group at the top-left margin.

The internal coordinate space is always pixels at 96 DPI; only the declared
``width``/``height`` carry physical units.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from text2stroke.exceptions import PageSpecError
from text2stroke.geometry import Bounds, fmt_number, union_all
from text2stroke.models import DPI, Emission, Fragment, Margins, PageSpec

SVG_NS = "http://www.w3.org/2000/svg"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

#: Space around fit-to-content geometry, in pixels.
PADDING = 20.0

#: Named page sizes in inches (portrait).
NAMED_PAGE_SIZES: dict[str, tuple[float, float]] = {
    "letter": (8.5, 11.0),
    "legal": (8.5, 14.0),
    "tabloid": (11.0, 17.0),
    "a3": (11.69, 16.54),
    "a4": (8.27, 11.69),
    "a5": (5.83, 8.27),
    "a6": (4.13, 5.83),
}

_PAGE_SIZE = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*[xX×]\s*(\d+(?:\.\d+)?|\.\d+)\s*(?:in)?\s*$")


def parse_page_size(value: str, rotated: bool = False, margins: Margins | None = None) -> PageSpec:
    """Parse ``"<W>x<H>"`` (inches) or a named size into a PageSpec.

    Raises:
        PageSpecError: If the string is not a recognised size.
    """
    if not isinstance(value, str) or not value.strip():
        raise PageSpecError("Page size must be a non-empty string like '4x6'")
    margins = margins or Margins()
    named = NAMED_PAGE_SIZES.get(value.strip().lower())
    if named is not None:
        width, height = named
    else:
        match = _PAGE_SIZE.match(value)
        if match is None:
            raise PageSpecError(f"Invalid page size {value!r}; expected '<W>x<H>' in inches")
        width, height = float(match.group(1)), float(match.group(2))
    if width <= 0 or height <= 0:
        raise PageSpecError(f"Page dimensions must be positive: {value!r}")
    for side, margin in margins.to_dict().items():
        if margin < 0:
            raise PageSpecError(f"Margin {side} must not be negative")
    return PageSpec(width=width, height=height, rotated=rotated, margins=margins)


def style_rule(stroke_width: float, precision: int = 3) -> str:
    return (
        "path { fill:none; stroke:black; "
        f"stroke-width:{fmt_number(stroke_width, precision)}; "
        "stroke-linecap:round; stroke-linejoin:round; }"
    )


class PageCompositor:
    """Wrap fragments into the final SVG document."""

    def __init__(self, precision: int = 3, padding: float = PADDING) -> None:
        self.precision = precision
        self.padding = padding

    def _fmt(self, value: float) -> str:
        return fmt_number(value, self.precision)

    def content_bounds(self, fragments: tuple[Fragment, ...] | list[Fragment]) -> Bounds:
        """Union of fragment bounds; a zero box at the origin when empty."""
        return union_all(f.bounds for f in fragments) or Bounds(0.0, 0.0, 0.0, 0.0)

    def compose(
        self,
        emission: Emission | list[Fragment] | tuple[Fragment, ...],
        page_spec: PageSpec | None = None,
        stroke_width: float = 1.0,
    ) -> str:
        if isinstance(emission, Emission):
            fragments, offset_y = emission.fragments, emission.offset_y
        else:
            fragments, offset_y = tuple(emission), 0.0

        if page_spec is None:
            view_w, view_h, tx, ty = self._fit_to_content(fragments)
            width_in, height_in = view_w / DPI, view_h / DPI
        else:
            width_in, height_in = page_spec.effective_size
            view_w, view_h = width_in * DPI, height_in * DPI
            tx = page_spec.margins.left * DPI
            ty = page_spec.margins.top * DPI + offset_y

        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "viewBox": f"0 0 {self._fmt(view_w)} {self._fmt(view_h)}",
                "width": f"{self._fmt(width_in)}in",
                "height": f"{self._fmt(height_in)}in",
            },
        )
        style = ET.SubElement(root, "style")
        style.text = style_rule(stroke_width, self.precision)
        group = ET.SubElement(root, "g", {"transform": f"translate({self._fmt(tx)},{self._fmt(ty)})"})
        for fragment in fragments:
            attrs = {"d": fragment.d}
            if fragment.transform:
                attrs["transform"] = fragment.transform
            ET.SubElement(group, "path", attrs)

        ET.indent(root, space="  ")
        return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"

    def _fit_to_content(self, fragments: tuple[Fragment, ...]) -> tuple[float, float, float, float]:
        box = self.content_bounds(fragments)
        view_w = box.width + self.padding * 2
        view_h = box.height + self.padding * 2
        return view_w, view_h, self.padding - box.min_x, self.padding - box.min_y
