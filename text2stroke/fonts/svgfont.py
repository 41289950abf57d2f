"""Single-line SVG font decoder.

Reads ``<font>``/``<font-face>`` metrics and ``<glyph>`` elements from an SVG
font resource. Attribute extraction goes through :class:`FontDocument`, which
is built either from a real XML parse (defusedxml) or, when the file is not
well-formed, from a tolerant tag tokenizer so that the readable glyphs still
load.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from text2stroke.exceptions import FontNotFoundError, FontParseError
from text2stroke.models import FontTable, Glyph, SourceFormat
from text2stroke.pathdata import path_bounds

logger = logging.getLogger(__name__)

DEFAULT_UNITS_PER_EM = 1000.0
DEFAULT_ASCENT = 800.0
DEFAULT_DESCENT = -200.0
DEFAULT_ADVANCE = 500.0

_HEX_REF = re.compile(r"&#[xX]([0-9a-fA-F]+);")
_DEC_REF = re.compile(r"&#([0-9]+);")
_TAG = re.compile(r"<\s*([A-Za-z_][\w:.-]*)((?:\s+[^<>]*?)?)\s*/?>", re.DOTALL)
_ATTR = re.compile(r"([A-Za-z_][\w:.-]*)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')", re.DOTALL)


@dataclass
class FontDocument:
    """Attribute dictionaries for the elements a line font needs."""

    font: dict[str, str] = field(default_factory=dict)
    face: dict[str, str] = field(default_factory=dict)
    glyphs: list[dict[str, str]] = field(default_factory=list)

    def metric(self, name: str) -> str | None:
        """Look a metric up on ``<font-face>`` first, then ``<font>``."""
        return self.face.get(name, self.font.get(name))


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1].split(":")[-1]


def scan_xml(content: str) -> FontDocument:
    """Build a FontDocument from a well-formed XML document.

    Raises:
        ParseError: if ``content`` is not well-formed.
    """
    root = ET.fromstring(content)
    doc = FontDocument()
    for element in root.iter():
        name = _local_name(element.tag) if isinstance(element.tag, str) else ""
        attrs = {_local_name(k): v for k, v in element.attrib.items()}
        if name == "font" and not doc.font:
            doc.font = attrs
        elif name == "font-face" and not doc.face:
            doc.face = attrs
        elif name == "glyph":
            doc.glyphs.append(attrs)
    return doc


def scan_tags(content: str) -> FontDocument:
    """Tokenize tags with regular expressions; tolerant of broken markup."""
    doc = FontDocument()
    for tag_match in _TAG.finditer(content):
        name = _local_name(tag_match.group(1))
        if name not in ("font", "font-face", "glyph"):
            continue
        attrs: dict[str, str] = {}
        for attr in _ATTR.finditer(tag_match.group(2) or ""):
            value = attr.group(2) if attr.group(2) is not None else attr.group(3)
            attrs[_local_name(attr.group(1))] = html.unescape(value)
        if name == "font" and not doc.font:
            doc.font = attrs
        elif name == "font-face" and not doc.face:
            doc.face = attrs
        elif name == "glyph":
            doc.glyphs.append(attrs)
    return doc


def resolve_unicode(value: str | None) -> int | None:
    """Resolve a ``unicode`` attribute to a single code point.

    Accepts a literal character, ``&#NN;`` or ``&#xHH;``. Anything that does
    not name exactly one code point (ligatures, empty values) yields None.
    """
    if not value:
        return None
    match = _HEX_REF.fullmatch(value)
    if match:
        code = int(match.group(1), 16)
    else:
        match = _DEC_REF.fullmatch(value)
        if match:
            code = int(match.group(1))
        elif len(value) == 1:
            code = ord(value)
        else:
            return None
    if code > 0x10FFFF:
        return None
    return code


def _to_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value.strip())
    except ValueError:
        logger.debug("Non-numeric metric %r, using %s", value, default)
        return default


class LineFontDecoder:
    """Decode an SVG font into a :class:`FontTable`."""

    source_format = SourceFormat.LINE

    def decode(self, content: str, name: str = "") -> FontTable:
        doc = self._scan(content)

        units_per_em = _to_float(doc.metric("units-per-em"), DEFAULT_UNITS_PER_EM)
        if units_per_em <= 0:
            units_per_em = DEFAULT_UNITS_PER_EM
        ascent = _to_float(doc.metric("ascent"), DEFAULT_ASCENT)
        descent = _to_float(doc.metric("descent"), DEFAULT_DESCENT)
        default_advance = _to_float(doc.font.get("horiz-adv-x"), DEFAULT_ADVANCE)

        glyphs: dict[int, Glyph] = {}
        for attrs in doc.glyphs:
            code = resolve_unicode(attrs.get("unicode"))
            if code is None:
                logger.debug("Skipping glyph without a single-code-point unicode: %r", attrs.get("unicode"))
                continue
            d = (attrs.get("d") or "").strip()
            if not d:
                continue
            advance = _to_float(attrs.get("horiz-adv-x"), default_advance)
            glyphs[code] = Glyph(path_data=d, advance_width=max(advance, 0.0), bounds=path_bounds(d))

        logger.debug("Decoded %d line-font glyphs", len(glyphs))
        return FontTable(
            glyphs=glyphs,
            source_format=SourceFormat.LINE,
            units_per_em=units_per_em,
            ascent=ascent,
            descent=descent,
            default_advance_width=default_advance,
            name=name or doc.font.get("id", "") or doc.face.get("font-family", ""),
        )

    def decode_file(self, path: Path) -> FontTable:
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError as exc:
            raise FontNotFoundError(path) from exc
        except OSError as exc:
            raise FontParseError(f"Cannot read SVG font {path}: {exc}") from exc
        return replace(self.decode(content, name=path.stem), path=path)

    @staticmethod
    def _scan(content: str) -> FontDocument:
        try:
            return scan_xml(content)
        except ET.ParseError as exc:
            logger.warning("SVG font is not well-formed (%s); scanning tags instead", exc)
            return scan_tags(content)
        except DefusedXmlException as exc:
            raise FontParseError(f"Refusing to parse SVG font: {exc}") from exc
