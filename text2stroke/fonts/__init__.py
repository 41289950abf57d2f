"""Font decoders for text2stroke.

This subpackage provides:
- Hershey (.jhf) stroke-font decoding
- Single-line SVG font decoding
- TrueType/OpenType access through fontTools

The per-path cache and the font catalog live in ``text2stroke.fonts.cache``
and ``text2stroke.fonts.catalog``. They depend on the format registry, which
in turn depends on the decoders here, so they are not re-exported.
"""

from text2stroke.fonts.hershey import StrokeFontDecoder
from text2stroke.fonts.outline import OutlineFontAdapter, OutlinePath, decode_outline, load_outline
from text2stroke.fonts.svgfont import LineFontDecoder, resolve_unicode

__all__ = [
    "LineFontDecoder",
    "OutlineFontAdapter",
    "OutlinePath",
    "StrokeFontDecoder",
    "decode_outline",
    "load_outline",
    "resolve_unicode",
]
