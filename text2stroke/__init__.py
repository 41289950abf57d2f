"""text2stroke: Turn text into single-stroke, plotter-ready SVG.

This library provides:
- Hershey (.jhf) stroke-font and single-line SVG font decoding
- TrueType/OpenType glyph outlines through fontTools
- Multi-line text layout with per-format advance rules
- Page composition in physical units (fixed page or fit-to-content)

Example:
    >>> from text2stroke import Text2StrokeConverter
    >>> converter = Text2StrokeConverter()
    >>> outcome = converter.render("Hello", "futural.jhf", page_size="4x6")
"""

from text2stroke.api import ConversionResult, Text2StrokeConverter
from text2stroke.config import Config
from text2stroke.exceptions import (
    ConfigError,
    FontNotFoundError,
    FontParseError,
    FormatNotSupportedError,
    PageSpecError,
    RenderError,
    Text2StrokeError,
)
from text2stroke.fonts.cache import FontCache
from text2stroke.layout import MissingGlyphPolicy, TextLayoutEngine
from text2stroke.models import FontTable, Glyph, PageSpec, PlacedGlyph, RenderResult, SourceFormat
from text2stroke.sequencing import RenderSequencer

__version__ = "0.1.0"

__all__ = [
    # Main API
    "Text2StrokeConverter",
    "ConversionResult",
    "RenderSequencer",
    "Config",
    # Pipeline pieces
    "FontCache",
    "TextLayoutEngine",
    "MissingGlyphPolicy",
    # Data model
    "FontTable",
    "Glyph",
    "PageSpec",
    "PlacedGlyph",
    "RenderResult",
    "SourceFormat",
    # Exceptions
    "Text2StrokeError",
    "FontNotFoundError",
    "FontParseError",
    "FormatNotSupportedError",
    "PageSpecError",
    "ConfigError",
    "RenderError",
    # Metadata
    "__version__",
]
