"""Per-format font capabilities (decode, layout step, fragment emission)."""

from text2stroke.formats.base import FontFormat, format_transform
from text2stroke.formats.line import LineFormat
from text2stroke.formats.outline import OutlineFormat
from text2stroke.formats.registry import FormatRegistry, get_format, get_registry, match_format
from text2stroke.formats.stroke import StrokeFormat

__all__ = [
    "FontFormat",
    "FormatRegistry",
    "LineFormat",
    "OutlineFormat",
    "StrokeFormat",
    "format_transform",
    "get_format",
    "get_registry",
    "match_format",
]
