"""Exception hierarchy for text2stroke.

Every error raised by the library derives from :class:`Text2StrokeError`, so
callers that only care about "did the render work" can catch a single type.
"""

from __future__ import annotations


class Text2StrokeError(Exception):
    """Base class for all text2stroke errors."""


class FontNotFoundError(Text2StrokeError):
    """Raised when a font file does not exist or cannot be opened."""

    def __init__(self, path: object, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Font file not found: {path}")


class FontParseError(Text2StrokeError):
    """Raised when a font source cannot be decoded at all."""


class FormatNotSupportedError(Text2StrokeError):
    """Raised when no font format handler accepts a source."""


class PageSpecError(Text2StrokeError, ValueError):
    """Raised for page-size strings or margins that cannot be parsed."""


class ConfigError(Text2StrokeError):
    """Raised when configuration loading or validation fails."""


class RenderError(Text2StrokeError):
    """Raised for invalid render parameters (non-positive size, etc.)."""
