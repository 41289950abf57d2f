"""Registry mapping font sources and SourceFormat tags to handlers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from text2stroke.exceptions import FormatNotSupportedError
from text2stroke.formats.base import FontFormat
from text2stroke.formats.line import LineFormat
from text2stroke.formats.outline import OutlineFormat
from text2stroke.formats.stroke import StrokeFormat
from text2stroke.models import SourceFormat


class FormatRegistry:
    """Holds one handler per :class:`SourceFormat`, in match priority order."""

    def __init__(self) -> None:
        self._handlers: list[FontFormat] = [StrokeFormat(), LineFormat(), OutlineFormat()]

    def list_handlers(self) -> list[tuple[str, FontFormat]]:
        return [(type(h).__name__, h) for h in self._handlers]

    def register(self, handler: FontFormat) -> None:
        """Register a handler, replacing any existing one for the same format."""
        self._handlers = [h for h in self._handlers if h.source_format != handler.source_format]
        self._handlers.insert(0, handler)

    def get(self, source_format: SourceFormat) -> FontFormat:
        for handler in self._handlers:
            if handler.source_format == source_format:
                return handler
        raise FormatNotSupportedError(f"No handler registered for {source_format.value!r}")

    def match(self, source: Any) -> FontFormat:
        """Return the handler for a font path.

        Raises:
            FormatNotSupportedError: If no handler accepts the source.
        """
        for handler in self._handlers:
            if handler.can_handle(source):
                return handler
        suffix = Path(source).suffix if isinstance(source, (str, Path)) else type(source).__name__
        raise FormatNotSupportedError(f"Unsupported font type: {suffix or source!r}")

    @property
    def extensions(self) -> tuple[str, ...]:
        return tuple(ext for h in self._handlers for ext in h.extensions)


_registry: FormatRegistry | None = None


def get_registry() -> FormatRegistry:
    """Return the shared default registry."""
    global _registry
    if _registry is None:
        _registry = FormatRegistry()
    return _registry


def get_format(source_format: SourceFormat) -> FontFormat:
    return get_registry().get(source_format)


def match_format(source: Any) -> FontFormat:
    return get_registry().match(source)
