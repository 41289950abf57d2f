"""Per-path FontTable cache.

A FontCache is an explicit object owned by whoever composes the pipeline
(usually :class:`~text2stroke.api.Text2StrokeConverter`). Tables live as long
as the cache does; a font file that changes on disk is not noticed.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from text2stroke.exceptions import FontNotFoundError
from text2stroke.formats.registry import FormatRegistry, get_registry
from text2stroke.models import FontTable

logger = logging.getLogger(__name__)


class FontCache:
    """Memoise decoded fonts by resolved file path.

    Concurrent loads of the same uncached path are serialised on a per-path
    lock, so each path is decoded at most once.
    """

    def __init__(self, registry: FormatRegistry | None = None) -> None:
        self._registry = registry or get_registry()
        self._tables: dict[Path, FontTable] = {}
        self._locks: dict[Path, threading.Lock] = {}
        self._guard = threading.Lock()

    @staticmethod
    def _key(path: str | Path) -> Path:
        return Path(path).expanduser().resolve()

    def load(self, path: str | Path) -> FontTable:
        """Return the FontTable for ``path``, decoding it on first use.

        Raises:
            FormatNotSupportedError: If the extension is not a known font type.
            FontNotFoundError: If the file does not exist.
            FontParseError: If the file cannot be read or decoded.
        """
        key = self._key(path)
        table = self._tables.get(key)
        if table is not None:
            logger.debug("Font cache hit: %s", key)
            return table

        handler = self._registry.match(key)
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())

        with lock:
            table = self._tables.get(key)
            if table is None:
                if not key.is_file():
                    raise FontNotFoundError(key)
                logger.debug("Font cache miss: %s (%s)", key, handler.source_format.value)
                table = handler.load(key)
                self._tables[key] = table
                logger.info("Loaded %s font %s: %d glyphs", handler.source_format.value, key.name, len(table))
        return table

    def get(self, path: str | Path) -> FontTable | None:
        """Return a cached table without loading."""
        return self._tables.get(self._key(path))

    def clear(self) -> None:
        with self._guard:
            self._tables.clear()
            self._locks.clear()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return self._key(path) in self._tables

    def __len__(self) -> int:
        return len(self._tables)
