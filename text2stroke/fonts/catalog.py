"""Discover font files in a directory and give them friendly names."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from text2stroke.formats.registry import FormatRegistry, get_registry
from text2stroke.models import SourceFormat

logger = logging.getLogger(__name__)

#: Hershey fonts whose glyph order matches ASCII.
ENGLISH_HERSHEY_FONTS = frozenset(
    {
        "cursive", "futural", "futuram", "scripts", "scriptc",
        "rowmans", "rowmant", "rowmand",
        "gothgbt", "gothgrt", "gothitt",
        "timesr", "timesrb", "timesi", "timesib",
        "romans", "romanp", "romant", "romanc", "romand",
        "italicc", "italict", "italiccs",
        "cyrilc_1", "cyrillic",
    }
)

HERSHEY_DISPLAY_NAMES = {
    "futural": "Futura Light",
    "futuram": "Futura Medium",
    "scripts": "Script Simplex",
    "scriptc": "Script Complex",
    "cursive": "Cursive",
    "rowmans": "Roman Simplex",
    "rowmant": "Roman Triplex",
    "rowmand": "Roman Duplex",
    "romans": "Roman Simplex",
    "romanp": "Roman Plain",
    "romant": "Roman Triplex",
    "romanc": "Roman Complex",
    "romand": "Roman Duplex",
    "timesr": "Times Roman",
    "timesrb": "Times Roman Bold",
    "timesi": "Times Italic",
    "timesib": "Times Italic Bold",
    "gothgbt": "Gothic German Triplex",
    "gothgrt": "Gothic German",
    "gothitt": "Gothic Italian Triplex",
    "italicc": "Italic Complex",
    "italict": "Italic Triplex",
    "italiccs": "Italic Complex Small",
    "cyrilc_1": "Cyrillic 1",
    "cyrillic": "Cyrillic",
}

PREFERRED_ORDER = ("cursive", "scripts", "futural", "romans")


@dataclass(frozen=True)
class FontEntry:
    name: str
    display_name: str
    path: Path
    source_format: SourceFormat


def display_name(name: str) -> str:
    """Friendly name for a font file stem: ``futural`` -> ``Futura Light``."""
    if name in HERSHEY_DISPLAY_NAMES:
        return HERSHEY_DISPLAY_NAMES[name]
    return name[:1].upper() + name[1:]


def _sort_key(entry: FontEntry) -> tuple[int, str]:
    if entry.name in PREFERRED_ORDER:
        return PREFERRED_ORDER.index(entry.name), ""
    return len(PREFERRED_ORDER), entry.display_name.lower()


def discover_fonts(
    directory: str | Path,
    english_only: bool = True,
    registry: FormatRegistry | None = None,
) -> list[FontEntry]:
    """List loadable font files under ``directory`` (recursively).

    Preferred Hershey faces come first, everything else is sorted by display
    name. With ``english_only`` Hershey files outside the ASCII-ordered set
    are left out; other formats are always listed.
    """
    registry = registry or get_registry()
    root = Path(directory).expanduser()
    if not root.is_dir():
        logger.warning("Font directory does not exist: %s", root)
        return []

    known = set(registry.extensions)
    entries: list[FontEntry] = []
    for path in sorted(root.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in known:
            continue
        handler = registry.match(path)
        name = path.stem
        if english_only and handler.source_format is SourceFormat.STROKE and name not in ENGLISH_HERSHEY_FONTS:
            continue
        entries.append(FontEntry(name, display_name(name), path, handler.source_format))

    entries.sort(key=_sort_key)
    return entries
