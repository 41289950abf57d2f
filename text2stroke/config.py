"""YAML configuration for text2stroke.

Lookup order for the config file: explicit path, ``$T2S_CONFIG``, then
``~/.config/text2stroke/config.yaml``. A missing file means defaults.

Example::

    render:
      font_size: 48
      char_spacing: 1.1
      stroke_width: 0.8
      precision: 3
    page:
      size: 4x6
      rotated: false
      margins: {top: 0.5, right: 0.5, bottom: 0.5, left: 0.5}
    fonts:
      directory: ~/writetyper/hershey-fonts
      english_only: true
    log_level: INFO
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from text2stroke.exceptions import ConfigError
from text2stroke.models import DEFAULT_MARGIN, Margins

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "T2S_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/text2stroke/config.yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class RenderSettings:
    font_size: float = 72.0
    char_spacing: float = 1.0
    stroke_width: float = 1.0
    precision: int = 3


@dataclass(frozen=True)
class PageSettings:
    size: str | None = None
    rotated: bool = False
    margins: Margins = field(default_factory=Margins)


@dataclass(frozen=True)
class FontSettings:
    directory: Path | None = None
    english_only: bool = True


@dataclass(frozen=True)
class Config:
    """Resolved configuration with defaults filled in."""

    render: RenderSettings = field(default_factory=RenderSettings)
    page: PageSettings = field(default_factory=PageSettings)
    fonts: FontSettings = field(default_factory=FontSettings)
    log_level: str = "WARNING"
    source: Path | None = None

    @classmethod
    def config_path(cls, path: str | Path | None = None) -> Path:
        if path is not None:
            return Path(path).expanduser()
        env = os.environ.get(CONFIG_ENV_VAR)
        if env:
            return Path(env).expanduser()
        return DEFAULT_CONFIG_PATH.expanduser()

    @classmethod
    def load(cls, path: str | Path | None = None) -> Config:
        """Load configuration from YAML, falling back to defaults.

        Raises:
            ConfigError: If the file exists but is invalid.
        """
        config_path = cls.config_path(path)
        if not config_path.exists():
            if path is not None:
                raise ConfigError(f"Config file not found: {config_path}")
            logger.debug("No config at %s, using defaults", config_path)
            return cls()
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Cannot read {config_path}: {exc}") from exc
        return cls.from_dict(data, source=config_path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Path | None = None) -> Config:
        if not isinstance(data, dict):
            raise ConfigError("Config root must be a mapping")
        render = _section(data, "render")
        page = _section(data, "page")
        fonts = _section(data, "fonts")

        render_settings = RenderSettings(
            font_size=_positive(render.get("font_size", 72.0), "render.font_size"),
            char_spacing=_non_negative(render.get("char_spacing", 1.0), "render.char_spacing"),
            stroke_width=_positive(render.get("stroke_width", 1.0), "render.stroke_width"),
            precision=int(_non_negative(render.get("precision", 3), "render.precision")),
        )
        page_settings = PageSettings(
            size=str(page["size"]) if page.get("size") else None,
            rotated=bool(page.get("rotated", False)),
            margins=_margins(page.get("margins", DEFAULT_MARGIN)),
        )
        directory = fonts.get("directory")
        font_settings = FontSettings(
            directory=Path(directory).expanduser() if directory else None,
            english_only=bool(fonts.get("english_only", True)),
        )
        log_level = str(data.get("log_level", "WARNING")).upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {LOG_LEVELS}, got {log_level!r}")
        return cls(render_settings, page_settings, font_settings, log_level, source)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping")
    return value


def _number(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc


def _positive(value: Any, name: str) -> float:
    number = _number(value, name)
    if number <= 0:
        raise ConfigError(f"{name} must be positive")
    return number


def _non_negative(value: Any, name: str) -> float:
    number = _number(value, name)
    if number < 0:
        raise ConfigError(f"{name} must not be negative")
    return number


def _margins(value: Any) -> Margins:
    if isinstance(value, dict):
        return Margins(
            top=_non_negative(value.get("top", DEFAULT_MARGIN), "page.margins.top"),
            right=_non_negative(value.get("right", DEFAULT_MARGIN), "page.margins.right"),
            bottom=_non_negative(value.get("bottom", DEFAULT_MARGIN), "page.margins.bottom"),
            left=_non_negative(value.get("left", DEFAULT_MARGIN), "page.margins.left"),
        )
    return Margins.uniform(_non_negative(value, "page.margins"))
