"""High-level API: text + font file in, SVG document out.

Example:
    >>> from text2stroke import Text2StrokeConverter
    >>> converter = Text2StrokeConverter()
    >>> outcome = converter.render("Hello", "futural.jhf", font_size=48, page_size="4x6")
    >>> if outcome.success:
    ...     Text2StrokeConverter.write_svg(outcome.result, "hello.svg")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from text2stroke.compositor import PageCompositor, parse_page_size
from text2stroke.config import Config
from text2stroke.emitter import PathEmitter
from text2stroke.exceptions import Text2StrokeError
from text2stroke.fonts.cache import FontCache
from text2stroke.layout import MissingGlyphPolicy, TextLayoutEngine
from text2stroke.models import FontTable, Margins, PageSpec, RenderResult

logger = logging.getLogger(__name__)

#: ``page_size`` value that forces fit-to-content even when the config sets a page.
FIT_TO_CONTENT = "fit"


@dataclass
class ConversionResult:
    """Outcome of a render request; errors are reported here, never raised."""

    success: bool
    result: RenderResult | None = None
    errors: list[str] = field(default_factory=list)
    missing: tuple[str, ...] = ()
    output_path: Path | None = None
    json_path: Path | None = None


class Text2StrokeConverter:
    """Compose decode -> layout -> emit -> compose with a shared font cache."""

    def __init__(
        self,
        precision: int | None = None,
        config: Config | None = None,
        font_cache: FontCache | None = None,
        missing_policy: MissingGlyphPolicy = MissingGlyphPolicy.DROP,
    ) -> None:
        self.config = config or Config()
        self.precision = precision if precision is not None else self.config.render.precision
        self.font_cache = font_cache if font_cache is not None else FontCache()
        self.layout_engine = TextLayoutEngine(missing_policy)
        self.emitter = PathEmitter(self.precision)
        self.compositor = PageCompositor(self.precision)

    def load_font(self, font_path: str | Path) -> FontTable:
        return self.font_cache.load(font_path)

    def resolve_page(
        self,
        page_size: str | PageSpec | None = None,
        rotated: bool | None = None,
        margins: Margins | None = None,
    ) -> PageSpec | None:
        """Turn render options plus config defaults into a PageSpec (or None)."""
        if isinstance(page_size, PageSpec):
            return page_size
        size = page_size if page_size is not None else self.config.page.size
        if size is None or str(size).lower() == FIT_TO_CONTENT:
            return None
        return parse_page_size(
            str(size),
            rotated=self.config.page.rotated if rotated is None else rotated,
            margins=margins or self.config.page.margins,
        )

    def render_table(
        self,
        table: FontTable,
        text: str,
        *,
        font_size: float | None = None,
        char_spacing: float | None = None,
        page_spec: PageSpec | None = None,
        stroke_width: float | None = None,
    ) -> RenderResult:
        """Run the pure pipeline on an already-loaded table.

        Characters the font could not draw are listed in ``metadata["missing"]``.

        Raises:
            Text2StrokeError: On invalid parameters.
        """
        render = self.config.render
        font_size = render.font_size if font_size is None else font_size
        char_spacing = render.char_spacing if char_spacing is None else char_spacing
        stroke_width = render.stroke_width if stroke_width is None else stroke_width

        layout = self.layout_engine.layout(
            table, text, font_size, char_spacing, page_rotated=bool(page_spec and page_spec.rotated)
        )
        emission = self.emitter.emit(table, layout, font_size)
        document = self.compositor.compose(emission, page_spec, stroke_width)
        metadata = {
            "char_count": len(text),
            "source_format": table.source_format.value,
            "page_spec": page_spec.to_dict() if page_spec else None,
            "font_size": font_size,
            "font_name": table.name,
            "line_count": layout.line_count,
            "max_width": layout.max_width,
            "missing": list(layout.missing),
        }
        return RenderResult(text=text, placed_glyphs=layout.placed_glyphs, document=document, metadata=metadata)

    def render(
        self,
        text: str,
        font_path: str | Path,
        *,
        font_size: float | None = None,
        char_spacing: float | None = None,
        page_size: str | PageSpec | None = None,
        rotated: bool | None = None,
        margins: Margins | None = None,
        stroke_width: float | None = None,
    ) -> ConversionResult:
        """Render ``text`` with the font at ``font_path``.

        Every library error is caught and returned in ``errors``.
        """
        try:
            table = self.load_font(font_path)
            page_spec = self.resolve_page(page_size, rotated, margins)
            result = self.render_table(
                table,
                text,
                font_size=font_size,
                char_spacing=char_spacing,
                page_spec=page_spec,
                stroke_width=stroke_width,
            )
        except (Text2StrokeError, OSError) as exc:
            logger.warning("Render failed for %s: %s", font_path, exc)
            return ConversionResult(success=False, errors=[str(exc)])

        missing = tuple(result.metadata["missing"])
        if missing:
            logger.info("%d character(s) not in font: %s", len(missing), "".join(sorted(set(missing))))
        return ConversionResult(success=True, result=result, missing=missing)

    def render_to_file(
        self,
        text: str,
        font_path: str | Path,
        output_path: str | Path,
        json_path: str | Path | None = None,
        **options,
    ) -> ConversionResult:
        """Render and write the SVG (and optionally the JSON export)."""
        outcome = self.render(text, font_path, **options)
        if not outcome.success or outcome.result is None:
            return outcome
        try:
            outcome.output_path = self.write_svg(outcome.result, output_path)
            if json_path is not None:
                outcome.json_path = self.write_json(outcome.result, json_path)
        except OSError as exc:
            outcome.success = False
            outcome.errors.append(f"Cannot write output: {exc}")
        return outcome

    @staticmethod
    def write_svg(result: RenderResult, path: str | Path) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result.document, encoding="utf-8")
        return target

    @staticmethod
    def write_json(result: RenderResult, path: str | Path) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result.to_json(), encoding="utf-8")
        return target
