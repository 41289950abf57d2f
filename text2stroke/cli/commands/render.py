"""Render command - turn text into a single-stroke SVG."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from text2stroke.api import Text2StrokeConverter
from text2stroke.config import Config
from text2stroke.fonts.catalog import discover_fonts
from text2stroke.layout import MissingGlyphPolicy
from text2stroke.models import Margins

console = Console(stderr=True)


def resolve_font(font: str, config: Config) -> Path:
    """Accept a font path, or a font name from the configured font directory."""
    candidate = Path(font).expanduser()
    if candidate.exists() or config.fonts.directory is None:
        return candidate
    for entry in discover_fonts(config.fonts.directory, english_only=False):
        if font in (entry.name, entry.display_name):
            return entry.path
    return candidate


def read_text(text: str | None, text_file: Path | None) -> str:
    if text is not None and text_file is not None:
        raise click.UsageError("Give either TEXT or --text-file, not both")
    if text_file is not None:
        return text_file.read_text(encoding="utf-8")
    if text is None or text == "-":
        if sys.stdin is None:
            raise click.UsageError("No text given")
        return sys.stdin.read()
    return text


@click.command()
@click.argument("text", required=False)
@click.option("--text-file", "-t", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Read text from file")
@click.option("--font", "-f", required=True, help="Font file (.jhf, .svg, .ttf, .otf) or a name from the font directory")
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Output SVG (default: stdout)")
@click.option("--json", "json_path", type=click.Path(path_type=Path), help="Also write the render result as JSON")
@click.option("--font-size", "-s", type=float, help="Font size in pixels")
@click.option("--char-spacing", type=float, help="Character spacing multiplier")
@click.option("--page-size", help="Page size in inches, e.g. 4x6, a named size, or 'fit'")
@click.option("--rotate/--no-rotate", default=None, help="Swap page width and height")
@click.option("--margin", type=float, help="Uniform page margin in inches")
@click.option("--stroke-width", type=float, help="Stroke width in pixels")
@click.option("-p", "--precision", type=int, help="Coordinate precision")
@click.option(
    "--missing",
    type=click.Choice([p.value for p in MissingGlyphPolicy]),
    default=MissingGlyphPolicy.DROP.value,
    show_default=True,
    help="What to do with characters the font cannot draw",
)
@click.pass_context
def render(
    ctx: click.Context,
    text: str | None,
    text_file: Path | None,
    font: str,
    output: Path | None,
    json_path: Path | None,
    font_size: float | None,
    char_spacing: float | None,
    page_size: str | None,
    rotate: bool | None,
    margin: float | None,
    stroke_width: float | None,
    precision: int | None,
    missing: str,
) -> None:
    """Render TEXT with FONT as a plotter-ready SVG.

    TEXT may be omitted (or '-') to read from stdin.
    """
    config = ctx.obj.get("config") or Config.load()
    content = read_text(text, text_file)

    converter = Text2StrokeConverter(
        precision=precision,
        config=config,
        missing_policy=MissingGlyphPolicy(missing),
    )
    outcome = converter.render(
        content,
        resolve_font(font, config),
        font_size=font_size,
        char_spacing=char_spacing,
        page_size=page_size,
        rotated=rotate,
        margins=Margins.uniform(margin) if margin is not None else None,
        stroke_width=stroke_width,
    )

    if not outcome.success or outcome.result is None:
        for error in outcome.errors:
            console.print(f"[red]Error:[/red] {error}")
        raise SystemExit(1)

    if outcome.missing:
        chars = "".join(sorted(set(outcome.missing)))
        console.print(f"[yellow]Warning:[/yellow] font has no glyph for: {escape(repr(chars))}")

    try:
        if output is None:
            click.echo(outcome.result.document, nl=False)
        else:
            Text2StrokeConverter.write_svg(outcome.result, output)
            console.print(f"[green]Wrote[/green] {output}")
        if json_path is not None:
            Text2StrokeConverter.write_json(outcome.result, json_path)
            console.print(f"[green]Wrote[/green] {json_path}")
    except OSError as e:
        console.print(f"[red]Error writing output:[/red] {e}")
        raise SystemExit(1) from e
