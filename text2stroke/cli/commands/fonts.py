"""Fonts command - list and inspect font files."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from text2stroke.config import Config
from text2stroke.exceptions import Text2StrokeError
from text2stroke.fonts.cache import FontCache
from text2stroke.fonts.catalog import discover_fonts, display_name

console = Console()


@click.group()
def fonts() -> None:
    """Font management commands."""
    pass


@fonts.command("list")
@click.argument("directory", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option("--all", "show_all", is_flag=True, help="Include non-English Hershey fonts")
@click.option("--format", "source_format", type=click.Choice(["stroke", "line", "outline"]), help="Filter by format")
@click.pass_context
def list_fonts(ctx: click.Context, directory: Path | None, show_all: bool, source_format: str | None) -> None:
    """List fonts in DIRECTORY (default: the configured font directory)."""
    config = ctx.obj.get("config") or Config.load()
    directory = directory or config.fonts.directory
    if directory is None:
        console.print("[red]Error:[/red] No font directory given and none configured")
        raise SystemExit(1)

    english_only = config.fonts.english_only and not show_all
    with console.status("[bold green]Scanning fonts..."):
        entries = discover_fonts(directory, english_only=english_only)

    table = Table(title=f"Fonts in {directory}")
    table.add_column("Name", style="cyan")
    table.add_column("Display name", style="green")
    table.add_column("Format", style="yellow")
    table.add_column("Path", style="dim")

    count = 0
    for entry in entries:
        if source_format and entry.source_format.value != source_format:
            continue
        font_path = str(entry.path)
        table.add_row(
            entry.name,
            entry.display_name,
            entry.source_format.value,
            "..." + font_path[-47:] if len(font_path) > 50 else font_path,
        )
        count += 1

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {count} fonts")


@fonts.command("info")
@click.argument("font_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def font_info(font_file: Path) -> None:
    """Show metrics and glyph coverage of FONT_FILE."""
    cache = FontCache()
    try:
        with console.status(f"[bold green]Loading {font_file.name}..."):
            font_table = cache.load(font_file)
    except Text2StrokeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    table = Table(title=display_name(font_file.stem), show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Format", font_table.source_format.value)
    table.add_row("Name", font_table.name or "-")
    table.add_row("Glyphs", str(len(font_table)))
    table.add_row("Units per em", f"{font_table.units_per_em:g}")
    table.add_row("Ascent", f"{font_table.ascent:g}")
    table.add_row("Descent", f"{font_table.descent:g}")
    table.add_row("Default advance", f"{font_table.default_advance_width:g}")

    ascii_codes = range(0x21, 0x7F)
    covered = sum(1 for code in ascii_codes if code in font_table.glyphs)
    table.add_row("Printable ASCII", f"{covered}/{len(ascii_codes)}")
    console.print(table)
