"""Batch command - render many text files with one font."""

from __future__ import annotations

import concurrent.futures
from pathlib import Path

import click
from rich.console import Console
from rich.progress import Progress

from text2stroke.api import ConversionResult, Text2StrokeConverter
from text2stroke.cli.commands.render import resolve_font
from text2stroke.config import Config

console = Console(stderr=True)


def collect_inputs(inputs: tuple[Path, ...], batch_file: Path | None) -> list[Path]:
    """Explicit inputs plus one path per line of ``batch_file`` (``#`` comments)."""
    all_inputs: list[Path] = list(inputs)
    if batch_file:
        base = batch_file.parent
        with open(batch_file, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#"):
                    path = Path(line).expanduser()
                    all_inputs.append(path if path.is_absolute() else base / path)
    return all_inputs


@click.command()
@click.argument("inputs", nargs=-1, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--font", "-f", required=True, help="Font file or a name from the font directory")
@click.option("--output-dir", "-o", type=click.Path(path_type=Path), required=True, help="Output directory")
@click.option("--batch-file", type=click.Path(exists=True, path_type=Path), help="File listing text files, one per line")
@click.option("--font-size", "-s", type=float, help="Font size in pixels")
@click.option("--page-size", help="Page size in inches, e.g. 4x6, or 'fit'")
@click.option("--json", "write_json", is_flag=True, help="Also write a JSON render result per input")
@click.option("--suffix", default="", help="Output filename suffix")
@click.option("-j", "--jobs", type=int, default=4, show_default=True, help="Parallel jobs")
@click.option("--continue-on-error", is_flag=True, help="Continue processing on errors")
@click.pass_context
def batch(
    ctx: click.Context,
    inputs: tuple[Path, ...],
    font: str,
    output_dir: Path,
    batch_file: Path | None,
    font_size: float | None,
    page_size: str | None,
    write_json: bool,
    suffix: str,
    jobs: int,
    continue_on_error: bool,
) -> None:
    """Render multiple text files to SVG.

    INPUTS: Paths to UTF-8 text files; each becomes <stem><suffix>.svg.
    """
    config = ctx.obj.get("config") or Config.load()

    all_inputs = collect_inputs(inputs, batch_file)
    if not all_inputs:
        console.print("[red]Error:[/red] No input files specified")
        raise SystemExit(1)

    output_dir.mkdir(parents=True, exist_ok=True)

    # One converter, so the font is decoded once and shared by every worker.
    converter = Text2StrokeConverter(config=config)
    font_path = resolve_font(font, config)

    success_count = 0
    error_count = 0

    def process_file(input_path: Path) -> ConversionResult:
        try:
            text = input_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return ConversionResult(success=False, errors=[f"Cannot read {input_path}: {e}"])
        output_path = output_dir / f"{input_path.stem}{suffix}.svg"
        json_path = output_path.with_suffix(".json") if write_json else None
        return converter.render_to_file(
            text, font_path, output_path, json_path, font_size=font_size, page_size=page_size
        )

    with Progress(console=console) as progress:
        task = progress.add_task("[green]Rendering...", total=len(all_inputs))

        with concurrent.futures.ThreadPoolExecutor(max_workers=max(jobs, 1)) as executor:
            future_to_path = {executor.submit(process_file, p): p for p in all_inputs}

            for future in concurrent.futures.as_completed(future_to_path):
                input_path = future_to_path[future]
                result = future.result()
                progress.advance(task)
                if result.success:
                    success_count += 1
                    continue
                error_count += 1
                console.print(f"[red]Error in {input_path}:[/red] {'; '.join(result.errors)}")
                if not continue_on_error:
                    for pending in future_to_path:
                        pending.cancel()
                    break

    console.print()
    console.print("[bold]Batch complete:[/bold]")
    console.print(f"  [green]Success:[/green] {success_count}")
    console.print(f"  [red]Failed:[/red] {error_count}")
    console.print(f"  [blue]Output:[/blue] {output_dir}")

    if error_count > 0 and not continue_on_error:
        raise SystemExit(1)
