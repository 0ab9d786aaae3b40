"""Extremes command - find the top-most and bottom-most glyphs of a font."""

from __future__ import annotations

import shlex

import click
from rich.console import Console
from rich.table import Table

from font_bounds.cli.common import build_oracle, get_config, open_font
from font_bounds.exceptions import FontBoundsError
from font_bounds.measure import DEFAULT_CHARACTER_SET, GlyphExtremeScanner
from font_bounds.models import GlyphMetric

console = Console()


@click.command()
@click.option("-f", "--font", "font_name", help="Font name or font file path")
@click.option("-u", "--font-url", help="URL to download and register the font from")
@click.option("-s", "--size", type=click.FloatRange(min=0, min_open=True), help="Font size in points")
@click.option("-c", "--chars", help="Characters to analyze (default: ASCII letters, digits, punctuation)")
@click.pass_context
def extremes(
    ctx: click.Context,
    font_name: str | None,
    font_url: str | None,
    size: float | None,
    chars: str | None,
) -> None:
    """Find the glyphs reaching highest above and lowest below the baseline."""
    config = get_config(ctx)
    font_name = font_name or config.font
    size = size or config.size
    candidates = chars or config.charset or DEFAULT_CHARACTER_SET

    table = Table(title="Glyph extents")
    table.add_column("Char", style="cyan")
    table.add_column("Above baseline", justify="right", style="green")
    table.add_column("Below baseline", justify="right", style="yellow")

    def add_row(metric: GlyphMetric) -> None:
        table.add_row(
            repr(metric.character),
            f"{metric.ascent_above_baseline:.2f}",
            f"{metric.descent_below_baseline:.2f}",
        )

    oracle = build_oracle(config)
    try:
        with console.status(f"[bold green]Scanning {len(candidates)} characters..."):
            font = open_font(oracle, font_name, size, font_url, config)
            pair = GlyphExtremeScanner(oracle, on_glyph=add_row).scan(font, candidates)
    except FontBoundsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    console.print(table)
    console.print()
    console.print(f"[bold]Results for font '{font.name}' at {font.size:g}pt:[/bold]")
    console.print(
        f"  [green]Top-most glyph:[/green] '{pair.top_most.character}' "
        f"extends {pair.height:.2f} points above baseline"
    )
    console.print(
        f"  [yellow]Bottom-most glyph:[/yellow] '{pair.bottom_most.character}' "
        f"extends {pair.depth:.2f} points below baseline"
    )

    sample = f"{pair.top_most.character}Hello{pair.bottom_most.character}World"
    source = f"-u {shlex.quote(font_url)}" if font_url else f"-f {shlex.quote(font_name)}"
    console.print()
    console.print("To generate a PDF visualization with these characters, run:")
    console.print(
        f"  font-bounds render {source} -s {font.size:g} -t {shlex.quote(sample)}",
        markup=False,
        highlight=False,
    )
