"""Render command - write an annotated PNG/PDF of measured text."""

from __future__ import annotations

import re
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from font_bounds.cli.common import build_oracle, get_config, open_font
from font_bounds.exceptions import FontBoundsError
from font_bounds.measure import DEFAULT_CHARACTER_SET, GlyphExtremeScanner, append_extreme_characters
from font_bounds.render import render_visualization
from font_bounds.shaping import FontHandle, HarfBuzzOracle

console = Console()


# Tried in order when appending extreme characters to the sample text
SEPARATORS = (" | ", " ")


def pick_separator(oracle: HarfBuzzOracle, font: FontHandle) -> str:
    """First separator the font can draw; no separator when none fits."""
    for separator in SEPARATORS:
        if oracle.supports(font, separator):
            return separator
    return ""


def default_output_name(font_name: str, size: float, tracking: float) -> str:
    stem = Path(font_name).stem if Path(font_name).suffix else font_name
    stem = re.sub(r"[^\w.-]+", "_", stem).strip("_") or "font"
    return f"{stem}_{size:g}pt_tracking{tracking:g}pt.pdf"


@click.command()
@click.option("-f", "--font", "font_name", help="Font name or font file path")
@click.option("-u", "--font-url", help="URL to download and register the font from")
@click.option("-s", "--size", type=click.FloatRange(min=0, min_open=True), help="Font size in points")
@click.option("-t", "--text", default="Hello World", show_default=True, help="Text to render")
@click.option("-k", "--tracking", type=float, help="Tracking in points")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Output file (.png or .pdf)")
@click.option("--format", "fmt", type=click.Choice(["png", "pdf"], case_sensitive=False), help="Output format (default: from suffix)")
@click.option("-c", "--chars", help="Characters scanned for extreme glyphs")
@click.option("--no-extremes", is_flag=True, help="Do not scan for and append extreme glyphs")
@click.option("--scale", type=click.FloatRange(min=0, min_open=True), help="Pixels per point")
@click.pass_context
def render(
    ctx: click.Context,
    font_name: str | None,
    font_url: str | None,
    size: float | None,
    text: str,
    tracking: float | None,
    output: Path | None,
    fmt: str | None,
    chars: str | None,
    no_extremes: bool,
    scale: float | None,
) -> None:
    """Render TEXT with its bounds, metric lines and extreme glyphs."""
    config = get_config(ctx)
    font_name = font_name or config.font
    size = size or config.size
    tracking = config.tracking if tracking is None else tracking
    scale = scale or config.scale

    oracle = build_oracle(config)
    try:
        font = open_font(oracle, font_name, size, font_url, config)

        pair = None
        if not no_extremes:
            candidates = chars or config.charset or DEFAULT_CHARACTER_SET
            pair = GlyphExtremeScanner(oracle).scan(font, candidates)
            text = append_extreme_characters(text, pair, separator=pick_separator(oracle, font))

        if output is None:
            output = Path(default_output_name(font.name, font.size, tracking))
            if fmt:
                output = output.with_suffix(f".{fmt.lower()}")

        with console.status("[bold green]Rendering..."):
            result = render_visualization(
                oracle,
                font,
                text,
                output,
                tracking=tracking,
                extremes=pair,
                fmt=fmt,
                scale=scale,
                padding=config.padding,
            )
    except (FontBoundsError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    console.print(f"\n[bold]Analyzed font '{font.name}' at {font.size:g}pt[/bold]")
    console.print(f'  [blue]Text:[/blue] "{escape(text)}"', highlight=False)
    console.print(f"  [blue]Tracking:[/blue] {tracking:g} points")
    if pair is not None:
        console.print(
            f"  [red]Top-most glyph:[/red] '{pair.top_most.character}' "
            f"extends {pair.height:.2f} points above baseline"
        )
        console.print(
            f"  [blue]Bottom-most glyph:[/blue] '{pair.bottom_most.character}' "
            f"extends {pair.depth:.2f} points below baseline"
        )
    precise = result.bounds.glyph_path
    console.print(
        f"  [blue]Precise bounds:[/blue] origin ({precise.origin_x:.2f}, {precise.origin_y:.2f}), "
        f"size {precise.width:.2f} x {precise.height:.2f}"
    )
    console.print(f"[green]{result.format} created:[/green] {result.path} ({result.width}x{result.height}px)")
