"""Bounds command - typographic, precise and reconciled text bounds."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from font_bounds.cli.common import build_oracle, get_config, open_font
from font_bounds.exceptions import FontBoundsError
from font_bounds.measure import TextBoundsReconciler
from font_bounds.models import BoundsRect

console = Console()


def _rect_row(table: Table, label: str, rect: BoundsRect) -> None:
    table.add_row(
        label,
        f"{rect.origin_x:.2f}",
        f"{rect.origin_y:.2f}",
        f"{rect.width:.2f}",
        f"{rect.height:.2f}",
    )


@click.command()
@click.option("-f", "--font", "font_name", help="Font name or font file path")
@click.option("-u", "--font-url", help="URL to download and register the font from")
@click.option("-s", "--size", type=click.FloatRange(min=0, min_open=True), help="Font size in points")
@click.option("-t", "--text", default="Hello, Script Font!", show_default=True, help="Text to measure")
@click.option("-k", "--tracking", type=float, help="Tracking in points")
@click.option("-w", "--width", "max_width", type=float, help="Wrap lines at this width (points)")
@click.pass_context
def bounds(
    ctx: click.Context,
    font_name: str | None,
    font_url: str | None,
    size: float | None,
    text: str,
    tracking: float | None,
    max_width: float | None,
) -> None:
    """Measure the bounds of TEXT in a font."""
    config = get_config(ctx)
    font_name = font_name or config.font
    size = size or config.size
    tracking = config.tracking if tracking is None else tracking

    oracle = build_oracle(config)
    try:
        font = open_font(oracle, font_name, size, font_url, config)
        measured = TextBoundsReconciler(oracle).measure(font, text, tracking, max_width)
        metrics = oracle.font_metrics(font)
    except FontBoundsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    console.print(f'\n[bold]Text:[/bold] "{escape(text)}"', highlight=False)
    console.print(f"[bold]Font:[/bold] {font.name} at {font.size:g}pt, tracking {tracking:g}pt")

    table = Table(title="Bounds (points, baseline at y=0)")
    table.add_column("Kind", style="cyan")
    table.add_column("Origin X", justify="right")
    table.add_column("Origin Y", justify="right")
    table.add_column("Width", justify="right", style="green")
    table.add_column("Height", justify="right", style="yellow")
    _rect_row(table, "Standard (typographic)", measured.typographic)
    _rect_row(table, "Precise (glyph path)", measured.glyph_path)
    _rect_row(table, "Reconciled", measured.reconciled)
    console.print(table)

    metrics_table = Table(title="Font metrics")
    metrics_table.add_column("Metric", style="cyan")
    metrics_table.add_column("Points", justify="right")
    for label, value in (
        ("Ascent", metrics.ascent),
        ("Descent", metrics.descent),
        ("Leading", metrics.leading),
        ("Cap Height", metrics.cap_height),
        ("x-Height", metrics.x_height),
        ("Line Height", metrics.line_height),
    ):
        metrics_table.add_row(label, f"{value:.2f}")
    console.print(metrics_table)
