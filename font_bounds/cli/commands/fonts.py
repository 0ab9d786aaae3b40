"""Fonts command - font discovery utilities."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from font_bounds.cli.common import get_config
from font_bounds.exceptions import FontNotFoundError
from font_bounds.fonts import FontCache

console = Console()


@click.group()
def fonts() -> None:
    """Font discovery commands."""


@fonts.command("list")
@click.option("--family", help="Filter by font family name")
@click.pass_context
def list_fonts(ctx: click.Context, family: str | None) -> None:
    """List available fonts."""
    cache = FontCache(font_dirs=get_config(ctx).font_dirs)

    with console.status("[bold green]Loading fonts..."):
        cache.prewarm()

    table = Table(title="Available Fonts")
    table.add_column("Family", style="cyan")
    table.add_column("Style", style="green")
    table.add_column("PostScript", style="yellow")
    table.add_column("Path", style="dim")

    count = 0
    for path, _font_index, families, styles, postscript in cache.entries():
        font_family = families[0] if families else "Unknown"
        font_style = styles[0] if styles else "Regular"
        font_path = str(path)

        if family and family.lower() not in font_family.lower():
            continue

        table.add_row(
            font_family,
            font_style,
            postscript,
            font_path[:50] + "..." if len(font_path) > 50 else font_path,
        )
        count += 1

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {count} fonts")


@fonts.command("cache")
@click.option("--refresh", is_flag=True, help="Force cache refresh")
@click.option("--clear", is_flag=True, help="Clear the cache")
@click.pass_context
def manage_cache(ctx: click.Context, refresh: bool, clear: bool) -> None:
    """Manage the font index cache."""
    cache = FontCache(font_dirs=get_config(ctx).font_dirs)
    cache_path = cache._cache_path()

    if clear:
        existed = cache_path.exists()
        cache.clear()
        if existed:
            console.print("[green]Cache cleared[/green]")
        else:
            console.print("[yellow]No cache to clear[/yellow]")
        return

    if refresh:
        cache.clear()
        with console.status("[bold green]Refreshing cache..."):
            count = cache.prewarm()
        console.print(f"[green]Cache refreshed:[/green] {count} fonts indexed")
        return

    if cache_path.exists():
        size = cache_path.stat().st_size
        console.print(f"[bold]Cache location:[/bold] {cache_path}")
        console.print(f"[bold]Cache size:[/bold] {size / 1024:.1f} KB")
    else:
        console.print("[yellow]No cache file exists[/yellow]")


@fonts.command("find")
@click.argument("name")
@click.pass_context
def find_font(ctx: click.Context, name: str) -> None:
    """Find a specific font by family, full or PostScript name."""
    cache = FontCache(font_dirs=get_config(ctx).font_dirs)

    with console.status(f"[bold green]Searching for '{name}'..."):
        try:
            font_path, face_idx = cache.get_font(name)
        except FontNotFoundError as e:
            console.print(f"[red]Not found:[/red] {e}")
            raise SystemExit(1) from e

    console.print(f"[green]Found:[/green] {font_path}")
    console.print(f"[dim]Face index:[/dim] {face_idx}")
