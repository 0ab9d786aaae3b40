"""Command-line entry point for font-bounds."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from font_bounds import __version__
from font_bounds.cli.commands import bounds, extremes, fonts, render
from font_bounds.config import LOG_LEVELS, Config
from font_bounds.exceptions import ConfigError

console = Console()


def setup_logging(level: str) -> None:
    """Send ``font_bounds`` log records to stderr through rich."""
    logger = logging.getLogger("font_bounds")
    logger.handlers.clear()
    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False


@click.group()
@click.version_option(__version__, prog_name="font-bounds")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: from config, else WARNING)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, config_path: Path | None) -> None:
    """Measure text bounds, font metrics and extreme glyphs."""
    try:
        config = Config.load(config_path)
    except (ConfigError, FileNotFoundError) as e:
        console.print(f"[red]Config error:[/red] {e}")
        raise SystemExit(1) from e

    level = (log_level or config.log_level).upper()
    setup_logging(level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = level


cli.add_command(extremes)
cli.add_command(bounds)
cli.add_command(render)
cli.add_command(fonts)


if __name__ == "__main__":
    cli()
