"""CLI commands for font-bounds."""

from font_bounds.cli.commands.bounds import bounds
from font_bounds.cli.commands.extremes import extremes
from font_bounds.cli.commands.fonts import fonts
from font_bounds.cli.commands.render import render

__all__ = ["extremes", "bounds", "render", "fonts"]
