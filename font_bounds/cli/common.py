"""Helpers shared by the CLI commands."""

from __future__ import annotations

import click

from font_bounds.config import Config
from font_bounds.fonts import FontCache, FontRegistry, fetch_font, font_filename
from font_bounds.shaping import FontHandle, HarfBuzzOracle


def get_config(ctx: click.Context) -> Config:
    obj = ctx.obj or {}
    return obj.get("config") or Config.load()


def build_oracle(config: Config) -> HarfBuzzOracle:
    return HarfBuzzOracle(
        font_cache=FontCache(font_dirs=config.font_dirs),
        registry=FontRegistry(),
        strict_coverage=config.strict_coverage,
    )


def open_font(
    oracle: HarfBuzzOracle,
    name: str,
    size: float,
    font_url: str | None,
    config: Config,
) -> FontHandle:
    """Open ``name``, or download and register ``font_url`` first.

    A downloaded font is opened under the name found in its own naming
    table, like a freshly installed system font.
    """
    if font_url:
        data = fetch_font(font_url, timeout=config.download_timeout)
        return oracle.register_font(data, size, filename=font_filename(font_url))
    return oracle.create_font(name, size)
