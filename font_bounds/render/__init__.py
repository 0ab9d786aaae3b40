"""Diagnostic rendering for font-bounds."""

from font_bounds.render.visualize import (
    RenderResult,
    info_lines,
    output_format,
    render_visualization,
)

__all__ = ["RenderResult", "info_lines", "output_format", "render_visualization"]
