"""Measurement core for font-bounds.

This subpackage provides:
- Extreme glyph scanning (top-most / bottom-most character)
- Typographic vs. glyph-path bounds reconciliation
"""

from font_bounds.measure.bounds import TextBoundsReconciler, reconcile_bounds
from font_bounds.measure.extremes import (
    DEFAULT_CHARACTER_SET,
    GlyphExtremeScanner,
    append_extreme_characters,
    glyph_metric,
    scan,
)

__all__ = [
    "TextBoundsReconciler",
    "reconcile_bounds",
    "GlyphExtremeScanner",
    "DEFAULT_CHARACTER_SET",
    "append_extreme_characters",
    "glyph_metric",
    "scan",
]
