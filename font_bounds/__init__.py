"""font-bounds: exact text bounds, font metrics and extreme glyphs.

This library provides:
- Extreme glyph detection (the characters reaching furthest above and
  below the baseline)
- Reconciliation of typographic and glyph-path (ink) text bounds
- HarfBuzz/fontTools text measurement with tracking
- Annotated PNG/PDF renders for visual debugging

Example:
    >>> from font_bounds import HarfBuzzOracle, GlyphExtremeScanner, TextBoundsReconciler
    >>> oracle = HarfBuzzOracle()
    >>> font = oracle.create_font("DejaVu Sans", 24)
    >>> GlyphExtremeScanner(oracle).scan(font, "Agx")
    >>> TextBoundsReconciler(oracle).reconcile(font, "Hello", tracking=1.0)
"""

__version__ = "0.1.0"

from font_bounds.config import Config
from font_bounds.exceptions import (
    ConfigError,
    FontBoundsError,
    FontDownloadError,
    FontNotFoundError,
    FontRegistrationError,
    OracleQueryError,
)
from font_bounds.measure import (
    DEFAULT_CHARACTER_SET,
    GlyphExtremeScanner,
    TextBoundsReconciler,
    append_extreme_characters,
    reconcile_bounds,
    scan,
)
from font_bounds.models import (
    BoundsRect,
    ExtremePair,
    FontMetricsSnapshot,
    GlyphMetric,
    LineMetrics,
    TextBounds,
)
from font_bounds.shaping import FontHandle, HarfBuzzOracle, ShapingOracle

__all__ = [
    # Core
    "GlyphExtremeScanner",
    "TextBoundsReconciler",
    "scan",
    "reconcile_bounds",
    "append_extreme_characters",
    "DEFAULT_CHARACTER_SET",
    # Oracle
    "ShapingOracle",
    "HarfBuzzOracle",
    "FontHandle",
    # Records
    "BoundsRect",
    "GlyphMetric",
    "ExtremePair",
    "LineMetrics",
    "FontMetricsSnapshot",
    "TextBounds",
    "Config",
    # Exceptions
    "FontBoundsError",
    "FontNotFoundError",
    "OracleQueryError",
    "FontRegistrationError",
    "FontDownloadError",
    "ConfigError",
    # Metadata
    "__version__",
]
