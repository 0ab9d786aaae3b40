"""Text shaping for font-bounds.

This subpackage provides:
- The shaping oracle protocol and font handles
- HarfBuzz shaping wrapper
- The HarfBuzz/fontTools oracle implementation
"""

from font_bounds.shaping.harfbuzz import (
    HarfBuzzOracle,
    ShapedGlyph,
    ShapingResult,
    create_hb_face,
    create_hb_font,
    shape_text,
)
from font_bounds.shaping.oracle import FontHandle, ShapingOracle

__all__ = [
    "FontHandle",
    "ShapingOracle",
    "HarfBuzzOracle",
    "shape_text",
    "create_hb_face",
    "create_hb_font",
    "ShapedGlyph",
    "ShapingResult",
]
