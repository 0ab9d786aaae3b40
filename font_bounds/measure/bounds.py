"""Text bounds reconciliation.

Two rectangles describe a laid-out string:

- typographic bounds come from the font's line metrics and the advance
  widths, ignoring what the glyphs actually look like;
- glyph-path bounds are the tight box around the rendered outlines and
  include overhangs such as swashes.

The reconciled rectangle keeps the ink origin and height, but never gets
narrower than the advance width (trailing spaces still take room).
"""

from __future__ import annotations

import logging

from font_bounds.models import BoundsRect, TextBounds
from font_bounds.shaping.oracle import FontHandle, ShapingOracle

logger = logging.getLogger(__name__)


def reconcile_bounds(typographic: BoundsRect, glyph_path: BoundsRect) -> BoundsRect:
    """Combine typographic and glyph-path bounds into one rectangle."""
    return BoundsRect(
        origin_x=glyph_path.origin_x,
        origin_y=glyph_path.origin_y,
        width=max(typographic.width, glyph_path.width),
        height=glyph_path.height,
    )


class TextBoundsReconciler:
    """Measure text through a shaping oracle and reconcile the results."""

    def __init__(self, oracle: ShapingOracle) -> None:
        self.oracle = oracle

    def layout_lines(
        self,
        font: FontHandle,
        text: str,
        tracking: float = 0.0,
        max_width: float | None = None,
    ) -> list[str]:
        """Split ``text`` into laid-out lines.

        Newlines always break. With ``max_width`` words are wrapped
        greedily; a word wider than the limit gets a line of its own.
        """
        lines: list[str] = []
        for paragraph in text.split("\n"):
            if max_width is None or not paragraph:
                lines.append(paragraph)
                continue

            current = ""
            for word in paragraph.split(" "):
                candidate = f"{current} {word}" if current else word
                if not current:
                    current = candidate
                    continue
                width = self.oracle.measure_line(font, candidate, tracking).advance_width
                if width <= max_width:
                    current = candidate
                else:
                    lines.append(current)
                    current = word
            lines.append(current)
        return lines

    def typographic_bounds(
        self,
        font: FontHandle,
        text: str,
        tracking: float = 0.0,
        max_width: float | None = None,
    ) -> BoundsRect:
        """Bounds from line metrics: widest line by summed line heights."""
        width = 0.0
        height = 0.0
        for line in self.layout_lines(font, text, tracking, max_width):
            metrics = self.oracle.measure_line(font, line, tracking)
            width = max(width, metrics.advance_width)
            height += metrics.line_height
        return BoundsRect(0.0, 0.0, width, height)

    def glyph_path_bounds(self, font: FontHandle, text: str, tracking: float = 0.0) -> BoundsRect:
        return self.oracle.glyph_path_bounds(font, text, tracking)

    def measure(
        self,
        font: FontHandle,
        text: str,
        tracking: float = 0.0,
        max_width: float | None = None,
    ) -> TextBounds:
        """Compute typographic, glyph-path and reconciled bounds of ``text``."""
        typographic = self.typographic_bounds(font, text, tracking, max_width)
        glyph_path = self.glyph_path_bounds(font, text, tracking)
        reconciled = reconcile_bounds(typographic, glyph_path)
        logger.debug(
            "Bounds for %r in %s at %.1fpt: typographic=%s glyph_path=%s reconciled=%s",
            text,
            font.name,
            font.size,
            typographic,
            glyph_path,
            reconciled,
        )
        return TextBounds(typographic, glyph_path, reconciled)

    def reconcile(
        self,
        font: FontHandle,
        text: str,
        tracking: float = 0.0,
        max_width: float | None = None,
    ) -> BoundsRect:
        """Return the reconciled bounds of ``text``."""
        return self.measure(font, text, tracking, max_width).reconciled
