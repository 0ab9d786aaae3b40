"""Value records produced by the measurement core.

All coordinates are in points with the Y axis pointing up and the
baseline at ``y = 0``, so a glyph that descends below the baseline has a
negative ``origin_y``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class BoundsRect:
    """Axis-aligned rectangle in baseline-relative points."""

    origin_x: float
    origin_y: float
    width: float
    height: float

    ZERO: ClassVar[BoundsRect]

    @property
    def max_x(self) -> float:
        return self.origin_x + self.width

    @property
    def max_y(self) -> float:
        return self.origin_y + self.height


BoundsRect.ZERO = BoundsRect(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class GlyphMetric:
    """Vertical excursion of a single character around the baseline."""

    character: str
    ascent_above_baseline: float
    descent_below_baseline: float


@dataclass(frozen=True)
class ExtremePair:
    """The characters reaching furthest above and below the baseline.

    ``top_most`` only carries a meaningful ascent and ``bottom_most`` only a
    meaningful descent; the other field of each is left at zero.
    """

    top_most: GlyphMetric
    bottom_most: GlyphMetric

    @classmethod
    def floor(cls) -> ExtremePair:
        """Pair reported when no character has a positive excursion."""
        return cls(GlyphMetric(" ", 0.0, 0.0), GlyphMetric(" ", 0.0, 0.0))

    @property
    def height(self) -> float:
        return self.top_most.ascent_above_baseline

    @property
    def depth(self) -> float:
        return self.bottom_most.descent_below_baseline


@dataclass(frozen=True)
class LineMetrics:
    """Typographic metrics of one laid-out line."""

    ascent: float
    descent: float
    leading: float
    advance_width: float

    @property
    def line_height(self) -> float:
        return self.ascent + self.descent + self.leading


@dataclass(frozen=True)
class FontMetricsSnapshot:
    """Font-wide vertical metrics at a given size."""

    ascent: float
    descent: float
    leading: float
    cap_height: float
    x_height: float

    @property
    def line_height(self) -> float:
        return self.ascent + self.descent + self.leading


@dataclass(frozen=True)
class TextBounds:
    """All three rectangles computed for one piece of text."""

    typographic: BoundsRect
    glyph_path: BoundsRect
    reconciled: BoundsRect
