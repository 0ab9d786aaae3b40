"""Extreme glyph detection.

Finds the character in a candidate set whose ink reaches highest above
the baseline and the one that reaches lowest below it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from font_bounds.exceptions import OracleQueryError
from font_bounds.models import BoundsRect, ExtremePair, GlyphMetric
from font_bounds.shaping.oracle import FontHandle, ShapingOracle

logger = logging.getLogger(__name__)

DEFAULT_CHARACTER_SET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789"
    "!@#$%^&*()_+-=[]{}|;:'\",.<>?/~`"
)


def glyph_metric(character: str, bounds: BoundsRect) -> GlyphMetric:
    """Convert a character's ink bounds into baseline excursions."""
    return GlyphMetric(
        character=character,
        ascent_above_baseline=bounds.origin_y + bounds.height,
        descent_below_baseline=-bounds.origin_y,
    )


class GlyphExtremeScanner:
    """Scan candidate characters for the top-most and bottom-most glyph.

    Args:
        oracle: Shaping oracle used for the per-character bounds queries.
        on_glyph: Optional callback invoked with every measured
            :class:`GlyphMetric`, in candidate order.
    """

    def __init__(
        self,
        oracle: ShapingOracle,
        on_glyph: Callable[[GlyphMetric], None] | None = None,
    ) -> None:
        self.oracle = oracle
        self.on_glyph = on_glyph

    def scan(self, font: FontHandle, candidates: Iterable[str]) -> ExtremePair:
        """Return the extreme characters of ``candidates`` in ``font``.

        Ties keep the earliest character. Characters the oracle fails to
        measure are logged and skipped.
        """
        top = GlyphMetric(" ", 0.0, 0.0)
        bottom = GlyphMetric(" ", 0.0, 0.0)

        for char in candidates:
            try:
                bounds = self.oracle.glyph_path_bounds(font, char, 0.0)
            except OracleQueryError as e:
                logger.warning("Skipping %r: %s", char, e.reason)
                continue

            metric = glyph_metric(char, bounds)
            logger.debug(
                "Char: %r - above baseline: %.2f, below baseline: %.2f "
                "(bounds height: %.2f, y origin: %.2f)",
                char,
                metric.ascent_above_baseline,
                metric.descent_below_baseline,
                bounds.height,
                bounds.origin_y,
            )
            if self.on_glyph is not None:
                self.on_glyph(metric)

            if metric.ascent_above_baseline > top.ascent_above_baseline:
                top = GlyphMetric(char, metric.ascent_above_baseline, 0.0)
            if metric.descent_below_baseline > bottom.descent_below_baseline:
                bottom = GlyphMetric(char, 0.0, metric.descent_below_baseline)

        return ExtremePair(top_most=top, bottom_most=bottom)


def scan(
    oracle: ShapingOracle,
    font: FontHandle,
    candidates: Iterable[str] = DEFAULT_CHARACTER_SET,
) -> ExtremePair:
    """Shortcut for ``GlyphExtremeScanner(oracle).scan(font, candidates)``."""
    return GlyphExtremeScanner(oracle).scan(font, candidates)


def append_extreme_characters(text: str, extremes: ExtremePair, separator: str = " | ") -> str:
    """Append the extreme characters missing from ``text``.

    Floor entries (no positive excursion) are ignored, so a font scan that
    found nothing leaves the text unchanged.
    """
    missing: list[str] = []
    for metric, value in (
        (extremes.top_most, extremes.height),
        (extremes.bottom_most, extremes.depth),
    ):
        if value <= 0:
            continue
        if metric.character not in text and metric.character not in missing:
            missing.append(metric.character)

    if not missing:
        return text
    return text + separator + "".join(missing)
