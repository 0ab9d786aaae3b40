"""Shaping oracle interface consumed by the measurement core.

The core never touches font files directly. Everything it needs comes
from an object implementing :class:`ShapingOracle`, which lets tests swap
in synthetic metrics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from font_bounds.models import BoundsRect, FontMetricsSnapshot, LineMetrics


@dataclass(frozen=True)
class FontHandle:
    """A resolved font at a specific point size.

    Only the identity fields take part in equality; the raw font bytes
    ride along so the oracle does not re-read the file per query.
    """

    name: str
    size: float
    path: Path | None = None
    face_index: int = 0
    data: bytes = field(default=b"", repr=False, compare=False)

    def with_size(self, size: float) -> FontHandle:
        return FontHandle(self.name, size, self.path, self.face_index, self.data)


@runtime_checkable
class ShapingOracle(Protocol):
    """Text layout engine queried for metrics."""

    def create_font(self, name: str, size: float) -> FontHandle:
        """Resolve ``name`` at ``size`` or raise ``FontNotFoundError``."""
        ...

    def measure_line(self, font: FontHandle, text: str, tracking: float) -> LineMetrics:
        """Typographic metrics and advance width of ``text`` as one line."""
        ...

    def glyph_path_bounds(self, font: FontHandle, text: str, tracking: float) -> BoundsRect:
        """Tight ink bounds of ``text`` laid out as one line."""
        ...

    def font_metrics(self, font: FontHandle) -> FontMetricsSnapshot:
        """Font-wide metrics at the handle's size."""
        ...
