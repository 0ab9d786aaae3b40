"""Diagnostic renders of measured text.

Draws the text on a page together with its precise (ink) bounds, its
typographic bounds, the font's metric lines and an info block, then
writes the page as PNG or PDF.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from font_bounds.measure.bounds import TextBoundsReconciler
from font_bounds.models import ExtremePair, FontMetricsSnapshot, TextBounds
from font_bounds.shaping.oracle import FontHandle, ShapingOracle

logger = logging.getLogger(__name__)

PAGE_COLOR = (242, 242, 242, 255)
PRECISE_FILL = (230, 230, 255, 77)
PRECISE_STROKE = (0, 0, 255, 204)
STANDARD_FILL = (230, 255, 230, 77)
STANDARD_STROKE = (0, 204, 0, 204)
METRIC_LINE = (179, 179, 179, 204)
TOP_COLOR = (255, 0, 0, 255)
BOTTOM_COLOR = (0, 0, 255, 255)
TEXT_COLOR = (0, 0, 0, 255)

LABEL_OFFSET = 10.0
LABEL_MAX_WIDTH = 50.0
LABEL_SIZE = 8.0
INFO_SIZE = 12.0
INFO_LINE_HEIGHT = 15.0
LEGEND_HEIGHT = 40.0

FORMATS = {".png": "PNG", ".pdf": "PDF"}


@dataclass(frozen=True)
class RenderResult:
    path: Path
    format: str
    width: int
    height: int
    bounds: TextBounds
    metrics: FontMetricsSnapshot


def output_format(path: Path, fmt: str | None = None) -> str:
    """Pick ``PNG`` or ``PDF`` from ``fmt`` or the file suffix."""
    if fmt:
        fmt = fmt.upper()
        if fmt not in FORMATS.values():
            raise ValueError(f"Unsupported output format: {fmt}")
        return fmt
    try:
        return FORMATS[path.suffix.lower()]
    except KeyError:
        raise ValueError(f"Cannot infer output format from {path.name!r}; use .png or .pdf") from None


def info_lines(
    font: FontHandle,
    text: str,
    tracking: float,
    bounds: TextBounds,
    metrics: FontMetricsSnapshot,
    extremes: ExtremePair | None = None,
) -> list[str]:
    """Text of the info block printed under the render."""
    precise = bounds.glyph_path
    standard = bounds.typographic
    top = extremes.top_most.character if extremes else " "
    bottom = extremes.bottom_most.character if extremes else " "
    return [
        f"Font: {font.name} at {font.size:g}pt",
        f'Text: "{text}"',
        f"Tracking: {tracking:.2f} points",
        "",
        "Extreme Characters:",
        f"Top-most glyph: '{top}' extends "
        f"{extremes.height if extremes else 0:.2f} points above baseline",
        f"Bottom-most glyph: '{bottom}' extends "
        f"{extremes.depth if extremes else 0:.2f} points below baseline",
        "",
        "Precise Glyph Bounds (blue)",
        "Standard Bounds (green)",
        "",
        "Precise Glyph Bounds:",
        f"  Origin: ({precise.origin_x:.2f}, {precise.origin_y:.2f})",
        f"  Size: {precise.width:.2f} x {precise.height:.2f} points",
        "",
        "Standard Bounds:",
        f"  Origin: ({standard.origin_x:.2f}, {standard.origin_y:.2f})",
        f"  Size: {standard.width:.2f} x {standard.height:.2f} points",
        "",
        "Font Metrics:",
        f"  Ascent: {metrics.ascent:.2f} points",
        f"  Descent: {metrics.descent:.2f} points",
        f"  Leading: {metrics.leading:.2f} points",
        f"  Cap Height: {metrics.cap_height:.2f} points",
        f"  x-Height: {metrics.x_height:.2f} points",
        f"  Line Height: {metrics.line_height:.2f} points",
    ]


def character_offsets(oracle: ShapingOracle, font: FontHandle, text: str, tracking: float) -> list[float]:
    """Pen x position of every character, from the advance of its prefix."""
    return [oracle.measure_line(font, text[:i], tracking).advance_width if i else 0.0 for i in range(len(text))]


def render_visualization(
    oracle: ShapingOracle,
    font: FontHandle,
    text: str,
    output: Path,
    tracking: float = 0.0,
    extremes: ExtremePair | None = None,
    fmt: str | None = None,
    scale: float = 4.0,
    padding: float = 10.0,
) -> RenderResult:
    """Render ``text`` with its bounds and metric lines to ``output``.

    ``scale`` is the number of pixels per point.

    Raises:
        ValueError: If the font has no file to draw with or the output
            format is unknown.
    """
    if font.path is None:
        raise ValueError(f"Font {font.name!r} has no file to render with")
    image_format = output_format(output, fmt)

    bounds = TextBoundsReconciler(oracle).measure(font, text, tracking)
    metrics = oracle.font_metrics(font)
    precise = bounds.glyph_path
    standard = bounds.typographic

    def px(value: float) -> float:
        return value * scale

    label_column = LABEL_OFFSET + LABEL_MAX_WIDTH + LABEL_OFFSET
    left_overhang = max(0.0, -precise.origin_x)
    content_width = max(precise.max_x, standard.width, 1.0) + left_overhang
    top_extent = max(metrics.ascent, precise.max_y, metrics.cap_height)
    bottom_extent = max(
        metrics.descent + metrics.leading,
        -precise.origin_y,
        standard.height - metrics.ascent,
    )

    lines = info_lines(font, text, tracking, bounds, metrics, extremes)
    info_height = len(lines) * INFO_LINE_HEIGHT

    page_width = padding * 2 + label_column + content_width
    page_height = padding * 3 + top_extent + bottom_extent + LEGEND_HEIGHT + info_height

    origin_x = padding + label_column + left_overhang
    baseline_y = padding + top_extent
    line_start = padding + label_column
    line_end = line_start + content_width

    image = Image.new("RGBA", (math.ceil(px(page_width)), math.ceil(px(page_height))), PAGE_COLOR)
    stroke = max(1, round(px(0.5)))

    overlay = Image.new("RGBA", image.size, (0, 0, 0, 0))
    overlay_draw = ImageDraw.Draw(overlay)
    overlay_draw.rectangle(
        (
            px(origin_x + precise.origin_x),
            px(baseline_y - precise.max_y),
            px(origin_x + precise.max_x),
            px(baseline_y - precise.origin_y),
        ),
        fill=PRECISE_FILL,
        outline=PRECISE_STROKE,
        width=stroke,
    )
    standard_top = baseline_y - metrics.ascent
    overlay_draw.rectangle(
        (
            px(origin_x),
            px(standard_top),
            px(origin_x + standard.width),
            px(standard_top + standard.height),
        ),
        fill=STANDARD_FILL,
        outline=STANDARD_STROKE,
        width=stroke,
    )
    image = Image.alpha_composite(image, overlay)
    draw = ImageDraw.Draw(image)

    label_font = ImageFont.load_default(size=px(LABEL_SIZE))
    metric_lines = [
        ("Baseline", baseline_y),
        ("Ascent", baseline_y - metrics.ascent),
        ("Descent", baseline_y + metrics.descent),
        ("Leading", baseline_y + metrics.descent + metrics.leading),
        ("Cap Height", baseline_y - metrics.cap_height),
        ("x-Height", baseline_y - metrics.x_height),
    ]
    for label, y in metric_lines:
        draw.line((px(line_start), px(y), px(line_end), px(y)), fill=METRIC_LINE, width=stroke)
        draw.text((px(padding), px(y)), label, font=label_font, fill=TEXT_COLOR, anchor="lm")

    text_font = ImageFont.truetype(str(font.path), size=max(1, round(px(font.size))), index=font.face_index)
    top_index = _first_index(text, extremes.top_most.character) if extremes and extremes.height > 0 else -1
    bottom_index = _first_index(text, extremes.bottom_most.character) if extremes and extremes.depth > 0 else -1
    for i, (char, offset) in enumerate(zip(text, character_offsets(oracle, font, text, tracking))):
        if not char.isprintable() or char.isspace():
            continue
        color = TEXT_COLOR
        if i == top_index:
            color = TOP_COLOR
        elif i == bottom_index:
            color = BOTTOM_COLOR
        draw.text((px(origin_x + offset), px(baseline_y)), char, font=text_font, fill=color, anchor="ls")

    cross = 5.0
    draw.line((px(origin_x - cross), px(baseline_y), px(origin_x + cross), px(baseline_y)), fill=TOP_COLOR, width=stroke * 2)
    draw.line((px(origin_x), px(baseline_y - cross), px(origin_x), px(baseline_y + cross)), fill=TOP_COLOR, width=stroke * 2)

    info_font = ImageFont.load_default(size=px(INFO_SIZE))
    legend_top = baseline_y + bottom_extent + padding
    if extremes is not None:
        legend = [
            (TOP_COLOR, f" - Top-most character '{extremes.top_most.character}'"),
            (BOTTOM_COLOR, f" - Bottom-most character '{extremes.bottom_most.character}'"),
        ]
        for row, (color, caption) in enumerate(legend):
            y = legend_top + row * 15.0
            draw.rectangle((px(padding), px(y), px(padding + 10), px(y + 10)), fill=color)
            draw.text((px(padding + 12), px(y)), caption, font=info_font, fill=TEXT_COLOR)

    info_top = legend_top + LEGEND_HEIGHT
    for row, line in enumerate(lines):
        draw.text((px(padding), px(info_top + row * INFO_LINE_HEIGHT)), line, font=info_font, fill=TEXT_COLOR)

    output.parent.mkdir(parents=True, exist_ok=True)
    if image_format == "PDF":
        image.convert("RGB").save(output, "PDF", resolution=72.0 * scale)
    else:
        image.save(output, "PNG")
    logger.info("Wrote %s render to %s (%dx%d)", image_format, output, image.width, image.height)

    return RenderResult(output, image_format, image.width, image.height, bounds, metrics)


def _first_index(text: str, char: str) -> int:
    return text.find(char) if char else -1
