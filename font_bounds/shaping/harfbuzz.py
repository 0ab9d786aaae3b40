"""HarfBuzz + fontTools implementation of the shaping oracle.

HarfBuzz provides glyph selection and positioning (kerning, ligatures,
contextual forms); fontTools provides the font tables and the glyph
outlines whose bounds make up the ink box. All results are converted
from font units to points using ``size / unitsPerEm``.
"""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

import uharfbuzz as hb
from fontTools.pens.boundsPen import BoundsPen
from fontTools.ttLib import TTFont, TTLibError

from font_bounds.exceptions import FontNotFoundError, OracleQueryError
from font_bounds.fonts.cache import FontCache
from font_bounds.fonts.registry import FontRegistry
from font_bounds.models import BoundsRect, FontMetricsSnapshot, LineMetrics
from font_bounds.shaping.oracle import FontHandle

logger = logging.getLogger(__name__)

USE_TYPO_METRICS = 1 << 7

# Characters that never need a glyph of their own
_UNMAPPED_CATEGORIES = {"Cc", "Cf", "Zl", "Zp"}


@dataclass(frozen=True)
class ShapedGlyph:
    """One positioned glyph, in font units."""

    glyph_id: int
    cluster: int
    x_advance: float
    y_advance: float
    x_offset: float
    y_offset: float


@dataclass(frozen=True)
class ShapingResult:
    glyphs: list[ShapedGlyph]
    units_per_em: int

    @property
    def advance(self) -> float:
        return sum(g.x_advance for g in self.glyphs)


def create_hb_face(font: FontHandle) -> hb.Face:
    return hb.Face(hb.Blob(font.data), font.face_index)


def create_hb_font(face: hb.Face) -> hb.Font:
    """Build a HarfBuzz font scaled to font units."""
    hb_font = hb.Font(face)
    hb_font.scale = (face.upem, face.upem)
    return hb_font


def shape_text(font: FontHandle, text: str, tracking: float = 0.0) -> ShapingResult:
    """Shape ``text`` as a single run and apply ``tracking`` (points) per glyph.

    Clusters are character indices into ``text``.
    """
    face = create_hb_face(font)
    upem = face.upem
    hb_font = create_hb_font(face)
    tracking_units = tracking * upem / font.size if font.size else 0.0

    buf = hb.Buffer()
    buf.add_codepoints([ord(ch) for ch in text])
    buf.guess_segment_properties()
    hb.shape(hb_font, buf, {"kern": True, "liga": True})

    glyphs = [
        ShapedGlyph(
            glyph_id=info.codepoint,
            cluster=info.cluster,
            x_advance=pos.x_advance + tracking_units,
            y_advance=pos.y_advance,
            x_offset=pos.x_offset,
            y_offset=pos.y_offset,
        )
        for info, pos in zip(buf.glyph_infos, buf.glyph_positions)
    ]
    return ShapingResult(glyphs, upem)


class HarfBuzzOracle:
    """Shaping oracle backed by HarfBuzz and fontTools.

    Args:
        font_cache: System font index used for name resolution.
        registry: Registered (e.g. downloaded) fonts, consulted first.
        strict_coverage: Raise :class:`OracleQueryError` when text contains
            characters the font has no glyph for, instead of measuring
            the ``.notdef`` box.
    """

    def __init__(
        self,
        font_cache: FontCache | None = None,
        registry: FontRegistry | None = None,
        strict_coverage: bool = True,
    ) -> None:
        self.font_cache = font_cache or FontCache()
        self.registry = registry or FontRegistry()
        self.strict_coverage = strict_coverage

    # -- font resolution -------------------------------------------------

    def _resolve(self, name: str) -> tuple[Path, int]:
        entry = self.registry.lookup(name)
        if entry is not None:
            logger.debug("Resolved %r to registered font %s", name, entry.path)
            return entry.path, entry.face_index

        candidate = Path(name).expanduser()
        if candidate.suffix and candidate.is_file():
            logger.debug("Using font file %s", candidate)
            return candidate, 0

        path, face_index = self.font_cache.get_font(name)
        logger.debug("Resolved %r to %s (face %d)", name, path, face_index)
        return path, face_index

    def create_font(self, name: str, size: float) -> FontHandle:
        if size <= 0:
            raise ValueError(f"Font size must be positive, got {size}")
        path, face_index = self._resolve(name)
        try:
            data = path.read_bytes()
            TTFont(BytesIO(data), fontNumber=face_index, lazy=True)
        except (OSError, TTLibError) as e:
            raise FontNotFoundError(name, f"Font {name!r} at {path} is unreadable: {e}") from e
        return FontHandle(name=name, size=float(size), path=path, face_index=face_index, data=data)

    def register_font(self, data: bytes, size: float, filename: str | None = None) -> FontHandle:
        """Register font bytes and open them at ``size``."""
        entry = self.registry.register(data, filename=filename)
        return self.create_font(entry.postscript_name or entry.family, size)

    def available_families(self) -> list[str]:
        return sorted(set(self.registry.families()) | set(self.font_cache.families()))

    # -- queries ---------------------------------------------------------

    def _open(self, font: FontHandle, text: str) -> TTFont:
        try:
            return TTFont(BytesIO(font.data), fontNumber=font.face_index, lazy=True)
        except (TTLibError, OSError) as e:
            raise OracleQueryError(text, f"cannot open {font.name}: {e}") from e

    def _missing(self, tt: TTFont, text: str) -> str:
        cmap = tt.getBestCmap() or {}
        missing = (
            ch
            for ch in text
            if ord(ch) not in cmap and unicodedata.category(ch) not in _UNMAPPED_CATEGORIES
        )
        return "".join(dict.fromkeys(missing))

    def _check_coverage(self, tt: TTFont, text: str) -> None:
        if not self.strict_coverage:
            return
        missing = self._missing(tt, text)
        if missing:
            raise OracleQueryError(text, f"no glyph for {missing!r}")

    def supports(self, font: FontHandle, text: str) -> bool:
        """Whether ``font`` has a glyph for every character of ``text`` that needs one."""
        return not self._missing(self._open(font, text), text)

    def _shape(self, font: FontHandle, tt: TTFont, text: str, tracking: float) -> ShapingResult:
        self._check_coverage(tt, text)
        try:
            return shape_text(font, text, tracking)
        except Exception as e:
            raise OracleQueryError(text, f"shaping failed: {e}") from e

    def _vertical_metrics(self, tt: TTFont) -> tuple[float, float, float]:
        """Ascent, descent (positive) and line gap in font units."""
        hhea = tt["hhea"] if "hhea" in tt else None
        os2 = tt["OS/2"] if "OS/2" in tt else None

        if os2 is not None and (os2.fsSelection & USE_TYPO_METRICS or hhea is None):
            return os2.sTypoAscender, -os2.sTypoDescender, os2.sTypoLineGap
        if hhea is not None:
            return hhea.ascent, -hhea.descent, hhea.lineGap
        head = tt["head"]
        return head.yMax, -head.yMin, 0

    def measure_line(self, font: FontHandle, text: str, tracking: float) -> LineMetrics:
        tt = self._open(font, text)
        shaped = self._shape(font, tt, text, tracking)
        scale = font.size / shaped.units_per_em
        ascent, descent, gap = self._vertical_metrics(tt)
        return LineMetrics(
            ascent=ascent * scale,
            descent=descent * scale,
            leading=gap * scale,
            advance_width=shaped.advance * scale,
        )

    def glyph_path_bounds(self, font: FontHandle, text: str, tracking: float) -> BoundsRect:
        tt = self._open(font, text)
        shaped = self._shape(font, tt, text, tracking)
        glyph_set = tt.getGlyphSet()
        glyph_order = tt.getGlyphOrder()

        x_min = y_min = float("inf")
        x_max = y_max = float("-inf")
        pen_x = pen_y = 0.0
        for glyph in shaped.glyphs:
            pen = BoundsPen(glyph_set)
            glyph_set[glyph_order[glyph.glyph_id]].draw(pen)
            if pen.bounds is not None:
                gx0, gy0, gx1, gy1 = pen.bounds
                ox = pen_x + glyph.x_offset
                oy = pen_y + glyph.y_offset
                x_min = min(x_min, ox + gx0)
                y_min = min(y_min, oy + gy0)
                x_max = max(x_max, ox + gx1)
                y_max = max(y_max, oy + gy1)
            pen_x += glyph.x_advance
            pen_y += glyph.y_advance

        if x_min == float("inf"):
            return BoundsRect.ZERO
        scale = font.size / shaped.units_per_em
        return BoundsRect(
            origin_x=x_min * scale,
            origin_y=y_min * scale,
            width=(x_max - x_min) * scale,
            height=(y_max - y_min) * scale,
        )

    def _ink_top(self, tt: TTFont, char: str) -> float:
        glyph_name = (tt.getBestCmap() or {}).get(ord(char))
        if glyph_name is None:
            return 0.0
        glyph_set = tt.getGlyphSet()
        pen = BoundsPen(glyph_set)
        glyph_set[glyph_name].draw(pen)
        return pen.bounds[3] if pen.bounds else 0.0

    def font_metrics(self, font: FontHandle) -> FontMetricsSnapshot:
        tt = self._open(font, "")
        scale = font.size / tt["head"].unitsPerEm
        ascent, descent, gap = self._vertical_metrics(tt)

        os2 = tt["OS/2"] if "OS/2" in tt else None
        cap_height = getattr(os2, "sCapHeight", 0) if os2 is not None and os2.version >= 2 else 0
        x_height = getattr(os2, "sxHeight", 0) if os2 is not None and os2.version >= 2 else 0
        if not cap_height:
            cap_height = self._ink_top(tt, "H")
        if not x_height:
            x_height = self._ink_top(tt, "x")

        return FontMetricsSnapshot(
            ascent=ascent * scale,
            descent=descent * scale,
            leading=gap * scale,
            cap_height=cap_height * scale,
            x_height=x_height * scale,
        )
