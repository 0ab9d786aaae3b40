"""Pytest configuration and shared fixtures for font-bounds tests."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from font_bounds.exceptions import OracleQueryError
from font_bounds.fonts import FontCache
from font_bounds.models import BoundsRect, FontMetricsSnapshot, LineMetrics
from font_bounds.shaping import FontHandle

# Paths
PROJECT_ROOT = Path(__file__).parent.parent

# Test font geometry, in font units (1000 per em)
UNITS_PER_EM = 1000
ASCENT = 800
DESCENT = -200
LINE_GAP = 100
CAP_HEIGHT = 700
X_HEIGHT = 500

TEST_FAMILY = "Bounds Test"


def _rect(x0: int, y0: int, x1: int, y1: int):
    pen = TTGlyphPen(None)
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()
    return pen.glyph()


def build_test_font(path: Path, family: str = TEST_FAMILY) -> Path:
    """Write a tiny TrueType font with box glyphs of known extents.

    ``j`` overhangs to the left and rises above the cap height; ``g`` and
    ``j`` share the deepest descent.
    """
    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    glyph_order = [".notdef", "space", "A", "H", "g", "j", "x"]
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(
        {
            ord(" "): "space",
            ord("A"): "A",
            ord("H"): "H",
            ord("g"): "g",
            ord("j"): "j",
            ord("x"): "x",
        }
    )
    fb.setupGlyf(
        {
            ".notdef": _rect(50, 0, 450, 700),
            "space": TTGlyphPen(None).glyph(),
            "A": _rect(50, 0, 550, 700),
            "H": _rect(50, 0, 550, 700),
            "g": _rect(50, -200, 450, 500),
            "j": _rect(-50, -200, 200, 750),
            "x": _rect(50, 0, 450, 500),
        }
    )
    fb.setupHorizontalMetrics(
        {
            ".notdef": (500, 50),
            "space": (250, 0),
            "A": (600, 50),
            "H": (600, 50),
            "g": (500, 50),
            "j": (300, -50),
            "x": (500, 50),
        }
    )
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    fb.font["hhea"].lineGap = LINE_GAP
    fb.setupOS2(
        sTypoAscender=ASCENT,
        sTypoDescender=DESCENT,
        sTypoLineGap=LINE_GAP,
        usWinAscent=ASCENT,
        usWinDescent=abs(DESCENT),
        sxHeight=X_HEIGHT,
        sCapHeight=CAP_HEIGHT,
        usWeightClass=400,
    )
    fb.setupPost()
    fb.setupMaxp()
    fb.setupHead()
    fb.setupNameTable(
        {
            "familyName": family,
            "styleName": "Regular",
            "fullName": f"{family} Regular",
            "uniqueFontIdentifier": f"{family} Regular",
            "psName": f"{family.replace(' ', '')}-Regular",
            "version": "Version 1.0",
        }
    )
    fb.save(str(path))
    return path


@pytest.fixture(scope="session")
def test_font_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Path to the generated test font."""
    return build_test_font(tmp_path_factory.mktemp("fonts") / "BoundsTest-Regular.ttf")


@pytest.fixture(scope="session")
def other_font_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Same outlines as the test font under the family name "Other Face"."""
    return build_test_font(tmp_path_factory.mktemp("other") / "OtherFace-Regular.ttf", family="Other Face")


@pytest.fixture
def test_font_bytes(test_font_path: Path) -> bytes:
    return test_font_path.read_bytes()


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo the handler the CLI installs on the ``font_bounds`` logger."""
    logger = logging.getLogger("font_bounds")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture(autouse=True)
def isolated_font_cache(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the persistent font index out of the user's home directory."""
    cache_file = tmp_path / "font_cache.json"
    monkeypatch.setenv("FONT_BOUNDS_FONT_CACHE", str(cache_file))
    monkeypatch.delenv("FONT_BOUNDS_CONFIG", raising=False)
    monkeypatch.setattr(FontCache, "_fc_cache", None)
    return cache_file


class FakeOracle:
    """Shaping oracle with synthetic, per-string answers.

    Every character advances ``char_width + tracking`` points; line
    metrics are fixed. Strings listed in ``failing`` raise
    :class:`OracleQueryError`.
    """

    def __init__(
        self,
        glyph_bounds: dict[str, BoundsRect] | None = None,
        failing: Iterable[str] = (),
        char_width: float = 5.0,
        line: LineMetrics | None = None,
    ) -> None:
        self.glyph_bounds = dict(glyph_bounds or {})
        self.failing = set(failing)
        self.char_width = char_width
        self.line = line or LineMetrics(ascent=8.0, descent=2.0, leading=1.0, advance_width=0.0)
        self.calls: list[tuple[str, str, float]] = []

    def create_font(self, name: str, size: float) -> FontHandle:
        return FontHandle(name=name, size=size)

    def measure_line(self, font: FontHandle, text: str, tracking: float) -> LineMetrics:
        self.calls.append(("measure_line", text, tracking))
        if text in self.failing:
            raise OracleQueryError(text, "synthetic failure")
        return LineMetrics(
            ascent=self.line.ascent,
            descent=self.line.descent,
            leading=self.line.leading,
            advance_width=len(text) * (self.char_width + tracking),
        )

    def glyph_path_bounds(self, font: FontHandle, text: str, tracking: float) -> BoundsRect:
        self.calls.append(("glyph_path_bounds", text, tracking))
        if text in self.failing:
            raise OracleQueryError(text, "synthetic failure")
        return self.glyph_bounds.get(text, BoundsRect.ZERO)

    def font_metrics(self, font: FontHandle) -> FontMetricsSnapshot:
        return FontMetricsSnapshot(ascent=8.0, descent=2.0, leading=1.0, cap_height=7.0, x_height=5.0)


@pytest.fixture
def make_oracle() -> type[FakeOracle]:
    """Factory for synthetic oracles: ``make_oracle(glyph_bounds={...})``."""
    return FakeOracle


@pytest.fixture
def fake_font() -> FontHandle:
    return FontHandle(name="Fake", size=24.0)


# Skip markers for slow or external-dependent tests
slow = pytest.mark.slow


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
