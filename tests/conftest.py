"""Shared fixtures: small synthetic fonts and shape builders.

Both fonts use 1000 units per em and map the same characters:

- ``A``: solid bar 600 x 980 units
- ``O``: square ring, outer 800 x 800, hole 400 x 400
- ``I``: thin bar 100 x 700
- ``o``: round outline drawn with curves (quadratic in TrueType, cubic in CFF)
- space: no outline, 300 units advance
"""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.t2CharStringPen import T2CharStringPen
from fontTools.pens.ttGlyphPen import TTGlyphPen

from icemold.domain import Point, PolygonLoop, ShapeWithHoles, TextBounds
from icemold.io import Font

GLYPH_ORDER = [".notdef", "space", "A", "O", "I", "o"]
CMAP = {ord(" "): "space", ord("A"): "A", ord("O"): "O", ord("I"): "I", ord("o"): "o"}
ADVANCES = {".notdef": 500, "space": 300, "A": 700, "O": 900, "I": 200, "o": 1100}
LEFT_BEARINGS = {".notdef": 100, "space": 0, "A": 0, "O": 0, "I": 0, "o": 0}


def _rect(pen, x0: float, y0: float, x1: float, y1: float, clockwise: bool) -> None:
    if clockwise:
        corners = [(x0, y0), (x0, y1), (x1, y1), (x1, y0)]
    else:
        corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    pen.moveTo(corners[0])
    for corner in corners[1:]:
        pen.lineTo(corner)
    pen.closePath()


def _draw_rect_glyph(pen, name: str, outer_clockwise: bool) -> None:
    """Draw the rectangle based glyphs; outer loops wind as requested."""
    if name == ".notdef":
        _rect(pen, 100, 0, 500, 700, outer_clockwise)
    elif name == "A":
        _rect(pen, 0, 0, 600, 980, outer_clockwise)
    elif name == "O":
        _rect(pen, 0, 0, 800, 800, outer_clockwise)
        _rect(pen, 200, 200, 600, 600, not outer_clockwise)
    elif name == "I":
        _rect(pen, 0, 0, 100, 700, outer_clockwise)


def build_truetype_font(path: Path) -> Path:
    """Write a TrueType font whose outer contours wind clockwise."""
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(GLYPH_ORDER)
    fb.setupCharacterMap(CMAP)

    glyphs = {}
    for name in GLYPH_ORDER:
        pen = TTGlyphPen(None)
        if name == "o":
            # Two off-curve points per segment, so on-curve points are implied
            pen.moveTo((500, 0))
            pen.qCurveTo((0, 0), (0, 1000), (500, 1000))
            pen.qCurveTo((1000, 1000), (1000, 0), (500, 0))
            pen.closePath()
        else:
            _draw_rect_glyph(pen, name, outer_clockwise=True)
        glyphs[name] = pen.glyph()
    fb.setupGlyf(glyphs)

    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {name: (ADVANCES[name], getattr(glyf[name], "xMin", 0)) for name in GLYPH_ORDER}
    )
    fb.setupHorizontalHeader(ascent=1000, descent=-200)
    fb.setupNameTable({"familyName": "Icemold Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=1000, sTypoDescender=-200, usWinAscent=1000, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


def build_cff_font(path: Path) -> Path:
    """Write a CFF-flavored OpenType font whose outer contours wind counter-clockwise."""
    fb = FontBuilder(1000, isTTF=False)
    fb.setupGlyphOrder(GLYPH_ORDER)
    fb.setupCharacterMap(CMAP)

    charstrings = {}
    for name in GLYPH_ORDER:
        pen = T2CharStringPen(ADVANCES[name], None)
        if name == "o":
            pen.moveTo((500, 0))
            pen.curveTo((776, 0), (1000, 224), (1000, 500))
            pen.curveTo((1000, 776), (776, 1000), (500, 1000))
            pen.curveTo((224, 1000), (0, 776), (0, 500))
            pen.curveTo((0, 224), (224, 0), (500, 0))
            pen.closePath()
        else:
            _draw_rect_glyph(pen, name, outer_clockwise=False)
        charstrings[name] = pen.getCharString()
    fb.setupCFF("IcemoldTest-Regular", {"FullName": "Icemold Test Regular"}, charstrings, {})

    fb.setupHorizontalMetrics({name: (ADVANCES[name], LEFT_BEARINGS[name]) for name in GLYPH_ORDER})
    fb.setupHorizontalHeader(ascent=1000, descent=-200)
    fb.setupNameTable({"familyName": "Icemold Test CFF", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=1000, sTypoDescender=-200, usWinAscent=1000, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture
def ttf_path(tmp_path: Path) -> Path:
    return build_truetype_font(tmp_path / "IcemoldTest.ttf")


@pytest.fixture
def otf_path(tmp_path: Path) -> Path:
    return build_cff_font(tmp_path / "IcemoldTest.otf")


@pytest.fixture
def font(ttf_path: Path):
    loaded = Font.from_path(ttf_path)
    yield loaded
    loaded.close()


@pytest.fixture
def cff_font(otf_path: Path):
    loaded = Font.from_path(otf_path)
    yield loaded
    loaded.close()


class BoxFont:
    """Glyph source where every character has the same ink box."""

    def __init__(self, bounds: TextBounds) -> None:
        self.bounds = bounds

    def get_path(self, text, x, y, size):
        return []

    def get_bounds(self, text, size):
        if not text.strip():
            return TextBounds(0.0, 0.0, 0.0, 0.0)
        return self.bounds


def square(x0: float, y0: float, size: float) -> PolygonLoop:
    """Counter-clockwise square with its lower left corner at (x0, y0)."""
    return PolygonLoop(
        points=[
            Point(x0, y0),
            Point(x0 + size, y0),
            Point(x0 + size, y0 + size),
            Point(x0, y0 + size),
        ]
    )


def square_shape(x0: float, y0: float, size: float, hole: float | None = None) -> ShapeWithHoles:
    """Square shape, optionally with a centered clockwise square hole."""
    shape = ShapeWithHoles(outer=square(x0, y0, size))
    if hole is not None:
        inset = (size - hole) / 2
        shape.holes.append(square(x0 + inset, y0 + inset, hole).reversed())
    return shape
