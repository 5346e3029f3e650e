"""Font handle for laying out text as path commands.

This module wraps a fontTools ``TTFont`` and exposes the two queries the
geometry pipeline needs: path commands for a string and the ink box of a
string. Characters are laid out left to right with the ``hmtx`` advance
widths; there is no kerning or shaping.

TrueType outlines wind the other way round from CFF outlines. Contours of
``glyf`` fonts are reversed while drawing, so every font yields outer
contours counter-clockwise once the Y axis points up.
"""

from collections.abc import Iterator
from pathlib import Path

from fontTools.pens.basePen import BasePen
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.recordingPen import DecomposingRecordingPen
from fontTools.pens.reverseContourPen import ReverseContourPen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont

from icemold.domain import (
    EMPTY_BOUNDS,
    Close,
    Cubic,
    Line,
    Move,
    PathCommand,
    Quadratic,
    TextBounds,
)
from icemold.exceptions import FontLoadError


class PathCommandPen(BasePen):
    """Pen that records drawing calls as domain path commands.

    ``BasePen`` splits TrueType curves with implied on-curve points into
    single quadratic segments, so every ``Quadratic`` has one control point.
    """

    def __init__(self, glyphSet=None) -> None:
        super().__init__(glyphSet)
        self.commands: list[PathCommand] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(Move(pt[0], pt[1]))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(Line(pt[0], pt[1]))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.commands.append(Cubic(pt1[0], pt1[1], pt2[0], pt2[1], pt3[0], pt3[1]))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.commands.append(Quadratic(pt1[0], pt1[1], pt2[0], pt2[1]))

    def _closePath(self) -> None:
        self.commands.append(Close())

    def _endPath(self) -> None:
        self.commands.append(Close())


class Font:
    """A loaded font that lays out text as path commands.

    Example:
        font = Font.from_path(Path("NotoSansJP-Bold.otf"))
        commands = font.get_path("鎌", 0, 0, 40.0)
        bounds = font.get_bounds("鎌", 40.0)
    """

    def __init__(self, ttfont: TTFont, path: Path | None = None) -> None:
        self._font = ttfont
        self._path = path
        self._glyph_set = ttfont.getGlyphSet()
        self._cmap = ttfont.getBestCmap() or {}
        self._hmtx = ttfont["hmtx"]
        self._reverse_contours = "glyf" in ttfont

    @classmethod
    def from_path(cls, path: Path | str) -> "Font":
        """Load a TTF or OTF file.

        Raises:
            FontLoadError: If the file is missing or cannot be parsed
        """
        path = Path(path)
        if not path.exists():
            raise FontLoadError(str(path), "file not found")

        try:
            ttfont = TTFont(str(path))
            return cls(ttfont, path)
        except Exception as e:
            raise FontLoadError(str(path), str(e)) from e

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def ttfont(self) -> TTFont:
        return self._font

    @property
    def units_per_em(self) -> int:
        """Font units per em, the basis of the size scale."""
        return self._font["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def format(self) -> str:
        """'OpenType' for CFF outlines, 'TrueType' otherwise."""
        if "CFF " in self._font or "CFF2" in self._font:
            return "OpenType"
        return "TrueType"

    @property
    def family_name(self) -> str | None:
        if "name" not in self._font:
            return None
        return self._font["name"].getBestFamilyName()

    @property
    def glyph_count(self) -> int:
        return self._font["maxp"].numGlyphs  # type: ignore[attr-defined]

    def glyph_name(self, char: str) -> str:
        """Glyph name for ``char``, '.notdef' when the font lacks it."""
        return self._cmap.get(ord(char), ".notdef")

    def _layout(self, text: str, size: float) -> Iterator[tuple[str, float]]:
        """Yield (glyph name, pen x in mm) for each character the font can draw."""
        scale = size / self.units_per_em
        x = 0.0
        for char in text:
            name = self.glyph_name(char)
            if name not in self._glyph_set:
                continue
            yield name, x
            x += self._hmtx[name][0] * scale

    def get_path(self, text: str, x: float, y: float, size: float) -> list[PathCommand]:
        """Path commands for ``text`` with its baseline origin at (x, y).

        Coordinates follow screen convention (Y down): a glyph point at
        height ``gy`` font units lands at ``y - gy * size / unitsPerEm``.

        Args:
            text: Characters to lay out
            x: Pen start X (mm)
            y: Baseline Y (mm, screen convention)
            size: Font size (mm)

        Returns:
            Path commands for all characters, in layout order
        """
        scale = size / self.units_per_em
        pen = PathCommandPen()
        for name, advance in self._layout(text, size):
            recording = DecomposingRecordingPen(self._glyph_set)
            self._glyph_set[name].draw(recording)

            out = TransformPen(pen, (scale, 0, 0, -scale, x + advance, y))
            recording.replay(ReverseContourPen(out) if self._reverse_contours else out)
        return pen.commands

    def get_bounds(self, text: str, size: float) -> TextBounds:
        """Ink box of ``text`` laid out at the origin, Y up.

        Returns:
            The tight box, or a zero box for empty or blank text
        """
        scale = size / self.units_per_em
        bounds_pen = BoundsPen(self._glyph_set)
        for name, advance in self._layout(text, size):
            self._glyph_set[name].draw(TransformPen(bounds_pen, (scale, 0, 0, scale, advance, 0)))

        if bounds_pen.bounds is None:
            return EMPTY_BOUNDS
        return TextBounds(*bounds_pen.bounds)

    def close(self) -> None:
        self._font.close()
