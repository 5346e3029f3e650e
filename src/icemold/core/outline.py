"""Glyph outline builder.

This module turns a font's path commands into filled regions with holes:
- Curves are flattened to a fixed number of segments
- Y is flipped per point, control points included, before flattening
- Subpaths are classified by winding (counter-clockwise = outer, clockwise = hole)
- Each hole is attached to the first outer loop containing its centroid

Subpaths with fewer than three points are dropped, and so are holes whose
centroid lies outside every outer loop. Both only happen for malformed
glyph data.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, assert_never

from icemold.core._bezier import flatten_cubic, flatten_quadratic
from icemold.core.geometry import centroid, is_clockwise, point_in_polygon
from icemold.domain import (
    Close,
    Cubic,
    Line,
    Move,
    PathCommand,
    Point,
    PolygonLoop,
    Quadratic,
    ShapeWithHoles,
    TextBounds,
)

logger = logging.getLogger(__name__)

BEZIER_SEGMENTS = 5


class GlyphSource(Protocol):
    """Anything that lays out text as path commands and measures it.

    ``get_path`` returns commands in screen convention (Y down); ``get_bounds``
    returns the ink box of the text at the origin with Y up.
    """

    def get_path(self, text: str, x: float, y: float, size: float) -> list[PathCommand]: ...

    def get_bounds(self, text: str, size: float) -> TextBounds: ...


@dataclass
class Subpath:
    """A flattened closed subpath.

    Attributes:
        points: Flattened vertices (Y up)
        clockwise: Winding classification, computed when the subpath is closed
    """

    points: list[Point]
    clockwise: bool


def commands_to_subpaths(
    commands: list[PathCommand],
    segments: int = BEZIER_SEGMENTS,
) -> list[Subpath]:
    """Flatten path commands into classified subpaths.

    Args:
        commands: Path commands in screen convention (Y down)
        segments: Line segments per curve

    Returns:
        Subpaths with at least three points, in command order
    """
    subpaths: list[Subpath] = []
    current: list[Point] = []

    def finish() -> None:
        if len(current) > 2:
            subpaths.append(Subpath(points=list(current), clockwise=is_clockwise(current)))

    for command in commands:
        match command:
            case Move(x=x, y=y):
                finish()
                current = [Point(x, -y)]
            case Line(x=x, y=y):
                current.append(Point(x, -y))
            case Cubic(x1=x1, y1=y1, x2=x2, y2=y2, x=x, y=y):
                end = Point(x, -y)
                if not current:
                    current.append(end)
                    continue
                current.extend(
                    flatten_cubic(current[-1], Point(x1, -y1), Point(x2, -y2), end, segments)
                )
            case Quadratic(x1=x1, y1=y1, x=x, y=y):
                end = Point(x, -y)
                if not current:
                    current.append(end)
                    continue
                current.extend(flatten_quadratic(current[-1], Point(x1, -y1), end, segments))
            case Close():
                finish()
                current = []
            case _:
                assert_never(command)

    finish()
    return subpaths


def assemble_shapes(subpaths: list[Subpath]) -> list[ShapeWithHoles]:
    """Group classified subpaths into shapes with holes.

    Args:
        subpaths: Output of :func:`commands_to_subpaths`

    Returns:
        One shape per counter-clockwise subpath, in input order
    """
    outers = [s for s in subpaths if not s.clockwise]
    holes = [s for s in subpaths if s.clockwise]

    shapes = [ShapeWithHoles(outer=PolygonLoop(points=list(o.points))) for o in outers]

    for hole in holes:
        center = centroid(hole.points)
        for outer, shape in zip(outers, shapes, strict=True):
            if point_in_polygon(center, outer.points):
                shape.holes.append(PolygonLoop(points=list(hole.points)))
                break
        else:
            logger.debug("Dropping hole outside every outer loop", extra={"centroid": center})

    return shapes


def text_to_shapes(
    font: GlyphSource | None,
    text: str,
    font_size: float,
    segments: int = BEZIER_SEGMENTS,
) -> list[ShapeWithHoles]:
    """Build shapes with holes for ``text`` laid out at the origin.

    Multi-character strings are handled as one outline, so holes are
    matched against every outer loop of the string.

    Args:
        font: Glyph source, or None while the font is still loading
        text: One or more characters
        font_size: Font size in millimeters
        segments: Line segments per curve

    Returns:
        Shapes in millimeters with Y up; empty for no font or empty text
    """
    if font is None or not text:
        return []

    commands = font.get_path(text, 0.0, 0.0, font_size)
    return assemble_shapes(commands_to_subpaths(commands, segments))
