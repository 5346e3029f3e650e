"""Character fitting, vertical stacking and block transforms.

Characters are stacked top to bottom in one column centered on the block
origin ``(offset_x, offset_y)``. Each character is centered on its own ink
box, so glyphs with different side bearings still line up on one axis.
"""

import math
from collections.abc import Callable

from icemold.core.outline import GlyphSource
from icemold.domain import (
    EMPTY_BOUNDS,
    CharacterPlacement,
    Point,
    PolygonLoop,
    ShapeWithHoles,
    TextBounds,
)

MAX_CHAR_RATIO = 0.85
SPACING_FACTOR = 1.02


def compute_font_size(
    char_count: int,
    box_width: float,
    box_length: float,
    scale_percent: float = 100.0,
    max_ratio: float = MAX_CHAR_RATIO,
) -> float:
    """Largest font size that fits ``char_count`` stacked characters in a box.

    Args:
        char_count: Number of stacked characters
        box_width: Box width across the column (mm)
        box_length: Box length along the column (mm)
        scale_percent: User scale applied on top of the fit
        max_ratio: Share of the box a character may take

    Returns:
        Font size in millimeters, 0 when there is nothing to place
    """
    if char_count <= 0:
        return 0.0

    size = min(box_width * max_ratio, box_length * max_ratio / char_count)
    return size * scale_percent / 100


def place_characters(
    font: GlyphSource,
    chars: list[str],
    font_size: float,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    spacing_factor: float = SPACING_FACTOR,
) -> list[CharacterPlacement]:
    """Stack characters vertically, first character on top.

    Args:
        font: Glyph source used to measure each character
        chars: Characters in reading order
        font_size: Font size (mm)
        offset_x: Block center X (mm)
        offset_y: Block center Y (mm)
        spacing_factor: Pitch between character centers in font sizes

    Returns:
        One placement per character; translating a character's shapes by
        its placement centers its ink box on the column slot
    """
    spacing = font_size * spacing_factor
    total = (len(chars) - 1) * spacing

    placements: list[CharacterPlacement] = []
    for i, char in enumerate(chars):
        bounds = font.get_bounds(char, font_size)
        placements.append(
            CharacterPlacement(
                char=char,
                x=offset_x - bounds.center_x,
                y=total / 2 - i * spacing + offset_y - bounds.center_y,
            )
        )
    return placements


def block_bounds(
    font: GlyphSource,
    placements: list[CharacterPlacement],
    font_size: float,
) -> TextBounds:
    """Union of the placed ink boxes; a zero box when nothing is placed."""
    result: TextBounds | None = None
    for placement in placements:
        bounds = font.get_bounds(placement.char, font_size)
        if bounds == EMPTY_BOUNDS:
            continue
        bounds = bounds.translated(placement.x, placement.y)
        result = bounds if result is None else result.union(bounds)
    return result or EMPTY_BOUNDS


def shapes_bounds(shapes: list[ShapeWithHoles]) -> TextBounds:
    """Bounding box of the outer loops of ``shapes``."""
    boxes = [shape.bounding_box() for shape in shapes if shape.outer.points]
    if not boxes:
        return EMPTY_BOUNDS
    return TextBounds(
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


def translate_shapes(shapes: list[ShapeWithHoles], dx: float, dy: float) -> list[ShapeWithHoles]:
    return [shape.translated(dx, dy) for shape in shapes]


def _map_shape(
    shape: ShapeWithHoles,
    fn: Callable[[Point], Point],
    reverse: bool = False,
) -> ShapeWithHoles:
    def map_loop(loop: PolygonLoop) -> PolygonLoop:
        points = [fn(p) for p in loop.points]
        if reverse:
            points.reverse()
        return PolygonLoop(points=points)

    return ShapeWithHoles(outer=map_loop(shape.outer), holes=[map_loop(h) for h in shape.holes])


def rotate_shapes(
    shapes: list[ShapeWithHoles],
    degrees: float,
    origin: Point = Point(0.0, 0.0),
) -> list[ShapeWithHoles]:
    """Rotate shapes about ``origin``; positive angles turn counter-clockwise."""
    if degrees == 0:
        return list(shapes)

    rad = math.radians(degrees)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)

    def rotate(p: Point) -> Point:
        dx = p.x - origin.x
        dy = p.y - origin.y
        return Point(origin.x + dx * cos_a - dy * sin_a, origin.y + dx * sin_a + dy * cos_a)

    return [_map_shape(shape, rotate) for shape in shapes]


def mirror_shapes(shapes: list[ShapeWithHoles], origin_x: float = 0.0) -> list[ShapeWithHoles]:
    """Reflect shapes across the vertical line ``x = origin_x``.

    Reflection flips winding, so every loop is also reversed: outer loops
    stay counter-clockwise and holes stay clockwise.
    """
    return [
        _map_shape(shape, lambda p: Point(2 * origin_x - p.x, p.y), reverse=True)
        for shape in shapes
    ]


def transform_block(
    shapes: list[ShapeWithHoles],
    rotation: float = 0.0,
    mirror: bool = False,
    origin: Point = Point(0.0, 0.0),
) -> list[ShapeWithHoles]:
    """Mirror (optional) and then rotate a text block about its center."""
    if mirror:
        shapes = mirror_shapes(shapes, origin.x)
    return rotate_shapes(shapes, rotation, origin)
