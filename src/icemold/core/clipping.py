"""Polygon clipping adapter.

Converts shapes with holes to and from the fixed-point polygon sets used by
pyclipper, and wraps the union and offset operations. pyclipper only
guarantees exact results on integer coordinates, so millimeters are
multiplied by a scale constant and rounded.

Two sign conventions meet here. Outline loops are classified by winding
sum, where a positive sum marks a hole. Clipping results are classified by
signed area, where a positive area marks an outer loop. Both describe the
same orientation (winding sum is -2 × signed area); keep each check in its
own domain rather than unifying them.
"""

import math

import pyclipper

from icemold.domain import IntPath, IntPolygonSet, Point, PolygonLoop, ShapeWithHoles
from icemold.exceptions import ClippingError

CLIPPER_SCALE = 1000


def _to_int(value: float) -> int:
    """Round half up, matching the rounding used when the set was built."""
    return math.floor(value + 0.5)


def loop_to_int_path(
    loop: PolygonLoop,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    scale: int = CLIPPER_SCALE,
) -> IntPath:
    """Scale, translate and round a loop to integer coordinates.

    Consecutive points that round to the same integer point are collapsed,
    as is a closing point that repeats the first one.
    """
    path: IntPath = []
    for p in loop.points:
        q = (_to_int((p.x + offset_x) * scale), _to_int((p.y + offset_y) * scale))
        if path and path[-1] == q:
            continue
        path.append(q)

    while len(path) > 1 and path[-1] == path[0]:
        path.pop()

    return path


def shapes_to_int_paths(
    shapes: list[ShapeWithHoles],
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    scale: int = CLIPPER_SCALE,
) -> IntPolygonSet:
    """Convert shapes into one integer polygon set.

    Outer loops and holes become independent paths; their winding carries
    the outer/hole distinction. Loops that collapse below three points are
    dropped.

    Args:
        shapes: Shapes in millimeters
        offset_x: Translation applied before scaling (mm)
        offset_y: Translation applied before scaling (mm)
        scale: Millimeters to integer units

    Returns:
        Integer paths, outer loops before their holes
    """
    paths: IntPolygonSet = []
    for shape in shapes:
        for loop in shape.loops():
            path = loop_to_int_path(loop, offset_x, offset_y, scale)
            if len(path) > 2:
                paths.append(path)
    return paths


def int_path_signed_area(path: IntPath) -> float:
    """Signed area of an integer path (positive = outer loop)."""
    n = len(path)
    area = 0
    for i in range(n):
        x1, y1 = path[i]
        x2, y2 = path[(i + 1) % n]
        area += x1 * y2 - x2 * y1
    return area / 2


def int_path_area(path: IntPath) -> float:
    """Absolute area of an integer path."""
    return abs(int_path_signed_area(path))


def point_in_int_path(point: tuple[int, int], path: IntPath) -> bool:
    """Ray casting point-in-polygon test in integer coordinates."""
    x, y = point
    inside = False
    j = len(path) - 1
    for i in range(len(path)):
        xi, yi = path[i]
        xj, yj = path[j]
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i
    return inside


def _int_path_to_loop(path: IntPath, scale: int) -> PolygonLoop:
    return PolygonLoop(points=[Point(x / scale, y / scale) for x, y in path])


def int_paths_to_shapes(paths: IntPolygonSet, scale: int = CLIPPER_SCALE) -> list[ShapeWithHoles]:
    """Rebuild shapes with holes from an integer polygon set.

    Outer loops are recognized by positive signed area and processed from
    the largest to the smallest. A hole belongs to the first outer loop that
    contains its first vertex; holes outside every outer loop are dropped.

    Args:
        paths: Integer paths, typically a clipping result
        scale: Integer units per millimeter

    Returns:
        Shapes in millimeters, largest outer loop first
    """
    if not paths:
        return []

    outers: list[tuple[float, IntPath]] = []
    inners: list[IntPath] = []
    for path in paths:
        if len(path) < 3:
            continue
        area = int_path_signed_area(path)
        if area > 0:
            outers.append((area, path))
        else:
            inners.append(path)

    outers.sort(key=lambda item: item[0], reverse=True)

    shapes = [ShapeWithHoles(outer=_int_path_to_loop(path, scale)) for _, path in outers]
    for inner in inners:
        for (_, outer), shape in zip(outers, shapes, strict=True):
            if point_in_int_path(inner[0], outer):
                shape.holes.append(_int_path_to_loop(inner, scale))
                break

    return shapes


def _as_int_paths(result: list[list[list[int]]]) -> IntPolygonSet:
    return [[(int(x), int(y)) for x, y in path] for path in result]


def union_paths(paths: IntPolygonSet) -> IntPolygonSet:
    """Union all paths with the non-zero fill rule.

    Raises:
        ClippingError: If pyclipper rejects the input
    """
    clipper = pyclipper.Pyclipper()
    try:
        clipper.AddPaths(paths, pyclipper.PT_SUBJECT, True)
        result = clipper.Execute(
            pyclipper.CT_UNION, pyclipper.PFT_NONZERO, pyclipper.PFT_NONZERO
        )
    except pyclipper.ClipperException as e:
        raise ClippingError("union", str(e)) from e
    return _as_int_paths(result)


def inflate_paths(
    paths: IntPolygonSet,
    delta: int,
    arc_tolerance: float = 0.25,
) -> IntPolygonSet:
    """Offset closed paths by ``delta`` integer units with round joins.

    Positive ``delta`` grows outer loops and shrinks holes.

    Raises:
        ClippingError: If pyclipper rejects the input
    """
    offsetter = pyclipper.PyclipperOffset(arc_tolerance=arc_tolerance)
    try:
        offsetter.AddPaths(paths, pyclipper.JT_ROUND, pyclipper.ET_CLOSEDPOLYGON)
        result = offsetter.Execute(delta)
    except pyclipper.ClipperException as e:
        raise ClippingError("offset", str(e)) from e
    return _as_int_paths(result)
