"""Winding and containment utilities.

This module provides the primitives shared by the outline builder and the
clipping adapter:
- Winding sum and clockwise test
- Vertex centroid
- Point-in-polygon testing (ray casting algorithm)
- Signed area (shoelace formula)

All functions are pure and stateless.
"""

from collections.abc import Sequence

from icemold.domain import Point, PolygonLoop, WindingDirection


def winding_sum(points: Sequence[Point]) -> float:
    """Sum of (x2 - x1) * (y2 + y1) over consecutive point pairs.

    With the Y axis pointing up the sum is positive for clockwise loops and
    negative for counter-clockwise loops. It equals ``-2 * signed_area``.

    Args:
        points: Loop vertices, implicitly closed

    Returns:
        The winding sum (0.0 for an empty loop)

    Examples:
        >>> square = [Point(1, 1), Point(1, -1), Point(-1, -1), Point(-1, 1)]
        >>> winding_sum(square) > 0
        True
    """
    n = len(points)
    total = 0.0
    for i in range(n):
        p1 = points[i]
        p2 = points[(i + 1) % n]
        total += (p2.x - p1.x) * (p2.y + p1.y)
    return total


def is_clockwise(points: Sequence[Point]) -> bool:
    """True when the winding sum is strictly positive."""
    return winding_sum(points) > 0


def winding_direction(points: Sequence[Point]) -> WindingDirection:
    """Classify a loop's winding direction."""
    if is_clockwise(points):
        return WindingDirection.CLOCKWISE
    return WindingDirection.COUNTER_CLOCKWISE


def signed_area(points: Sequence[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    Positive for counter-clockwise loops, negative for clockwise loops.
    Returns 0.0 for degenerate polygons.
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def centroid(points: Sequence[Point]) -> Point:
    """Arithmetic mean of the loop vertices.

    This is not the area-weighted centroid; it is only used as a
    representative point for containment tests.

    Raises:
        ValueError: If ``points`` is empty
    """
    if not points:
        raise ValueError("Cannot take the centroid of an empty loop")

    x = sum(p.x for p in points)
    y = sum(p.y for p in points)
    return Point(x / len(points), y / len(points))


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts crossings
    with polygon edges. Odd number of crossings = inside. Points exactly on
    an edge may land on either side.

    Examples:
        >>> square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> point_in_polygon(Point(1, 1), square)
        True
        >>> point_in_polygon(Point(3, 3), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def orient_loop(loop: PolygonLoop, direction: WindingDirection) -> PolygonLoop:
    """Return ``loop`` wound in ``direction``, reversing it if needed."""
    if winding_direction(loop.points) == direction:
        return loop
    return loop.reversed()
