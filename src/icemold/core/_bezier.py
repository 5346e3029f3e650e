"""Internal Bezier curve flattening.

This is an internal module containing helper functions for outline building.
Not intended for public use.

Curves are evaluated directly at evenly spaced parameters t = i/N for
i = 1..N, so every call yields exactly N points: the start point is left
out and the end point is included.
"""

from icemold.domain import Point


def flatten_quadratic(p0: Point, p1: Point, p2: Point, segments: int) -> list[Point]:
    """Flatten a quadratic Bezier curve into ``segments`` points.

    Args:
        p0: Start point (not included in the output)
        p1: Control point
        p2: End point (last output point)
        segments: Number of line segments

    Returns:
        List of ``segments`` points along the curve
    """
    points: list[Point] = []
    for i in range(1, segments + 1):
        t = i / segments
        mt = 1 - t
        x = mt * mt * p0.x + 2 * mt * t * p1.x + t * t * p2.x
        y = mt * mt * p0.y + 2 * mt * t * p1.y + t * t * p2.y
        points.append(Point(x, y))
    return points


def flatten_cubic(p0: Point, p1: Point, p2: Point, p3: Point, segments: int) -> list[Point]:
    """Flatten a cubic Bezier curve into ``segments`` points.

    Args:
        p0: Start point (not included in the output)
        p1: First control point
        p2: Second control point
        p3: End point (last output point)
        segments: Number of line segments

    Returns:
        List of ``segments`` points along the curve
    """
    points: list[Point] = []
    for i in range(1, segments + 1):
        t = i / segments
        mt = 1 - t
        a = mt * mt * mt
        b = 3 * mt * mt * t
        c = 3 * mt * t * t
        d = t * t * t
        points.append(
            Point(
                a * p0.x + b * p1.x + c * p2.x + d * p3.x,
                a * p0.y + b * p1.y + c * p2.y + d * p3.y,
            )
        )
    return points
