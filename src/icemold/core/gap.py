"""Automatic fill offset from the gaps between stacked characters.

The offset that makes neighbouring characters just touch is half of the
smallest gap between them, because both sides grow by the same amount.
Gaps are measured by brute force over every pair of outline vertices. That
is fine for a handful of glyphs with tens to hundreds of vertices each but
does not scale to large inputs.
"""

import math

from icemold.domain import Point, ShapeWithHoles

TOUCH_EPSILON = 0.01
FALLBACK_OFFSET = 3.0


def shapes_to_points(shapes: list[ShapeWithHoles]) -> list[list[Point]]:
    """Collect the vertices of every loop (outer loops and holes).

    Args:
        shapes: Shapes already placed at their stacking position

    Returns:
        One point list per non-empty loop
    """
    paths: list[list[Point]] = []
    for shape in shapes:
        for loop in shape.loops():
            if loop.points:
                paths.append(list(loop.points))
    return paths


def min_distance_between_paths(
    paths_a: list[list[Point]],
    paths_b: list[list[Point]],
    epsilon: float = TOUCH_EPSILON,
) -> float:
    """Minimum distance between any point of ``paths_a`` and any of ``paths_b``.

    Returns as soon as a distance below ``epsilon`` is found, since the
    outlines already touch at that point.

    Returns:
        The distance, or ``math.inf`` when either side has no points
    """
    min_dist = math.inf
    for path_a in paths_a:
        for a in path_a:
            for path_b in paths_b:
                for b in path_b:
                    dist = math.hypot(a.x - b.x, a.y - b.y)
                    if dist < epsilon:
                        return dist
                    if dist < min_dist:
                        min_dist = dist
    return min_dist


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def calculate_optimal_offset(
    char_shapes: list[list[ShapeWithHoles]],
    margin: float = 0.5,
    min_offset: float = 0.0,
    max_offset: float = 5.0,
    fallback_offset: float = FALLBACK_OFFSET,
    epsilon: float = TOUCH_EPSILON,
) -> float:
    """Offset that makes adjacent characters meet, plus a safety margin.

    Args:
        char_shapes: Placed shapes per character, in stacking order
        margin: Added to half the smallest gap (mm)
        min_offset: Lower clamp (mm)
        max_offset: Upper clamp (mm)
        fallback_offset: Used when no positive gap was measured (mm)
        epsilon: Touch distance passed to the gap search (mm)

    Returns:
        ``gap / 2 + margin`` clamped to ``[min_offset, max_offset]``
    """
    min_gap = math.inf
    for current, following in zip(char_shapes, char_shapes[1:]):
        paths_a = shapes_to_points(current)
        paths_b = shapes_to_points(following)
        if not paths_a or not paths_b:
            continue
        min_gap = min(min_gap, min_distance_between_paths(paths_a, paths_b, epsilon))

    if math.isinf(min_gap) or min_gap <= 0:
        return _clamp(fallback_offset, min_offset, max_offset)

    return _clamp(min_gap / 2 + margin, min_offset, max_offset)
