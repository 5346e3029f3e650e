"""Core geometric types for polygon outlines.

This module defines the 2D types that flow between the outline builder,
the clipping adapter and the extruder:
- Point: An immutable 2D point in millimeters
- PolygonLoop: An implicitly closed sequence of points
- ShapeWithHoles: One outer loop and the hole loops it owns
- WindingDirection: Enum for loop winding direction
- IntPath / IntPolygonSet: Fixed-point loops for the clipping engine
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

IntPath = list[tuple[int, int]]
IntPolygonSet = list[IntPath]


class WindingDirection(Enum):
    """Loop winding direction, seen with the Y axis pointing up.

    Outline loops produced by the glyph outline builder wind
    counter-clockwise for filled regions and clockwise for holes.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Attributes:
        x: X coordinate in millimeters
        y: Y coordinate in millimeters
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])


@dataclass
class PolygonLoop:
    """An implicitly closed polygon loop.

    The last point connects back to the first. Orientation is never stored:
    it is derived from the points on demand, so it stays correct after the
    point list is replaced.

    Attributes:
        points: Ordered vertices of the loop
    """

    points: list[Point]

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Positive for counter-clockwise loops (Y up), negative for clockwise.
        """
        n = len(self.points)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        return area / 2.0

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the loop.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.points:
            return (0.0, 0.0, 0.0, 0.0)

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def contains_point(self, x: float, y: float) -> bool:
        """Check if a point is inside the loop (even-odd ray casting)."""
        n = len(self.points)
        if n < 3:
            return False

        inside = False
        j = n - 1
        for i in range(n):
            xi, yi = self.points[i].x, self.points[i].y
            xj, yj = self.points[j].x, self.points[j].y

            if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
                inside = not inside

            j = i

        return inside

    def reversed(self) -> "PolygonLoop":
        """Return a copy with the opposite winding."""
        return PolygonLoop(points=list(reversed(self.points)))

    def translated(self, dx: float, dy: float) -> "PolygonLoop":
        """Return a copy moved by (dx, dy)."""
        return PolygonLoop(points=[Point(p.x + dx, p.y + dy) for p in self.points])

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"points": [[p.x, p.y] for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PolygonLoop":
        """Deserialize from dictionary."""
        return cls(points=[Point(x, y) for x, y in data["points"]])


@dataclass
class ShapeWithHoles:
    """A filled region: one outer loop plus the holes it owns.

    Every hole's representative point lies inside ``outer``.

    Attributes:
        outer: Boundary of the filled region
        holes: Enclosed loops cut out of the region
    """

    outer: PolygonLoop
    holes: list[PolygonLoop] = field(default_factory=list)

    @property
    def hole_count(self) -> int:
        """Number of holes owned by this shape."""
        return len(self.holes)

    def loops(self) -> list[PolygonLoop]:
        """Outer loop followed by the holes."""
        return [self.outer, *self.holes]

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Bounding box of the outer loop as (min_x, min_y, max_x, max_y)."""
        return self.outer.bounding_box()

    def translated(self, dx: float, dy: float) -> "ShapeWithHoles":
        """Return a copy moved by (dx, dy)."""
        return ShapeWithHoles(
            outer=self.outer.translated(dx, dy),
            holes=[hole.translated(dx, dy) for hole in self.holes],
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "outer": self.outer.to_dict(),
            "holes": [hole.to_dict() for hole in self.holes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShapeWithHoles":
        """Deserialize from dictionary."""
        return cls(
            outer=PolygonLoop.from_dict(data["outer"]),
            holes=[PolygonLoop.from_dict(h) for h in data["holes"]],
        )
