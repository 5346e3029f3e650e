"""Solid extrusion of shapes with holes.

Each shape is swept along +Z into a closed triangle mesh:
- Loops are normalized first (outer counter-clockwise, holes clockwise)
- An optional rounded bevel adds layers below Z=0 and above the depth,
  growing the outline along each vertex bisector
- Both caps are triangulated with earcut; side walls face outward

The result is a :class:`Solid` backed by a ``trimesh.Trimesh``.
"""

import logging
import math
from dataclasses import dataclass

import mapbox_earcut as earcut
import numpy as np
import trimesh

from icemold.config import ExtrudeConfig
from icemold.core._bezier import flatten_quadratic
from icemold.core.geometry import orient_loop
from icemold.domain import Point, PolygonLoop, ShapeWithHoles, WindingDirection
from icemold.exceptions import ExtrusionError

logger = logging.getLogger(__name__)

MITER_LIMIT = 4.0


@dataclass(frozen=True)
class ExtrudeOptions:
    """Extrusion depth and bevel profile, in millimeters."""

    depth: float
    bevel_enabled: bool = False
    bevel_thickness: float = 0.0
    bevel_size: float = 0.0
    bevel_segments: int = 1

    @classmethod
    def from_config(cls, depth: float, config: ExtrudeConfig) -> "ExtrudeOptions":
        return cls(
            depth=depth,
            bevel_enabled=config.bevel_enabled,
            bevel_thickness=config.bevel_thickness,
            bevel_size=config.bevel_size,
            bevel_segments=config.bevel_segments,
        )

    def layers(self) -> list[tuple[float, float]]:
        """(z, grow) pairs from the bottom cap to the top cap."""
        if not self.bevel_enabled or self.bevel_segments < 1:
            return [(0.0, 0.0), (self.depth, 0.0)]

        s = self.bevel_segments
        front: list[tuple[float, float]] = []
        for k in range(s + 1):
            t = k / s * math.pi / 2
            z = 0.0 if k == s else -self.bevel_thickness * math.cos(t)
            front.append((z, self.bevel_size * math.sin(t)))

        back = [(self.depth - z, grow) for z, grow in reversed(front)]
        return front + back


class Solid:
    """A closed triangle mesh with flat buffers for rendering.

    Attributes:
        mesh: Underlying trimesh object (not processed, vertex order kept)
    """

    def __init__(self, mesh: trimesh.Trimesh) -> None:
        self.mesh = mesh

    @classmethod
    def from_arrays(cls, vertices: np.ndarray, faces: np.ndarray) -> "Solid":
        return cls(trimesh.Trimesh(vertices=vertices, faces=faces, process=False))

    @property
    def vertices(self) -> np.ndarray:
        return np.asarray(self.mesh.vertices)

    @property
    def normals(self) -> np.ndarray:
        return np.asarray(self.mesh.vertex_normals)

    @property
    def indices(self) -> np.ndarray:
        return np.asarray(self.mesh.faces, dtype=np.int64).reshape(-1)

    @property
    def triangle_count(self) -> int:
        return len(self.mesh.faces)

    @property
    def min_y(self) -> float:
        if len(self.mesh.vertices) == 0:
            return 0.0
        return float(self.vertices[:, 1].min())

    def transformed(self, matrix: np.ndarray) -> "Solid":
        """Return a copy with a 4x4 homogeneous transform applied."""
        mesh = self.mesh.copy()
        mesh.apply_transform(matrix)
        return Solid(mesh)

    def translated(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "Solid":
        return self.transformed(trimesh.transformations.translation_matrix([dx, dy, dz]))

    def rotated_z(self, degrees: float, origin: Point = Point(0.0, 0.0)) -> "Solid":
        """Rotate about a vertical axis through ``origin`` (counter-clockwise)."""
        if degrees == 0:
            return self
        matrix = trimesh.transformations.rotation_matrix(
            math.radians(degrees), [0, 0, 1], [origin.x, origin.y, 0]
        )
        return self.transformed(matrix)


def _clean_points(points: list[Point]) -> list[Point]:
    cleaned: list[Point] = []
    for p in points:
        if cleaned and cleaned[-1] == p:
            continue
        cleaned.append(p)
    while len(cleaned) > 1 and cleaned[-1] == cleaned[0]:
        cleaned.pop()
    return cleaned


def normalize_shape(shape: ShapeWithHoles) -> list[PolygonLoop]:
    """Loops ready for extrusion: cleaned, outer CCW first, then CW holes.

    Raises:
        ExtrusionError: If the outer loop has fewer than three points
    """
    outer = PolygonLoop(points=_clean_points(shape.outer.points))
    if len(outer) < 3:
        raise ExtrusionError("outer loop has fewer than 3 points")

    loops = [orient_loop(outer, WindingDirection.COUNTER_CLOCKWISE)]
    for hole in shape.holes:
        hole = PolygonLoop(points=_clean_points(hole.points))
        if len(hole) >= 3:
            loops.append(orient_loop(hole, WindingDirection.CLOCKWISE))
    return loops


def bevel_vectors(points: np.ndarray) -> np.ndarray:
    """Per-vertex offset directions for growing a loop by one unit.

    Each vector is the bisector of the right-hand normals of the two edges
    meeting at the vertex, lengthened so that both edges move by one unit.
    For counter-clockwise outer loops and clockwise holes the right-hand
    side is always away from the material.
    """
    points = np.asarray(points, dtype=np.float64)
    prev_edges = points - np.roll(points, 1, axis=0)
    next_edges = np.roll(points, -1, axis=0) - points

    def right_normals(edges: np.ndarray) -> np.ndarray:
        normals = np.column_stack([edges[:, 1], -edges[:, 0]])
        lengths = np.linalg.norm(normals, axis=1, keepdims=True)
        return np.divide(normals, lengths, out=np.zeros_like(normals), where=lengths > 0)

    n1 = right_normals(prev_edges)
    n2 = right_normals(next_edges)
    bisector = n1 + n2
    lengths = np.linalg.norm(bisector, axis=1, keepdims=True)
    bisector = np.where(lengths > 1e-9, bisector / np.maximum(lengths, 1e-9), n1)

    cos_half = np.sum(bisector * n1, axis=1, keepdims=True)
    scale = np.minimum(1.0 / np.maximum(cos_half, 1.0 / MITER_LIMIT), MITER_LIMIT)
    return bisector * scale


def triangulate(loops: list[PolygonLoop]) -> np.ndarray:
    """Triangulate the region bounded by ``loops`` (outer loop first).

    Returns:
        (M, 3) vertex indices into the concatenated loop points, every
        triangle counter-clockwise
    """
    verts = np.asarray([p.to_tuple() for loop in loops for p in loop.points], dtype=np.float64)
    ring_ends = np.cumsum([len(loop) for loop in loops]).astype(np.uint32)

    tri = np.asarray(earcut.triangulate_float64(verts, ring_ends), dtype=np.int64).reshape(-1, 3)
    if len(tri) == 0:
        return tri

    a, b, c = verts[tri[:, 0]], verts[tri[:, 1]], verts[tri[:, 2]]
    cross = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])
    flip = cross < 0
    tri[flip] = tri[flip][:, ::-1]
    return tri


def extrude_shape(shape: ShapeWithHoles, options: ExtrudeOptions) -> Solid:
    """Extrude one shape with holes along +Z.

    Args:
        shape: Outline in millimeters, Y up
        options: Depth and bevel profile

    Returns:
        Closed solid spanning ``[-bevel_thickness, depth + bevel_thickness]``
        in Z when beveled, ``[0, depth]`` otherwise

    Raises:
        ExtrusionError: For a non-positive depth or a degenerate outer loop
    """
    if options.depth <= 0:
        raise ExtrusionError(f"depth must be positive, got {options.depth}")

    loops = normalize_shape(shape)
    base = np.asarray([p.to_tuple() for loop in loops for p in loop.points], dtype=np.float64)
    directions = np.vstack([bevel_vectors([p.to_tuple() for p in loop.points]) for loop in loops])
    n = len(base)
    layers = options.layers()

    vertices = np.vstack(
        [np.column_stack([base + directions * grow, np.full(n, z)]) for z, grow in layers]
    )

    faces: list[np.ndarray] = []
    cap = triangulate(loops)
    if len(cap) == 0:
        logger.warning("Cap triangulation produced no triangles; emitting side walls only")
    else:
        faces.append(cap[:, ::-1])
        faces.append(cap + (len(layers) - 1) * n)

    offset = 0
    for loop in loops:
        m = len(loop)
        i = np.arange(m)
        j = (i + 1) % m
        for layer in range(len(layers) - 1):
            lo = layer * n + offset
            hi = (layer + 1) * n + offset
            faces.append(np.column_stack([lo + i, lo + j, hi + j]))
            faces.append(np.column_stack([lo + i, hi + j, hi + i]))
        offset += m

    return Solid.from_arrays(vertices, np.vstack(faces).astype(np.int64))


def extrude_shapes(shapes: list[ShapeWithHoles], options: ExtrudeOptions) -> list[Solid]:
    """Extrude every shape, skipping the ones that cannot form a solid."""
    solids: list[Solid] = []
    for index, shape in enumerate(shapes):
        try:
            solids.append(extrude_shape(shape, options))
        except ExtrusionError as e:
            logger.warning("Skipping shape %d: %s", index, e.reason)
    return solids


def rounded_rectangle(
    width: float,
    height: float,
    radius: float,
    segments: int = 5,
) -> ShapeWithHoles:
    """Counter-clockwise rounded rectangle centered on the origin.

    Corners are quadratic curves with the control point on the sharp
    corner, flattened to ``segments`` steps.
    """
    hw = width / 2
    hh = height / 2
    r = max(0.0, min(radius, hw, hh))
    if r == 0:
        return ShapeWithHoles(
            outer=PolygonLoop(
                points=[Point(-hw, -hh), Point(hw, -hh), Point(hw, hh), Point(-hw, hh)]
            )
        )

    points = [Point(-hw + r, -hh), Point(hw - r, -hh)]
    points += flatten_quadratic(points[-1], Point(hw, -hh), Point(hw, -hh + r), segments)
    points.append(Point(hw, hh - r))
    points += flatten_quadratic(points[-1], Point(hw, hh), Point(hw - r, hh), segments)
    points.append(Point(-hw + r, hh))
    points += flatten_quadratic(points[-1], Point(-hw, hh), Point(-hw, hh - r), segments)
    points.append(Point(-hw, -hh + r))
    points += flatten_quadratic(points[-1], Point(-hw, -hh), Point(-hw + r, -hh), segments)
    return ShapeWithHoles(outer=PolygonLoop(points=_clean_points(points)))
