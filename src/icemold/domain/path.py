"""Outline path commands.

A font lays out text as a flat sequence of drawing commands. The sequence is
consumed strictly in order: a ``Close`` or a new ``Move`` ends the current
subpath.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Move:
    """Start a new subpath at (x, y)."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Line:
    """Straight segment to (x, y)."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Cubic:
    """Cubic Bezier segment with control points (x1, y1), (x2, y2) ending at (x, y)."""

    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Quadratic:
    """Quadratic Bezier segment with control point (x1, y1) ending at (x, y)."""

    x1: float
    y1: float
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Close:
    """Close the current subpath."""


PathCommand = Move | Line | Cubic | Quadratic | Close
