"""Domain models for icemold.

This module contains the domain models shared by the geometry pipeline.
All models are designed to be:

- Plain dataclasses, frozen where they are values
- Serializable for hand-off to drawing front ends
- Independent of fontTools and pyclipper details

Key classes:
- Move, Line, Cubic, Quadratic, Close: Outline path commands
- Point, PolygonLoop, ShapeWithHoles: 2D outline geometry
- CharacterPlacement, TextBounds: Stacked text layout
- MoldGeometry, MoldParameters: Fixed mold table and user parameters
"""

from icemold.domain.layout import EMPTY_BOUNDS, CharacterPlacement, TextBounds
from icemold.domain.mold import ICE_POP_MOLD, MoldGeometry, MoldParameters
from icemold.domain.path import Close, Cubic, Line, Move, PathCommand, Quadratic
from icemold.domain.polygon import (
    IntPath,
    IntPolygonSet,
    Point,
    PolygonLoop,
    ShapeWithHoles,
    WindingDirection,
)

__all__: list[str] = [
    # Enums
    "WindingDirection",
    # Path commands
    "Close",
    "Cubic",
    "Line",
    "Move",
    "PathCommand",
    "Quadratic",
    # Geometry
    "IntPath",
    "IntPolygonSet",
    "Point",
    "PolygonLoop",
    "ShapeWithHoles",
    # Layout
    "EMPTY_BOUNDS",
    "CharacterPlacement",
    "TextBounds",
    # Mold
    "ICE_POP_MOLD",
    "MoldGeometry",
    "MoldParameters",
]
