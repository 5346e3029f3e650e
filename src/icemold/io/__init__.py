"""Font I/O layer for icemold.

This module handles font loading with fonttools and the hand-off of
outlines to drawing front ends. It keeps fontTools details out of the
geometry pipeline.

Key responsibilities:
- Load TTF/OTF fonts and lay out text as path commands
- Normalize TrueType winding to the CFF convention
- Load fonts once in the background and cache them
- Serialize outlines as JSON

Key classes:
- Font: Path commands and ink boxes for text
- FontRepository: Cached, asynchronous font loading
"""

from icemold.io.export import shapes_from_dict, shapes_to_dict, write_shapes
from icemold.io.font import Font, PathCommandPen
from icemold.io.repository import FontRepository

__all__ = [
    "Font",
    "FontRepository",
    "PathCommandPen",
    "shapes_from_dict",
    "shapes_to_dict",
    "write_shapes",
]
