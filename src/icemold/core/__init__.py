"""Core geometry algorithms for icemold.

This module contains the core algorithms for:

- Outline building (curve flattening, winding classification, hole assignment)
- Integer polygon clipping (union, round offset, hole filtering)
- Automatic fill offset from inter-glyph gaps
- Text layout (font-size fitting, vertical stacking, block transforms)
- Solid extrusion (beveled caps, earcut triangulation)

Key functions:
- text_to_shapes: Build shapes with holes for a string
- calculate_optimal_offset: Offset that closes the gaps between characters
- compute_font_size / place_characters: Fit and stack characters
- extrude_shape: Sweep a shape into a closed solid

Key classes:
- OutlineFiller: Fill pipeline returning FillResult
- MoldPipeline: End-to-end orchestration of one render
"""

from icemold.core.clipping import (
    CLIPPER_SCALE,
    inflate_paths,
    int_paths_to_shapes,
    shapes_to_int_paths,
    union_paths,
)
from icemold.core.extrude import ExtrudeOptions, Solid, extrude_shape, extrude_shapes
from icemold.core.fill import FallbackReason, FillResult, OutlineFiller
from icemold.core.gap import calculate_optimal_offset
from icemold.core.geometry import (
    centroid,
    is_clockwise,
    point_in_polygon,
    signed_area,
    winding_sum,
)
from icemold.core.layout import (
    block_bounds,
    compute_font_size,
    mirror_shapes,
    place_characters,
    rotate_shapes,
    transform_block,
)
from icemold.core.outline import GlyphSource, text_to_shapes
from icemold.core.pipeline import MoldPipeline, MoldPreview, TextBlock

__all__ = [
    # Clipping
    "CLIPPER_SCALE",
    "inflate_paths",
    "int_paths_to_shapes",
    "shapes_to_int_paths",
    "union_paths",
    # Extrusion
    "ExtrudeOptions",
    "Solid",
    "extrude_shape",
    "extrude_shapes",
    # Fill
    "FallbackReason",
    "FillResult",
    "OutlineFiller",
    "calculate_optimal_offset",
    # Geometry functions
    "centroid",
    "is_clockwise",
    "point_in_polygon",
    "signed_area",
    "winding_sum",
    # Layout
    "block_bounds",
    "compute_font_size",
    "mirror_shapes",
    "place_characters",
    "rotate_shapes",
    "transform_block",
    # Outline
    "GlyphSource",
    "text_to_shapes",
    # Pipeline
    "MoldPipeline",
    "MoldPreview",
    "TextBlock",
]
