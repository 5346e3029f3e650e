"""Outline fill: union and offset of glyph polygons.

Filling grows glyph outlines outward by a fixed distance with round joins
so that thin strokes merge into one solid region. Applied to several placed
characters at once, the offset also bridges the gaps between them once it
is larger than half the gap.

Failures of the clipping engine never escape this module. Every entry point
returns a FillResult; when clipping fails or produces nothing, the result
carries a FallbackReason and the best earlier-stage shapes: the unmodified
input for a single shape set, an empty list for several characters.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from icemold.config import AutoGapConfig, FillConfig, GeometryConfig
from icemold.core.clipping import (
    inflate_paths,
    int_path_area,
    int_paths_to_shapes,
    shapes_to_int_paths,
    union_paths,
)
from icemold.core.gap import calculate_optimal_offset
from icemold.core.outline import GlyphSource, text_to_shapes
from icemold.domain import CharacterPlacement, IntPolygonSet, ShapeWithHoles
from icemold.exceptions import ClippingError

logger = logging.getLogger(__name__)

HOLE_AREA_TOLERANCE_RATIO = 0.1


class FallbackReason(str, Enum):
    """Why a fill returned earlier-stage shapes instead of filled ones."""

    NO_FONT = "no_font"
    NO_GEOMETRY = "no_geometry"
    EMPTY_UNION = "empty_union"
    EMPTY_OFFSET = "empty_offset"
    CLIPPER_ERROR = "clipper_error"


@dataclass
class FillResult:
    """Outcome of a fill operation.

    Attributes:
        shapes: Filled shapes, or the fallback shapes
        offset: Offset distance that was requested or computed (mm)
        fallback: Set when the fill did not complete
        error: Clipping error message for CLIPPER_ERROR fallbacks
    """

    shapes: list[ShapeWithHoles] = field(default_factory=list)
    offset: float = 0.0
    fallback: FallbackReason | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the fill ran to completion."""
        return self.fallback is None


def filter_small_loops(
    paths: IntPolygonSet,
    min_hole_area: float,
    scale: int,
    tolerance_ratio: float = HOLE_AREA_TOLERANCE_RATIO,
) -> IntPolygonSet:
    """Drop loops that are too small to be anything but clipping noise.

    A loop survives when its area is at least ``min_hole_area`` or larger
    than ``tolerance_ratio`` of it. The second bound is the one that decides
    in practice; small enclosed counters such as the inside of an "O" stay.

    Args:
        paths: Offset result in integer units
        min_hole_area: Threshold in mm²
        scale: Integer units per millimeter
        tolerance_ratio: Share of the threshold that is still kept

    Returns:
        The surviving paths, in input order
    """
    scaled_min = min_hole_area * scale * scale
    return [
        path
        for path in paths
        if int_path_area(path) >= scaled_min or int_path_area(path) > scaled_min * tolerance_ratio
    ]


class OutlineFiller:
    """Unions and offsets glyph polygons.

    Example:
        filler = OutlineFiller()
        result = filler.fill_multi_char(font, placements, font_size, offset=3.0)
        if not result.ok:
            print(result.fallback)
    """

    def __init__(
        self,
        geometry: GeometryConfig | None = None,
        config: FillConfig | None = None,
        auto_gap: AutoGapConfig | None = None,
    ) -> None:
        self.geometry = geometry or GeometryConfig()
        self.config = config or FillConfig()
        self.auto_gap = auto_gap or AutoGapConfig()

    @property
    def scale(self) -> int:
        return self.geometry.clipper_scale

    def _inflate(self, paths: IntPolygonSet, offset: float) -> IntPolygonSet:
        return inflate_paths(
            paths,
            round(offset * self.scale),
            arc_tolerance=self.geometry.scaled_arc_tolerance(),
        )

    def _filter(self, paths: IntPolygonSet, min_hole_area: float) -> list[ShapeWithHoles]:
        kept = filter_small_loops(
            paths, min_hole_area, self.scale, self.config.hole_area_tolerance_ratio
        )
        return int_paths_to_shapes(kept or paths, self.scale)

    def _union_then_inflate(
        self,
        paths: IntPolygonSet,
        offset: float,
        min_hole_area: float,
        fallback_shapes: list[ShapeWithHoles],
    ) -> FillResult:
        try:
            united = union_paths(paths)
            if not united:
                return FillResult(fallback_shapes, offset, FallbackReason.EMPTY_UNION)

            outlined = self._inflate(united, offset)
            if not outlined:
                return FillResult(fallback_shapes, offset, FallbackReason.EMPTY_OFFSET)

            return FillResult(self._filter(outlined, min_hole_area), offset)
        except (ClippingError, ValueError) as e:
            logger.warning("Outline fill failed, using fallback shapes: %s", e)
            return FillResult(fallback_shapes, offset, FallbackReason.CLIPPER_ERROR, str(e))

    def fill_shapes(
        self,
        shapes: list[ShapeWithHoles],
        offset: float | None = None,
        min_hole_area: float | None = None,
    ) -> FillResult:
        """Union one shape set and grow it by ``offset``.

        Falls back to ``shapes`` unchanged when clipping fails or yields
        nothing.

        Args:
            shapes: Shapes of one string laid out together
            offset: Offset distance (mm), defaults to the configured one
            min_hole_area: Hole filter threshold (mm²)

        Returns:
            FillResult with the filled shapes
        """
        offset = self.config.offset_distance if offset is None else offset
        min_hole_area = self.config.min_hole_area if min_hole_area is None else min_hole_area

        if not shapes:
            return FillResult([], offset, FallbackReason.NO_GEOMETRY)

        paths = shapes_to_int_paths(shapes, scale=self.scale)
        if not paths:
            return FillResult(shapes, offset, FallbackReason.NO_GEOMETRY)

        return self._union_then_inflate(paths, offset, min_hole_area, fallback_shapes=shapes)

    def fill_placed_shapes(
        self,
        char_shapes: list[list[ShapeWithHoles]],
        placements: list[CharacterPlacement],
        offset: float | None = None,
        min_hole_area: float | None = None,
    ) -> FillResult:
        """Merge all placed characters into one set, union it and grow it.

        Args:
            char_shapes: Shapes per character at the origin
            placements: Translation per character
            offset: Offset distance (mm), defaults to the configured one
            min_hole_area: Hole filter threshold (mm²)

        Returns:
            FillResult; empty shapes on any failure
        """
        offset = self.config.offset_distance if offset is None else offset
        min_hole_area = self.config.min_hole_area if min_hole_area is None else min_hole_area

        paths: IntPolygonSet = []
        for shapes, placement in zip(char_shapes, placements, strict=True):
            paths.extend(shapes_to_int_paths(shapes, placement.x, placement.y, self.scale))

        if not paths:
            return FillResult([], offset, FallbackReason.NO_GEOMETRY)

        return self._union_then_inflate(paths, offset, min_hole_area, fallback_shapes=[])

    def fill_placed_shapes_auto(
        self,
        char_shapes: list[list[ShapeWithHoles]],
        placements: list[CharacterPlacement],
        min_hole_area: float | None = None,
    ) -> FillResult:
        """Grow each placed character by the auto-gap offset, then union.

        The offset comes from :func:`calculate_optimal_offset` with the
        configured margin and clamp range.

        Returns:
            FillResult with the computed offset; empty shapes on any failure
        """
        min_hole_area = self.config.min_hole_area if min_hole_area is None else min_hole_area

        placed = [
            [shape.translated(placement.x, placement.y) for shape in shapes]
            for shapes, placement in zip(char_shapes, placements, strict=True)
        ]
        offset = calculate_optimal_offset(
            placed,
            margin=self.auto_gap.margin,
            min_offset=self.auto_gap.min_offset,
            max_offset=self.auto_gap.max_offset,
            fallback_offset=self.auto_gap.fallback_offset,
            epsilon=self.auto_gap.touch_epsilon,
        )

        paths: IntPolygonSet = []
        for shapes in placed:
            paths.extend(shapes_to_int_paths(shapes, scale=self.scale))

        if not paths:
            return FillResult([], offset, FallbackReason.NO_GEOMETRY)

        try:
            inflated = self._inflate(paths, offset)
            united = union_paths(inflated) if inflated else []
            if not united:
                return FillResult([], offset, FallbackReason.EMPTY_UNION)
            return FillResult(self._filter(united, min_hole_area), offset)
        except (ClippingError, ValueError) as e:
            logger.warning("Auto-offset fill failed: %s", e)
            return FillResult([], offset, FallbackReason.CLIPPER_ERROR, str(e))

    def fill_text(
        self,
        font: GlyphSource | None,
        text: str,
        font_size: float,
        offset: float | None = None,
        min_hole_area: float | None = None,
    ) -> FillResult:
        """Fill the outline of ``text`` laid out at the origin."""
        if font is None:
            return FillResult([], offset or 0.0, FallbackReason.NO_FONT)

        shapes = text_to_shapes(font, text, font_size, self.geometry.bezier_segments)
        return self.fill_shapes(shapes, offset, min_hole_area)

    def fill_multi_char(
        self,
        font: GlyphSource | None,
        placements: list[CharacterPlacement],
        font_size: float,
        offset: float | None = None,
        min_hole_area: float | None = None,
    ) -> FillResult:
        """Fill several placed characters as one merged outline."""
        if font is None:
            return FillResult([], offset or 0.0, FallbackReason.NO_FONT)

        char_shapes = [self._char_shapes(font, p.char, font_size) for p in placements]
        return self.fill_placed_shapes(char_shapes, placements, offset, min_hole_area)

    def fill_multi_char_auto(
        self,
        font: GlyphSource | None,
        placements: list[CharacterPlacement],
        font_size: float,
        min_hole_area: float | None = None,
    ) -> FillResult:
        """Fill several placed characters with an offset derived from their gaps."""
        if font is None:
            return FillResult([], 0.0, FallbackReason.NO_FONT)

        char_shapes = [self._char_shapes(font, p.char, font_size) for p in placements]
        return self.fill_placed_shapes_auto(char_shapes, placements, min_hole_area)

    def _char_shapes(self, font: GlyphSource, char: str, font_size: float) -> list[ShapeWithHoles]:
        return text_to_shapes(font, char, font_size, self.geometry.bezier_segments)
