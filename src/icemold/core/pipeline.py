"""End-to-end orchestration from parameters to outlines and solids.

This module ties the geometry stages together for one render:
1. Fit the font size to the mold cavity and stack the characters
2. Build the character outlines, optionally filled into one merged outline
3. Mirror and rotate the block for 2D drawing output
4. Extrude the ice body, the base plate and the stick for a 3D preview

Key classes:
- TextBlock: 2D outlines of the stacked text plus layout details
- MoldPreview: Extruded solids for the ice, base and stick
- MoldPipeline: Runs the stages with one settings object
"""

import math
import time
from dataclasses import dataclass, field, replace

import structlog
import trimesh

from icemold.config import IceMoldSettings, get_default_settings
from icemold.core.extrude import (
    ExtrudeOptions,
    Solid,
    extrude_shape,
    extrude_shapes,
    rounded_rectangle,
)
from icemold.core.fill import FillResult, OutlineFiller
from icemold.core.layout import (
    block_bounds,
    compute_font_size,
    place_characters,
    transform_block,
    translate_shapes,
)
from icemold.core.outline import GlyphSource, text_to_shapes
from icemold.domain import (
    EMPTY_BOUNDS,
    ICE_POP_MOLD,
    CharacterPlacement,
    MoldGeometry,
    MoldParameters,
    Point,
    ShapeWithHoles,
    TextBounds,
)
from icemold.utils import PipelineLogger


@dataclass
class TextBlock:
    """Stacked text outlines for one render.

    Attributes:
        shapes: Outlines in millimeters, Y up, after mirror and rotation
        placements: Translation applied to each character
        font_size: Fitted font size (mm)
        bounds: Ink box of the block before mirror and rotation
        fill: Fill outcome when the text was filled, else None
    """

    shapes: list[ShapeWithHoles] = field(default_factory=list)
    placements: list[CharacterPlacement] = field(default_factory=list)
    font_size: float = 0.0
    bounds: TextBounds = EMPTY_BOUNDS
    fill: FillResult | None = None

    @property
    def hole_count(self) -> int:
        return sum(shape.hole_count for shape in self.shapes)


@dataclass
class MoldPreview:
    """Extruded parts of the mold preview.

    Attributes:
        ice: Beveled text solids sitting on top of the base
        base: Base plate solids following the text outline
        stick: Stick solid, None when there is no text
        bottom_y: Lowest point of the unrotated text block (mm)
        text_block: The 2D block the solids were built from
    """

    ice: list[Solid] = field(default_factory=list)
    base: list[Solid] = field(default_factory=list)
    stick: Solid | None = None
    bottom_y: float = 0.0
    text_block: TextBlock = field(default_factory=TextBlock)

    @property
    def solids(self) -> list[Solid]:
        parts = [*self.ice, *self.base]
        if self.stick is not None:
            parts.append(self.stick)
        return parts

    @property
    def triangle_count(self) -> int:
        return sum(solid.triangle_count for solid in self.solids)


class MoldPipeline:
    """Builds text outlines and mold solids from user parameters.

    Every entry point accepts ``None`` for the font and returns empty
    output in that case, so callers can render while the font is loading.

    Example:
        pipeline = MoldPipeline()
        block = pipeline.build_text_block(font, MoldParameters(text="鎌倉"))
        preview = pipeline.build_preview(font, MoldParameters(text="鎌倉"))
    """

    def __init__(
        self,
        settings: IceMoldSettings | None = None,
        mold: MoldGeometry = ICE_POP_MOLD,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.settings = settings or get_default_settings()
        self.mold = mold
        self.logger = logger or structlog.get_logger("icemold.pipeline")
        self.pipeline_logger = PipelineLogger(self.logger)
        self.filler = OutlineFiller(
            geometry=self.settings.geometry,
            config=self.settings.fill,
            auto_gap=self.settings.auto_gap,
        )

    def build_text_block(
        self,
        font: GlyphSource | None,
        params: MoldParameters,
        mirror: bool = False,
        rotate: bool = True,
        auto_gap: bool = False,
        fit_box: tuple[float, float] | None = None,
    ) -> TextBlock:
        """Lay out and outline the text of ``params``.

        Args:
            font: Glyph source, or None while loading
            params: User parameters
            mirror: Reflect the block horizontally about its center
            rotate: Apply ``params.rotation`` about the block center
            auto_gap: Derive the fill offset from the glyph gaps
            fit_box: (width, length) to fit into, the mold cavity by default

        Returns:
            The text block; empty when there is no font or no text
        """
        chars = params.characters
        if font is None or not chars:
            self.pipeline_logger.log_skipped("no font" if font is None else "no text")
            return TextBlock()

        start = time.time()
        stats = self.pipeline_logger.stats
        stats.start_time = stats.start_time or start

        width, length = fit_box or (self.mold.cavity_width, self.mold.cavity_length)
        font_size = compute_font_size(
            len(chars), width, length, params.scale, self.settings.layout.max_ratio
        )
        placements = place_characters(
            font,
            chars,
            font_size,
            params.offset_x,
            params.offset_y,
            self.settings.layout.spacing_factor,
        )
        bounds = block_bounds(font, placements, font_size)
        self.pipeline_logger.log_layout(chars, font_size)

        fill: FillResult | None = None
        min_hole_area = self.settings.fill.preview_min_hole_area
        if params.fill_text:
            if auto_gap:
                fill = self.filler.fill_multi_char_auto(font, placements, font_size, min_hole_area)
            else:
                fill = self.filler.fill_multi_char(
                    font, placements, font_size, params.fill_offset, min_hole_area
                )
            if not fill.ok:
                self.pipeline_logger.log_fallback("text", fill.fallback.value, fill.error)
            shapes = fill.shapes
        else:
            shapes = []
            for placement in placements:
                char_shapes = text_to_shapes(
                    font, placement.char, font_size, self.settings.geometry.bezier_segments
                )
                shapes.extend(translate_shapes(char_shapes, placement.x, placement.y))

        block = TextBlock(shapes, placements, font_size, bounds, fill)
        self.pipeline_logger.log_shapes("text", len(shapes), block.hole_count)
        stats.end_time = time.time()
        return self.orient_block(block, params, mirror=mirror, rotate=rotate)

    def orient_block(
        self,
        block: TextBlock,
        params: MoldParameters,
        mirror: bool = False,
        rotate: bool = True,
    ) -> TextBlock:
        """Mirror and rotate an upright block about its center."""
        if not mirror and not (rotate and params.rotation):
            return block
        shapes = transform_block(
            block.shapes,
            rotation=params.rotation if rotate else 0.0,
            mirror=mirror,
            origin=Point(params.offset_x, params.offset_y),
        )
        return replace(block, shapes=shapes)

    def build_preview(
        self,
        font: GlyphSource | None,
        params: MoldParameters,
        auto_gap: bool = False,
        block: TextBlock | None = None,
    ) -> MoldPreview:
        """Extrude the ice body, base plate and stick for a 3D preview.

        The ice sits on top of the base plate. The stick runs along the
        stacking axis below the text, centered in the base thickness. The
        whole assembly is rotated by ``params.rotation`` about the block
        center.

        The font size is fitted to the mold cavity, the same box the 2D
        outlines use, so the preview matches the exported outlines.

        Pass ``block`` to reuse an upright, unmirrored block from
        :meth:`build_text_block` instead of laying the text out again.
        """
        if block is None:
            block = self.build_text_block(font, params, rotate=False, auto_gap=auto_gap)
        if font is None or not block.shapes:
            return MoldPreview(text_block=block)

        base_cfg = self.settings.base
        origin = Point(params.offset_x, params.offset_y)

        ice_options = ExtrudeOptions.from_config(self.mold.depth_text, self.settings.extrude)
        ice = [s.translated(dz=base_cfg.depth) for s in extrude_shapes(block.shapes, ice_options)]
        self.pipeline_logger.log_solids("ice", len(ice), sum(s.triangle_count for s in ice))

        base_fill = self.filler.fill_multi_char(
            font,
            block.placements,
            block.font_size,
            offset=base_cfg.margin,
            min_hole_area=self.settings.fill.preview_min_hole_area,
        )
        if not base_fill.ok:
            self.pipeline_logger.log_fallback("base", base_fill.fallback.value, base_fill.error)
        base = extrude_shapes(base_fill.shapes, ExtrudeOptions(depth=base_cfg.depth))
        self.pipeline_logger.log_solids("base", len(base), sum(s.triangle_count for s in base))

        bottom_y = block.bounds.y_min
        stick = None
        if ice:
            stick = self._build_stick(origin.x, bottom_y - self.settings.stick.offset_y)

        if params.rotation:
            ice = [s.rotated_z(params.rotation, origin) for s in ice]
            base = [s.rotated_z(params.rotation, origin) for s in base]
            if stick is not None:
                stick = stick.rotated_z(params.rotation, origin)

        return MoldPreview(ice, base, stick, bottom_y, block)

    def _build_stick(self, center_x: float, center_y: float) -> Solid:
        """Rounded stick running along Y, centered at (center_x, center_y)."""
        cfg = self.settings.stick
        section = rounded_rectangle(
            cfg.width, cfg.height, cfg.corner_radius, self.settings.geometry.bezier_segments
        )
        solid = extrude_shape(section, ExtrudeOptions(depth=cfg.length))

        # +90 degrees about X maps (x, y, z) to (x, -z, y)
        upright = solid.transformed(
            trimesh.transformations.rotation_matrix(math.pi / 2, [1, 0, 0])
        )
        stick = upright.translated(
            center_x, center_y + cfg.length / 2, self.settings.base.depth / 2
        )
        self.pipeline_logger.log_solids("stick", 1, stick.triangle_count)
        return stick
