"""Configuration settings for icemold."""

from pathlib import Path

from pydantic import BaseModel, Field


class GeometryConfig(BaseModel):
    """Configuration for outline flattening and integer clipping.

    Lengths are in millimeters unless stated otherwise.
    """

    bezier_segments: int = Field(
        default=5,
        ge=1,
        le=64,
        description="Fixed number of line segments per flattened Bezier curve",
    )
    clipper_scale: int = Field(
        default=1000,
        ge=1,
        description="Multiplier from millimeters to integer clipping coordinates",
    )
    arc_tolerance_mm: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Maximum deviation of round offset joins from a true arc",
    )

    def scaled_arc_tolerance(self) -> float:
        """Arc tolerance in integer clipping units."""
        return self.arc_tolerance_mm * self.clipper_scale


class TextLayoutConfig(BaseModel):
    """Configuration for fitting and stacking characters."""

    max_ratio: float = Field(
        default=0.85,
        gt=0.0,
        le=1.0,
        description="Maximum share of the fitting box a character may occupy",
    )
    spacing_factor: float = Field(
        default=1.02,
        gt=0.0,
        description="Vertical pitch as a multiple of the font size",
    )


class FillConfig(BaseModel):
    """Configuration for outline fill (offset + union)."""

    offset_distance: float = Field(
        default=3.0,
        description="Default outline offset in millimeters",
    )
    min_hole_area: float = Field(
        default=100.0,
        ge=0.0,
        description="Loops at or above this area (mm²) always survive filtering",
    )
    preview_min_hole_area: float = Field(
        default=50.0,
        ge=0.0,
        description="Minimum hole area used when building drawing and preview shapes",
    )
    hole_area_tolerance_ratio: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Loops larger than this share of min_hole_area are kept as well",
    )


class AutoGapConfig(BaseModel):
    """Configuration for deriving the fill offset from inter-glyph gaps."""

    margin: float = Field(
        default=0.5,
        description="Extra offset added once the glyphs touch (mm)",
    )
    min_offset: float = Field(default=0.0, description="Lower clamp for the offset (mm)")
    max_offset: float = Field(default=5.0, description="Upper clamp for the offset (mm)")
    fallback_offset: float = Field(
        default=3.0,
        description="Offset used when no gap can be measured (mm)",
    )
    touch_epsilon: float = Field(
        default=0.01,
        ge=0.0,
        description="Distances below this count as touching and end the search (mm)",
    )


class ExtrudeConfig(BaseModel):
    """Extrusion settings for the ice body."""

    bevel_enabled: bool = Field(default=True, description="Round off the extrusion edges")
    bevel_thickness: float = Field(default=2.0, ge=0.0, description="Bevel depth along Z (mm)")
    bevel_size: float = Field(default=1.5, ge=0.0, description="Bevel growth in the plane (mm)")
    bevel_segments: int = Field(default=3, ge=1, le=32, description="Bevel profile steps")


class BaseConfig(BaseModel):
    """Settings for the base plate under the text."""

    margin: float = Field(default=8.0, ge=0.0, description="Outline margin around the text (mm)")
    depth: float = Field(default=19.0, gt=0.0, description="Base plate thickness (mm)")


class StickConfig(BaseModel):
    """Dimensions of the ice-pop stick."""

    width: float = Field(default=10.0, gt=0.0, description="Stick width (mm)")
    height: float = Field(default=2.0, gt=0.0, description="Stick thickness (mm)")
    length: float = Field(default=60.0, gt=0.0, description="Stick length (mm)")
    corner_radius: float = Field(default=0.5, ge=0.0, description="Stick corner radius (mm)")
    offset_y: float = Field(
        default=35.0,
        description="Distance from the lowest glyph point to the stick center (mm)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class IceMoldSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    layout: TextLayoutConfig = Field(default_factory=TextLayoutConfig)
    fill: FillConfig = Field(default_factory=FillConfig)
    auto_gap: AutoGapConfig = Field(default_factory=AutoGapConfig)
    extrude: ExtrudeConfig = Field(default_factory=ExtrudeConfig)
    base: BaseConfig = Field(default_factory=BaseConfig)
    stick: StickConfig = Field(default_factory=StickConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> IceMoldSettings:
    """Get default application settings."""
    return IceMoldSettings()
