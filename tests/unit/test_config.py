"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from icemold.config import (
    ExtrudeConfig,
    FillConfig,
    GeometryConfig,
    IceMoldSettings,
    StickConfig,
    get_default_settings,
)


class TestDefaults:
    """Tests for the default settings."""

    def test_geometry_defaults(self):
        """Five segments per curve and a 0.001 mm clipping grid."""
        geometry = GeometryConfig()
        assert geometry.bezier_segments == 5
        assert geometry.clipper_scale == 1000
        assert geometry.scaled_arc_tolerance() == pytest.approx(10.0)

    def test_fill_defaults(self):
        """Fill offset and hole thresholds."""
        fill = FillConfig()
        assert fill.offset_distance == 3.0
        assert fill.min_hole_area == 100.0
        assert fill.preview_min_hole_area == 50.0
        assert fill.hole_area_tolerance_ratio == 0.1

    def test_preview_defaults(self):
        """Ice bevel, base plate and stick dimensions."""
        settings = get_default_settings()
        assert settings.extrude.bevel_enabled
        assert settings.extrude.bevel_segments == 3
        assert settings.base.margin == 8.0
        assert settings.base.depth == 19.0
        assert (settings.stick.width, settings.stick.height) == (10.0, 2.0)
        assert settings.stick.length == 60.0
        assert settings.stick.offset_y == 35.0

    def test_layout_and_auto_gap_defaults(self):
        """Fitting ratio, spacing and auto-gap clamps."""
        settings = IceMoldSettings()
        assert settings.layout.max_ratio == 0.85
        assert settings.layout.spacing_factor == 1.02
        assert settings.auto_gap.margin == 0.5
        assert settings.auto_gap.max_offset == 5.0
        assert settings.auto_gap.fallback_offset == 3.0

    def test_independent_instances(self):
        """Each settings object owns its sections."""
        assert get_default_settings().fill is not get_default_settings().fill


class TestValidation:
    """Tests for field constraints."""

    def test_segments_at_least_one(self):
        """A curve needs at least one segment."""
        with pytest.raises(ValidationError):
            GeometryConfig(bezier_segments=0)

    def test_positive_arc_tolerance(self):
        """Arc tolerance must be positive."""
        with pytest.raises(ValidationError):
            GeometryConfig(arc_tolerance_mm=0.0)

    def test_tolerance_ratio_range(self):
        """The hole tolerance ratio is a share between 0 and 1."""
        with pytest.raises(ValidationError):
            FillConfig(hole_area_tolerance_ratio=1.5)

    def test_negative_bevel(self):
        """Bevel sizes cannot be negative."""
        with pytest.raises(ValidationError):
            ExtrudeConfig(bevel_size=-1.0)

    def test_stick_dimensions_positive(self):
        """Stick dimensions must be positive."""
        with pytest.raises(ValidationError):
            StickConfig(length=0.0)

    def test_nested_override(self):
        """Sections can be overridden from plain dictionaries."""
        settings = IceMoldSettings(fill={"offset_distance": 1.5})
        assert settings.fill.offset_distance == 1.5
        assert settings.fill.min_hole_area == 100.0
