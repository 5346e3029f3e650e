"""Unit tests for text layout and block transforms."""

import pytest
from conftest import BoxFont, square_shape

from icemold.core.layout import (
    block_bounds,
    compute_font_size,
    mirror_shapes,
    place_characters,
    rotate_shapes,
    shapes_bounds,
    transform_block,
)
from icemold.domain import EMPTY_BOUNDS, Point, TextBounds


class TestComputeFontSize:
    """Tests for fitting the font size to the cavity."""

    def test_width_limited(self):
        """A single character is limited by the width."""
        assert compute_font_size(1, 57.9, 97.3) == pytest.approx(57.9 * 0.85)

    def test_length_limited(self):
        """Several characters share the length."""
        assert compute_font_size(3, 57.9, 97.3) == pytest.approx(97.3 * 0.85 / 3)

    def test_scale_applied(self):
        """The user scale multiplies the fitted size."""
        assert compute_font_size(2, 57.9, 97.3, 50.0) == pytest.approx(97.3 * 0.85 / 2 / 2)

    def test_no_characters(self):
        """Nothing to place gives size zero."""
        assert compute_font_size(0, 57.9, 97.3) == 0.0


class TestPlaceCharacters:
    """Tests for vertical stacking."""

    def test_first_character_on_top(self):
        """Characters are stacked top to bottom around the block center."""
        font = BoxFont(TextBounds(0, 0, 10, 20))
        placements = place_characters(font, ["a", "b", "c"], 10.0)
        # spacing 10.2, total 20.4, ink box centered on each slot
        assert [p.y for p in placements] == pytest.approx([0.2, -10.0, -20.2])
        assert all(p.x == pytest.approx(-5.0) for p in placements)

    def test_offsets_shift_block(self):
        """The block center follows the offsets."""
        font = BoxFont(TextBounds(0, 0, 10, 10))
        (placement,) = place_characters(font, ["a"], 10.0, offset_x=3.0, offset_y=-4.0)
        assert placement.x == pytest.approx(-2.0)
        assert placement.y == pytest.approx(-9.0)

    def test_spacing_factor(self):
        """The pitch is font size times the spacing factor."""
        font = BoxFont(TextBounds(0, 0, 10, 10))
        placements = place_characters(font, ["a", "b"], 10.0, spacing_factor=2.0)
        assert placements[0].y - placements[1].y == pytest.approx(20.0)

    def test_block_bounds(self):
        """Block bounds cover every placed ink box."""
        font = BoxFont(TextBounds(0, 0, 10, 20))
        placements = place_characters(font, ["a", "b"], 10.0)
        bounds = block_bounds(font, placements, 10.0)
        assert bounds.y_max == pytest.approx(5.1 + 10)
        assert bounds.y_min == pytest.approx(-5.1 - 10)
        assert bounds.center_x == pytest.approx(0.0)

    def test_block_bounds_skips_blank(self):
        """Blank characters do not widen the block."""
        font = BoxFont(TextBounds(0, 0, 10, 20))
        placements = place_characters(font, [" "], 10.0)
        assert block_bounds(font, placements, 10.0) == EMPTY_BOUNDS

    def test_block_bounds_real_font(self, font):
        """Two stacked bars at 50 mm leave a 2 mm gap inside the block."""
        placements = place_characters(font, ["A", "A"], 50.0)
        bounds = block_bounds(font, placements, 50.0)
        assert bounds.height == pytest.approx(51.0 + 49.0)
        assert bounds.center_y == pytest.approx(0.0)


class TestTransforms:
    """Tests for mirror and rotation."""

    def test_rotate_quarter_turn(self):
        """Positive angles rotate counter-clockwise."""
        (shape,) = rotate_shapes([square_shape(1, 0, 1)], 90.0)
        x0, y0, x1, y1 = shape.bounding_box()
        assert (x0, y0, x1, y1) == pytest.approx((-1.0, 1.0, 0.0, 2.0))

    def test_rotate_about_origin(self):
        """Rotation keeps the origin fixed."""
        (shape,) = rotate_shapes([square_shape(0, 0, 2)], 180.0, Point(1, 1))
        assert shape.bounding_box() == pytest.approx((0.0, 0.0, 2.0, 2.0))

    def test_zero_rotation(self):
        """Zero rotation returns equal shapes."""
        shapes = [square_shape(0, 0, 1)]
        assert rotate_shapes(shapes, 0.0) == shapes

    def test_mirror_preserves_winding(self):
        """Mirrored outer loops stay counter-clockwise and holes clockwise."""
        (shape,) = mirror_shapes([square_shape(0, 0, 10, hole=4)], origin_x=0.0)
        assert shape.outer.signed_area() > 0
        assert shape.holes[0].signed_area() < 0
        assert shape.bounding_box() == pytest.approx((-10.0, 0.0, 0.0, 10.0))

    def test_transform_block_mirrors_then_rotates(self):
        """Mirror happens before rotation, both about the block center."""
        shapes = [square_shape(1, 0, 1)]
        (shape,) = transform_block(shapes, rotation=90.0, mirror=True, origin=Point(0, 0))
        # Mirror: x in [-2, -1]; rotate 90: y in [-2, -1], x in [-1, 0]
        assert shape.bounding_box() == pytest.approx((-1.0, -2.0, 0.0, -1.0))

    def test_shapes_bounds(self):
        """Bounds cover every outer loop."""
        bounds = shapes_bounds([square_shape(0, 0, 1), square_shape(5, -3, 1)])
        assert (bounds.x_min, bounds.y_min, bounds.x_max, bounds.y_max) == (0, -3, 6, 1)
        assert shapes_bounds([]) == EMPTY_BOUNDS
