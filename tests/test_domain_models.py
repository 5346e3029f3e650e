"""Tests for domain models to verify they work correctly."""

import pytest

from icemold.domain import (
    EMPTY_BOUNDS,
    ICE_POP_MOLD,
    CharacterPlacement,
    Close,
    Cubic,
    Line,
    MoldGeometry,
    MoldParameters,
    Move,
    Point,
    PolygonLoop,
    Quadratic,
    ShapeWithHoles,
    TextBounds,
)


def _square(size: float = 100.0) -> PolygonLoop:
    return PolygonLoop(points=[Point(0, 0), Point(size, 0), Point(size, size), Point(0, size)])


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(100.0, 200.0).to_tuple() == (100.0, 200.0)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(1.5, -2.25)
        assert Point.from_dict(p1.to_dict()) == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore

    def test_point_hashable(self) -> None:
        """Test that equal points hash equally."""
        assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2


class TestPolygonLoop:
    """Tests for PolygonLoop class."""

    def test_signed_area_counterclockwise(self) -> None:
        """Test signed area for counter-clockwise square."""
        area = _square().signed_area()
        assert area > 0  # Positive for CCW
        assert area == pytest.approx(10000.0)

    def test_signed_area_clockwise(self) -> None:
        """Test signed area for clockwise square."""
        assert _square().reversed().signed_area() == pytest.approx(-10000.0)

    def test_signed_area_degenerate(self) -> None:
        """Test that loops with fewer than three points have no area."""
        assert PolygonLoop(points=[Point(0, 0), Point(1, 1)]).signed_area() == 0.0

    def test_orientation_follows_points(self) -> None:
        """Test that replacing the points changes the orientation."""
        loop = _square()
        loop.points = list(reversed(loop.points))
        assert loop.signed_area() < 0

    def test_bounding_box(self) -> None:
        """Test bounding box calculation."""
        assert _square(50).translated(10, -5).bounding_box() == (10, -5, 60, 45)
        assert PolygonLoop(points=[]).bounding_box() == (0.0, 0.0, 0.0, 0.0)

    def test_contains_point(self) -> None:
        """Test point containment."""
        loop = _square()
        assert loop.contains_point(50, 50)
        assert not loop.contains_point(150, 50)
        assert loop.reversed().contains_point(50, 50)

    def test_serialization(self) -> None:
        """Test loop serialization and deserialization."""
        loop = _square()
        assert loop.to_dict()["points"][1] == [100, 0]
        assert PolygonLoop.from_dict(loop.to_dict()) == loop


class TestShapeWithHoles:
    """Tests for ShapeWithHoles class."""

    def test_loops(self) -> None:
        """Test that loops lists the outer loop first."""
        hole = _square(10).translated(40, 40).reversed()
        shape = ShapeWithHoles(outer=_square(), holes=[hole])
        assert shape.hole_count == 1
        assert shape.loops() == [shape.outer, hole]

    def test_default_has_no_holes(self) -> None:
        """Test that holes default to an independent empty list."""
        a = ShapeWithHoles(outer=_square())
        b = ShapeWithHoles(outer=_square())
        a.holes.append(_square(1))
        assert b.holes == []

    def test_translated(self) -> None:
        """Test that translation moves the outer loop and the holes."""
        shape = ShapeWithHoles(outer=_square(), holes=[_square(10).reversed()])
        moved = shape.translated(5, 5)
        assert moved.bounding_box() == (5, 5, 105, 105)
        assert moved.holes[0].bounding_box() == (5, 5, 15, 15)
        assert shape.bounding_box() == (0, 0, 100, 100)

    def test_serialization(self) -> None:
        """Test shape serialization and deserialization."""
        shape = ShapeWithHoles(outer=_square(), holes=[_square(10).reversed()])
        data = shape.to_dict()
        assert set(data) == {"outer", "holes"}
        assert ShapeWithHoles.from_dict(data) == shape


class TestTextBounds:
    """Tests for TextBounds class."""

    def test_dimensions(self) -> None:
        """Test width, height and center."""
        bounds = TextBounds(-10, 0, 30, 20)
        assert bounds.width == 40
        assert bounds.height == 20
        assert (bounds.center_x, bounds.center_y) == (10, 10)

    def test_translated_and_union(self) -> None:
        """Test moving and combining boxes."""
        a = TextBounds(0, 0, 10, 10)
        b = a.translated(5, -20)
        assert b == TextBounds(5, -20, 15, -10)
        assert a.union(b) == TextBounds(0, -20, 15, 10)

    def test_empty_bounds(self) -> None:
        """Test the zero box."""
        assert EMPTY_BOUNDS.width == 0.0
        assert EMPTY_BOUNDS.height == 0.0


class TestPathCommands:
    """Tests for path command records."""

    def test_commands_are_values(self) -> None:
        """Test that commands compare by value."""
        assert Move(1, 2) == Move(1, 2)
        assert Line(1, 2) != Move(1, 2)
        assert Close() == Close()

    def test_curve_fields(self) -> None:
        """Test curve control point fields."""
        cubic = Cubic(1, 2, 3, 4, 5, 6)
        quad = Quadratic(1, 2, 3, 4)
        assert (cubic.x2, cubic.y2, cubic.x, cubic.y) == (3, 4, 5, 6)
        assert (quad.x1, quad.y1, quad.x, quad.y) == (1, 2, 3, 4)

    def test_commands_immutable(self) -> None:
        """Test that commands are immutable."""
        with pytest.raises(AttributeError):
            Line(0, 0).x = 1  # type: ignore


class TestMold:
    """Tests for the mold table and parameters."""

    def test_mold_dimensions(self) -> None:
        """Test the fixed cavity dimensions."""
        assert ICE_POP_MOLD.cavity_width == 57.9
        assert ICE_POP_MOLD.cavity_length == 97.3
        assert ICE_POP_MOLD.depth_text == 3.0

    def test_mold_serialization(self) -> None:
        """Test that the table serializes every dimension."""
        data = ICE_POP_MOLD.to_dict()
        assert data["outer_width"] == 76.91
        assert len(data) == 21
        assert MoldGeometry(**data) == ICE_POP_MOLD

    def test_parameter_defaults(self) -> None:
        """Test default user parameters."""
        params = MoldParameters()
        assert params.text == "鎌倉"
        assert params.characters == ["鎌", "倉"]
        assert params.scale == 100.0
        assert not params.fill_text
        assert params.fill_offset == 3.0

    def test_parameters_not_validated(self) -> None:
        """Test that out-of-range values are accepted as given."""
        params = MoldParameters(text="", scale=500.0, rotation=720.0)
        assert params.characters == []
        assert params.scale == 500.0

    def test_character_placement(self) -> None:
        """Test placement records."""
        placement = CharacterPlacement("A", 1.5, -2.0)
        assert (placement.char, placement.x, placement.y) == ("A", 1.5, -2.0)
