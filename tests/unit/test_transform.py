"""Unit tests for point and shape transforms."""

import pytest

from rasterlab.core.transform import (
    apply_transform,
    default_anchor,
    resolve_anchor,
    rotate,
    rotate_point,
    scale,
    scale_point,
    translate,
    translate_point,
)
from rasterlab.domain import (
    Bezier,
    Circle,
    Ellipse,
    Line,
    PixelShape,
    Point,
    Polygon,
    Polyline,
    Rotation,
    Scaling,
    Translation,
)
from rasterlab.exceptions import TransformError


class TestPointTransforms:
    """Tests for the point-level transforms."""

    def test_rotate_quarter_turn(self):
        """Test a 90 degree turn maps +x onto +y."""
        assert rotate_point(Point(5, 0), 90, Point(0, 0)) == Point(0, 5)

    def test_rotate_about_pivot(self):
        """Test rotation is relative to the pivot."""
        assert rotate_point(Point(12, 10), 180, Point(10, 10)) == Point(8, 10)

    def test_translate_point(self):
        """Test a plain offset."""
        assert translate_point(Point(3, 4), -3, 6) == Point(0, 10)

    def test_scale_point(self):
        """Test per-axis scaling about a fixed point."""
        assert scale_point(Point(4, 6), 2, 0.5, Point(2, 2)) == Point(6, 4)

    @pytest.mark.parametrize("angle", [15, 30, 45, 73, 120])
    def test_rotation_round_trip(self, angle):
        """Test rotating back lands within one cell of the start."""
        pivot = Point(10, 10)
        start = Point(17, 4)
        back = rotate_point(rotate_point(start, angle, pivot), -angle, pivot)
        assert abs(back.x - start.x) <= 1
        assert abs(back.y - start.y) <= 1

    def test_scale_round_trip(self):
        """Test scaling by 2 then 0.5 returns the start exactly."""
        fixed = Point(5, 5)
        start = Point(9, 2)
        there = scale_point(start, 2, 2, fixed)
        assert scale_point(there, 0.5, 0.5, fixed) == start


class TestDefaultAnchor:
    """Tests for per-shape default anchors."""

    def test_pixel(self):
        """Test a pixel anchors on itself."""
        assert default_anchor(PixelShape(Point(3, 3))) == Point(3, 3)

    def test_line_midpoint(self):
        """Test a line anchors on its rounded midpoint."""
        assert default_anchor(Line(Point(0, 0), Point(5, 2))) == Point(3, 1)

    def test_circle_and_ellipse_center(self):
        """Test round shapes anchor on their center."""
        assert default_anchor(Circle(Point(7, 8), 3)) == Point(7, 8)
        assert default_anchor(Ellipse(Point(4, 5), 3, 2)) == Point(4, 5)

    def test_polygon_centroid(self):
        """Test vertex shapes anchor on their centroid."""
        square = Polygon((Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)))
        assert default_anchor(square) == Point(2, 2)

    def test_empty_vertices(self):
        """Test a vertex shape without vertices cannot be anchored."""
        with pytest.raises(TransformError):
            default_anchor(Polyline(()))


class TestShapeTransforms:
    """Tests for shape-level transforms."""

    def test_rotate_line_about_midpoint(self):
        """Test a horizontal line turns vertical about its midpoint."""
        result = rotate(Line(Point(0, 0), Point(4, 0)), 90)
        assert result == Line(Point(2, -2), Point(2, 2))

    def test_translate_every_vertex(self):
        """Test translation moves all vertices."""
        poly = Polyline((Point(1, 1), Point(3, 1), Point(3, 4)))
        assert translate(poly, 2, -1) == Polyline((Point(3, 0), Point(5, 0), Point(5, 3)))

    def test_translate_round_trip_is_exact(self):
        """Test translating back restores the shape exactly."""
        bezier = Bezier((Point(0, 0), Point(5, 9), Point(10, 2)))
        assert translate(translate(bezier, 4, 7), -4, -7) == bezier

    def test_scale_circle_uses_average_factor(self):
        """Test a circle's radius scales by the mean of both factors."""
        result = scale(Circle(Point(10, 10), 4), 2, 1)
        assert result == Circle(Point(10, 10), 6)

    def test_scale_ellipse_per_axis(self):
        """Test each ellipse radius scales with its own axis."""
        result = scale(Ellipse(Point(10, 10), 4, 2), 0.5, 3)
        assert result == Ellipse(Point(10, 10), 2, 6)

    def test_negative_scale_keeps_radius_positive(self):
        """Test mirroring a circle leaves a positive radius."""
        assert scale(Circle(Point(5, 5), 3), -1, -1).radius == 3

    def test_scale_line_about_midpoint(self):
        """Test stretching a line about its default anchor."""
        result = scale(Line(Point(0, 0), Point(4, 0)), 2, 1)
        assert result == Line(Point(-2, 0), Point(6, 0))

    def test_rotate_ellipse_moves_center_only(self):
        """Test ellipses stay axis-aligned under rotation."""
        result = rotate(Ellipse(Point(12, 10), 4, 2), 90, pivot=Point(10, 10))
        assert result == Ellipse(Point(10, 12), 4, 2)

    def test_polygon_vertex_count_preserved(self):
        """Test transforms never add or drop vertices."""
        poly = Polygon((Point(2, 2), Point(9, 3), Point(6, 8), Point(1, 6)))
        assert len(rotate(poly, 33).vertices) == 4


class TestTransformRecords:
    """Tests for dispatching Rotation / Translation / Scaling records."""

    def test_apply_each_record(self):
        """Test each record type reaches its transform."""
        pixel = PixelShape(Point(5, 5))
        assert apply_transform(pixel, Translation(1, 2)) == PixelShape(Point(6, 7))
        assert apply_transform(pixel, Rotation(90, Point(0, 0))) == PixelShape(Point(-5, 5))
        assert apply_transform(pixel, Scaling(2, 2, Point(0, 0))) == PixelShape(Point(10, 10))

    def test_unsupported_record(self):
        """Test an unknown record raises TransformError."""
        with pytest.raises(TransformError):
            apply_transform(PixelShape(Point(0, 0)), object())  # type: ignore[arg-type]

    def test_resolve_anchor_fills_pivot(self):
        """Test a missing pivot is taken from the shape."""
        params = resolve_anchor(Rotation(45), Circle(Point(8, 9), 2))
        assert params == Rotation(45, Point(8, 9))

    def test_resolve_anchor_keeps_explicit(self):
        """Test an explicit anchor wins."""
        params = Scaling(2, 2, Point(1, 1))
        assert resolve_anchor(params, Circle(Point(8, 9), 2)) is params

    def test_resolve_anchor_translation_untouched(self):
        """Test translations need no anchor."""
        params = Translation(3, 3)
        assert resolve_anchor(params, Line(Point(0, 0), Point(2, 2))) is params
