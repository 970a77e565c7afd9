"""Unit tests for line, polygon and point clipping."""

import pytest

from rasterlab.core.clipping import (
    BOTTOM,
    INSIDE,
    LEFT,
    RIGHT,
    TOP,
    clip_line,
    clip_pixels,
    clip_point,
    clip_polygon,
    compute_outcode,
)
from rasterlab.domain import ClipRectangle, Point

GRID_RECT = ClipRectangle(0, 0, 19, 19)
INVALID_RECT = ClipRectangle(10, 10, 5, 5)


class TestOutcode:
    """Tests for Cohen-Sutherland region codes."""

    def test_inside(self):
        """Test a point in the window has no bits set."""
        assert compute_outcode(5, 5, GRID_RECT) == INSIDE

    def test_single_bits(self):
        """Test each violated bound sets its own bit."""
        assert compute_outcode(-1, 5, GRID_RECT) == LEFT
        assert compute_outcode(20, 5, GRID_RECT) == RIGHT
        assert compute_outcode(5, -1, GRID_RECT) == BOTTOM
        assert compute_outcode(5, 20, GRID_RECT) == TOP

    def test_corner_regions(self):
        """Test diagonal regions combine two bits."""
        assert compute_outcode(-1, -1, GRID_RECT) == LEFT | BOTTOM
        assert compute_outcode(20, 20, GRID_RECT) == RIGHT | TOP

    def test_boundary_is_inside(self):
        """Test the window bounds are inclusive."""
        assert compute_outcode(0, 19, GRID_RECT) == INSIDE


class TestClipLine:
    """Tests for Cohen-Sutherland line clipping."""

    def test_horizontal_crossing(self):
        """Test a line spanning the window is cut at both sides."""
        assert clip_line(Point(-5, 10), Point(25, 10), GRID_RECT) == (Point(0, 10), Point(19, 10))

    def test_fully_inside_is_unchanged(self):
        """Test trivial acceptance keeps both endpoints."""
        assert clip_line(Point(2, 3), Point(15, 12), GRID_RECT) == (Point(2, 3), Point(15, 12))

    def test_trivial_rejection(self):
        """Test a line wholly in one outside region is rejected."""
        assert clip_line(Point(-5, -5), Point(-1, -3), GRID_RECT) is None

    def test_rejection_after_clipping(self):
        """Test a line passing by a corner is rejected."""
        assert clip_line(Point(-5, 3), Point(3, -5), ClipRectangle(0, 0, 10, 10)) is None

    def test_diagonal_through_corners(self):
        """Test a diagonal clipped at two corners."""
        assert clip_line(Point(-5, -5), Point(25, 25), GRID_RECT) == (Point(0, 0), Point(19, 19))

    def test_vertical_line(self):
        """Test a vertical line never divides by zero."""
        assert clip_line(Point(7, -10), Point(7, 30), GRID_RECT) == (Point(7, 0), Point(7, 19))

    def test_one_endpoint_inside(self):
        """Test only the outside endpoint moves."""
        assert clip_line(Point(5, 5), Point(5, 40), GRID_RECT) == (Point(5, 5), Point(5, 19))

    def test_invalid_rectangle(self):
        """Test an invalid window rejects everything."""
        assert clip_line(Point(6, 6), Point(8, 8), INVALID_RECT) is None

    @pytest.mark.parametrize(
        "p1,p2",
        [
            (Point(-10, 4), Point(30, 17)),
            (Point(3, -8), Point(12, 40)),
            (Point(-4, 25), Point(22, -6)),
            (Point(1, 1), Point(18, 18)),
        ],
    )
    def test_result_inside_window(self, p1, p2):
        """Test clipped endpoints always lie in the window."""
        result = clip_line(p1, p2, GRID_RECT)
        assert result is not None
        for p in result:
            assert GRID_RECT.contains(p.x, p.y)

    def test_idempotent(self):
        """Test clipping an already clipped line changes nothing."""
        first = clip_line(Point(-10, 4), Point(30, 17), GRID_RECT)
        assert first is not None
        assert clip_line(first[0], first[1], GRID_RECT) == first


class TestClipPolygon:
    """Tests for Sutherland-Hodgman polygon clipping."""

    def test_inside_polygon_keeps_vertex_order(self):
        """Test a polygon inside the window is returned unchanged."""
        square = [Point(5, 5), Point(15, 5), Point(15, 15), Point(5, 15)]
        assert clip_polygon(square, GRID_RECT) == square

    def test_corner_overlap(self):
        """Test a square overlapping the top-left corner."""
        square = [Point(-5, -5), Point(10, -5), Point(10, 10), Point(-5, 10)]
        assert clip_polygon(square, GRID_RECT) == [
            Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)
        ]

    def test_fully_outside(self):
        """Test a polygon outside the window vanishes."""
        triangle = [Point(30, 30), Point(40, 30), Point(40, 40)]
        assert clip_polygon(triangle, GRID_RECT) == []

    def test_enclosing_polygon_becomes_window(self):
        """Test a polygon enclosing the window is cut to the window's corners."""
        big = [Point(-10, -10), Point(30, -10), Point(30, 30), Point(-10, 30)]
        result = clip_polygon(big, GRID_RECT)
        assert set(result) == {Point(0, 0), Point(19, 0), Point(19, 19), Point(0, 19)}

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_too_few_vertices(self, count):
        """Test fewer than three vertices is not a polygon."""
        vertices = [Point(i, i) for i in range(count)]
        assert clip_polygon(vertices, GRID_RECT) == []

    def test_invalid_rectangle(self):
        """Test an invalid window clips everything away."""
        triangle = [Point(6, 6), Point(8, 6), Point(7, 8)]
        assert clip_polygon(triangle, INVALID_RECT) == []

    @pytest.mark.parametrize("round_each_pass", [True, False])
    def test_idempotent(self, round_each_pass):
        """Test clipping twice equals clipping once."""
        triangle = [Point(-6, 4), Point(25, 8), Point(9, 28)]
        once = clip_polygon(triangle, GRID_RECT, round_each_pass=round_each_pass)
        twice = clip_polygon(once, GRID_RECT, round_each_pass=round_each_pass)
        assert once == twice

    @pytest.mark.parametrize("round_each_pass", [True, False])
    def test_vertices_inside_window(self, round_each_pass):
        """Test every output vertex lies in the window."""
        triangle = [Point(-6, 4), Point(25, 8), Point(9, 28)]
        for p in clip_polygon(triangle, GRID_RECT, round_each_pass=round_each_pass):
            assert GRID_RECT.contains(p.x, p.y)

    def test_output_can_grow(self):
        """Test cutting corners adds vertices."""
        diamond = [Point(10, -4), Point(24, 10), Point(10, 24), Point(-4, 10)]
        assert len(clip_polygon(diamond, GRID_RECT)) == 8


class TestClipPoints:
    """Tests for point and pixel clipping."""

    def test_clip_point(self):
        """Test points are kept only inside the window."""
        rect = ClipRectangle(2, 2, 6, 6)
        assert clip_point(Point(4, 4), rect) == Point(4, 4)
        assert clip_point(Point(2, 6), rect) == Point(2, 6)
        assert clip_point(Point(7, 4), rect) is None

    def test_clip_point_invalid_rectangle(self):
        """Test an invalid window contains no points."""
        assert clip_point(Point(7, 7), INVALID_RECT) is None

    def test_clip_pixels(self):
        """Test pixel sets are filtered to the window."""
        pixels = {(x, 5) for x in range(10)}
        assert clip_pixels(pixels, ClipRectangle(3, 0, 6, 9)) == {(3, 5), (4, 5), (5, 5), (6, 5)}

    def test_clip_pixels_invalid_rectangle(self):
        """Test an invalid window drops every pixel."""
        assert clip_pixels({(1, 1), (7, 7)}, INVALID_RECT) == set()
