"""Tests for domain models to verify they work correctly."""

import pytest

from rasterlab.domain import (
    Bezier,
    Circle,
    ClipRectangle,
    Ellipse,
    Line,
    PixelShape,
    Point,
    Polygon,
    Polyline,
    Scene,
    SceneMode,
    shape_from_dict,
)
from rasterlab.exceptions import UnknownShapeError


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(3, 7)
        assert p.x == 3
        assert p.y == 7

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(3, 7).to_tuple() == (3, 7)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(4, 9)
        assert Point.from_dict(p1.to_dict()) == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(1, 2)
        with pytest.raises(AttributeError):
            p.x = 5  # type: ignore

    def test_point_hashable(self) -> None:
        """Test that equal points collapse in a set."""
        assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2


class TestClipRectangle:
    """Tests for ClipRectangle class."""

    def test_valid_rectangle(self) -> None:
        """Test ordered bounds are valid."""
        assert ClipRectangle(0, 0, 19, 19).is_valid

    def test_single_cell_rectangle_is_valid(self) -> None:
        """Test a degenerate one-cell window is still valid."""
        assert ClipRectangle(5, 5, 5, 5).is_valid

    def test_inverted_rectangle_is_invalid(self) -> None:
        """Test xmin > xmax is invalid."""
        assert not ClipRectangle(10, 0, 5, 19).is_valid
        assert not ClipRectangle(0, 10, 19, 5).is_valid

    def test_contains_is_inclusive(self) -> None:
        """Test that the bounds themselves are inside."""
        rect = ClipRectangle(2, 3, 8, 9)
        assert rect.contains(2, 3)
        assert rect.contains(8, 9)
        assert not rect.contains(1, 3)
        assert not rect.contains(8, 10)

    def test_serialization(self) -> None:
        """Test rectangle serialization and deserialization."""
        rect = ClipRectangle(1, 2, 3, 4)
        assert ClipRectangle.from_dict(rect.to_dict()) == rect
        assert rect.to_tuple() == (1, 2, 3, 4)


class TestShapes:
    """Tests for shape records."""

    def test_vertices_become_tuples(self) -> None:
        """Test list input is stored as an immutable tuple."""
        poly = Polygon([Point(0, 0), Point(5, 0), Point(5, 5)])
        assert isinstance(poly.vertices, tuple)
        assert len(poly.points()) == 3

    def test_shape_kinds(self) -> None:
        """Test every shape carries its type tag."""
        assert PixelShape(Point(0, 0)).kind == "pixel"
        assert Line(Point(0, 0), Point(1, 1)).kind == "line"
        assert Circle(Point(0, 0), 3).kind == "circle"
        assert Ellipse(Point(0, 0), 3, 2).kind == "ellipse"
        assert Bezier((Point(0, 0), Point(1, 1))).kind == "bezier"
        assert Polyline((Point(0, 0), Point(1, 1))).kind == "polyline"
        assert Polygon((Point(0, 0), Point(1, 1), Point(2, 0))).kind == "polygon"

    @pytest.mark.parametrize(
        "shape",
        [
            PixelShape(Point(4, 4)),
            Line(Point(0, 0), Point(10, 5)),
            Circle(Point(10, 10), 4),
            Ellipse(Point(10, 10), 5, 3),
            Bezier((Point(0, 0), Point(5, 10), Point(10, 0))),
            Polyline((Point(1, 1), Point(5, 1), Point(5, 5))),
            Polygon((Point(2, 2), Point(8, 2), Point(5, 8))),
        ],
    )
    def test_tagged_dict_decoding(self, shape) -> None:
        """Test shapes decode from their tagged dictionary form."""
        data = shape.to_dict()
        assert data["type"] == shape.kind
        assert shape_from_dict(data) == shape

    def test_unknown_shape_tag(self) -> None:
        """Test an unknown tag raises UnknownShapeError."""
        with pytest.raises(UnknownShapeError, match="hexagon"):
            shape_from_dict({"type": "hexagon"})

    def test_missing_shape_tag(self) -> None:
        """Test a missing tag raises UnknownShapeError."""
        with pytest.raises(UnknownShapeError):
            shape_from_dict({"p1": {"x": 0, "y": 0}})

    def test_shape_immutable(self) -> None:
        """Test shapes cannot be modified in place."""
        circle = Circle(Point(5, 5), 2)
        with pytest.raises(AttributeError):
            circle.radius = 3  # type: ignore


class TestScene:
    """Tests for Scene class."""

    def test_empty_scene_defaults(self) -> None:
        """Test default scene state."""
        scene = Scene()
        assert scene.shapes == ()
        assert scene.clip_rect is None
        assert not scene.clipping_enabled
        assert scene.mode is SceneMode.PIXEL

    def test_active_clip_requires_enabled(self) -> None:
        """Test that a defined window only applies when clipping is on."""
        rect = ClipRectangle(0, 0, 9, 9)
        assert Scene(clip_rect=rect).active_clip is None
        assert Scene(clip_rect=rect, clipping_enabled=True).active_clip == rect

    def test_with_shape_returns_new_scene(self) -> None:
        """Test appending a shape leaves the original scene untouched."""
        scene = Scene()
        updated = scene.with_shape(Line(Point(0, 0), Point(3, 3)))
        assert len(scene.shapes) == 0
        assert len(updated.shapes) == 1

    def test_toggle_pixel_adds_then_removes(self) -> None:
        """Test toggling the same cell twice restores the scene."""
        scene = Scene()
        on = scene.toggle_pixel(Point(3, 4))
        assert on.shapes == (PixelShape(Point(3, 4)),)
        off = on.toggle_pixel(Point(3, 4))
        assert off.shapes == ()

    def test_loose_pixels(self) -> None:
        """Test loose pixels are reported with their scene index."""
        scene = Scene(
            shapes=(
                Circle(Point(5, 5), 2),
                PixelShape(Point(5, 5)),
                Line(Point(0, 0), Point(1, 1)),
                PixelShape(Point(9, 9)),
            )
        )
        assert [idx for idx, _ in scene.loose_pixels()] == [1, 3]

    def test_scene_serialization(self) -> None:
        """Test scene serialization and deserialization."""
        scene = Scene(
            shapes=(Line(Point(0, 0), Point(4, 4)), PixelShape(Point(2, 3))),
            clip_rect=ClipRectangle(1, 1, 8, 8),
            clipping_enabled=True,
            mode=SceneMode.LINE_CLIPPING,
        )
        data = scene.to_dict()
        assert data["mode"] == "line_clipping"
        assert Scene.from_dict(data) == scene

    def test_scene_from_minimal_dict(self) -> None:
        """Test an empty mapping is an empty scene."""
        assert Scene.from_dict({}) == Scene()
