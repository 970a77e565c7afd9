"""Shape records for the raster scene.

Each shape carries only its defining geometric parameters. Shapes are
immutable values; rasterization and transforms produce new data and never
modify a shape in place.

- PixelShape: A single loose pixel
- Line: Segment between two endpoints
- Circle: Center and radius
- Ellipse: Center and axis-aligned radii
- Bezier: Ordered control points of an N-point curve
- Polyline: Open chain of vertices
- Polygon: Closed vertex cycle
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, ClassVar

from rasterlab.domain.primitives import Point
from rasterlab.exceptions import UnknownShapeError


def _as_points(points: Iterable[Point]) -> tuple[Point, ...]:
    return tuple(points)


@dataclass(frozen=True, slots=True)
class PixelShape:
    """A standalone pixel.

    Attributes:
        point: Grid position of the pixel
    """

    kind: ClassVar[str] = "pixel"

    point: Point

    def points(self) -> tuple[Point, ...]:
        """Return the defining points of the shape."""
        return (self.point,)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"type": self.kind, "p": self.point.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PixelShape":
        """Deserialize from dictionary."""
        return cls(point=Point.from_dict(data["p"]))


@dataclass(frozen=True, slots=True)
class Line:
    """A line segment.

    Attributes:
        p1: First endpoint
        p2: Second endpoint
    """

    kind: ClassVar[str] = "line"

    p1: Point
    p2: Point

    def points(self) -> tuple[Point, ...]:
        """Return the defining points of the shape."""
        return (self.p1, self.p2)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"type": self.kind, "p1": self.p1.to_dict(), "p2": self.p2.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Line":
        """Deserialize from dictionary."""
        return cls(p1=Point.from_dict(data["p1"]), p2=Point.from_dict(data["p2"]))


@dataclass(frozen=True, slots=True)
class Circle:
    """A circle outline.

    Attributes:
        center: Circle center
        radius: Radius in cells; zero or negative rasterizes to nothing
    """

    kind: ClassVar[str] = "circle"

    center: Point
    radius: int

    def points(self) -> tuple[Point, ...]:
        """Return the defining points of the shape."""
        return (self.center,)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"type": self.kind, "center": self.center.to_dict(), "radius": self.radius}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Circle":
        """Deserialize from dictionary."""
        return cls(center=Point.from_dict(data["center"]), radius=int(data["radius"]))


@dataclass(frozen=True, slots=True)
class Ellipse:
    """An axis-aligned ellipse outline.

    Attributes:
        center: Ellipse center
        radius_x: Horizontal semi-axis
        radius_y: Vertical semi-axis
    """

    kind: ClassVar[str] = "ellipse"

    center: Point
    radius_x: int
    radius_y: int

    def points(self) -> tuple[Point, ...]:
        """Return the defining points of the shape."""
        return (self.center,)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "type": self.kind,
            "center": self.center.to_dict(),
            "radius_x": self.radius_x,
            "radius_y": self.radius_y,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ellipse":
        """Deserialize from dictionary."""
        return cls(
            center=Point.from_dict(data["center"]),
            radius_x=int(data["radius_x"]),
            radius_y=int(data["radius_y"]),
        )


@dataclass(frozen=True, slots=True)
class Bezier:
    """A Bezier curve of arbitrary degree.

    Attributes:
        control_points: Ordered control points; degree is len - 1
    """

    kind: ClassVar[str] = "bezier"

    control_points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "control_points", _as_points(self.control_points))

    def points(self) -> tuple[Point, ...]:
        """Return the defining points of the shape."""
        return self.control_points

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"type": self.kind, "vertices": [p.to_dict() for p in self.control_points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bezier":
        """Deserialize from dictionary."""
        return cls(control_points=tuple(Point.from_dict(p) for p in data["vertices"]))


@dataclass(frozen=True, slots=True)
class Polyline:
    """An open chain of line segments.

    Attributes:
        vertices: Ordered vertices; consecutive pairs form segments
    """

    kind: ClassVar[str] = "polyline"

    vertices: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", _as_points(self.vertices))

    def points(self) -> tuple[Point, ...]:
        """Return the defining points of the shape."""
        return self.vertices

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"type": self.kind, "vertices": [p.to_dict() for p in self.vertices]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polyline":
        """Deserialize from dictionary."""
        return cls(vertices=tuple(Point.from_dict(p) for p in data["vertices"]))


@dataclass(frozen=True, slots=True)
class Polygon:
    """A closed polygon; the last vertex connects back to the first.

    Attributes:
        vertices: Ordered vertex cycle (may be non-convex)
    """

    kind: ClassVar[str] = "polygon"

    vertices: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", _as_points(self.vertices))

    def points(self) -> tuple[Point, ...]:
        """Return the defining points of the shape."""
        return self.vertices

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"type": self.kind, "vertices": [p.to_dict() for p in self.vertices]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary."""
        return cls(vertices=tuple(Point.from_dict(p) for p in data["vertices"]))


Shape = PixelShape | Line | Circle | Ellipse | Bezier | Polyline | Polygon

SHAPE_TYPES: dict[str, type[Shape]] = {
    cls.kind: cls
    for cls in (PixelShape, Line, Circle, Ellipse, Bezier, Polyline, Polygon)
}


def shape_from_dict(data: dict[str, Any]) -> Shape:
    """Deserialize any shape from its tagged dictionary form.

    Args:
        data: Dictionary with a ``type`` tag and the shape's fields

    Returns:
        The matching shape instance

    Raises:
        UnknownShapeError: If the ``type`` tag is missing or not recognized
    """
    kind = str(data.get("type", ""))
    shape_cls = SHAPE_TYPES.get(kind)
    if shape_cls is None:
        raise UnknownShapeError(kind)
    return shape_cls.from_dict(data)
