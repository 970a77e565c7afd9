"""2D affine transforms for points and shapes.

Supports rotation about a pivot, integer translation and per-axis scaling
about a fixed point. Compound shapes apply the point transform to each of
their defining points; results are rounded half-up to the grid.

Known simplifications:
- A circle scaled non-uniformly stays a circle whose radius is scaled by the
  average of the two factors.
- Ellipses stay axis-aligned: rotation moves only the center, scaling
  multiplies each radius by its own axis factor.
"""

import math
from collections.abc import Callable
from dataclasses import replace

from rasterlab.core.geometry import centroid, round_half_up, round_point
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
    Shape,
    TransformParams,
    Translation,
)
from rasterlab.exceptions import TransformError


def rotate_point(point: Point, angle_degrees: float, pivot: Point) -> Point:
    """Rotate a point about a pivot.

    Args:
        point: Point to rotate
        angle_degrees: Angle in degrees
        pivot: Center of rotation

    Returns:
        Rotated point rounded to the grid
    """
    radians = math.radians(angle_degrees)
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)

    tx = point.x - pivot.x
    ty = point.y - pivot.y

    rx = tx * cos_a - ty * sin_a
    ry = tx * sin_a + ty * cos_a
    return round_point(rx + pivot.x, ry + pivot.y)


def translate_point(point: Point, dx: float, dy: float) -> Point:
    """Offset a point."""
    return round_point(point.x + dx, point.y + dy)


def scale_point(point: Point, scale_x: float, scale_y: float, fixed_point: Point) -> Point:
    """Scale a point's offset from ``fixed_point`` independently per axis."""
    sx = (point.x - fixed_point.x) * scale_x
    sy = (point.y - fixed_point.y) * scale_y
    return round_point(sx + fixed_point.x, sy + fixed_point.y)


def default_anchor(shape: Shape) -> Point:
    """Anchor used when a rotation or scale omits one.

    - Pixel: the pixel itself
    - Line: rounded midpoint
    - Circle / Ellipse: own center
    - Bezier / Polyline / Polygon: rounded vertex centroid

    Raises:
        TransformError: If the shape has no defining points
    """
    if isinstance(shape, PixelShape):
        return shape.point
    if isinstance(shape, Line):
        return round_point((shape.p1.x + shape.p2.x) / 2, (shape.p1.y + shape.p2.y) / 2)
    if isinstance(shape, (Circle, Ellipse)):
        return shape.center

    points = shape.points()
    if not points:
        raise TransformError(f"{shape.kind} has no vertices to anchor on")
    return centroid(points)


def _map_points(shape: Shape, fn: Callable[[Point], Point]) -> Shape:
    if isinstance(shape, PixelShape):
        return PixelShape(fn(shape.point))
    if isinstance(shape, Line):
        return Line(fn(shape.p1), fn(shape.p2))
    if isinstance(shape, (Circle, Ellipse)):
        return replace(shape, center=fn(shape.center))
    if isinstance(shape, Bezier):
        return Bezier(tuple(fn(p) for p in shape.control_points))
    if isinstance(shape, Polyline):
        return Polyline(tuple(fn(p) for p in shape.vertices))
    if isinstance(shape, Polygon):
        return Polygon(tuple(fn(p) for p in shape.vertices))
    raise TransformError(f"unsupported shape {type(shape).__name__}")


def rotate(shape: Shape, angle_degrees: float, pivot: Point | None = None) -> Shape:
    """Rotate a shape about ``pivot`` (default: :func:`default_anchor`)."""
    anchor = pivot if pivot is not None else default_anchor(shape)
    return _map_points(shape, lambda p: rotate_point(p, angle_degrees, anchor))


def translate(shape: Shape, dx: int, dy: int) -> Shape:
    """Translate a shape by ``(dx, dy)``."""
    return _map_points(shape, lambda p: translate_point(p, dx, dy))


def scale(
    shape: Shape,
    scale_x: float,
    scale_y: float,
    fixed_point: Point | None = None,
) -> Shape:
    """Scale a shape about ``fixed_point`` (default: :func:`default_anchor`).

    Circle radii use the average factor; ellipse radii use their own axis.
    Radii are kept non-negative, since a mirrored outline is the same outline.
    """
    anchor = fixed_point if fixed_point is not None else default_anchor(shape)
    scaled = _map_points(shape, lambda p: scale_point(p, scale_x, scale_y, anchor))

    if isinstance(scaled, Circle):
        avg_scale = (scale_x + scale_y) / 2
        return replace(scaled, radius=abs(round_half_up(scaled.radius * avg_scale)))
    if isinstance(scaled, Ellipse):
        return replace(
            scaled,
            radius_x=abs(round_half_up(scaled.radius_x * scale_x)),
            radius_y=abs(round_half_up(scaled.radius_y * scale_y)),
        )
    return scaled


def resolve_anchor(params: TransformParams, shape: Shape) -> TransformParams:
    """Fill in a missing pivot / fixed point from ``shape``.

    Used when the same transform must be applied to several shapes around a
    single shared anchor.
    """
    if isinstance(params, Rotation) and params.pivot is None:
        return replace(params, pivot=default_anchor(shape))
    if isinstance(params, Scaling) and params.fixed_point is None:
        return replace(params, fixed_point=default_anchor(shape))
    return params


def apply_transform(shape: Shape, params: TransformParams) -> Shape:
    """Apply a Rotation, Translation or Scaling record to a shape."""
    if isinstance(params, Rotation):
        return rotate(shape, params.angle_degrees, params.pivot)
    if isinstance(params, Translation):
        return translate(shape, params.dx, params.dy)
    if isinstance(params, Scaling):
        return scale(shape, params.scale_x, params.scale_y, params.fixed_point)
    raise TransformError(f"unsupported transform {type(params).__name__}")
