"""Illustrative 3D-to-grid projections.

These formulas exist to draw simple wireframes (cube, pyramid) on the grid
with the ordinary line rasterizer. They are classroom approximations, not a
rendering pipeline: there is no depth buffer, no camera model, and the two-
and three-point perspectives use fixed vanishing-point weights.

- Orthogonal: front, top, side and isometric views
- Cavalier: oblique projection, standard (45 deg, 1.0), cabinet (45 deg, 0.5)
  or custom receding angle and scale
- Perspective: one-, two- and three-point variants
"""

import logging
import math
from collections.abc import Callable, Sequence
from enum import Enum

from rasterlab.core.geometry import EPSILON, round_point
from rasterlab.domain import Line, Point, Point3D

logger = logging.getLogger(__name__)

Projector = Callable[[Point3D], Point | None]

# Vertex index pairs of the 12 cube edges for cube_vertices() ordering
CUBE_EDGES: tuple[tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


class OrthogonalView(str, Enum):
    """Orthogonal projection plane."""

    FRONT = "front"
    TOP = "top"
    SIDE = "side"
    ISOMETRIC = "isometric"


class CavalierType(str, Enum):
    """Oblique projection preset."""

    STANDARD = "standard"
    CABINET = "cabinet"
    CUSTOM = "custom"


class PerspectiveType(str, Enum):
    """Number of vanishing points."""

    ONE_POINT = "one_point"
    TWO_POINT = "two_point"
    THREE_POINT = "three_point"


class ProjectionMethod(str, Enum):
    """Projection family."""

    ORTHOGONAL = "orthogonal"
    CAVALIER = "cavalier"
    PERSPECTIVE = "perspective"


def orthogonal_projection(point: Point3D, view: OrthogonalView = OrthogonalView.FRONT) -> Point:
    """Project onto a coordinate plane, or isometrically."""
    if view is OrthogonalView.TOP:
        return round_point(point.x, point.z)
    if view is OrthogonalView.SIDE:
        return round_point(point.z, point.y)
    if view is OrthogonalView.ISOMETRIC:
        iso_x = (point.x - point.z) * math.cos(math.pi / 6)
        iso_y = point.y + (point.x + point.z) * math.sin(math.pi / 6)
        return round_point(iso_x, iso_y)
    return round_point(point.x, point.y)


def cavalier_parameters(
    kind: CavalierType,
    angle: float = 45.0,
    scale_factor: float = 1.0,
) -> tuple[float, float]:
    """Receding-axis angle (degrees) and depth scale for a preset."""
    if kind is CavalierType.CABINET:
        return 45.0, 0.5
    if kind is CavalierType.CUSTOM:
        return angle, scale_factor
    return 45.0, 1.0


def cavalier_projection(
    point: Point3D,
    kind: CavalierType = CavalierType.STANDARD,
    angle: float = 45.0,
    scale_factor: float = 1.0,
) -> Point:
    """Oblique projection; depth recedes along ``angle`` scaled by ``scale_factor``.

    ``angle`` and ``scale_factor`` only apply to :attr:`CavalierType.CUSTOM`.
    """
    angle, scale_factor = cavalier_parameters(kind, angle, scale_factor)
    radians = math.radians(angle)
    x = point.x + point.z * math.cos(radians) * scale_factor
    y = point.y + point.z * math.sin(radians) * scale_factor
    return round_point(x, y)


def _ratio(numerator: float, denominator: float) -> float | None:
    # None for points on or behind the viewer plane
    if denominator <= EPSILON:
        return None
    return numerator / denominator


def perspective_projection(
    point: Point3D,
    kind: PerspectiveType = PerspectiveType.ONE_POINT,
    viewer_distance: float = 30.0,
    fov: float = 60.0,
) -> Point | None:
    """Perspective projection with one, two or three vanishing points.

    A point whose depth puts any scale denominator at or below ``EPSILON``
    sits on or behind the viewer plane and has no image.

    Args:
        point: Point to project
        kind: Perspective variant
        viewer_distance: Distance from the viewer to the projection plane
        fov: Field of view in degrees (three-point only)

    Returns:
        Projected point rounded to the grid, or None when the point cannot be
        seen
    """
    d = viewer_distance
    x, y, z = point.x, point.y, point.z

    if kind is PerspectiveType.TWO_POINT:
        vanishing = d * 2
        scale_x = _ratio(vanishing, vanishing + z + x * 0.3)
        scale_y = _ratio(d, d + z)
        if scale_x is None or scale_y is None:
            return None
        px = x * scale_x + z * math.cos(math.pi / 4) * 0.5
        return round_point(px, y * scale_y)

    if kind is PerspectiveType.THREE_POINT:
        fov_rad = math.radians(fov)
        vanishing_h = d * 1.5
        vanishing_v = d * 2.0
        scale_x = _ratio(vanishing_h, vanishing_h + z + x * 0.2)
        scale_y = _ratio(vanishing_v, vanishing_v + z + abs(y) * 0.3)
        if scale_x is None or scale_y is None:
            return None
        px = x * scale_x + z * math.cos(fov_rad) * 0.3
        # Tall points lean back towards the vertical vanishing point
        lean = -y * 0.1 if y > 10 else y * 0.1
        py = y * scale_y + z * math.sin(fov_rad) * 0.2 + lean
        return round_point(px, py)

    scale = _ratio(d, d + z)
    if scale is None:
        return None
    return round_point(x * scale, y * scale)


def make_projector(
    method: ProjectionMethod,
    view: OrthogonalView = OrthogonalView.FRONT,
    cavalier: CavalierType = CavalierType.STANDARD,
    perspective: PerspectiveType = PerspectiveType.ONE_POINT,
    angle: float = 45.0,
    scale_factor: float = 1.0,
    viewer_distance: float = 30.0,
    fov: float = 60.0,
) -> Projector:
    """Bind a projection family and its parameters into a single callable."""
    if method is ProjectionMethod.CAVALIER:
        return lambda p: cavalier_projection(p, cavalier, angle, scale_factor)
    if method is ProjectionMethod.PERSPECTIVE:
        return lambda p: perspective_projection(p, perspective, viewer_distance, fov)
    return lambda p: orthogonal_projection(p, view)


def cube_vertices(center: Point3D, size: float) -> list[Point3D]:
    """Eight corners of an axis-aligned cube, back face first."""
    h = size / 2
    cx, cy, cz = center.x, center.y, center.z
    return [
        Point3D(cx - h, cy - h, cz - h),
        Point3D(cx + h, cy - h, cz - h),
        Point3D(cx + h, cy + h, cz - h),
        Point3D(cx - h, cy + h, cz - h),
        Point3D(cx - h, cy - h, cz + h),
        Point3D(cx + h, cy - h, cz + h),
        Point3D(cx + h, cy + h, cz + h),
        Point3D(cx - h, cy + h, cz + h),
    ]


def pyramid_edges(base_count: int) -> list[tuple[int, int]]:
    """Edges of a pyramid whose apex follows ``base_count`` base vertices."""
    ring = [(i, (i + 1) % base_count) for i in range(base_count)]
    spokes = [(i, base_count) for i in range(base_count)]
    return ring + spokes


def project_wireframe(
    vertices: Sequence[Point3D],
    edges: Sequence[tuple[int, int]],
    projector: Projector,
    offset: Point = Point(0, 0),
) -> list[Line]:
    """Project a wireframe into grid line shapes.

    Args:
        vertices: 3D vertices
        edges: Index pairs into ``vertices``
        projector: Point projection (see :func:`make_projector`)
        offset: Grid translation added after projection

    Returns:
        One Line per edge whose endpoints both have an image
    """
    shifted: list[Point | None] = []
    for vertex in vertices:
        p = projector(vertex)
        shifted.append(None if p is None else Point(p.x + offset.x, p.y + offset.y))

    lines: list[Line] = []
    for a, b in edges:
        start, end = shifted[a], shifted[b]
        if start is None or end is None:
            continue
        lines.append(Line(start, end))

    if len(lines) < len(edges):
        logger.debug("Dropped %d edges behind the viewer", len(edges) - len(lines))
    return lines


def cube_wireframe(
    center: Point3D,
    size: float,
    projector: Projector,
    offset: Point = Point(0, 0),
) -> list[Line]:
    """Projected edges of a cube."""
    return project_wireframe(cube_vertices(center, size), CUBE_EDGES, projector, offset)


def pyramid_wireframe(
    base: Sequence[Point3D],
    apex: Point3D,
    projector: Projector,
    offset: Point = Point(0, 0),
) -> list[Line]:
    """Projected edges of a pyramid with the given base polygon."""
    vertices = [*base, apex]
    return project_wireframe(vertices, pyramid_edges(len(base)), projector, offset)
