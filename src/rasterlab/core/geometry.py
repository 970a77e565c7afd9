"""Geometric helpers and containment predicates.

This module provides the small numeric utilities shared by the rasterizers,
clippers and transforms:
- Half-up rounding to grid coordinates
- Vertex centroid and bounding boxes
- Point-in-circle, point-in-ellipse and point-in-polygon tests
- Distance from a point to a finite segment

All functions are pure and stateless.
"""

import math
from collections.abc import Sequence

from rasterlab.domain import Circle, Ellipse, Line, Point

EPSILON = 1e-9


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards positive infinity.

    Python's built-in ``round`` uses banker's rounding, which would make
    ``2.5`` and ``3.5`` round in different directions. Grid coordinates use
    the conventional half-up rule everywhere.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return math.floor(value + 0.5)


def round_point(x: float, y: float) -> Point:
    """Round a real-valued coordinate pair to a grid point."""
    return Point(round_half_up(x), round_half_up(y))


def in_grid(x: int, y: int, grid_size: int | None) -> bool:
    """Check that a coordinate lies in ``[0, grid_size)`` on both axes.

    A ``grid_size`` of None accepts every coordinate.
    """
    if grid_size is None:
        return True
    return 0 <= x < grid_size and 0 <= y < grid_size


def centroid(points: Sequence[Point]) -> Point:
    """Rounded arithmetic mean of a vertex list.

    Args:
        points: Non-empty list of vertices

    Returns:
        Centroid rounded to the grid

    Raises:
        ValueError: If points is empty
    """
    if not points:
        raise ValueError("Cannot compute centroid of an empty vertex list")
    cx = sum(p.x for p in points) / len(points)
    cy = sum(p.y for p in points) / len(points)
    return round_point(cx, cy)


def bounding_box(points: Sequence[Point], padding: int = 0) -> tuple[int, int, int, int]:
    """Axis-aligned bounds of a vertex list, optionally expanded.

    Args:
        points: Non-empty list of vertices
        padding: Cells added on every side

    Returns:
        Tuple of (min_x, min_y, max_x, max_y)

    Raises:
        ValueError: If points is empty
    """
    if not points:
        raise ValueError("Cannot compute bounding box of an empty vertex list")
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return (min(xs) - padding, min(ys) - padding, max(xs) + padding, max(ys) + padding)


def distance_to_segment(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Distance from a point to the closest point on a finite segment.

    Projects the point onto the infinite line, then clamps the projection
    parameter to [0, 1] so the result is measured against the segment.

    Args:
        point: The point to measure from
        seg_start: Start point of the segment
        seg_end: End point of the segment

    Returns:
        Euclidean distance to the segment

    Examples:
        >>> distance_to_segment(Point(1, 1), Point(0, 0), Point(2, 0))
        1.0
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    # Zero-length segment degenerates to point distance
    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq == 0:
        return math.hypot(point.x - seg_start.x, point.y - seg_start.y)

    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest_x = seg_start.x + t * dx
    nearest_y = seg_start.y + t * dy
    return math.hypot(point.x - nearest_x, point.y - nearest_y)


def is_inside_circle(point: Point, circle: Circle) -> bool:
    """Whether a point lies within a circle (boundary inclusive)."""
    distance = math.hypot(point.x - circle.center.x, point.y - circle.center.y)
    return distance <= circle.radius


def is_inside_ellipse(point: Point, ellipse: Ellipse) -> bool:
    """Whether a point lies within an axis-aligned ellipse (boundary inclusive).

    Degenerate radii contain nothing.
    """
    if ellipse.radius_x <= 0 or ellipse.radius_y <= 0:
        return False
    nx = (point.x - ellipse.center.x) / ellipse.radius_x
    ny = (point.y - ellipse.center.y) / ellipse.radius_y
    return nx * nx + ny * ny <= 1.0


def is_inside_polygon(point: Point, vertices: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting.

    Casts a horizontal ray from the point to the right and counts crossings
    with polygon edges. Odd count = inside, even = outside (even-odd rule, so
    non-convex and self-intersecting polygons are handled).

    Args:
        point: The point to test
        vertices: Polygon vertex cycle

    Returns:
        True if point is inside, False otherwise or if fewer than 3 vertices

    Examples:
        >>> square = [Point(0, 0), Point(20, 0), Point(20, 20), Point(0, 20)]
        >>> is_inside_polygon(Point(10, 10), square)
        True
        >>> is_inside_polygon(Point(25, 10), square)
        False
    """
    n = len(vertices)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = vertices[i].x, vertices[i].y
        xj, yj = vertices[j].x, vertices[j].y

        # Edge straddles the ray's row; yj != yi is implied
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def is_near_line(point: Point, line: Line, tolerance: float = 1.0) -> bool:
    """Whether a point lies within ``tolerance`` of a line segment."""
    return distance_to_segment(point, line.p1, line.p2) <= tolerance
