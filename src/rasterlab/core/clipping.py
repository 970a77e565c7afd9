"""Clipping against an axis-aligned rectangle.

This module implements the classical clipping algorithms:
- Cohen-Sutherland: line segments, using 4-bit region outcodes
- Sutherland-Hodgman: polygons, one half-plane at a time
- Point clipping for already rasterized pixels

Coordinates are real-valued during clipping and rounded half-up to the grid
on output. The y axis grows downwards, so ``ymin`` is the top edge of the
window. An invalid rectangle (``xmin > xmax`` or ``ymin > ymax``) intersects
nothing.
"""

import logging
from collections.abc import Iterable, Sequence
from enum import Enum

from rasterlab.core.geometry import EPSILON, round_half_up, round_point
from rasterlab.domain import ClipRectangle, PixelSet, Point

logger = logging.getLogger(__name__)

# Cohen-Sutherland region codes
INSIDE = 0b0000
LEFT = 0b0001
RIGHT = 0b0010
BOTTOM = 0b0100  # y < ymin
TOP = 0b1000  # y > ymax

# Each iteration moves one endpoint onto a boundary, clearing at least one bit
_MAX_CLIP_ITERATIONS = 16


def compute_outcode(x: float, y: float, rect: ClipRectangle) -> int:
    """Compute the Cohen-Sutherland region code of a point.

    Args:
        x: X coordinate
        y: Y coordinate
        rect: Clip window

    Returns:
        Bitwise OR of LEFT/RIGHT/BOTTOM/TOP for each violated bound
    """
    code = INSIDE
    if x < rect.xmin:
        code |= LEFT
    elif x > rect.xmax:
        code |= RIGHT
    if y < rect.ymin:
        code |= BOTTOM
    elif y > rect.ymax:
        code |= TOP
    return code


def clip_line(p1: Point, p2: Point, rect: ClipRectangle) -> tuple[Point, Point] | None:
    """Clip a segment with the Cohen-Sutherland algorithm.

    Trivially accepts when both outcodes are zero and trivially rejects when
    they share a bit. Otherwise the outside endpoint is moved to the violated
    boundary, chosen with precedence TOP, BOTTOM, RIGHT, LEFT, and the loop
    repeats. A near-zero denominator keeps the endpoint's other coordinate
    instead of dividing, so no non-finite value can appear.

    Args:
        p1: First endpoint
        p2: Second endpoint
        rect: Clip window

    Returns:
        Clipped endpoints rounded to the grid, or None when the segment lies
        entirely outside the window

    Examples:
        >>> rect = ClipRectangle(0, 0, 19, 19)
        >>> clip_line(Point(-5, 10), Point(25, 10), rect)
        (Point(x=0, y=10), Point(x=19, y=10))
    """
    if not rect.is_valid:
        logger.debug("Line clip skipped: invalid clip rectangle %s", rect.to_tuple())
        return None

    x1, y1 = float(p1.x), float(p1.y)
    x2, y2 = float(p2.x), float(p2.y)
    code1 = compute_outcode(x1, y1, rect)
    code2 = compute_outcode(x2, y2, rect)

    for _ in range(_MAX_CLIP_ITERATIONS):
        if code1 == INSIDE and code2 == INSIDE:
            return round_point(x1, y1), round_point(x2, y2)
        if code1 & code2:
            return None

        code_out = code1 if code1 != INSIDE else code2
        dx = x2 - x1
        dy = y2 - y1

        if code_out & TOP:
            y = float(rect.ymax)
            x = x1 + dx * (y - y1) / dy if abs(dy) > EPSILON else x1
        elif code_out & BOTTOM:
            y = float(rect.ymin)
            x = x1 + dx * (y - y1) / dy if abs(dy) > EPSILON else x1
        elif code_out & RIGHT:
            x = float(rect.xmax)
            y = y1 + dy * (x - x1) / dx if abs(dx) > EPSILON else y1
        else:
            x = float(rect.xmin)
            y = y1 + dy * (x - x1) / dx if abs(dx) > EPSILON else y1

        if code_out == code1:
            x1, y1 = x, y
            code1 = compute_outcode(x1, y1, rect)
        else:
            x2, y2 = x, y
            code2 = compute_outcode(x2, y2, rect)

    logger.warning(
        "Line clip did not converge for %s-%s against %s",
        p1.to_tuple(), p2.to_tuple(), rect.to_tuple(),
    )
    return None


class ClipEdge(Enum):
    """Window edge used as a Sutherland-Hodgman half-plane."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


# Fixed pass order
CLIP_EDGE_ORDER: tuple[ClipEdge, ...] = (
    ClipEdge.TOP,
    ClipEdge.BOTTOM,
    ClipEdge.LEFT,
    ClipEdge.RIGHT,
)

_Vertex = tuple[float, float]


def _is_inside(vertex: _Vertex, edge: ClipEdge, rect: ClipRectangle) -> bool:
    x, y = vertex
    if edge is ClipEdge.TOP:
        return y >= rect.ymin
    if edge is ClipEdge.BOTTOM:
        return y <= rect.ymax
    if edge is ClipEdge.LEFT:
        return x >= rect.xmin
    return x <= rect.xmax


def _intersection(p1: _Vertex, p2: _Vertex, edge: ClipEdge, rect: ClipRectangle) -> _Vertex:
    """Intersection of segment p1-p2 with the line carrying ``edge``.

    Vertical and horizontal segments are special-cased so the parametric
    form never divides by zero.
    """
    x1, y1 = p1
    dx = p2[0] - x1
    dy = p2[1] - y1

    if abs(dx) <= EPSILON:
        if edge is ClipEdge.TOP:
            return (x1, float(rect.ymin))
        if edge is ClipEdge.BOTTOM:
            return (x1, float(rect.ymax))
        return (x1, y1)

    if abs(dy) <= EPSILON:
        if edge is ClipEdge.LEFT:
            return (float(rect.xmin), y1)
        if edge is ClipEdge.RIGHT:
            return (float(rect.xmax), y1)
        return (x1, y1)

    if edge is ClipEdge.LEFT:
        return (float(rect.xmin), y1 + dy * (rect.xmin - x1) / dx)
    if edge is ClipEdge.RIGHT:
        return (float(rect.xmax), y1 + dy * (rect.xmax - x1) / dx)
    if edge is ClipEdge.TOP:
        return (x1 + dx * (rect.ymin - y1) / dy, float(rect.ymin))
    return (x1 + dx * (rect.ymax - y1) / dy, float(rect.ymax))


def _clip_against_edge(
    polygon: list[_Vertex],
    edge: ClipEdge,
    rect: ClipRectangle,
    round_each_pass: bool,
) -> list[_Vertex]:
    """Run one Sutherland-Hodgman pass.

    Walks each edge (previous -> current) cyclically. A single vertex pairs
    with itself, so it is kept when inside and dropped otherwise.
    """
    output: list[_Vertex] = []
    n = len(polygon)

    for i in range(n):
        prev = polygon[i - 1]
        cur = polygon[i]
        prev_inside = _is_inside(prev, edge, rect)
        cur_inside = _is_inside(cur, edge, rect)

        if prev_inside != cur_inside:
            ix, iy = _intersection(prev, cur, edge, rect)
            if round_each_pass:
                ix, iy = float(round_half_up(ix)), float(round_half_up(iy))
            output.append((ix, iy))
        if cur_inside:
            output.append(cur)

    return output


def clip_polygon(
    vertices: Sequence[Point],
    rect: ClipRectangle,
    round_each_pass: bool = True,
) -> list[Point]:
    """Clip a polygon with the Sutherland-Hodgman algorithm.

    The polygon is clipped successively against the top, bottom, left and
    right half-planes of the window. The output may be empty, may contain
    more vertices than the input, and keeps the input vertex order when the
    polygon lies entirely inside the window.

    ``round_each_pass`` controls where intersections are snapped to the grid.
    When True, each pass rounds the intersections it creates, so a vertex
    near a corner can be rounded twice. When False, vertices stay real-valued
    through all four passes and are rounded once at the end.

    Args:
        vertices: Polygon vertex cycle
        rect: Clip window
        round_each_pass: Snap intersections after every pass

    Returns:
        Clipped vertex cycle; empty for fewer than 3 input vertices, an
        invalid window, or a polygon entirely outside the window
    """
    if len(vertices) < 3 or not rect.is_valid:
        return []

    polygon: list[_Vertex] = [(float(v.x), float(v.y)) for v in vertices]
    for edge in CLIP_EDGE_ORDER:
        if not polygon:
            break
        polygon = _clip_against_edge(polygon, edge, rect, round_each_pass)

    if not polygon:
        logger.debug("Polygon with %d vertices clipped away entirely", len(vertices))

    return [round_point(x, y) for x, y in polygon]


def clip_point(point: Point, rect: ClipRectangle) -> Point | None:
    """Return the point if it lies inside the window, None otherwise."""
    if rect.is_valid and rect.contains(point.x, point.y):
        return point
    return None


def clip_pixels(pixels: Iterable[tuple[int, int]], rect: ClipRectangle) -> PixelSet:
    """Keep only the pixels inside the window."""
    if not rect.is_valid:
        return set()
    return {(x, y) for x, y in pixels if rect.contains(x, y)}
