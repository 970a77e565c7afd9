"""Scan-conversion algorithms.

This module converts continuous shape descriptions into grid pixels:
- Bresenham line (all eight octants, integer error term)
- Midpoint circle (eight-way symmetry)
- Midpoint ellipse (two regions, four-way symmetry)
- Generic Bezier curve (Bernstein polynomial form, any degree)

Every rasterizer takes a ``grid_size`` and silently drops pixels outside
``[0, grid_size)``; passing None disables that filter. Results are sets, so
they never contain duplicates. Rectangle clipping is not done here; see
``rasterlab.core.clipping``.

With a grid, lines, circles and ellipses longer than ``WALK_LIMIT`` cells
only visit the part of the shape that can land on the grid, so the cost
follows the grid size rather than the shape size.
"""

import math
from collections.abc import Iterator, Sequence

from rasterlab.config.settings import DEFAULT_BEZIER_STEPS, DEFAULT_GRID_SIZE
from rasterlab.core.clipping import clip_line
from rasterlab.core.geometry import in_grid, round_half_up
from rasterlab.domain import ClipRectangle, Pixel, PixelSet, Point

WALK_LIMIT = 4096

# Columns walked step by step before an ellipse's region change
_TRANSITION_STEPS = 16


def line_points(p1: Point, p2: Point) -> list[Pixel]:
    """Ordered Bresenham pixels from ``p1`` to ``p2``.

    The error recurrence uses only integer additions and comparisons. The
    walk always starts from the lexicographically smaller endpoint and the
    result is reversed when ``p1`` is the larger one, so swapping the
    endpoints yields the same pixels in reverse order.

    Args:
        p1: First endpoint
        p2: Second endpoint

    Returns:
        Pixels along the segment, inclusive of both endpoints

    Examples:
        >>> line_points(Point(0, 0), Point(3, 2))
        [(0, 0), (1, 1), (2, 1), (3, 2)]
    """
    swapped = (p2.x, p2.y) < (p1.x, p1.y)
    start, end = (p2, p1) if swapped else (p1, p2)

    x, y = start.x, start.y
    dx = abs(end.x - x)
    dy = -abs(end.y - y)
    sx = 1 if x < end.x else -1
    sy = 1 if y < end.y else -1
    err = dx + dy

    points: list[Pixel] = []
    while True:
        points.append((x, y))
        if x == end.x and y == end.y:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy

    if swapped:
        points.reverse()
    return points


def rasterize_line(
    p1: Point,
    p2: Point,
    grid_size: int | None = DEFAULT_GRID_SIZE,
) -> PixelSet:
    """Rasterize a segment with Bresenham's algorithm.

    A segment longer than ``WALK_LIMIT`` cells is first clipped to the grid
    window, so only its visible part is walked. Endpoints are put in
    canonical order before clipping to keep the result symmetric.

    Args:
        p1: First endpoint
        p2: Second endpoint
        grid_size: Grid extent for the validity filter (None = no filter)

    Returns:
        Set of in-grid pixels on the segment
    """
    if grid_size is not None and max(abs(p2.x - p1.x), abs(p2.y - p1.y)) > WALK_LIMIT:
        start, end = (p2, p1) if (p2.x, p2.y) < (p1.x, p1.y) else (p1, p2)
        clipped = clip_line(start, end, ClipRectangle(0, 0, grid_size - 1, grid_size - 1))
        if clipped is None:
            return set()
        p1, p2 = clipped
    return {(x, y) for x, y in line_points(p1, p2) if in_grid(x, y, grid_size)}


def _window_offsets(
    centers: Sequence[int], grid_size: int, low: int, high: int
) -> list[int]:
    """Offsets in ``[low, high]`` that put ``c + k`` or ``c - k`` on the grid."""
    offsets: set[int] = set()
    for c in centers:
        for first, last in ((-c, grid_size - 1 - c), (c - grid_size + 1, c)):
            offsets.update(range(max(first, low), min(last, high) + 1))
    return sorted(offsets)


def _circle_octants(cx: int, cy: int, x: int, y: int) -> tuple[Pixel, ...]:
    return (
        (cx + x, cy + y),
        (cx - x, cy + y),
        (cx + x, cy - y),
        (cx - x, cy - y),
        (cx + y, cy + x),
        (cx - y, cy + x),
        (cx + y, cy - x),
        (cx - y, cy - x),
    )


def _circle_decision(x: int, y: int, radius: int) -> int:
    """Decision value the midpoint walk holds when it stands at ``(x, y)``."""
    return 2 * x * x + 8 * x + 2 * y * y - 6 * y + 3 + 4 * radius - 2 * radius * radius


def _circle_row(x: int, radius: int) -> int:
    """Row the midpoint walk reaches at column ``x``.

    The walk steps down exactly when the decision value turns positive, so
    away from the 45 degree end its row at ``x`` is one less than the lowest
    row where the decision at ``x - 1`` is positive.
    """
    if x == 0:
        return radius
    column = x - 1
    constant = _circle_decision(column, 0, radius)
    y = (3 + math.isqrt(max(9 - 2 * constant, 0))) // 2
    while _circle_decision(column, y, radius) > 0:
        y -= 1
    while _circle_decision(column, y, radius) <= 0:
        y += 1
    return y - 1


def _circle_window(cx: int, cy: int, radius: int, grid_size: int) -> Iterator[Pixel]:
    """Octant positions of a large circle that can land on the grid."""
    # Last column where the walk drops at most one row per step
    safe = math.isqrt((radius - 1) ** 2 // 2) - 8

    yield from _circle_octants(cx, cy, 0, radius)
    for x in _window_offsets((cx, cy), grid_size, 1, safe - 1):
        yield from _circle_octants(cx, cy, x, _circle_row(x, radius))

    x = safe
    y = _circle_row(safe, radius)
    yield from _circle_octants(cx, cy, x, y)
    while y >= x:
        if _circle_decision(x, y, radius) > 0:
            y -= 1
        x += 1
        yield from _circle_octants(cx, cy, x, y)


def rasterize_circle(
    center: Point,
    radius: int,
    grid_size: int | None = DEFAULT_GRID_SIZE,
) -> PixelSet:
    """Rasterize a circle outline with the midpoint (Bresenham) algorithm.

    Tracks one octant with the decision parameter ``d = 3 - 2r`` and mirrors
    every step into all eight symmetric positions, including the starting
    point ``(0, r)``. Above ``WALK_LIMIT`` the row of each column is solved
    directly and only columns that can reach the grid are visited.

    Args:
        center: Circle center
        radius: Radius in cells
        grid_size: Grid extent for the validity filter (None = no filter)

    Returns:
        Set of outline pixels; empty when ``radius <= 0``
    """
    if radius <= 0:
        return set()

    cx, cy = center.x, center.y
    if grid_size is not None and radius > WALK_LIMIT:
        return {
            (px, py) for px, py in _circle_window(cx, cy, radius, grid_size)
            if in_grid(px, py, grid_size)
        }

    x = 0
    y = radius
    d = 3 - 2 * radius

    raw: list[Pixel] = list(_circle_octants(cx, cy, x, y))

    while y >= x:
        x += 1
        if d > 0:
            y -= 1
            d = d + 4 * (x - y) + 10
        else:
            d = d + 4 * x + 6
        raw.extend(_circle_octants(cx, cy, x, y))

    return {(px, py) for px, py in raw if in_grid(px, py, grid_size)}


def _ellipse_quadrants(cx: int, cy: int, x: int, y: int) -> tuple[Pixel, ...]:
    return (
        (cx + x, cy + y),
        (cx - x, cy + y),
        (cx + x, cy - y),
        (cx - x, cy - y),
    )


def _ellipse_row(x: int, rx2: int, ry2: int) -> int:
    """Highest row whose region 1 midpoint at column ``x`` is inside."""
    bound = 4 * ry2 * (rx2 - x * x)
    if bound <= rx2:
        return 0
    return (math.isqrt((bound - 1) // rx2) + 1) // 2


def _ellipse_column(y: int, rx2: int, ry2: int) -> int:
    """Lowest column whose region 2 midpoint at row ``y`` is outside."""
    bound = 4 * rx2 * (ry2 - y * y)
    q = math.isqrt(bound // ry2) if bound >= 0 else -1
    return (q + 1) // 2


def _ellipse_window(
    cx: int, cy: int, radius_x: int, radius_y: int, grid_size: int
) -> Iterator[Pixel]:
    """Quadrant positions of a large ellipse that can land on the grid.

    Region 1 columns are solved directly up to a short stretch before the
    region change. From there the walk proceeds step by step, with integer
    decision values scaled by 4, until region 2 lines up with its midpoint
    columns; the remaining rows are then solved directly.
    """
    rx2 = radius_x * radius_x
    ry2 = radius_y * radius_y

    low, high = 1, radius_x
    while low < high:
        mid = (low + high) // 2
        if ry2 * mid >= rx2 * _ellipse_row(mid, rx2, ry2):
            high = mid
        else:
            low = mid + 1
    start = max(low - _TRANSITION_STEPS, 0)

    yield from _ellipse_quadrants(cx, cy, 0, radius_y)
    for x in _window_offsets((cx,), grid_size, 1, start - 1):
        yield from _ellipse_quadrants(cx, cy, x, _ellipse_row(x, rx2, ry2))

    x = start
    y = radius_y if start == 0 else _ellipse_row(start, rx2, ry2)
    yield from _ellipse_quadrants(cx, cy, x, y)
    while ry2 * x < rx2 * y:
        if 4 * ry2 * (x + 1) ** 2 + rx2 * (2 * y - 1) ** 2 >= 4 * rx2 * ry2:
            y -= 1
        x += 1
        yield from _ellipse_quadrants(cx, cy, x, y)

    # Walk until region 2 sits on its midpoint columns and the arc below
    # advances less than one column per row
    while y > 0:
        column = _ellipse_column(y - 1, rx2, ry2)
        if column - 1 <= x <= column and rx2 * y <= ry2 * (x - 2):
            break
        if ry2 * (2 * x + 1) ** 2 + 4 * rx2 * (y - 1) ** 2 <= 4 * rx2 * ry2:
            x += 1
        y -= 1
        yield from _ellipse_quadrants(cx, cy, x, y)

    for row in _window_offsets((cy,), grid_size, 0, y - 1):
        yield from _ellipse_quadrants(cx, cy, _ellipse_column(row, rx2, ry2), row)


def rasterize_ellipse(
    center: Point,
    radius_x: int,
    radius_y: int,
    grid_size: int | None = DEFAULT_GRID_SIZE,
) -> PixelSet:
    """Rasterize an axis-aligned ellipse outline with the midpoint algorithm.

    Region 1 covers the arc where the slope magnitude is below 1 and steps in
    x; region 2 covers the rest and steps in y. The decision parameters carry
    the 0.25 / 0.5 terms of the midpoint test and are therefore real-valued;
    only the walked coordinates are integers. Above ``WALK_LIMIT`` only the
    columns and rows that can reach the grid are computed.

    Args:
        center: Ellipse center
        radius_x: Horizontal semi-axis
        radius_y: Vertical semi-axis
        grid_size: Grid extent for the validity filter (None = no filter)

    Returns:
        Set of outline pixels; empty when either radius is ``<= 0``
    """
    if radius_x <= 0 or radius_y <= 0:
        return set()

    cx, cy = center.x, center.y
    if grid_size is not None and max(radius_x, radius_y) > WALK_LIMIT:
        return {
            (px, py) for px, py in _ellipse_window(cx, cy, radius_x, radius_y, grid_size)
            if in_grid(px, py, grid_size)
        }

    rx2 = radius_x * radius_x
    ry2 = radius_y * radius_y

    x = 0
    y = radius_y
    dx = 2 * ry2 * x
    dy = 2 * rx2 * y

    raw: list[Pixel] = list(_ellipse_quadrants(cx, cy, x, y))

    # Region 1: slope magnitude < 1
    d1 = ry2 - rx2 * radius_y + 0.25 * rx2
    while dx < dy:
        x += 1
        dx += 2 * ry2
        if d1 < 0:
            d1 += dx + ry2
        else:
            y -= 1
            dy -= 2 * rx2
            d1 += dx - dy + ry2
        raw.extend(_ellipse_quadrants(cx, cy, x, y))

    # Region 2: reseeded from the last region 1 position
    d2 = ry2 * (x + 0.5) * (x + 0.5) + rx2 * (y - 1) * (y - 1) - rx2 * ry2
    while y > 0:
        y -= 1
        dy -= 2 * rx2
        if d2 > 0:
            d2 += rx2 - dy
        else:
            x += 1
            dx += 2 * ry2
            d2 += dx - dy + rx2
        raw.extend(_ellipse_quadrants(cx, cy, x, y))

    return {(px, py) for px, py in raw if in_grid(px, py, grid_size)}


def binomial_coefficient(n: int, k: int) -> int:
    """C(n, k), zero when ``k`` is outside ``[0, n]``."""
    if k < 0 or k > n:
        return 0
    return math.comb(n, k)


def bezier_points(
    control_points: Sequence[Point],
    steps: int = DEFAULT_BEZIER_STEPS,
    grid_size: int | None = DEFAULT_GRID_SIZE,
) -> list[Pixel]:
    """Sample a Bezier curve of any degree in curve order.

    Evaluates ``B(t) = sum C(n,i) (1-t)^(n-i) t^i P_i`` at ``steps + 1``
    evenly spaced parameters in [0, 1] inclusive, rounds each sample half-up,
    drops out-of-grid samples and keeps the first occurrence of each pixel.

    Args:
        control_points: Ordered control points (degree = len - 1)
        steps: Number of parameter intervals
        grid_size: Grid extent for the validity filter (None = no filter)

    Returns:
        Ordered unique pixels; empty for fewer than 2 control points
    """
    if len(control_points) < 2 or steps < 1:
        return []

    n = len(control_points) - 1
    coefficients = [binomial_coefficient(n, i) for i in range(n + 1)]

    seen: dict[Pixel, None] = {}
    for step in range(steps + 1):
        t = step / steps
        x = 0.0
        y = 0.0
        for i, point in enumerate(control_points):
            basis = coefficients[i] * (1 - t) ** (n - i) * t**i
            x += basis * point.x
            y += basis * point.y

        pixel = (round_half_up(x), round_half_up(y))
        if in_grid(pixel[0], pixel[1], grid_size):
            seen.setdefault(pixel, None)

    return list(seen)


def evaluate_bezier(
    control_points: Sequence[Point],
    steps: int = DEFAULT_BEZIER_STEPS,
    grid_size: int | None = DEFAULT_GRID_SIZE,
) -> PixelSet:
    """Rasterize a Bezier curve into a pixel set.

    See :func:`bezier_points` for the sampling rules.
    """
    return set(bezier_points(control_points, steps=steps, grid_size=grid_size))
