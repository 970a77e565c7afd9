"""Flood fill over a binary pixel grid.

A grid cell is either filled (its coordinate is in the pixel set) or empty.
Both engines read the seed's state as the target state and flip every cell
4-connected to the seed that shares it, stopping at cells of the opposite
state and at the grid boundary:

- recursive_fill: stack-based, one cell at a time
- scanline_fill: grows whole horizontal runs and seeds one cell per
  contiguous span in the neighbouring rows

The two engines produce identical results for the same input. Neither
mutates the caller's set.
"""

from collections.abc import Set

from rasterlab.config.settings import FillAlgorithm
from rasterlab.core.geometry import in_grid
from rasterlab.domain import Pixel, PixelSet


def _resolve_colors(seed: Pixel, pixels: Set[Pixel], fill_color: bool | None) -> tuple[bool, bool]:
    target = seed in pixels
    fill = (not target) if fill_color is None else fill_color
    return target, fill


def _paint(pixels: PixelSet, cell: Pixel, fill: bool) -> None:
    if fill:
        pixels.add(cell)
    else:
        pixels.discard(cell)


def recursive_fill(
    seed: Pixel,
    pixels: Set[Pixel],
    grid_size: int,
    fill_color: bool | None = None,
) -> PixelSet:
    """Stack-based 4-connected flood fill.

    Args:
        seed: Starting cell
        pixels: Currently filled cells
        grid_size: Grid extent; cells outside ``[0, grid_size)`` are walls
        fill_color: State to paint (None = opposite of the seed's state)

    Returns:
        New pixel set with the region flipped. Unchanged copy when the seed is
        out of the grid or already has the requested fill state.
    """
    result = set(pixels)
    target, fill = _resolve_colors(seed, pixels, fill_color)
    if fill == target or not in_grid(seed[0], seed[1], grid_size):
        return result

    stack: list[Pixel] = [seed]
    while stack:
        x, y = stack.pop()
        if not (0 <= x < grid_size and 0 <= y < grid_size):
            continue
        if ((x, y) in result) != target:
            continue

        _paint(result, (x, y), fill)

        stack.append((x + 1, y))
        stack.append((x - 1, y))
        stack.append((x, y + 1))
        stack.append((x, y - 1))

    return result


def scanline_fill(
    seed: Pixel,
    pixels: Set[Pixel],
    grid_size: int,
    fill_color: bool | None = None,
) -> PixelSet:
    """Span-based 4-connected flood fill.

    From each seed, extends left and right to the maximal run of target
    cells, flips the run, then scans the rows directly above and below over
    the run's x range and pushes one seed per contiguous target span.

    Args:
        seed: Starting cell
        pixels: Currently filled cells
        grid_size: Grid extent; cells outside ``[0, grid_size)`` are walls
        fill_color: State to paint (None = opposite of the seed's state)

    Returns:
        New pixel set with the region flipped. Unchanged copy when the seed is
        out of the grid or already has the requested fill state.
    """
    result = set(pixels)
    target, fill = _resolve_colors(seed, pixels, fill_color)
    if fill == target or not in_grid(seed[0], seed[1], grid_size):
        return result

    def has_target(x: int, y: int) -> bool:
        return ((x, y) in result) == target

    stack: list[Pixel] = [seed]
    while stack:
        start_x, y = stack.pop()
        # Already painted by an earlier span
        if not has_target(start_x, y):
            continue

        left = start_x
        while left - 1 >= 0 and has_target(left - 1, y):
            left -= 1
        right = start_x
        while right + 1 < grid_size and has_target(right + 1, y):
            right += 1

        for x in range(left, right + 1):
            _paint(result, (x, y), fill)

        for row in (y - 1, y + 1):
            if not 0 <= row < grid_size:
                continue
            in_span = False
            for x in range(left, right + 1):
                if has_target(x, row):
                    if not in_span:
                        stack.append((x, row))
                        in_span = True
                else:
                    in_span = False

    return result


def flood_fill(
    seed: Pixel,
    pixels: Set[Pixel],
    grid_size: int,
    algorithm: FillAlgorithm = FillAlgorithm.SCANLINE,
    fill_color: bool | None = None,
) -> PixelSet:
    """Flood fill with the selected engine."""
    if algorithm is FillAlgorithm.RECURSIVE:
        return recursive_fill(seed, pixels, grid_size, fill_color=fill_color)
    return scanline_fill(seed, pixels, grid_size, fill_color=fill_color)
