"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with a styled pixel grid and formatted summaries.
"""

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from rasterlab.domain import ClipRectangle, PixelSet
from rasterlab.io.writer import CLIP_BORDER_CELL, EMPTY_CELL, FILLED_CELL
from rasterlab.utils import RenderStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]RasterLab[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_scene_info(
    scene_path: str,
    shape_count: int,
    grid_size: int,
    clip_rect: ClipRectangle | None,
) -> None:
    """Print scene information.

    Args:
        scene_path: Path to the scene file
        shape_count: Number of shapes in the scene
        grid_size: Grid extent used for rendering
        clip_rect: Active clip window, if any
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(scene_path)
    console.print(line)

    clip_str = "no clipping"
    if clip_rect is not None:
        clip_str = f"clip {clip_rect.xmin},{clip_rect.ymin} to {clip_rect.xmax},{clip_rect.ymax}"
    console.print(f"  {shape_count} shapes {SYM_DOT} {grid_size}x{grid_size} grid {SYM_DOT} {clip_str}")


def render_grid(
    pixels: PixelSet,
    grid_size: int,
    clip_rect: ClipRectangle | None = None,
) -> Text:
    """Build a styled text picture of a pixel set, y = 0 first.

    Filled cells inside the clip window are green, filled cells outside it
    are dim, and empty cells on the window border are yellow.
    """
    grid = Text()
    for y in range(grid_size):
        grid.append("  ")
        for x in range(grid_size):
            inside = clip_rect is None or clip_rect.contains(x, y)
            if (x, y) in pixels:
                grid.append(FILLED_CELL, style="bold green" if inside else "dim")
            elif clip_rect is not None and inside and (
                x in (clip_rect.xmin, clip_rect.xmax) or y in (clip_rect.ymin, clip_rect.ymax)
            ):
                grid.append(CLIP_BORDER_CELL, style="yellow")
            else:
                grid.append(EMPTY_CELL, style="bright_black")
        grid.append("\n")
    return grid


def print_grid(
    pixels: PixelSet,
    grid_size: int,
    clip_rect: ClipRectangle | None = None,
) -> None:
    """Print the pixel grid."""
    console.print()
    console.print(render_grid(pixels, grid_size, clip_rect), end="")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.1f}s"


def print_render_summary(stats: RenderStats) -> None:
    """Print render statistics.

    Args:
        stats: Statistics collected by the renderer
    """
    console.print(
        f"\n[bold green]{SYM_OK} Rendered[/bold green] in {_format_time(stats.duration_seconds)}"
    )
    console.print(
        f"  {stats.pixels_produced} pixels {SYM_DOT} {stats.shapes_rendered} shapes drawn "
        f"{SYM_DOT} {stats.shapes_clipped_away} clipped away"
    )


def print_fill_summary(seed: tuple[int, int], algorithm: str, changed: int) -> None:
    """Print the result of a flood fill.

    Args:
        seed: Seed cell
        algorithm: Fill algorithm name
        changed: Number of cells whose state changed
    """
    console.print(f"\n[bold green]{SYM_OK} Filled[/bold green] from ({seed[0]}, {seed[1]})")
    console.print(f"  {changed} cells changed {SYM_DOT} {algorithm}")


def print_transform_summary(index: int, kind: str, transform: str, moved: int) -> None:
    """Print the result of a shape transform.

    Args:
        index: Index of the transformed shape
        kind: Shape kind
        transform: Transform name
        moved: Number of loose pixels moved with the shape
    """
    plural = "pixel" if moved == 1 else "pixels"
    console.print(f"\n[bold green]{SYM_OK} Transformed[/bold green] {kind} #{index} ({transform})")
    console.print(f"  {moved} associated {plural} moved with it")


def print_projection_info(solid: str, projection: str, variant: str, edge_count: int) -> None:
    """Print the projection that produced a wireframe."""
    console.print(f"  {solid} {SYM_DOT} {projection} ({variant}) {SYM_DOT} {edge_count} edges")


def print_saved(output_path: str) -> None:
    """Print the path of a written output file."""
    line = Text("  Saved ")
    line.append(output_path, style="bold")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")
