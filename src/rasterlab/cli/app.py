"""CLI application entry point for rasterlab.

This module provides the main CLI interface using Typer.
"""

import math
from collections.abc import Callable
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from rasterlab import __version__
from rasterlab.cli.output import (
    console,
    print_error,
    print_fill_summary,
    print_grid,
    print_header,
    print_projection_info,
    print_render_summary,
    print_saved,
    print_scene_info,
    print_step,
    print_transform_summary,
)
from rasterlab.config import (
    ClippingConfig,
    FillAlgorithm,
    FillConfig,
    GridConfig,
    LoggingConfig,
    RasterLabSettings,
)
from rasterlab.config.settings import DEFAULT_BEZIER_STEPS
from rasterlab.core import SceneRenderer
from rasterlab.core.projection import (
    CavalierType,
    OrthogonalView,
    PerspectiveType,
    ProjectionMethod,
    cube_wireframe,
    make_projector,
    pyramid_wireframe,
)
from rasterlab.domain import (
    ClipRectangle,
    Point,
    Point3D,
    Rotation,
    Scaling,
    Scene,
    SceneMode,
    TransformParams,
    Translation,
)
from rasterlab.exceptions import RasterLabError, SceneLoadError, SceneSaveError
from rasterlab.io import SceneReader, SceneWriter
from rasterlab.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="rasterlab",
    help="Rasterize, clip, fill and transform shapes on a small pixel grid.",
    add_completion=False,
    no_args_is_help=True,
)


class Solid(str, Enum):
    """Wireframe solids for the project command."""

    CUBE = "cube"
    PYRAMID = "pyramid"


GridSizeOption = Annotated[
    int | None,
    typer.Option(
        "--grid-size",
        "-g",
        help="Grid extent (default: from the scene file, else 20)",
        min=1,
        max=512,
    ),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the result to this file"),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write detailed logs to file"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Echo log records to the console"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Minimal console output"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]RasterLab[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Raster-graphics sandbox: scan conversion, clipping, fills and transforms."""


def _parse_numbers(value: str, count: int, option: str) -> list[float]:
    """Parse a comma-separated list of ``count`` numbers.

    Raises:
        typer.BadParameter: If the value is malformed
    """
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != count:
        raise typer.BadParameter(f"expected {count} comma-separated numbers", param_hint=option)
    try:
        numbers = [float(p) for p in parts]
    except ValueError:
        raise typer.BadParameter(f"'{value}' is not a list of numbers", param_hint=option) from None
    if not all(math.isfinite(n) for n in numbers):
        raise typer.BadParameter(f"'{value}' must contain finite numbers", param_hint=option)
    return numbers


def _finite_option(param: typer.CallbackParam, value: float | None) -> float | None:
    """Reject nan and infinite values of a float option."""
    if value is not None and not math.isfinite(value):
        raise typer.BadParameter(f"'{value}' is not a finite number", param=param)
    return value


def _parse_ints(value: str, count: int, option: str) -> list[int]:
    numbers = _parse_numbers(value, count, option)
    if any(not n.is_integer() for n in numbers):
        raise typer.BadParameter(f"'{value}' must contain integers", param_hint=option)
    return [int(n) for n in numbers]


def _parse_point(value: str, option: str) -> Point:
    x, y = _parse_ints(value, 2, option)
    return Point(x, y)


def _parse_clip(value: str) -> ClipRectangle:
    xmin, ymin, xmax, ymax = _parse_ints(value, 4, "--clip")
    return ClipRectangle(xmin, ymin, xmax, ymax)


def _setup_logging(config: LoggingConfig, verbose: bool) -> None:
    configure_logging(
        log_file=config.log_file,
        console_level=config.log_level,
        file_level=config.file_log_level,
        quiet=not verbose,
    )


def _build_settings(
    grid_size: int,
    steps: int | None = None,
    algorithm: FillAlgorithm | None = None,
    log_file: Path | None = None,
    log_level: str = "WARNING",
) -> RasterLabSettings:
    grid = GridConfig(size=grid_size, bezier_steps=steps or DEFAULT_BEZIER_STEPS)
    fill = FillConfig(algorithm=algorithm) if algorithm is not None else FillConfig()
    return RasterLabSettings(
        grid=grid,
        clipping=ClippingConfig(),
        fill=fill,
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )


def _load_scene(scene_path: Path) -> tuple[Scene, int | None]:
    """Load a scene file, returning the scene and its declared grid size."""
    if not scene_path.is_file():
        raise SceneLoadError(str(scene_path), "file not found")
    reader = SceneReader(scene_path)
    reader.load()
    return reader.scene, reader.grid_size


def _run(action: str, fn: Callable[[], None]) -> None:
    """Run a command body, mapping domain errors to exit code 1."""
    try:
        fn()
    except SceneLoadError as e:
        print_error(f"Could not load scene: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except SceneSaveError as e:
        print_error(f"Could not save output: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except RasterLabError as e:
        print_error(f"{action} failed", details=str(e))
        raise typer.Exit(code=1)
    except ValidationError as e:
        print_error("Invalid settings", details=str(e))
        raise typer.Exit(code=1)


@app.command()
def render(
    scene_path: Annotated[
        Path,
        typer.Argument(help="Path to a JSON scene file", show_default=False),
    ],
    clip: Annotated[
        str | None,
        typer.Option(
            "--clip",
            "-c",
            help="Clip window XMIN,YMIN,XMAX,YMAX (enables clipping)",
        ),
    ] = None,
    grid_size: GridSizeOption = None,
    steps: Annotated[
        int | None,
        typer.Option("--steps", "-s", help="Bezier sample count", min=1, max=10000),
    ] = None,
    output: OutputOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Rasterize every shape in a scene and print the pixel grid.

    Example:
        rasterlab render scene.json --clip 5,5,15,15 -o pixels.json

    An output path ending in .txt receives a text picture; any other
    extension receives the pixel list as JSON.
    """
    clip_rect = _parse_clip(clip) if clip is not None else None
    _setup_logging(LoggingConfig(log_file=log_file, log_level=log_level), verbose)

    def body() -> None:
        scene, declared_size = _load_scene(scene_path)
        if clip_rect is not None:
            scene = replace(scene, clip_rect=clip_rect, clipping_enabled=True)
        size = grid_size or declared_size or GridConfig().size

        settings = _build_settings(size, steps=steps, log_file=log_file, log_level=log_level)
        renderer = SceneRenderer(settings)
        pixels = renderer.render(scene)
        active_clip = renderer.clip_for(scene)

        if not quiet:
            print_header(__version__)
            print_scene_info(str(scene_path), len(scene.shapes), size, active_clip)
            print_grid(pixels, size, active_clip)
            print_render_summary(renderer.stats)

        if output is not None:
            SceneWriter(output).write(pixels, size, active_clip)
            if not quiet:
                print_saved(str(output))

    _run("Render", body)


@app.command()
def fill(
    scene_path: Annotated[
        Path,
        typer.Argument(help="Path to a JSON scene file", show_default=False),
    ],
    seed: Annotated[
        str,
        typer.Option("--seed", help="Seed cell X,Y", show_default=False),
    ],
    algorithm: Annotated[
        FillAlgorithm,
        typer.Option("--algorithm", "-a", help="Fill algorithm"),
    ] = FillAlgorithm.SCANLINE,
    grid_size: GridSizeOption = None,
    output: OutputOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Flood-fill the rendered scene from a seed cell.

    The resulting scene holds one pixel shape per filled cell. With
    --output it is written as a JSON scene that other commands can load.
    """
    seed_point = _parse_point(seed, "--seed")
    _setup_logging(LoggingConfig(log_file=log_file, log_level=log_level), verbose)

    def body() -> None:
        scene, declared_size = _load_scene(scene_path)
        size = grid_size or declared_size or GridConfig().size

        settings = _build_settings(size, algorithm=algorithm, log_file=log_file, log_level=log_level)
        renderer = SceneRenderer(settings)
        before = renderer.render(scene)
        filled = renderer.fill(scene, seed_point.to_tuple())
        mode = (
            SceneMode.SCANLINE_FILL
            if algorithm is FillAlgorithm.SCANLINE
            else SceneMode.RECURSIVE_FILL
        )
        filled = replace(filled, mode=mode)
        after = {shape.point.to_tuple() for _, shape in filled.loose_pixels()}

        if not quiet:
            print_header(__version__)
            print_scene_info(str(scene_path), len(scene.shapes), size, None)
            print_grid(after, size)
            print_fill_summary(seed_point.to_tuple(), algorithm.value, len(before ^ after))

        if output is not None:
            SceneWriter(output).write_scene(filled, grid_size=size)
            if not quiet:
                print_saved(str(output))

    _run("Fill", body)


@app.command()
def transform(
    scene_path: Annotated[
        Path,
        typer.Argument(help="Path to a JSON scene file", show_default=False),
    ],
    index: Annotated[
        int,
        typer.Option("--index", "-i", help="Index of the shape to transform", show_default=False),
    ],
    rotate: Annotated[
        float | None,
        typer.Option("--rotate", help="Rotate by DEGREES", callback=_finite_option),
    ] = None,
    translate: Annotated[
        str | None,
        typer.Option("--translate", help="Translate by DX,DY"),
    ] = None,
    scale: Annotated[
        str | None,
        typer.Option("--scale", help="Scale by SX,SY"),
    ] = None,
    anchor: Annotated[
        str | None,
        typer.Option("--anchor", help="Rotation pivot or scaling fixed point X,Y"),
    ] = None,
    grid_size: GridSizeOption = None,
    output: OutputOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Transform one shape together with the loose pixels that belong to it.

    Exactly one of --rotate, --translate or --scale is required. Rotation
    and scaling default to the shape's own anchor (midpoint, center or
    vertex centroid).
    """
    chosen = [name for name, value in (("--rotate", rotate), ("--translate", translate),
                                       ("--scale", scale)) if value is not None]
    if len(chosen) != 1:
        print_error(
            "Choose exactly one transform",
            details="Use one of --rotate, --translate or --scale",
        )
        raise typer.Exit(code=1)

    anchor_point = _parse_point(anchor, "--anchor") if anchor is not None else None
    params: TransformParams
    if rotate is not None:
        params = Rotation(angle_degrees=rotate, pivot=anchor_point)
    elif translate is not None:
        dx, dy = _parse_ints(translate, 2, "--translate")
        params = Translation(dx=dx, dy=dy)
    else:
        sx, sy = _parse_numbers(scale or "", 2, "--scale")
        params = Scaling(scale_x=sx, scale_y=sy, fixed_point=anchor_point)

    _setup_logging(LoggingConfig(log_file=log_file, log_level=log_level), verbose)

    def body() -> None:
        scene, declared_size = _load_scene(scene_path)
        size = grid_size or declared_size or GridConfig().size

        settings = _build_settings(size, log_file=log_file, log_level=log_level)
        renderer = SceneRenderer(settings)
        result, moved = renderer.transform_with_associated(scene, index, params)

        if not quiet:
            print_header(__version__)
            print_scene_info(str(scene_path), len(scene.shapes), size, None)
            print_grid(renderer.render(result), size)
            print_transform_summary(
                index, scene.shapes[index].kind, type(params).__name__.lower(), len(moved)
            )

        if output is not None:
            SceneWriter(output).write_scene(result, grid_size=size)
            if not quiet:
                print_saved(str(output))

    _run("Transform", body)


@app.command()
def project(
    solid: Annotated[
        Solid,
        typer.Option("--solid", help="Wireframe to project"),
    ] = Solid.CUBE,
    projection: Annotated[
        ProjectionMethod,
        typer.Option("--projection", "-p", help="Projection family"),
    ] = ProjectionMethod.ORTHOGONAL,
    view: Annotated[
        OrthogonalView,
        typer.Option("--view", help="Orthogonal view"),
    ] = OrthogonalView.ISOMETRIC,
    cavalier: Annotated[
        CavalierType,
        typer.Option("--cavalier", help="Cavalier preset"),
    ] = CavalierType.STANDARD,
    perspective: Annotated[
        PerspectiveType,
        typer.Option("--perspective", help="Perspective variant"),
    ] = PerspectiveType.ONE_POINT,
    angle: Annotated[
        float,
        typer.Option(
            "--angle",
            help="Receding angle in degrees (custom cavalier)",
            callback=_finite_option,
        ),
    ] = 45.0,
    depth_scale: Annotated[
        float,
        typer.Option(
            "--depth-scale",
            help="Depth scale factor (custom cavalier)",
            callback=_finite_option,
        ),
    ] = 1.0,
    distance: Annotated[
        float,
        typer.Option(
            "--distance",
            help="Viewer distance (perspective)",
            min=1.0,
            callback=_finite_option,
        ),
    ] = 30.0,
    fov: Annotated[
        float,
        typer.Option(
            "--fov",
            help="Field of view in degrees (three-point perspective)",
            callback=_finite_option,
        ),
    ] = 60.0,
    size: Annotated[
        float,
        typer.Option(
            "--size",
            help="Edge length of the solid",
            min=1.0,
            callback=_finite_option,
        ),
    ] = 8.0,
    offset: Annotated[
        str | None,
        typer.Option("--offset", help="Grid position X,Y of the solid's center"),
    ] = None,
    grid_size: GridSizeOption = None,
    output: OutputOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Project a cube or pyramid wireframe onto the grid.

    The projected edges become line shapes; with --output they are written
    as a JSON scene.
    """
    grid = grid_size or GridConfig().size
    center = _parse_point(offset, "--offset") if offset is not None else Point(grid // 2, grid // 2)
    _setup_logging(LoggingConfig(log_file=log_file, log_level=log_level), verbose)

    projector = make_projector(
        projection,
        view=view,
        cavalier=cavalier,
        perspective=perspective,
        angle=angle,
        scale_factor=depth_scale,
        viewer_distance=distance,
        fov=fov,
    )

    if solid is Solid.CUBE:
        lines = cube_wireframe(Point3D(0.0, 0.0, 0.0), size, projector, offset=center)
    else:
        h = size / 2
        # Grid y grows downward, so the base sits at +h and the apex at -h
        base = [
            Point3D(-h, h, -h),
            Point3D(h, h, -h),
            Point3D(h, h, h),
            Point3D(-h, h, h),
        ]
        lines = pyramid_wireframe(base, Point3D(0.0, -h, 0.0), projector, offset=center)

    variant = {
        ProjectionMethod.ORTHOGONAL: view.value,
        ProjectionMethod.CAVALIER: cavalier.value,
        ProjectionMethod.PERSPECTIVE: perspective.value,
    }[projection]

    def body() -> None:
        scene = Scene(shapes=tuple(lines), mode=SceneMode.LINE)
        renderer = SceneRenderer(_build_settings(grid, log_file=log_file, log_level=log_level))
        pixels = renderer.render(scene)

        if not quiet:
            print_header(__version__)
            print_step("Projecting")
            print_projection_info(solid.value, projection.value, variant, len(lines))
            print_grid(pixels, grid)

        if output is not None:
            SceneWriter(output).write_scene(scene, grid_size=grid)
            if not quiet:
                print_saved(str(output))

    _run("Projection", body)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
