"""Shape-to-pixel compositing.

This module ties the rasterizers and clippers together. Every shape in a
scene is routed to its rasterizer, clipped when a window is active, and the
per-shape pixel sets are folded into one set.

Key components:
- rasterize_shape: Pixels of a single shape
- render_shapes: Union over a shape list
- SceneRenderer: Settings-bound orchestrator with logging and statistics
"""

import time
from collections.abc import Iterable

import structlog

from rasterlab.config import FillAlgorithm, RasterLabSettings, get_default_settings
from rasterlab.config.settings import DEFAULT_BEZIER_STEPS, DEFAULT_GRID_SIZE
from rasterlab.core.association import transform_with_associated
from rasterlab.core.clipping import clip_line, clip_pixels, clip_polygon
from rasterlab.core.fill import flood_fill
from rasterlab.core.geometry import in_grid
from rasterlab.core.raster import (
    evaluate_bezier,
    rasterize_circle,
    rasterize_ellipse,
    rasterize_line,
)
from rasterlab.domain import (
    Bezier,
    Circle,
    ClipRectangle,
    Ellipse,
    Line,
    Pixel,
    PixelSet,
    PixelShape,
    Point,
    Polygon,
    Polyline,
    Scene,
    Shape,
    TransformParams,
)
from rasterlab.exceptions import UnknownShapeError
from rasterlab.utils import RenderLogger, RenderStats


def _segment(
    p1: Point,
    p2: Point,
    clip_rect: ClipRectangle | None,
    grid_size: int,
) -> PixelSet:
    if clip_rect is None:
        return rasterize_line(p1, p2, grid_size)
    clipped = clip_line(p1, p2, clip_rect)
    if clipped is None:
        return set()
    return rasterize_line(clipped[0], clipped[1], grid_size)


def _closed_outline(vertices: list[Point] | tuple[Point, ...], grid_size: int) -> PixelSet:
    pixels: PixelSet = set()
    n = len(vertices)
    for i in range(n):
        pixels |= rasterize_line(vertices[i], vertices[(i + 1) % n], grid_size)
    return pixels


def rasterize_shape(
    shape: Shape,
    clip_rect: ClipRectangle | None = None,
    grid_size: int = DEFAULT_GRID_SIZE,
    steps: int = DEFAULT_BEZIER_STEPS,
    round_each_pass: bool = True,
) -> PixelSet:
    """Rasterize one shape, clipping it to ``clip_rect`` when given.

    - Line: Cohen-Sutherland, then Bresenham
    - Polyline: each consecutive segment clipped and rasterized (open chain)
    - Polygon: Sutherland-Hodgman, then the closed outline
    - Pixel, Circle, Ellipse, Bezier: rasterized, then point-clipped

    Args:
        shape: Shape to rasterize
        clip_rect: Clip window (None = no clipping)
        grid_size: Grid extent
        steps: Bezier sample count
        round_each_pass: Sutherland-Hodgman rounding policy

    Returns:
        In-grid pixels of the shape

    Raises:
        UnknownShapeError: If the shape type is not supported
    """
    if isinstance(shape, Line):
        return _segment(shape.p1, shape.p2, clip_rect, grid_size)

    if isinstance(shape, Polyline):
        pixels: PixelSet = set()
        for start, end in zip(shape.vertices, shape.vertices[1:]):
            pixels |= _segment(start, end, clip_rect, grid_size)
        return pixels

    if isinstance(shape, Polygon):
        vertices: list[Point] | tuple[Point, ...] = shape.vertices
        if clip_rect is not None:
            vertices = clip_polygon(vertices, clip_rect, round_each_pass=round_each_pass)
        return _closed_outline(vertices, grid_size)

    if isinstance(shape, PixelShape):
        x, y = shape.point.to_tuple()
        pixels = {(x, y)} if in_grid(x, y, grid_size) else set()
    elif isinstance(shape, Circle):
        pixels = rasterize_circle(shape.center, shape.radius, grid_size)
    elif isinstance(shape, Ellipse):
        pixels = rasterize_ellipse(shape.center, shape.radius_x, shape.radius_y, grid_size)
    elif isinstance(shape, Bezier):
        pixels = evaluate_bezier(shape.control_points, steps=steps, grid_size=grid_size)
    else:
        raise UnknownShapeError(type(shape).__name__)

    if clip_rect is not None:
        return clip_pixels(pixels, clip_rect)
    return pixels


def render_shapes(
    shapes: Iterable[Shape],
    clip_rect: ClipRectangle | None = None,
    grid_size: int = DEFAULT_GRID_SIZE,
    steps: int = DEFAULT_BEZIER_STEPS,
    round_each_pass: bool = True,
) -> PixelSet:
    """Union of the pixels of every shape.

    Shape order does not affect the result.
    """
    pixels: PixelSet = set()
    for shape in shapes:
        pixels |= rasterize_shape(
            shape,
            clip_rect=clip_rect,
            grid_size=grid_size,
            steps=steps,
            round_each_pass=round_each_pass,
        )
    return pixels


class SceneRenderer:
    """Renders, fills and transforms scenes with a fixed set of settings.

    The renderer holds settings and statistics only; scenes are passed in and
    new scenes are returned.

    Example:
        renderer = SceneRenderer(RasterLabSettings())
        pixels = renderer.render(scene)
        filled = renderer.fill(scene, (5, 5))
    """

    def __init__(
        self,
        settings: RasterLabSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            settings: Application settings (defaults when None)
            logger: Bound logger (the ``rasterlab`` logger when None)
        """
        self.settings = settings or get_default_settings()
        self.logger = logger or structlog.get_logger("rasterlab")
        self.render_logger = RenderLogger(self.logger)

    @property
    def grid_size(self) -> int:
        """Grid extent from the settings."""
        return self.settings.grid.size

    def clip_for(self, scene: Scene) -> ClipRectangle | None:
        """Clip window to apply to ``scene``.

        The window applies when the scene enables clipping or the settings
        force it on; a scene without a window is never clipped.
        """
        if self.settings.clipping.enabled:
            return scene.clip_rect
        return scene.active_clip

    def _render(self, scene: Scene, clip_rect: ClipRectangle | None) -> PixelSet:
        pixels: PixelSet = set()
        for index, shape in enumerate(scene.shapes):
            shape_pixels = rasterize_shape(
                shape,
                clip_rect=clip_rect,
                grid_size=self.grid_size,
                steps=self.settings.grid.bezier_steps,
                round_each_pass=self.settings.clipping.round_each_pass,
            )
            if shape_pixels:
                self.render_logger.log_shape_rendered(index, shape.kind, len(shape_pixels))
            elif clip_rect is not None:
                self.render_logger.log_shape_clipped_away(index, shape.kind)
            pixels |= shape_pixels
        return pixels

    def render(self, scene: Scene) -> PixelSet:
        """Render a scene to its visible pixel set."""
        stats = self.render_logger.stats
        stats.start_time = time.time()
        pixels = self._render(scene, self.clip_for(scene))
        stats.end_time = time.time()

        self.render_logger.log_render_complete(
            shape_count=len(scene.shapes),
            pixel_count=len(pixels),
            duration_ms=stats.duration_seconds * 1000,
        )
        return pixels

    def fill(
        self,
        scene: Scene,
        seed: Pixel,
        algorithm: FillAlgorithm | None = None,
        fill_color: bool | None = None,
    ) -> Scene:
        """Flood-fill the rasterized scene and return it as loose pixels.

        The fill runs on the unclipped raster so the clip window acts as a
        view, not as a wall. The returned scene replaces every shape with a
        pixel shape per filled cell, in row-major order.

        Args:
            scene: Scene to fill
            seed: Starting cell
            algorithm: Fill engine (settings default when None)
            fill_color: Explicit fill state (None = toggle the seed's state)

        Returns:
            New scene made of pixel shapes
        """
        algorithm = algorithm or self.settings.fill.algorithm
        pixels = self._render(scene, None)
        filled = flood_fill(seed, pixels, self.grid_size, algorithm, fill_color=fill_color)

        self.render_logger.log_fill(seed, algorithm.value, changed=len(pixels ^ filled))
        ordered = sorted(filled, key=lambda p: (p[1], p[0]))
        return scene.with_shapes([PixelShape(Point(x, y)) for x, y in ordered])

    def transform_with_associated(
        self, scene: Scene, index: int, params: TransformParams
    ) -> tuple[Scene, list[int]]:
        """Transform one shape and return the indices of the pixels it carried."""
        result, moved = transform_with_associated(
            scene, index, params, self.settings.association
        )
        self.render_logger.log_transform(
            index, scene.shapes[index].kind, type(params).__name__.lower(), len(moved)
        )
        return result, moved

    def transform(self, scene: Scene, index: int, params: TransformParams) -> Scene:
        """Transform one shape together with its associated loose pixels."""
        return self.transform_with_associated(scene, index, params)[0]

    @property
    def stats(self) -> RenderStats:
        """Statistics collected so far."""
        return self.render_logger.stats
