"""Core raster algorithms for rasterlab.

This module contains the algorithms for:

- Rasterization (Bresenham lines, midpoint circles and ellipses, Bezier curves)
- Clipping (Cohen-Sutherland lines, Sutherland-Hodgman polygons)
- Region filling (recursive and scanline flood fill)
- Affine transforms with loose-pixel association
- Illustrative 3D projections

Every function here is pure: inputs are never mutated and results are new
values.

Key functions:
- rasterize_line / rasterize_circle / rasterize_ellipse / evaluate_bezier
- clip_line / clip_polygon
- flood_fill
- apply_transform / transform_scene / transform_with_associated
- rasterize_shape / render_shapes

Key classes:
- SceneRenderer: Settings-bound render, fill and transform orchestrator
"""

from rasterlab.core.association import (
    associated_pixels,
    is_associated,
    transform_scene,
    transform_with_associated,
)
from rasterlab.core.clipping import (
    clip_line,
    clip_pixels,
    clip_point,
    clip_polygon,
    compute_outcode,
)
from rasterlab.core.compositor import SceneRenderer, rasterize_shape, render_shapes
from rasterlab.core.fill import flood_fill, recursive_fill, scanline_fill
from rasterlab.core.geometry import round_half_up
from rasterlab.core.projection import (
    CavalierType,
    OrthogonalView,
    PerspectiveType,
    ProjectionMethod,
    cube_wireframe,
    make_projector,
    pyramid_wireframe,
)
from rasterlab.core.raster import (
    bezier_points,
    binomial_coefficient,
    evaluate_bezier,
    line_points,
    rasterize_circle,
    rasterize_ellipse,
    rasterize_line,
)
from rasterlab.core.transform import (
    apply_transform,
    default_anchor,
    rotate,
    rotate_point,
    scale,
    scale_point,
    translate,
    translate_point,
)

__all__ = [
    # Projection
    "CavalierType",
    "OrthogonalView",
    "PerspectiveType",
    "ProjectionMethod",
    # Compositor
    "SceneRenderer",
    # Transforms
    "apply_transform",
    "associated_pixels",
    # Raster
    "bezier_points",
    "binomial_coefficient",
    # Clipping
    "clip_line",
    "clip_pixels",
    "clip_point",
    "clip_polygon",
    "compute_outcode",
    "cube_wireframe",
    "default_anchor",
    "evaluate_bezier",
    # Fill
    "flood_fill",
    "is_associated",
    "line_points",
    "make_projector",
    "pyramid_wireframe",
    "rasterize_circle",
    "rasterize_ellipse",
    "rasterize_line",
    "rasterize_shape",
    "recursive_fill",
    "render_shapes",
    "rotate",
    "rotate_point",
    "round_half_up",
    "scale",
    "scale_point",
    "scanline_fill",
    "transform_scene",
    "transform_with_associated",
    "translate",
    "translate_point",
]
