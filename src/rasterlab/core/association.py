"""Loose-pixel association policy.

When a shape is transformed, standalone pixels that "belong" to it (for
example a fill painted inside a circle) are transformed alongside it. This
module isolates the rule that decides membership so it can be replaced
without touching the transform engine:

- Line: pixel within ``line_tolerance`` of the segment
- Circle / Ellipse: pixel inside the outline (boundary inclusive)
- Polygon: pixel inside the vertex cycle (even-odd rule)
- Polyline / Bezier: pixel inside the vertex bounding box grown by
  ``bbox_padding`` cells. This is a heuristic; neither shape has a natural
  inside test.
- Pixel: never; a loose pixel carries nothing with it
"""

import logging

from rasterlab.config import AssociationConfig
from rasterlab.core.geometry import (
    bounding_box,
    is_inside_circle,
    is_inside_ellipse,
    is_inside_polygon,
    is_near_line,
)
from rasterlab.core.transform import apply_transform, resolve_anchor
from rasterlab.domain import (
    Bezier,
    Circle,
    Ellipse,
    Line,
    Point,
    Polygon,
    Polyline,
    Scene,
    Shape,
    TransformParams,
)
from rasterlab.exceptions import ShapeIndexError

logger = logging.getLogger(__name__)


def is_within_padded_bounds(point: Point, vertices: tuple[Point, ...], padding: int) -> bool:
    """Whether ``point`` lies in the vertex bounding box expanded by ``padding``."""
    if not vertices:
        return False
    min_x, min_y, max_x, max_y = bounding_box(vertices, padding=padding)
    return min_x <= point.x <= max_x and min_y <= point.y <= max_y


def is_associated(point: Point, shape: Shape, config: AssociationConfig | None = None) -> bool:
    """Decide whether a loose pixel travels with ``shape``.

    Args:
        point: Position of the loose pixel
        shape: Shape being transformed
        config: Tolerances (defaults when None)

    Returns:
        True if the pixel should receive the same transform
    """
    config = config or AssociationConfig()

    if isinstance(shape, Line):
        return is_near_line(point, shape, config.line_tolerance)
    if isinstance(shape, Circle):
        return is_inside_circle(point, shape)
    if isinstance(shape, Ellipse):
        return is_inside_ellipse(point, shape)
    if isinstance(shape, Polygon):
        return is_inside_polygon(point, shape.vertices)
    if isinstance(shape, (Polyline, Bezier)):
        return is_within_padded_bounds(point, shape.points(), config.bbox_padding)
    return False


def _check_index(scene: Scene, index: int) -> Shape:
    if not 0 <= index < len(scene.shapes):
        raise ShapeIndexError(index, len(scene.shapes))
    return scene.shapes[index]


def associated_pixels(
    scene: Scene,
    index: int,
    config: AssociationConfig | None = None,
) -> list[int]:
    """Indices of the loose pixels associated with ``scene.shapes[index]``.

    Raises:
        ShapeIndexError: If index is out of range
    """
    shape = _check_index(scene, index)
    return [
        idx for idx, pixel in scene.loose_pixels()
        if idx != index and is_associated(pixel.point, shape, config)
    ]


def transform_with_associated(
    scene: Scene,
    index: int,
    params: TransformParams,
    config: AssociationConfig | None = None,
) -> tuple[Scene, list[int]]:
    """Transform one shape and the loose pixels associated with it.

    The anchor is resolved once from the selected shape and shared by the
    associated pixels, so they keep their position relative to the shape.
    Association is decided on the positions before the transform.

    Args:
        scene: Scene to transform
        index: Index of the selected shape
        params: Rotation, Translation or Scaling
        config: Association tolerances (defaults when None)

    Returns:
        New scene with the shape and its associated pixels transformed, and
        the indices of those associated pixels

    Raises:
        ShapeIndexError: If index is out of range
    """
    shape = _check_index(scene, index)
    resolved = resolve_anchor(params, shape)

    associated = associated_pixels(scene, index, config)
    moving = {index, *associated}

    shapes: list[Shape] = []
    for idx, current in enumerate(scene.shapes):
        if idx in moving:
            shapes.append(apply_transform(current, resolved))
        else:
            shapes.append(current)

    logger.debug(
        "Transformed %s at index %d with %d associated pixels",
        shape.kind, index, len(associated),
    )
    return scene.with_shapes(shapes), associated


def transform_scene(
    scene: Scene,
    index: int,
    params: TransformParams,
    config: AssociationConfig | None = None,
) -> Scene:
    """Like :func:`transform_with_associated`, returning only the new scene."""
    return transform_with_associated(scene, index, params, config)[0]

