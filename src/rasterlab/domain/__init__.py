"""Domain models for rasterlab.

This module contains the value types describing grid geometry, shapes,
transform parameters and scenes. All models are designed to be:

- Immutable (frozen dataclasses)
- Hashable where they are used as set members
- Serializable to plain dictionaries for the JSON scene format

Key classes:
- Point / Point3D: Grid and space coordinates
- ClipRectangle: Inclusive clip window
- PixelShape, Line, Circle, Ellipse, Bezier, Polyline, Polygon: Shapes
- Rotation, Translation, Scaling: Transform parameters
- Scene: Shape list with clip window and mode
"""

from rasterlab.domain.primitives import ClipRectangle, Pixel, PixelSet, Point, Point3D
from rasterlab.domain.scene import Scene, SceneMode
from rasterlab.domain.shapes import (
    SHAPE_TYPES,
    Bezier,
    Circle,
    Ellipse,
    Line,
    PixelShape,
    Polygon,
    Polyline,
    Shape,
    shape_from_dict,
)
from rasterlab.domain.transform import Rotation, Scaling, TransformParams, Translation

__all__: list[str] = [
    # Primitives
    "Pixel",
    "PixelSet",
    "Point",
    "Point3D",
    "ClipRectangle",
    # Shapes
    "SHAPE_TYPES",
    "Shape",
    "PixelShape",
    "Line",
    "Circle",
    "Ellipse",
    "Bezier",
    "Polyline",
    "Polygon",
    "shape_from_dict",
    # Transforms
    "Rotation",
    "Translation",
    "Scaling",
    "TransformParams",
    # Scene
    "Scene",
    "SceneMode",
]
