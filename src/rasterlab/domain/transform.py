"""Transform parameter records.

Scale and rotation carry an optional anchor. When the anchor is omitted the
transform engine resolves a per-shape default (centroid, center or midpoint).
"""

from dataclasses import dataclass

from rasterlab.domain.primitives import Point


@dataclass(frozen=True, slots=True)
class Rotation:
    """Rotation about a pivot.

    Attributes:
        angle_degrees: Rotation angle; positive turns +x towards +y
        pivot: Center of rotation (None = shape default anchor)
    """

    angle_degrees: float
    pivot: Point | None = None


@dataclass(frozen=True, slots=True)
class Translation:
    """Translation by an integer offset."""

    dx: int
    dy: int


@dataclass(frozen=True, slots=True)
class Scaling:
    """Independent per-axis scale about a fixed point.

    Attributes:
        scale_x: Horizontal factor
        scale_y: Vertical factor
        fixed_point: Point left in place (None = shape default anchor)
    """

    scale_x: float
    scale_y: float
    fixed_point: Point | None = None


TransformParams = Rotation | Translation | Scaling
