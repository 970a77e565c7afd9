"""Core value types for grid geometry.

This module defines the fundamental types used throughout rasterlab:
- Point: An integer grid coordinate
- Point3D: A real-valued point in space, used by the projections
- ClipRectangle: An inclusive, axis-aligned clip window
- Pixel / PixelSet: The tuple form used for rasterizer output
"""

from dataclasses import dataclass
from typing import Any

Pixel = tuple[int, int]
PixelSet = set[Pixel]


@dataclass(frozen=True, slots=True)
class Point:
    """A point on the pixel grid.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: Column index
        y: Row index (grows downwards, row 0 is the top of the grid)
    """

    x: int
    y: int

    def to_tuple(self) -> Pixel:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=int(data["x"]), y=int(data["y"]))


@dataclass(frozen=True, slots=True)
class Point3D:
    """A point in 3D space."""

    x: float
    y: float
    z: float


@dataclass(frozen=True, slots=True)
class ClipRectangle:
    """Axis-aligned clip window with inclusive integer bounds.

    A rectangle with ``xmin > xmax`` or ``ymin > ymax`` is representable but
    invalid; clippers treat it as intersecting nothing.

    Attributes:
        xmin: Left edge (inclusive)
        ymin: Top edge (inclusive)
        xmax: Right edge (inclusive)
        ymax: Bottom edge (inclusive)
    """

    xmin: int
    ymin: int
    xmax: int
    ymax: int

    @property
    def is_valid(self) -> bool:
        """Whether the bounds describe a non-empty rectangle."""
        return self.xmin <= self.xmax and self.ymin <= self.ymax

    def contains(self, x: float, y: float) -> bool:
        """Inclusive point-in-rectangle test."""
        return self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Convert to (xmin, ymin, xmax, ymax)."""
        return (self.xmin, self.ymin, self.xmax, self.ymax)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"xmin": self.xmin, "ymin": self.ymin, "xmax": self.xmax, "ymax": self.ymax}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClipRectangle":
        """Deserialize from dictionary."""
        return cls(
            xmin=int(data["xmin"]),
            ymin=int(data["ymin"]),
            xmax=int(data["xmax"]),
            ymax=int(data["ymax"]),
        )
