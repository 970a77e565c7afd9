"""Scene representation.

The scene is the externally owned state of the sandbox: the ordered shape
list, the clip window and the current interaction mode. The core never stores
a scene; operations take one and return a new one.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from rasterlab.domain.primitives import ClipRectangle, Point
from rasterlab.domain.shapes import PixelShape, Shape, shape_from_dict


class SceneMode(str, Enum):
    """Interaction mode of the sandbox."""

    PIXEL = "pixel"
    LINE = "line"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    BEZIER = "bezier"
    POLYLINE = "polyline"
    POLYGON = "polygon"
    RECURSIVE_FILL = "recursive_fill"
    SCANLINE_FILL = "scanline_fill"
    LINE_CLIPPING = "line_clipping"
    POLYGON_CLIPPING = "polygon_clipping"
    ROTATE = "rotate"
    TRANSLATE = "translate"
    SCALE = "scale"


@dataclass(frozen=True)
class Scene:
    """An immutable scene value.

    Attributes:
        shapes: Shapes in draw order
        clip_rect: Clip window (None = no window defined)
        clipping_enabled: Whether rendering applies the clip window
        mode: Current interaction mode
    """

    shapes: tuple[Shape, ...] = ()
    clip_rect: ClipRectangle | None = None
    clipping_enabled: bool = False
    mode: SceneMode = field(default=SceneMode.PIXEL)

    def __post_init__(self) -> None:
        object.__setattr__(self, "shapes", tuple(self.shapes))

    @property
    def active_clip(self) -> ClipRectangle | None:
        """Clip window to apply, or None when clipping is off."""
        if self.clipping_enabled:
            return self.clip_rect
        return None

    def loose_pixels(self) -> list[tuple[int, PixelShape]]:
        """Return (index, shape) pairs for every standalone pixel."""
        return [
            (idx, shape) for idx, shape in enumerate(self.shapes)
            if isinstance(shape, PixelShape)
        ]

    def with_shape(self, shape: Shape) -> "Scene":
        """Return a new scene with ``shape`` appended."""
        return replace(self, shapes=(*self.shapes, shape))

    def with_shapes(self, shapes: tuple[Shape, ...] | list[Shape]) -> "Scene":
        """Return a new scene with the shape list replaced."""
        return replace(self, shapes=tuple(shapes))

    def toggle_pixel(self, point: Point) -> "Scene":
        """Add a loose pixel at ``point``, or remove it if one is already there."""
        target = PixelShape(point)
        if target in self.shapes:
            return self.with_shapes([s for s in self.shapes if s != target])
        return self.with_shape(target)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the scene
        """
        return {
            "clip": self.clip_rect.to_dict() if self.clip_rect else None,
            "clipping_enabled": self.clipping_enabled,
            "mode": self.mode.value,
            "shapes": [s.to_dict() for s in self.shapes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scene":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a scene

        Returns:
            Scene instance
        """
        clip = data.get("clip")
        return cls(
            shapes=tuple(shape_from_dict(s) for s in data.get("shapes", [])),
            clip_rect=ClipRectangle.from_dict(clip) if clip is not None else None,
            clipping_enabled=bool(data.get("clipping_enabled", False)),
            mode=SceneMode(data.get("mode", SceneMode.PIXEL.value)),
        )
