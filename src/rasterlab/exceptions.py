"""Exception hierarchy for RasterLab.

The geometry core never raises for degenerate input; it returns empty
results instead. These exceptions belong to the scene, I/O and CLI layers.
"""


class RasterLabError(Exception):
    """Base exception for all RasterLab errors."""

    pass


class SceneError(RasterLabError):
    """Errors related to scene loading or saving."""

    pass


class SceneLoadError(SceneError):
    """Error loading a scene file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load scene '{path}': {reason}")


class SceneSaveError(SceneError):
    """Error saving a scene or pixel file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save '{path}': {reason}")


class SceneFormatError(SceneError):
    """Malformed scene description."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid scene format '{path}': {details}")


class ShapeError(RasterLabError):
    """Errors related to shape lookup or decoding."""

    pass


class ShapeIndexError(ShapeError):
    """Requested shape index does not exist in the scene."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(f"Shape index {index} out of range (scene has {count} shapes)")


class UnknownShapeError(ShapeError):
    """Shape tag not recognized."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unknown shape type '{kind}'")


class TransformError(RasterLabError):
    """Transform parameters could not be applied."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Transform failed: {reason}")
