"""Scene reader for loading JSON scene descriptions.

This module provides the SceneReader class for loading scene files
and converting them into domain models.
"""

import json
from pathlib import Path

from rasterlab.domain import Scene
from rasterlab.exceptions import SceneFormatError, SceneLoadError, ShapeError


class SceneReader:
    """Loads JSON scene descriptions.

    A scene file looks like::

        {
          "grid_size": 20,
          "clip": {"xmin": 0, "ymin": 0, "xmax": 19, "ymax": 19},
          "clipping_enabled": false,
          "mode": "line",
          "shapes": [{"type": "line", "p1": {...}, "p2": {...}}]
        }

    Every key is optional; an empty object is an empty scene.

    Example:
        reader = SceneReader(Path("scene.json"))
        reader.load()
        print(len(reader.scene.shapes))
    """

    def __init__(self, scene_path: Path) -> None:
        """Initialize the scene reader.

        Args:
            scene_path: Path to the JSON scene file
        """
        self._scene_path = scene_path
        self._scene: Scene | None = None
        self._grid_size: int | None = None

    def load(self) -> None:
        """Load and parse the scene file.

        Raises:
            SceneLoadError: If the file does not exist or cannot be read
            SceneFormatError: If the file is not a valid scene description
        """
        path = str(self._scene_path)
        if not self._scene_path.exists():
            raise SceneLoadError(path, "file not found")

        try:
            text = self._scene_path.read_text(encoding="utf-8")
        except OSError as e:
            raise SceneLoadError(path, str(e)) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SceneFormatError(path, f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise SceneFormatError(path, "top-level value must be an object")

        try:
            self._scene = Scene.from_dict(data)
            grid_size = data.get("grid_size")
            self._grid_size = int(grid_size) if grid_size is not None else None
        except ShapeError as e:
            raise SceneFormatError(path, str(e)) from e
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise SceneFormatError(path, f"{type(e).__name__}: {e}") from e

    @property
    def scene(self) -> Scene:
        """Return the loaded scene.

        Raises:
            RuntimeError: If the scene has not been loaded yet
        """
        if self._scene is None:
            raise RuntimeError("Scene not loaded. Call load() first.")
        return self._scene

    @property
    def grid_size(self) -> int | None:
        """Grid size declared by the file, if any.

        Raises:
            RuntimeError: If the scene has not been loaded yet
        """
        if self._scene is None:
            raise RuntimeError("Scene not loaded. Call load() first.")
        return self._grid_size

    def __enter__(self) -> "SceneReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self._scene = None
