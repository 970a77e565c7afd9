"""Scene and pixel writers.

This module provides the SceneWriter class for saving scenes, rendered
pixel sets and plain-text grid pictures.
"""

import json
from pathlib import Path
from typing import Any

from rasterlab.domain import ClipRectangle, PixelSet, Scene
from rasterlab.exceptions import SceneSaveError

FILLED_CELL = "#"
EMPTY_CELL = "."
CLIP_BORDER_CELL = "+"


def pixels_to_dict(pixels: PixelSet, grid_size: int) -> dict[str, Any]:
    """Serialize a pixel set in row-major order.

    Args:
        pixels: Pixel coordinates
        grid_size: Grid extent the pixels were rendered for

    Returns:
        Dictionary with ``grid_size`` and a sorted ``pixels`` list
    """
    ordered = sorted(pixels, key=lambda p: (p[1], p[0]))
    return {"grid_size": grid_size, "pixels": [[x, y] for x, y in ordered]}


def format_text_grid(
    pixels: PixelSet,
    grid_size: int,
    clip_rect: ClipRectangle | None = None,
) -> str:
    """Draw a pixel set as text, one row per line, y = 0 first.

    Filled cells print as ``#`` and empty cells as ``.``. Empty cells on the
    border of the clip window print as ``+``.
    """
    rows: list[str] = []
    for y in range(grid_size):
        row = []
        for x in range(grid_size):
            if (x, y) in pixels:
                row.append(FILLED_CELL)
            elif clip_rect is not None and _on_clip_border(x, y, clip_rect):
                row.append(CLIP_BORDER_CELL)
            else:
                row.append(EMPTY_CELL)
        rows.append("".join(row))
    return "\n".join(rows) + "\n"


def _on_clip_border(x: int, y: int, rect: ClipRectangle) -> bool:
    if not rect.contains(x, y):
        return False
    return x in (rect.xmin, rect.xmax) or y in (rect.ymin, rect.ymax)


class SceneWriter:
    """Writes scenes and rendered output to disk.

    Example:
        writer = SceneWriter(Path("out.json"))
        writer.write_pixels(pixels, grid_size=20)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the scene writer.

        Args:
            output_path: Path where output will be saved
        """
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        """Destination path."""
        return self._output_path

    def _write_text(self, text: str) -> None:
        try:
            self._output_path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise SceneSaveError(str(self._output_path), str(e)) from e

    def write_scene(self, scene: Scene, grid_size: int | None = None) -> None:
        """Save a scene as JSON.

        Args:
            scene: Scene to save
            grid_size: Grid size to record alongside the scene (omitted if None)

        Raises:
            SceneSaveError: If the file cannot be written
        """
        data = scene.to_dict()
        if grid_size is not None:
            data = {"grid_size": grid_size, **data}
        self._write_text(json.dumps(data, indent=2) + "\n")

    def write_pixels(self, pixels: PixelSet, grid_size: int) -> None:
        """Save a rendered pixel set as JSON.

        Raises:
            SceneSaveError: If the file cannot be written
        """
        self._write_text(json.dumps(pixels_to_dict(pixels, grid_size)) + "\n")

    def write_text_grid(
        self,
        pixels: PixelSet,
        grid_size: int,
        clip_rect: ClipRectangle | None = None,
    ) -> None:
        """Save a rendered pixel set as a text picture.

        Raises:
            SceneSaveError: If the file cannot be written
        """
        self._write_text(format_text_grid(pixels, grid_size, clip_rect))

    def write(
        self,
        pixels: PixelSet,
        grid_size: int,
        clip_rect: ClipRectangle | None = None,
    ) -> None:
        """Save a pixel set, picking the format from the file extension.

        ``.txt`` writes a text grid; anything else writes pixel JSON.
        """
        if self._output_path.suffix.lower() == ".txt":
            self.write_text_grid(pixels, grid_size, clip_rect)
        else:
            self.write_pixels(pixels, grid_size)

    @staticmethod
    def get_output_path(input_path: Path, tag: str, extension: str = ".json") -> Path:
        """Generate a sibling output path.

        Converts: scene.json -> scene-rendered.json (tag "rendered")

        Args:
            input_path: Original scene file path
            tag: Suffix appended to the stem
            extension: Output extension

        Returns:
            Path next to the input
        """
        return input_path.parent / f"{input_path.stem}-{tag}{extension}"
