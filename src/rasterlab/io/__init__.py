"""Scene I/O layer for rasterlab.

This module handles reading scene descriptions and writing scenes and
rendered output. It is the boundary between files and the domain models.

Key responsibilities:
- Load JSON scene descriptions
- Save scenes back to JSON
- Save rendered pixel sets as JSON or as a text grid

Key classes:
- SceneReader: Load scenes
- SceneWriter: Save scenes and pixels
"""

from rasterlab.io.reader import SceneReader
from rasterlab.io.writer import SceneWriter, format_text_grid, pixels_to_dict

__all__ = [
    "SceneReader",
    "SceneWriter",
    "format_text_grid",
    "pixels_to_dict",
]
