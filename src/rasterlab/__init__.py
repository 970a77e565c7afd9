"""RasterLab - A raster-graphics teaching sandbox.

RasterLab rasterizes primitive shapes (pixels, lines, circles, ellipses,
Bezier curves, polylines and polygons) onto a discrete pixel grid using
classical scan-conversion algorithms. Shapes can be clipped against a
rectangular window, enclosed regions flood-filled, and shapes transformed
together with the loose pixels that belong to them.

Example:
    $ rasterlab render scene.json --clip 5,5,15,15

This prints the rasterized grid for the scene with the clip window applied.
"""

__version__ = "0.1.0"
__author__ = "RasterLab Contributors"

__all__ = ["__author__", "__version__"]
