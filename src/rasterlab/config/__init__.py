"""Configuration management for rasterlab.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GridConfig: Grid extent and Bezier sampling
- ClippingConfig: Clip window behavior
- AssociationConfig: Loose-pixel association tolerances
- FillConfig: Flood fill algorithm selection
- LoggingConfig: Logging settings
- RasterLabSettings: Main application settings
"""

from rasterlab.config.settings import (
    AssociationConfig,
    ClippingConfig,
    FillAlgorithm,
    FillConfig,
    GridConfig,
    LoggingConfig,
    RasterLabSettings,
    get_default_settings,
)

__all__ = [
    "AssociationConfig",
    "ClippingConfig",
    "FillAlgorithm",
    "FillConfig",
    "GridConfig",
    "LoggingConfig",
    "RasterLabSettings",
    "get_default_settings",
]
