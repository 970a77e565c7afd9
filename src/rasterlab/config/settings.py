"""Configuration settings for RasterLab."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_GRID_SIZE = 20
DEFAULT_BEZIER_STEPS = 100


class FillAlgorithm(str, Enum):
    """Flood fill implementation."""

    RECURSIVE = "recursive"
    SCANLINE = "scanline"


class GridConfig(BaseModel):
    """Configuration for the pixel grid."""

    size: int = Field(
        default=DEFAULT_GRID_SIZE,
        ge=1,
        le=512,
        description="Grid extent; valid coordinates are 0..size-1 on both axes",
    )
    bezier_steps: int = Field(
        default=DEFAULT_BEZIER_STEPS,
        ge=1,
        le=10000,
        description="Number of samples along a Bezier curve",
    )


class ClippingConfig(BaseModel):
    """Configuration for clip window handling."""

    enabled: bool = Field(
        default=False,
        description="Apply the scene clip rectangle when rendering",
    )
    round_each_pass: bool = Field(
        default=True,
        description="Round polygon intersections after every Sutherland-Hodgman pass "
        "instead of once at the end",
    )


class AssociationConfig(BaseModel):
    """Configuration for deciding which loose pixels move with a shape."""

    bbox_padding: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Cells added around polyline/Bezier vertex bounds",
    )
    line_tolerance: float = Field(
        default=1.0,
        ge=0.0,
        le=10.0,
        description="Maximum distance from a line segment for a pixel to travel with it",
    )


class FillConfig(BaseModel):
    """Configuration for flood fill."""

    algorithm: FillAlgorithm = Field(
        default=FillAlgorithm.SCANLINE,
        description="Flood fill implementation",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class RasterLabSettings(BaseModel):
    """Main application settings."""

    grid: GridConfig = Field(default_factory=GridConfig)
    clipping: ClippingConfig = Field(default_factory=ClippingConfig)
    association: AssociationConfig = Field(default_factory=AssociationConfig)
    fill: FillConfig = Field(default_factory=FillConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> RasterLabSettings:
    """Get default application settings."""
    return RasterLabSettings()
