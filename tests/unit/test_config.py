"""Unit tests for configuration settings."""

import pytest
from pydantic import ValidationError

from rasterlab.config import (
    AssociationConfig,
    ClippingConfig,
    FillAlgorithm,
    FillConfig,
    GridConfig,
    RasterLabSettings,
    get_default_settings,
)


class TestDefaults:
    """Tests for default values."""

    def test_default_settings(self):
        """Test the aggregate defaults."""
        settings = get_default_settings()
        assert settings.grid.size == 20
        assert settings.grid.bezier_steps == 100
        assert settings.clipping.enabled is False
        assert settings.clipping.round_each_pass is True
        assert settings.association.bbox_padding == 2
        assert settings.association.line_tolerance == 1.0
        assert settings.fill.algorithm is FillAlgorithm.SCANLINE
        assert settings.logging.log_file is None
        assert settings.logging.log_level == "WARNING"

    def test_nested_override(self):
        """Test nested configs can be replaced individually."""
        settings = RasterLabSettings(
            grid=GridConfig(size=64),
            clipping=ClippingConfig(enabled=True, round_each_pass=False),
        )
        assert settings.grid.size == 64
        assert settings.grid.bezier_steps == 100
        assert settings.clipping.round_each_pass is False

    def test_fill_algorithm_from_string(self):
        """Test the enum accepts its string value."""
        assert FillConfig(algorithm="recursive").algorithm is FillAlgorithm.RECURSIVE


class TestValidation:
    """Tests for range validation."""

    @pytest.mark.parametrize("size", [0, -5, 513])
    def test_grid_size_range(self, size):
        """Test grid sizes outside 1..512 are rejected."""
        with pytest.raises(ValidationError):
            GridConfig(size=size)

    def test_bezier_steps_range(self):
        """Test a zero step count is rejected."""
        with pytest.raises(ValidationError):
            GridConfig(bezier_steps=0)

    def test_padding_range(self):
        """Test negative padding is rejected."""
        with pytest.raises(ValidationError):
            AssociationConfig(bbox_padding=-1)

    def test_unknown_algorithm(self):
        """Test an unknown fill algorithm is rejected."""
        with pytest.raises(ValidationError):
            FillConfig(algorithm="diagonal")
