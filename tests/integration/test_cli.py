"""Integration tests for the command-line interface."""

import json
import time
from pathlib import Path

import pytest
from typer.testing import CliRunner

from rasterlab import __version__
from rasterlab.cli.app import app
from rasterlab.domain import Circle, Line, PixelShape, Point, Polygon, Scene

runner = CliRunner()


def write_scene(path: Path, scene: Scene, grid_size: int | None = None) -> Path:
    """Write a scene file the way users author them."""
    data = scene.to_dict()
    if grid_size is not None:
        data["grid_size"] = grid_size
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def line_scene(tmp_path) -> Path:
    """A 5x5 scene with one horizontal line on row 0."""
    scene = Scene(shapes=(Line(Point(0, 0), Point(3, 0)),))
    return write_scene(tmp_path / "line.json", scene, grid_size=5)


@pytest.fixture
def square_scene(tmp_path) -> Path:
    """A 12x12 scene with a closed square outline."""
    square = Polygon((Point(2, 2), Point(8, 2), Point(8, 8), Point(2, 8)))
    return write_scene(tmp_path / "square.json", Scene(shapes=(square,)), grid_size=12)


@pytest.fixture
def circle_scene(tmp_path) -> Path:
    """A circle with a loose pixel at its center."""
    scene = Scene(shapes=(Circle(Point(10, 10), 3), PixelShape(Point(10, 10))))
    return write_scene(tmp_path / "circle.json", scene)


class TestVersion:
    """Tests for the --version flag."""

    def test_version(self):
        """Test --version prints the version and exits cleanly."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "RasterLab" in result.output
        assert __version__ in result.output


class TestRenderCommand:
    """Tests for the render command."""

    def test_render_prints_grid(self, line_scene):
        """Test the rendered grid appears in the output."""
        result = runner.invoke(app, ["render", str(line_scene)])
        assert result.exit_code == 0
        assert "  ####." in result.output
        assert "4 pixels" in result.output

    def test_render_with_clip(self, line_scene):
        """Test --clip limits the pixels and draws the window border."""
        result = runner.invoke(app, ["render", str(line_scene), "--clip", "1,0,2,4"])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "  .##.." in lines
        assert "  .++.." in lines

    def test_render_grid_size_override(self, line_scene):
        """Test --grid-size overrides the scene file."""
        result = runner.invoke(app, ["render", str(line_scene), "--grid-size", "3"])
        assert result.exit_code == 0
        assert "3 pixels" in result.output

    def test_render_json_output(self, line_scene, tmp_path):
        """Test --output writes sorted pixel JSON."""
        out = tmp_path / "pixels.json"
        result = runner.invoke(app, ["render", str(line_scene), "-o", str(out), "-q"])
        assert result.exit_code == 0
        assert json.loads(out.read_text()) == {
            "grid_size": 5,
            "pixels": [[0, 0], [1, 0], [2, 0], [3, 0]],
        }

    def test_render_text_output(self, line_scene, tmp_path):
        """Test a .txt destination receives the text grid."""
        out = tmp_path / "grid.txt"
        result = runner.invoke(app, ["render", str(line_scene), "-o", str(out), "-q"])
        assert result.exit_code == 0
        assert out.read_text().splitlines()[0] == "####."

    def test_render_quiet(self, line_scene):
        """Test --quiet suppresses console output."""
        result = runner.invoke(app, ["render", str(line_scene), "--quiet"])
        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_render_missing_file(self, tmp_path):
        """Test a missing scene file exits with an error."""
        result = runner.invoke(app, ["render", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Could not load scene" in result.output

    def test_render_malformed_scene(self, tmp_path):
        """Test a malformed scene exits with an error."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"shapes": [{"type": "star"}]}))
        result = runner.invoke(app, ["render", str(path)])
        assert result.exit_code == 1
        assert "star" in result.output

    def test_render_bad_clip(self, line_scene):
        """Test a malformed --clip is a usage error."""
        result = runner.invoke(app, ["render", str(line_scene), "--clip", "1,2"])
        assert result.exit_code == 2


class TestFillCommand:
    """Tests for the fill command."""

    @pytest.mark.parametrize("algorithm", ["scanline", "recursive"])
    def test_fill_interior(self, square_scene, tmp_path, algorithm):
        """Test filling the square interior writes a pixel scene."""
        out = tmp_path / "filled.json"
        result = runner.invoke(
            app,
            ["fill", str(square_scene), "--seed", "5,5", "-a", algorithm, "-o", str(out)],
        )
        assert result.exit_code == 0
        assert "25 cells changed" in result.output

        data = json.loads(out.read_text())
        assert data["grid_size"] == 12
        assert data["mode"] == f"{algorithm}_fill"
        assert len(data["shapes"]) == 49
        assert all(shape["type"] == "pixel" for shape in data["shapes"])

    def test_fill_bad_seed(self, square_scene):
        """Test a malformed seed is a usage error."""
        result = runner.invoke(app, ["fill", str(square_scene), "--seed", "five,5"])
        assert result.exit_code == 2


class TestTransformCommand:
    """Tests for the transform command."""

    def test_translate_moves_associated_pixel(self, circle_scene, tmp_path):
        """Test the loose pixel inside the circle moves with it."""
        out = tmp_path / "moved.json"
        result = runner.invoke(
            app,
            ["transform", str(circle_scene), "-i", "0", "--translate", "2,3", "-o", str(out)],
        )
        assert result.exit_code == 0
        assert "1 associated pixel moved" in result.output

        scene = Scene.from_dict(json.loads(out.read_text()))
        assert scene.shapes == (Circle(Point(12, 13), 3), PixelShape(Point(12, 13)))

    def test_scale_with_anchor(self, circle_scene, tmp_path):
        """Test --anchor sets the fixed point of a scale."""
        out = tmp_path / "scaled.json"
        result = runner.invoke(
            app,
            [
                "transform", str(circle_scene), "-i", "0",
                "--scale", "2,2", "--anchor", "0,0", "-o", str(out), "-q",
            ],
        )
        assert result.exit_code == 0
        scene = Scene.from_dict(json.loads(out.read_text()))
        assert scene.shapes[0] == Circle(Point(20, 20), 6)

    def test_negative_rotation(self, circle_scene):
        """Test a negative angle is accepted as a value."""
        result = runner.invoke(app, ["transform", str(circle_scene), "-i", "0", "--rotate", "-90"])
        assert result.exit_code == 0

    @pytest.mark.parametrize("value", ["nan,1", "1,inf", "-inf,2"])
    def test_rejects_non_finite_scale(self, circle_scene, value):
        """Test nan and infinite scale factors are usage errors."""
        result = runner.invoke(app, ["transform", str(circle_scene), "-i", "0", "--scale", value])
        assert result.exit_code == 2
        assert "finite" in result.output

    @pytest.mark.parametrize("value", ["inf", "nan"])
    def test_rejects_non_finite_rotation(self, circle_scene, value):
        """Test nan and infinite angles are usage errors."""
        result = runner.invoke(app, ["transform", str(circle_scene), "-i", "0", "--rotate", value])
        assert result.exit_code == 2
        assert "finite" in result.output

    def test_requires_one_transform(self, circle_scene):
        """Test omitting the transform is an error."""
        result = runner.invoke(app, ["transform", str(circle_scene), "-i", "0"])
        assert result.exit_code == 1
        assert "exactly one transform" in result.output

    def test_rejects_two_transforms(self, circle_scene):
        """Test combining transforms is an error."""
        result = runner.invoke(
            app,
            ["transform", str(circle_scene), "-i", "0", "--rotate", "90", "--translate", "1,1"],
        )
        assert result.exit_code == 1

    def test_bad_index(self, circle_scene):
        """Test an out-of-range index exits with an error."""
        result = runner.invoke(app, ["transform", str(circle_scene), "-i", "7", "--translate", "1,1"])
        assert result.exit_code == 1
        assert "out of range" in result.output


class TestProjectCommand:
    """Tests for the project command."""

    def test_cube_front_view(self, tmp_path):
        """Test a projected cube is written as twelve lines."""
        out = tmp_path / "cube.json"
        result = runner.invoke(
            app,
            ["project", "--solid", "cube", "-p", "orthogonal", "--view", "front", "-o", str(out)],
        )
        assert result.exit_code == 0
        assert "12 edges" in result.output

        data = json.loads(out.read_text())
        assert len(data["shapes"]) == 12
        assert all(shape["type"] == "line" for shape in data["shapes"])

    @pytest.mark.parametrize("perspective", ["one_point", "two_point", "three_point"])
    def test_pyramid_perspective(self, perspective):
        """Test every perspective variant renders a pyramid."""
        result = runner.invoke(
            app,
            ["project", "--solid", "pyramid", "-p", "perspective", "--perspective", perspective],
        )
        assert result.exit_code == 0
        assert "8 edges" in result.output

    def test_cube_at_viewer_plane(self):
        """Test a cube touching the viewer plane renders promptly."""
        start = time.perf_counter()
        result = runner.invoke(
            app, ["project", "-p", "perspective", "--distance", "1", "--size", "2"]
        )
        assert time.perf_counter() - start < 5.0
        assert result.exit_code == 0
        assert "4 edges" in result.output

    @pytest.mark.parametrize("option", ["--fov", "--angle", "--depth-scale", "--distance", "--size"])
    def test_rejects_non_finite_options(self, option):
        """Test float options refuse nan."""
        result = runner.invoke(app, ["project", option, "nan"])
        assert result.exit_code == 2

    def test_cavalier_cabinet(self):
        """Test the cavalier family accepts its presets."""
        result = runner.invoke(app, ["project", "-p", "cavalier", "--cavalier", "cabinet"])
        assert result.exit_code == 0
        assert "cabinet" in result.output
