"""Tests for the Pillow previews."""

import pytest

from edgelab.geometry import Point, path_from_points
from edgelab.grid import wavy_grid
from edgelab.params import StripeParams, WavyGridParams
from edgelab.raster import hex_to_rgb, render_path, render_pathset, render_stripes, save_png
from edgelab.svg import ExportError


class TestHexToRgb:

    @pytest.mark.parametrize("value, expected", [
        ("#ffffff", (255, 255, 255)),
        ("3b82f6", (59, 130, 246)),
        ("#abc", (170, 187, 204)),
    ])
    def test_valid(self, value, expected):
        assert hex_to_rgb(value) == expected

    @pytest.mark.parametrize("value", ["#12345", "#gggggg", ""])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            hex_to_rgb(value)


class TestRender:

    def test_closed_path_is_filled(self):
        path = path_from_points([Point(10, 10), Point(90, 10), Point(90, 90), Point(10, 90)])
        img = render_path(path, 100, 100, fill="#ff0000")
        assert img.size == (100, 100)
        assert img.getpixel((50, 50)) == (255, 0, 0, 255)
        assert img.getpixel((2, 2)) == (241, 245, 249, 255)

    def test_fractional_size_rounds_up(self):
        path = path_from_points([Point(0, 0), Point(5, 0), Point(5, 5)])
        assert render_path(path, 10.2, 4.5).size == (11, 5)

    def test_pathset_is_tiled(self):
        grid = wavy_grid(WavyGridParams(randomness=0))
        img = render_pathset(grid, 2, 2, stroke="#3b82f6")
        assert img.size == (80, 80)
        stroke = (59, 130, 246, 255)
        assert img.getpixel((20, 10)) == stroke
        assert img.getpixel((60, 50)) == stroke
        assert img.getpixel((20, 20)) == (255, 255, 255, 255)

    def test_stripes(self):
        img = render_stripes(StripeParams(stripe_width=6, pattern_size=30), 40, 10)
        assert img.mode == "RGBA"
        assert img.size == (40, 10)
        assert img.getpixel((0, 0)) == (212, 212, 212, 216)
        assert img.getpixel((10, 0)) == (245, 245, 245, 216)
        assert img.getpixel((20, 0))[3] == 0


class TestSavePng:

    def test_save(self, tmp_path):
        out = tmp_path / "preview.png"
        path = path_from_points([Point(0, 0), Point(5, 0), Point(5, 5)])
        assert save_png(render_path(path, 8, 8), str(out)) == str(out)
        assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_missing_directory(self, tmp_path):
        path = path_from_points([Point(0, 0), Point(5, 0), Point(5, 5)])
        with pytest.raises(ExportError):
            save_png(render_path(path, 8, 8), str(tmp_path / "missing" / "x.png"))
