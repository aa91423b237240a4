"""Tests for geoview_render.config."""

from pathlib import Path

import pytest

from geoview_map.rendering import BLACK, BLUE, WHITE, parse_color
from geoview_render import CameraConfig, LodConfig, RenderConfig, StyleConfig

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config" / "render.yaml"


class TestDefaults:
    """Default values used by the render loop."""

    def test_render_defaults(self):
        config = RenderConfig()
        assert config.frame_interval_ms == 15
        assert config.frame_interval == pytest.approx(0.015)
        assert config.lod.zoom_levels == (1.0, 3.0, 5.0)
        assert config.lod.cutoff_distance == pytest.approx(3.0)
        assert (config.camera.min_scale, config.camera.max_scale) == (1.0, 5.0)

    def test_style_defaults(self):
        style = StyleConfig()
        assert style.fill_color == BLUE
        assert style.stroke_color == BLACK
        assert style.background_color == WHITE
        assert style.stroke_style().thickness == 1
        assert style.fill_style().color == BLUE


class TestValidation:
    """Invalid values are rejected at construction."""

    @pytest.mark.parametrize("levels", [(0.0, 1.0), (-1.0,), (2.0, 2.0)])
    def test_bad_zoom_levels(self, levels):
        with pytest.raises(ValueError):
            LodConfig(zoom_levels=levels)

    def test_bad_cutoff(self):
        with pytest.raises(ValueError):
            LodConfig(cutoff_distance=0.0)

    def test_bad_scale_limits(self):
        with pytest.raises(ValueError):
            CameraConfig(min_scale=3.0, max_scale=2.0)
        with pytest.raises(ValueError):
            CameraConfig(min_scale=0.0)

    @pytest.mark.parametrize("interval", [0, 1001])
    def test_bad_frame_interval(self, interval):
        with pytest.raises(ValueError):
            RenderConfig(frame_interval_ms=interval)

    def test_bad_stroke_width(self):
        with pytest.raises(ValueError):
            StyleConfig(stroke_width=0)

    def test_bad_colour(self):
        with pytest.raises(ValueError):
            StyleConfig(fill_color="blue")


class TestParseColor:
    """Tests for parse_color."""

    def test_hex_with_alpha(self):
        assert parse_color("#80FF0000") == 0x80FF0000

    def test_hex_without_alpha_is_opaque(self):
        assert parse_color("#00FF00") == 0xFF00FF00

    def test_int_passthrough(self):
        assert parse_color(0xFF123456) == 0xFF123456

    @pytest.mark.parametrize("value", [True, -1, 0x1FFFFFFFF, "#GG000000", "FF000000", "#123", None])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_color(value)


class TestFromYaml:
    """Tests for RenderConfig.from_yaml."""

    def test_full_file(self, tmp_path):
        path = tmp_path / "render.yaml"
        path.write_text(
            "frame_interval_ms: 30\n"
            "lod:\n"
            "  zoom_levels: [1, 2]\n"
            "  cutoff_distance: 2.0\n"
            "camera:\n"
            "  min_scale: 0.5\n"
            "  max_scale: 8.0\n"
            "style:\n"
            "  fill_color: \"#FF00FFFF\"\n"
            "  stroke_width: 2\n"
        )

        config = RenderConfig.from_yaml(path)

        assert config.frame_interval_ms == 30
        assert config.lod.zoom_levels == (1.0, 2.0)
        assert config.camera.max_scale == pytest.approx(8.0)
        assert config.style.fill_color == 0xFF00FFFF
        assert config.style.stroke_color == BLACK
        assert config.style.stroke_width == 2

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert RenderConfig.from_yaml(path) == RenderConfig()

    def test_repo_config_matches_defaults(self):
        assert RenderConfig.from_yaml(REPO_CONFIG) == RenderConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RenderConfig.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("camera:\n  min_scale: 10\n  max_scale: 1\n")
        with pytest.raises(ValueError):
            RenderConfig.from_yaml(path)
