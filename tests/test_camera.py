"""Tests for geoview_render.camera."""

import pytest

from geoview_map import Point
from geoview_render import Camera, CameraState


class TestCameraState:
    """Tests for the model <-> screen transform."""

    def test_identity(self):
        state = CameraState()
        assert state.to_model(Point(10.0, 20.0)) == Point(10.0, 20.0)

    def test_round_trip(self):
        state = CameraState(offset_x=-12.0, offset_y=3.5, scale=2.5)
        model = state.to_model(Point(100.0, 40.0))
        screen = state.to_screen(model)

        assert screen.x == pytest.approx(100.0)
        assert screen.y == pytest.approx(40.0)


class TestCamera:
    """Tests for scroll / scale_by."""

    def test_scroll_divides_by_scale(self):
        camera = Camera()
        camera.scale_by(2.0, 0.0, 0.0)
        camera.scroll(10.0, -4.0)

        assert camera.state.offset_x == pytest.approx(-5.0)
        assert camera.state.offset_y == pytest.approx(2.0)

    def test_scale_clamped_to_max(self):
        """Repeated zoom in converges on max_scale."""
        camera = Camera(min_scale=1.0, max_scale=5.0)
        for _ in range(10):
            camera.scale_by(1.5, 100.0, 100.0)

        assert camera.state.scale == pytest.approx(5.0)

    def test_scale_clamped_to_min(self):
        """Zooming out below min_scale leaves scale and offset unchanged."""
        camera = Camera(min_scale=1.0, max_scale=5.0)
        camera.scale_by(0.5, 300.0, 200.0)

        assert camera.state == CameraState(0.0, 0.0, 1.0)

    @pytest.mark.parametrize("factor", [1.25, 3.0, 0.8])
    def test_focus_point_fixed(self, factor):
        """The model point under the focus stays under the focus."""
        camera = Camera()
        camera.scale_by(2.0, 50.0, 50.0)
        camera.scroll(7.0, -3.0)

        focus = Point(320.0, 240.0)
        before = camera.to_model(focus)
        camera.scale_by(factor, focus.x, focus.y)
        after = camera.to_model(focus)

        assert after.x == pytest.approx(before.x)
        assert after.y == pytest.approx(before.y)

    def test_reset(self):
        camera = Camera()
        camera.scale_by(3.0, 10.0, 10.0)
        camera.reset()
        assert camera.state == CameraState()

    def test_state_is_snapshot(self):
        """Mutations swap in a new state; old snapshots do not change."""
        camera = Camera()
        snapshot = camera.state
        camera.scroll(10.0, 10.0)

        assert snapshot == CameraState()
        assert camera.state is not snapshot
