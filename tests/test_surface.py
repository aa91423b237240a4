"""Tests for geoview_render.surface."""

import numpy as np
import pytest
from unittest.mock import MagicMock, patch

from geoview_render import FrameSurface, VideoSinkSurface
from geoview_render.surface import SurfaceUnavailableError


def solid_frame(value: int, width: int = 8, height: int = 6) -> np.ndarray:
    return np.full((height, width, 3), value, dtype=np.uint8)


class TestFrameSurface:
    """In-memory surface."""

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            FrameSurface(0, 10)

    def test_submit_keeps_last_frame(self):
        on_frame = MagicMock()
        surface = FrameSurface(8, 6, on_frame=on_frame)

        surface.submit(solid_frame(1))
        surface.submit(solid_frame(2))

        assert surface.submitted_frames == 2
        assert surface.last_frame[0, 0].tolist() == [2, 2, 2]
        assert on_frame.call_count == 2

    def test_released_surface(self):
        surface = FrameSurface(8, 6)
        surface.release()

        assert surface.try_acquire_drawing_target() is None
        with pytest.raises(SurfaceUnavailableError):
            surface.submit(solid_frame(0))

    def test_wait_for_frames_timeout(self):
        assert FrameSurface(8, 6).wait_for_frames(1, timeout=0.01) is False


@pytest.fixture
def sink():
    """Stand-in for supervision's VideoSink recording written frames."""
    with patch("geoview_render.surface.sv.VideoSink") as video_sink:
        yield video_sink.return_value


class TestVideoSinkSurface:
    """Video recording surface."""

    def test_hold_repeats_last_frame(self, sink, tmp_path):
        with VideoSinkSurface(str(tmp_path / "out.mp4"), 8, 6, fps=10) as surface:
            surface.submit(solid_frame(7))
            assert surface.hold(0.5) == 5

        assert surface.written_frames == 6
        assert surface.submitted_frames == 1
        assert sink.write_frame.call_count == 6
        assert sink.write_frame.call_args[0][0][0, 0].tolist() == [7, 7, 7]

    def test_hold_before_first_frame(self, sink, tmp_path):
        with VideoSinkSurface(str(tmp_path / "out.mp4"), 8, 6, fps=10) as surface:
            assert surface.hold(1.0) == 0

        assert surface.written_frames == 0

    def test_submit_after_close(self, sink, tmp_path):
        with VideoSinkSurface(str(tmp_path / "out.mp4"), 8, 6) as surface:
            pass

        with pytest.raises(SurfaceUnavailableError):
            surface.submit(solid_frame(0))
