"""
Drawable Surface Module
=======================

Contract between the render loop and whatever presents its frames.

Design:
- DrawableSurface is a Protocol (structural typing, no base class needed)
- Targets are HxWx3 uint8 BGR numpy frames
- try_acquire_drawing_target() returns None (or raises
  SurfaceUnavailableError) when no frame can be drawn right now; the loop
  skips that frame and retries next cycle
- Acquire and submit are only called from the render thread
"""

import threading
from pathlib import Path
from typing import Callable, Optional, Protocol

import numpy as np
import supervision as sv


class SurfaceUnavailableError(RuntimeError):
    """Raised when a surface cannot hand out or accept a frame right now."""


class DrawableSurface(Protocol):
    """Protocol for render targets (interface)."""

    width: int
    height: int

    def try_acquire_drawing_target(self) -> Optional[np.ndarray]:
        """Get a frame to draw on, or None if the surface is not ready."""
        ...

    def submit(self, target: np.ndarray) -> None:
        """Present a fully drawn frame."""
        ...


class FrameSurface:
    """
    In-memory surface keeping the most recently submitted frame.

    Thread Safety:
    - Render thread calls acquire/submit
    - Any thread may read last_frame / wait_for_frames (lock + condition)

    Usage:
        surface = FrameSurface(width=1280, height=720)
        view.on_surface_available(surface)
        surface.wait_for_frames(1, timeout=2.0)
        cv2.imwrite("map.png", surface.last_frame)
    """

    def __init__(
        self,
        width: int,
        height: int,
        on_frame: Optional[Callable[[np.ndarray], None]] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.on_frame = on_frame
        self.available = True

        self._last_frame: Optional[np.ndarray] = None
        self._submitted = 0
        self._condition = threading.Condition()

    def try_acquire_drawing_target(self) -> Optional[np.ndarray]:
        if not self.available:
            return None
        return np.zeros((self.height, self.width, 3), dtype=np.uint8)

    def submit(self, target: np.ndarray) -> None:
        if not self.available:
            raise SurfaceUnavailableError("Surface released before submit")

        with self._condition:
            self._last_frame = target
            self._submitted += 1
            self._condition.notify_all()

        if self.on_frame is not None:
            self.on_frame(target)

    @property
    def last_frame(self) -> Optional[np.ndarray]:
        with self._condition:
            return self._last_frame

    @property
    def submitted_frames(self) -> int:
        with self._condition:
            return self._submitted

    def wait_for_frames(self, count: int, timeout: Optional[float] = None) -> bool:
        """
        Block until at least count frames were submitted.

        Returns:
            True if reached, False on timeout
        """
        with self._condition:
            return self._condition.wait_for(lambda: self._submitted >= count, timeout=timeout)

    def release(self) -> None:
        """Mark the surface as gone; later acquires return None."""
        self.available = False


class VideoSinkSurface(FrameSurface):
    """
    Surface that records frames to a video file.

    Uses supervision's VideoSink; use as a context manager so the file is
    finalized. An idle scene submits no frames, so pauses are recorded with
    hold(), which repeats the last frame for the pause's share of fps.

    Usage:
        with VideoSinkSurface("replay.mp4", 1280, 720, fps=30) as surface:
            view.on_surface_available(surface)
            surface.hold(0.5)
            ...
            view.on_surface_destroyed()
    """

    def __init__(self, target_path: str, width: int, height: int, fps: int = 30):
        super().__init__(width, height)
        self.target_path = target_path
        self.video_info = sv.VideoInfo(width=width, height=height, fps=fps)
        self._sink: Optional[sv.VideoSink] = None
        # Render thread (submit) and caller (hold) both write
        self._write_lock = threading.Lock()
        self._written = 0

    def __enter__(self) -> "VideoSinkSurface":
        Path(self.target_path).parent.mkdir(parents=True, exist_ok=True)
        self._sink = sv.VideoSink(self.target_path, self.video_info)
        self._sink.__enter__()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()
        with self._write_lock:
            if self._sink is not None:
                self._sink.__exit__(exc_type, exc_value, traceback)
                self._sink = None

    @property
    def written_frames(self) -> int:
        """Frames in the video, held repeats included."""
        with self._write_lock:
            return self._written

    def _write(self, frame: np.ndarray, times: int = 1) -> None:
        with self._write_lock:
            if self._sink is None:
                raise SurfaceUnavailableError("Video sink is not open")
            for _ in range(times):
                self._sink.write_frame(frame)
            self._written += times

    def submit(self, target: np.ndarray) -> None:
        self._write(target)
        super().submit(target)

    def hold(self, seconds: float) -> int:
        """
        Repeat the last submitted frame for a pause of the given length.

        Returns:
            Number of frames written (0 before the first frame)
        """
        frame = self.last_frame
        count = int(round(seconds * self.video_info.fps))
        if frame is None or count <= 0:
            return 0

        self._write(frame, count)
        return count
