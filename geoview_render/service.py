"""
Render Loop Service - Continuous map redraw on a dedicated worker thread.

This module provides the RenderLoop class which owns the scene (features and
map bounds) and the camera, generates LOD models once the surface size is
known, and redraws whenever the redraw flag is raised.

Threading Model:
- Input Thread (caller): load(), scroll(), scale_by(), feature_at_point(),
  force_redraw(), colour changes on features
- Render Thread (ours): LOD generation, frame drawing, surface submit

Thread Safety:
- camera: immutable CameraState swapped by assignment, no lock
- redraw flag: threading.Event
- features, LOD pending flag: swapped by load() under the state lock,
  refused while running
- feature colours: single attribute writes, at most one stale frame
"""

import logging
import threading
import time
from enum import Enum
from typing import Any, Optional, Tuple

import numpy as np

from geoview_map import BoundingBox, Feature, FeatureStage, Point, load_feature_collection
from geoview_map.rendering import clear_frame
from geoview_render.camera import Camera, CameraState
from geoview_render.config import RenderConfig
from geoview_render.logging import LogEvent, StructuredLogger
from geoview_render.surface import DrawableSurface, SurfaceUnavailableError

logger = logging.getLogger(__name__)


class LoadWhileRunningError(RuntimeError):
    """Raised when a scene load is attempted while the render loop runs."""


class RenderState(Enum):
    """Render loop lifecycle."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class RenderLoop:
    """
    Owns the scene and camera and redraws them on a worker thread.

    Lifecycle:
        IDLE --start()--> RUNNING --stop()--> STOPPING --(joined)--> STOPPED
        STOPPED --start()--> RUNNING  (new worker, LOD models are kept)

    Usage:
        loop = RenderLoop(RenderConfig())
        loop.load(decoded_geojson)
        loop.start(surface)        # non-blocking

        loop.scroll(12.0, 0.0)     # from the input thread
        feature = loop.feature_at_point(Point(200.0, 150.0))

        loop.stop()                # returns once the worker exited
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()
        self.camera = Camera(
            min_scale=self.config.camera.min_scale,
            max_scale=self.config.camera.max_scale,
        )

        self.stroke_style = self.config.style.stroke_style()
        self.fill_style = self.config.style.fill_style()

        self._features: Tuple[Feature, ...] = ()
        self._map_bounds = BoundingBox.empty()
        self._lod_pending = False

        self._redraw = threading.Event()
        self._redraw.set()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._surface: Optional[DrawableSurface] = None
        self._state = RenderState.IDLE
        self._state_lock = threading.Lock()

        self.slog = StructuredLogger(component="render_loop")
        self._frame_slog = self.slog

    # ─────────────────────────────────────────────────────────────────────
    # Scene
    # ─────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> RenderState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state in (RenderState.RUNNING, RenderState.STOPPING)

    @property
    def features(self) -> Tuple[Feature, ...]:
        return self._features

    @property
    def map_bounds(self) -> BoundingBox:
        return self._map_bounds

    def load(self, collection: Any) -> int:
        """
        Replace the scene with the features of a decoded FeatureCollection.

        Returns:
            Number of features loaded

        Raises:
            LoadWhileRunningError: If the loop is running (scene unchanged)
        """
        # Held across parsing so start() cannot slip in between check and swap
        with self._state_lock:
            if self.is_running:
                self.slog.error(
                    event=LogEvent.LOAD_WHILE_RUNNING,
                    message="Load refused, render loop already running",
                    metadata={'state': self._state.value},
                )
                raise LoadWhileRunningError("Render loop already running")

            scene = load_feature_collection(
                collection,
                stroke_color=self.config.style.stroke_color,
                fill_color=self.config.style.fill_color,
            )

            self._features = scene.features
            self._map_bounds = scene.map_bounds
            self._lod_pending = True
            self._redraw.set()

        self.slog.info(
            event=LogEvent.SCENE_LOADED,
            message="Scene loaded",
            metadata={'features': len(scene.features), 'skipped': scene.skipped},
        )
        return len(scene.features)

    def aspect_ratio(self) -> float:
        """Map height / width (1.0 for an empty or flat map)."""
        bounds = self._map_bounds
        if bounds.is_empty or bounds.width <= 0:
            return 1.0
        return bounds.height / bounds.width

    # ─────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────

    def start(self, surface: DrawableSurface) -> None:
        """
        Start redrawing onto a surface (non-blocking).

        Ignored with a warning if the loop is already running.
        """
        with self._state_lock:
            if self.is_running:
                logger.warning("Render loop already running")
                return

            self._surface = surface
            self._stop_event.clear()
            self._redraw.set()
            self._state = RenderState.RUNNING

            self._thread = threading.Thread(
                target=self._run,
                name="RenderLoopThread",
                daemon=True,
            )
            self._thread.start()

    def stop(self, timeout: Optional[float] = 5.0) -> bool:
        """
        Stop the worker and wait until it has exited.

        The stop event interrupts the inter-frame wait immediately.

        Returns:
            True if the worker exited within timeout
        """
        with self._state_lock:
            if self._thread is None:
                logger.warning("Render loop not running")
                return True

            if self._state is RenderState.RUNNING:
                self._state = RenderState.STOPPING
            self._stop_event.set()
            thread = self._thread

        thread.join(timeout=timeout)
        if thread.is_alive():
            logger.error(f"Render thread did not exit within {timeout}s")
            return False

        with self._state_lock:
            self._thread = None
            self._surface = None
            self._state = RenderState.STOPPED
        return True

    def _run(self) -> None:
        """
        Render thread body.

        Thread: RenderLoopThread
        """
        surface = self._surface
        self._frame_slog = self.slog.bind(surface=f"{surface.width}x{surface.height}")
        self.slog.info(
            event=LogEvent.RENDER_LOOP_STARTED,
            message="Render loop started",
            metadata={'width': surface.width, 'height': surface.height},
        )

        try:
            with self._state_lock:
                lod_pending = self._lod_pending
            if lod_pending:
                self._generate_lod_models(surface.width)

            interval = self.config.frame_interval
            while not self._stop_event.is_set():
                if self._redraw.is_set():
                    self._redraw.clear()
                    self._render_frame(surface)

                # Returns early when stop() sets the event
                self._stop_event.wait(interval)
        except Exception as e:
            self.slog.error(
                event=LogEvent.LOOP_ERROR,
                message="Render loop aborted",
                exc_info=e,
            )
        finally:
            if self._state is RenderState.RUNNING:
                self._state = RenderState.STOPPING
            self.slog.info(
                event=LogEvent.RENDER_LOOP_STOPPED,
                message="Render loop stopped",
            )

    def _generate_lod_models(self, width: int) -> None:
        """
        Build LOD models for every feature (render thread, before first frame).

        Features that already have models are skipped, so a run that failed
        partway is completed by the next start().
        """
        aspect_ratio = self.aspect_ratio()
        lod = self.config.lod
        start = time.perf_counter()

        for feature in self._features:
            if feature.stage is FeatureStage.LOD_READY:
                continue
            feature.generate_lod_models(width, aspect_ratio, lod.zoom_levels, lod.cutoff_distance)

        with self._state_lock:
            self._lod_pending = False
        self.slog.info(
            event=LogEvent.RENDER_LOD_GENERATED,
            message="LOD models generated",
            metadata={
                'features': len(self._features),
                'width': width,
                'aspect_ratio': aspect_ratio,
                'zoom_levels': list(lod.zoom_levels),
                'elapsed_ms': round((time.perf_counter() - start) * 1000.0, 2),
            },
        )

    def _render_frame(self, surface: DrawableSurface) -> None:
        """
        Draw one frame. Failures are logged; the loop carries on.

        Thread: RenderLoopThread
        """
        start = time.perf_counter()

        try:
            frame = surface.try_acquire_drawing_target()
            if frame is None:
                raise SurfaceUnavailableError("No drawing target")

            frame = self.draw_scene(frame, self.camera.state)
            surface.submit(frame)
        except SurfaceUnavailableError as e:
            # Retry on the next cycle
            self._redraw.set()
            self._frame_slog.debug(
                event=LogEvent.RENDER_FRAME_SKIPPED,
                message=f"Frame skipped: {e}",
            )
            return
        except Exception as e:
            self._frame_slog.error(
                event=LogEvent.FRAME_ERROR,
                message="Frame failed",
                exc_info=e,
            )
            return

        self._frame_slog.debug(
            event=LogEvent.RENDER_FRAME_DRAWN,
            message="Frame drawn",
            metadata={
                'render_ms': round((time.perf_counter() - start) * 1000.0, 2),
                'features': len(self._features),
                'scale': self.camera.state.scale,
            },
        )

    def draw_scene(self, frame: np.ndarray, camera: CameraState) -> np.ndarray:
        """Clear and draw every feature in scene order with one camera snapshot."""
        frame = clear_frame(frame, self.config.style.background_color)

        for feature in self._features:
            frame = feature.draw(
                frame,
                camera.scale,
                camera.offset_x,
                camera.offset_y,
                self.stroke_style,
                self.fill_style,
            )

        return frame

    # ─────────────────────────────────────────────────────────────────────
    # Camera and queries (Input Thread)
    # ─────────────────────────────────────────────────────────────────────

    def scroll(self, dx: float, dy: float) -> None:
        self.camera.scroll(dx, dy)
        self._redraw.set()

    def scale_by(self, factor: float, focus_x: float, focus_y: float) -> None:
        self.camera.scale_by(factor, focus_x, focus_y)
        self._redraw.set()

    def force_redraw(self) -> None:
        self._redraw.set()

    @property
    def redraw_pending(self) -> bool:
        return self._redraw.is_set()

    def feature_at_point(self, screen_point: Point) -> Optional[Feature]:
        """
        First feature (in load order) containing a screen point.

        The point is mapped to model space with the current camera.
        """
        model_point = self.camera.to_model(screen_point)

        for feature in self._features:
            if feature.contains(model_point):
                return feature

        return None
