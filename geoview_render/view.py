"""
GeoJSON View - Facade for the UI layer.

Wires decoded input (scroll, scale, tap) and surface lifecycle callbacks to
the RenderLoop, and exposes the feature list and default colours.

Threading:
- All public methods are called from the input/UI thread
- The press listener runs on the input thread, before the forced redraw
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from geoview_control import InputRegistry
from geoview_map import Feature, Point
from geoview_render.config import RenderConfig
from geoview_render.logging import LogEvent, StructuredLogger
from geoview_render.service import RenderLoop
from geoview_render.surface import DrawableSurface

logger = logging.getLogger(__name__)

FeaturePressListener = Callable[[Feature], None]


class GeoJsonView:
    """
    Interactive map view over a RenderLoop.

    Usage:
        view = GeoJsonView(RenderConfig.from_yaml("config/render.yaml"))
        view.load_geojson(decoded_geojson)

        def on_press(feature):
            feature.fill_color = CYAN

        view.set_feature_press_listener(on_press)
        view.on_surface_available(surface)

        view.dispatch({"input": "scale", "factor": 1.5, "focus_x": 320, "focus_y": 240})
        view.tap(400.0, 300.0)

        view.on_surface_destroyed()
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()
        self.render_loop = RenderLoop(self.config)
        self.input_registry = InputRegistry()
        self._press_listener: Optional[FeaturePressListener] = None
        self.slog = StructuredLogger(component="view")

        self._setup_input_handlers()

    @classmethod
    def from_config_file(cls, config_path: Path) -> "GeoJsonView":
        return cls(RenderConfig.from_yaml(config_path))

    def _setup_input_handlers(self) -> None:
        registry = self.input_registry
        registry.register(
            "scroll",
            lambda event: self.scroll(float(event["dx"]), float(event["dy"])),
            required=("dx", "dy"),
        )
        registry.register(
            "scale",
            lambda event: self.scale_by(
                float(event["factor"]),
                float(event.get("focus_x", 0.0)),
                float(event.get("focus_y", 0.0)),
            ),
            required=("factor",),
        )
        registry.register(
            "tap",
            lambda event: self.tap(float(event["x"]), float(event["y"])),
            required=("x", "y"),
        )
        registry.register("redraw", lambda event: self.render_loop.force_redraw())

    # ─────────────────────────────────────────────────────────────────────
    # Scene
    # ─────────────────────────────────────────────────────────────────────

    def load_geojson(self, collection: Any) -> int:
        """
        Load a decoded FeatureCollection (before the surface is available).

        Raises:
            LoadWhileRunningError: If the render loop is running
        """
        return self.render_loop.load(collection)

    def get_all_features(self) -> Tuple[Feature, ...]:
        return self.render_loop.features

    def set_feature_press_listener(self, listener: Optional[FeaturePressListener]) -> None:
        self._press_listener = listener

    @property
    def default_fill_color(self) -> int:
        return self.config.style.fill_color

    @property
    def default_stroke_color(self) -> int:
        return self.config.style.stroke_color

    # ─────────────────────────────────────────────────────────────────────
    # Input
    # ─────────────────────────────────────────────────────────────────────

    def scroll(self, dx: float, dy: float) -> None:
        self.render_loop.scroll(dx, dy)

    def scale_by(self, factor: float, focus_x: float, focus_y: float) -> None:
        self.render_loop.scale_by(factor, focus_x, focus_y)

    def tap(self, x: float, y: float) -> Optional[Feature]:
        """
        Resolve a tap to a feature and notify the press listener.

        A redraw is forced after the listener ran so colour changes it made
        appear on the next frame.

        Returns:
            The feature hit, or None
        """
        feature = self.render_loop.feature_at_point(Point(x, y))

        self.slog.info(
            event=LogEvent.INPUT_TAP,
            message="Tap resolved" if feature else "Tap missed",
            metadata={'x': x, 'y': y, 'feature': dict(feature.properties) if feature else None},
        )

        if feature is not None and self._press_listener is not None:
            self._press_listener(feature)
            self.render_loop.force_redraw()

        return feature

    def dispatch(self, event: Dict[str, Any]) -> Any:
        """
        Route a decoded input event, e.g. {"input": "scroll", "dx": 4, "dy": 0}.

        Returns:
            The handler result (the hit feature or None for "tap")

        Raises:
            InputNotAvailableError: If the input name is not registered
            InputPayloadError: If a field the input needs is missing
            KeyError: If the event has no "input" field
        """
        return self.input_registry.execute(event["input"], event)

    # ─────────────────────────────────────────────────────────────────────
    # Surface lifecycle
    # ─────────────────────────────────────────────────────────────────────

    def on_surface_available(self, surface: DrawableSurface) -> None:
        self.render_loop.start(surface)

    def on_surface_size_changed(self, width: int, height: int) -> None:
        # LOD models stay sized for the original width
        self.slog.info(
            event=LogEvent.RENDER_SURFACE_RESIZED,
            message="Surface resized, keeping LOD models",
            metadata={'width': width, 'height': height},
        )
        self.render_loop.force_redraw()

    def on_surface_destroyed(self) -> bool:
        """
        Stop rendering; returns once the render thread has exited.

        Returns:
            True if the render thread exited in time
        """
        return self.render_loop.stop()
