"""
Camera Module
=============

Pan/zoom state shared between the input thread and the render thread.

Threading:
- CameraState is immutable; every mutation builds a new state and swaps
  it in with one attribute assignment (atomic under the GIL)
- No lock: the render thread takes one snapshot per frame, a concurrent
  update shows up at the latest one frame later
- Mutations are expected from a single input thread
"""

from dataclasses import dataclass

from geoview_map.geometry import Point


@dataclass(frozen=True)
class CameraState:
    """
    Model -> screen transform: screen = (model + offset) * scale.

    Attributes:
        offset_x: Pan offset in model units
        offset_y: Pan offset in model units
        scale: Zoom factor
    """

    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 1.0

    def to_model(self, point: Point) -> Point:
        """Screen pixel -> model space."""
        inverse = 1.0 / self.scale
        return Point(point.x * inverse - self.offset_x, point.y * inverse - self.offset_y)

    def to_screen(self, point: Point) -> Point:
        """Model space -> screen pixel."""
        return Point((point.x + self.offset_x) * self.scale, (point.y + self.offset_y) * self.scale)


class Camera:
    """
    Mutable handle around the current CameraState.

    Usage:
        camera = Camera(min_scale=1.0, max_scale=5.0)
        camera.scroll(12.0, -4.0)
        camera.scale_by(1.2, focus_x=320.0, focus_y=240.0)

        state = camera.state  # snapshot for one frame
    """

    def __init__(self, min_scale: float = 1.0, max_scale: float = 5.0):
        self.min_scale = min_scale
        self.max_scale = max_scale
        self._state = CameraState()

    @property
    def state(self) -> CameraState:
        return self._state

    def reset(self) -> None:
        self._state = CameraState()

    def scroll(self, dx: float, dy: float) -> None:
        """Pan by a screen-space delta (offset -= delta / scale)."""
        state = self._state
        inverse = 1.0 / state.scale
        self._state = CameraState(
            offset_x=state.offset_x - dx * inverse,
            offset_y=state.offset_y - dy * inverse,
            scale=state.scale,
        )

    def scale_by(self, factor: float, focus_x: float, focus_y: float) -> None:
        """
        Zoom by a factor, keeping the screen focus point fixed.

        The new scale is clamped to [min_scale, max_scale] and the offset
        moves by (1/old_scale - 1/new_scale) * focus.
        """
        state = self._state
        scale = min(max(state.scale * factor, self.min_scale), self.max_scale)
        shift = 1.0 / state.scale - 1.0 / scale

        self._state = CameraState(
            offset_x=state.offset_x - shift * focus_x,
            offset_y=state.offset_y - shift * focus_y,
            scale=scale,
        )

    def to_model(self, point: Point) -> Point:
        return self._state.to_model(point)
