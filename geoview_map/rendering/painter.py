"""
Ring Painter Module
===================

Pure drawing layer for transformed feature rings.

Design:
- Stateless rendering (pure functions)
- No camera math, no LOD selection (handled by Feature)
- Styles are immutable; per-feature colours are applied with replace()
- Uses supervision drawing utilities on BGR numpy frames

Dependencies:
- supervision (draw utilities, Color)
- numpy (arrays)
"""

import numpy as np
import supervision as sv
from dataclasses import dataclass

from geoview_map.rendering.colors import BLACK, BLUE, WHITE, to_bgr, to_sv_color


@dataclass(frozen=True)
class StrokeStyle:
    """
    Outline paint.

    Attributes:
        color: ARGB outline colour
        thickness: Line thickness in pixels
    """

    color: int = BLACK
    thickness: int = 1

    def __post_init__(self):
        if self.thickness < 1:
            raise ValueError(f"thickness must be >= 1, got {self.thickness}")


@dataclass(frozen=True)
class FillStyle:
    """Interior paint (ARGB colour)."""

    color: int = BLUE


def clear_frame(frame: np.ndarray, color: int = WHITE) -> np.ndarray:
    """Fill the whole frame with an opaque colour."""
    frame[:] = to_bgr(color)
    return frame


def paint_ring(
    frame: np.ndarray,
    points: np.ndarray,
    stroke: StrokeStyle,
    fill: FillStyle,
) -> np.ndarray:
    """
    Fill then outline one closed ring.

    Args:
        frame: BGR frame to draw on
        points: Nx2 array of pixel coordinates
        stroke: Outline style
        fill: Interior style

    Returns:
        Frame with the ring drawn (use the returned array, translucent
        fills may produce a new one)
    """
    if len(points) == 0:
        return frame

    polygon = np.round(points).astype(np.int32)

    fill_color, fill_opacity = to_sv_color(fill.color)
    if fill_opacity > 0.0:
        frame = sv.draw_filled_polygon(
            scene=frame,
            polygon=polygon,
            color=fill_color,
            opacity=fill_opacity,
        )

    stroke_color, stroke_opacity = to_sv_color(stroke.color)
    if stroke_opacity > 0.0:
        frame = sv.draw_polygon(
            scene=frame,
            polygon=polygon,
            color=stroke_color,
            thickness=stroke.thickness,
        )

    return frame
