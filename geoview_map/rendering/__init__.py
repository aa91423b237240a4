"""
Rendering Layer
===============

Bounded Context: Drawing transformed feature rings onto frames.

Responsibilities:
- Fill and outline rings
- Convert ARGB colours for supervision/OpenCV
- Pure rendering - no camera, no LOD logic

Non-responsibilities:
- Level selection and transforms (handled by Feature)
- Frame scheduling (handled by geoview_render)
"""

from geoview_map.rendering.colors import (
    BLACK,
    BLUE,
    CYAN,
    TRANSPARENT,
    WHITE,
    argb,
    parse_color,
    to_bgr,
    to_sv_color,
)
from geoview_map.rendering.painter import FillStyle, StrokeStyle, clear_frame, paint_ring

__all__ = [
    "BLACK",
    "BLUE",
    "CYAN",
    "TRANSPARENT",
    "WHITE",
    "argb",
    "parse_color",
    "to_bgr",
    "to_sv_color",
    "FillStyle",
    "StrokeStyle",
    "clear_frame",
    "paint_ring",
]
