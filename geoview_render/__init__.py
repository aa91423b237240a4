"""
geoview_render - Continuous map rendering with camera control

Components:
- RenderLoop: scene + camera owner, redraws on a worker thread
- GeoJsonView: facade for the UI layer (input, listener, lifecycle)
- Camera / CameraState: pan/zoom transform
- DrawableSurface, FrameSurface, VideoSinkSurface: frame targets
- RenderConfig: YAML-backed configuration
"""

from geoview_render.camera import Camera, CameraState
from geoview_render.config import CameraConfig, LodConfig, RenderConfig, StyleConfig
from geoview_render.service import LoadWhileRunningError, RenderLoop, RenderState
from geoview_render.surface import (
    DrawableSurface,
    FrameSurface,
    SurfaceUnavailableError,
    VideoSinkSurface,
)
from geoview_render.view import GeoJsonView

__all__ = [
    "Camera",
    "CameraState",
    "CameraConfig",
    "LodConfig",
    "RenderConfig",
    "StyleConfig",
    "LoadWhileRunningError",
    "RenderLoop",
    "RenderState",
    "DrawableSurface",
    "FrameSurface",
    "SurfaceUnavailableError",
    "VideoSinkSurface",
    "GeoJsonView",
]
