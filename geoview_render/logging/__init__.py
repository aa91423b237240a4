"""
Render loop observability.

JSON entries for loop lifecycle, LOD generation, per-frame timings and
input, routed through the standard logging tree under "geoview_render.*".

    grep -o '{.*}' geoview.log | jq 'select(.event == "render.frame.drawn") | .metadata.render_ms'
"""

from .events import ERROR_EVENTS, RENDER_EVENTS, LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'ERROR_EVENTS',
    'RENDER_EVENTS',
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
