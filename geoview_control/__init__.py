"""
geoview_control - Input routing for the map view

Decoded input events (scroll, scale, tap, redraw) are validated against
their registered payload fields and handed to the view.
"""

from .registry import InputNotAvailableError, InputPayloadError, InputRegistry

__all__ = [
    "InputRegistry",
    "InputNotAvailableError",
    "InputPayloadError",
]
