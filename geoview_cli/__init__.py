"""
Geoview CLI - Offscreen rendering and querying of GeoJSON maps.

Usage:
    geoview render map.geojson -o map.png
    geoview pick map.geojson 640 360
    geoview replay map.geojson gestures.yaml -o replay.mp4
"""

from .cli import main

__all__ = ["main"]
