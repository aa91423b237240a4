"""
Geometry Layer
==============

Bounded Context: Pure map geometry and spatial queries.

Responsibilities:
- Value types (Point, BoundingBox) and ring containers
- Point-in-polygon tests
- Ring simplification for LOD models
- NO camera state, NO drawing

Design Philosophy:
- Pure functions where possible
- Immutable value objects
- Numpy arrays for vertex data
"""

from geoview_map.geometry.shapes import (
    BoundingBox,
    MultiPolygon,
    Point,
    Polygon,
    Ring,
    count_points,
    geometry_bounds,
    make_ring,
    map_rings,
)
from geoview_map.geometry.detector import point_in_geometry, point_in_ring
from geoview_map.geometry.simplify import simplify_ring

__all__ = [
    "BoundingBox",
    "MultiPolygon",
    "Point",
    "Polygon",
    "Ring",
    "count_points",
    "geometry_bounds",
    "make_ring",
    "map_rings",
    "point_in_geometry",
    "point_in_ring",
    "simplify_ring",
]
