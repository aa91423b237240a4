"""
Hit Detector Module
===================

Stateless point-in-polygon tests for rings and multipolygons.

Design:
- Pure functions (no state)
- Even-odd rule, ring closed by pairing the last point with the first
- Half-open edge rule: (yi > y) != (yj > y)
- Vectorized over the ring's edges with numpy
"""

import numpy as np

from geoview_map.geometry.shapes import MultiPolygon, Point, Ring


def point_in_ring(point: Point, ring: Ring) -> bool:
    """
    Even-odd ray casting test for a single ring.

    Args:
        point: Query point (same space as the ring)
        ring: Nx2 array of vertices

    Returns:
        True if the horizontal ray from point crosses the boundary an odd
        number of times
    """
    if len(ring) == 0:
        return False

    xi = ring[:, 0]
    yi = ring[:, 1]
    # Edge i runs from vertex i-1 to vertex i (vertex -1 is the last one)
    previous = np.roll(ring, 1, axis=0)
    xj = previous[:, 0]
    yj = previous[:, 1]

    straddles = (yi > point.y) != (yj > point.y)
    if not straddles.any():
        return False

    xi, yi, xj, yj = xi[straddles], yi[straddles], xj[straddles], yj[straddles]
    crossing_x = (xj - xi) * (point.y - yi) / (yj - yi) + xi

    crossings = int(np.count_nonzero(point.x < crossing_x))
    return crossings % 2 == 1


def point_in_geometry(point: Point, geometry: MultiPolygon) -> bool:
    """True as soon as any ring of any polygon contains the point."""
    for polygon in geometry:
        for ring in polygon:
            if point_in_ring(point, ring):
                return True

    return False
