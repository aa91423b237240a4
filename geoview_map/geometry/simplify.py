"""
Ring Simplification Module
==========================

Greedy distance-based vertex decimation used to build LOD models.

Design:
- Pure function, source ring is never modified
- Output always starts with the source ring's first point
- Rings with >= 3 points keep >= 3 points
- Long skipped runs keep their last corner point
"""

import math

import numpy as np

from geoview_map.geometry.shapes import Ring


def simplify_ring(ring: Ring, min_distance: float) -> Ring:
    """
    Drop vertices closer than min_distance to the previously kept vertex.

    For each vertex after the first:
    - it is kept unconditionally while fewer than 3 vertices are kept and
      the remaining vertices are only just enough to reach 3;
    - otherwise it is kept when its distance to the last kept vertex
      exceeds min_distance. If that distance also exceeds twice
      min_distance, the vertex just before it is kept first (unless it is
      already the last kept one) so long edges stay aligned.

    Args:
        ring: Nx2 array of vertices
        min_distance: Distance threshold (cutoff_distance / zoom level)

    Returns:
        New Mx2 float32 array, M <= N, vertices in source order
    """
    size = len(ring)
    if size == 0:
        return ring.copy()

    kept = [0]

    for i in range(1, size):
        if len(kept) < 3 and size - i <= 3 - len(kept):
            kept.append(i)
            continue

        last = ring[kept[-1]]
        distance = math.hypot(float(ring[i, 0]) - float(last[0]), float(ring[i, 1]) - float(last[1]))

        if distance > min_distance:
            if distance > min_distance * 2.0 and kept[-1] != i - 1:
                kept.append(i - 1)

            kept.append(i)

    return ring[np.asarray(kept)].copy()
