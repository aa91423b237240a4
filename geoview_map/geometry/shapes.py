"""
Geometric Shapes Module
========================

Value types for map geometry - NO rendering, NO camera state.

Design:
- Point and BoundingBox are frozen dataclasses (value objects)
- Rings are Nx2 float32 arrays (single precision, like the source data)
- Polygon = list of rings, MultiPolygon = list of polygons
- Thread-safe reads (boxes are immutable, rings are never resized)
"""

import numpy as np
from dataclasses import dataclass
from typing import Callable, List, Tuple

# Nx2 float32 array of (x, y); implicitly closed
Ring = np.ndarray
Polygon = List[Ring]
MultiPolygon = List[Polygon]


@dataclass(frozen=True)
class Point:
    """Single (x, y) position in model or screen space."""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class BoundingBox:
    """
    Immutable axis-aligned box.

    The top edge is the smallest y (render space grows downwards).

    Attributes:
        left: Minimum x
        top: Minimum y
        right: Maximum x
        bottom: Maximum y
    """

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def empty(cls) -> "BoundingBox":
        """Box that contains nothing and intersects nothing."""
        return cls(np.inf, np.inf, -np.inf, -np.inf)

    @classmethod
    def from_points(cls, points: np.ndarray) -> "BoundingBox":
        """
        Tight box around an Nx2 array of points.

        Returns:
            BoundingBox.empty() if there are no points
        """
        if len(points) == 0:
            return cls.empty()

        mins = points.min(axis=0)
        maxs = points.max(axis=0)
        return cls(float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def is_empty(self) -> bool:
        """True when the box has no points at all (not merely zero area)."""
        return self.left > self.right or self.top > self.bottom

    def union(self, other: "BoundingBox") -> "BoundingBox":
        """Smallest box covering both boxes."""
        return BoundingBox(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def contains(self, point: Point) -> bool:
        """
        Half-open containment test: left <= x < right and top <= y < bottom.

        A box with zero width or height contains nothing.
        """
        return (
            self.left < self.right
            and self.top < self.bottom
            and self.left <= point.x < self.right
            and self.top <= point.y < self.bottom
        )

    def intersects(self, other: "BoundingBox") -> bool:
        """
        Check whether two boxes overlap (read-only, neither box changes).

        Touching edges do not count as an intersection.
        """
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )


def make_ring(coordinates) -> Ring:
    """Build a ring array from a sequence of (x, y) pairs."""
    return np.asarray(coordinates, dtype=np.float32).reshape(-1, 2)


def map_rings(geometry: MultiPolygon, transform: Callable[[Ring], Ring]) -> MultiPolygon:
    """Apply a ring transform to every ring, keeping polygon structure."""
    return [[transform(ring) for ring in polygon] for polygon in geometry]


def count_points(geometry: MultiPolygon) -> int:
    """Total number of points across all rings."""
    return sum(len(ring) for polygon in geometry for ring in polygon)


def geometry_bounds(geometry: MultiPolygon) -> BoundingBox:
    """Tight bounding box of every point in the geometry."""
    rings = [ring for polygon in geometry for ring in polygon if len(ring) > 0]
    if not rings:
        return BoundingBox.empty()

    return BoundingBox.from_points(np.concatenate(rings))
