"""
Map Feature Module
==================

Bounded Context: One MultiPolygon feature across several detail levels.

Design:
- Detail levels are a tagged union: FullDetail (raw geometry) until LOD
  models exist, then SimplifiedDetail (threshold -> geometry)
- Geometry is only mutated during load (normalize) and before the render
  loop starts (generate_lod_models); afterwards it is read-only
- Colours are plain attributes, written by the input thread and read by the
  render thread without a lock (at most one stale frame)
- Hit testing always uses the finest level, whatever level was drawn

Lifecycle:
    RAW --normalize()--> NORMALIZED --generate_lod_models()--> LOD_READY
"""

import logging
import math
import types
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional

import numpy as np

from geoview_map.geometry import (
    BoundingBox,
    MultiPolygon,
    Point,
    count_points,
    geometry_bounds,
    map_rings,
    point_in_geometry,
    simplify_ring,
)
from geoview_map.rendering import FillStyle, StrokeStyle, paint_ring

logger = logging.getLogger(__name__)

# Key of the full-resolution level
FULL_DETAIL_KEY = math.inf


class FeatureStage(Enum):
    """Where a feature is in its one-shot geometry lifecycle."""

    RAW = "raw"
    NORMALIZED = "normalized"
    LOD_READY = "lod_ready"


@dataclass(frozen=True)
class FullDetail:
    """Full-resolution geometry, the only level before LOD generation."""

    geometry: MultiPolygon

    def keys(self) -> List[float]:
        return [FULL_DETAIL_KEY]

    def finest(self) -> MultiPolygon:
        return self.geometry

    def select(self, scale: float) -> MultiPolygon:
        return self.geometry


@dataclass(frozen=True)
class SimplifiedDetail:
    """
    Simplified geometries keyed by zoom threshold (ascending, unique).

    The full-resolution geometry is not kept: it is never drawn once
    simplified levels exist.
    """

    levels: Dict[float, MultiPolygon] = field(default_factory=dict)

    def __post_init__(self):
        if not self.levels:
            raise ValueError("SimplifiedDetail requires at least one level")
        object.__setattr__(self, "levels", dict(sorted(self.levels.items())))

    def keys(self) -> List[float]:
        return list(self.levels.keys())

    def finest(self) -> MultiPolygon:
        """Highest zoom threshold, i.e. the smallest simplification distance."""
        return self.levels[max(self.levels)]

    def select(self, scale: float) -> MultiPolygon:
        """Smallest threshold >= scale, else the highest (most detailed) level."""
        for threshold, geometry in self.levels.items():
            if threshold >= scale:
                return geometry

        return self.levels[max(self.levels)]


class Feature:
    """
    A GeoJSON MultiPolygon feature with LOD models.

    Attributes:
        stroke_color: ARGB outline colour (mutable)
        fill_color: ARGB fill colour (mutable)
        properties: Read-only str -> str metadata (e.g. "ID", "NAME")
        bounds: Tight box of the finest level's points. After LOD
            generation that is the highest zoom key (least simplified),
            not the first, coarsest key; hit testing uses the same level.

    Usage:
        feature = Feature(geometry, stroke_color=BLACK, fill_color=BLUE,
                          properties={"ID": "A"})
        feature.normalize(map_bounds)
        feature.generate_lod_models(1280, aspect_ratio, {1.0, 3.0, 5.0}, 3.0)

        frame = feature.draw(frame, scale, offset_x, offset_y, stroke, fill)
        feature.contains(Point(120.0, 80.0))
    """

    def __init__(
        self,
        geometry: MultiPolygon,
        stroke_color: int,
        fill_color: int,
        properties: Optional[Mapping[str, str]] = None,
    ):
        self._detail = FullDetail(geometry)
        self._stage = FeatureStage.RAW

        self.stroke_color = stroke_color
        self.fill_color = fill_color
        self.properties: Mapping[str, str] = types.MappingProxyType(dict(properties or {}))

        self.bounds = BoundingBox.empty()
        self._calc_bounds()

    def __repr__(self) -> str:
        name = self.properties.get("NAME") or self.properties.get("ID") or "?"
        return f"Feature({name!r}, stage={self._stage.value}, levels={self.detail_keys})"

    @property
    def stage(self) -> FeatureStage:
        return self._stage

    @property
    def detail_keys(self) -> List[float]:
        """Detail level keys, ascending (inf for the full-resolution level)."""
        return self._detail.keys()

    def geometry_at(self, key: float) -> MultiPolygon:
        """Geometry stored under a detail key."""
        if isinstance(self._detail, FullDetail):
            if key != FULL_DETAIL_KEY:
                raise KeyError(key)
            return self._detail.geometry
        return self._detail.levels[key]

    def finest_geometry(self) -> MultiPolygon:
        return self._detail.finest()

    def point_count(self, key: Optional[float] = None) -> int:
        """Number of points in one level (finest level by default)."""
        geometry = self.finest_geometry() if key is None else self.geometry_at(key)
        return count_points(geometry)

    # ─────────────────────────────────────────────────────────────────────
    # Geometry lifecycle (load thread / before render loop starts)
    # ─────────────────────────────────────────────────────────────────────

    def normalize(self, map_bounds: BoundingBox) -> None:
        """
        Rescale the raw geometry into the map's unit square.

        x' = (x - left) / width, y' = (y - top) / height. A zero-size axis is
        treated as size 1 so degenerate maps stay finite.

        Raises:
            RuntimeError: If the feature was already normalized
        """
        if self._stage is not FeatureStage.RAW:
            raise RuntimeError(f"normalize() called in stage {self._stage.value}")

        origin = np.array([map_bounds.left, map_bounds.top], dtype=np.float32)
        size = np.array(
            [map_bounds.width or 1.0, map_bounds.height or 1.0],
            dtype=np.float32,
        )

        self._detail = FullDetail(
            map_rings(self._detail.geometry, lambda ring: (ring - origin) / size)
        )
        self._stage = FeatureStage.NORMALIZED
        self._calc_bounds()

    def generate_lod_models(
        self,
        viewport_width: int,
        aspect_ratio: float,
        zoom_levels: Iterable[float],
        cutoff_distance: float = 1.0,
    ) -> None:
        """
        Scale to pixel space and build one simplified model per zoom level.

        Every level is derived from the full-resolution geometry. Once at
        least one level exists, the full-resolution geometry is dropped.

        Args:
            viewport_width: Surface width in pixels
            aspect_ratio: Map height / map width
            zoom_levels: Zoom thresholds (camera scales)
            cutoff_distance: Pixel distance below which vertices merge at
                zoom 1.0 (divided by each zoom level)

        Raises:
            RuntimeError: If called before normalize() or more than once
        """
        if self._stage is not FeatureStage.NORMALIZED:
            raise RuntimeError(f"generate_lod_models() called in stage {self._stage.value}")

        pixel_scale = np.array(
            [viewport_width, aspect_ratio * viewport_width],
            dtype=np.float32,
        )
        full = map_rings(self._detail.geometry, lambda ring: ring * pixel_scale)
        logger.debug(f"Scale corrected to width, {count_points(full)} points updated")

        levels: Dict[float, MultiPolygon] = {}
        for zoom in zoom_levels:
            min_distance = cutoff_distance / zoom
            levels[zoom] = map_rings(full, lambda ring: simplify_ring(ring, min_distance))
            logger.debug(f"LOD {zoom} generated, {count_points(levels[zoom])} points created")

        if levels:
            self._detail = SimplifiedDetail(levels)
        else:
            self._detail = FullDetail(full)

        self._stage = FeatureStage.LOD_READY
        self._calc_bounds()

    def _calc_bounds(self) -> None:
        self.bounds = geometry_bounds(self.finest_geometry())

    # ─────────────────────────────────────────────────────────────────────
    # Rendering (render thread)
    # ─────────────────────────────────────────────────────────────────────

    def draw(
        self,
        frame: np.ndarray,
        scale: float,
        offset_x: float,
        offset_y: float,
        stroke_style: StrokeStyle,
        fill_style: FillStyle,
    ) -> np.ndarray:
        """
        Draw the level matching the camera scale.

        Each ring is filled then outlined on its own; holes are not cut out.

        Args:
            frame: BGR frame to draw on
            scale: Camera scale
            offset_x: Camera offset (model space)
            offset_y: Camera offset (model space)
            stroke_style: Outline style (colour replaced by stroke_color)
            fill_style: Fill style (colour replaced by fill_color)

        Returns:
            Frame with the feature drawn
        """
        stroke = replace(stroke_style, color=self.stroke_color)
        fill = replace(fill_style, color=self.fill_color)
        offset = np.array([offset_x, offset_y], dtype=np.float32)

        for polygon in self._detail.select(scale):
            for ring in polygon:
                frame = paint_ring(frame, (ring + offset) * scale, stroke, fill)

        return frame

    # ─────────────────────────────────────────────────────────────────────
    # Spatial queries (any thread)
    # ─────────────────────────────────────────────────────────────────────

    def contains(self, point: Point) -> bool:
        """
        Check whether a model-space point lies inside the feature.

        Bounds reject first, then even-odd tests run against every ring of
        the finest level.
        """
        if not self.bounds.contains(point):
            return False

        return point_in_geometry(point, self.finest_geometry())

    def contains_box(self, box: BoundingBox) -> bool:
        """Check whether the feature's bounds overlap a box (box untouched)."""
        return self.bounds.intersects(box)
