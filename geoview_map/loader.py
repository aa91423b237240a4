"""Build map features from a decoded GeoJSON FeatureCollection."""

import json
import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, List, Mapping, Optional, Tuple

from geoview_map.feature import Feature
from geoview_map.geometry import BoundingBox, MultiPolygon, geometry_bounds, make_ring
from geoview_map.rendering import BLACK, BLUE

logger = logging.getLogger(__name__)

MULTI_POLYGON = "MultiPolygon"


class MalformedCoordinateError(ValueError):
    """Raised when a coordinate container or pair has the wrong shape."""


class UnsupportedGeometryError(ValueError):
    """Raised for features without a MultiPolygon geometry."""


@dataclass
class SceneData:
    """Container for a loaded scene."""

    features: Tuple[Feature, ...]
    map_bounds: BoundingBox  # raw (y-flipped) extent of every feature
    skipped: int = 0  # features dropped as unsupported or malformed


def load_feature_collection(
    collection: Any,
    stroke_color: int = BLACK,
    fill_color: int = BLUE,
) -> SceneData:
    """
    Convert a decoded FeatureCollection into normalized features.

    Args:
        collection: Decoded GeoJSON (a FeatureCollection mapping, or a list of
            feature mappings)
        stroke_color: Default ARGB outline colour for every feature
        fill_color: Default ARGB fill colour for every feature

    Returns:
        SceneData with features normalized into the map's unit square

    Non-MultiPolygon features and malformed entries are logged and skipped.
    """
    features_data = _features_of(collection)

    features: List[Feature] = []
    map_bounds = BoundingBox.empty()
    skipped = 0

    for index, feature_data in enumerate(features_data):
        try:
            geometry = _parse_feature_geometry(feature_data)
        except UnsupportedGeometryError as e:
            logger.debug(f"Skipping feature {index}: {e}")
            skipped += 1
            continue
        except MalformedCoordinateError as e:
            logger.warning(f"Skipping malformed feature {index}: {e}")
            skipped += 1
            continue

        if not geometry:
            logger.warning(f"Skipping feature {index}: no valid coordinates")
            skipped += 1
            continue

        map_bounds = map_bounds.union(geometry_bounds(geometry))
        features.append(
            Feature(
                geometry,
                stroke_color=stroke_color,
                fill_color=fill_color,
                properties=_parse_properties(feature_data.get("properties")),
            )
        )

    for feature in features:
        feature.normalize(map_bounds)

    logger.info(
        f"Loaded scene: {len(features)} features, {skipped} skipped, "
        f"bounds=({map_bounds.left}, {map_bounds.top}, {map_bounds.right}, {map_bounds.bottom})"
    )

    return SceneData(features=tuple(features), map_bounds=map_bounds, skipped=skipped)


def _features_of(collection: Any) -> list:
    if isinstance(collection, list):
        return collection

    if isinstance(collection, Mapping) and collection.get("type") == "FeatureCollection":
        features = collection.get("features")
        if isinstance(features, list):
            return features
        logger.warning("FeatureCollection has no 'features' list")
        return []

    logger.warning(f"Not a FeatureCollection: {type(collection).__name__}")
    return []


def _parse_feature_geometry(feature_data: Any) -> MultiPolygon:
    """
    Parse one feature's coordinates into y-flipped rings.

    Raises:
        UnsupportedGeometryError: If there is no MultiPolygon geometry
        MalformedCoordinateError: If a polygon or ring is not a list
    """
    if not isinstance(feature_data, Mapping):
        raise MalformedCoordinateError(f"feature is a {type(feature_data).__name__}, not an object")

    geometry = feature_data.get("geometry")
    if not isinstance(geometry, Mapping) or "type" not in geometry:
        raise UnsupportedGeometryError("no geometry")

    if geometry["type"] != MULTI_POLYGON:
        raise UnsupportedGeometryError(f"geometry type {geometry['type']!r}")

    coordinates = geometry.get("coordinates")
    if not isinstance(coordinates, list):
        raise MalformedCoordinateError("coordinates is not a list")

    polygons: MultiPolygon = []
    for polygon_data in coordinates:
        if not isinstance(polygon_data, list):
            raise MalformedCoordinateError("polygon is not a list")

        polygon = []
        for ring_data in polygon_data:
            if not isinstance(ring_data, list):
                raise MalformedCoordinateError("ring is not a list")

            points = [pair for pair in (_parse_point(p) for p in ring_data) if pair is not None]
            if points:
                polygon.append(make_ring(points))

        if polygon:
            polygons.append(polygon)

    return polygons


def _parse_point(point_data: Any) -> Optional[Tuple[float, float]]:
    """(x, -y) for a numeric pair, None (logged) for anything else."""
    if (
        isinstance(point_data, list)
        and len(point_data) == 2
        and all(isinstance(v, Real) and not isinstance(v, bool) for v in point_data)
    ):
        # GeoJSON y grows upwards, render space grows downwards
        return (float(point_data[0]), -float(point_data[1]))

    logger.warning(f"Skipping malformed coordinate: {point_data!r}")
    return None


def _parse_properties(properties: Any) -> dict:
    """Flatten GeoJSON properties into str -> str."""
    if not isinstance(properties, Mapping):
        return {}

    return {
        str(key): value if isinstance(value, str) else json.dumps(value)
        for key, value in properties.items()
    }

