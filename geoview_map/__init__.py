"""
Geoview Map
===========

Bounded Context: GeoJSON MultiPolygon features with level-of-detail models.

Design Philosophy:
- Separation of Concerns: Geometry, Features, Rendering, Loading separated
- Geometry is immutable once the render loop runs
- Hit testing is independent of the level being drawn

Architecture:

    geoview_map/
    ├── geometry/          # Pure geometry (value types, stateless algorithms)
    │   ├── shapes.py      # Point, BoundingBox, ring helpers
    │   ├── detector.py    # Even-odd point-in-polygon
    │   └── simplify.py    # Ring decimation for LOD models
    │
    ├── rendering/         # Drawing (stateless)
    │   ├── colors.py      # ARGB <-> supervision colours
    │   └── painter.py     # StrokeStyle, FillStyle, paint_ring
    │
    ├── feature.py         # Feature (detail levels, draw, contains)
    └── loader.py          # FeatureCollection -> normalized Features

Usage:

    from geoview_map import load_feature_collection, Point

    scene = load_feature_collection(decoded_geojson)
    for feature in scene.features:
        feature.generate_lod_models(1280, aspect_ratio, {1.0, 3.0, 5.0}, 3.0)

    hit = [f for f in scene.features if f.contains(Point(640.0, 200.0))]
"""

# Geometry Layer (immutable, stateless)
from geoview_map.geometry import BoundingBox, Point, point_in_ring, simplify_ring

# Rendering Layer (stateless)
from geoview_map.rendering import FillStyle, StrokeStyle

# Features and loading
from geoview_map.feature import Feature, FeatureStage, FullDetail, SimplifiedDetail
from geoview_map.loader import (
    MalformedCoordinateError,
    SceneData,
    UnsupportedGeometryError,
    load_feature_collection,
)

__all__ = [
    # Geometry
    "BoundingBox",
    "Point",
    "point_in_ring",
    "simplify_ring",
    # Rendering
    "FillStyle",
    "StrokeStyle",
    # Features
    "Feature",
    "FeatureStage",
    "FullDetail",
    "SimplifiedDetail",
    # Loading
    "MalformedCoordinateError",
    "SceneData",
    "UnsupportedGeometryError",
    "load_feature_collection",
]

__version__ = "1.0.0"
