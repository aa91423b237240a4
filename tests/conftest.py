"""
Shared pytest fixtures for geoview tests.

Maps are built in raw GeoJSON coordinates. The loader negates y, so a raw
point (x, -py) ends up at pixel row py once the map is normalized and scaled
to a 100 px wide, square viewport.
"""

import pytest

from geoview_map import load_feature_collection
from geoview_render import FrameSurface, RenderConfig

VIEWPORT = 100


def multipolygon_feature(rings, properties=None) -> dict:
    """Wrap one polygon's rings into a GeoJSON MultiPolygon feature."""
    return {
        "type": "Feature",
        "properties": properties or {},
        "geometry": {"type": "MultiPolygon", "coordinates": [rings]},
    }


def feature_collection(*features) -> dict:
    return {"type": "FeatureCollection", "features": list(features)}


@pytest.fixture
def square_collection() -> dict:
    """
    Single 4x4 square with properties {"ID": "A"}.

    After loading it covers the whole unit square.
    """
    return feature_collection(
        multipolygon_feature([[[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]]], {"ID": "A"})
    )


@pytest.fixture
def notch_collection() -> dict:
    """
    100x100 square with a 2x2 notch cut into its top edge at x 50..52.

    The notch survives simplification at zoom 5 (cutoff 3 -> 0.6 px) but not
    at zoom 1 (3 px), so the two LOD levels disagree about pixel (51, 1).
    """
    ring = [
        [0, 0], [50, 0], [50, -2], [52, -2], [52, 0],
        [100, 0], [100, -100], [0, -100], [0, 0],
    ]
    return feature_collection(multipolygon_feature([ring], {"ID": "notch"}))


@pytest.fixture
def two_squares_collection() -> dict:
    """Left and right halves of a 2x1 map, ID "L" and "R"."""
    return feature_collection(
        multipolygon_feature([[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]], {"ID": "L"}),
        multipolygon_feature([[[1, 0], [2, 0], [2, 1], [1, 1], [1, 0]]], {"ID": "R"}),
    )


@pytest.fixture
def notch_feature(notch_collection):
    """Normalized notch feature with LOD models for zoom 1 and 5."""
    feature = load_feature_collection(notch_collection).features[0]
    feature.generate_lod_models(VIEWPORT, 1.0, (1.0, 5.0), 3.0)
    return feature


@pytest.fixture
def fast_config() -> RenderConfig:
    """Render config with a 1 ms frame interval to keep tests quick."""
    return RenderConfig(frame_interval_ms=1)


@pytest.fixture
def surface() -> FrameSurface:
    return FrameSurface(width=VIEWPORT, height=VIEWPORT)
