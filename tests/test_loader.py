"""Tests for geoview_map.loader."""

import pytest

from geoview_map import BoundingBox, FeatureStage, Point, load_feature_collection
from geoview_map.rendering import BLACK, BLUE, CYAN


def multipolygon(coordinates, properties=None) -> dict:
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {"type": "MultiPolygon", "coordinates": coordinates},
    }


def collection(*features) -> dict:
    return {"type": "FeatureCollection", "features": list(features)}


SQUARE = [[[[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]]]]


class TestLoadFeatureCollection:
    """Tests for load_feature_collection."""

    def test_y_is_negated(self, square_collection):
        """Raw map bounds use y * -1."""
        scene = load_feature_collection(square_collection)
        assert scene.map_bounds == BoundingBox(0.0, -4.0, 4.0, 0.0)

    def test_features_normalized_against_map_bounds(self, two_squares_collection):
        scene = load_feature_collection(two_squares_collection)
        left, right = scene.features

        assert all(f.stage is FeatureStage.NORMALIZED for f in scene.features)
        assert left.bounds == BoundingBox(0.0, 0.0, 0.5, 1.0)
        assert right.bounds == BoundingBox(0.5, 0.0, 1.0, 1.0)
        assert left.properties["ID"] == "L"

    def test_default_colours(self, square_collection):
        feature = load_feature_collection(square_collection).features[0]
        assert feature.stroke_color == BLACK
        assert feature.fill_color == BLUE

        feature = load_feature_collection(square_collection, fill_color=CYAN).features[0]
        assert feature.fill_color == CYAN

    def test_non_multipolygon_skipped(self):
        point = {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]}}
        no_geometry = {"type": "Feature", "properties": {}}

        scene = load_feature_collection(collection(point, no_geometry, multipolygon(SQUARE)))

        assert len(scene.features) == 1
        assert scene.skipped == 2

    def test_malformed_container_skips_feature(self):
        bad_ring = multipolygon([["not a ring"]])
        scene = load_feature_collection(collection(bad_ring, multipolygon(SQUARE)))

        assert len(scene.features) == 1
        assert scene.skipped == 1

    def test_malformed_points_dropped(self):
        """Bad coordinate pairs are dropped, the rest of the ring is kept."""
        ring = [[0, 0], [4, 0], "x", [4, 4, 4], [True, 1], [4, 4], [0, 4], [0, 0]]
        scene = load_feature_collection(collection(multipolygon([[ring]])))

        assert scene.features[0].point_count() == 5

    def test_empty_geometry_skipped(self):
        scene = load_feature_collection(collection(multipolygon([[[]]]), multipolygon([])))
        assert scene.features == ()
        assert scene.skipped == 2
        assert scene.map_bounds.is_empty

    def test_properties_stringified(self):
        properties = {"ID": "A", "POP": 5, "SEA": True, "NOTE": None}
        feature = load_feature_collection(collection(multipolygon(SQUARE, properties))).features[0]

        assert dict(feature.properties) == {"ID": "A", "POP": "5", "SEA": "true", "NOTE": "null"}

    def test_missing_properties(self):
        feature = load_feature_collection(collection(multipolygon(SQUARE))).features[0]
        assert dict(feature.properties) == {}

    def test_plain_feature_list(self):
        scene = load_feature_collection([multipolygon(SQUARE)])
        assert len(scene.features) == 1

    @pytest.mark.parametrize("data", [None, 42, {"type": "Feature"}, {"type": "FeatureCollection"}])
    def test_not_a_collection(self, data):
        scene = load_feature_collection(data)
        assert scene.features == ()

    def test_holes_kept_as_rings(self):
        outer = [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]
        hole = [[4, 4], [6, 4], [6, 6], [4, 6], [4, 4]]
        feature = load_feature_collection(collection(multipolygon([[outer, hole]]))).features[0]

        assert feature.point_count() == 10
        # Rings are tested independently, so the hole counts as a hit
        assert feature.contains(Point(0.5, 0.5))
