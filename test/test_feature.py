from overpass2geojson.element import collect_elements
from overpass2geojson.feature import (
    Feature,
    FeatureCollection,
    element_feature,
    element_properties,
)
from overpass2geojson.geometry import PolygonMode, point_geometry, relation_geometry, way_geometry

import pytest
import shapely.geometry
from shapely.geometry import LineString, Point, Polygon
from test.util import lake, node, way  # noqa: F401


@pytest.mark.xdist_group(name="fast")
def test_element_properties():
    graph = collect_elements(
        [
            node(1, 9.0, 53.0),
            {
                "type": "node",
                "id": 2,
                "lat": 53.0,
                "lon": 9.0,
                "tags": {"id": "7", "amenity": "bench"},
            },
        ]
    )

    assert element_properties(graph.node(1)) == {"id": 1}
    assert element_properties(graph.node(1), with_id=False) == {}

    bench = graph.node(2)
    assert element_properties(bench) == {"id": 2, "amenity": "bench"}
    assert element_properties(bench, with_id=False) == {"id": "7", "amenity": "bench"}

    # the element's tags are not changed
    assert bench.tags == {"id": "7", "amenity": "bench"}


@pytest.mark.xdist_group(name="fast")
def test_feature_shapes(lake):
    graph = collect_elements(lake["elements"])

    point = element_feature(graph.node(30), point_geometry(graph.node(30)))
    assert point.shape == Point(9.15, 53.2)

    stream = element_feature(graph.way(12), way_geometry(graph.way(12), graph.nodes))
    assert isinstance(stream.shape, LineString)
    assert list(stream.shape.coords) == [(9.2, 53.0), (9.25, 53.02), (9.3, 53.05)]

    water = element_feature(graph.relation(100), relation_geometry(graph.relation(100), graph))
    assert isinstance(water.shape, Polygon)
    assert len(water.shape.interiors) == 1
    assert water.shape.is_valid


@pytest.mark.xdist_group(name="fast")
def test_degenerate_feature_shapes():
    graph = collect_elements([node(1, 9.0, 53.0), node(2, 9.1, 53.0), way(1, 1, 2)])

    short_ring = element_feature(
        graph.way(1), way_geometry(graph.way(1), graph.nodes, PolygonMode.ALWAYS)
    )
    assert short_ring.geometry["type"] == "Polygon"
    assert short_ring.shape is None

    no_rings = Feature(geometry={"type": "Polygon", "coordinates": []}, properties={"id": 1})
    assert no_rings.shape is not None
    assert no_rings.shape.is_empty


@pytest.mark.xdist_group(name="fast")
def test_feature_collection(lake):
    graph = collect_elements(lake["elements"])
    collection = FeatureCollection(
        features=[element_feature(n, point_geometry(n), with_id=False) for n in graph.nodes.values()]
    )

    assert len(collection) == 13
    assert collection.geojson["type"] == "FeatureCollection"
    assert collection.geojson["features"][0] == collection.features[0].geojson

    shapes = [shapely.geometry.shape(spatial_dict) for spatial_dict in collection.geo_interfaces]
    assert shapes[0] == Point(9.0, 53.0)
    assert len(shapes) == 13

    (single,) = collection.features[0].geo_interfaces
    assert shapely.geometry.shape(single) == Point(9.0, 53.0)

    assert FeatureCollection().dumps() == '{"type": "FeatureCollection", "features": []}'
    assert FeatureCollection().dumps(indent=0) == '{\n"type": "FeatureCollection",\n"features": []\n}'
