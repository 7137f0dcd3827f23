import json
from pathlib import Path

from overpass2geojson.spatial import GeoJsonDict

import geojson
import pytest


ELEMENT_DATA = Path(__file__).resolve().parent / "element_data"


def load_element_data(name: str) -> dict:
    with (ELEMENT_DATA / name).open(encoding="utf-8") as file:
        return json.load(file)


@pytest.fixture
def lake() -> dict:
    return load_element_data("lake.json")


def node(id: int, lon: float, lat: float, **tags: str) -> dict:
    elem = {"type": "node", "id": id, "lat": lat, "lon": lon}
    if tags:
        elem["tags"] = tags
    return elem


def way(id: int, *node_ids: int, **tags: str) -> dict:
    elem = {"type": "way", "id": id, "nodes": list(node_ids)}
    if tags:
        elem["tags"] = tags
    return elem


def relation(id: int, *way_ids: int, **tags: str) -> dict:
    elem = {
        "type": "relation",
        "id": id,
        "members": [{"type": "way", "ref": ref, "role": "outer"} for ref in way_ids],
    }
    if tags:
        elem["tags"] = tags
    return elem


def result_set(*elements: dict) -> dict:
    return {"elements": list(elements)}


def verify_feature_collection(collection: GeoJsonDict, *, strict: bool = True) -> None:
    """
    Assert that a conversion result is well-formed GeoJSON.

    With ``strict``, also assert that every geometry is valid by the rules of the
    ``geojson`` package, which f.e. requires polygon rings to be closed.
    """
    assert collection["type"] == "FeatureCollection"
    assert isinstance(collection["features"], list)

    for feature in collection["features"]:
        assert list(feature.keys()) == ["type", "geometry", "properties"]
        assert feature["type"] == "Feature"
        assert feature["geometry"]["type"] in {"Point", "LineString", "Polygon"}
        assert isinstance(feature["properties"], dict)

    obj = geojson.loads(json.dumps(collection))
    assert isinstance(obj, geojson.FeatureCollection)

    if strict:
        assert obj.is_valid, obj.errors()


def feature_ids(collection: GeoJsonDict) -> list[tuple[str, int]]:
    """The geometry type and ``id`` property of every feature."""
    return [
        (feature["geometry"]["type"], feature["properties"].get("id"))
        for feature in collection["features"]
    ]
