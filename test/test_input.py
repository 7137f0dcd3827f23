import json
from json import JSONDecodeError

from overpass2geojson import (
    InvalidInputError,
    convert_all,
    convert_nodes,
    convert_relations,
    convert_ways,
    validate_input,
)
from overpass2geojson.error import ConversionError, InvalidInputCause, is_invalid_input

import pytest
from test.util import node, result_set


CONVERSIONS = [convert_all, convert_nodes, convert_relations, convert_ways]


@pytest.mark.xdist_group(name="fast")
@pytest.mark.parametrize(
    "bad_input,cause",
    [
        (None, InvalidInputCause.UNSUPPORTED_TYPE),
        (42, InvalidInputCause.UNSUPPORTED_TYPE),
        ([node(1, 9.0, 53.0)], InvalidInputCause.UNSUPPORTED_TYPE),
        ("", InvalidInputCause.UNDECODABLE),
        ("{elements: []}", InvalidInputCause.UNDECODABLE),
        (b"\x80\x81", InvalidInputCause.UNDECODABLE),
        ("[" * 100000, InvalidInputCause.UNDECODABLE),
        ("[]", InvalidInputCause.NOT_AN_OBJECT),
        ("null", InvalidInputCause.NOT_AN_OBJECT),
        ({}, InvalidInputCause.MISSING_ELEMENTS),
        ('{"version": 0.6}', InvalidInputCause.MISSING_ELEMENTS),
        ({"elements": None}, InvalidInputCause.ELEMENTS_NOT_A_LIST),
        ({"elements": {"type": "node"}}, InvalidInputCause.ELEMENTS_NOT_A_LIST),
        ('{"elements": "node"}', InvalidInputCause.ELEMENTS_NOT_A_LIST),
    ],
)
def test_invalid_input(bad_input, cause: InvalidInputCause):
    with pytest.raises(InvalidInputError) as exc_info:
        validate_input(bad_input)

    assert exc_info.value.cause is cause
    assert str(exc_info.value)  # just test this doesn't raise

    for convert in CONVERSIONS:
        with pytest.raises(InvalidInputError) as exc_info:
            convert(bad_input)
        assert exc_info.value.cause is cause


@pytest.mark.xdist_group(name="fast")
def test_invalid_input_error_details():
    with pytest.raises(InvalidInputError) as exc_info:
        validate_input('{"elements": [')

    err = exc_info.value
    assert isinstance(err, ConversionError)
    assert is_invalid_input(err)
    assert isinstance(err.error, JSONDecodeError)
    assert err.__cause__ is err.error
    assert str(err).startswith("input is not valid JSON: ")

    with pytest.raises(InvalidInputError) as exc_info:
        validate_input(3.5)

    assert str(exc_info.value) == "expected a mapping, str or bytes, got float"
    assert exc_info.value.input_type == "float"
    assert exc_info.value.error is None

    with pytest.raises(InvalidInputError) as exc_info:
        validate_input({"elements": 1})

    assert str(exc_info.value) == "expected 'elements' to be a list, got int"

    assert not is_invalid_input(ValueError())
    assert not is_invalid_input(None)


@pytest.mark.xdist_group(name="fast")
def test_valid_input_types():
    data = result_set(node(1, 9.0, 53.0))
    text = json.dumps(data)

    assert validate_input(data) == data["elements"]
    assert validate_input(text) == data["elements"]
    assert validate_input(text.encode("utf-8")) == data["elements"]
    assert validate_input(bytearray(text, "utf-8")) == data["elements"]
    assert validate_input({"elements": tuple(data["elements"])}) == data["elements"]


@pytest.mark.xdist_group(name="fast")
def test_empty_elements_is_not_an_error():
    for convert in CONVERSIONS:
        assert convert({"elements": []}, encode=False) == {
            "type": "FeatureCollection",
            "features": [],
        }
        assert convert('{"elements": []}') == '{"type": "FeatureCollection", "features": []}'


@pytest.mark.xdist_group(name="fast")
def test_unknown_and_malformed_elements_are_ignored():
    data = result_set(
        "not an element",
        17,
        None,
        {"id": 5, "lat": 53.0, "lon": 9.0},
        {"type": "area", "id": 3600000001, "tags": {"name": "Hamburg"}},
        {"type": "count", "id": 0, "tags": {"total": "1"}},
        node(1, 9.0, 53.0, amenity="bench"),
    )

    for convert in CONVERSIONS:
        collection = convert(data, encode=False)
        assert collection["type"] == "FeatureCollection"

    assert len(convert_nodes(data, encode=False)["features"]) == 1
    assert len(convert_all(data, encode=False)["features"]) == 1
    assert convert_ways(data, encode=False)["features"] == []
    assert convert_relations(data, encode=False)["features"] == []
