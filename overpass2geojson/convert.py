"""Conversion of Overpass results to GeoJSON feature collections."""

import json
import logging
from collections.abc import Mapping
from json import JSONDecodeError
from typing import Any, Final, TypeAlias

from overpass2geojson._log import DEFAULT_LOGGER
from overpass2geojson.element import ElementGraph, collect_elements
from overpass2geojson.error import InvalidInputCause, InvalidInputError
from overpass2geojson.feature import FeatureCollection, element_feature
from overpass2geojson.geometry import (
    PolygonMode,
    point_geometry,
    relation_geometry,
    way_geometry,
)
from overpass2geojson.spatial import GeoJsonDict


__docformat__ = "google"
__all__ = (
    "convert_all",
    "convert_nodes",
    "convert_ways",
    "convert_relations",
    "validate_input",
    "Input",
    "Output",
    "DEFAULT_INDENT",
    "DEFAULT_POLYGON_MODE",
)


DEFAULT_POLYGON_MODE: Final[PolygonMode] = PolygonMode.INFER
"""Default ``polygon_mode`` for converting ways."""

DEFAULT_INDENT: Final[int | None] = None
"""Default ``indent`` setting, which produces compact JSON text."""


Input: TypeAlias = Mapping[str, Any] | str | bytes | bytearray
"""An Overpass result, either decoded, or as JSON text."""

Output: TypeAlias = GeoJsonDict | str
"""A GeoJSON feature collection, either as a ``dict``, or as JSON text."""


def validate_input(data: Any) -> list:
    """
    Extract the ``elements`` list of an Overpass result.

    Args:
        data: a mapping like ``{"elements": [...]}``, or the same as JSON text or bytes

    Returns:
        the list of elements, which may be empty

    Raises:
        InvalidInputError: if the input cannot be decoded, or has no ``elements`` list
    """
    if isinstance(data, str | bytes | bytearray):
        try:
            data = json.loads(data)
        except (JSONDecodeError, UnicodeDecodeError, RecursionError) as err:
            raise InvalidInputError(cause=InvalidInputCause.UNDECODABLE, error=err) from err

        if not isinstance(data, Mapping):
            raise InvalidInputError(
                cause=InvalidInputCause.NOT_AN_OBJECT,
                input_type=type(data).__name__,
            )

    elif not isinstance(data, Mapping):
        raise InvalidInputError(
            cause=InvalidInputCause.UNSUPPORTED_TYPE,
            input_type=type(data).__name__,
        )

    if "elements" not in data:
        raise InvalidInputError(cause=InvalidInputCause.MISSING_ELEMENTS)

    elements = data["elements"]

    if not isinstance(elements, list | tuple):
        raise InvalidInputError(
            cause=InvalidInputCause.ELEMENTS_NOT_A_LIST,
            input_type=type(elements).__name__,
        )

    return list(elements)


def convert_nodes(
    data: Input,
    *,
    encode: bool = True,
    indent: int | None = DEFAULT_INDENT,
    logger: logging.Logger = DEFAULT_LOGGER,
) -> Output:
    """
    Convert every node to a ``Point`` feature.

    Ways and relations are ignored. Unlike the other conversions, the properties of
    each feature are only the node's tags, without an ``id`` key.

    Args:
        data: an Overpass result
        encode: return JSON text if ``True``, or a ``dict`` otherwise
        indent: if set, pretty-print the JSON text with this many spaces per level
        logger: logger for details on skipped elements

    Returns:
        a GeoJSON ``FeatureCollection``

    Raises:
        InvalidInputError: if the input is not a well-formed Overpass result
        ValueError: if ``indent`` is negative
    """
    _check_indent(indent)
    graph = _collect(data, logger)

    collection = FeatureCollection()
    for node in graph.nodes.values():
        collection.features.append(element_feature(node, point_geometry(node), with_id=False))

    return _output(graph, collection, encode=encode, indent=indent, logger=logger)


def convert_ways(
    data: Input,
    *,
    encode: bool = True,
    indent: int | None = DEFAULT_INDENT,
    polygon_mode: PolygonMode | str = DEFAULT_POLYGON_MODE,
    logger: logging.Logger = DEFAULT_LOGGER,
) -> Output:
    """
    Convert every way to a ``LineString`` or ``Polygon`` feature.

    Ways with fewer than two nodes in the result set are skipped.
    Nodes and relations are ignored.

    Args:
        data: an Overpass result
        encode: return JSON text if ``True``, or a ``dict`` otherwise
        indent: if set, pretty-print the JSON text with this many spaces per level
        polygon_mode: decides between ``Polygon`` and ``LineString`` geometries;
                      either a ``PolygonMode`` or one of its values
        logger: logger for details on skipped elements

    Returns:
        a GeoJSON ``FeatureCollection``

    Raises:
        InvalidInputError: if the input is not a well-formed Overpass result
        ValueError: if ``indent`` is negative, or ``polygon_mode`` is unknown
    """
    _check_indent(indent)
    polygon_mode = _polygon_mode(polygon_mode)
    graph = _collect(data, logger)

    collection = FeatureCollection()
    for way in graph.ways:
        geometry = way_geometry(way, graph.nodes, polygon_mode)
        if geometry is None:
            logger.debug(f"skip {way}: resolved to less than 2 coordinates")
            continue
        collection.features.append(element_feature(way, geometry))

    return _output(graph, collection, encode=encode, indent=indent, logger=logger)


def convert_relations(
    data: Input,
    *,
    encode: bool = True,
    indent: int | None = DEFAULT_INDENT,
    logger: logging.Logger = DEFAULT_LOGGER,
) -> Output:
    """
    Convert every relation to a ``Polygon`` feature.

    Each member way becomes one ring of the polygon. Members that cannot be resolved
    are left out, but the relation's feature is included even if none of its
    members could be resolved.

    Args:
        data: an Overpass result
        encode: return JSON text if ``True``, or a ``dict`` otherwise
        indent: if set, pretty-print the JSON text with this many spaces per level
        logger: logger for details on skipped members

    Returns:
        a GeoJSON ``FeatureCollection``

    Raises:
        InvalidInputError: if the input is not a well-formed Overpass result
        ValueError: if ``indent`` is negative
    """
    _check_indent(indent)
    graph = _collect(data, logger)

    collection = FeatureCollection()
    for rel in graph.relations:
        collection.features.append(element_feature(rel, relation_geometry(rel, graph, logger)))

    return _output(graph, collection, encode=encode, indent=indent, logger=logger)


def convert_all(
    data: Input,
    *,
    encode: bool = True,
    indent: int | None = DEFAULT_INDENT,
    polygon_mode: PolygonMode | str = DEFAULT_POLYGON_MODE,
    logger: logging.Logger = DEFAULT_LOGGER,
) -> Output:
    """
    Convert all elements, without repeating elements that are part of others.

    Features are added in three passes:
     1. Every relation tagged ``type=multipolygon`` becomes a ``Polygon`` feature.
        Its member ways, and their nodes, are not converted on their own.
     2. Every other way becomes a ``LineString`` or ``Polygon`` feature.
        Its nodes are not converted on their own.
     3. Every tagged node that is not part of any way becomes a ``Point`` feature.
        Untagged nodes are only considered to be part of the geometry of ways,
        so they are never converted on their own.

    The order of features follows these passes. Other relations are ignored.

    Args:
        data: an Overpass result
        encode: return JSON text if ``True``, or a ``dict`` otherwise
        indent: if set, pretty-print the JSON text with this many spaces per level
        polygon_mode: decides between ``Polygon`` and ``LineString`` geometries of ways;
                      either a ``PolygonMode`` or one of its values
        logger: logger for details on skipped elements

    Returns:
        a GeoJSON ``FeatureCollection``

    Raises:
        InvalidInputError: if the input is not a well-formed Overpass result
        ValueError: if ``indent`` is negative, or ``polygon_mode`` is unknown
    """
    _check_indent(indent)
    polygon_mode = _polygon_mode(polygon_mode)
    graph = _collect(data, logger)

    collection = FeatureCollection()
    way_ids_in_relations: set[int] = set()
    node_ids_in_ways: set[int] = set()

    for rel in graph.relations:
        if not rel.is_multipolygon:
            continue

        collection.features.append(element_feature(rel, relation_geometry(rel, graph, logger)))

        for member in rel.members:
            if member.type is not None and member.type != "way":
                continue
            way_ids_in_relations.add(member.ref)
            if (way := graph.way(member.ref)) is not None:
                node_ids_in_ways.update(way.node_ids)

    for way in graph.ways:
        if way.id in way_ids_in_relations:
            continue

        node_ids_in_ways.update(way.node_ids)

        geometry = way_geometry(way, graph.nodes, polygon_mode)
        if geometry is None:
            logger.debug(f"skip {way}: resolved to less than 2 coordinates")
            continue

        collection.features.append(element_feature(way, geometry))

    for node in graph.nodes.values():
        if node.tags and node.id not in node_ids_in_ways:
            collection.features.append(element_feature(node, point_geometry(node)))

    return _output(graph, collection, encode=encode, indent=indent, logger=logger)


def _collect(data: Input, logger: logging.Logger) -> ElementGraph:
    try:
        elements = validate_input(data)
    except InvalidInputError as err:
        logger.debug(f"reject input: {err}")
        raise

    graph = collect_elements(elements)
    logger.debug(f"collected {graph!r} from {len(elements)} input elements")
    return graph


def _output(
    graph: ElementGraph,
    collection: FeatureCollection,
    *,
    encode: bool,
    indent: int | None,
    logger: logging.Logger,
) -> Output:
    logger.info(f"converted {len(graph)} elements to {len(collection)} features")
    return collection.dumps(indent=indent) if encode else collection.geojson


def _check_indent(indent: int | None) -> None:
    if indent is not None and (
        isinstance(indent, bool) or not isinstance(indent, int) or indent < 0
    ):
        msg = "'indent' must be an integer >= 0"
        raise ValueError(msg)


def _polygon_mode(value: PolygonMode | str) -> PolygonMode:
    if isinstance(value, PolygonMode):
        return value
    try:
        return PolygonMode(value)
    except ValueError:
        options = ", ".join(repr(mode.value) for mode in PolygonMode)
        msg = f"'polygon_mode' must be one of {options}"
        raise ValueError(msg) from None
