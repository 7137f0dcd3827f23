"""Resolution of way and relation geometries from referenced nodes."""

import logging
from enum import Enum
from typing import TypeAlias

from overpass2geojson._log import DEFAULT_LOGGER
from overpass2geojson.element import ElementGraph, Node, Relation, Way
from overpass2geojson.spatial import GeoJsonDict


__docformat__ = "google"
__all__ = (
    "PolygonMode",
    "Coords",
    "Ring",
    "resolve_ring",
    "is_closed",
    "point_geometry",
    "way_geometry",
    "relation_rings",
    "relation_geometry",
)


Coords: TypeAlias = list[float]
"""A ``[lon, lat]`` coordinate pair."""

Ring: TypeAlias = list[Coords]
"""An ordered sequence of at least two coordinate pairs."""


class PolygonMode(Enum):
    """
    Decides whether a way is mapped to a ``Polygon`` or a ``LineString``.

    Use ``PolygonMode("force-polygon")`` f.e. to look up a mode by its value.
    """

    INFER = "infer-from-closure"
    """A way is a ``Polygon`` if it is closed, and a ``LineString`` otherwise."""

    ALWAYS = "force-polygon"
    """Every way is a ``Polygon`` with a single ring, even if it is not closed."""

    NEVER = "force-line"
    """Every way is a ``LineString``, even if it is closed."""

    def is_polygon(self, ring: Ring) -> bool:
        """``True`` if the given ring should be mapped to a ``Polygon`` in this mode."""
        match self:
            case PolygonMode.INFER:
                return is_closed(ring)
            case PolygonMode.ALWAYS:
                return True
            case PolygonMode.NEVER:
                return False
            case _:
                raise AssertionError


def resolve_ring(way: Way, nodes: dict[int, Node]) -> Ring | None:
    """
    Look up the coordinates of a way's nodes.

    Node IDs that are missing from ``nodes`` are dropped, since Overpass results
    may not include nodes outside of the queried area.

    Returns:
        the ``[lon, lat]`` pairs in node order, or ``None`` if fewer than two
        nodes could be resolved
    """
    ring = [nodes[node_id].coords for node_id in way.node_ids if node_id in nodes]
    if len(ring) < 2:
        return None
    return ring


def is_closed(ring: Ring) -> bool:
    """
    ``True`` if the first and last coordinate pairs of a ring are equal.

    Coordinates are compared exactly, without any tolerance.
    """
    return ring[0] == ring[-1]


def point_geometry(node: Node) -> GeoJsonDict:
    """The ``Point`` geometry of a node."""
    return {
        "type": "Point",
        "coordinates": node.coords,
    }


def way_geometry(
    way: Way,
    nodes: dict[int, Node],
    polygon_mode: PolygonMode = PolygonMode.INFER,
) -> GeoJsonDict | None:
    """
    The geometry of a way.

    Args:
        way: any way
        nodes: the node index of the result set
        polygon_mode: decides between ``Polygon`` and ``LineString`` geometries

    Returns:
        a ``LineString``, a ``Polygon`` with a single ring, or ``None`` if fewer than two
        of the way's nodes could be resolved
    """
    ring = resolve_ring(way, nodes)
    if ring is None:
        return None

    if polygon_mode.is_polygon(ring):
        return {
            "type": "Polygon",
            "coordinates": [ring],
        }

    return {
        "type": "LineString",
        "coordinates": ring,
    }


def relation_rings(
    relation: Relation,
    graph: ElementGraph,
    logger: logging.Logger = DEFAULT_LOGGER,
) -> list[Ring]:
    """
    Resolve the rings of a relation's member ways.

    Rings are used as they are: open rings are not closed, and rings that share
    endpoints are not merged.

    Members are dropped if
     - they reference something other than a way
     - the referenced way is not in the result set
     - fewer than two nodes of the referenced way could be resolved

    Returns:
        one ring per resolved member, in member order
    """
    rings = []

    for _role, member in relation:
        if member.type is not None and member.type != "way":
            logger.debug(f"skip {member.type} member {member.ref} of {relation}")
            continue

        way = graph.way(member.ref)
        if way is None:
            logger.debug(f"skip member {member.ref} of {relation}: way not in result set")
            continue

        ring = resolve_ring(way, graph.nodes)
        if ring is None:
            logger.debug(f"skip member {way} of {relation}: resolved to less than 2 coordinates")
            continue

        rings.append(ring)

    return rings


def relation_geometry(
    relation: Relation,
    graph: ElementGraph,
    logger: logging.Logger = DEFAULT_LOGGER,
) -> GeoJsonDict:
    """
    The ``Polygon`` geometry of a relation.

    Each resolved member ring becomes one ring of the polygon. The order of rings
    follows member order, and is not changed to put outer rings first.
    If none of the members could be resolved, the polygon has no rings at all.
    """
    return {
        "type": "Polygon",
        "coordinates": relation_rings(relation, graph, logger),
    }
