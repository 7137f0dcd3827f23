"""Shared base of the conversion output types, and their Shapely interop."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, TypeAlias


__docformat__ = "google"
__all__ = (
    "GeoJsonDict",
    "SpatialDict",
    "Spatial",
)


GeoJsonDict: TypeAlias = dict[str, Any]
"""A GeoJSON object as produced by the conversion functions."""


@dataclass(kw_only=True, slots=True)
class SpatialDict:
    """
    A single converted geometry, readable by libraries that accept ``__geo_interface__``.

    ``shapely.geometry.shape()`` is the main consumer: it turns the ``Point``,
    ``LineString`` or ``Polygon`` dict of a converted element into a Shapely geometry.
    Degenerate geometries, like a way forced into a polygon with only two coordinates,
    are passed through as they are, and may be rejected by such libraries.

    Attributes:
        __geo_interface__: the GeoJSON geometry of one feature
    """

    __geo_interface__: dict


class Spatial(ABC):
    """
    Output of a conversion that can be rendered as GeoJSON.

    Implemented by ``Feature`` and ``FeatureCollection``. The ``geojson`` dict is what
    ``convert_*(encode=False)`` returns, and what is serialized with ``encode=True``.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def geojson(self) -> GeoJsonDict:
        """
        This object as a GeoJSON dict.

        Coordinates are the ``[lon, lat]`` pairs of the Overpass nodes, unchanged.

        References:
            - https://tools.ietf.org/html/rfc7946#section-3
        """
        raise NotImplementedError

    @property
    def geo_interfaces(self) -> Iterator[SpatialDict]:
        """The geometries of this object, one ``SpatialDict`` per feature."""
        geojson = self.geojson
        match geojson["type"]:
            case "FeatureCollection":
                for feature in geojson["features"]:
                    yield SpatialDict(__geo_interface__=feature["geometry"])
            case "Feature":
                yield SpatialDict(__geo_interface__=geojson["geometry"])
            case _:
                yield SpatialDict(__geo_interface__=geojson)
