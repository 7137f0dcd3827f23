"""GeoJSON features produced from typed elements."""

import json
from dataclasses import dataclass, field

from overpass2geojson.element import Element
from overpass2geojson.spatial import GeoJsonDict, Spatial

import shapely.geometry
from shapely.errors import GEOSException
from shapely.geometry.base import BaseGeometry


__docformat__ = "google"
__all__ = (
    "Feature",
    "FeatureCollection",
    "element_feature",
    "element_properties",
)


@dataclass(kw_only=True, slots=True)
class Feature(Spatial):
    """
    A GeoJSON feature that represents a single element.

    Attributes:
        geometry: a GeoJSON ``Point``, ``LineString`` or ``Polygon`` geometry
        properties: the element's tags, usually with an additional ``id`` key
    """

    geometry: GeoJsonDict
    properties: dict

    @property
    def geojson(self) -> GeoJsonDict:
        """A mapping of this feature, with the keys ``type``, ``geometry`` and ``properties``."""
        return {
            "type": "Feature",
            "geometry": self.geometry,
            "properties": self.properties,
        }

    @property
    def shape(self) -> BaseGeometry | None:
        """
        This feature's geometry as a Shapely object.

        Shapely closes open polygon rings, so the shape of a ``Polygon`` feature may have
        one coordinate more per ring than the feature itself.

        Returns:
            ``None`` if Shapely can't represent the geometry, f.e. if a polygon ring has
            too few coordinates to be closed.
        """
        try:
            return shapely.geometry.shape(self.geometry)
        except (ValueError, GEOSException):
            return None


@dataclass(kw_only=True, slots=True)
class FeatureCollection(Spatial):
    """
    The GeoJSON result of a conversion.

    Attributes:
        features: features in order of output
    """

    features: list[Feature] = field(default_factory=list)

    @property
    def geojson(self) -> GeoJsonDict:
        """A mapping of this collection, with the keys ``type`` and ``features``."""
        return {
            "type": "FeatureCollection",
            "features": [feature.geojson for feature in self.features],
        }

    def dumps(self, indent: int | None = None) -> str:
        """
        Serialize this collection as JSON text.

        Args:
            indent: if set, pretty-print with this many spaces per level
        """
        return json.dumps(self.geojson, indent=indent)

    def __len__(self) -> int:
        return len(self.features)


def element_properties(elem: Element, *, with_id: bool = True) -> dict:
    """
    The GeoJSON properties of an element.

    These are the element's tags, with an added ``id`` key. If the element has a tag
    with the key ``id``, its value is replaced by the element ID.
    """
    properties = dict(elem.tags or {})
    if with_id:
        properties["id"] = elem.id
    return properties


def element_feature(elem: Element, geometry: GeoJsonDict, *, with_id: bool = True) -> Feature:
    """A feature of the given element, with the given geometry."""
    return Feature(geometry=geometry, properties=element_properties(elem, with_id=with_id))
