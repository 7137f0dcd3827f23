"""Typed result set members, and the index used to resolve references between them."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias, cast


__docformat__ = "google"
__all__ = (
    "collect_elements",
    "Element",
    "ElementGraph",
    "Node",
    "Way",
    "Relation",
    "Member",
)


@dataclass(kw_only=True, repr=False, eq=False)
class Element:
    """
    Elements are the basic components of OpenStreetMap's data.

    An Overpass result set is made up of these elements. Objects of this class do not
    necessarily describe OSM elements in their entirety: the ``out`` statement of a query
    decides which details are included.

    Attributes:
        id: A number that uniquely identifies an element of a certain type
            (nodes, ways and relations each have their own ID space).
        tags: A list of key-value pairs that describe the element, or ``None`` if the
              element has no tags, or its tags are not included in the result set.

    References:
        - https://wiki.openstreetmap.org/wiki/Elements
    """

    __slots__ = ()

    id: int
    tags: dict[str, str] | None

    def tag(self, key: str, default: str | None = None) -> str | None:
        """
        Get the tag value for the given key.

        Returns ``default`` if there is no ``key`` tag.
        """
        if not self.tags:
            return default
        return self.tags.get(key, default)

    @property
    def type(self) -> str:
        """The element's type: "node", "way", or "relation"."""
        match self:
            case Node():
                return "node"
            case Way():
                return "way"
            case Relation():
                return "relation"
            case _:
                raise AssertionError

    @property
    def link(self) -> str:
        """This element on openstreetmap.org."""
        return f"https://www.openstreetmap.org/{self.type}/{self.id}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id})"


@dataclass(kw_only=True, slots=True, repr=False, eq=False)
class Node(Element):
    """
    A point in space, at a specific coordinate.

    Nodes are used to define standalone point features (e.g. a bench),
    or to define the shape or "path" of a way.

    Attributes:
        lon: longitude on the WGS 84 ellipsoid
        lat: latitude on the WGS 84 ellipsoid

    References:
        - https://wiki.openstreetmap.org/wiki/Node
    """

    lon: float
    lat: float

    @property
    def coords(self) -> list[float]:
        """The ``[lon, lat]`` pair of this node, in GeoJSON order."""
        return [self.lon, self.lat]


@dataclass(kw_only=True, slots=True, repr=False, eq=False)
class Way(Element):
    """
    A way is an ordered list of nodes.

    An open way is a way whose first node is not its last node (e.g. a railway line).
    A closed way is a way whose first node is also its last node, and may be interpreted
    either as a closed polyline (e.g. a roundabout), or as an area (e.g. a patch of grass).

    Attributes:
        node_ids: The IDs of the nodes that make up this way. Some of them may be missing
                  in the result set, f.e. if they lie outside the queried bounding box.

    References:
        - https://wiki.openstreetmap.org/wiki/Way
    """

    node_ids: list[int]


@dataclass(kw_only=True, slots=True)
class Member:
    """
    Reference of a relation to one of its members, with an optional role.

    Attributes:
        type: the type of the referenced element, or ``None`` if it was not specified
        ref: the ID of the referenced element
        role: describes the function of the member in the context of the relation

    References:
        - https://wiki.openstreetmap.org/wiki/Relation#Roles
    """

    type: str | None
    ref: int
    role: str | None


@dataclass(kw_only=True, slots=True, repr=False, eq=False)
class Relation(Element):
    """
    A relation is a group of nodes and ways that have a logical or geographic relationship.

    Relations of ``type=multipolygon`` describe areas whose boundaries ("outer" role) and
    holes ("inner" role) are made up of member ways.

    Attributes:
        members: Ordered member references of this relation

    References:
        - https://wiki.openstreetmap.org/wiki/Relation
        - https://wiki.openstreetmap.org/wiki/Relation:multipolygon
    """

    members: list[Member]

    @property
    def is_multipolygon(self) -> bool:
        """``True`` if this relation is tagged ``type=multipolygon``."""
        return self.tag("type") == "multipolygon"

    def __iter__(self) -> Iterator[tuple[str | None, Member]]:
        """Iterates over all members in the form of ``(role, member)``."""
        for member in self.members:
            yield member.role, member


_KNOWN_ELEMENTS = {"node", "way", "relation"}


_ElementKey: TypeAlias = tuple[str, int]
"""Elements are uniquely identified by the tuple (type, id)."""


class ElementGraph:
    """
    Typed elements of a result set, indexed for resolving references between them.

    An index is built once per conversion, and is not modified afterwards.

    Attributes:
        elements: all well-formed elements, in the order of the result set
        nodes: all nodes with coordinates, by their ID
    """

    __slots__ = (
        "elements",
        "nodes",
        "typed_dict",
    )

    def __init__(self) -> None:
        self.elements: list[Element] = []
        self.nodes: dict[int, Node] = {}
        self.typed_dict: dict[_ElementKey, Element] = {}

    def node(self, node_id: int) -> Node | None:
        """The node with the given ID, or ``None`` if it is not in the result set."""
        return self.nodes.get(node_id)

    def way(self, way_id: int) -> Way | None:
        """The way with the given ID, or ``None`` if it is not in the result set."""
        return cast(Way | None, self.typed_dict.get(("way", way_id)))

    def relation(self, relation_id: int) -> Relation | None:
        """The relation with the given ID, or ``None`` if it is not in the result set."""
        return cast(Relation | None, self.typed_dict.get(("relation", relation_id)))

    @property
    def ways(self) -> Iterator[Way]:
        """All ways, in the order of the result set."""
        return (elem for elem in self.elements if isinstance(elem, Way))

    @property
    def relations(self) -> Iterator[Relation]:
        """All relations, in the order of the result set."""
        return (elem for elem in self.elements if isinstance(elem, Relation))

    def __len__(self) -> int:
        return len(self.elements)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(elements={len(self.elements)}, nodes={len(self.nodes)})"


def collect_elements(elements: Iterable[Any]) -> ElementGraph:
    """
    Produce typed and indexed elements from the ``elements`` of an Overpass result.

    This function exclusively collects elements that are of type "node", "way", or
    "relation". Anything else, like derived elements produced by ``make`` or
    ``out count``, is ignored.

    Malformed elements are skipped rather than rejected, since live Overpass responses
    regularly contain partial data:
     - nodes need an integer ``id``, ``lat`` and ``lon`` to be collected
     - ways and relations need an integer ``id``
     - relation members need an integer ``ref``
     - node IDs of ways that are not integers are dropped

    If the same node ID appears more than once, the later node replaces the earlier one.
    If the same way or relation ID appears more than once, lookups by ID resolve to the
    first one.

    Args:
        elements: the ``elements`` list of an Overpass result

    Returns:
        the typed elements, with a node index and a ``(type, id)`` index
    """
    graph = ElementGraph()

    for elem_dict in elements:
        elem = _typed(elem_dict)
        if elem is None:
            continue

        graph.elements.append(elem)

        if isinstance(elem, Node):
            graph.nodes[elem.id] = elem
        else:
            graph.typed_dict.setdefault((elem.type, elem.id), elem)

    return graph


def _typed(elem_dict: Any) -> Element | None:
    if not isinstance(elem_dict, Mapping):
        return None

    elem_type = elem_dict.get("type")
    if elem_type not in _KNOWN_ELEMENTS:
        return None

    elem_id = elem_dict.get("id")
    if not _is_id(elem_id):
        return None

    tags = elem_dict.get("tags")
    tags = dict(tags) if isinstance(tags, Mapping) else None

    match elem_type:
        case "node":
            lat, lon = elem_dict.get("lat"), elem_dict.get("lon")
            if lat is None or lon is None:
                return None
            return Node(id=elem_id, tags=tags, lon=lon, lat=lat)
        case "way":
            node_ids = [ref for ref in _list(elem_dict.get("nodes")) if _is_id(ref)]
            return Way(id=elem_id, tags=tags, node_ids=node_ids)
        case "relation":
            return Relation(
                id=elem_id,
                tags=tags,
                members=[
                    mem for mem in map(_member, _list(elem_dict.get("members"))) if mem is not None
                ],
            )
        case _:
            raise AssertionError


def _member(mem_dict: Any) -> Member | None:
    if not isinstance(mem_dict, Mapping) or not _is_id(mem_dict.get("ref")):
        return None
    return Member(
        type=mem_dict.get("type"),
        ref=mem_dict["ref"],
        role=mem_dict.get("role") or None,
    )


def _is_id(value: Any) -> bool:
    # OSM IDs are integers; anything else can't be used as an index key
    return isinstance(value, int) and not isinstance(value, bool)


def _list(value: Any) -> list:
    return list(value) if isinstance(value, list | tuple) else []
