"""
Convert Overpass API results to GeoJSON.
"""

import importlib.metadata
from pathlib import Path


__version__: str = importlib.metadata.version("overpass2geojson")

# we add this to all modules for pdoc;
# see https://pdoc.dev/docs/pdoc.html#use-numpydoc-or-google-docstrings
__docformat__ = "google"

# we also use __all__ in all modules for pdoc; this lets us control the order
__all__ = (
    "__version__",
    "convert_all",
    "convert_nodes",
    "convert_ways",
    "convert_relations",
    "validate_input",
    "ConversionError",
    "InvalidInputError",
    "PolygonMode",
    "convert",
    "element",
    "error",
    "feature",
    "geometry",
    "spatial",
)

from .convert import convert_all, convert_nodes, convert_relations, convert_ways, validate_input
from .error import ConversionError, InvalidInputError
from .geometry import PolygonMode


# extend the module's docstring
for filename in ("usage.md",):
    __doc__ += "\n<br>\n"
    __doc__ += (Path(__file__).parent / "doc" / filename).read_text()
