"""Package logger, used when a conversion is not given a logger of its own."""

import logging
from typing import Final


__docformat__ = "google"
__all__ = ("DEFAULT_LOGGER",)


DEFAULT_LOGGER: Final[logging.Logger] = logging.getLogger("overpass2geojson")
DEFAULT_LOGGER.addHandler(logging.NullHandler())
