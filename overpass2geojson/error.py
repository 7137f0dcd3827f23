"""
Error types.

```
        (ConversionError)
                ╷
                ╵
        InvalidInputError
```
"""

from dataclasses import dataclass
from enum import Enum, auto
from json import JSONDecodeError
from typing import TypeAlias, TypeGuard


__docformat__ = "google"
__all__ = (
    "ConversionError",
    "InvalidInputError",
    "InvalidInputCause",
    "DecodeError",
    "is_invalid_input",
)


class ConversionError(Exception):
    """Base exception for failed conversions of Overpass results."""


class InvalidInputCause(Enum):
    """Details on why an input was rejected."""

    UNSUPPORTED_TYPE = auto()
    """The input is neither a mapping, nor JSON text or bytes."""

    UNDECODABLE = auto()
    """The input is text or bytes, but could not be decoded as JSON."""

    NOT_AN_OBJECT = auto()
    """The input was decoded, but the top-level value is not a JSON object."""

    MISSING_ELEMENTS = auto()
    """The input has no ``elements`` key."""

    ELEMENTS_NOT_A_LIST = auto()
    """The value of ``elements`` is not a list."""


DecodeError: TypeAlias = JSONDecodeError | UnicodeDecodeError | RecursionError
"""Errors that can occur when decoding text or bytes, including too deeply nested JSON."""


@dataclass(kw_only=True)
class InvalidInputError(ConversionError):
    """
    The input is not a well-formed Overpass result.

    This is the only error raised by the conversion functions. Elements that cannot
    be resolved (f.e. ways referencing nodes that are missing from the result) are
    not errors, and are simply left out of the output.

    Attributes:
        cause: why the input was rejected
        error: the decoding error, if the cause is ``UNDECODABLE``
        input_type: the type name of the rejected value
    """

    cause: InvalidInputCause
    error: DecodeError | None = None
    input_type: str | None = None

    def __str__(self) -> str:
        match self.cause:
            case InvalidInputCause.UNSUPPORTED_TYPE:
                return f"expected a mapping, str or bytes, got {self.input_type}"
            case InvalidInputCause.UNDECODABLE:
                return f"input is not valid JSON: {self.error}"
            case InvalidInputCause.NOT_AN_OBJECT:
                return f"expected a JSON object, got {self.input_type}"
            case InvalidInputCause.MISSING_ELEMENTS:
                return "input has no 'elements' key"
            case InvalidInputCause.ELEMENTS_NOT_A_LIST:
                return f"expected 'elements' to be a list, got {self.input_type}"
            case _:
                raise AssertionError


def is_invalid_input(err: BaseException | None) -> TypeGuard[InvalidInputError]:
    """``True`` if this is an ``InvalidInputError``."""
    return isinstance(err, InvalidInputError)
