"""In-memory model of a metadata document.

A document holds two ordered lists: data types (enum, alias, object) and
HTTP interfaces. Both unions are closed: every consumer dispatches on the
concrete dataclass and raises TypeError for anything else.

TypeReference variants:
  - PrimitiveRef  string / number / boolean
  - NamedRef      name of a data type, looked up by name only
  - ArrayOf       wraps another reference, nesting is unbounded
  - UnresolvedRef raw value whose shape matched none of the above
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class Primitive(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


@dataclass(frozen=True)
class PrimitiveRef:
    primitive: Primitive


@dataclass(frozen=True)
class NamedRef:
    name: str


@dataclass(frozen=True)
class ArrayOf:
    item_type: TypeReference


@dataclass(frozen=True)
class UnresolvedRef:
    """A reference the loader could not classify. Keeps the raw value."""

    raw: Any


TypeReference = Union[PrimitiveRef, NamedRef, ArrayOf, UnresolvedRef]

STRING = PrimitiveRef(Primitive.STRING)
NUMBER = PrimitiveRef(Primitive.NUMBER)
BOOLEAN = PrimitiveRef(Primitive.BOOLEAN)

EnumValue = Union[str, int, float]


@dataclass(frozen=True)
class Field:
    name: str
    type: TypeReference
    optional: bool = False


@dataclass(frozen=True)
class EnumType:
    name: str
    values: tuple[EnumValue, ...]


@dataclass(frozen=True)
class AliasType:
    name: str
    base_type: Primitive


@dataclass(frozen=True)
class ObjectType:
    name: str
    fields: tuple[Field, ...] = ()


DataType = Union[EnumType, AliasType, ObjectType]


@dataclass(frozen=True)
class HttpInterface:
    name: str
    method: HttpMethod
    path: str
    url_params: tuple[Field, ...] = ()
    body_type: TypeReference | None = None
    response_type: TypeReference | None = None
    headers: tuple[str, ...] = ()
    is_sse: bool = False


@dataclass(frozen=True)
class Metadata:
    data_types: tuple[DataType, ...] = ()
    http_interfaces: tuple[HttpInterface, ...] = ()

    def type_names(self) -> list[str]:
        """Data type names in document order, each listed once."""
        return list(dict.fromkeys(dt.name for dt in self.data_types))
