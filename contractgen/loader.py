"""Load a metadata document and convert it to the in-memory model.

Reads data/metadata.json (relative to the working directory) by default.
The document uses the editor's JSON shape:

    {"dataTypes": [{"kind": "object", "name": "User", "fields": [...]}],
     "httpInterfaces": [{"name": "getUser", "method": "GET", ...}]}
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

from .model import (
    AliasType,
    ArrayOf,
    DataType,
    EnumType,
    Field,
    HttpInterface,
    HttpMethod,
    Metadata,
    NamedRef,
    ObjectType,
    Primitive,
    PrimitiveRef,
    TypeReference,
    UnresolvedRef,
)

logger = logging.getLogger(__name__)

METADATA_PATH = Path("data") / "metadata.json"


class MetadataError(ValueError):
    """The document is not a well-formed metadata document."""


def load_metadata(path: Path | None = None) -> Metadata:
    """Load and parse the metadata document from disk."""
    metadata_file = path or METADATA_PATH
    with open(metadata_file, encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise MetadataError(f"Invalid JSON in {metadata_file}: {exc}") from exc
    return parse_metadata(raw)


def parse_metadata(raw: Any) -> Metadata:
    """Convert a decoded JSON document to a Metadata value."""
    if not isinstance(raw, dict):
        raise MetadataError("Metadata document root must be an object")

    data_types = [parse_data_type(item) for item in _get_list(raw, "dataTypes", "document")]
    interfaces = [
        parse_http_interface(item) for item in _get_list(raw, "httpInterfaces", "document")
    ]
    logger.debug(
        "Parsed %d data types and %d HTTP interfaces", len(data_types), len(interfaces),
    )
    return Metadata(data_types=tuple(data_types), http_interfaces=tuple(interfaces))


def parse_type_reference(raw: Any) -> TypeReference:
    """Classify a raw type reference.

    Unrecognized shapes become UnresolvedRef instead of failing.
    """
    if isinstance(raw, str):
        try:
            return PrimitiveRef(Primitive(raw))
        except ValueError:
            pass
    elif isinstance(raw, dict):
        if raw.get("kind") == "array" and "itemType" in raw:
            return ArrayOf(parse_type_reference(raw["itemType"]))
        if raw.get("type") == "reference" and isinstance(raw.get("name"), str):
            return NamedRef(raw["name"])

    logger.warning("Unrecognized type reference %r, emitting as unresolved", raw)
    return UnresolvedRef(raw)


def parse_field(raw: Any, where: str) -> Field:
    """Parse an object field or url parameter."""
    if not isinstance(raw, dict):
        raise MetadataError(f"Field in {where} must be an object, got {raw!r}")
    name = _get_str(raw, "name", where)
    if "type" not in raw:
        raise MetadataError(f"Field {name!r} in {where} has no type")
    return Field(
        name=name,
        type=parse_type_reference(raw["type"]),
        optional=_get_bool(raw, "optional", where),
    )


def parse_data_type(raw: Any) -> DataType:
    """Parse one entry of the dataTypes list."""
    if not isinstance(raw, dict):
        raise MetadataError(f"Data type must be an object, got {raw!r}")
    name = _get_str(raw, "name", "data type")
    where = f"data type {name!r}"
    kind = raw.get("kind")

    if kind == "enum":
        values = _get_list(raw, "values", where)
        if not values:
            raise MetadataError(f"Enum {name!r} has no values")
        for value in values:
            # bool is an int subclass but not a valid enum member
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise MetadataError(f"Enum {name!r} has invalid value {value!r}")
            # json accepts NaN and Infinity, TypeScript has no such literal types
            if isinstance(value, float) and not math.isfinite(value):
                raise MetadataError(f"Enum {name!r} has non-finite value {value!r}")
        return EnumType(name=name, values=tuple(values))

    if kind == "alias":
        base = raw.get("baseType")
        try:
            base_type = Primitive(base)
        except ValueError:
            raise MetadataError(
                f"Alias {name!r} must have a primitive baseType, got {base!r}"
            ) from None
        return AliasType(name=name, base_type=base_type)

    if kind == "object":
        fields = [parse_field(f, where) for f in _get_list(raw, "fields", where)]
        return ObjectType(name=name, fields=tuple(fields))

    raise MetadataError(f"Unknown kind {kind!r} for {where}")


def parse_http_interface(raw: Any) -> HttpInterface:
    """Parse one entry of the httpInterfaces list."""
    if not isinstance(raw, dict):
        raise MetadataError(f"HTTP interface must be an object, got {raw!r}")
    name = _get_str(raw, "name", "HTTP interface")
    where = f"HTTP interface {name!r}"

    method_raw = raw.get("method")
    try:
        method = HttpMethod(str(method_raw).upper())
    except ValueError:
        raise MetadataError(f"Unsupported method {method_raw!r} for {where}") from None

    headers = _get_list(raw, "headers", where)
    if not all(isinstance(h, str) for h in headers):
        raise MetadataError(f"Headers of {where} must be strings")

    return HttpInterface(
        name=name,
        method=method,
        path=_get_str(raw, "path", where),
        url_params=tuple(parse_field(p, where) for p in _get_list(raw, "urlParams", where)),
        body_type=_optional_reference(raw, "bodyType"),
        response_type=_optional_reference(raw, "responseType"),
        headers=tuple(headers),
        is_sse=_get_bool(raw, "isSSE", where),
    )


def _optional_reference(raw: dict[str, Any], key: str) -> TypeReference | None:
    value = raw.get(key)
    if value is None or value == "":
        return None
    return parse_type_reference(value)


def _get_str(raw: dict[str, Any], key: str, where: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value:
        raise MetadataError(f"Missing or invalid {key!r} in {where}")
    return value


def _get_bool(raw: dict[str, Any], key: str, where: str) -> bool:
    """Return raw[key] as a bool. Missing or null means False."""
    value = raw.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise MetadataError(f"{key!r} in {where} must be true or false, got {value!r}")
    return value


def _get_list(raw: dict[str, Any], key: str, where: str) -> list[Any]:
    """Return raw[key] as a list. Missing or null means empty."""
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MetadataError(f"{key!r} in {where} must be a list")
    return value
