"""Resolve a type reference to the type name used in emitted source."""

from __future__ import annotations

from .model import ArrayOf, NamedRef, PrimitiveRef, TypeReference, UnresolvedRef

# Rendered for references the loader could not classify
UNRESOLVED_TYPE = "unknown"

ARRAY_SUFFIX = "[]"


def resolve_type_reference(ref: TypeReference) -> str:
    """Return the type name for a reference.

    Named references are passed through without checking that the name
    exists in the document. Arrays recurse, one suffix per level.
    """
    if isinstance(ref, PrimitiveRef):
        return ref.primitive.value
    if isinstance(ref, NamedRef):
        return ref.name
    if isinstance(ref, ArrayOf):
        return resolve_type_reference(ref.item_type) + ARRAY_SUFFIX
    if isinstance(ref, UnresolvedRef):
        return UNRESOLVED_TYPE
    raise TypeError(f"Not a type reference: {ref!r}")


def referenced_names(ref: TypeReference) -> list[str]:
    """Collect the data type names a reference points at."""
    if isinstance(ref, NamedRef):
        return [ref.name]
    if isinstance(ref, ArrayOf):
        return referenced_names(ref.item_type)
    if isinstance(ref, (PrimitiveRef, UnresolvedRef)):
        return []
    raise TypeError(f"Not a type reference: {ref!r}")
