"""Generate TypeScript types, Express route stubs and fetch clients from API metadata."""

from .codegen import (
    GeneratedSources,
    emit_client_functions,
    emit_declarations,
    emit_server_stubs,
    generate,
    write_outputs,
)
from .loader import MetadataError, load_metadata, parse_metadata
from .resolver import resolve_type_reference

__all__ = [
    "GeneratedSources",
    "MetadataError",
    "emit_client_functions",
    "emit_declarations",
    "emit_server_stubs",
    "generate",
    "load_metadata",
    "parse_metadata",
    "resolve_type_reference",
    "write_outputs",
]
