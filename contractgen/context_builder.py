"""Build Jinja2 template contexts from the metadata model.

One builder per emitted artifact. Each returns a plain dict whose entries
are already rendered strings and flags, so the templates only lay out
lines. Builders read the model and never mutate it.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from .model import (
    AliasType,
    DataType,
    EnumType,
    HttpInterface,
    HttpMethod,
    ObjectType,
)
from .naming import (
    enum_literal,
    route_method,
    single_quoted,
    substitute_path_params,
    template_literal,
)
from .resolver import resolve_type_reference

OPTIONAL_MARKER = "?"


def _declaration(data_type: DataType) -> dict[str, Any]:
    if isinstance(data_type, EnumType):
        return {
            "kind": "enum",
            "name": data_type.name,
            "literals": [enum_literal(v) for v in data_type.values],
        }
    if isinstance(data_type, AliasType):
        return {
            "kind": "alias",
            "name": data_type.name,
            "base": data_type.base_type.value,
        }
    if isinstance(data_type, ObjectType):
        return {
            "kind": "object",
            "name": data_type.name,
            "fields": [
                {
                    "name": field.name,
                    "marker": OPTIONAL_MARKER if field.optional else "",
                    "type": resolve_type_reference(field.type),
                }
                for field in data_type.fields
            ],
        }
    raise TypeError(f"Not a data type: {data_type!r}")


def build_declarations_context(data_types: Iterable[DataType]) -> dict[str, Any]:
    """Context for types.ts.j2: one declaration per data type, in input order."""
    return {"declarations": [_declaration(dt) for dt in data_types]}


def _stub_notes(api: HttpInterface) -> list[str]:
    """Guidance comments for a non-streaming stub."""
    notes = []
    if api.url_params:
        notes.append("URL params: " + ", ".join(p.name for p in api.url_params))
    if api.body_type is not None:
        notes.append(f"Body type: {resolve_type_reference(api.body_type)}")
    if api.response_type is not None:
        notes.append(f"Response type: {resolve_type_reference(api.response_type)}")
    if api.headers:
        notes.append("Headers: " + ", ".join(api.headers))
    return notes


def build_server_context(
    interfaces: Iterable[HttpInterface],
    type_names: Sequence[str] = (),
) -> dict[str, Any]:
    """Context for server.ts.j2: one route registration per interface."""
    routes = []
    for api in interfaces:
        routes.append({
            "name": api.name,
            "method": route_method(api.method),
            "path": single_quoted(api.path),
            "is_sse": api.is_sse,
            # SSE stubs get the fixed prologue only
            "notes": [] if api.is_sse else _stub_notes(api),
        })
    return {"type_names": list(type_names), "routes": routes}


def _return_type(api: HttpInterface) -> str:
    if api.is_sse:
        return "Promise<Response>"
    if api.response_type is not None:
        return f"Promise<{resolve_type_reference(api.response_type)}>"
    return "Promise<void>"


def _target(api: HttpInterface) -> str:
    """The fetch target: interpolated when there are url params, literal otherwise."""
    if api.url_params:
        path = substitute_path_params(api.path, (p.name for p in api.url_params))
        return template_literal(path)
    return single_quoted(api.path)


def _client_function(api: HttpInterface) -> dict[str, Any]:
    params = [f"{p.name}: {resolve_type_reference(p.type)}" for p in api.url_params]
    has_body = api.body_type is not None
    if has_body:
        params.append(f"body: {resolve_type_reference(api.body_type)}")

    return {
        "name": api.name,
        "params": params,
        "return_type": _return_type(api),
        "target": _target(api),
        "has_options": api.method is not HttpMethod.GET or has_body,
        "method": api.method.value,
        "has_body": has_body,
        "is_sse": api.is_sse,
        "has_response": api.response_type is not None,
    }


def build_client_context(
    interfaces: Iterable[HttpInterface],
    type_names: Sequence[str] = (),
) -> dict[str, Any]:
    """Context for client.ts.j2: one fetch function per interface."""
    return {
        "type_names": list(type_names),
        "functions": [_client_function(api) for api in interfaces],
    }
