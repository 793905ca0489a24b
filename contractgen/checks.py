"""Optional consistency checks over a metadata document.

The emitters never call these. They report problems the generator would
otherwise pass through silently: named references to data types that do
not exist, and path tokens with no matching url parameter.
"""

from __future__ import annotations

import logging

from .model import HttpInterface, Metadata, ObjectType
from .naming import path_tokens
from .resolver import referenced_names

logger = logging.getLogger(__name__)


def find_dangling_references(metadata: Metadata) -> list[str]:
    """Describe every named reference whose target is not declared."""
    declared = set(metadata.type_names())
    problems = []

    def _check(ref, where: str) -> None:
        for name in referenced_names(ref):
            if name not in declared:
                problems.append(f"{where} references undefined type {name!r}")

    for data_type in metadata.data_types:
        if isinstance(data_type, ObjectType):
            for field in data_type.fields:
                _check(field.type, f"{data_type.name}.{field.name}")

    for api in metadata.http_interfaces:
        for param in api.url_params:
            _check(param.type, f"{api.name} url param {param.name!r}")
        if api.body_type is not None:
            _check(api.body_type, f"{api.name} body")
        if api.response_type is not None:
            _check(api.response_type, f"{api.name} response")

    return problems


def find_unmatched_path_params(api: HttpInterface) -> list[str]:
    """Path tokens of an interface that no url parameter fills."""
    declared = {p.name for p in api.url_params}
    return [token for token in path_tokens(api.path) if token not in declared]


def find_problems(metadata: Metadata) -> list[str]:
    """Run all checks and log each problem as a warning."""
    problems = find_dangling_references(metadata)
    for api in metadata.http_interfaces:
        for token in find_unmatched_path_params(api):
            problems.append(f"{api.name} path {api.path!r} has no url param for ':{token}'")

    for problem in problems:
        logger.warning(problem)
    return problems
