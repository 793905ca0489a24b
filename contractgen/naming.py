"""Path templates, literals and route names for emitted TypeScript.

Path templates use Express-style tokens:
  /api/users/:id          -> `/api/users/${id}`
  /api/users/:id/:sub     -> `/api/users/${id}/${sub}`

Tokens are matched to url parameters by name. A token with no matching
parameter stays in the target as the literal text ':name'.
"""

from __future__ import annotations

import json
import re
from typing import Iterable

from .model import EnumValue, HttpMethod

# ':' followed by an identifier, matched as a whole token
PATH_TOKEN = re.compile(r":(\w+)")


def path_tokens(path: str) -> list[str]:
    """Return the parameter names used in a path template, in order."""
    return PATH_TOKEN.findall(path)


def _escape_template_text(text: str) -> str:
    """Escape text so a template literal reproduces it verbatim."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def substitute_path_params(path: str, param_names: Iterable[str]) -> str:
    """Replace every ':name' token with a '${name}' interpolation.

    Only names in param_names are replaced. Everything else is escaped for
    use inside a template literal, so the only interpolations in the result
    are the substituted parameters.
    """
    names = set(param_names)
    parts = []
    last = 0
    for match in PATH_TOKEN.finditer(path):
        parts.append(_escape_template_text(path[last:match.start()]))
        name = match.group(1)
        if name in names:
            parts.append("${" + name + "}")
        else:
            parts.append(_escape_template_text(match.group(0)))
        last = match.end()
    parts.append(_escape_template_text(path[last:]))
    return "".join(parts)


def single_quoted(text: str) -> str:
    """Quote text as a single-quoted TypeScript string literal."""
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def template_literal(body: str) -> str:
    """Wrap an already escaped body (see substitute_path_params) in backticks."""
    return f"`{body}`"


def enum_literal(value: EnumValue) -> str:
    """Render an enum member: strings double-quoted, numbers bare."""
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return json.dumps(value)


def route_method(method: HttpMethod) -> str:
    """Return the Express router method for an HTTP method ('get', 'post', ...)."""
    return method.value.lower()
