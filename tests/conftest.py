"""Shared fixtures for contractgen tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from contractgen.loader import load_metadata
from contractgen.model import (
    NUMBER,
    ArrayOf,
    Field,
    HttpInterface,
    HttpMethod,
    Metadata,
    NamedRef,
    ObjectType,
)

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def metadata_path() -> Path:
    return FIXTURES / "metadata.json"


@pytest.fixture
def users_metadata(metadata_path) -> Metadata:
    """The users document: enum, alias, two objects, four interfaces."""
    return load_metadata(metadata_path)


@pytest.fixture
def get_user_metadata() -> Metadata:
    """Single object and single GET interface with one url param."""
    return Metadata(
        data_types=(ObjectType("User", (Field("id", NUMBER),)),),
        http_interfaces=(
            HttpInterface(
                name="getUser",
                method=HttpMethod.GET,
                path="/api/users/:id",
                url_params=(Field("id", NUMBER),),
                response_type=NamedRef("User"),
            ),
        ),
    )


@pytest.fixture
def sse_interface() -> HttpInterface:
    return HttpInterface(
        name="streamEvents",
        method=HttpMethod.GET,
        path="/api/events",
        response_type=ArrayOf(NamedRef("Event")),
        is_sse=True,
    )
