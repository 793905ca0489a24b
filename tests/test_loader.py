"""Tests for the loader module."""

import pytest

from contractgen.loader import (
    MetadataError,
    load_metadata,
    parse_data_type,
    parse_http_interface,
    parse_metadata,
    parse_type_reference,
)
from contractgen.model import (
    NUMBER,
    STRING,
    AliasType,
    ArrayOf,
    EnumType,
    Field,
    HttpMethod,
    NamedRef,
    ObjectType,
    Primitive,
    UnresolvedRef,
)


class TestParseTypeReference:
    """Test raw JSON reference -> TypeReference classification."""

    def test_primitive(self):
        assert parse_type_reference("string") == STRING
        assert parse_type_reference("number") == NUMBER

    def test_reference(self):
        assert parse_type_reference({"type": "reference", "name": "User"}) == NamedRef("User")

    def test_array(self):
        raw = {"kind": "array", "itemType": {"kind": "array", "itemType": "number"}}
        assert parse_type_reference(raw) == ArrayOf(ArrayOf(NUMBER))

    def test_unknown_string_is_unresolved(self):
        assert parse_type_reference("Date") == UnresolvedRef("Date")

    def test_unknown_shape_is_unresolved(self, caplog):
        raw = {"kind": "map", "valueType": "string"}
        assert parse_type_reference(raw) == UnresolvedRef(raw)
        assert "Unrecognized type reference" in caplog.text


class TestParseDataType:

    def test_enum_keeps_order(self):
        dt = parse_data_type({"kind": "enum", "name": "Level", "values": ["low", 2, "high"]})
        assert dt == EnumType("Level", ("low", 2, "high"))

    def test_empty_enum_rejected(self):
        with pytest.raises(MetadataError, match="no values"):
            parse_data_type({"kind": "enum", "name": "Empty", "values": []})

    def test_boolean_enum_value_rejected(self):
        with pytest.raises(MetadataError, match="invalid value"):
            parse_data_type({"kind": "enum", "name": "Flag", "values": [True]})

    def test_alias(self):
        dt = parse_data_type({"kind": "alias", "name": "Email", "baseType": "string"})
        assert dt == AliasType("Email", Primitive.STRING)

    def test_alias_needs_primitive(self):
        with pytest.raises(MetadataError, match="primitive baseType"):
            parse_data_type({"kind": "alias", "name": "Bad", "baseType": "User"})

    def test_object_fields(self):
        dt = parse_data_type({
            "kind": "object",
            "name": "User",
            "fields": [
                {"name": "id", "type": "number"},
                {"name": "nick", "type": "string", "optional": True},
            ],
        })
        assert dt == ObjectType("User", (Field("id", NUMBER), Field("nick", STRING, True)))

    def test_non_finite_enum_value_rejected(self):
        with pytest.raises(MetadataError, match="non-finite"):
            parse_data_type({"kind": "enum", "name": "E", "values": [float("nan"), 1]})

    def test_non_finite_from_json_document(self, tmp_path):
        path = tmp_path / "metadata.json"
        path.write_text('{"dataTypes": [{"kind": "enum", "name": "E", "values": [Infinity]}]}')
        with pytest.raises(MetadataError, match="non-finite"):
            load_metadata(path)

    def test_optional_must_be_boolean(self):
        with pytest.raises(MetadataError, match="'optional'"):
            parse_data_type({
                "kind": "object",
                "name": "A",
                "fields": [{"name": "x", "type": "string", "optional": "false"}],
            })

    def test_field_optional_defaults_false(self):
        dt = parse_data_type({"kind": "object", "name": "A", "fields": [{"name": "x", "type": "boolean"}]})
        assert dt.fields[0].optional is False

    def test_field_without_type(self):
        with pytest.raises(MetadataError, match="has no type"):
            parse_data_type({"kind": "object", "name": "A", "fields": [{"name": "x"}]})

    def test_unknown_kind(self):
        with pytest.raises(MetadataError, match="Unknown kind"):
            parse_data_type({"kind": "union", "name": "U"})

    def test_missing_name(self):
        with pytest.raises(MetadataError, match="'name'"):
            parse_data_type({"kind": "alias", "baseType": "string"})


class TestParseHttpInterface:

    def test_defaults(self):
        api = parse_http_interface({"name": "ping", "method": "GET", "path": "/ping"})
        assert api.method is HttpMethod.GET
        assert api.url_params == ()
        assert api.body_type is None
        assert api.response_type is None
        assert api.headers == ()
        assert api.is_sse is False

    def test_full(self):
        api = parse_http_interface({
            "name": "updateUser",
            "method": "PUT",
            "path": "/api/users/:id",
            "urlParams": [{"name": "id", "type": "number"}],
            "bodyType": {"type": "reference", "name": "User"},
            "responseType": {"type": "reference", "name": "User"},
            "headers": ["X-Request-Id"],
            "isSSE": False,
        })
        assert api.url_params == (Field("id", NUMBER),)
        assert api.body_type == NamedRef("User")
        assert api.headers == ("X-Request-Id",)

    def test_is_sse_must_be_boolean(self):
        with pytest.raises(MetadataError, match="'isSSE'"):
            parse_http_interface({"name": "a", "method": "GET", "path": "/a", "isSSE": "false"})

    def test_lowercase_method_accepted(self):
        assert parse_http_interface({"name": "a", "method": "patch", "path": "/a"}).method is HttpMethod.PATCH

    def test_unsupported_method(self):
        with pytest.raises(MetadataError, match="Unsupported method"):
            parse_http_interface({"name": "a", "method": "TRACE", "path": "/a"})

    def test_empty_body_type_is_absent(self):
        api = parse_http_interface({"name": "a", "method": "POST", "path": "/a", "bodyType": ""})
        assert api.body_type is None

    def test_missing_path(self):
        with pytest.raises(MetadataError, match="'path'"):
            parse_http_interface({"name": "a", "method": "GET"})


class TestParseMetadata:

    def test_root_must_be_object(self):
        with pytest.raises(MetadataError):
            parse_metadata([])

    def test_lists_must_be_lists(self):
        with pytest.raises(MetadataError, match="must be a list"):
            parse_metadata({"dataTypes": {}, "httpInterfaces": []})

    def test_missing_lists_are_empty(self):
        metadata = parse_metadata({})
        assert metadata.data_types == ()
        assert metadata.http_interfaces == ()


class TestLoadMetadata:

    def test_fixture_document(self, metadata_path):
        metadata = load_metadata(metadata_path)
        assert [dt.name for dt in metadata.data_types] == [
            "UserRole", "CompanyName", "User", "CreateUserRequest",
        ]
        assert [api.name for api in metadata.http_interfaces] == [
            "getUser", "listUsers", "createUser", "streamEvents",
        ]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "metadata.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(MetadataError, match="Invalid JSON"):
            load_metadata(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_metadata(tmp_path / "missing.json")
