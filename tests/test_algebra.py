"""Tests for wrapper-type unwrapping and rendering."""

import pytest

from gqlporter.schema.algebra import field_signature, is_list_like, is_non_null, parse_type, render, unwrap
from gqlporter.schema.types import (
    UNKNOWN,
    ListType,
    NonNullType,
    ObjectType,
    ScalarType,
    UnknownType,
)


STRING = ScalarType("String")
USER = ObjectType("User")


def _lookup(name):
    return {"String": STRING, "User": USER}.get(name)


class TestUnwrap:
    def test_named_type_is_returned_as_is(self):
        assert unwrap(STRING) is STRING

    def test_strips_all_wrappers(self):
        wrapped = NonNullType(ListType(NonNullType(ListType(USER))))
        assert unwrap(wrapped) is USER

    def test_missing_type_yields_unknown(self):
        assert unwrap(None) is UNKNOWN


class TestIsListLike:
    @pytest.mark.parametrize(
        "type_ref, expected",
        [
            (ListType(STRING), True),
            (NonNullType(ListType(STRING)), True),
            (ListType(NonNullType(STRING)), True),
            (NonNullType(STRING), False),
            (STRING, False),
            (None, False),
        ],
    )
    def test_list_detection(self, type_ref, expected):
        assert is_list_like(type_ref) is expected

    def test_non_null_only_looks_at_outer_wrapper(self):
        assert is_non_null(NonNullType(ListType(STRING))) is True
        assert is_non_null(ListType(NonNullType(STRING))) is False


class TestRender:
    def test_render_wrappers(self):
        assert render(NonNullType(ListType(NonNullType(USER)))) == "[User!]!"
        assert render(ListType(ListType(STRING))) == "[[String]]"
        assert render(NonNullType(STRING)) == "String!"

    def test_render_missing_type(self):
        assert render(None) == "Unknown"

    @pytest.mark.parametrize("text", ["String", "String!", "[User]", "[User!]!", "[[String!]]!", "[[User]!]"])
    def test_parse_round_trip(self, text):
        parsed = parse_type(text, _lookup)
        assert render(parsed) == text
        assert unwrap(parsed) in (STRING, USER)

    def test_parse_rebuilds_same_structure(self):
        original = NonNullType(ListType(NonNullType(USER)))
        reparsed = parse_type(render(original), _lookup)
        assert reparsed == original

    def test_parse_unknown_name(self):
        parsed = parse_type("Missing!", _lookup)
        assert isinstance(parsed.of_type, UnknownType)
        assert parsed.of_type.name == "Missing"

    @pytest.mark.parametrize("text", ["", "[String", "String]", "!"])
    def test_parse_rejects_malformed(self, text):
        with pytest.raises(ValueError):
            parse_type(text, _lookup)


class TestFieldSignature:
    def test_signature_with_args(self, schema):
        field = schema.query_type.fields["users"]
        assert field_signature(field) == "users(filter: UserFilter, first: Int): [User!]!"

    def test_signature_without_args(self, schema):
        assert field_signature(schema.query_type.fields["hello"]) == "hello: String"
