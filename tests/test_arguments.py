"""Tests for argument validation rules, input schemas and argument docs."""

import logging

import pytest
from pydantic import ValidationError

from gqlporter.schema.types import Argument, EnumType, ListType, NonNullType, ScalarType
from gqlporter.tools import arguments
from gqlporter.tools.arguments import (
    build_rule,
    build_rules,
    documentation,
    example,
    input_json_schema,
    input_model,
)


def _args(schema, kind, name):
    return schema.root_type(kind).fields[name].args


class TestBuildRules:
    def test_required_id(self, minimal_schema):
        rules = build_rules(_args(minimal_schema, "query", "getUser"))
        rule = rules["id"]
        assert rule.kind == "string"
        assert rule.required is True
        assert rule.is_list is False
        assert rule.description == "ID! - id"

    def test_scalar_mapping(self):
        for scalar, kind in [("Int", "integer"), ("Float", "number"), ("String", "string"), ("Boolean", "boolean")]:
            assert build_rule(Argument("x", ScalarType(scalar))).kind == kind
        assert build_rule(Argument("when", ScalarType("DateTime"))).kind == "any"

    def test_input_object_is_passthrough(self, schema):
        rules = build_rules(_args(schema, "query", "users"))
        assert rules["filter"].kind == "any"
        assert rules["filter"].required is False
        assert rules["first"].kind == "integer"
        assert list(rules) == ["filter", "first"]

    def test_enum_list(self, schema):
        rule = build_rules(_args(schema, "mutation", "setRoles"))["roles"]
        assert rule.kind == "enum"
        assert rule.enum_values == ["ADMIN", "USER"]
        assert rule.is_list is True
        assert rule.required is True

    def test_empty_enum_degrades_to_string(self, caplog):
        with caplog.at_level(logging.WARNING):
            rule = build_rule(Argument("state", EnumType("Empty")))
        assert rule.kind == "string"
        assert "declares no values" in caplog.text

    def test_own_description_wins(self, schema):
        rule = build_rules(_args(schema, "query", "getUser"))["id"]
        assert rule.description == "The user id"

    def test_description_failure_keeps_rule(self, monkeypatch, caplog):
        def broken_render(type_ref):
            raise RuntimeError("boom")

        monkeypatch.setattr(arguments, "render", broken_render)
        with caplog.at_level(logging.WARNING):
            rule = build_rule(Argument("id", NonNullType(ScalarType("ID"))))

        assert rule.description is None
        assert rule.required is True
        assert "Failed to add description" in caplog.text


class TestInputSchema:
    def test_json_schema(self, schema):
        rules = build_rules(_args(schema, "mutation", "setRoles"))
        assert input_json_schema(rules) == {
            "type": "object",
            "properties": {
                "roles": {
                    "type": "array",
                    "items": {"type": "string", "enum": ["ADMIN", "USER"]},
                    "description": "[Role]! - roles",
                }
            },
            "required": ["roles"],
        }

    def test_optional_only_schema_has_no_required(self, schema):
        rules = build_rules(_args(schema, "query", "users"))
        result = input_json_schema(rules)
        assert "required" not in result
        assert result["properties"]["filter"] == {"description": "UserFilter - filter"}
        assert result["properties"]["first"] == {"type": "integer", "description": "Int - first"}

    def test_no_args(self):
        assert input_json_schema(build_rules([])) == {"type": "object", "properties": {}}


class TestInputModel:
    def test_validates_required_string(self, minimal_schema):
        model = input_model("getUser_arguments", build_rules(_args(minimal_schema, "query", "getUser")))

        assert model.model_validate({"id": "42"}).model_dump(by_alias=True, exclude_unset=True) == {"id": "42"}
        with pytest.raises(ValidationError):
            model.model_validate({})

    def test_optional_args_are_left_out_when_unset(self, schema):
        model = input_model("users_arguments", build_rules(_args(schema, "query", "users")))
        dumped = model.model_validate({"first": 5}).model_dump(by_alias=True, exclude_unset=True)
        assert dumped == {"first": 5}

    def test_rejects_wrong_types(self, schema):
        model = input_model("users_arguments", build_rules(_args(schema, "query", "users")))
        with pytest.raises(ValidationError):
            model.model_validate({"first": "many"})

    def test_enum_values_are_closed(self, schema):
        model = input_model("setRoles_arguments", build_rules(_args(schema, "mutation", "setRoles")))
        model.model_validate({"roles": ["ADMIN"]})
        with pytest.raises(ValidationError):
            model.model_validate({"roles": ["ROOT"]})

    def test_awkward_argument_names(self):
        rules = build_rules([Argument("_id", ScalarType("ID")), Argument("schema", ScalarType("String"))])
        model = input_model("odd_arguments", rules)
        dumped = model.model_validate({"_id": "1", "schema": "x"}).model_dump(by_alias=True, exclude_unset=True)
        assert dumped == {"_id": "1", "schema": "x"}


class TestDocumentation:
    def test_input_object_is_expanded(self, schema):
        docs = documentation(_args(schema, "query", "users"))
        assert docs.startswith("Arguments:")
        assert "- filter (UserFilter)" in docs
        assert "Fields of UserFilter:" in docs
        assert "- name (String): Name contains" in docs
        assert "One of: ADMIN, USER" in docs

    def test_recursive_input_is_capped(self, schema):
        docs = documentation(_args(schema, "query", "users"))
        assert docs.count("Fields of UserFilter:") == 3
        assert "UserFilter { ... }" in docs

    def test_required_marker(self, minimal_schema):
        docs = documentation(_args(minimal_schema, "query", "getUser"))
        assert "- id (ID!, required)" in docs

    def test_no_args(self):
        assert documentation([]) == ""


class TestExample:
    def test_no_args(self):
        assert example([]) is None

    def test_placeholders(self):
        args = [
            Argument("id", NonNullType(ScalarType("ID"))),
            Argument("name", ScalarType("String")),
            Argument("count", ScalarType("Int")),
            Argument("ratio", ScalarType("Float")),
            Argument("active", ScalarType("Boolean")),
            Argument("tags", ListType(ScalarType("String"))),
        ]
        assert example(args) == {
            "id": "example-id",
            "name": "example",
            "count": 0,
            "ratio": 0.0,
            "active": False,
            "tags": ["example"],
        }

    def test_enum_and_nested_input(self, schema):
        sample = example(_args(schema, "mutation", "createUser"))
        user_input = sample["input"]
        assert user_input["name"] == "example"
        assert user_input["role"] == "ADMIN"
        assert user_input["nested"]["nested"]["nested"] == {}


class TestStrictValidation:
    @pytest.fixture
    def users_model(self, schema):
        return input_model("users_arguments", build_rules(_args(schema, "query", "users")))

    @pytest.mark.parametrize("value", [True, "5", 5.5])
    def test_int_rejects_other_types(self, users_model, value):
        with pytest.raises(ValidationError):
            users_model.model_validate({"first": value})

    def test_boolean_rejects_text(self):
        model = input_model("flag_arguments", build_rules([Argument("flag", ScalarType("Boolean"))]))
        assert model.model_validate({"flag": False}).model_dump(by_alias=True) == {"flag": False}
        with pytest.raises(ValidationError):
            model.model_validate({"flag": "false"})

    def test_string_rejects_numbers(self, minimal_schema):
        model = input_model("getUser_arguments", build_rules(_args(minimal_schema, "query", "getUser")))
        with pytest.raises(ValidationError):
            model.model_validate({"id": 42})

    def test_float_accepts_integers(self):
        model = input_model("ratio_arguments", build_rules([Argument("ratio", ScalarType("Float"))]))
        assert model.model_validate({"ratio": 2}).model_dump(by_alias=True) == {"ratio": 2}
        with pytest.raises(ValidationError):
            model.model_validate({"ratio": "2.5"})

    def test_list_accepts_undecoded_text(self, schema):
        model = input_model("setRoles_arguments", build_rules(_args(schema, "mutation", "setRoles")))
        dumped = model.model_validate({"roles": "[ADMIN"}).model_dump(by_alias=True)
        assert dumped == {"roles": "[ADMIN"}
