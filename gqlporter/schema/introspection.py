"""Introspection query text and conversion of its result into a :class:`Schema`."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from gqlporter.schema.types import (
    UNKNOWN,
    AbstractType,
    Argument,
    EnumType,
    EnumValue,
    Field,
    InputField,
    InputObjectType,
    ListType,
    NamedType,
    NonNullType,
    ObjectType,
    ScalarType,
    Schema,
    TypeRef,
    UnknownType,
)

logger = logging.getLogger(__name__)


class SchemaError(Exception):
    """Raised when an introspection result cannot be turned into a schema."""


INTROSPECTION_QUERY = """
query IntrospectionQuery {
  __schema {
    queryType { name }
    mutationType { name }
    subscriptionType { name }
    types {
      ...FullType
    }
  }
}

fragment FullType on __Type {
  kind
  name
  description
  fields(includeDeprecated: true) {
    name
    description
    args {
      ...InputValue
    }
    type {
      ...TypeRef
    }
  }
  inputFields {
    ...InputValue
  }
  interfaces {
    ...TypeRef
  }
  enumValues(includeDeprecated: true) {
    name
    description
  }
  possibleTypes {
    ...TypeRef
  }
}

fragment InputValue on __InputValue {
  name
  description
  type { ...TypeRef }
  defaultValue
}

fragment TypeRef on __Type {
  kind
  name
  ofType {
    kind
    name
    ofType {
      kind
      name
      ofType {
        kind
        name
        ofType {
          kind
          name
          ofType {
            kind
            name
            ofType {
              kind
              name
              ofType {
                kind
                name
              }
            }
          }
        }
      }
    }
  }
}
"""


def build_schema(result: Optional[Dict[str, Any]]) -> Schema:
    """
    Build a :class:`Schema` from the ``data`` payload of an introspection query.

    Named types are created first and their fields filled in a second pass,
    so references between types (including cycles) resolve to the same
    objects.

    Raises
    ------
    SchemaError
        If the payload lacks the top-level ``__schema`` envelope.
    """
    if not isinstance(result, dict) or not isinstance(result.get("__schema"), dict):
        raise SchemaError("Invalid introspection result - missing __schema")

    raw_schema = result["__schema"]
    raw_types: List[Dict[str, Any]] = [t for t in raw_schema.get("types") or [] if t and t.get("name")]

    types: Dict[str, NamedType] = {}
    for raw in raw_types:
        types[raw["name"]] = _create_named(raw)

    builder = _RefResolver(types)
    for raw in raw_types:
        named = types[raw["name"]]
        if isinstance(named, ObjectType):
            for raw_field in raw.get("fields") or []:
                named.fields[raw_field["name"]] = Field(
                    name=raw_field["name"],
                    type=builder.resolve(raw_field.get("type")),
                    args=[builder.argument(a) for a in raw_field.get("args") or []],
                    description=raw_field.get("description"),
                )
        elif isinstance(named, InputObjectType):
            for raw_field in raw.get("inputFields") or []:
                named.fields[raw_field["name"]] = InputField(
                    name=raw_field["name"],
                    type=builder.resolve(raw_field.get("type")),
                    description=raw_field.get("description"),
                    default_value=raw_field.get("defaultValue"),
                )

    schema = Schema(
        types=types,
        query_type=_root(types, raw_schema.get("queryType")),
        mutation_type=_root(types, raw_schema.get("mutationType")),
    )
    logger.debug("Built schema: %s", schema.summary())
    return schema


def _create_named(raw: Dict[str, Any]) -> NamedType:
    kind = raw.get("kind")
    name = raw["name"]
    description = raw.get("description")

    if kind == "SCALAR":
        return ScalarType(name, description)
    if kind == "ENUM":
        values = [EnumValue(v["name"], v.get("description")) for v in raw.get("enumValues") or []]
        return EnumType(name, values, description)
    if kind == "OBJECT":
        return ObjectType(name, description=description)
    if kind == "INPUT_OBJECT":
        return InputObjectType(name, description=description)
    if kind in ("INTERFACE", "UNION"):
        return AbstractType(name, kind, description)

    logger.warning("Unrecognised type kind %r for %s", kind, name)
    return UnknownType(name)


def _root(types: Dict[str, NamedType], ref: Optional[Dict[str, Any]]) -> Optional[ObjectType]:
    if not ref or not ref.get("name"):
        return None
    root = types.get(ref["name"])
    if not isinstance(root, ObjectType):
        raise SchemaError(f"Root type {ref['name']!r} is not an object type")
    return root


class _RefResolver:
    """Turns nested ``{kind, name, ofType}`` references into wrapper chains."""

    def __init__(self, types: Dict[str, NamedType]):
        self._types = types

    def resolve(self, ref: Optional[Dict[str, Any]]) -> TypeRef:
        if not ref:
            return UNKNOWN
        kind = ref.get("kind")
        if kind == "NON_NULL":
            return NonNullType(self.resolve(ref.get("ofType")))
        if kind == "LIST":
            return ListType(self.resolve(ref.get("ofType")))

        name = ref.get("name")
        if not name:
            return UNKNOWN
        named = self._types.get(name)
        if named is None:
            logger.warning("Type %s referenced but not present in introspection result", name)
            return UnknownType(name)
        return named

    def argument(self, raw: Dict[str, Any]) -> Argument:
        return Argument(
            name=raw["name"],
            type=self.resolve(raw.get("type")),
            description=raw.get("description"),
            default_value=raw.get("defaultValue"),
        )
