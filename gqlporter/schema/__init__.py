"""
Schema model for GQLPorter.

Introspection results are converted once into a small closed set of typed
nodes (scalars, enums, objects, input objects, list/non-null wrappers) that
the tool synthesis code walks.
"""

from gqlporter.schema.algebra import field_signature, is_list_like, is_non_null, parse_type, render, unwrap
from gqlporter.schema.introspection import INTROSPECTION_QUERY, SchemaError, build_schema
from gqlporter.schema.operations import (
    Operation,
    OperationNotFoundError,
    discover_operations,
    resolve_operation,
)
from gqlporter.schema.types import Schema

__all__ = [
    "INTROSPECTION_QUERY",
    "Operation",
    "OperationNotFoundError",
    "Schema",
    "SchemaError",
    "build_schema",
    "discover_operations",
    "field_signature",
    "is_list_like",
    "is_non_null",
    "parse_type",
    "render",
    "resolve_operation",
    "unwrap",
]
