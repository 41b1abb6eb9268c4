"""Shared fixtures: introspection payloads and the schemas built from them."""

import pytest

from gqlporter.schema.introspection import build_schema


def named(kind, name):
    return {"kind": kind, "name": name, "ofType": None}


def non_null(type_ref):
    return {"kind": "NON_NULL", "name": None, "ofType": type_ref}


def list_of(type_ref):
    return {"kind": "LIST", "name": None, "ofType": type_ref}


def scalar_ref(name):
    return named("SCALAR", name)


def arg(name, type_ref, description=None, default=None):
    return {"name": name, "description": description, "type": type_ref, "defaultValue": default}


def field(name, type_ref, args=(), description=None):
    return {"name": name, "description": description, "args": list(args), "type": type_ref}


def object_type(name, fields):
    return {"kind": "OBJECT", "name": name, "description": None, "fields": fields}


def input_type(name, fields):
    return {"kind": "INPUT_OBJECT", "name": name, "description": None, "inputFields": fields}


def enum_type(name, values):
    return {
        "kind": "ENUM",
        "name": name,
        "description": None,
        "enumValues": [{"name": v, "description": None} for v in values],
    }


def scalar_type(name):
    return {"kind": "SCALAR", "name": name, "description": None}


BUILTIN_SCALARS = [scalar_type(n) for n in ("ID", "String", "Int", "Float", "Boolean")]


def introspection(types, query="Query", mutation=None):
    return {
        "__schema": {
            "queryType": {"name": query} if query else None,
            "mutationType": {"name": mutation} if mutation else None,
            "subscriptionType": None,
            "types": BUILTIN_SCALARS + types,
        }
    }


@pytest.fixture
def minimal_introspection():
    """``Query { getUser(id: ID!): User }`` with ``User { id: ID!, name: String }``."""
    return introspection(
        [
            object_type(
                "Query",
                [field("getUser", named("OBJECT", "User"), [arg("id", non_null(scalar_ref("ID")))])],
            ),
            object_type(
                "User",
                [
                    field("id", non_null(scalar_ref("ID"))),
                    field("name", scalar_ref("String")),
                ],
            ),
        ]
    )


@pytest.fixture
def sample_introspection():
    """A richer schema: nesting, cycles, enums, input objects, a union and a mutation clash."""
    user_ref = named("OBJECT", "User")
    filter_ref = named("INPUT_OBJECT", "UserFilter")
    return introspection(
        [
            object_type(
                "Query",
                [
                    field(
                        "getUser",
                        user_ref,
                        [arg("id", non_null(scalar_ref("ID")), description="The user id")],
                        description="Fetch one user",
                    ),
                    field(
                        "users",
                        non_null(list_of(non_null(user_ref))),
                        [arg("filter", filter_ref), arg("first", scalar_ref("Int"))],
                    ),
                    field("hello", scalar_ref("String")),
                    field("api", named("OBJECT", "Api")),
                    field(
                        "search",
                        list_of(named("UNION", "SearchResult")),
                        [arg("term", non_null(scalar_ref("String")))],
                    ),
                ],
            ),
            object_type(
                "Mutation",
                [
                    field("createUser", user_ref, [arg("input", non_null(filter_ref))]),
                    field("getUser", user_ref, [arg("id", non_null(scalar_ref("ID")))]),
                    field("setRoles", scalar_ref("Boolean"), [arg("roles", non_null(list_of(named("ENUM", "Role"))))]),
                ],
            ),
            object_type("Api", [field("widgets", named("OBJECT", "Widgets"))]),
            object_type(
                "Widgets",
                [
                    field("get", named("OBJECT", "Widget"), [arg("id", non_null(scalar_ref("ID")))]),
                    field("count", scalar_ref("Int")),
                ],
            ),
            object_type(
                "Widget",
                [field("id", non_null(scalar_ref("ID"))), field("label", scalar_ref("String"))],
            ),
            object_type(
                "User",
                [
                    field("id", non_null(scalar_ref("ID"))),
                    field("name", scalar_ref("String")),
                    field("role", named("ENUM", "Role")),
                    field("friends", list_of(non_null(user_ref))),
                    field("posts", list_of(named("OBJECT", "Post")), [arg("first", non_null(scalar_ref("Int")))]),
                ],
            ),
            object_type("Post", [field("title", scalar_ref("String"))]),
            enum_type("Role", ["ADMIN", "USER"]),
            input_type(
                "UserFilter",
                [
                    arg("name", scalar_ref("String"), description="Name contains"),
                    arg("role", named("ENUM", "Role")),
                    arg("nested", filter_ref),
                ],
            ),
            {"kind": "UNION", "name": "SearchResult", "description": None},
        ],
        mutation="Mutation",
    )


@pytest.fixture
def minimal_schema(minimal_introspection):
    return build_schema(minimal_introspection)


@pytest.fixture
def schema(sample_introspection):
    return build_schema(sample_introspection)
