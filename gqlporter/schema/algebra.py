"""Wrapper-type algebra: unwrapping, list detection and type rendering."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from gqlporter.schema.types import (
    UNKNOWN,
    Field,
    ListType,
    NamedType,
    NonNullType,
    TypeRef,
    UnknownType,
)


def unwrap(type_ref: Optional[TypeRef]) -> NamedType:
    """
    Strip every NonNull and List layer and return the named type.

    A missing type yields the ``UNKNOWN`` sentinel instead of failing;
    introspection payloads can omit type data for obscure meta-fields.
    """
    current = type_ref
    while isinstance(current, (NonNullType, ListType)):
        current = current.of_type
    if current is None:
        return UNKNOWN
    return current


def is_non_null(type_ref: Optional[TypeRef]) -> bool:
    return isinstance(type_ref, NonNullType)


def is_list_like(type_ref: Optional[TypeRef]) -> bool:
    """True when the type is a list once at most one outer NonNull is removed."""
    if isinstance(type_ref, NonNullType):
        type_ref = type_ref.of_type
    return isinstance(type_ref, ListType)


def render(type_ref: Optional[TypeRef]) -> str:
    """
    Render a type reference in GraphQL syntax, e.g. ``[User!]!``.

    The output is suitable for variable declarations; feeding it back to
    :func:`parse_type` rebuilds the same wrapper chain.
    """
    if type_ref is None:
        return UNKNOWN.name
    if isinstance(type_ref, NonNullType):
        return f"{render(type_ref.of_type)}!"
    if isinstance(type_ref, ListType):
        return f"[{render(type_ref.of_type)}]"
    return type_ref.name


def parse_type(text: str, lookup: Callable[[str], Optional[NamedType]]) -> TypeRef:
    """
    Parse GraphQL type syntax back into a wrapper chain.

    ``lookup`` resolves the innermost name; names it does not know become
    :class:`UnknownType` instances carrying that name.

    >>> render(parse_type("[Int!]!", lambda name: None))
    '[Int!]!'
    """
    type_ref, rest = _parse(text.strip(), lookup)
    if rest:
        raise ValueError(f"Unexpected trailing input in type {text!r}: {rest!r}")
    return type_ref


def _parse(text: str, lookup: Callable[[str], Optional[NamedType]]) -> Tuple[TypeRef, str]:
    if not text:
        raise ValueError("Empty type expression")

    if text[0] == "[":
        inner, rest = _parse(text[1:].lstrip(), lookup)
        rest = rest.lstrip()
        if not rest.startswith("]"):
            raise ValueError(f"Unclosed list type near {rest!r}")
        type_ref: TypeRef = ListType(inner)
        rest = rest[1:].lstrip()
    else:
        end = 0
        while end < len(text) and (text[end].isalnum() or text[end] == "_"):
            end += 1
        if end == 0:
            raise ValueError(f"Expected a type name near {text!r}")
        name = text[:end]
        type_ref = lookup(name) or UnknownType(name)
        rest = text[end:].lstrip()

    if rest.startswith("!"):
        type_ref = NonNullType(type_ref)
        rest = rest[1:].lstrip()
    return type_ref, rest


def field_signature(field: Field) -> str:
    """Render ``name(arg: Type, ...): ReturnType`` for a field."""
    args = ""
    if field.args:
        args = "(" + ", ".join(f"{arg.name}: {render(arg.type)}" for arg in field.args) + ")"
    return f"{field.name}{args}: {render(field.type)}"
