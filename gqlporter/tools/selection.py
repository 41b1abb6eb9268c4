"""Automatic selection sets for object-typed results."""

from __future__ import annotations

from typing import List, Optional

from gqlporter.schema.algebra import is_non_null, unwrap
from gqlporter.schema.types import EnumType, Field, ObjectType, ScalarType, TypeRef

MAX_SELECTION_DEPTH = 3
TYPENAME = "__typename"


def has_required_args(field: Field) -> bool:
    """True if the field declares a non-null argument without a default."""
    return any(is_non_null(arg.type) and arg.default_value is None for arg in field.args)


def synthesize(type_ref: Optional[TypeRef], depth: int = 0) -> Optional[str]:
    """
    Derive a selection set body for ``type_ref``.

    Returns ``None`` for scalars and enums, which take no sub-selection.
    Objects deeper than ``MAX_SELECTION_DEPTH`` are cut down to
    ``__typename``; this cap is what terminates self-referential schemas.
    Fields requiring arguments are never selected since there is nothing to
    pass them.

    >>> synthesize(ScalarType("String")) is None
    True
    """
    base = unwrap(type_ref)
    if isinstance(base, (ScalarType, EnumType)):
        return None
    if not isinstance(base, ObjectType):
        return TYPENAME
    if depth > MAX_SELECTION_DEPTH:
        return TYPENAME

    selections: List[str] = []
    for name, field in base.fields.items():
        if has_required_args(field):
            continue
        field_base = unwrap(field.type)
        if isinstance(field_base, (ScalarType, EnumType)):
            selections.append(name)
        elif isinstance(field_base, ObjectType):
            sub_selection = synthesize(field.type, depth + 1)
            selections.append(f"{name} {{ {sub_selection} }}")
        # interfaces, unions and unknown types need fragments; skip them

    return " ".join(selections) if selections else TYPENAME
