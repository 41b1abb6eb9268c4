"""Typed model of an introspected GraphQL schema.

Named types compare by identity (``eq=False``) and keep their field maps out
of ``repr`` so self-referential schemas never recurse on comparison or
printing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(eq=False)
class ScalarType:
    """Built-in or custom scalar (``String``, ``Int``, ``DateTime``...)."""

    name: str
    description: Optional[str] = None


@dataclass
class EnumValue:
    name: str
    description: Optional[str] = None


@dataclass(eq=False)
class EnumType:
    name: str
    values: List[EnumValue] = field(default_factory=list)
    description: Optional[str] = None

    @property
    def value_names(self) -> List[str]:
        return [v.name for v in self.values]


@dataclass(eq=False)
class ObjectType:
    name: str
    fields: Dict[str, "Field"] = field(default_factory=dict, repr=False)
    description: Optional[str] = None


@dataclass(eq=False)
class InputObjectType:
    name: str
    fields: Dict[str, "InputField"] = field(default_factory=dict, repr=False)
    description: Optional[str] = None


@dataclass(eq=False)
class AbstractType:
    """Interface or union. Its concrete shape is unknown until runtime."""

    name: str
    kind: str = "INTERFACE"
    description: Optional[str] = None


@dataclass(eq=False)
class UnknownType:
    """Stand-in for a missing or unresolvable type reference."""

    name: str = "Unknown"


UNKNOWN = UnknownType()


@dataclass(frozen=True)
class ListType:
    of_type: "TypeRef"


@dataclass(frozen=True)
class NonNullType:
    of_type: "TypeRef"


NamedType = Union[ScalarType, EnumType, ObjectType, InputObjectType, AbstractType, UnknownType]
TypeRef = Union[NamedType, ListType, NonNullType]


@dataclass
class Argument:
    name: str
    type: TypeRef
    description: Optional[str] = None
    default_value: Optional[str] = None


@dataclass
class InputField:
    name: str
    type: TypeRef
    description: Optional[str] = None
    default_value: Optional[str] = None


@dataclass
class Field:
    name: str
    type: TypeRef
    args: List[Argument] = field(default_factory=list)
    description: Optional[str] = None


@dataclass
class Schema:
    """
    Snapshot of the upstream schema.

    Built once from an introspection result (see
    :func:`gqlporter.schema.introspection.build_schema`) and treated as
    read-only afterwards.
    """

    types: Dict[str, NamedType] = field(default_factory=dict, repr=False)
    query_type: Optional[ObjectType] = None
    mutation_type: Optional[ObjectType] = None

    def get_type(self, name: str) -> Optional[NamedType]:
        return self.types.get(name)

    def root_type(self, kind: str) -> Optional[ObjectType]:
        """Return the root object for ``query`` or ``mutation``."""
        if kind == "query":
            return self.query_type
        if kind == "mutation":
            return self.mutation_type
        raise ValueError(f"Unsupported operation kind: {kind}")

    def summary(self) -> Dict[str, Any]:
        return {
            "types": len(self.types),
            "queries": len(self.query_type.fields) if self.query_type else 0,
            "mutations": len(self.mutation_type.fields) if self.mutation_type else 0,
        }
