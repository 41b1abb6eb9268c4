"""Operations: root or nested fields that can be exposed as tools."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from gqlporter.schema.algebra import unwrap
from gqlporter.schema.types import Argument, Field, ObjectType, Schema, TypeRef

OPERATION_KINDS = ("query", "mutation")


class OperationNotFoundError(Exception):
    """Raised when a (possibly dotted) operation path does not resolve."""


@dataclass(frozen=True)
class Operation:
    """
    A query or mutation field, addressed by its path from the root type.

    ``path`` has one segment for root fields and several for fields nested
    under container objects (``("api", "widgets", "get")``).
    """

    kind: str
    path: Tuple[str, ...]
    field: Field

    @property
    def key(self) -> str:
        """Dotted path as stored in the exposure document."""
        return ".".join(self.path)

    @property
    def name(self) -> str:
        return self.path[-1]

    @property
    def args(self) -> List[Argument]:
        return self.field.args

    @property
    def return_type(self) -> TypeRef:
        return self.field.type

    @property
    def description(self) -> Optional[str]:
        return self.field.description


def discover_operations(schema: Schema, kind: str) -> Dict[str, Operation]:
    """List every root field of the ``kind`` root type, in schema order."""
    root = schema.root_type(kind)
    if root is None:
        return {}
    return {name: Operation(kind, (name,), field) for name, field in root.fields.items()}


def resolve_operation(schema: Schema, kind: str, dotted_path: str) -> Operation:
    """
    Walk ``dotted_path`` field by field from the ``kind`` root type.

    Every non-terminal segment must be an object-typed field. Arguments on
    intermediate segments are not consulted.

    Raises
    ------
    OperationNotFoundError
        If any segment is missing or an intermediate field is not an object.
    """
    segments = tuple(dotted_path.split(".")) if dotted_path else ()
    if not segments or any(not s for s in segments):
        raise OperationNotFoundError(f"Invalid operation path: {dotted_path!r}")

    container = schema.root_type(kind)
    if container is None:
        raise OperationNotFoundError(f"Schema has no {kind} type")

    field: Optional[Field] = None
    for index, segment in enumerate(segments):
        field = container.fields.get(segment)
        if field is None:
            where = ".".join(segments[:index]) or container.name
            raise OperationNotFoundError(f"Field {segment!r} not found under {where}")
        if index < len(segments) - 1:
            next_container = unwrap(field.type)
            if not isinstance(next_container, ObjectType):
                raise OperationNotFoundError(
                    f"Field {'.'.join(segments[: index + 1])!r} is not an object type"
                )
            container = next_container

    return Operation(kind, segments, field)
