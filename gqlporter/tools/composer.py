"""Compose GraphQL documents for a single operation."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from gqlporter.schema.algebra import is_list_like, render, unwrap
from gqlporter.schema.operations import OPERATION_KINDS, Operation
from gqlporter.schema.types import Argument, InputObjectType, TypeRef
from gqlporter.tools.selection import synthesize

logger = logging.getLogger(__name__)


def variable_definitions(args: Sequence[Argument]) -> str:
    return ", ".join(f"${arg.name}: {render(arg.type)}" for arg in args)


def variable_usages(args: Sequence[Argument]) -> str:
    return ", ".join(f"{arg.name}: ${arg.name}" for arg in args)


def compose_query(
    kind: str,
    path: Sequence[str],
    args: Sequence[Argument],
    return_type: Optional[TypeRef],
) -> str:
    """
    Build the document text for an operation at ``path``.

    The innermost segment carries the variable usages and the selection set;
    every parent segment wraps it as a bare container field. The operation
    is always named after the innermost segment, whatever the nesting depth:

    ``query get($id: ID!) { api { widgets { get(id: $id) { id } } } }``
    """
    if kind not in OPERATION_KINDS:
        raise ValueError(f"Unsupported operation kind: {kind}")
    if not path:
        raise ValueError("Operation path must not be empty")

    definitions = variable_definitions(args)
    usages = variable_usages(args)
    selection = synthesize(return_type)

    body = path[-1]
    if usages:
        body += f"({usages})"
    if selection:
        body += f" {{ {selection} }}"

    for parent in reversed(path[:-1]):
        body = f"{parent} {{ {body} }}"

    header = f"{kind} {path[-1]}"
    if definitions:
        header += f"({definitions})"
    return f"{header} {{ {body} }}"


def decode_arguments(args: Sequence[Argument], values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Best-effort JSON decoding of string values for structured arguments.

    Clients sometimes send an input object or a list as a JSON-encoded
    string. Such values are decoded when the declared type is an input
    object or a list; anything that fails to decode is passed through
    unchanged for the upstream API to judge.
    """
    declared = {arg.name: arg.type for arg in args}
    decoded = dict(values)
    for name, value in values.items():
        type_ref = declared.get(name)
        if type_ref is None or not isinstance(value, str):
            continue
        if not (is_list_like(type_ref) or isinstance(unwrap(type_ref), InputObjectType)):
            continue
        try:
            decoded[name] = json.loads(value)
        except ValueError:
            logger.debug("Argument %s is not valid JSON; passing the string through", name)
    return decoded


class QueryComposer:
    """Composes documents and variables for one captured operation."""

    def __init__(self, operation: Operation):
        self.operation = operation

    def compose(self) -> str:
        op = self.operation
        return compose_query(op.kind, op.path, op.args, op.return_type)

    def prepare(self, values: Optional[Dict[str, Any]] = None) -> Tuple[str, Dict[str, Any]]:
        """Return ``(document, variables)`` for one call; undeclared values are dropped."""
        values = values or {}
        variables = {arg.name: values[arg.name] for arg in self.operation.args if arg.name in values}
        return self.compose(), variables
