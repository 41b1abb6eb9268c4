"""Argument validation rules, input schemas and argument documentation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Sequence, Type, Union

from pydantic import BaseModel, ConfigDict, StrictBool, StrictFloat, StrictInt, StrictStr, create_model
from pydantic import Field as ModelField

from gqlporter.schema.algebra import is_list_like, is_non_null, render, unwrap
from gqlporter.schema.types import Argument, EnumType, InputObjectType, ScalarType, TypeRef

logger = logging.getLogger(__name__)

MAX_INPUT_DEPTH = 3

SCALAR_RULE_KINDS: Dict[str, str] = {
    "Int": "integer",
    "Float": "number",
    "String": "string",
    "ID": "string",
    "Boolean": "boolean",
}

_ANNOTATIONS: Dict[str, Any] = {
    "integer": StrictInt,
    "number": StrictFloat,
    "string": StrictStr,
    "boolean": StrictBool,
}


@dataclass
class ValidationRule:
    """How one tool argument is validated and described."""

    name: str
    kind: str  # integer, number, string, boolean, enum, any
    required: bool = False
    is_list: bool = False
    enum_values: List[str] = field(default_factory=list)
    description: Optional[str] = None

    def annotation(self) -> Any:
        """Python type used by the pydantic validation model."""
        if self.kind == "enum":
            base: Any = Literal[tuple(self.enum_values)]
        else:
            base = _ANNOTATIONS.get(self.kind, Any)
        if self.is_list:
            # text that did not decode as JSON is sent as-is for upstream to reject
            base = Union[List[base], StrictStr]
        if not self.required:
            base = Optional[base]
        return base

    def json_schema(self) -> Dict[str, Any]:
        if self.kind == "enum":
            item: Dict[str, Any] = {"type": "string", "enum": list(self.enum_values)}
        elif self.kind in _ANNOTATIONS:
            item = {"type": self.kind}
        else:
            item = {}
        schema = {"type": "array", "items": item} if self.is_list else dict(item)
        if self.description:
            schema["description"] = self.description
        return schema


def build_rule(arg: Argument) -> ValidationRule:
    base = unwrap(arg.type)
    enum_values: List[str] = []

    if isinstance(base, ScalarType):
        kind = SCALAR_RULE_KINDS.get(base.name, "any")
    elif isinstance(base, EnumType):
        enum_values = base.value_names
        if enum_values:
            kind = "enum"
        else:
            logger.warning("Enum %s declares no values; accepting any string for %s", base.name, arg.name)
            kind = "string"
    else:
        kind = "any"

    rule = ValidationRule(
        name=arg.name,
        kind=kind,
        required=is_non_null(arg.type),
        is_list=is_list_like(arg.type),
        enum_values=enum_values,
    )

    try:
        rule.description = arg.description or f"{render(arg.type)} - {arg.name}"
    except Exception as exc:
        logger.warning("Failed to add description for %s: %s", arg.name, exc)

    return rule


def build_rules(args: Sequence[Argument]) -> Dict[str, ValidationRule]:
    """Map each argument name to its :class:`ValidationRule`, in declaration order."""
    return {arg.name: build_rule(arg) for arg in args}


def input_json_schema(rules: Dict[str, ValidationRule]) -> Dict[str, Any]:
    """JSON Schema object advertised as the tool's ``inputSchema``."""
    schema: Dict[str, Any] = {
        "type": "object",
        "properties": {name: rule.json_schema() for name, rule in rules.items()},
    }
    required = [name for name, rule in rules.items() if rule.required]
    if required:
        schema["required"] = required
    return schema


def input_model(model_name: str, rules: Dict[str, ValidationRule]) -> Type[BaseModel]:
    """
    Create a pydantic model that validates call arguments against ``rules``.

    GraphQL argument names are used as aliases; the Python-side field names
    are positional so names such as ``_id`` or ``schema`` stay legal.
    Validate with ``model_validate(values)`` and read the arguments back with
    ``model_dump(by_alias=True, exclude_unset=True)``.
    """
    definitions: Dict[str, Any] = {}
    for index, (name, rule) in enumerate(rules.items()):
        default = ... if rule.required else None
        definitions[f"arg_{index}"] = (
            rule.annotation(),
            ModelField(default, alias=name, description=rule.description),
        )
    return create_model(
        model_name,
        __config__=ConfigDict(extra="ignore"),
        **definitions,
    )


# ── Documentation ────────────────────────────────────────────────────────


def documentation(args: Sequence[Argument]) -> str:
    """
    Long-form argument reference for a tool description.

    Input object arguments are expanded field by field, enum arguments list
    their values. Nested input objects stop expanding after
    ``MAX_INPUT_DEPTH`` levels.
    """
    if not args:
        return ""

    lines = ["Arguments:"]
    for arg in args:
        required = ", required" if is_non_null(arg.type) else ""
        text = f"- {arg.name} ({render(arg.type)}{required})"
        if arg.description:
            text += f": {arg.description}"
        lines.append(text)
        lines.extend(_describe_type(arg.type, indent=1, depth=0))
    return "\n".join(lines)


def _describe_type(type_ref: TypeRef, indent: int, depth: int) -> List[str]:
    pad = "  " * indent
    base = unwrap(type_ref)

    if isinstance(base, EnumType):
        if not base.values:
            return []
        return [f"{pad}One of: {', '.join(base.value_names)}"]

    if isinstance(base, InputObjectType):
        if depth >= MAX_INPUT_DEPTH:
            return [f"{pad}{base.name} {{ ... }}"]
        lines = [f"{pad}Fields of {base.name}:"]
        for input_field in base.fields.values():
            required = ", required" if is_non_null(input_field.type) else ""
            text = f"{pad}- {input_field.name} ({render(input_field.type)}{required})"
            if input_field.description:
                text += f": {input_field.description}"
            lines.append(text)
            lines.extend(_describe_type(input_field.type, indent + 1, depth + 1))
        return lines

    return []


def example(args: Sequence[Argument]) -> Optional[Dict[str, Any]]:
    """Representative argument values for documentation, or ``None`` without arguments."""
    if not args:
        return None
    return {arg.name: example_value(arg.type) for arg in args}


def example_value(type_ref: TypeRef, depth: int = 0) -> Any:
    if is_non_null(type_ref):
        return example_value(type_ref.of_type, depth)
    if is_list_like(type_ref):
        return [example_value(type_ref.of_type, depth)]

    base = unwrap(type_ref)
    if isinstance(base, ScalarType):
        kind = SCALAR_RULE_KINDS.get(base.name)
        if kind == "integer":
            return 0
        if kind == "number":
            return 0.0
        if kind == "boolean":
            return False
        if base.name == "ID":
            return "example-id"
        return "example"
    if isinstance(base, EnumType):
        return base.values[0].name if base.values else None
    if isinstance(base, InputObjectType):
        if depth >= MAX_INPUT_DEPTH:
            return {}
        return {name: example_value(f.type, depth + 1) for name, f in base.fields.items()}
    return None
