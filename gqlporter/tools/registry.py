"""Tool registry: turns exposed operations into callable tool definitions."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Type

from pydantic import BaseModel

from gqlporter.schema.algebra import field_signature, render
from gqlporter.schema.operations import Operation
from gqlporter.tools.arguments import (
    ValidationRule,
    build_rules,
    documentation,
    example,
    input_json_schema,
    input_model,
)
from gqlporter.tools.composer import QueryComposer
from gqlporter.tools.schema import ResourceDefinition, ToolDefinition

logger = logging.getLogger(__name__)

RESOURCE_SCHEME = "resource://"


class ToolBuildError(Exception):
    """Raised when a tool cannot be synthesized for an operation."""


def tool_name(prefix: str, path: Sequence[str]) -> str:
    """``<prefix><path joined by '_'>``, e.g. ``q_api_widgets_get``."""
    return f"{prefix or ''}{'_'.join(path)}"


def describe_operation(operation: Operation) -> str:
    """
    Assemble the tool description.

    Uses the field's own description, falling back to the rendered field
    signature, then appends the return type, the argument reference and a
    JSON example of the arguments.
    """
    parts = [operation.description or f"Execute {operation.kind}: {field_signature(operation.field)}"]
    parts.append(f"Returns: {render(operation.return_type)}")

    docs = documentation(operation.args)
    if docs:
        parts.append(docs)

    sample = example(operation.args)
    if sample is not None:
        parts.append("Example:\n```json\n" + json.dumps(sample, indent=2) + "\n```")

    return "\n\n".join(parts)


@dataclass
class RegisteredTool:
    """A tool definition together with what is needed to execute it."""

    definition: ToolDefinition
    operation: Operation
    composer: QueryComposer
    rules: Dict[str, ValidationRule]
    arguments_model: Type[BaseModel]


@dataclass
class RegisteredResource:
    definition: ResourceDefinition
    composer: QueryComposer


class ToolRegistry:
    """
    Holds every tool materialized at startup.

    Tools are registered once and never change for the lifetime of the
    process. When two operations derive the same name, the one registered
    later gets a ``_<kind>`` suffix; queries are registered before
    mutations, so a clashing mutation ends up as ``<name>_mutation``.
    """

    def __init__(self):
        self._tools: Dict[str, RegisteredTool] = {}
        self._resources: Dict[str, RegisteredResource] = {}

    # ── Tools ─────────────────────────────────────────────────────────────

    def register(self, operation: Operation, prefix: str = "") -> Optional[ToolDefinition]:
        """
        Build and register a tool for ``operation``.

        Returns the definition, or ``None`` if the tool could not be built;
        the failure is logged and other registrations are unaffected.
        """
        name = tool_name(prefix, operation.path)
        if name in self._tools:
            name = f"{name}_{operation.kind}"
        if name in self._tools:
            logger.error("Tool name %s already registered; skipping %s %s", name, operation.kind, operation.key)
            return None

        try:
            registered = self._build(name, operation)
        except Exception as exc:
            logger.error("Failed to register %s tool %s: %s", operation.kind, name, exc)
            return None

        self._tools[name] = registered
        logger.info("Registered %s: %s", operation.kind, name)
        return registered.definition

    def _build(self, name: str, operation: Operation) -> RegisteredTool:
        rules = build_rules(operation.args)
        schema = input_json_schema(rules)
        if not isinstance(schema, dict):
            raise ToolBuildError(f"Invalid input schema generated for {name}")

        definition = ToolDefinition(
            name=name,
            title=f"GraphQL {operation.kind.capitalize()}: {operation.key}",
            description=describe_operation(operation),
            input_schema=schema,
            operation_kind=operation.kind,
            operation_path=list(operation.path),
        )
        return RegisteredTool(
            definition=definition,
            operation=operation,
            composer=QueryComposer(operation),
            rules=rules,
            arguments_model=input_model(f"{name}_arguments", rules),
        )

    def get(self, name: str) -> Optional[RegisteredTool]:
        return self._tools.get(name)

    def list_tools(self) -> List[ToolDefinition]:
        return [t.definition for t in self._tools.values()]

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    # ── Resources ─────────────────────────────────────────────────────────

    def register_resource(self, operation: Operation) -> Optional[ResourceDefinition]:
        """Expose a query as ``resource://<name>``; it is always called without arguments."""
        try:
            definition = ResourceDefinition(
                name=operation.key,
                uri=f"{RESOURCE_SCHEME}{operation.key}",
                description=operation.description
                or f"GraphQL query resource: {field_signature(operation.field)}",
            )
            composer = QueryComposer(operation)
        except Exception as exc:
            logger.error("Failed to register resource %s: %s", operation.key, exc)
            return None

        self._resources[definition.uri] = RegisteredResource(definition, composer)
        logger.info("Registered resource: %s", definition.uri)
        return definition

    def get_resource(self, uri: str) -> Optional[RegisteredResource]:
        return self._resources.get(uri)

    def list_resources(self) -> List[ResourceDefinition]:
        return [r.definition for r in self._resources.values()]
