"""Tool executor: runs one tool call against the upstream API."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional

from pydantic import ValidationError

from gqlporter.client.transport import GraphQLTransport, GraphQLTransportError
from gqlporter.tools.composer import decode_arguments
from gqlporter.tools.registry import ToolRegistry
from gqlporter.tools.schema import ToolResult

logger = logging.getLogger(__name__)


class ToolExecutor:
    """
    Executes registered tools.

    Every call composes its own document and issues its own request;
    failures (unknown tool, invalid arguments, upstream errors) are returned
    as unsuccessful :class:`ToolResult` objects rather than raised.
    """

    def __init__(self, registry: ToolRegistry, transport: GraphQLTransport):
        self._registry = registry
        self._transport = transport

    async def execute(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        tool = self._registry.get(tool_name)
        if tool is None:
            return ToolResult(tool_name=tool_name, success=False, error=f"Tool not found: {tool_name}")

        operation = tool.operation
        values = decode_arguments(operation.args, arguments or {})

        try:
            validated = tool.arguments_model.model_validate(values)
        except ValidationError as exc:
            return ToolResult(
                tool_name=tool_name,
                success=False,
                error=f"Invalid arguments for {tool_name}: {exc}",
            )
        values = validated.model_dump(by_alias=True, exclude_unset=True)

        query, variables = tool.composer.prepare(values)
        logger.debug("Executing %s %s", operation.kind, operation.key)

        t0 = time.perf_counter()
        try:
            data = await self._transport.request(query, variables)
        except GraphQLTransportError as exc:
            elapsed_ms = int((time.perf_counter() - t0) * 1000)
            logger.error("GraphQL %s %s failed: %s", operation.kind, operation.key, exc)
            return ToolResult(
                tool_name=tool_name,
                success=False,
                error=f"GraphQL {operation.kind} failed: {exc}",
                duration_ms=elapsed_ms,
            )

        return ToolResult(
            tool_name=tool_name,
            success=True,
            output=json.dumps(data, indent=2),
            duration_ms=int((time.perf_counter() - t0) * 1000),
        )

    async def read_resource(self, uri: str) -> str:
        """
        Fetch a resource and return its JSON text.

        Raises
        ------
        ValueError
            If no resource is registered under ``uri``.
        GraphQLTransportError
            If the upstream query fails.
        """
        resource = self._registry.get_resource(uri)
        if resource is None:
            raise ValueError(f"Unknown resource: {uri}")

        logger.info("Fetching resource: %s", uri)
        query, variables = resource.composer.prepare({})
        data = await self._transport.request(query, variables)
        return json.dumps(data, indent=2)
