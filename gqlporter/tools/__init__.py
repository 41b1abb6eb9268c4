"""
Tool synthesis: selection sets, argument schemas, query composition,
and the registry/executor pair that serves tools at runtime.
"""

from gqlporter.tools.composer import QueryComposer, compose_query, decode_arguments
from gqlporter.tools.executor import ToolExecutor
from gqlporter.tools.registry import ToolBuildError, ToolRegistry, tool_name
from gqlporter.tools.schema import ResourceDefinition, ToolDefinition, ToolResult
from gqlporter.tools.selection import synthesize

__all__ = [
    "QueryComposer",
    "ResourceDefinition",
    "ToolBuildError",
    "ToolDefinition",
    "ToolExecutor",
    "ToolRegistry",
    "ToolResult",
    "compose_query",
    "decode_arguments",
    "synthesize",
    "tool_name",
]
