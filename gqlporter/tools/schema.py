"""Data models for synthesized tools, resources and call results."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ToolDefinition(BaseModel):
    """Static shape of a tool, fixed at startup."""

    name: str  # e.g. "getUser" or "createUser_mutation"
    title: str
    description: str
    input_schema: Dict[str, Any] = Field(default_factory=dict)
    operation_kind: str  # "query" or "mutation"
    operation_path: List[str] = Field(default_factory=list)

    @property
    def operation_key(self) -> str:
        return ".".join(self.operation_path)

    def prompt_line(self) -> str:
        """One-line listing, e.g. for ``--list-tools`` output."""
        first_line = self.description.split("\n")[0][:100]
        return f"- {self.name}: {first_line}"


class ResourceDefinition(BaseModel):
    """A no-argument query exposed as a readable resource."""

    name: str
    uri: str
    description: str
    mime_type: str = "application/json"


class ToolResult(BaseModel):
    """Outcome of one tool invocation."""

    tool_name: str = ""
    success: bool = False
    output: str = ""  # pretty-printed JSON of the upstream data
    error: Optional[str] = None
    duration_ms: int = 0
