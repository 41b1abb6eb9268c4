"""MCP server transports for GQLPorter."""

from gqlporter.server.app import ToolCallError, create_http_app, create_server, run_http, run_stdio

__all__ = ["ToolCallError", "create_http_app", "create_server", "run_http", "run_stdio"]
