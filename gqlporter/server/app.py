"""MCP server surface: exposes the bridge's tools and resources over stdio or HTTP."""

from __future__ import annotations

import contextlib
import logging
from typing import Any, AsyncIterator, Dict, Iterable, List

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from gqlporter import __version__
from gqlporter.core.bridge import GraphQLBridge

logger = logging.getLogger(__name__)

SERVER_NAME = "graphql-mcp-server"
MCP_PATH = "/mcp"


class ToolCallError(Exception):
    """Raised to report a failed tool call; the MCP layer turns it into an error result."""


def create_server(bridge: GraphQLBridge) -> Server:
    """Build a low-level MCP server backed by an already set-up bridge."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(
                name=tool.name,
                title=tool.title,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in bridge.registry.list_tools()
        ]

    # Arguments are validated by the tool's own model after JSON-string
    # decoding, so the generic schema check is disabled here.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        result = await bridge.executor.execute(name, arguments)
        if not result.success:
            raise ToolCallError(result.error or f"Tool {name} failed")
        return [types.TextContent(type="text", text=result.output)]

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return [
            types.Resource(
                uri=resource.uri,
                name=resource.name,
                description=resource.description,
                mimeType=resource.mime_type,
            )
            for resource in bridge.registry.list_resources()
        ]

    @server.read_resource()
    async def read_resource(uri: Any) -> Iterable[ReadResourceContents]:
        text = await bridge.executor.read_resource(str(uri).rstrip("/"))
        return [ReadResourceContents(content=text, mime_type="application/json")]

    return server


async def run_stdio(server: Server) -> None:
    """Serve MCP over standard input/output until the client disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Ready to accept MCP requests via STDIO")
        await server.run(read_stream, write_stream, server.create_initialization_options())


class _MCPEndpoint:
    """ASGI endpoint delegating to the streamable-HTTP session manager."""

    def __init__(self, session_manager: Any):
        self._session_manager = session_manager

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        await self._session_manager.handle_request(scope, receive, send)


def create_http_app(server: Server) -> Any:
    """Starlette app serving MCP streamable-HTTP at ``/mcp`` (stateless, one transport per request)."""
    from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
    from starlette.applications import Starlette
    from starlette.routing import Route

    session_manager = StreamableHTTPSessionManager(app=server, json_response=False, stateless=True)

    @contextlib.asynccontextmanager
    async def lifespan(app: Any) -> AsyncIterator[None]:
        async with session_manager.run():
            yield

    return Starlette(routes=[Route(MCP_PATH, endpoint=_MCPEndpoint(session_manager))], lifespan=lifespan)


async def run_http(server: Server, host: str, port: int, log_level: str = "info") -> None:
    import uvicorn

    app = create_http_app(server)
    logger.info("MCP endpoint: http://%s:%d%s", host, port, MCP_PATH)
    config = uvicorn.Config(app, host=host, port=port, log_level=log_level.lower())
    await uvicorn.Server(config).serve()
