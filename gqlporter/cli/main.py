"""
GQLPorter CLI - Start the GraphQL MCP server.

Run `gqlporter -u https://api.example.com/graphql` to serve over stdio.
Tool exposure is controlled by exposed.yaml in the current directory.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from gqlporter import __version__
from gqlporter.client.transport import GraphQLTransportError
from gqlporter.core.bridge import GraphQLBridge
from gqlporter.exposure.store import ExposureConfigError
from gqlporter.schema.introspection import SchemaError
from gqlporter.validation.config import BridgeConfig, Config, ConfigError

# stdout carries the MCP stream in stdio mode; everything human-facing goes to stderr
console = Console(stderr=True)

logger = logging.getLogger("gqlporter")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _print_banner(config: BridgeConfig, bridge: GraphQLBridge) -> None:
    console.print("[bold blue]GraphQL MCP Server Started[/bold blue]")
    console.print(f"   └── Transport: {config.transport.upper()}")
    if config.transport == "http":
        console.print(f"   └── Port: {config.port}")
    console.print(f"   └── GraphQL URL: {config.graphql_url}")
    auth = "Bearer Token" if bridge.transport.authenticated else "None"
    console.print(f"   └── Authentication: {auth}")
    console.print(f"   └── Tools: {len(bridge.registry)}")


async def serve(config: BridgeConfig, list_only: bool = False) -> None:
    """Set up the bridge, then serve it (or just list its tools)."""
    from gqlporter.server.app import create_server, run_http, run_stdio

    bridge = GraphQLBridge(config)
    try:
        await bridge.setup()

        if list_only:
            for tool in bridge.registry.list_tools():
                console.print(tool.prompt_line(), markup=False, highlight=False)
            for resource in bridge.registry.list_resources():
                console.print(f"- {resource.uri}", markup=False, highlight=False)
            return

        server = create_server(bridge)
        _print_banner(config, bridge)
        if config.transport == "http":
            await run_http(server, config.host, config.port, config.log_level)
        else:
            await run_stdio(server)
    finally:
        await bridge.close()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--transport", "-t", type=click.Choice(["stdio", "http"]), help="Transport type (default: stdio)")
@click.option("--port", "-p", type=int, help="HTTP port (default: 3000)")
@click.option("--query-prefix", "-q", help="Prefix for query tools (default: none)")
@click.option("--mutation-prefix", "-m", help="Prefix for mutation tools (default: none)")
@click.option("--graphql-url", "-u", help="GraphQL endpoint URL (or GRAPHQL_URL)")
@click.option("--token", "-T", help="Bearer token for the GraphQL endpoint (or GRAPHQL_TOKEN)")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML settings file",
)
@click.option(
    "--exposed",
    "exposed_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Exposure allow-list (default: ./exposed.yaml)",
)
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
@click.option("--list-tools", is_flag=True, help="Reconcile, print the tools that would be exposed, and exit")
@click.option("--version", "-v", is_flag=True, help="Show version")
def cli(
    transport: Optional[str],
    port: Optional[int],
    query_prefix: Optional[str],
    mutation_prefix: Optional[str],
    graphql_url: Optional[str],
    token: Optional[str],
    config_file: Optional[Path],
    exposed_path: Optional[Path],
    log_level: Optional[str],
    list_tools: bool,
    version: bool,
) -> None:
    """
    GraphQL MCP Server - expose a GraphQL API as MCP tools.

    \b
    Examples:
        gqlporter -u https://api.example.com/graphql
        gqlporter -t http -p 8080 -u https://api.example.com/graphql
        gqlporter -u https://api.example.com/graphql -T abc123
        gqlporter -q 'query_' -m 'mutation_' -u https://api.example.com/graphql
        GRAPHQL_URL=https://api.example.com/graphql gqlporter
    """
    if version:
        console.print(f"GQLPorter v{__version__}")
        return

    overrides = {
        "transport": transport,
        "port": port,
        "query_prefix": query_prefix,
        "mutation_prefix": mutation_prefix,
        "graphql_url": graphql_url,
        "token": token,
        "exposed_path": exposed_path,
        "log_level": log_level,
    }

    try:
        config = Config.load(overrides=overrides, config_path=config_file).validated()
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    configure_logging(config.log_level)

    try:
        asyncio.run(serve(config, list_only=list_tools))
    except (ConfigError, ExposureConfigError, GraphQLTransportError, SchemaError) as e:
        console.print(f"[red]Startup failed: {escape(str(e))}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Shutting down...")


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
