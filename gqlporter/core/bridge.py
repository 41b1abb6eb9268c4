"""
GQLPorter Bridge - Startup orchestration.

Introspects the upstream schema, reconciles ``exposed.yaml`` against it and
materializes one tool per enabled operation. Everything here runs once,
sequentially, before the server accepts its first request.
"""

import logging
from typing import Dict, Mapping, Optional

from gqlporter.client.transport import GraphQLTransport, GraphQLTransportError
from gqlporter.exposure.reconciler import ExposureDocument, collect_operations, is_enabled, reconcile
from gqlporter.exposure.store import ExposureStore
from gqlporter.schema.introspection import build_schema
from gqlporter.schema.operations import Operation
from gqlporter.schema.types import Schema
from gqlporter.tools.executor import ToolExecutor
from gqlporter.tools.registry import ToolRegistry
from gqlporter.validation.config import BridgeConfig, ConfigError

logger = logging.getLogger(__name__)


class GraphQLBridge:
    """
    Connects a GraphQL endpoint to a tool registry.

    Example::

        bridge = GraphQLBridge(config)
        await bridge.setup()
        result = await bridge.executor.execute("getUser", {"id": "1"})
    """

    def __init__(
        self,
        config: BridgeConfig,
        transport: Optional[GraphQLTransport] = None,
        store: Optional[ExposureStore] = None,
    ):
        if not config.graphql_url and transport is None:
            raise ConfigError("GraphQL URL is required")

        self.config = config
        self.transport = transport or GraphQLTransport(
            config.graphql_url,
            token=config.token,
            timeout=config.timeout,
        )
        self.store = store or ExposureStore(config.exposed_path)
        self.registry = ToolRegistry()
        self.executor = ToolExecutor(self.registry, self.transport)
        self.schema: Optional[Schema] = None
        self.document: Optional[ExposureDocument] = None

    async def fetch_schema(self) -> Schema:
        """Introspect the endpoint; any failure here is fatal to startup."""
        try:
            data = await self.transport.introspect()
        except GraphQLTransportError as exc:
            logger.error("Failed to fetch GraphQL schema: %s", exc)
            raise
        self.schema = build_schema(data)
        logger.info("GraphQL schema fetched successfully")
        return self.schema

    async def setup(self) -> None:
        """
        Load, reconcile, persist, register.

        Raises ``ExposureConfigError`` for an unreadable or unwritable
        exposure document, and ``GraphQLTransportError``/``SchemaError``
        when introspection fails.
        """
        document = self.store.load()

        if self.schema is None:
            await self.fetch_schema()
        schema = self.schema

        queries = collect_operations(schema, "query", document.exposed.queries)
        mutations = collect_operations(schema, "mutation", document.exposed.mutations)
        resources = collect_operations(schema, "query", document.exposed.resources)
        logger.info(
            "Discovered %d queries, %d mutations, and %d configured resources",
            len(queries),
            len(mutations),
            len(document.exposed.resources),
        )

        document, dirty = reconcile(document, queries.keys(), mutations.keys(), resources.keys())
        if dirty:
            self.store.save(document)
        self.document = document

        self._register_category(queries, document.exposed.queries, self.config.query_prefix)
        self._register_category(mutations, document.exposed.mutations, self.config.mutation_prefix)
        self._register_resources(resources, document.exposed.resources)

        logger.info(
            "Registered %d tools and %d resources",
            len(self.registry),
            len(self.registry.list_resources()),
        )

    def _register_category(
        self,
        operations: Dict[str, Operation],
        entries: Mapping[str, object],
        prefix: str,
    ) -> None:
        for key, operation in operations.items():
            if is_enabled(entries, key):
                self.registry.register(operation, prefix)
            else:
                logger.info("Skipped disabled %s: %s", operation.kind, key)

    def _register_resources(self, queries: Dict[str, Operation], entries: Mapping[str, object]) -> None:
        for key in entries:
            if not is_enabled(entries, key):
                continue
            operation = queries.get(key)
            if operation is None:
                logger.warning("Resource %s not found in GraphQL schema", key)
                continue
            self.registry.register_resource(operation)

    async def close(self) -> None:
        await self.transport.close()
