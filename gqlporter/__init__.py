"""
GQLPorter - GraphQL-to-MCP bridge.

Exposes every operation of a GraphQL API as an individually callable MCP
tool, with an ``exposed.yaml`` allow-list that follows the schema across
restarts.

Architecture:
- One introspection at startup builds a typed schema snapshot
- ``exposed.yaml`` is reconciled against the discovered operations
- Each enabled operation becomes a tool with a synthesized input schema,
  description and query document
- Tool calls compose their document and forward it upstream, nothing cached
"""

__version__ = "1.0.0"
__author__ = "GQLPorter Team"
__license__ = "Apache-2.0"

from gqlporter.core.bridge import GraphQLBridge
from gqlporter.validation.config import BridgeConfig, Config

__all__ = [
    "BridgeConfig",
    "Config",
    "GraphQLBridge",
    "__version__",
]
