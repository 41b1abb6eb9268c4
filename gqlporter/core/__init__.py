"""
GQLPorter core module.

Contains the startup orchestration that wires schema, exposure and tools.
"""

from gqlporter.core.bridge import GraphQLBridge

__all__ = ["GraphQLBridge"]
