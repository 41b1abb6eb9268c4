"""HTTP client for the upstream GraphQL endpoint."""

from gqlporter.client.transport import GraphQLTransport, GraphQLTransportError

__all__ = ["GraphQLTransport", "GraphQLTransportError"]
