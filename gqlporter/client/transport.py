"""Upstream GraphQL communication over HTTP."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import httpx

from gqlporter.schema.introspection import INTROSPECTION_QUERY

logger = logging.getLogger(__name__)


class GraphQLTransportError(Exception):
    """Raised when an upstream GraphQL request fails."""


class GraphQLTransport:
    """
    POSTs GraphQL documents to a single endpoint.

    Each call is an independent request; the transport keeps no per-call
    state, so concurrent tool calls can share one instance. Timeouts belong
    to the underlying ``httpx`` client and nothing is retried.
    """

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        timeout: Optional[float] = 30.0,
        headers: Optional[Dict[str, str]] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not url:
            raise ValueError("GraphQL URL is required")
        self.url = url
        self._headers: Dict[str, str] = {"Content-Type": "application/json"}
        self._headers.update(headers or {})
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers=self._headers,
            follow_redirects=True,
            transport=http_transport,
        )

    @property
    def authenticated(self) -> bool:
        return "Authorization" in self._headers

    # ── Requests ──────────────────────────────────────────────────────────

    async def request(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a document and return its ``data`` payload.

        Raises
        ------
        GraphQLTransportError
            On network failures, non-2xx responses, unparseable bodies or a
            non-empty ``errors`` array.
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = await self._client.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            raise GraphQLTransportError(f"Request to {self.url} failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            messages = "; ".join(
                e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors
            )
            raise GraphQLTransportError(f"GraphQL error: {messages}")

        if response.is_error:
            raise GraphQLTransportError(f"HTTP {response.status_code} from {self.url}")
        if not isinstance(body, dict):
            raise GraphQLTransportError(f"Invalid JSON response from {self.url}")

        data = body.get("data")
        return data if isinstance(data, dict) else {}

    async def introspect(self) -> Dict[str, Any]:
        """Run the full introspection query and return its ``data`` payload."""
        logger.info("Fetching GraphQL schema from: %s", self.url)
        start = time.perf_counter()
        data = await self.request(INTROSPECTION_QUERY)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("Introspection complete in %.1fms", elapsed_ms)
        return data

    # ── Cleanup ───────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()
