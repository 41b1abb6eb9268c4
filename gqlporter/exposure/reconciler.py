"""Reconciliation of the persisted exposure document against the live schema."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from gqlporter.schema.operations import (
    Operation,
    OperationNotFoundError,
    discover_operations,
    resolve_operation,
)
from gqlporter.schema.types import Schema

logger = logging.getLogger(__name__)

KIND_CATEGORIES: Dict[str, str] = {"query": "queries", "mutation": "mutations"}


class ExposedSection(BaseModel):
    """Per-category allow-lists: operation path → enabled flag."""

    queries: Dict[str, Any] = Field(default_factory=dict)
    mutations: Dict[str, Any] = Field(default_factory=dict)
    resources: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("queries", "mutations", "resources", mode="before")
    @classmethod
    def _empty_section(cls, value: Any) -> Any:
        # "queries:" with nothing under it loads as None
        return {} if value is None else value


class ExposureDocument(BaseModel):
    """Root of ``exposed.yaml``."""

    exposed: ExposedSection = Field(default_factory=ExposedSection)

    @field_validator("exposed", mode="before")
    @classmethod
    def _empty_exposed(cls, value: Any) -> Any:
        return {} if value is None else value

    def category(self, name: str) -> Dict[str, Any]:
        return getattr(self.exposed, name)


@dataclass
class ReconcileResult:
    entries: Dict[str, Any]
    dirty: bool = False
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)


def is_enabled(entries: Mapping[str, Any], key: str) -> bool:
    """Only a literal boolean ``true`` enables an operation."""
    return entries.get(key) is True


def reconcile_entries(
    discovered: Iterable[str],
    entries: Mapping[str, Any],
    add_missing: bool = True,
) -> ReconcileResult:
    """
    Sync one category's entries with the discovered operation keys.

    New keys are added as enabled (when ``add_missing``), keys that are no
    longer discovered are dropped. The input mapping is not modified.
    Running it again on its own output reports ``dirty=False``.
    """
    discovered = list(discovered)
    known = set(discovered)
    result = ReconcileResult(entries=dict(entries))

    if add_missing:
        for key in discovered:
            if key not in result.entries:
                result.entries[key] = True
                result.added.append(key)

    for key in list(result.entries):
        if key not in known:
            del result.entries[key]
            result.removed.append(key)

    result.dirty = bool(result.added or result.removed)
    return result


def reconcile(
    document: ExposureDocument,
    discovered_queries: Iterable[str],
    discovered_mutations: Iterable[str],
    discovered_resources: Optional[Iterable[str]] = None,
) -> Tuple[ExposureDocument, bool]:
    """
    Reconcile every category of ``document``; returns ``(new_document, dirty)``.

    Resources are never added automatically: they are opt-in, and only
    pruned once the query they name has disappeared. ``discovered_resources``
    are the query keys resources may name, dotted paths included; it
    defaults to ``discovered_queries``.
    """
    discovered_queries = list(discovered_queries)
    if discovered_resources is None:
        discovered_resources = discovered_queries
    queries = reconcile_entries(discovered_queries, document.exposed.queries)
    mutations = reconcile_entries(discovered_mutations, document.exposed.mutations)
    resources = reconcile_entries(discovered_resources, document.exposed.resources, add_missing=False)

    for category, outcome in (("query", queries), ("mutation", mutations), ("resource", resources)):
        for key in outcome.added:
            logger.info("New %s discovered: %s", category, key)
        for key in outcome.removed:
            logger.info("Removed obsolete %s: %s", category, key)

    reconciled = ExposureDocument(
        exposed=ExposedSection(
            queries=queries.entries,
            mutations=mutations.entries,
            resources=resources.entries,
        )
    )
    dirty = queries.dirty or mutations.dirty or resources.dirty
    return reconciled, dirty


def collect_operations(schema: Schema, kind: str, entries: Mapping[str, Any]) -> Dict[str, Operation]:
    """
    Root operations of ``kind`` plus every dotted entry that still resolves.

    An entry whose path cannot be resolved is logged and left out, which
    lets reconciliation prune it; it never stops the other entries.
    """
    operations = discover_operations(schema, kind)
    for key in entries:
        if "." not in key or key in operations:
            continue
        try:
            operations[key] = resolve_operation(schema, kind, key)
        except OperationNotFoundError as exc:
            logger.warning("%s operation not found: %s (%s)", kind.capitalize(), key, exc)
    return operations
