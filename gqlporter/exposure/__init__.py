"""
Exposure configuration: the persisted allow-list deciding which
operations become tools, kept in step with the schema across restarts.
"""

from gqlporter.exposure.reconciler import (
    ExposedSection,
    ExposureDocument,
    ReconcileResult,
    collect_operations,
    is_enabled,
    reconcile,
    reconcile_entries,
)
from gqlporter.exposure.store import ExposureConfigError, ExposureStore

__all__ = [
    "ExposedSection",
    "ExposureConfigError",
    "ExposureDocument",
    "ExposureStore",
    "ReconcileResult",
    "collect_operations",
    "is_enabled",
    "reconcile",
    "reconcile_entries",
]
