"""Reconciliation domain exports."""

from .mapping_fetch import NOT_FOUND_STATUS, fetch_current_mapping
from .mapping_patch import apply_mapping_patch
from .mapping_planner import plan_mapping_patch
from .plan_outcomes import (
    IncompatibleIndexShapeError,
    NoAction,
    Patch,
    ReconciliationOutcome,
    ReconciliationPlan,
    ReconciliationState,
)
from .reconciliation_use_case import LogSink, plan_index_mapping, reconcile_index_mapping

__all__ = [
    "IncompatibleIndexShapeError",
    "NoAction",
    "Patch",
    "ReconciliationOutcome",
    "ReconciliationPlan",
    "ReconciliationState",
    "NOT_FOUND_STATUS",
    "LogSink",
    "apply_mapping_patch",
    "fetch_current_mapping",
    "plan_index_mapping",
    "plan_mapping_patch",
    "reconcile_index_mapping",
]
