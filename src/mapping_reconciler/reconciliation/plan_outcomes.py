"""Reconciliation domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from mapping_reconciler.schema_management.schema_models import FieldDefinition


class ReconciliationState(str, Enum):
    """Terminal state reached by one reconciliation call."""

    INDEX_ABSENT = "index_absent"
    UP_TO_DATE = "up_to_date"
    PATCHED = "patched"
    INCOMPATIBLE = "incompatible"


@dataclass(frozen=True)
class NoAction:
    """Plan that requires no write."""

    state: ReconciliationState


@dataclass(frozen=True)
class Patch:
    """Plan that submits the full desired property set of one root type."""

    root_type: str
    properties: Mapping[str, FieldDefinition]
    added_keys: tuple[str, ...]


ReconciliationPlan = NoAction | Patch


@dataclass(frozen=True)
class ReconciliationOutcome:
    """Output contract for one completed reconciliation."""

    index_name: str
    state: ReconciliationState
    added_keys: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        """Return True when the index mapping was written."""
        return self.state == ReconciliationState.PATCHED


class IncompatibleIndexShapeError(Exception):
    """Raised when a live index exposes more than one root type."""

    state = ReconciliationState.INCOMPATIBLE

    def __init__(self, index_name: str, root_types: tuple[str, ...]) -> None:
        self.index_name = index_name
        self.root_types = root_types
        super().__init__(
            f'Index "{index_name}" is out of date or incompatible: it exposes '
            f"{len(root_types)} root types ({', '.join(root_types)}) where exactly one is "
            "expected. Reindex it into the single-root-type layout before starting."
        )
