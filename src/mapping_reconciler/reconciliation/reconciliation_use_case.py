"""Index mapping reconciliation use-case service."""

from __future__ import annotations

import logging
from collections.abc import Callable

from mapping_reconciler.schema_management.schema_models import DesiredSchema
from mapping_reconciler.store_access.store_client import DocumentStoreClient

from .mapping_fetch import fetch_current_mapping
from .mapping_patch import apply_mapping_patch
from .mapping_planner import plan_mapping_patch
from .plan_outcomes import (
    NoAction,
    ReconciliationOutcome,
    ReconciliationPlan,
    ReconciliationState,
)

LogSink = Callable[[str], None]

_LOGGER = logging.getLogger("mapping_reconciler.reconciliation")


def plan_index_mapping(
    client: DocumentStoreClient, index_name: str, desired: DesiredSchema
) -> ReconciliationPlan:
    """Fetch the live mapping of ``index_name`` and plan against it without writing."""
    current = fetch_current_mapping(client, index_name)
    return plan_mapping_patch(current, desired, index_name=index_name)


def reconcile_index_mapping(
    client: DocumentStoreClient,
    index_name: str,
    desired: DesiredSchema,
    *,
    log: LogSink | None = None,
) -> ReconciliationOutcome:
    """Bring ``index_name`` up to the desired property set with at most one additive write.

    A missing index and an index that already carries every desired property
    are left untouched. ``log`` receives one notice after a successful patch.

    Raises:
      IncompatibleIndexShapeError: If the live index has more than one root type.
      TransportFailure: If a store request fails; the index is left as it was.
    """
    plan = plan_index_mapping(client, index_name, desired)
    if isinstance(plan, NoAction):
        return ReconciliationOutcome(index_name=index_name, state=plan.state)

    apply_mapping_patch(client, index_name, plan)
    notice = log or _LOGGER.info
    notice(
        f'Updated mappings of index "{index_name}" with new properties '
        f"{', '.join(repr(key) for key in plan.added_keys)}"
    )
    return ReconciliationOutcome(
        index_name=index_name,
        state=ReconciliationState.PATCHED,
        added_keys=plan.added_keys,
    )
