"""Mapping classification and additive diff planning."""

from __future__ import annotations

import copy

from mapping_reconciler.schema_management.schema_models import DesiredSchema, IndexDefinition
from mapping_reconciler.schema_management.schema_projection import (
    root_properties,
    root_type,
    root_types,
)

from .plan_outcomes import (
    IncompatibleIndexShapeError,
    NoAction,
    Patch,
    ReconciliationPlan,
    ReconciliationState,
)


def plan_mapping_patch(
    current: IndexDefinition | None,
    desired: DesiredSchema,
    *,
    index_name: str = "",
) -> ReconciliationPlan:
    """Decide whether ``current`` needs an additive patch to carry every desired property.

    Only top-level property keys are compared; field definitions are never
    inspected. Properties present in ``current`` but not in ``desired`` are
    left alone. A patch carries the complete desired property set and relies on
    the store merging it additively.

    Raises:
      IncompatibleIndexShapeError: If ``current`` has more than one root type.
    """
    if not current:
        return NoAction(ReconciliationState.INDEX_ABSENT)

    current_types = root_types(current)
    if len(current_types) > 1:
        raise IncompatibleIndexShapeError(index_name, current_types)

    current_keys = set(root_properties(current))
    desired_properties = root_properties(desired)
    missing = [key for key in desired_properties if key not in current_keys]
    if not missing:
        return NoAction(ReconciliationState.UP_TO_DATE)

    return Patch(
        root_type=root_type(desired),
        properties=copy.deepcopy(dict(desired_properties)),
        added_keys=tuple(sorted(missing)),
    )
