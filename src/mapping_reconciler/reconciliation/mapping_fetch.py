"""Current mapping retrieval."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mapping_reconciler.schema_management.schema_models import IndexDefinition
from mapping_reconciler.schema_management.schema_projection import SchemaError
from mapping_reconciler.store_access.store_client import DocumentStoreClient

NOT_FOUND_STATUS = 404


def fetch_current_mapping(client: DocumentStoreClient, index_name: str) -> IndexDefinition | None:
    """Return the live mappings of ``index_name``, or None when the index does not exist.

    Raises:
      SchemaError: If the response does not describe exactly one index.
    """
    if not index_name:
        raise ValueError("Index name must not be empty.")

    response = client.get_mapping(index_name, ignore=(NOT_FOUND_STATUS,))
    if response.get("status") == NOT_FOUND_STATUS:
        return None

    entry = _index_entry(response, index_name)
    return entry.get("mappings") or {}


def _index_entry(response: Mapping[str, Any], index_name: str) -> Mapping[str, Any]:
    if index_name in response:
        return response[index_name]
    # The store answers with the concrete index name when queried through an alias.
    if len(response) == 1:
        return next(iter(response.values()))
    resolved = ", ".join(sorted(response)) or "none"
    raise SchemaError(
        f'Index "{index_name}" must resolve to exactly one index, resolved to: {resolved}'
    )
