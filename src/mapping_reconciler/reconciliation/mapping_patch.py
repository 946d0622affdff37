"""Additive mapping update."""

from __future__ import annotations

from mapping_reconciler.store_access.store_client import DocumentStoreClient

from .plan_outcomes import Patch


def apply_mapping_patch(client: DocumentStoreClient, index_name: str, patch: Patch) -> None:
    """Submit the full desired property set of ``patch`` for its root type."""
    client.put_mapping(index_name, patch.root_type, {"properties": patch.properties})
