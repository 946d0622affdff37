"""Shared test fixtures for mapping_reconciler."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any

import pytest
from mapping_reconciler.store_access.store_client import TransportFailure


class InMemoryDocumentStore:
    """Document store fake that records every call and merges mappings additively."""

    def __init__(
        self,
        indices: Mapping[str, Mapping[str, Any]] | None = None,
        *,
        get_error: Exception | None = None,
        put_error: Exception | None = None,
    ) -> None:
        self.indices: dict[str, dict[str, Any]] = copy.deepcopy(dict(indices or {}))
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False
        self._get_error = get_error
        self._put_error = put_error

    @property
    def reads(self) -> list[dict[str, Any]]:
        return [params for method, params in self.calls if method == "get_mapping"]

    @property
    def writes(self) -> list[dict[str, Any]]:
        return [params for method, params in self.calls if method == "put_mapping"]

    def get_mapping(self, index: str, *, ignore: Sequence[int] = ()) -> Mapping[str, Any]:
        self.calls.append(("get_mapping", {"index": index, "ignore": tuple(ignore)}))
        if self._get_error is not None:
            raise self._get_error
        if index not in self.indices:
            if 404 in ignore:
                return {"error": {"type": "index_not_found_exception"}, "status": 404}
            raise TransportFailure(f"no such index [{index}]", status_code=404)
        return {index: {"mappings": copy.deepcopy(self.indices[index])}}

    def put_mapping(
        self, index: str, doc_type: str, body: Mapping[str, Any]
    ) -> Mapping[str, Any]:
        self.calls.append(
            ("put_mapping", {"index": index, "type": doc_type, "body": copy.deepcopy(body)})
        )
        if self._put_error is not None:
            raise self._put_error
        type_mapping = self.indices.setdefault(index, {}).setdefault(doc_type, {})
        properties = type_mapping.setdefault("properties", {})
        for key, definition in body.get("properties", {}).items():
            properties.setdefault(key, copy.deepcopy(definition))
        return {"acknowledged": True}

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> InMemoryDocumentStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@pytest.fixture
def store_factory() -> type[InMemoryDocumentStore]:
    return InMemoryDocumentStore


@pytest.fixture
def blog_mapping() -> dict[str, Any]:
    return {
        "blog": {
            "properties": {
                "title": {"type": "text"},
                "views": {"type": "integer"},
            }
        }
    }
