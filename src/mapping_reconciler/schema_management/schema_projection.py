"""Root type extraction and desired schema loading."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import yaml

from .schema_models import DesiredSchema, FieldDefinition, IndexDefinition


class SchemaError(Exception):
    """Raised when a mapping document cannot be read as a single-root-type schema."""


def root_types(definition: IndexDefinition) -> tuple[str, ...]:
    """Return the root type names of an index definition in document order."""
    return tuple(definition.keys())


def root_type(definition: IndexDefinition) -> str:
    """Return the first root type of an index definition.

    Callers validate cardinality where it matters; a definition without any
    root type is always an error.
    """
    types = root_types(definition)
    if not types:
        raise SchemaError("Mapping document does not define a root type.")
    return types[0]


def root_properties(definition: IndexDefinition) -> Mapping[str, FieldDefinition]:
    """Return the property map of the root type.

    A root type without a ``properties`` key has no fields.
    """
    type_mapping = definition[root_type(definition)]
    if not isinstance(type_mapping, Mapping):
        raise SchemaError("Root type mapping must be an object.")
    properties = type_mapping.get("properties") or {}
    if not isinstance(properties, Mapping):
        raise SchemaError("Root type properties must be an object.")
    return properties


def load_desired_schema(text: str) -> DesiredSchema:
    """Parse JSON or YAML mapping text into a validated desired schema."""
    try:
        parsed: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaError(f"Invalid mapping document: {exc}") from exc
    if not isinstance(parsed, Mapping):
        raise SchemaError("Mapping document must be an object keyed by root type.")

    types = root_types(parsed)
    if len(types) != 1:
        raise SchemaError(
            f"Mapping document must define exactly one root type, found {len(types)}."
        )
    root_properties(parsed)
    return dict(parsed)
