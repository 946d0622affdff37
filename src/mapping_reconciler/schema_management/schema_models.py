"""Schema management entities.

Mapping documents are kept as the plain JSON structures the document store
speaks; these aliases name their shapes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

FieldDefinition = Mapping[str, Any]
TypeMapping = Mapping[str, Any]
IndexDefinition = Mapping[str, TypeMapping]
DesiredSchema = IndexDefinition
MappingDocument = Mapping[str, Mapping[str, Any]]
