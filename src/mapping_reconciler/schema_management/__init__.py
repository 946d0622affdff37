"""Schema management exports."""

from .schema_models import (
    DesiredSchema,
    FieldDefinition,
    IndexDefinition,
    MappingDocument,
    TypeMapping,
)
from .schema_projection import (
    SchemaError,
    load_desired_schema,
    root_properties,
    root_type,
    root_types,
)

__all__ = [
    "DesiredSchema",
    "FieldDefinition",
    "IndexDefinition",
    "MappingDocument",
    "TypeMapping",
    "SchemaError",
    "load_desired_schema",
    "root_properties",
    "root_type",
    "root_types",
]
