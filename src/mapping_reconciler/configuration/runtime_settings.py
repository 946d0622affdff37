"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mapping_reconciler.schema_management.schema_models import DesiredSchema


@dataclass(frozen=True)
class StoreSettings:
    """Document store connectivity configuration."""

    url: str
    username: str | None
    password: str | None
    verify_tls: bool
    timeout_seconds: int
    max_attempts: int


@dataclass(frozen=True)
class IndexSettings:
    """Target index and the mapping it is expected to carry."""

    name: str
    desired_mapping: DesiredSchema
    mapping_source_path: Path | None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    store: StoreSettings
    index: IndexSettings
