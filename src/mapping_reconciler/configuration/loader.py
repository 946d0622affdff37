"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from mapping_reconciler.schema_management.schema_projection import (
    SchemaError,
    load_desired_schema,
)

from .runtime_settings import Configuration, IndexSettings, StoreSettings


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    store = _parse_store_section(parsed.get("store"))
    index = _parse_index_section(parsed.get("index"), path.parent)
    return Configuration(path=path, store=store, index=index)


def _parse_store_section(value: Any) -> StoreSettings:
    section = _require_mapping(value, "store")
    url = _require_non_empty_string(section.get("url"), "store.url")
    if not url.startswith(("http://", "https://")):
        raise ConfigurationError("store.url must start with http:// or https://.")
    username = _optional_string(section.get("username"), "store.username")
    password = _optional_string(section.get("password"), "store.password")
    if password and not username:
        raise ConfigurationError("store.password requires store.username.")
    verify_tls = section.get("verify_tls", True)
    if not isinstance(verify_tls, bool):
        raise ConfigurationError("store.verify_tls must be a boolean.")
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", 30), "store.timeout_seconds"
    )
    max_attempts = _require_positive_int(section.get("max_attempts", 3), "store.max_attempts")
    return StoreSettings(
        url=url.rstrip("/"),
        username=username,
        password=password,
        verify_tls=verify_tls,
        timeout_seconds=timeout_seconds,
        max_attempts=max_attempts,
    )


def _parse_index_section(value: Any, base_path: Path) -> IndexSettings:
    section = _require_mapping(value, "index")
    name = _require_non_empty_string(section.get("name"), "index.name")
    text, source_path = _load_mapping_definition(section.get("mapping"), base_path)
    if not text.strip():
        raise ConfigurationError("index.mapping cannot be empty.")
    try:
        desired_mapping = load_desired_schema(text)
    except SchemaError as exc:
        raise ConfigurationError(str(exc)) from exc
    return IndexSettings(
        name=name,
        desired_mapping=desired_mapping,
        mapping_source_path=source_path,
    )


def _load_mapping_definition(definition: Any, base_path: Path) -> tuple[str, Path | None]:
    if isinstance(definition, str):
        return definition, None
    mapping = _require_mapping(definition, "index.mapping")
    inline = mapping.get("inline")
    path_value = mapping.get("path")
    if inline and path_value:
        raise ConfigurationError("index.mapping must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("index.mapping.inline must be a string.")
        return inline, None
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError("index.mapping.path must be a string.")
        mapping_path = _resolve_path(base_path, path_value)
        if not mapping_path.exists():
            raise ConfigurationError(f"Mapping file not found: {mapping_path}")
        return mapping_path.read_text(encoding="utf-8"), mapping_path
    raise ConfigurationError("index.mapping requires either inline or path.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
