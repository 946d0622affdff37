"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from mapping_reconciler.configuration.loader import ConfigurationError, load_configuration


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_yaml_configuration_with_defaults(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "reconciler.yaml",
        """
store:
  url: "http://localhost:9200/"
index:
  name: ".kibana"
  mapping:
    inline: |
      {"doc": {"properties": {"type": {"type": "keyword"}}}}
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.store.url == "http://localhost:9200"
    assert configuration.store.username is None
    assert configuration.store.password is None
    assert configuration.store.verify_tls is True
    assert configuration.store.timeout_seconds == 30
    assert configuration.store.max_attempts == 3
    assert configuration.index.name == ".kibana"
    assert configuration.index.desired_mapping == {
        "doc": {"properties": {"type": {"type": "keyword"}}}
    }
    assert configuration.index.mapping_source_path is None


def test_loads_json_configuration_with_mapping_path(tmp_path: Path) -> None:
    mapping_path = _write_file(
        tmp_path / "mappings.json",
        json.dumps({"blog": {"properties": {"title": {"type": "text"}}}}),
    )
    config_path = _write_file(
        tmp_path / "reconciler.json",
        json.dumps(
            {
                "store": {
                    "url": "https://search.example.com",
                    "username": "elastic",
                    "password": "secret",
                    "verify_tls": False,
                    "timeout_seconds": 5,
                    "max_attempts": 1,
                },
                "index": {"name": "blog", "mapping": {"path": "mappings.json"}},
            }
        ),
    )

    configuration = load_configuration(config_path)

    assert configuration.store.username == "elastic"
    assert configuration.store.password == "secret"
    assert configuration.store.verify_tls is False
    assert configuration.store.timeout_seconds == 5
    assert configuration.store.max_attempts == 1
    assert configuration.index.mapping_source_path == mapping_path.resolve()
    assert configuration.index.desired_mapping == {
        "blog": {"properties": {"title": {"type": "text"}}}
    }


def test_accepts_mapping_given_as_plain_string(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "reconciler.yaml",
        """
store:
  url: "http://localhost:9200"
index:
  name: "blog"
  mapping: '{"blog": {"properties": {}}}'
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.index.desired_mapping == {"blog": {"properties": {}}}


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_configuration(tmp_path / "missing.yaml")


def test_rejects_non_mapping_root(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "reconciler.yaml", "- just\n- a list\n")

    with pytest.raises(ConfigurationError, match="root must be a mapping"):
        load_configuration(config_path)


def test_requires_store_section(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "reconciler.yaml",
        'index:\n  name: "blog"\n  mapping: \'{"blog": {}}\'\n',
    )

    with pytest.raises(ConfigurationError, match="'store' is required"):
        load_configuration(config_path)


@pytest.mark.parametrize(
    ("store_yaml", "message"),
    [
        ('  url: "localhost:9200"', "must start with http"),
        ('  url: ""', "store.url must not be empty"),
        ('  url: "http://x"\n  password: "secret"', "requires store.username"),
        ('  url: "http://x"\n  verify_tls: "no"', "verify_tls must be a boolean"),
        ('  url: "http://x"\n  timeout_seconds: 0', "greater than zero"),
        ('  url: "http://x"\n  max_attempts: true', "must be an integer"),
    ],
)
def test_rejects_invalid_store_settings(tmp_path: Path, store_yaml: str, message: str) -> None:
    config_path = _write_file(
        tmp_path / "reconciler.yaml",
        f"store:\n{store_yaml}\nindex:\n  name: blog\n  mapping: '{{\"blog\": {{}}}}'\n",
    )

    with pytest.raises(ConfigurationError, match=message):
        load_configuration(config_path)


def test_rejects_both_inline_and_path(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "reconciler.yaml",
        """
store:
  url: "http://localhost:9200"
index:
  name: "blog"
  mapping:
    inline: '{"blog": {}}'
    path: "mappings.json"
""",
    )

    with pytest.raises(ConfigurationError, match="both inline and path"):
        load_configuration(config_path)


def test_rejects_missing_mapping_file(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "reconciler.yaml",
        """
store:
  url: "http://localhost:9200"
index:
  name: "blog"
  mapping:
    path: "missing.json"
""",
    )

    with pytest.raises(ConfigurationError, match="Mapping file not found"):
        load_configuration(config_path)


def test_rejects_desired_mapping_with_two_root_types(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "reconciler.yaml",
        """
store:
  url: "http://localhost:9200"
index:
  name: "blog"
  mapping:
    inline: '{"blog": {"properties": {}}, "comment": {"properties": {}}}'
""",
    )

    with pytest.raises(ConfigurationError, match="exactly one root type"):
        load_configuration(config_path)


def test_rejects_unfilled_placeholder_mapping(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "reconciler.yaml",
        """
store:
  url: "http://localhost:9200"
index:
  name: "blog"
  mapping:
    inline: "<REQUIRED>"
""",
    )

    with pytest.raises(ConfigurationError, match="must be an object keyed by root type"):
        load_configuration(config_path)
