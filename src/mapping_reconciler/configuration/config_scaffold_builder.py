"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "reconciler.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Reconciler configuration template for mapping-reconciler.
# Replace every <REQUIRED> placeholder before running check or plan.
# Remove or fill <OPTIONAL> placeholders only when your setup needs them.

store:
  # Base URL of the document store REST endpoint.
  url: "<REQUIRED>"
  # username: "<OPTIONAL>"
  # password: "<OPTIONAL>"
  # verify_tls: true
  # timeout_seconds: 30
  # max_attempts: 3

index:
  name: "<REQUIRED>"
  mapping:
    # Provide either inline mapping text (JSON or YAML) or a mapping file path.
    # The mapping must define exactly one root type, e.g.
    #   {"doc": {"properties": {"title": {"type": "text"}}}}
    inline: "<REQUIRED>"
    # path: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
