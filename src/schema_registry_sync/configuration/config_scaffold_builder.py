"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-registry.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Schema registry configuration for schema-registry-sync.
# Replace every <REQUIRED> placeholder before running register, download or delete.
# Remove <OPTIONAL> entries your setup does not need.

registry:
  url: "<REQUIRED>"
  # basic_auth_user_info: "<OPTIONAL> key:secret"
  # timeout_seconds: 30
  # properties:
  #   ssl.ca.location: "<OPTIONAL>"

schemas:
  # Directory holding one file per subject: <subject>.avsc, <subject>.json or <subject>.proto.
  # Relative paths are resolved against this file.
  directory: "schemas"
  subjects:
    - subject: "<REQUIRED>"
      # AVRO, JSON or PROTOBUF (default AVRO).
      type: "AVRO"
      # Omit to keep the registry default compatibility.
      # compatibility: "BACKWARD"

# Subjects to remove from the registry with the delete command.
# delete:
#   - "<OPTIONAL>"
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
