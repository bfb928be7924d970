"""Local schema file mapping and IO."""

from __future__ import annotations

from pathlib import Path

from .schema_models import Schema, SchemaType

SCHEMA_FILE_EXTENSIONS = {
    SchemaType.AVRO: "avsc",
    SchemaType.JSON: "json",
    SchemaType.PROTOBUF: "proto",
}


class SchemaFileError(Exception):
    """Raised when a local schema file cannot be read or written."""


def resolve_schema_path(schema: Schema, directory: Path | str) -> Path | None:
    """Return ``<directory>/<subject>.<extension>`` or None when it cannot be derived."""
    subject = schema.subject.strip() if schema.subject else ""
    if not subject or schema.schema_type is None:
        return None
    extension = SCHEMA_FILE_EXTENSIONS.get(SchemaType(schema.schema_type))
    if extension is None:
        return None
    if "/" in subject or "\\" in subject or subject in {".", ".."}:
        return None
    return Path(directory) / f"{subject}.{extension}"


def read_schema_content(path: Path) -> str:
    """Read raw schema text, rejecting missing or blank files."""
    if not path.is_file():
        raise SchemaFileError(f"Schema file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaFileError(f"Schema file could not be read: {path}: {exc}") from exc
    if not text.strip():
        raise SchemaFileError(f"Schema '{path}' must not be empty!")
    return text


def write_schema_content(path: Path, text: str) -> Path:
    """Write exported schema text, creating or truncating the destination."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise SchemaFileError(f"Schema file could not be written: {path}: {exc}") from exc
    return path
