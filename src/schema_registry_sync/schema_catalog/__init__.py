"""Schema catalog domain exports."""

from .schema_files import (
    SCHEMA_FILE_EXTENSIONS,
    SchemaFileError,
    read_schema_content,
    resolve_schema_path,
    write_schema_content,
)
from .schema_models import CompatibilityMode, Schema, SchemaType

__all__ = [
    "CompatibilityMode",
    "Schema",
    "SchemaType",
    "SCHEMA_FILE_EXTENSIONS",
    "SchemaFileError",
    "read_schema_content",
    "resolve_schema_path",
    "write_schema_content",
]
