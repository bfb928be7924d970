"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from schema_registry_sync.schema_catalog.schema_models import (
    CompatibilityMode,
    Schema,
    SchemaType,
)


@dataclass(frozen=True)
class RegistrySettings:
    """Schema registry connectivity configuration."""

    url: str
    basic_auth_user_info: str | None = None
    timeout_seconds: int | None = None
    properties: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class DesiredSchema:
    """One schema subject declared in the configuration file."""

    subject: str
    schema_type: SchemaType
    compatibility_mode: CompatibilityMode | None

    def to_schema(self) -> Schema:
        """Build a fresh mutable descriptor for the engine."""
        return Schema(
            subject=self.subject,
            schema_type=self.schema_type,
            compatibility_mode=self.compatibility_mode,
        )


@dataclass(frozen=True)
class SyncConfiguration:
    """Top-level configuration aggregate."""

    path: Path
    registry: RegistrySettings
    schema_directory: Path
    schemas: tuple[DesiredSchema, ...]
    delete_subjects: tuple[str, ...] = ()

    @property
    def desired_subjects(self) -> frozenset[str]:
        return frozenset(schema.subject for schema in self.schemas)

    def build_schemas(self) -> list[Schema]:
        return [desired.to_schema() for desired in self.schemas]
