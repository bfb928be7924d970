"""Schema registry reconciliation service."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import httpx2
from confluent_kafka.schema_registry import Schema as RegistrySchema
from confluent_kafka.schema_registry.error import SchemaRegistryError

from schema_registry_sync.registry_access.registry_adapter import SchemaRegistryAdapter
from schema_registry_sync.schema_catalog.schema_files import (
    SchemaFileError,
    read_schema_content,
    resolve_schema_path,
    write_schema_content,
)
from schema_registry_sync.schema_catalog.schema_models import (
    CompatibilityMode,
    Schema,
    SchemaType,
)

from .reconciliation_outcomes import (
    OutcomeStatus,
    ReconciliationReport,
    SchemaOutcome,
    SubjectOutcome,
)
from .state_resolvers import is_compatible, resolve_compatibility, resolve_version

LOGGER = logging.getLogger(__name__)


class SchemaReconciliationError(Exception):
    """Raised when a desired schema cannot be reconciled with the registry."""

    def __init__(self, message: str, *, subject: str | None = None) -> None:
        super().__init__(message)
        self.subject = subject


class SchemaReconciler:
    """Converge registry state towards a batch of desired schemas.

    Every mutating decision is computed the same way with and without
    ``dry_run``; in dry-run mode only the final registry or filesystem write is
    skipped, and the operation still reports the change it would have made.
    """

    def __init__(self, registry: SchemaRegistryAdapter, *, dry_run: bool = False) -> None:
        self._registry = registry
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def get_compatibility_mode(self, subject: str) -> str | None:
        return resolve_compatibility(self._registry, subject)

    def get_schema_type(self, subject: str) -> SchemaType | None:
        metadata = self._registry.get_latest_schema_metadata(subject).value_or(None)
        if metadata is None or not metadata.schema_type:
            return None
        return _to_enum(SchemaType, metadata.schema_type, subject)

    def list_subjects(self) -> list[str]:
        return sorted(self._registry.get_all_subjects())

    def find_orphaned_subjects(self, desired_subjects: Iterable[str]) -> list[str]:
        """Registry subjects that are not part of the desired state."""
        desired = set(desired_subjects)
        return [subject for subject in self.list_subjects() if subject not in desired]

    def register_schemas(
        self, schemas: Iterable[Schema | None], directory: Path | str
    ) -> ReconciliationReport:
        """Apply compatibility and register content for each schema, stopping at the first error."""
        outcomes: list[SchemaOutcome] = []
        for schema in schemas:
            if schema is None:
                continue
            compatibility_updated = self.update_compatibility(schema) is not None
            registered = self.register_schema(schema, directory) is not None
            if registered:
                status = OutcomeStatus.REGISTERED
            elif compatibility_updated:
                status = OutcomeStatus.COMPATIBILITY_UPDATED
            else:
                status = OutcomeStatus.UNCHANGED
            outcomes.append(
                SchemaOutcome(
                    schema=schema,
                    status=status,
                    compatibility_updated=compatibility_updated,
                )
            )
        return ReconciliationReport(dry_run=self._dry_run, schema_outcomes=tuple(outcomes))

    def update_compatibility(self, schema: Schema) -> Schema | None:
        """Set the desired compatibility mode; None when nothing needs to change."""
        subject = schema.subject
        desired_mode = schema.compatibility_mode
        if desired_mode is None:
            LOGGER.debug("Compatibility for subject '%s' is left at registry default", subject)
            return None
        current_mode = resolve_compatibility(self._registry, subject)
        new_mode = str(desired_mode)
        if current_mode == new_mode:
            LOGGER.debug("Compatibility for subject '%s' is already '%s'", subject, current_mode)
            return None
        if self._dry_run:
            LOGGER.info("Compatibility to be updated to '%s' for subject '%s'", new_mode, subject)
        else:
            updated_mode = self._registry.update_compatibility(subject, new_mode)
            LOGGER.info("Compatibility updated to '%s' for subject '%s'", updated_mode, subject)
        return schema

    def register_schema(self, schema: Schema, directory: Path | str) -> Schema | None:
        """Register the local content of ``schema``; None when that version already exists."""
        subject = schema.subject
        schema_type = schema.schema_type
        schema_path = resolve_schema_path(schema, directory)
        if schema_path is None:
            raise SchemaReconciliationError(f"Invalid schema file '{subject}'", subject=subject)
        parsed = self._parse_schema_file(schema, schema_path)
        if not is_compatible(self._registry, subject, parsed):
            raise SchemaReconciliationError(
                f"Schema of type {schema_type} for subject '{subject}' "
                "is incompatible to existing schemas",
                subject=subject,
            )
        version = resolve_version(self._registry, subject, parsed)
        if version > 0:
            LOGGER.debug(
                "Schema of type %s for subject '%s' already exists and has version %d",
                schema_type,
                subject,
                version,
            )
            return None
        if self._dry_run:
            LOGGER.info("Schema of type %s to be registered for subject '%s'", schema_type, subject)
        else:
            schema_id = self._registry.register(subject, parsed)
            LOGGER.info(
                "Schema of type %s registered for subject '%s' with schema ID %d",
                schema_type,
                subject,
                schema_id,
            )
        return schema

    def download_schemas(
        self, schemas: Iterable[Schema | None], directory: Path | str
    ) -> ReconciliationReport:
        """Export the latest registered version of each subject, stopping at the first error."""
        outcomes: list[SchemaOutcome] = []
        for schema in schemas:
            downloaded = self.download_schema(schema, directory)
            if downloaded is not None:
                outcomes.append(SchemaOutcome(schema=downloaded, status=OutcomeStatus.DOWNLOADED))
            elif schema is not None:
                outcomes.append(SchemaOutcome(schema=schema, status=OutcomeStatus.NOT_FOUND))
        return ReconciliationReport(dry_run=self._dry_run, schema_outcomes=tuple(outcomes))

    def download_all_schemas(self, directory: Path | str) -> ReconciliationReport:
        """Export every subject currently present in the registry."""
        schemas = [Schema(subject=subject, schema_type=None) for subject in self.list_subjects()]
        return self.download_schemas(schemas, directory)

    def download_schema(self, schema: Schema | None, directory: Path | str) -> Schema | None:
        """Write the latest registered content of ``schema``; None when the subject is unknown."""
        if schema is None:
            raise SchemaReconciliationError("No schema or schema file found")
        subject = schema.subject
        result = self._registry.get_latest_schema_metadata(subject)
        if result.is_not_found:
            LOGGER.debug("Subject '%s' is not registered, nothing to download", subject)
            return None
        metadata = result.value_or(None)
        if metadata is None:
            raise SchemaReconciliationError(
                f"No schema meta data available for subject '{subject}'", subject=subject
            )
        if not metadata.schema_type:
            raise SchemaReconciliationError(
                f"No schema type specified for subject '{subject}'", subject=subject
            )
        schema.schema_type = _to_enum(SchemaType, metadata.schema_type, subject)
        compatibility_mode = resolve_compatibility(self._registry, subject)
        if compatibility_mode is not None:
            schema.compatibility_mode = _to_enum(CompatibilityMode, compatibility_mode, subject)
        if metadata.raw_content is None:
            raise SchemaReconciliationError(
                f"No content available for subject '{subject}'", subject=subject
            )
        schema_path = resolve_schema_path(schema, directory)
        if schema_path is None:
            raise SchemaReconciliationError(
                f"Invalid schema file path '{subject}'", subject=subject
            )
        if self._dry_run:
            LOGGER.info(
                "Schema version %s of subject '%s' to be downloaded to %s",
                metadata.version,
                subject,
                schema_path,
            )
        else:
            try:
                write_schema_content(schema_path, metadata.raw_content)
            except SchemaFileError as exc:
                raise SchemaReconciliationError(str(exc), subject=subject) from exc
            LOGGER.info(
                "Schema version %s of subject '%s' downloaded to %s",
                metadata.version,
                subject,
                schema_path,
            )
        return schema

    def delete_subjects(self, subjects: Iterable[str] | None) -> ReconciliationReport:
        """Remove subjects from the registry, isolating failures per subject."""
        unique_subjects = list(dict.fromkeys(subject for subject in subjects or () if subject))
        if not unique_subjects:
            LOGGER.info("No subjects to be removed from cluster")
            return ReconciliationReport(dry_run=self._dry_run)
        if self._dry_run:
            LOGGER.info("Subjects to be removed from cluster: %s", ", ".join(unique_subjects))
            return ReconciliationReport(
                dry_run=True,
                subject_outcomes=tuple(
                    SubjectOutcome(subject=subject, status=OutcomeStatus.DELETED)
                    for subject in unique_subjects
                ),
            )
        outcomes = tuple(self._delete_subject(subject) for subject in unique_subjects)
        LOGGER.info("Subjects removed from cluster: %s", ", ".join(unique_subjects))
        return ReconciliationReport(dry_run=False, subject_outcomes=outcomes)

    def _delete_subject(self, subject: str) -> SubjectOutcome:
        try:
            self._registry.delete_subject(subject)
        except (SchemaRegistryError, httpx2.TransportError, OSError) as exc:
            LOGGER.warning("Subject '%s' could not be removed: %s", subject, exc)
            return SubjectOutcome(subject=subject, status=OutcomeStatus.FAILED, message=str(exc))
        return SubjectOutcome(subject=subject, status=OutcomeStatus.DELETED)

    def _parse_schema_file(self, schema: Schema, schema_path: Path) -> RegistrySchema:
        subject = schema.subject
        try:
            content = read_schema_content(schema_path)
        except SchemaFileError as exc:
            raise SchemaReconciliationError(str(exc), subject=subject) from exc
        parsed = self._registry.parse(schema.schema_type or "", content)
        if parsed is None:
            raise SchemaReconciliationError(
                f"Schema of type {schema.schema_type} for subject '{subject}' could not be parsed",
                subject=subject,
            )
        return parsed


def _to_enum(enum_cls, value: str, subject: str):
    try:
        return enum_cls(str(value).upper())
    except ValueError as exc:
        raise SchemaReconciliationError(
            f"Unsupported {enum_cls.__name__} '{value}' for subject '{subject}'", subject=subject
        ) from exc
