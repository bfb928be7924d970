"""Sync execution use-case service."""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx2
from confluent_kafka.schema_registry.error import SchemaRegistryError

from schema_registry_sync.configuration import (
    ConfigurationError,
    RegistrySettings,
    SyncConfiguration,
    load_configuration,
)
from schema_registry_sync.reconciliation import (
    ReconciliationReport,
    SchemaReconciler,
    SchemaReconciliationError,
)
from schema_registry_sync.registry_access import (
    RegistryClientProtocol,
    SchemaRegistryAdapter,
    create_registry_client,
)
from schema_registry_sync.results_writing import write_report_workbook

from .sync_contracts import DeleteRequest, SyncOperation, SyncOutcome, SyncRequest

LOGGER = logging.getLogger(__name__)

RegistryClientFactory = Callable[[RegistrySettings], RegistryClientProtocol]

_HANDLED_ERRORS = (
    ConfigurationError,
    SchemaReconciliationError,
    SchemaRegistryError,
    httpx2.TransportError,
    OSError,
    ValueError,
)


class SyncExecutionError(Exception):
    """Raised when a batch operation cannot be completed."""


def execute_register(
    request: SyncRequest,
    *,
    client_factory: RegistryClientFactory | None = None,
) -> SyncOutcome:
    """Register every configured schema whose content or compatibility differs."""
    configuration, reconciler = _prepare(request.config_path, request.dry_run, client_factory)
    try:
        report = reconciler.register_schemas(
            configuration.build_schemas(), configuration.schema_directory
        )
    except _HANDLED_ERRORS as exc:
        raise SyncExecutionError(_describe(exc)) from exc
    return _finish(SyncOperation.REGISTER, request, report)


def execute_download(
    request: SyncRequest,
    *,
    download_all: bool = False,
    client_factory: RegistryClientFactory | None = None,
) -> SyncOutcome:
    """Export configured subjects, or every registry subject, into the schema directory."""
    configuration, reconciler = _prepare(request.config_path, request.dry_run, client_factory)
    try:
        if download_all:
            report = reconciler.download_all_schemas(configuration.schema_directory)
        else:
            report = reconciler.download_schemas(
                configuration.build_schemas(), configuration.schema_directory
            )
    except _HANDLED_ERRORS as exc:
        raise SyncExecutionError(_describe(exc)) from exc
    return _finish(SyncOperation.DOWNLOAD, request, report)


def execute_delete(
    request: DeleteRequest,
    *,
    client_factory: RegistryClientFactory | None = None,
) -> SyncOutcome:
    """Delete configured, requested and (with ``prune``) undeclared subjects."""
    configuration, reconciler = _prepare(request.config_path, request.dry_run, client_factory)
    subjects = list(configuration.delete_subjects) + list(request.subjects)
    try:
        if request.prune:
            subjects.extend(reconciler.find_orphaned_subjects(configuration.desired_subjects))
        report = reconciler.delete_subjects(subjects)
    except _HANDLED_ERRORS as exc:
        raise SyncExecutionError(_describe(exc)) from exc
    return _finish(SyncOperation.DELETE, request, report)


def list_registry_subjects(
    config_path: str,
    *,
    client_factory: RegistryClientFactory | None = None,
) -> list[str]:
    _, reconciler = _prepare(config_path, False, client_factory)
    try:
        return reconciler.list_subjects()
    except _HANDLED_ERRORS as exc:
        raise SyncExecutionError(_describe(exc)) from exc


def _prepare(
    config_path: str,
    dry_run: bool,
    client_factory: RegistryClientFactory | None,
) -> tuple[SyncConfiguration, SchemaReconciler]:
    resolved_client_factory = client_factory or create_registry_client
    try:
        configuration = load_configuration(config_path)
        client = resolved_client_factory(configuration.registry)
    except _HANDLED_ERRORS as exc:
        raise SyncExecutionError(_describe(exc)) from exc
    reconciler = SchemaReconciler(SchemaRegistryAdapter(client), dry_run=dry_run)
    return configuration, reconciler


def _finish(
    operation: SyncOperation, request: SyncRequest, report: ReconciliationReport
) -> SyncOutcome:
    report_path = None
    if request.report_output:
        try:
            report_path = write_report_workbook(
                report, request.report_output, operation=operation.value
            )
        except OSError as exc:
            raise SyncExecutionError(f"Report could not be written: {exc}") from exc
        LOGGER.info("Report written to %s", report_path)
    return SyncOutcome(operation=operation, report=report, report_path=report_path)


def _describe(exc: Exception) -> str:
    if isinstance(exc, (SchemaRegistryError, httpx2.TransportError)):
        return f"Schema registry request failed: {exc}"
    return str(exc)
