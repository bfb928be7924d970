"""Sync execution entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from schema_registry_sync.reconciliation.reconciliation_outcomes import ReconciliationReport


class SyncOperation(str, Enum):
    """Batch operation requested by the caller."""

    REGISTER = "register"
    DOWNLOAD = "download"
    DELETE = "delete"


@dataclass(frozen=True)
class SyncRequest:
    """Input contract for executing one batch operation."""

    config_path: str
    dry_run: bool = False
    report_output: str | None = None


@dataclass(frozen=True)
class DeleteRequest(SyncRequest):
    """Delete batch input; subjects are added to the configured ``delete`` list."""

    subjects: tuple[str, ...] = field(default_factory=tuple)
    prune: bool = False


@dataclass(frozen=True)
class SyncOutcome:
    """Output contract for one completed batch operation."""

    operation: SyncOperation
    report: ReconciliationReport
    report_path: Path | None
