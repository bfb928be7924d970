"""Reconciliation domain entities."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum

from schema_registry_sync.schema_catalog.schema_models import Schema


class OutcomeStatus(str, Enum):
    """Per-item result of a reconciliation batch."""

    REGISTERED = "registered"
    UNCHANGED = "unchanged"
    COMPATIBILITY_UPDATED = "compatibility_updated"
    DOWNLOADED = "downloaded"
    NOT_FOUND = "not_found"
    DELETED = "deleted"
    FAILED = "failed"

    @property
    def is_action(self) -> bool:
        return self in _ACTED_STATUSES


_ACTED_STATUSES = frozenset(
    {
        OutcomeStatus.REGISTERED,
        OutcomeStatus.COMPATIBILITY_UPDATED,
        OutcomeStatus.DOWNLOADED,
        OutcomeStatus.DELETED,
    }
)


@dataclass(frozen=True)
class SchemaOutcome:
    """Result of reconciling one schema descriptor.

    ``compatibility_updated`` is tracked next to ``status`` because a
    compatibility change and a content registration are independent decisions.
    """

    schema: Schema
    status: OutcomeStatus
    compatibility_updated: bool = False
    message: str | None = None

    @property
    def subject(self) -> str:
        return self.schema.subject

    @property
    def acted_upon(self) -> bool:
        return self.status.is_action or self.compatibility_updated


@dataclass(frozen=True)
class SubjectOutcome:
    """Result of removing one subject."""

    subject: str
    status: OutcomeStatus
    message: str | None = None

    @property
    def acted_upon(self) -> bool:
        return self.status.is_action


@dataclass(frozen=True)
class ReconciliationReport:
    """Outcomes of one batch run, in input order."""

    dry_run: bool
    schema_outcomes: tuple[SchemaOutcome, ...] = ()
    subject_outcomes: tuple[SubjectOutcome, ...] = ()

    @property
    def affected_schemas(self) -> set[Schema]:
        """Schemas registered, updated or downloaded (or that would be, in dry-run)."""
        return {outcome.schema for outcome in self.schema_outcomes if outcome.acted_upon}

    @property
    def affected_subjects(self) -> set[str]:
        return {outcome.subject for outcome in self.subject_outcomes if outcome.acted_upon}

    @property
    def subjects(self) -> set[str]:
        """Every subject the batch concerned."""
        return {outcome.subject for outcome in self.schema_outcomes} | {
            outcome.subject for outcome in self.subject_outcomes
        }

    @property
    def is_empty(self) -> bool:
        return not self.schema_outcomes and not self.subject_outcomes

    def status_counts(self) -> dict[OutcomeStatus, int]:
        counter: Counter[OutcomeStatus] = Counter()
        counter.update(outcome.status for outcome in self.schema_outcomes)
        counter.update(outcome.status for outcome in self.subject_outcomes)
        counter[OutcomeStatus.COMPATIBILITY_UPDATED] += sum(
            1
            for outcome in self.schema_outcomes
            if outcome.compatibility_updated
            and outcome.status != OutcomeStatus.COMPATIBILITY_UPDATED
        )
        return {status: counter[status] for status in OutcomeStatus if counter[status]}
