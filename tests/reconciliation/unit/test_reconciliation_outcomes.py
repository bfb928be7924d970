"""Reconciliation outcome tests."""

from __future__ import annotations

from schema_registry_sync.reconciliation import (
    OutcomeStatus,
    ReconciliationReport,
    SchemaOutcome,
    SubjectOutcome,
)
from schema_registry_sync.schema_catalog import Schema


def test_affected_sets_exclude_skips_and_failures() -> None:
    registered = Schema(subject="orders-value")
    updated = Schema(subject="payments-value")
    unchanged = Schema(subject="events-value")
    report = ReconciliationReport(
        dry_run=False,
        schema_outcomes=(
            SchemaOutcome(schema=registered, status=OutcomeStatus.REGISTERED),
            SchemaOutcome(
                schema=updated,
                status=OutcomeStatus.COMPATIBILITY_UPDATED,
                compatibility_updated=True,
            ),
            SchemaOutcome(schema=unchanged, status=OutcomeStatus.UNCHANGED),
            SchemaOutcome(schema=registered, status=OutcomeStatus.REGISTERED),
        ),
        subject_outcomes=(
            SubjectOutcome(subject="legacy-value", status=OutcomeStatus.DELETED),
            SubjectOutcome(subject="broken-value", status=OutcomeStatus.FAILED),
        ),
    )

    assert report.affected_schemas == {registered, updated}
    assert report.affected_subjects == {"legacy-value"}
    assert report.subjects == {
        "orders-value",
        "payments-value",
        "events-value",
        "legacy-value",
        "broken-value",
    }
    assert report.status_counts() == {
        OutcomeStatus.REGISTERED: 2,
        OutcomeStatus.UNCHANGED: 1,
        OutcomeStatus.COMPATIBILITY_UPDATED: 1,
        OutcomeStatus.DELETED: 1,
        OutcomeStatus.FAILED: 1,
    }


def test_registered_schema_with_compatibility_change_counts_both() -> None:
    report = ReconciliationReport(
        dry_run=True,
        schema_outcomes=(
            SchemaOutcome(
                schema=Schema(subject="orders-value"),
                status=OutcomeStatus.REGISTERED,
                compatibility_updated=True,
            ),
        ),
    )

    assert report.status_counts() == {
        OutcomeStatus.REGISTERED: 1,
        OutcomeStatus.COMPATIBILITY_UPDATED: 1,
    }
    assert not report.is_empty
