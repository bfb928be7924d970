"""Console rendering of reconciliation reports."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from schema_registry_sync.reconciliation.reconciliation_outcomes import ReconciliationReport

NOTHING_TO_REMOVE = "No subjects to be removed from cluster"


def build_schema_table(report: ReconciliationReport) -> Table | None:
    """Table of affected schemas, None when nothing was (or would be) changed."""
    outcomes = sorted(
        (outcome for outcome in report.schema_outcomes if outcome.acted_upon),
        key=lambda outcome: outcome.subject,
    )
    if not outcomes:
        return None
    table = Table(title=_title("Schemas", report.dry_run))
    table.add_column("Subject", justify="left")
    table.add_column("Type", justify="left")
    table.add_column("Compatibility Mode", justify="left")
    table.add_column("Outcome", justify="left")
    for outcome in outcomes:
        schema = outcome.schema
        table.add_row(
            schema.subject,
            str(schema.schema_type) if schema.schema_type else "",
            schema.compatibility_label,
            outcome.status.value,
        )
    return table


def build_subject_table(report: ReconciliationReport) -> Table | None:
    if not report.subject_outcomes:
        return None
    table = Table(title=_title("Subjects", report.dry_run))
    table.add_column("Subject", justify="left")
    table.add_column("Outcome", justify="left")
    for outcome in sorted(report.subject_outcomes, key=lambda item: item.subject):
        table.add_row(outcome.subject, outcome.status.value)
    return table


def print_schema_report(report: ReconciliationReport, console: Console | None = None) -> None:
    table = build_schema_table(report)
    if table is not None:
        (console or Console()).print(table)


def print_subject_report(report: ReconciliationReport, console: Console | None = None) -> None:
    output = console or Console()
    table = build_subject_table(report)
    if table is None:
        output.print(NOTHING_TO_REMOVE)
        return
    output.print(table)


def _title(noun: str, dry_run: bool) -> str:
    return f"{noun} (dry-run)" if dry_run else noun
