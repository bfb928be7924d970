"""Reconciliation report workbook writer service."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from schema_registry_sync.reconciliation.reconciliation_outcomes import (
    OutcomeStatus,
    ReconciliationReport,
)

OUTCOMES_SHEET_NAME = "Outcomes"
RUN_INFO_SHEET_NAME = "RunInfo"
OUTCOME_COLUMNS = (
    "Subject",
    "Type",
    "Compatibility Mode",
    "Outcome",
    "Compatibility Updated",
    "Message",
)


def write_report_workbook(
    report: ReconciliationReport,
    output_path: Path | str,
    *,
    operation: str,
    generated_at: datetime | None = None,
) -> Path:
    """Write one row per reconciled item plus a RunInfo summary sheet."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = OUTCOMES_SHEET_NAME
    for column, header in enumerate(OUTCOME_COLUMNS, start=1):
        sheet.cell(row=1, column=column, value=header)

    row = 2
    for outcome in report.schema_outcomes:
        schema = outcome.schema
        values = (
            schema.subject,
            str(schema.schema_type) if schema.schema_type else None,
            schema.compatibility_label,
            outcome.status.value,
            outcome.compatibility_updated,
            outcome.message,
        )
        _write_row(sheet, row, values)
        row += 1
    for subject_outcome in report.subject_outcomes:
        values = (
            subject_outcome.subject,
            None,
            None,
            subject_outcome.status.value,
            None,
            subject_outcome.message,
        )
        _write_row(sheet, row, values)
        row += 1
    _autosize_columns(sheet)

    _write_run_info_sheet(workbook, report, operation, generated_at or datetime.now(UTC))

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_row(sheet, row: int, values: tuple) -> None:
    for column, value in enumerate(values, start=1):
        sheet.cell(row=row, column=column, value=value)


def _autosize_columns(sheet) -> None:
    for column in range(1, len(OUTCOME_COLUMNS) + 1):
        width = max(
            len(str(sheet.cell(row=row, column=column).value or ""))
            for row in range(1, sheet.max_row + 1)
        )
        sheet.column_dimensions[get_column_letter(column)].width = min(width + 2, 80)


def _write_run_info_sheet(
    workbook,
    report: ReconciliationReport,
    operation: str,
    generated_at: datetime,
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    counts = report.status_counts()
    entries: list[tuple[str, object]] = [
        ("operation", operation),
        ("dry_run", report.dry_run),
        ("generated_at", generated_at.isoformat()),
        ("total", len(report.schema_outcomes) + len(report.subject_outcomes)),
    ]
    entries.extend((status.value, counts.get(status, 0)) for status in OutcomeStatus)
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
