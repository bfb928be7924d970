"""Results writing domain exports."""

from .outcome_tables import (
    NOTHING_TO_REMOVE,
    build_schema_table,
    build_subject_table,
    print_schema_report,
    print_subject_report,
)
from .report_workbook_writer import (
    OUTCOMES_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    write_report_workbook,
)

__all__ = [
    "NOTHING_TO_REMOVE",
    "OUTCOMES_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "build_schema_table",
    "build_subject_table",
    "print_schema_report",
    "print_subject_report",
    "write_report_workbook",
]
