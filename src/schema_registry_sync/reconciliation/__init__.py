"""Reconciliation domain exports."""

from .reconciliation_engine import SchemaReconciler, SchemaReconciliationError
from .reconciliation_outcomes import (
    OutcomeStatus,
    ReconciliationReport,
    SchemaOutcome,
    SubjectOutcome,
)
from .state_resolvers import is_compatible, resolve_compatibility, resolve_version

__all__ = [
    "OutcomeStatus",
    "ReconciliationReport",
    "SchemaOutcome",
    "SchemaReconciler",
    "SchemaReconciliationError",
    "SubjectOutcome",
    "is_compatible",
    "resolve_compatibility",
    "resolve_version",
]
