"""Sync execution domain exports."""

from .sync_contracts import DeleteRequest, SyncOperation, SyncOutcome, SyncRequest
from .sync_use_case import (
    SyncExecutionError,
    execute_delete,
    execute_download,
    execute_register,
    list_registry_subjects,
)

__all__ = [
    "DeleteRequest",
    "SyncExecutionError",
    "SyncOperation",
    "SyncOutcome",
    "SyncRequest",
    "execute_delete",
    "execute_download",
    "execute_register",
    "list_registry_subjects",
]
