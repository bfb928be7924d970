"""Registry access domain exports."""

from .registry_adapter import (
    NOT_FOUND_ERROR_CODES,
    RegistryClientProtocol,
    SchemaRegistryAdapter,
    create_registry_client,
    is_not_found,
)
from .registry_results import LookupStatus, RegistryResult, SchemaMetadata

__all__ = [
    "LookupStatus",
    "NOT_FOUND_ERROR_CODES",
    "RegistryClientProtocol",
    "RegistryResult",
    "SchemaMetadata",
    "SchemaRegistryAdapter",
    "create_registry_client",
    "is_not_found",
]
