"""Read-side resolvers for current registry state."""

from __future__ import annotations

import logging

from confluent_kafka.schema_registry import Schema as RegistrySchema

from schema_registry_sync.registry_access.registry_adapter import SchemaRegistryAdapter

LOGGER = logging.getLogger(__name__)


def resolve_compatibility(registry: SchemaRegistryAdapter, subject: str | None) -> str | None:
    """Return the effective compatibility mode of ``subject``.

    A subject without an explicit mode falls back to the registry's global
    default. The fallback query is issued at most once; a not-found answer
    to the global query yields None.
    """
    result = registry.get_compatibility(subject)
    if result.is_not_found and subject is not None:
        LOGGER.debug("No compatibility set for subject '%s', using registry default", subject)
        return resolve_compatibility(registry, None)
    return result.value_or(None)


def resolve_version(registry: SchemaRegistryAdapter, subject: str, parsed: RegistrySchema) -> int:
    """Return the registered version matching ``parsed``, or 0 when none exists."""
    versions = registry.get_all_versions(subject).value_or([])
    if not versions:
        return 0
    return registry.get_version(subject, parsed).value_or(0)


def is_compatible(registry: SchemaRegistryAdapter, subject: str, parsed: RegistrySchema) -> bool:
    """Test ``parsed`` against ``subject``; unregistered subjects are always compatible."""
    return registry.test_compatibility(subject, parsed).value_or(True)
