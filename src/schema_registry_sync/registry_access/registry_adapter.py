"""Schema registry client adapter."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Mapping
from typing import Any, Protocol, TypeVar

from confluent_kafka.schema_registry import Schema as RegistrySchema
from confluent_kafka.schema_registry import SchemaRegistryClient
from confluent_kafka.schema_registry.error import SchemaRegistryError
from fastavro.schema import SchemaParseException, UnknownType, parse_schema
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from schema_registry_sync.configuration.runtime_settings import RegistrySettings
from schema_registry_sync.schema_catalog.schema_models import SchemaType

from .registry_results import RegistryResult, SchemaMetadata

LOGGER = logging.getLogger(__name__)

SUBJECT_NOT_FOUND = 40401
SCHEMA_NOT_FOUND = 40403
SUBJECT_COMPATIBILITY_NOT_FOUND = 40408
NOT_FOUND_ERROR_CODES = frozenset(
    {SUBJECT_NOT_FOUND, SCHEMA_NOT_FOUND, SUBJECT_COMPATIBILITY_NOT_FOUND}
)

_PROTOBUF_DECLARATION = re.compile(r"^\s*(message|enum|service)\s+\w+", re.MULTILINE)

T = TypeVar("T")


class RegistryClientProtocol(Protocol):
    """Subset of the confluent-kafka registry client used by the adapter."""

    def get_compatibility(self, subject_name: str | None = None) -> str: ...

    def set_compatibility(
        self, subject_name: str | None = None, level: str | None = None
    ) -> Any: ...

    def get_latest_version(self, subject_name: str) -> Any: ...

    def get_subjects(self) -> list[str]: ...

    def get_versions(self, subject_name: str) -> list[int]: ...

    def lookup_schema(self, subject_name: str, schema: RegistrySchema) -> Any: ...

    def test_compatibility(self, subject_name: str, schema: RegistrySchema) -> bool: ...

    def register_schema(self, subject_name: str, schema: RegistrySchema) -> int: ...

    def delete_subject(self, subject_name: str) -> list[int]: ...


def create_registry_client(settings: RegistrySettings) -> SchemaRegistryClient:
    """Build a confluent-kafka registry client from normalized settings."""
    config: dict[str, Any] = {"url": settings.url}
    config.update(settings.properties)
    if settings.basic_auth_user_info:
        config["basic.auth.user.info"] = settings.basic_auth_user_info
    if settings.timeout_seconds is not None:
        config["timeout"] = settings.timeout_seconds
    return SchemaRegistryClient(config)


def is_not_found(error: SchemaRegistryError) -> bool:
    """Return True when the registry error means "no such subject/schema/config"."""
    return error.error_code in NOT_FOUND_ERROR_CODES


class SchemaRegistryAdapter:
    """Thin adapter over the registry client.

    Reads come back as tagged ``RegistryResult`` values instead of raising for
    unknown subjects; writes and listings return plain values and let registry
    errors propagate.
    """

    def __init__(self, client: RegistryClientProtocol) -> None:
        self._client = client

    def get_compatibility(self, subject: str | None) -> RegistryResult[str]:
        """Compatibility level of ``subject``, or the global default when ``subject`` is None."""
        return self._read(lambda: self._client.get_compatibility(subject))

    def update_compatibility(self, subject: str, mode: str) -> str:
        response = self._client.set_compatibility(subject_name=subject, level=mode)
        if isinstance(response, Mapping):
            return str(response.get("compatibility") or response.get("compatibilityLevel") or mode)
        return str(response) if response else mode

    def get_latest_schema_metadata(self, subject: str) -> RegistryResult[SchemaMetadata]:
        result = self._read(lambda: self._client.get_latest_version(subject))
        if not result.is_found:
            return RegistryResult(status=result.status, error=result.error)
        registered = result.value
        if registered is None:
            return RegistryResult.found(None)  # type: ignore[arg-type]
        registered_schema = getattr(registered, "schema", None)
        return RegistryResult.found(
            SchemaMetadata(
                subject=subject,
                version=getattr(registered, "version", None),
                schema_type=getattr(registered_schema, "schema_type", None),
                raw_content=getattr(registered_schema, "schema_str", None),
            )
        )

    def get_all_subjects(self) -> set[str]:
        return set(self._client.get_subjects())

    def get_all_versions(self, subject: str) -> RegistryResult[list[int]]:
        return self._read(lambda: list(self._client.get_versions(subject)))

    def get_version(self, subject: str, parsed: RegistrySchema) -> RegistryResult[int]:
        """Version number under which ``parsed`` is already registered for ``subject``."""
        result = self._read(lambda: self._client.lookup_schema(subject, parsed))
        if not result.is_found:
            return RegistryResult(status=result.status, error=result.error)
        return RegistryResult.found(int(getattr(result.value, "version", 0) or 0))

    def test_compatibility(self, subject: str, parsed: RegistrySchema) -> RegistryResult[bool]:
        return self._read(lambda: bool(self._client.test_compatibility(subject, parsed)))

    def register(self, subject: str, parsed: RegistrySchema) -> int:
        return int(self._client.register_schema(subject, parsed))

    def delete_subject(self, subject: str) -> list[int]:
        return list(self._client.delete_subject(subject) or [])

    def parse(self, schema_type: SchemaType | str, raw_content: str) -> RegistrySchema | None:
        """Turn raw schema text into a registry schema object, None when malformed."""
        try:
            resolved_type = SchemaType(str(schema_type))
        except ValueError:
            return None
        if not raw_content or not raw_content.strip():
            return None
        if not _SCHEMA_VALIDATORS[resolved_type](raw_content):
            LOGGER.debug("Content is not a valid %s schema", resolved_type)
            return None
        return RegistrySchema(raw_content, resolved_type.value)

    @staticmethod
    def _read(call: Callable[[], T]) -> RegistryResult[T]:
        try:
            return RegistryResult.found(call())
        except SchemaRegistryError as exc:
            if is_not_found(exc):
                LOGGER.debug("Registry reported not found: %s", exc)
                return RegistryResult.not_found(exc)
            return RegistryResult.failed(exc)


def _is_valid_avro(text: str) -> bool:
    try:
        parse_schema(json.loads(text))
    except (ValueError, TypeError, KeyError, SchemaParseException, UnknownType):
        return False
    return True


def _is_valid_json_schema(text: str) -> bool:
    try:
        document = json.loads(text)
    except ValueError:
        return False
    if not isinstance(document, (Mapping, bool)):
        return False
    try:
        validator_for(document).check_schema(document)
    except SchemaError:
        return False
    return True


def _is_valid_protobuf(text: str) -> bool:
    return bool(_PROTOBUF_DECLARATION.search(text))


_SCHEMA_VALIDATORS: dict[SchemaType, Callable[[str], bool]] = {
    SchemaType.AVRO: _is_valid_avro,
    SchemaType.JSON: _is_valid_json_schema,
    SchemaType.PROTOBUF: _is_valid_protobuf,
}
