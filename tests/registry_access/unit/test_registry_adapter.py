"""Registry adapter tests."""

from __future__ import annotations

import json

import pytest
import schema_registry_sync.registry_access.registry_adapter as adapter_module
from confluent_kafka.schema_registry.error import SchemaRegistryError
from schema_registry_sync.configuration import RegistrySettings
from schema_registry_sync.registry_access import (
    LookupStatus,
    RegistryResult,
    SchemaRegistryAdapter,
    create_registry_client,
)
from schema_registry_sync.schema_catalog import SchemaType

AVRO_RECORD = json.dumps(
    {"type": "record", "name": "Order", "fields": [{"name": "id", "type": "string"}]}
)


@pytest.mark.parametrize("error_code", [40401, 40403, 40408])
def test_not_found_error_codes_are_tagged_not_found(registry_client, error_code: int) -> None:
    registry_client.failures["get_versions"] = SchemaRegistryError(404, error_code, "missing")

    result = SchemaRegistryAdapter(registry_client).get_all_versions("orders-value")

    assert result.status == LookupStatus.NOT_FOUND
    assert result.value_or([]) == []


def test_other_registry_errors_are_tagged_failed(registry_client) -> None:
    failure = SchemaRegistryError(500, 50001, "boom")
    registry_client.failures["get_latest_version"] = failure

    result = SchemaRegistryAdapter(registry_client).get_latest_schema_metadata("orders-value")

    assert result.status == LookupStatus.FAILED
    with pytest.raises(SchemaRegistryError) as exc_info:
        result.value_or(None)
    assert exc_info.value is failure


def test_latest_metadata_exposes_type_and_content(registry_client) -> None:
    registry_client.add_version("orders-value", AVRO_RECORD)

    result = SchemaRegistryAdapter(registry_client).get_latest_schema_metadata("orders-value")

    assert result.is_found
    metadata = result.value_or(None)
    assert metadata is not None
    assert metadata.schema_type == "AVRO"
    assert metadata.raw_content == AVRO_RECORD
    assert metadata.version == 1


def test_update_compatibility_returns_confirmed_mode(registry_client) -> None:
    confirmed = SchemaRegistryAdapter(registry_client).update_compatibility("orders-value", "FULL")

    assert confirmed == "FULL"
    assert registry_client.subject_compatibility == {"orders-value": "FULL"}


def test_write_operations_propagate_registry_errors(registry_client) -> None:
    registry = SchemaRegistryAdapter(registry_client)

    with pytest.raises(SchemaRegistryError):
        registry.delete_subject("unknown-value")


@pytest.mark.parametrize(
    ("schema_type", "content"),
    [
        (SchemaType.AVRO, AVRO_RECORD),
        (SchemaType.AVRO, '"string"'),
        (SchemaType.JSON, '{"type": "object"}'),
        (
            SchemaType.JSON,
            '{"type": "object", "properties": {"id": {"type": "string"}}, "required": ["id"]}',
        ),
        (SchemaType.PROTOBUF, 'syntax = "proto3";\nmessage Order {\n  string id = 1;\n}\n'),
    ],
)
def test_parse_accepts_well_formed_content(
    registry_client, schema_type: SchemaType, content: str
) -> None:
    parsed = SchemaRegistryAdapter(registry_client).parse(schema_type, content)

    assert parsed is not None
    assert parsed.schema_str == content
    assert parsed.schema_type == schema_type.value


@pytest.mark.parametrize(
    ("schema_type", "content"),
    [
        (SchemaType.AVRO, "{"),
        (SchemaType.AVRO, '{"type": "record", "fields": []}'),
        (SchemaType.JSON, "[1, 2"),
        (SchemaType.JSON, "42"),
        (SchemaType.JSON, '{"type": 42, "properties": "nope"}'),
        (SchemaType.JSON, '{"type": "object", "required": "id"}'),
        (SchemaType.PROTOBUF, 'syntax = "proto3";'),
        ("XML", "<schema/>"),
        (SchemaType.AVRO, "  "),
    ],
)
def test_parse_rejects_malformed_content(registry_client, schema_type, content: str) -> None:
    assert SchemaRegistryAdapter(registry_client).parse(schema_type, content) is None


def test_create_registry_client_builds_confluent_config(monkeypatch) -> None:
    captured: dict = {}

    class FakeClient:
        def __init__(self, conf: dict) -> None:
            captured.update(conf)

    monkeypatch.setattr(adapter_module, "SchemaRegistryClient", FakeClient)

    client = create_registry_client(
        RegistrySettings(
            url="http://registry:8081",
            basic_auth_user_info="key:secret",
            timeout_seconds=15,
            properties={"ssl.ca.location": "/etc/ca.pem"},
        )
    )

    assert isinstance(client, FakeClient)
    assert captured == {
        "url": "http://registry:8081",
        "basic.auth.user.info": "key:secret",
        "timeout": 15,
        "ssl.ca.location": "/etc/ca.pem",
    }


def test_registry_result_value_or_semantics() -> None:
    assert RegistryResult.found(3).value_or(0) == 3
    assert RegistryResult.not_found().value_or(0) == 0
    with pytest.raises(RuntimeError):
        RegistryResult.failed(RuntimeError("down")).value_or(0)


def test_failed_result_without_cause_still_raises() -> None:
    result: RegistryResult[int] = RegistryResult(status=LookupStatus.FAILED)

    with pytest.raises(RuntimeError, match="without a recorded cause"):
        result.value_or(0)
