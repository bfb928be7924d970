"""Shared in-memory schema registry fake."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from confluent_kafka.schema_registry import Schema as RegistrySchema
from confluent_kafka.schema_registry.error import SchemaRegistryError


def _not_found(error_code: int, message: str) -> SchemaRegistryError:
    return SchemaRegistryError(404, error_code, message)


class FakeRegistryClient:
    """Mimics the confluent-kafka registry client against in-memory state."""

    def __init__(self, global_compatibility: str = "BACKWARD") -> None:
        self.global_compatibility = global_compatibility
        self.subject_compatibility: dict[str, str] = {}
        self.versions: dict[str, list[RegistrySchema]] = {}
        self.incompatible_subjects: set[str] = set()
        self.failures: dict[str | tuple[str, str | None], Exception] = {}
        self.calls: list[tuple[str, str | None]] = []
        self._next_id = 1

    def add_version(self, subject: str, schema_str: str, schema_type: str = "AVRO") -> int:
        self.versions.setdefault(subject, []).append(RegistrySchema(schema_str, schema_type))
        schema_id = self._next_id
        self._next_id += 1
        return schema_id

    def mutating_calls(self) -> list[tuple[str, str | None]]:
        return [
            call
            for call in self.calls
            if call[0] in {"set_compatibility", "register_schema", "delete_subject"}
        ]

    def _record(self, method: str, subject: str | None) -> None:
        self.calls.append((method, subject))
        failure = self.failures.get((method, subject)) or self.failures.get(method)
        if failure is not None:
            raise failure

    def _require_subject(self, subject: str) -> list[RegistrySchema]:
        if not self.versions.get(subject):
            raise _not_found(40401, f"Subject '{subject}' not found.")
        return self.versions[subject]

    def get_compatibility(self, subject_name: str | None = None) -> str:
        self._record("get_compatibility", subject_name)
        if subject_name is None:
            return self.global_compatibility
        if subject_name not in self.subject_compatibility:
            raise _not_found(40408, f"Subject '{subject_name}' has no compatibility configured")
        return self.subject_compatibility[subject_name]

    def set_compatibility(self, subject_name: str | None = None, level: str | None = None) -> Any:
        self._record("set_compatibility", subject_name)
        assert subject_name is not None and level is not None
        self.subject_compatibility[subject_name] = level
        return {"compatibility": level}

    def get_latest_version(self, subject_name: str) -> Any:
        self._record("get_latest_version", subject_name)
        versions = self._require_subject(subject_name)
        return SimpleNamespace(
            schema_id=len(versions),
            schema=versions[-1],
            subject=subject_name,
            version=len(versions),
        )

    def get_subjects(self) -> list[str]:
        self._record("get_subjects", None)
        return [subject for subject, versions in self.versions.items() if versions]

    def get_versions(self, subject_name: str) -> list[int]:
        self._record("get_versions", subject_name)
        versions = self._require_subject(subject_name)
        return list(range(1, len(versions) + 1))

    def lookup_schema(self, subject_name: str, schema: RegistrySchema) -> Any:
        self._record("lookup_schema", subject_name)
        versions = self._require_subject(subject_name)
        for index, registered in enumerate(versions, start=1):
            if registered.schema_str.strip() == schema.schema_str.strip():
                return SimpleNamespace(schema_id=index, schema=registered, version=index)
        raise _not_found(40403, "Schema not found")

    def test_compatibility(self, subject_name: str, schema: RegistrySchema) -> bool:
        self._record("test_compatibility", subject_name)
        self._require_subject(subject_name)
        return subject_name not in self.incompatible_subjects

    def register_schema(self, subject_name: str, schema: RegistrySchema) -> int:
        self._record("register_schema", subject_name)
        return self.add_version(subject_name, schema.schema_str, schema.schema_type)

    def delete_subject(self, subject_name: str) -> list[int]:
        self._record("delete_subject", subject_name)
        versions = self._require_subject(subject_name)
        del self.versions[subject_name]
        self.subject_compatibility.pop(subject_name, None)
        return list(range(1, len(versions) + 1))


@pytest.fixture
def registry_client() -> FakeRegistryClient:
    return FakeRegistryClient()


@pytest.fixture
def registry_client_factory() -> type[FakeRegistryClient]:
    return FakeRegistryClient
