"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from schema_registry_sync.schema_catalog.schema_models import CompatibilityMode, SchemaType

from .runtime_settings import DesiredSchema, RegistrySettings, SyncConfiguration


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> SyncConfiguration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    registry = _parse_registry_section(parsed.get("registry"))
    schema_directory, schemas = _parse_schemas_section(parsed.get("schemas"), path.parent)
    delete_subjects = _normalize_subject_sequence(parsed.get("delete"), "delete")

    return SyncConfiguration(
        path=path,
        registry=registry,
        schema_directory=schema_directory,
        schemas=schemas,
        delete_subjects=delete_subjects,
    )


def _parse_registry_section(value: Any) -> RegistrySettings:
    section = _require_mapping(value, "registry")
    url = _require_non_empty_string(section.get("url"), "registry.url")
    basic_auth_user_info = _optional_string(
        section.get("basic_auth_user_info"), "registry.basic_auth_user_info"
    )
    timeout_raw = section.get("timeout_seconds")
    timeout_seconds = (
        None
        if timeout_raw is None
        else _require_positive_int(timeout_raw, "registry.timeout_seconds")
    )
    properties = section.get("properties") or {}
    if not isinstance(properties, Mapping):
        raise ConfigurationError("registry.properties must be a mapping.")
    return RegistrySettings(
        url=url,
        basic_auth_user_info=basic_auth_user_info,
        timeout_seconds=timeout_seconds,
        properties={str(key): item for key, item in properties.items()},
    )


def _parse_schemas_section(
    value: Any, base_path: Path
) -> tuple[Path, tuple[DesiredSchema, ...]]:
    section = _require_mapping(value, "schemas")
    directory = _resolve_path(
        base_path, _require_non_empty_string(section.get("directory"), "schemas.directory")
    )
    entries = section.get("subjects") or []
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
        raise ConfigurationError("schemas.subjects must be a list.")

    schemas: list[DesiredSchema] = []
    seen_subjects: set[str] = set()
    for index, entry in enumerate(entries):
        label = f"schemas.subjects[{index}]"
        desired = _parse_desired_schema(entry, label)
        if desired.subject in seen_subjects:
            raise ConfigurationError(f"{label}.subject '{desired.subject}' is declared twice.")
        seen_subjects.add(desired.subject)
        schemas.append(desired)
    return directory, tuple(schemas)


def _parse_desired_schema(value: Any, label: str) -> DesiredSchema:
    entry = _require_mapping(value, label)
    subject = _require_non_empty_string(entry.get("subject"), f"{label}.subject")
    schema_type = _parse_enum(SchemaType, entry.get("type", "AVRO"), f"{label}.type")
    compatibility_raw = entry.get("compatibility")
    compatibility_mode = (
        None
        if compatibility_raw is None
        else _parse_enum(CompatibilityMode, compatibility_raw, f"{label}.compatibility")
    )
    return DesiredSchema(
        subject=subject,
        schema_type=schema_type,
        compatibility_mode=compatibility_mode,
    )


def _parse_enum(enum_cls, value: Any, field_name: str):
    text = _require_non_empty_string(value, field_name).upper()
    try:
        return enum_cls(text)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(f"{field_name} must be one of: {allowed}.") from exc


def _normalize_subject_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized: list[str] = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped and stripped not in normalized:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
