"""Registry access entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class LookupStatus(str, Enum):
    """Tag of a registry read."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class RegistryResult(Generic[T]):
    """Outcome of one registry read.

    ``NOT_FOUND`` covers the legitimate "unknown subject/schema" answers of the
    registry; ``FAILED`` carries any other registry error so the caller decides
    whether to raise it.
    """

    status: LookupStatus
    value: T | None = None
    error: Exception | None = None

    @staticmethod
    def found(value: T) -> RegistryResult[T]:
        return RegistryResult(status=LookupStatus.FOUND, value=value)

    @staticmethod
    def not_found(error: Exception | None = None) -> RegistryResult[T]:
        return RegistryResult(status=LookupStatus.NOT_FOUND, error=error)

    @staticmethod
    def failed(error: Exception) -> RegistryResult[T]:
        return RegistryResult(status=LookupStatus.FAILED, error=error)

    @property
    def is_found(self) -> bool:
        return self.status == LookupStatus.FOUND

    @property
    def is_not_found(self) -> bool:
        return self.status == LookupStatus.NOT_FOUND

    def value_or(self, default: T) -> T:
        """Return the value, ``default`` when not found, or raise the failure cause."""
        if self.status == LookupStatus.FAILED:
            if self.error is None:
                raise RuntimeError("Registry read failed without a recorded cause")
            raise self.error
        if self.status == LookupStatus.NOT_FOUND:
            return default
        return self.value  # type: ignore[return-value]


@dataclass(frozen=True)
class SchemaMetadata:
    """Latest registered version of a subject."""

    subject: str
    version: int | None
    schema_type: str | None
    raw_content: str | None
