"""Schema catalog entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SchemaType(str, Enum):
    """Serialization formats understood by the schema registry."""

    AVRO = "AVRO"
    JSON = "JSON"
    PROTOBUF = "PROTOBUF"

    def __str__(self) -> str:
        return self.value


class CompatibilityMode(str, Enum):
    """Registry-enforced evolution rules for a subject."""

    BACKWARD = "BACKWARD"
    BACKWARD_TRANSITIVE = "BACKWARD_TRANSITIVE"
    FORWARD = "FORWARD"
    FORWARD_TRANSITIVE = "FORWARD_TRANSITIVE"
    FULL = "FULL"
    FULL_TRANSITIVE = "FULL_TRANSITIVE"
    NONE = "NONE"

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class Schema:
    """Descriptor of one schema subject, either desired or observed.

    Instances are compared by identity: the engine mutates ``schema_type`` and
    ``compatibility_mode`` in place while exporting registry state, and the
    reporter deduplicates by object.
    """

    subject: str
    schema_type: SchemaType | None = SchemaType.AVRO
    compatibility_mode: CompatibilityMode | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.subject, str) or not self.subject.strip():
            raise ValueError("Schema subject must not be empty.")

    @property
    def compatibility_label(self) -> str:
        """Return the compatibility mode for display, ``default`` when unset."""
        return str(self.compatibility_mode) if self.compatibility_mode else "default"
