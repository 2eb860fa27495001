"""
Field Accessor

Narrow capability a field controller needs from an entity shape: read one
field, produce a copy with that field replaced, and tell which record it is.
One accessor is created per (entity kind, field) pair, so a single generic
controller serves every record type.
"""
import dataclasses
from typing import Any

from src.features.records.domain.entity_kind import EntityKind


class FieldAccessor:
    """
    Reads and writes one field of one entity kind.

    Entities are immutable dataclasses; apply() always returns a new instance
    and never touches the entity it was given.
    """

    def __init__(self, kind: EntityKind, field_name: str):
        if not kind.has_field(field_name):
            raise ValueError(f"{kind.name} has no editable field '{field_name}'")
        self.kind = kind
        self.field_name = field_name

    @property
    def key(self) -> str:
        """Stable (kind, field) key, e.g. "Organization.my_interest"."""
        return f"{self.kind.name}.{self.field_name}"

    @property
    def is_text(self) -> bool:
        return self.field_name in self.kind.text_fields

    def read(self, entity: Any) -> str:
        """Current value of the field; missing values read as empty string."""
        value = getattr(entity, self.field_name)
        return "" if value is None else value

    def apply(self, entity: Any, value: Any) -> Any:
        """Return a copy of entity with the field set to value."""
        return dataclasses.replace(entity, **{self.field_name: value})

    def identity(self, entity: Any) -> Any:
        return self.kind.identity(entity)

    def __repr__(self) -> str:
        return f"FieldAccessor({self.key})"
