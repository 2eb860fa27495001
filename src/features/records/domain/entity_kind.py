"""
Entity kinds

Describes each record type the desk edits inline: which backend table it
lives in, which attribute carries its identity, and which of its fields are
edited through select widgets (backed by distinct-value suggestions) or
free-text panels.

The select fields double as the allow-list for distinct-value queries.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Type

from src.features.records.domain.book import Book
from src.features.records.domain.collection import Collection
from src.features.records.domain.organization import Organization
from src.features.records.domain.submission import Submission
from src.features.records.domain.work import Work


@dataclass(frozen=True)
class EntityKind:
    """Static description of one record type."""
    name: str
    table: str
    entity_type: Type
    id_attr: str
    select_fields: Tuple[str, ...] = ()
    text_fields: Tuple[str, ...] = ()

    def identity(self, entity) -> object:
        return getattr(entity, self.id_attr)

    def has_field(self, field_name: str) -> bool:
        return field_name in self.select_fields or field_name in self.text_fields


WORK = EntityKind(
    name="Work",
    table="Works",
    entity_type=Work,
    id_attr="work_id",
    select_fields=("status", "type", "quality", "doc_type"),
)

ORGANIZATION = EntityKind(
    name="Organization",
    table="Organizations",
    entity_type=Organization,
    id_attr="org_id",
    select_fields=("status", "type", "my_interest"),
)

COLLECTION = EntityKind(
    name="Collection",
    table="Collections",
    entity_type=Collection,
    id_attr="coll_id",
    select_fields=("type",),
)

SUBMISSION = EntityKind(
    name="Submission",
    table="Submissions",
    entity_type=Submission,
    id_attr="submission_id",
    select_fields=("submission_type", "response_type"),
)

BOOK = EntityKind(
    name="Book",
    table="Books",
    entity_type=Book,
    id_attr="book_id",
    text_fields=("dedication", "copyright", "acknowledgements", "about_author", "afterword"),
)

ENTITY_KINDS: Dict[str, EntityKind] = {
    kind.name: kind for kind in (WORK, ORGANIZATION, COLLECTION, SUBMISSION, BOOK)
}


def get_entity_kind(name_or_table: str) -> EntityKind:
    """
    Look up an entity kind by name ("Organization") or table ("Organizations").

    Raises:
        KeyError: If no kind matches
    """
    kind = ENTITY_KINDS.get(name_or_table)
    if kind is not None:
        return kind
    for candidate in ENTITY_KINDS.values():
        if candidate.table == name_or_table:
            return candidate
    raise KeyError(f"Unknown entity kind: {name_or_table!r}")


def kind_of(entity) -> Optional[EntityKind]:
    """Return the kind describing an entity instance, or None."""
    for kind in ENTITY_KINDS.values():
        if isinstance(entity, kind.entity_type):
            return kind
    return None


def is_distinct_column_allowed(table: str, column: str) -> bool:
    """True if distinct-value queries are permitted for (table, column)."""
    for kind in ENTITY_KINDS.values():
        if kind.table == table:
            return column in kind.select_fields
    return False
