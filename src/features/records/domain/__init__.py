"""
Domain layer for records feature.

Contains:
- Entities (Work, Organization, Collection, Submission, Book)
- Entity kind descriptions and the distinct-value allow-list
"""
from src.features.records.domain.work import Work
from src.features.records.domain.organization import Organization
from src.features.records.domain.collection import Collection
from src.features.records.domain.submission import Submission
from src.features.records.domain.book import Book
from src.features.records.domain.entity_kind import (
    EntityKind,
    ENTITY_KINDS,
    WORK,
    ORGANIZATION,
    COLLECTION,
    SUBMISSION,
    BOOK,
    get_entity_kind,
    kind_of,
    is_distinct_column_allowed,
)

__all__ = [
    'Work',
    'Organization',
    'Collection',
    'Submission',
    'Book',
    'EntityKind',
    'ENTITY_KINDS',
    'WORK',
    'ORGANIZATION',
    'COLLECTION',
    'SUBMISSION',
    'BOOK',
    'get_entity_kind',
    'kind_of',
    'is_distinct_column_allowed',
]
