"""
Infrastructure layer for records feature.

Contains the in-memory backend (gateway + distinct-value provider).
"""
from src.features.records.infrastructure.in_memory_record_store import (
    InMemoryRecordStore,
    RecordNotFoundError,
    DEFAULT_RULES,
)

__all__ = [
    'InMemoryRecordStore',
    'RecordNotFoundError',
    'DEFAULT_RULES',
]
