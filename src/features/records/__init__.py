"""
Records feature module.

Usage:
    from src.features.records.domain import Organization, ORGANIZATION
    from src.features.records.infrastructure import InMemoryRecordStore
"""
