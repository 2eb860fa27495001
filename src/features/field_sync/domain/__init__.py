"""
Domain layer for field synchronization.

Contains:
- ValidationOutcome (accepted / rejected / transport failure)
- FieldAccessor (read/apply/identity for one field of one entity kind)
- Gateway interfaces (PersistenceGateway, DistinctValueProvider)
"""
from src.features.field_sync.domain.validation_outcome import (
    ValidationOutcome,
    OutcomeKind,
    GENERIC_TRANSPORT_MESSAGE,
)
from src.features.field_sync.domain.field_accessor import FieldAccessor
from src.features.field_sync.domain.gateways import PersistenceGateway, DistinctValueProvider

__all__ = [
    'ValidationOutcome',
    'OutcomeKind',
    'GENERIC_TRANSPORT_MESSAGE',
    'FieldAccessor',
    'PersistenceGateway',
    'DistinctValueProvider',
]
