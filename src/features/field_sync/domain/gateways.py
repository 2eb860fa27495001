"""
Gateway Interfaces

Contracts for the backend collaborators the inline editors depend on.
"""
from abc import ABC, abstractmethod
from typing import Any, List

from src.features.field_sync.domain.validation_outcome import ValidationOutcome


class PersistenceGateway(ABC):
    """
    Entity-update endpoint.

    One call per edit; callers never retry automatically.
    """

    @abstractmethod
    def update(self, entity: Any) -> ValidationOutcome:
        """
        Persist an updated entity.

        Args:
            entity: Complete entity carrying the edited field

        Returns:
            ValidationOutcome.accepted(stored_entity) when the update was applied,
            ValidationOutcome.rejected(errors) when backend validation refused it

        Raises:
            Exception: Any transport or backend availability failure
        """
        pass


class DistinctValueProvider(ABC):
    """Source of suggestion values for select fields."""

    @abstractmethod
    def list_distinct_values(self, table: str, column: str) -> List[str]:
        """
        List the distinct non-empty values stored in a column.

        Args:
            table: Backend table name (e.g. "Organizations")
            column: Column name (e.g. "my_interest")

        Returns:
            Ordered list of distinct values

        Raises:
            ValueError: If the (table, column) pair is not allowed
        """
        pass
