"""
Option Cache

Suggestion lists for select fields, one ordered list of distinct values per
(table, column). Each list is fetched once from the DistinctValueProvider and
shared by every select widget bound to that column.

Options are display affordances only: values outside the list are still
accepted, and a failed fetch leaves the widget working with no suggestions.
"""
from typing import Dict, List, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from src.features.field_sync.domain.gateways import DistinctValueProvider
from src.utils.message import Log


class OptionCache(QObject):
    """
    Lazily loaded, shared distinct-value lists.

    Signals:
        options_changed(table, column): a list was loaded or gained a value
    """

    options_changed = pyqtSignal(str, str)

    def __init__(self, provider: Optional[DistinctValueProvider], parent=None):
        super().__init__(parent)
        self._provider = provider
        self._options: Dict[Tuple[str, str], List[str]] = {}

    def is_loaded(self, table: str, column: str) -> bool:
        return (table, column) in self._options

    def options_for(self, table: str, column: str) -> List[str]:
        """
        Get the suggestion list for a column, fetching it on first use.

        A fetch failure is logged and yields an empty list; it is not cached,
        so the next caller retries.
        """
        key = (table, column)
        cached = self._options.get(key)
        if cached is not None:
            Log.debug(f"OptionCache: HIT {table}.{column}")
            return list(cached)

        if self._provider is None:
            return []

        try:
            values = self._provider.list_distinct_values(table, column) or []
        except Exception as e:
            Log.error(f"OptionCache: Failed to load {column} options for {table}: {e}")
            return []

        options = _dedupe(values)
        self._options[key] = options
        Log.debug(f"OptionCache: Loaded {len(options)} option(s) for {table}.{column}")
        self.options_changed.emit(table, column)
        return list(options)

    def remember(self, table: str, column: str, value: str) -> bool:
        """
        Add a newly saved free-form value to a loaded list.

        Returns:
            True if the list changed
        """
        options = self._options.get((table, column))
        if options is None or not value or value in options:
            return False

        options.append(value)
        options.sort()
        self.options_changed.emit(table, column)
        return True


def _dedupe(values) -> List[str]:
    seen = set()
    ordered = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered
