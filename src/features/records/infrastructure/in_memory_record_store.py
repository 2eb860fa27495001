"""
In-memory record store.

Reference backend for the desk: stores entities per table, validates every
update with the same rules the desk's database layer applies, and serves the
distinct-value lists behind select fields.

Thread-safe: updates may arrive from PersistenceThread workers.
"""
import time
from threading import RLock
from typing import Any, Dict, Iterable, List, Optional, Tuple

from src.features.field_sync.domain.gateways import DistinctValueProvider, PersistenceGateway
from src.features.field_sync.domain.validation_outcome import ValidationOutcome
from src.features.records.domain.entity_kind import (
    EntityKind,
    get_entity_kind,
    is_distinct_column_allowed,
    kind_of,
)
from src.shared.application.validation import (
    LengthValidator,
    RangeValidator,
    RequiredValidator,
    UrlValidator,
    ValidationResult,
    Validator,
    validate_field,
)
from src.utils.message import Log


MAX_NAME_LENGTH = 200
MAX_TITLE_LENGTH = 500
MAX_YEAR_LENGTH = 10

# (kind name, attribute) -> validators applied on every update
DEFAULT_RULES: Dict[Tuple[str, str], List[Validator]] = {
    ("Work", "title"): [RequiredValidator(), LengthValidator(max_length=MAX_TITLE_LENGTH)],
    ("Work", "type"): [RequiredValidator()],
    ("Work", "year"): [LengthValidator(max_length=MAX_YEAR_LENGTH)],
    ("Work", "n_words"): [RangeValidator(min_value=0)],
    ("Organization", "name"): [RequiredValidator(), LengthValidator(max_length=MAX_NAME_LENGTH)],
    ("Organization", "url"): [UrlValidator()],
    ("Organization", "other_url"): [UrlValidator()],
    ("Collection", "collection_name"): [RequiredValidator(), LengthValidator(max_length=MAX_NAME_LENGTH)],
    ("Submission", "cost"): [RangeValidator(min_value=0)],
    ("Submission", "web_address"): [UrlValidator()],
    ("Book", "title"): [RequiredValidator(), LengthValidator(max_length=MAX_TITLE_LENGTH)],
}


class RecordNotFoundError(LookupError):
    """Raised when an update targets a record the store does not hold."""


class InMemoryRecordStore(PersistenceGateway, DistinctValueProvider):
    """
    Dict-backed PersistenceGateway and DistinctValueProvider.

    Args:
        entities: Initial records (any supported entity kinds)
        latency_s: Artificial delay per update, to make in-flight states visible
    """

    def __init__(self, entities: Optional[Iterable[Any]] = None, latency_s: float = 0.0):
        self._lock = RLock()
        self._tables: Dict[str, Dict[Any, Any]] = {}
        self._rules: Dict[Tuple[str, str], List[Validator]] = {
            key: list(validators) for key, validators in DEFAULT_RULES.items()
        }
        self._failures: List[BaseException] = []
        self.latency_s = latency_s
        self.update_count = 0

        for entity in entities or []:
            self.put(entity)

    # =========================================================================
    # Records
    # =========================================================================

    def put(self, entity: Any) -> None:
        """Insert or replace a record without validation."""
        kind = self._require_kind(entity)
        with self._lock:
            self._tables.setdefault(kind.table, {})[kind.identity(entity)] = entity

    def get(self, table: str, record_id: Any) -> Optional[Any]:
        kind = get_entity_kind(table)
        with self._lock:
            return self._tables.get(kind.table, {}).get(record_id)

    def list_records(self, table: str) -> List[Any]:
        kind = get_entity_kind(table)
        with self._lock:
            return list(self._tables.get(kind.table, {}).values())

    # =========================================================================
    # Rules and fault injection
    # =========================================================================

    def add_rule(self, kind_name: str, attribute: str, validator: Validator) -> None:
        """Attach an extra validator to one attribute of one entity kind."""
        with self._lock:
            self._rules.setdefault((kind_name, attribute), []).append(validator)

    def fail_next_update(self, error: Optional[BaseException] = None) -> None:
        """Make the next update raise (simulates a transport failure)."""
        with self._lock:
            self._failures.append(error or ConnectionError("backend unavailable"))

    def validate(self, entity: Any) -> ValidationResult:
        kind = self._require_kind(entity)
        result = ValidationResult()
        with self._lock:
            rules = [(attr, validators) for (name, attr), validators in self._rules.items() if name == kind.name]
        for attribute, validators in rules:
            result.merge(validate_field(attribute, getattr(entity, attribute, None), validators))
        return result

    # =========================================================================
    # PersistenceGateway
    # =========================================================================

    def update(self, entity: Any) -> ValidationOutcome:
        if self.latency_s > 0:
            time.sleep(self.latency_s)

        kind = self._require_kind(entity)
        record_id = kind.identity(entity)

        with self._lock:
            self.update_count += 1
            if self._failures:
                raise self._failures.pop(0)

            table = self._tables.get(kind.table, {})
            if record_id not in table:
                raise RecordNotFoundError(f"{kind.name} {record_id} does not exist")

            result = self.validate(entity)
            if not result.valid:
                Log.info(f"InMemoryRecordStore: Rejected {kind.name} {record_id}: {'; '.join(result.error_messages())}")
                return ValidationOutcome.from_validation(entity, result)

            table[record_id] = entity

        Log.debug(f"InMemoryRecordStore: Updated {kind.name} {record_id}")
        return ValidationOutcome.from_validation(entity, result)

    # =========================================================================
    # DistinctValueProvider
    # =========================================================================

    def list_distinct_values(self, table: str, column: str) -> List[str]:
        if not is_distinct_column_allowed(table, column):
            raise ValueError(f"Distinct values not allowed for {table}.{column}")

        with self._lock:
            records = list(self._tables.get(table, {}).values())

        values = {getattr(record, column, None) for record in records}
        return sorted(value for value in values if value)

    @staticmethod
    def _require_kind(entity: Any) -> EntityKind:
        kind = kind_of(entity)
        if kind is None:
            raise TypeError(f"Unsupported entity type: {type(entity).__name__}")
        return kind
