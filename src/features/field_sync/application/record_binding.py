"""
Record Binding

Owns the authoritative copy of one record and the field controllers bound to
it. Several fields of the same record are edited side by side (status, type,
quality...); when one of them saves, only that field is merged into the
record and the merged record is pushed to the siblings, so a sibling's later
confirmation cannot roll back a value it never edited.

Writes to the record go through one RecordWriteQueue: a sibling's write waits
for the running one to settle and is built on the merged record, so the
store never receives another field's stale value.
"""
import dataclasses
from typing import Any, Callable, Dict, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from src.features.field_sync.application.field_sync_controller import (
    DEFAULT_TEXT_DEBOUNCE_MS,
    FieldSyncController,
)
from src.features.field_sync.application.option_cache import OptionCache
from src.features.field_sync.application.record_write_queue import RecordWriteQueue
from src.features.field_sync.application.update_dispatcher import (
    InlineUpdateDispatcher,
    UpdateDispatcher,
)
from src.features.field_sync.application.validation_presenter import ValidationPresenter
from src.features.field_sync.domain.field_accessor import FieldAccessor
from src.features.field_sync.domain.gateways import PersistenceGateway
from src.features.records.domain.entity_kind import kind_of
from src.utils.message import Log


class RecordBinding(QObject):
    """
    Shared record state for sibling field controllers.

    Signals:
        record_changed(entity): the bound record changed (save or load)
    """

    record_changed = pyqtSignal(object)

    def __init__(
        self,
        entity: Any,
        gateway: PersistenceGateway,
        dispatcher: Optional[UpdateDispatcher] = None,
        presenter: Optional[ValidationPresenter] = None,
        option_cache: Optional[OptionCache] = None,
        debounce_ms: int = DEFAULT_TEXT_DEBOUNCE_MS,
        timer_factory: Optional[Callable[[], Any]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        kind = kind_of(entity)
        if kind is None:
            raise ValueError(f"No entity kind for {type(entity).__name__}")

        self._kind = kind
        self._record = entity
        self._gateway = gateway
        self._dispatcher = dispatcher or InlineUpdateDispatcher()
        self._presenter = presenter or ValidationPresenter(self)
        self._option_cache = option_cache
        self._debounce_ms = debounce_ms
        self._timer_factory = timer_factory
        self._controllers: Dict[str, FieldSyncController] = {}
        self._write_queue = RecordWriteQueue(lambda: self._record)

    @property
    def record(self) -> Any:
        return self._record

    @property
    def kind(self):
        return self._kind

    @property
    def presenter(self) -> ValidationPresenter:
        return self._presenter

    def field_names(self) -> List[str]:
        return list(self._controllers)

    def controller(self, field_name: str) -> FieldSyncController:
        """Get (creating on first use) the controller for one field."""
        existing = self._controllers.get(field_name)
        if existing is not None:
            return existing

        controller = FieldSyncController(
            FieldAccessor(self._kind, field_name),
            self._record,
            self._gateway,
            dispatcher=self._dispatcher,
            presenter=self._presenter,
            debounce_ms=self._debounce_ms,
            timer_factory=self._timer_factory,
            option_cache=self._option_cache,
            write_queue=self._write_queue,
            parent=self,
        )
        controller.entity_updated.connect(
            lambda saved, name=field_name: self._on_field_saved(name, saved)
        )
        self._controllers[field_name] = controller
        return controller

    def load(self, entity: Any) -> None:
        """Replace the bound record (refresh, or switch to another record)."""
        if entity is None:
            return
        self._record = entity
        for controller in self._controllers.values():
            controller.set_entity(entity)
        self.record_changed.emit(entity)

    def set_debounce_ms(self, debounce_ms: int) -> None:
        """Apply a new text quiet period to current and future text fields."""
        self._debounce_ms = debounce_ms
        for controller in self._controllers.values():
            controller.set_debounce_ms(debounce_ms)

    def dispose(self) -> None:
        for controller in self._controllers.values():
            controller.dispose()

    def _on_field_saved(self, field_name: str, saved: Any) -> None:
        if self._kind.identity(saved) != self._kind.identity(self._record):
            Log.debug(f"RecordBinding: Ignoring save for another {self._kind.name}")
            return

        merged = dataclasses.replace(self._record, **{field_name: getattr(saved, field_name)})
        self._record = merged

        for name, controller in self._controllers.items():
            if name != field_name:
                controller.set_entity(merged)

        self.record_changed.emit(merged)
