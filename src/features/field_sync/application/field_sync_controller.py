"""
Field Sync Controller

Per-field state machine behind every inline editor. It reconciles three
sources of truth:

- the authoritative entity handed down by the owning view (may change at any time)
- the locally edited draft value shown in the widget
- at most one in-flight persistence call, which may succeed, be rejected by
  backend validation, or fail in transport

States:
    Idle     no request pending; draft mirrors the authoritative value
    Editing  a request is pending; draft shows the proposed value optimistically

Transitions:
    submit_edit(v)        Idle -> Editing, draft = v, one gateway call
    accepted              Editing -> Idle, authoritative = confirmed entity,
                          entity_updated emitted
    rejected / transport  Editing -> Idle, draft reverts to the last known-good
                          value, edit_failed emitted
    set_entity(other id)  any -> Idle, draft reset, in-flight result becomes stale
    set_entity(same id)   Idle: draft resynchronised
                          Editing: queued, becomes the baseline at settle time

Responses for superseded requests, duplicate replies, and anything arriving
after dispose() are discarded and only logged.

Select fields allow one outstanding write at a time (the view disables the
widget while pending). Text fields route keystrokes through a
DebounceCoalescer; a newer coalesced write supersedes an older in-flight one.

With a RecordWriteQueue (shared by the sibling controllers of one record)
a write waits for the record's running write to settle and is then built on
the latest merged record, so it never resends a sibling's old value.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from src.features.field_sync.application.debounce_coalescer import DebounceCoalescer
from src.features.field_sync.application.option_cache import OptionCache
from src.features.field_sync.application.record_write_queue import RecordWriteQueue
from src.features.field_sync.application.update_dispatcher import (
    InlineUpdateDispatcher,
    UpdateDispatcher,
)
from src.features.field_sync.application.validation_presenter import ValidationPresenter
from src.features.field_sync.domain.field_accessor import FieldAccessor
from src.features.field_sync.domain.gateways import PersistenceGateway
from src.features.field_sync.domain.validation_outcome import ValidationOutcome
from src.utils.message import Log


DEFAULT_TEXT_DEBOUNCE_MS = 500


class FieldMode(Enum):
    """How edits reach the controller"""
    SELECT = "select"  # discrete choices, one write at a time
    TEXT = "text"      # keystrokes, coalesced writes


@dataclass
class PendingRequest:
    """One persistence attempt and the draft it was issued for."""
    request_id: int
    value: Any
    entity: Any
    entity_id: Any
    settled: bool = False
    holds_queue: bool = False  # started through a RecordWriteQueue and not yet released


class FieldSyncController(QObject):
    """
    Synchronizes one field of one record with the backend.

    Signals:
        value_changed(value): visible value changed
        pending_changed(bool): a request started (True) or settled (False)
        entity_updated(entity): the backend confirmed a new version of the record
        edit_failed(list): an edit was rejected or failed; user-facing messages
    """

    value_changed = pyqtSignal(object)
    pending_changed = pyqtSignal(bool)
    entity_updated = pyqtSignal(object)
    edit_failed = pyqtSignal(list)

    def __init__(
        self,
        accessor: FieldAccessor,
        entity: Any,
        gateway: PersistenceGateway,
        dispatcher: Optional[UpdateDispatcher] = None,
        presenter: Optional[ValidationPresenter] = None,
        mode: Optional[FieldMode] = None,
        debounce_ms: int = DEFAULT_TEXT_DEBOUNCE_MS,
        timer_factory: Optional[Callable[[], Any]] = None,
        option_cache: Optional[OptionCache] = None,
        write_queue: Optional[RecordWriteQueue] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        if entity is None:
            raise ValueError("entity is required for FieldSyncController")

        self._accessor = accessor
        self._gateway = gateway
        self._dispatcher = dispatcher or InlineUpdateDispatcher()
        self._presenter = presenter or ValidationPresenter(self)
        self._mode = mode or (FieldMode.TEXT if accessor.is_text else FieldMode.SELECT)
        self._option_cache = option_cache
        self._write_queue = write_queue

        self._entity = entity
        self._entity_id = accessor.identity(entity)
        self._authoritative = accessor.read(entity)
        self._draft = self._authoritative

        self._pending: Optional[PendingRequest] = None
        self._queued_entity: Optional[Any] = None
        self._request_counter = 0
        self._disposed = False

        self._coalescer: Optional[DebounceCoalescer] = None
        if self._mode == FieldMode.TEXT:
            self._coalescer = DebounceCoalescer(
                debounce_ms, self._on_coalesced, timer_factory=timer_factory, parent=self
            )

    # =========================================================================
    # State
    # =========================================================================

    @property
    def accessor(self) -> FieldAccessor:
        return self._accessor

    @property
    def mode(self) -> FieldMode:
        return self._mode

    @property
    def current_value(self) -> Any:
        """Value the widget should display."""
        return self._draft

    @property
    def authoritative_value(self) -> Any:
        return self._authoritative

    @property
    def entity(self) -> Any:
        """Last authoritative entity known to this controller."""
        return self._entity

    @property
    def entity_id(self) -> Any:
        return self._entity_id

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    @property
    def pending_request(self) -> Optional[PendingRequest]:
        return self._pending

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def affordance_enabled(self) -> bool:
        """Whether the bound widget should accept input right now."""
        if self._disposed:
            return False
        return self._mode == FieldMode.TEXT or self._pending is None

    @property
    def has_scheduled_write(self) -> bool:
        return self._coalescer is not None and self._coalescer.is_scheduled

    # =========================================================================
    # Edit intents
    # =========================================================================

    def submit_edit(self, value: Any) -> bool:
        """
        Persist a new value with optimistic display.

        No-op when the value equals the authoritative value, when the
        controller is disposed, or (select mode) when a write is already
        pending or the value is empty.

        Returns:
            True if a persistence call was issued
        """
        if self._disposed:
            Log.debug(f"FieldSyncController: {self._accessor.key} submit after dispose ignored")
            return False

        if self._mode == FieldMode.SELECT:
            if not value:
                return False
            if self._pending is not None:
                Log.debug(f"FieldSyncController: {self._accessor.key} busy, edit ignored")
                return False

        if self._is_noop(value):
            return False

        return self._issue(value, self._entity)

    def edit_text(self, value: Any) -> None:
        """
        Apply a keystroke-level edit (text mode).

        The draft updates immediately; persistence is coalesced and sent once
        the quiet period elapses, against the entity current at this call.
        """
        if self._coalescer is None:
            raise RuntimeError(f"edit_text() requires a text-mode controller ({self._accessor.key})")
        if self._disposed:
            return

        self._set_draft(value)
        self._coalescer.schedule(value, self._entity)

    def commit_text(self) -> bool:
        """Send a coalesced edit now (e.g. on focus-out). Returns True if one was pending."""
        if self._coalescer is None or self._disposed:
            return False
        return self._coalescer.flush()

    def set_debounce_ms(self, debounce_ms: int) -> None:
        """Change the text quiet period; applies from the next keystroke."""
        if self._coalescer is not None:
            self._coalescer.set_interval(debounce_ms)

    # =========================================================================
    # Reconciliation
    # =========================================================================

    def reconcile(self, request: PendingRequest, outcome: ValidationOutcome) -> bool:
        """
        Apply the outcome of a persistence attempt.

        Only the first outcome for the latest request is applied; outcomes for
        superseded requests, duplicates, and anything after dispose() are
        discarded.

        Returns:
            True if the outcome changed controller state
        """
        if self._disposed:
            Log.debug(f"FieldSyncController: {self._accessor.key} discarding result #{request.request_id} after dispose")
            return False

        if request.settled:
            Log.debug(f"FieldSyncController: {self._accessor.key} duplicate result #{request.request_id} ignored")
            return False

        request.settled = True

        if request is not self._pending:
            Log.debug(f"FieldSyncController: {self._accessor.key} discarding stale result #{request.request_id}")
            return False

        self._pending = None
        queued = self._queued_entity
        self._queued_entity = None

        rejected = self._presenter.present(outcome)
        if rejected:
            self._settle_rejected(request, outcome, queued)
        else:
            self._settle_accepted(request, outcome)
        return True

    def _settle_accepted(self, request: PendingRequest, outcome: ValidationOutcome) -> None:
        confirmed = outcome.entity if outcome.entity is not None else request.entity
        self._entity = confirmed
        self._authoritative = self._accessor.read(confirmed)

        if self._option_cache is not None and self._mode == FieldMode.SELECT:
            self._option_cache.remember(self._accessor.kind.table, self._accessor.field_name, self._authoritative)

        Log.info(f"FieldSyncController: {self._accessor.key} saved for id={self._entity_id}")
        self.pending_changed.emit(False)
        self.entity_updated.emit(confirmed)

    def _settle_rejected(self, request: PendingRequest, outcome: ValidationOutcome, queued: Any) -> None:
        if queued is not None:
            self._entity = queued
            self._authoritative = self._accessor.read(queued)

        messages = outcome.messages()
        if outcome.is_transport_error:
            Log.error(f"FieldSyncController: {self._accessor.key} save failed for id={self._entity_id}: {outcome.error}")
        else:
            Log.warning(f"FieldSyncController: {self._accessor.key} rejected for id={self._entity_id}: {'; '.join(messages)}")

        # Newer keystrokes waiting in the coalescer are a new edit; keep them
        if not self.has_scheduled_write:
            self._set_draft(self._authoritative)

        self.pending_changed.emit(False)
        self.edit_failed.emit(messages)

    # =========================================================================
    # External updates and lifecycle
    # =========================================================================

    def set_entity(self, entity: Any) -> None:
        """
        Receive a new authoritative entity from the owning view.

        A different identity resets the draft immediately and abandons any
        in-flight or scheduled write. The same identity resynchronises the
        draft while idle, or is queued as the settle-time baseline while a
        write is pending.
        """
        if self._disposed or entity is None:
            return

        new_id = self._accessor.identity(entity)
        if new_id != self._entity_id:
            self._switch_entity(entity, new_id)
            return

        if self._pending is not None:
            Log.debug(f"FieldSyncController: {self._accessor.key} queued external update while pending")
            self._queued_entity = entity
            return

        self._entity = entity
        self._authoritative = self._accessor.read(entity)
        if not self.has_scheduled_write:
            self._set_draft(self._authoritative)

    def _switch_entity(self, entity: Any, new_id: Any) -> None:
        if self._coalescer is not None and self._coalescer.cancel():
            Log.debug(f"FieldSyncController: {self._accessor.key} dropped scheduled write for id={self._entity_id}")

        abandoned = self._pending
        self._pending = None
        self._queued_entity = None

        self._entity = entity
        self._entity_id = new_id
        self._authoritative = self._accessor.read(entity)
        self._set_draft(self._authoritative)

        if abandoned is not None:
            Log.debug(f"FieldSyncController: {self._accessor.key} abandoned request #{abandoned.request_id} on entity switch")
            self.pending_changed.emit(False)

    def dispose(self) -> None:
        """Tear down: cancel scheduled writes; later results are ignored."""
        if self._disposed:
            return
        if self._coalescer is not None:
            self._coalescer.dispose()
        self._disposed = True
        self._pending = None
        self._queued_entity = None
        Log.debug(f"FieldSyncController: {self._accessor.key} disposed")

    # =========================================================================
    # Internals
    # =========================================================================

    def _is_noop(self, value: Any) -> bool:
        if value != self._authoritative:
            return False
        # A text write returning to the stored value must still supersede an in-flight one
        return self._pending is None or self._pending.value == value

    def _issue(self, value: Any, base_entity: Any) -> bool:
        self._request_counter += 1
        request = PendingRequest(
            request_id=self._request_counter,
            value=value,
            entity=None,
            entity_id=self._entity_id,
        )

        superseded = self._pending
        self._pending = request
        self._set_draft(value)

        if superseded is None:
            self.pending_changed.emit(True)
        else:
            Log.debug(f"FieldSyncController: {self._accessor.key} request #{request.request_id} supersedes #{superseded.request_id}")

        if self._write_queue is None:
            self._start(request, base_entity)
        else:
            self._write_queue.enqueue(lambda: self._start(request, base_entity))
        return True

    def _start(self, request: PendingRequest, base_entity: Any) -> None:
        queue = self._write_queue
        if self._disposed or request is not self._pending:
            Log.debug(f"FieldSyncController: {self._accessor.key} request #{request.request_id} dropped before sending")
            if queue is not None:
                queue.release()
            return

        # Other fields come from the latest merged record, not the one seen at edit time
        base = base_entity
        if queue is not None:
            current = queue.record
            if self._accessor.identity(current) == request.entity_id:
                base = current

        entity = self._accessor.apply(base, request.value)
        request.entity = entity
        request.holds_queue = queue is not None

        gateway = self._gateway
        self._dispatcher.dispatch(
            lambda: gateway.update(entity),
            lambda outcome: self._on_outcome(request, outcome),
        )

    def _on_outcome(self, request: PendingRequest, outcome: ValidationOutcome) -> None:
        try:
            self.reconcile(request, outcome)
        finally:
            if request.holds_queue:
                request.holds_queue = False
                self._write_queue.release()

    def _on_coalesced(self, value: Any, context: Any) -> None:
        if self._disposed:
            return
        if self._accessor.identity(context) != self._entity_id:
            Log.debug(f"FieldSyncController: {self._accessor.key} coalesced write for another record dropped")
            return
        if self._is_noop(value):
            return
        self._issue(value, context)

    def _set_draft(self, value: Any) -> None:
        if value == self._draft:
            return
        self._draft = value
        Log.debug(f"FieldSyncController: Draft updated {self._accessor.key}")
        self.value_changed.emit(value)
