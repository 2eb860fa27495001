"""
Application layer for field synchronization.

Contains:
- FieldSyncController (optimistic per-field state machine)
- RecordBinding (sibling controllers over one record)
- RecordWriteQueue (one write at a time per record)
- DebounceCoalescer (keystroke coalescing)
- Update dispatchers (inline and QThread-backed)
- OptionCache (shared distinct-value suggestions)
- ValidationPresenter (turns outcomes into user messages)
"""
from src.features.field_sync.application.debounce_coalescer import DebounceCoalescer
from src.features.field_sync.application.update_dispatcher import (
    UpdateDispatcher,
    InlineUpdateDispatcher,
    ThreadedUpdateDispatcher,
    PersistenceThread,
    run_update_job,
)
from src.features.field_sync.application.validation_presenter import (
    ValidationPresenter,
    LEVEL_ERROR,
    LEVEL_WARNING,
)
from src.features.field_sync.application.option_cache import OptionCache
from src.features.field_sync.application.record_write_queue import RecordWriteQueue
from src.features.field_sync.application.field_sync_controller import (
    FieldSyncController,
    FieldMode,
    PendingRequest,
    DEFAULT_TEXT_DEBOUNCE_MS,
)
from src.features.field_sync.application.record_binding import RecordBinding

__all__ = [
    'DebounceCoalescer',
    'UpdateDispatcher',
    'InlineUpdateDispatcher',
    'ThreadedUpdateDispatcher',
    'PersistenceThread',
    'run_update_job',
    'ValidationPresenter',
    'LEVEL_ERROR',
    'LEVEL_WARNING',
    'OptionCache',
    'RecordWriteQueue',
    'FieldSyncController',
    'FieldMode',
    'PendingRequest',
    'DEFAULT_TEXT_DEBOUNCE_MS',
    'RecordBinding',
]
