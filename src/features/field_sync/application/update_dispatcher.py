"""
Update Dispatchers

Run a gateway update for a field controller and hand the outcome back.

Two strategies:
- InlineUpdateDispatcher: runs the call on the caller's thread
- ThreadedUpdateDispatcher: runs each call in a PersistenceThread (QThread) so
  the UI stays responsive; the outcome is delivered on the GUI thread through
  a queued signal, keeping reconciliation single-threaded

In both cases a raising gateway produces a transport-failure outcome; the
exception never reaches the caller.
"""
from typing import Any, Callable, Set

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from src.features.field_sync.domain.validation_outcome import ValidationOutcome
from src.utils.message import Log


UpdateJob = Callable[[], ValidationOutcome]
OutcomeCallback = Callable[[ValidationOutcome], None]


def run_update_job(job: UpdateJob) -> ValidationOutcome:
    """Execute a job, converting exceptions and malformed results into outcomes."""
    try:
        outcome = job()
    except Exception as e:
        Log.error(f"UpdateDispatcher: Persistence call failed: {e}")
        return ValidationOutcome.transport_failure(e)

    if not isinstance(outcome, ValidationOutcome):
        error = TypeError(f"gateway returned {type(outcome).__name__}, expected ValidationOutcome")
        Log.error(f"UpdateDispatcher: {error}")
        return ValidationOutcome.transport_failure(error)

    return outcome


class UpdateDispatcher:
    """Strategy for executing one persistence call."""

    def dispatch(self, job: UpdateJob, on_outcome: OutcomeCallback) -> None:
        """
        Run job and call on_outcome with its ValidationOutcome exactly once.

        Args:
            job: Zero-argument callable performing the gateway update
            on_outcome: Receives the outcome (on the GUI thread)
        """
        raise NotImplementedError


class InlineUpdateDispatcher(UpdateDispatcher):
    """Runs the gateway call synchronously on the calling thread."""

    def dispatch(self, job: UpdateJob, on_outcome: OutcomeCallback) -> None:
        on_outcome(run_update_job(job))


class PersistenceThread(QThread):
    """
    Runs one gateway update in a background thread.

    Emits outcome_ready(ValidationOutcome) from the worker thread when done.
    """

    outcome_ready = pyqtSignal(object)

    def __init__(self, job: UpdateJob, parent=None):
        super().__init__(parent)
        if job is None:
            raise ValueError("job is required for PersistenceThread")
        self._job = job

    def run(self):
        self.outcome_ready.emit(run_update_job(self._job))


class _UpdateRelay(QObject):
    """
    Lives on the dispatcher's (GUI) thread; its slots receive the worker's
    signals through queued connections.
    """

    def __init__(self, dispatcher: 'ThreadedUpdateDispatcher', thread: PersistenceThread,
                 on_outcome: OutcomeCallback):
        super().__init__(dispatcher)
        self._dispatcher = dispatcher
        self.worker = thread
        self._on_outcome = on_outcome

    @pyqtSlot(object)
    def deliver(self, outcome: Any) -> None:
        try:
            self._on_outcome(outcome)
        except Exception as e:
            Log.error(f"ThreadedUpdateDispatcher: Outcome handler raised: {e}", exc_info=True)

    @pyqtSlot()
    def release(self) -> None:
        self._dispatcher._release(self)


class ThreadedUpdateDispatcher(QObject, UpdateDispatcher):
    """
    Dispatches each update to its own PersistenceThread.

    Running threads stay referenced until they finish.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._relays: Set[_UpdateRelay] = set()

    @property
    def active_count(self) -> int:
        return len(self._relays)

    def dispatch(self, job: UpdateJob, on_outcome: OutcomeCallback) -> None:
        thread = PersistenceThread(job)
        relay = _UpdateRelay(self, thread, on_outcome)
        self._relays.add(relay)

        thread.outcome_ready.connect(relay.deliver)
        thread.finished.connect(relay.release)
        thread.start()

    def wait_all(self, timeout_ms: int = 5000) -> bool:
        """Block until all running updates finish (shutdown and tests)."""
        return all(relay.worker.wait(timeout_ms) for relay in list(self._relays))

    def _release(self, relay: _UpdateRelay) -> None:
        self._relays.discard(relay)
        relay.worker.deleteLater()
        relay.deleteLater()
