"""
Shared pytest configuration.

Runs Qt offscreen, keeps test runs out of the log directory, and provides
the fakes used by the field sync tests.
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("WORKSDESK_FILE_LOGGING", "0")

import pytest

from src.features.field_sync.application.update_dispatcher import UpdateDispatcher, run_update_job


class FakeQTimer:
    """Minimal QTimer stand-in for unit tests."""

    def __init__(self):
        self._single_shot = False
        self._interval = 0
        self._active = False
        self._callback = None
        self.start_count = 0

    def setSingleShot(self, val):
        self._single_shot = val

    def start(self, ms):
        self._interval = ms
        self._active = True
        self.start_count += 1

    def isActive(self):
        return self._active

    def stop(self):
        self._active = False

    def interval(self):
        return self._interval

    def fire(self):
        """Simulate timer expiry."""
        if not self._active:
            return
        self._active = False
        if self._callback:
            self._callback()

    @property
    def timeout(self):
        """Return an object with .connect()."""
        parent = self

        class _Sig:
            def connect(self, cb):
                parent._callback = cb

            def disconnect(self):
                parent._callback = None

        return _Sig()


class ManualUpdateDispatcher(UpdateDispatcher):
    """Holds dispatched jobs until the test resolves them, in any order."""

    def __init__(self):
        self.calls = []
        self.resolved = set()

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def dispatch(self, job, on_outcome):
        self.calls.append((job, on_outcome))

    def resolve(self, index: int = 0, outcome=None):
        """Complete call #index with outcome, or with the job's real result."""
        job, on_outcome = self.calls[index]
        self.resolved.add(index)
        on_outcome(outcome if outcome is not None else run_update_job(job))

    def resolve_all(self):
        """Complete every unresolved call, including ones dispatched meanwhile."""
        index = 0
        while index < len(self.calls):
            if index not in self.resolved:
                self.resolve(index)
            index += 1


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Ensure QApplication exists for timers, threads and widgets."""
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def fake_timers():
    """Timer factory producing FakeQTimers; created timers are in .timers."""
    timers = []

    def factory():
        timer = FakeQTimer()
        timers.append(timer)
        return timer

    factory.timers = timers
    return factory


@pytest.fixture
def manual_dispatcher():
    return ManualUpdateDispatcher()
