"""
Debounce Coalescer

Collapses bursts of rapid edits (typing) into a single trailing call.

Each schedule() replaces the pending (value, context) pair and restarts the
quiet-period timer. When the timer elapses without another schedule(), the
sink runs exactly once with the last pair. cancel() discards the pending call
without running the sink.

Usage:
    coalescer = DebounceCoalescer(500, lambda value, book: save(value, book))
    coalescer.schedule("F", book)
    coalescer.schedule("Fo", book)
    coalescer.schedule("For", book)   # only this one reaches the sink
"""
from typing import Any, Callable, Optional, Tuple

from PyQt6.QtCore import QObject, QTimer

from src.utils.message import Log


class DebounceCoalescer(QObject):
    """
    Single-slot, cancellable trailing-edge debounce on a single-shot QTimer.

    Args:
        interval_ms: Quiet period in milliseconds
        sink: Called as sink(value, context) when the quiet period elapses
        timer_factory: Builds the timer (defaults to a QTimer parented to this object)
        parent: Parent QObject
    """

    def __init__(
        self,
        interval_ms: int,
        sink: Callable[[Any, Any], None],
        timer_factory: Optional[Callable[[], Any]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        if interval_ms < 0:
            raise ValueError("interval_ms must be >= 0")

        self._interval_ms = interval_ms
        self._sink = sink
        self._slot: Optional[Tuple[Any, Any]] = None
        self._disposed = False

        self._timer = timer_factory() if timer_factory else QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def set_interval(self, interval_ms: int) -> None:
        """Change the quiet period; applies from the next schedule()."""
        if interval_ms < 0:
            raise ValueError("interval_ms must be >= 0")
        self._interval_ms = interval_ms

    @property
    def is_scheduled(self) -> bool:
        return self._slot is not None

    def schedule(self, value: Any, context: Any = None) -> None:
        """Replace the pending call with (value, context) and restart the quiet period."""
        if self._disposed:
            Log.debug("DebounceCoalescer: schedule() after dispose ignored")
            return

        rescheduled = self._slot is not None
        self._slot = (value, context)
        self._timer.start(self._interval_ms)
        if rescheduled:
            Log.debug("DebounceCoalescer: Rescheduled pending call")

    def cancel(self) -> bool:
        """
        Discard the pending call without running the sink.

        Returns:
            True if a call was pending
        """
        self._timer.stop()
        had_pending = self._slot is not None
        self._slot = None
        return had_pending

    def flush(self) -> bool:
        """
        Run the pending call now instead of waiting for the quiet period.

        Returns:
            True if the sink ran
        """
        if self._slot is None:
            return False
        self._timer.stop()
        return self._deliver()

    def dispose(self) -> None:
        """Cancel any pending call; later schedule() calls are ignored."""
        self.cancel()
        self._disposed = True

    def _on_timeout(self) -> None:
        self._deliver()

    def _deliver(self) -> bool:
        if self._slot is None or self._disposed:
            return False

        value, context = self._slot
        self._slot = None
        try:
            self._sink(value, context)
        except Exception as e:
            Log.error(f"DebounceCoalescer: Sink raised: {e}", exc_info=True)
        return True
