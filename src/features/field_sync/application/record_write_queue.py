"""
Record Write Queue

Serializes persistence calls for one record. Each write sends the whole
record, so two fields saved at the same time would each carry the other's
old value; the queue starts a write only after the previous one has settled
and merged, and lets the write read the freshest merged record at that moment.

Usage:
    queue = RecordWriteQueue(lambda: binding.record)
    queue.enqueue(start)      # start() runs now, or after the running write
    ...
    queue.release()           # from the running write's outcome handler
"""
from collections import deque
from typing import Any, Callable, Deque

from src.utils.message import Log


class RecordWriteQueue:
    """
    One-at-a-time gate for writes to a single record.

    Args:
        record_source: Returns the latest merged record
    """

    def __init__(self, record_source: Callable[[], Any]):
        self._record_source = record_source
        self._waiting: Deque[Callable[[], None]] = deque()
        self._busy = False
        self._pumping = False

    @property
    def record(self) -> Any:
        return self._record_source()

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def waiting_count(self) -> int:
        return len(self._waiting)

    def enqueue(self, start: Callable[[], None]) -> None:
        """
        Run start() when no other write is in flight.

        start() must end with exactly one release(), either once its outcome
        has been handled or straight away if it decides not to write.
        """
        self._waiting.append(start)
        if self._busy:
            Log.debug(f"RecordWriteQueue: Write queued behind running write ({len(self._waiting)} waiting)")
        self._pump()

    def release(self) -> None:
        """The running write has settled; start the next one."""
        self._busy = False
        self._pump()

    def _pump(self) -> None:
        # Inline dispatch releases from inside start(); the outer loop picks up the next write
        if self._pumping:
            return
        self._pumping = True
        try:
            while not self._busy and self._waiting:
                start = self._waiting.popleft()
                self._busy = True
                try:
                    start()
                except Exception:
                    self._busy = False
                    raise
        finally:
            self._pumping = False
