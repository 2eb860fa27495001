"""
Unit tests for DebounceCoalescer.

Bursts of schedule() calls collapse into one trailing sink call carrying the
last (value, context) pair; cancel() and dispose() drop the pending call.
"""
import time

import pytest

from src.features.field_sync.application.debounce_coalescer import DebounceCoalescer


@pytest.fixture
def sink_calls():
    return []


@pytest.fixture
def coalescer(fake_timers, sink_calls):
    return DebounceCoalescer(500, lambda v, c: sink_calls.append((v, c)), timer_factory=fake_timers)


class TestDebounceCoalescer:
    """Scheduling, cancellation and delivery."""

    def test_single_schedule_delivers_after_quiet_period(self, coalescer, fake_timers, sink_calls):
        coalescer.schedule("F", "book-1")
        assert sink_calls == []
        assert coalescer.is_scheduled

        fake_timers.timers[0].fire()

        assert sink_calls == [("F", "book-1")]
        assert not coalescer.is_scheduled

    def test_burst_collapses_to_last_value_and_context(self, coalescer, fake_timers, sink_calls):
        """v1 then v2 inside the quiet period: one call with v2 and its own context."""
        timer = fake_timers.timers[0]
        coalescer.schedule("v1", "ctx-1")
        coalescer.schedule("v2", "ctx-2")

        assert timer.start_count == 2
        assert timer.interval() == 500

        timer.fire()
        assert sink_calls == [("v2", "ctx-2")]

    def test_spaced_schedules_deliver_each(self, coalescer, fake_timers, sink_calls):
        timer = fake_timers.timers[0]
        coalescer.schedule("v1", "ctx")
        timer.fire()
        coalescer.schedule("v2", "ctx")
        timer.fire()

        assert sink_calls == [("v1", "ctx"), ("v2", "ctx")]

    def test_cancel_drops_pending_call(self, coalescer, fake_timers, sink_calls):
        coalescer.schedule("v1")
        assert coalescer.cancel() is True

        fake_timers.timers[0].fire()
        assert sink_calls == []
        assert coalescer.cancel() is False

    def test_flush_delivers_immediately(self, coalescer, fake_timers, sink_calls):
        coalescer.schedule("v1", "ctx")
        assert coalescer.flush() is True
        assert sink_calls == [("v1", "ctx")]
        assert not fake_timers.timers[0].isActive()
        assert coalescer.flush() is False

    def test_dispose_cancels_and_ignores_later_schedules(self, coalescer, fake_timers, sink_calls):
        coalescer.schedule("v1")
        coalescer.dispose()
        coalescer.schedule("v2")

        fake_timers.timers[0].fire()
        assert sink_calls == []
        assert not coalescer.is_scheduled

    def test_sink_exception_is_contained(self, fake_timers):
        def boom(value, context):
            raise RuntimeError("sink failed")

        coalescer = DebounceCoalescer(100, boom, timer_factory=fake_timers)
        coalescer.schedule("v1")
        fake_timers.timers[0].fire()

        assert not coalescer.is_scheduled

    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError):
            DebounceCoalescer(-1, lambda v, c: None)

    def test_set_interval_applies_to_next_schedule(self, coalescer, fake_timers):
        coalescer.set_interval(800)
        coalescer.schedule("v1")
        assert fake_timers.timers[0].interval() == 800


class TestDebounceCoalescerWithQTimer:
    """Smoke test against a real single-shot QTimer."""

    def test_real_timer_delivers_last_value(self, qapp):
        calls = []
        coalescer = DebounceCoalescer(20, lambda v, c: calls.append(v))
        coalescer.schedule("a")
        coalescer.schedule("ab")

        deadline = time.monotonic() + 2.0
        while not calls and time.monotonic() < deadline:
            qapp.processEvents()
            time.sleep(0.005)

        assert calls == ["ab"]
