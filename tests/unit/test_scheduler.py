"""Unit tests for clock.scheduler"""

import time

import pytest

from puppycare.clock.scheduler import ManualScheduler, ThreadScheduler


def test_manual_fires_per_interval():
    sched = ManualScheduler()
    calls = []
    sched.call_every(0.3, lambda: calls.append(sched.now))
    sched.advance(0.9)
    assert len(calls) == 3
    assert calls[0] == pytest.approx(0.3)


def test_manual_partial_advance_accumulates():
    sched = ManualScheduler()
    calls = []
    sched.call_every(1.0, lambda: calls.append(1))
    sched.advance(0.6)
    assert calls == []
    sched.advance(0.6)
    assert calls == [1]


def test_manual_interleaves_jobs_in_due_order():
    sched = ManualScheduler()
    order = []
    sched.call_every(1.0, lambda: order.append("slow"))
    sched.call_every(0.4, lambda: order.append("fast"))
    sched.advance(1.2)
    assert order == ["fast", "fast", "slow", "fast"]


def test_manual_cancel_is_idempotent():
    sched = ManualScheduler()
    calls = []
    h = sched.call_every(0.1, lambda: calls.append(1))
    sched.cancel(h)
    sched.cancel(h)
    sched.cancel(None)
    sched.advance(1.0)
    assert calls == []
    assert sched.active == 0


def test_callback_may_cancel_itself():
    sched = ManualScheduler()
    calls = []
    handle = {}

    def once():
        calls.append(1)
        sched.cancel(handle["h"])

    handle["h"] = sched.call_every(0.1, once)
    sched.advance(1.0)
    assert calls == [1]


@pytest.mark.parametrize("sched_cls", [ManualScheduler, ThreadScheduler])
def test_rejects_non_positive_interval(sched_cls):
    with pytest.raises(ValueError):
        sched_cls().call_every(0, lambda: None)


def test_thread_callbacks_run_only_on_drain():
    sched = ThreadScheduler()
    calls = []
    sched.call_every(0.01, lambda: calls.append(1))
    try:
        time.sleep(0.05)
        assert calls == []
        assert sched.drain(timeout=1.0) >= 1
        assert calls
    finally:
        sched.shutdown()


def test_thread_cancel_drops_queued_callbacks():
    sched = ThreadScheduler()
    calls = []
    h = sched.call_every(0.01, lambda: calls.append(1))
    time.sleep(0.05)
    sched.cancel(h)
    assert sched.drain(timeout=0) == 0
    assert calls == []
    assert sched.active == 0


def test_thread_shutdown_stops_everything():
    sched = ThreadScheduler()
    sched.call_every(0.05, lambda: None)
    sched.call_every(0.05, lambda: None)
    sched.shutdown()
    assert sched.active == 0
