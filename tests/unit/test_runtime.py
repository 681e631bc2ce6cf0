"""Unit tests for puppycare.runtime"""

import sys

import pytest

from puppycare.runtime import Runtime, main


@pytest.fixture
def rt():
    runtime = Runtime(seed=1)
    yield runtime
    runtime.stop()


def test_start_greets_and_schedules(rt):
    rt.start()
    assert rt.running
    assert rt.scheduler.active == 2
    assert rt.engine.session.response.key == "greeting.generic"


def test_start_twice_keeps_two_timers(rt):
    rt.start()
    rt.start()
    assert rt.scheduler.active == 2


def test_pump_ticks_engine(rt):
    ticks = []
    rt.engine.tick = lambda: ticks.append(1)
    rt.start()
    rt.pump(0.9)
    assert len(ticks) == 3


def test_stop_is_idempotent(rt):
    rt.start()
    rt.stop()
    rt.stop()
    assert not rt.running
    assert rt.scheduler.active == 0


def test_threaded_start_stop():
    runtime = Runtime(threaded=True, seed=1)
    runtime.start()
    assert runtime.scheduler.active == 2
    runtime.stop()
    assert runtime.scheduler.active == 0


def test_main_rejects_missing_config(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "argv",
                        ["puppycare", "--config", str(tmp_path / "nope.yaml")])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1
