"""Unit tests for clock.daycycle.TimeOfDayScheduler"""

from datetime import datetime

import pytest

from puppycare.clock.daycycle import TimeOfDayScheduler
from puppycare.clock.scheduler import ManualScheduler


@pytest.fixture
def sched():
    return ManualScheduler()


def make_cycle(sched, now):
    return TimeOfDayScheduler(scheduler=sched, now=now, check_interval_s=60)


def test_start_syncs_to_wall_clock(sched, fake_now):
    fake_now.set(datetime(2025, 4, 20, 20, 0))
    cycle = make_cycle(sched, fake_now)
    cycle.start()
    assert cycle.is_daytime is False
    assert cycle.running


def test_boundary_hours(sched, fake_now):
    cycle = make_cycle(sched, fake_now)
    assert cycle.daytime_at(datetime(2025, 1, 1, 6, 0))
    assert cycle.daytime_at(datetime(2025, 1, 1, 17, 59))
    assert not cycle.daytime_at(datetime(2025, 1, 1, 18, 0))
    assert not cycle.daytime_at(datetime(2025, 1, 1, 5, 59))


def test_start_twice_keeps_one_timer(sched, fake_now):
    cycle = make_cycle(sched, fake_now)
    cycle.start()
    cycle.start()
    assert sched.active == 1


def test_stop_before_start_is_noop(sched, fake_now):
    cycle = make_cycle(sched, fake_now)
    cycle.stop()
    assert not cycle.running


def test_stop_cancels_timer(sched, fake_now):
    cycle = make_cycle(sched, fake_now)
    cycle.start()
    cycle.stop()
    cycle.stop()
    assert sched.active == 0
    assert not cycle.running


def test_timer_flips_at_sunset(sched, fake_now):
    fake_now.set(datetime(2025, 4, 20, 17, 59))
    cycle = make_cycle(sched, fake_now)
    changes = []
    cycle.on_change(changes.append)
    cycle.start()
    assert cycle.is_daytime

    fake_now.set(datetime(2025, 4, 20, 18, 0))
    sched.advance(60)
    assert cycle.is_daytime is False
    assert changes == [False]


def test_manual_toggle_holds_until_next_boundary(sched, fake_now):
    fake_now.set(datetime(2025, 4, 20, 10, 0))
    cycle = make_cycle(sched, fake_now)
    cycle.start()
    assert cycle.toggle() is False

    fake_now.advance(minutes=5)
    sched.advance(300)
    assert cycle.is_daytime is False

    fake_now.set(datetime(2025, 4, 20, 18, 0))
    sched.advance(60)
    assert cycle.is_daytime is False

    fake_now.set(datetime(2025, 4, 21, 6, 0))
    sched.advance(60)
    assert cycle.is_daytime is True


def test_set_fires_callback_only_on_change(sched, fake_now):
    cycle = make_cycle(sched, fake_now)
    changes = []
    cycle.on_change(changes.append)
    cycle.set(True)
    cycle.set(False)
    cycle.set(False)
    assert changes == [False]


def test_stopped_timer_does_not_flip(sched, fake_now):
    fake_now.set(datetime(2025, 4, 20, 17, 0))
    cycle = make_cycle(sched, fake_now)
    cycle.start()
    cycle.stop()
    fake_now.set(datetime(2025, 4, 20, 19, 0))
    sched.advance(600)
    assert cycle.is_daytime is True


def test_start_without_scheduler(fake_now):
    with pytest.raises(RuntimeError):
        TimeOfDayScheduler(now=fake_now).start()


def test_bad_window_rejected():
    with pytest.raises(ValueError):
        TimeOfDayScheduler(day_start_hour=20, night_start_hour=6)
