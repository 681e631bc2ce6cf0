"""
clock.daycycle
==============
Day/night flag driven by the local wall clock.

Rule: hours in [day_start_hour, night_start_hour) are day, the rest night.
The periodic check is edge-triggered: it rewrites the flag only when the
wall clock crosses a boundary, so a manual toggle()/set() holds until the
next sunrise or sunset.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

log = logging.getLogger(__name__)


class TimeOfDayScheduler:
    """
    Usage:
        cycle = TimeOfDayScheduler(scheduler=sched, day_start_hour=6,
                                   night_start_hour=18, check_interval_s=60)

        @cycle.on_change
        def handler(is_daytime):
            print("day" if is_daytime else "night")

        cycle.start()
        ...
        cycle.stop()
    """

    def __init__(self, scheduler=None, now: Optional[Callable[[], datetime]] = None,
                 day_start_hour: int = 6, night_start_hour: int = 18,
                 check_interval_s: float = 60.0, is_daytime: bool = True, **_):
        if not 0 <= day_start_hour < night_start_hour <= 24:
            raise ValueError(
                f"bad day window: {day_start_hour}..{night_start_hour}")
        self._scheduler = scheduler
        self._now       = now or datetime.now
        self._day_start = day_start_hour
        self._night_start = night_start_hour
        self._interval  = check_interval_s
        self._is_daytime = bool(is_daytime)
        self._last_seen: Optional[bool] = None
        self._handle = None
        self._callbacks: List[Callable[[bool], None]] = []

    # ------------------------------------------------------------------

    def on_change(self, fn: Callable[[bool], None]) -> Callable[[bool], None]:
        self._callbacks.append(fn)
        return fn

    @property
    def is_daytime(self) -> bool:
        return self._is_daytime

    @property
    def running(self) -> bool:
        return self._handle is not None

    def daytime_at(self, when: datetime) -> bool:
        return self._day_start <= when.hour < self._night_start

    # ------------------------------------------------------------------

    def start(self):
        """Sync the flag to the wall clock and (re)install the timer."""
        if self._scheduler is None:
            raise RuntimeError("TimeOfDayScheduler has no scheduler attached")
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
        self._last_seen = self.daytime_at(self._now())
        self._set(self._last_seen)
        self._handle = self._scheduler.call_every(self._interval, self._check)
        log.info("day/night timer started (every %.0fs)", self._interval)

    def stop(self):
        if self._handle is None:
            return
        self._scheduler.cancel(self._handle)
        self._handle = None
        log.info("day/night timer stopped")

    def toggle(self) -> bool:
        self._set(not self._is_daytime)
        return self._is_daytime

    def set(self, is_daytime: bool):
        self._set(bool(is_daytime))

    # ------------------------------------------------------------------

    def _check(self):
        current = self.daytime_at(self._now())
        if current != self._last_seen:
            self._last_seen = current
            self._set(current)

    def _set(self, value: bool):
        if value == self._is_daytime:
            return
        self._is_daytime = value
        log.debug("time of day -> %s", "day" if value else "night")
        for cb in self._callbacks:
            cb(value)
