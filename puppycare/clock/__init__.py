"""
clock/
Timers, the day/night flag and interaction timestamps.
"""
from .scheduler import ManualScheduler, ThreadScheduler
from .daycycle import TimeOfDayScheduler
from .interaction import InteractionClock, EngineClock

__all__ = [
    "ManualScheduler", "ThreadScheduler", "TimeOfDayScheduler",
    "InteractionClock", "EngineClock",
]
