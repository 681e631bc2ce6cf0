"""
needs/waste.py

Poop counter. Grows over time (Poisson arrivals at a fixed hourly rate),
optionally on feeding, and drops to zero when cleaned.
"""

import logging
from dataclasses import dataclass

import numpy as np

log = logging.getLogger(__name__)

MAX_WASTE = 10


@dataclass(frozen=True)
class WasteSnapshot:
    count: int


class WasteAccumulator:

    def __init__(self, rate_per_hour: float = 1.0, max_waste: int = MAX_WASTE,
                 spawn_chance_per_feed: float = 0.0, count: int = 0,
                 rng=None, **_):
        self._rate      = rate_per_hour
        self._max       = max_waste
        self._feed_odds = spawn_chance_per_feed
        self._rng       = rng if rng is not None else np.random.default_rng()
        self._count     = max(0, min(int(count), max_waste))

    @property
    def count(self) -> int:
        return self._count

    @property
    def max_waste(self) -> int:
        return self._max

    def restore(self, count: int):
        self._count = max(0, min(int(count), self._max))

    def tick_spawn(self, elapsed_s: float, hunger: float = 0.0) -> int:
        """
        Add waste for elapsed_s seconds of pet time. Hunger is accepted so
        callers can pass the current needs, but does not change the rate.
        Returns the number of units added.
        """
        if elapsed_s <= 0 or self._count >= self._max:
            return 0
        expected = self._rate * elapsed_s / 3600.0
        added = min(int(self._rng.poisson(expected)), self._max - self._count)
        if added:
            self._count += added
            log.debug("waste spawned +%d -> %d", added, self._count)
        return added

    def on_feed(self) -> int:
        if self._feed_odds <= 0 or self._count >= self._max:
            return 0
        if self._rng.random() < self._feed_odds:
            self._count += 1
            log.debug("waste after feeding -> %d", self._count)
            return 1
        return 0

    def clean(self) -> int:
        """Remove all waste; returns how many units were removed."""
        removed = self._count
        self._count = 0
        return removed

    def snapshot(self) -> WasteSnapshot:
        return WasteSnapshot(count=self._count)
