"""
needs/model.py

Hunger and happiness scalars for the pet. Both live in [0, 100]; hunger
reads as a fullness gauge (100 = just fed, 0 = starving). Care actions
push the values up, elapsed time wears them down.
"""

import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)

NEED_MIN = 0.0
NEED_MAX = 100.0


def _clamp(value: float) -> float:
    return max(NEED_MIN, min(NEED_MAX, value))


def need_level(value: float) -> str:
    """Semantic gauge bucket for the presentation layer."""
    if value < 30:
        return "low"
    if value < 70:
        return "medium"
    return "high"


@dataclass(frozen=True)
class NeedsSnapshot:
    hunger:    float
    happiness: float

    @property
    def hunger_level(self) -> str:
        return need_level(self.hunger)

    @property
    def happiness_level(self) -> str:
        return need_level(self.happiness)


class NeedsModel:
    """
    Owns the hunger/happiness pair and its boost and decay rules.

    Example
    -------
    needs = NeedsModel(hunger=50, happiness=50, decay_per_minute=1.0)
    needs.feed()            # 80.0
    needs.decay(120)        # two minutes pass
    needs.snapshot()
    # NeedsSnapshot(hunger=78.0, happiness=48.0)
    """

    FEED_AMOUNT = 30.0
    PLAY_AMOUNT = 15.0
    PET_AMOUNT  = 5.0

    def __init__(self, hunger: float = 50.0, happiness: float = 50.0,
                 feed_amount: float = FEED_AMOUNT,
                 play_amount: float = PLAY_AMOUNT,
                 pet_amount: float = PET_AMOUNT,
                 decay_per_minute: float = 1.0,
                 full_threshold: float = 90.0, **_):
        self._hunger    = _clamp(float(hunger))
        self._happiness = _clamp(float(happiness))
        self._feed_amount  = feed_amount
        self._play_amount  = play_amount
        self._pet_amount   = pet_amount
        self._decay_rate   = decay_per_minute / 60.0   # per second
        self.full_threshold = full_threshold

    @property
    def hunger(self) -> float:
        return self._hunger

    @hunger.setter
    def hunger(self, value: float):
        self._hunger = _clamp(float(value))

    @property
    def happiness(self) -> float:
        return self._happiness

    @happiness.setter
    def happiness(self, value: float):
        self._happiness = _clamp(float(value))

    @property
    def is_full(self) -> bool:
        return self._hunger >= self.full_threshold

    def feed(self, food_type=None) -> float:
        # food_type picks the eating animation only; the gain is flat
        self.hunger = self._hunger + self._feed_amount
        log.debug("feed food=%s hunger -> %.1f", food_type, self._hunger)
        return self._hunger

    def play(self) -> float:
        self.happiness = self._happiness + self._play_amount
        log.debug("play happiness -> %.1f", self._happiness)
        return self._happiness

    def pet(self) -> float:
        self.happiness = self._happiness + self._pet_amount
        log.debug("pet happiness -> %.1f", self._happiness)
        return self._happiness

    def adjust_happiness(self, delta: float) -> float:
        self.happiness = self._happiness + delta
        return self._happiness

    def decay(self, elapsed_s: float):
        """Linear wear-down; splitting elapsed_s across calls sums the same."""
        if elapsed_s <= 0:
            return
        amount = self._decay_rate * elapsed_s
        self.hunger    = self._hunger - amount
        self.happiness = self._happiness - amount

    def snapshot(self) -> NeedsSnapshot:
        return NeedsSnapshot(hunger=round(self._hunger, 4),
                             happiness=round(self._happiness, 4))
