"""
behavior.machine
================
AnimationStateMachine: decides, tick by tick, what the puppy is doing.

States:
    busy   EATING, PLAYING, PETTING     entered by command only, held for a
                                        fixed number of ticks
    mood   HAPPY, SAD, HUNGRY, SLEEPING expire after mood_s, then re-decide
    free   IDLE, WALKING                thresholds checked every tick

Decision policy (decide_state), first match wins:
    hunger < 20            -> HUNGRY
    happiness < 20         -> SAD
    waste >= 3             -> SAD
    roll in [0, 100]:
        0-49               -> WALKING
        50-64              -> HAPPY
        65-84              -> IDLE
        85-89              -> HUNGRY if hunger < 70, else IDLE
        90-100             -> IDLE
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

import numpy as np

from .walk import WalkMotion

log = logging.getLogger(__name__)


class AnimationState(Enum):
    IDLE     = "idle"
    WALKING  = "walking"
    EATING   = "eating"
    PLAYING  = "playing"
    SLEEPING = "sleeping"
    HAPPY    = "happy"
    SAD      = "sad"
    HUNGRY   = "hungry"
    PETTING  = "petting"


class FoodType(Enum):
    WEIRD_DOG_FOOD = "weird_dog_food"
    DOG_FOOD       = "dog_food"
    TREAT          = "treat"
    TASTY_MEAT     = "tasty_meat"


BUSY_STATES = frozenset({
    AnimationState.EATING, AnimationState.PLAYING, AnimationState.PETTING,
})
MOOD_STATES = frozenset({
    AnimationState.HAPPY, AnimationState.SAD,
    AnimationState.HUNGRY, AnimationState.SLEEPING,
})

HUNGRY_BELOW  = 20.0
SAD_BELOW     = 20.0
WASTE_SAD_AT  = 3
PECKISH_BELOW = 70.0
PLAY_FLIP_TICKS = 10


def threshold_state(hunger: float, happiness: float,
                    waste: int) -> Optional[AnimationState]:
    if hunger < HUNGRY_BELOW:
        return AnimationState.HUNGRY
    if happiness < SAD_BELOW:
        return AnimationState.SAD
    if waste >= WASTE_SAD_AT:
        return AnimationState.SAD
    return None


def roll_state(roll: int, hunger: float) -> AnimationState:
    if roll < 50:
        return AnimationState.WALKING
    if roll < 65:
        return AnimationState.HAPPY
    if roll < 85:
        return AnimationState.IDLE
    if roll < 90 and hunger < PECKISH_BELOW:
        return AnimationState.HUNGRY
    return AnimationState.IDLE


def decide_state(hunger: float, happiness: float, waste: int,
                 rng) -> AnimationState:
    """Thresholds first; otherwise one uniform draw from [0, 100]."""
    forced = threshold_state(hunger, happiness, waste)
    if forced is not None:
        return forced
    return roll_state(int(rng.integers(0, 101)), hunger)


@dataclass(frozen=True)
class AnimationSnapshot:
    state:          AnimationState
    ticks_in_state: int
    variant:        Optional[FoodType]
    frame:          int
    bounce:         bool
    x:              float
    direction:      int


class AnimationStateMachine:
    """
    Reads needs and waste, never writes them.

    Example
    -------
    machine = AnimationStateMachine(needs, waste, rng=np.random.default_rng(1))
    machine.enter_busy(AnimationState.EATING, variant=FoodType.TREAT)
    machine.advance(0.3)     # one tick, still EATING
    machine.advance(6.0)     # sticky time is up, policy picks the next state
    """

    def __init__(self, needs, waste, rng=None,
                 is_night: Optional[Callable[[], bool]] = None,
                 tick_s: float = 0.3, eating_s: float = 6.0,
                 playing_s: float = 6.0, petting_s: float = 3.0,
                 mood_s: float = 3.0, idle_s: float = 3.0,
                 walk_chance: float = 0.6, walk_stop_chance: float = 1 / 31,
                 sleep_at_night: bool = True, **walk_cfg):
        if tick_s <= 0:
            raise ValueError(f"tick_s must be positive, got {tick_s!r}")
        self._needs = needs
        self._waste = waste
        self._rng   = rng if rng is not None else np.random.default_rng()
        self._is_night = is_night or (lambda: False)
        self.tick_s = tick_s

        self._hold = {
            AnimationState.EATING:  self._ticks(eating_s),
            AnimationState.PLAYING: self._ticks(playing_s),
            AnimationState.PETTING: self._ticks(petting_s),
        }
        self._mood_ticks = self._ticks(mood_s)
        self._idle_ticks = self._ticks(idle_s)
        self._walk_chance = walk_chance
        self._stop_chance = walk_stop_chance
        self._sleep_at_night = sleep_at_night

        self.walk = WalkMotion(rng=self._rng, **walk_cfg)
        self._state = AnimationState.IDLE
        self._counter = 0
        self._carry = 0.0
        self._variant: Optional[FoodType] = None
        self._bounce = False
        self._callbacks: List[Callable[[AnimationState, AnimationState], None]] = []

    def _ticks(self, seconds: float) -> int:
        return max(1, int(round(seconds / self.tick_s)))

    # ------------------------------------------------------------------

    def on_transition(self, fn):
        self._callbacks.append(fn)
        return fn

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state in BUSY_STATES

    def hold_ticks(self, state: AnimationState) -> int:
        """Minimum ticks a state is held before the next decision."""
        if state in self._hold:
            return self._hold[state]
        if state in MOOD_STATES:
            return self._mood_ticks
        return self._idle_ticks

    # ------------------------------------------------------------------

    def enter_busy(self, state: AnimationState, variant: Optional[FoodType] = None):
        """Force a busy state. Re-entering the same state restarts its timer."""
        if state not in BUSY_STATES:
            raise ValueError(f"{state} is not a busy state")
        self._variant = variant if state is AnimationState.EATING else None
        self._bounce = state is AnimationState.PETTING
        self._set(state)

    def redecide(self):
        """Run the policy now unless a busy state holds the machine."""
        if not self.busy:
            self._set(self._decide())

    def advance(self, elapsed_s: float) -> AnimationState:
        """Run as many whole ticks as elapsed_s covers; keeps the remainder."""
        self._carry += max(0.0, elapsed_s)
        steps = int(self._carry / self.tick_s + 1e-6)
        self._carry = max(0.0, self._carry - steps * self.tick_s)
        for _ in range(steps):
            self.step()
        return self._state

    def step(self) -> AnimationState:
        self._counter += 1
        self._bounce = False
        state = self._state

        if state in BUSY_STATES:
            if self._counter >= self._hold[state]:
                self._set(self._decide())
        elif state in MOOD_STATES:
            if self._counter >= self._mood_ticks:
                self._set(self._decide())
        else:
            forced = threshold_state(self._needs.hunger, self._needs.happiness,
                                     self._waste.count)
            if forced is not None:
                self._set(forced)
            elif state is AnimationState.WALKING:
                self.walk.step()
                if self._rng.random() < self._stop_chance:
                    self._set(AnimationState.IDLE)
            elif self._counter >= self._idle_ticks:
                self._set(self._after_idle())
        return self._state

    # ------------------------------------------------------------------

    def _after_idle(self) -> AnimationState:
        if self._sleep_at_night and self._is_night():
            return AnimationState.SLEEPING
        if self._rng.random() < self._walk_chance:
            return AnimationState.WALKING
        return self._decide()

    def _decide(self) -> AnimationState:
        return decide_state(self._needs.hunger, self._needs.happiness,
                            self._waste.count, self._rng)

    def _set(self, new_state: AnimationState):
        old = self._state
        self._state = new_state
        self._counter = 0
        if new_state is not AnimationState.EATING:
            self._variant = None
        if new_state != old:
            log.debug("animation %s -> %s", old.value, new_state.value)
            for cb in self._callbacks:
                cb(old, new_state)

    def snapshot(self) -> AnimationSnapshot:
        frame = 1
        if self._state is AnimationState.PLAYING and self._counter < PLAY_FLIP_TICKS:
            frame = 1 + self._counter % 2
        return AnimationSnapshot(
            state=self._state,
            ticks_in_state=self._counter,
            variant=self._variant,
            frame=frame,
            bounce=self._bounce,
            x=self.walk.x,
            direction=self.walk.direction,
        )
