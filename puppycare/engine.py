"""
puppycare.engine
================
PetEngine: the single owner of the puppy's state. The host issues
commands and ticks; every command answers with a CommandResult so a
refused action never turns into an exception on the host side.

Example
-------
engine = PetEngine(config=load_config("config.yaml"))
engine.save_owner_name("Ada")
res = engine.feed(FoodType.TREAT)
# CommandResult(ok=True, value=NeedsSnapshot(hunger=80.0, happiness=50.0))
engine.tick(0.3)
# <AnimationState.EATING: 'eating'>
record = engine.to_record()      # hand to whatever storage the host uses
"""

import copy
import inspect
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional, Tuple

import numpy as np

from .behavior.machine import (
    AnimationSnapshot, AnimationState, AnimationStateMachine, FoodType,
    WASTE_SAD_AT,
)
from .clock.daycycle import TimeOfDayScheduler
from .clock.interaction import EngineClock, InteractionClock
from .config import DEFAULT_CONFIG, merge_config
from .conversation.engine import (
    ConversationChoice, ConversationEngine, ConversationSession, Utterance,
)
from .errors import CorruptedProfile, InvalidCommand, PuppyCareError
from .minigames import outcome_delta
from .needs.model import NeedsModel, NeedsSnapshot
from .needs.waste import WasteAccumulator, WasteSnapshot
from .profile import PetProfile

log = logging.getLogger(__name__)

RECORD_VERSION = 1


@dataclass(frozen=True)
class CommandResult:
    ok:    bool
    value: Any = None
    error: Optional[PuppyCareError] = None


@dataclass(frozen=True)
class EngineSnapshot:
    name:          Optional[str]
    owner_name:    Optional[str]
    adoption_date: Optional[date]
    days_together: int
    needs:         NeedsSnapshot
    waste:         WasteSnapshot
    animation:     AnimationSnapshot
    is_daytime:    bool
    offered:       Tuple[str, ...]
    bubble:        Optional[Utterance]
    last_care_at:  datetime
    last_interaction_at: datetime
    last_conversation_at: Optional[datetime] = None


class PetEngine:

    COMMANDS = frozenset({
        "feed", "play", "pet", "clean", "greet",
        "offer_conversation", "select_choice", "cancel_conversation",
        "apply_happiness_delta", "report_minigame",
        "set_time_of_day", "toggle_time_of_day",
        "start_time_of_day_timer", "stop_time_of_day_timer",
        "save_name", "save_owner_name", "save_adoption_date",
    })

    def __init__(self, config: Optional[dict] = None, rng=None,
                 now: Optional[Callable[[], datetime]] = None, scheduler=None):
        cfg = copy.deepcopy(DEFAULT_CONFIG)
        if config:
            merge_config(cfg, copy.deepcopy(config))
        self.cfg = cfg
        self._now = now or datetime.now
        self._rng = rng if rng is not None else np.random.default_rng(cfg["engine"]["seed"])
        self._max_catchup = float(cfg["engine"]["max_catchup_s"])
        self._bubble_s = float(cfg["conversation"]["bubble_s"])

        self.profile  = PetProfile()
        self.needs    = NeedsModel(**cfg["needs"])
        self.waste    = WasteAccumulator(rng=self._rng, **cfg["waste"])
        self.clock    = InteractionClock(now=self._now)
        self.daycycle = TimeOfDayScheduler(scheduler=scheduler, now=self._now,
                                           **cfg["daycycle"])
        self.conversation = ConversationEngine(rng=self._rng, **cfg["conversation"])
        self.session  = ConversationSession()
        self.machine  = AnimationStateMachine(
            self.needs, self.waste, rng=self._rng,
            is_night=lambda: not self.daycycle.is_daytime,
            **cfg["behavior"])

    # ------------------------------------------------------------------
    # command plumbing

    def _run(self, command: str, fn: Callable[[], Any],
             interaction: bool = True) -> CommandResult:
        try:
            value = fn()
        except PuppyCareError as e:
            log.warning("rejected %s: %s", command, e)
            return CommandResult(ok=False, error=e)
        if interaction:
            self.clock.record_interaction()
        log.info("command %s ok", command)
        return CommandResult(ok=True, value=value)

    def dispatch(self, command: str, *args, **kwargs) -> CommandResult:
        """Generic entry point for hosts that route commands by name."""
        if command not in self.COMMANDS:
            err = InvalidCommand(command)
            log.warning("rejected %s: %s", command, err)
            return CommandResult(ok=False, error=err)
        method = getattr(self, command)
        try:
            inspect.signature(method).bind(*args, **kwargs)
        except TypeError:
            return CommandResult(ok=False, error=InvalidCommand(command, "bad_arguments"))
        return method(*args, **kwargs)

    # ------------------------------------------------------------------
    # care commands

    def feed(self, food_type=FoodType.DOG_FOOD) -> CommandResult:
        def _feed():
            food = self._food(food_type)
            if self.machine.state is AnimationState.EATING:
                raise InvalidCommand("feed", "busy_eating")
            if self.needs.is_full:
                raise InvalidCommand("feed", "too_full")
            self.needs.feed(food)
            spawned = self.waste.on_feed()
            self.machine.enter_busy(AnimationState.EATING, variant=food)
            self.clock.record_care()
            if spawned:
                self._waste_changed()
            return self.needs.snapshot()
        return self._run("feed", _feed)

    def play(self) -> CommandResult:
        def _play():
            if self.machine.state is AnimationState.PLAYING:
                raise InvalidCommand("play", "busy_playing")
            self.needs.play()
            self.machine.enter_busy(AnimationState.PLAYING)
            return self.needs.snapshot()
        return self._run("play", _play)

    def pet(self) -> CommandResult:
        def _pet():
            self.needs.pet()
            self.machine.enter_busy(AnimationState.PETTING)
            return self.needs.snapshot()
        return self._run("pet", _pet)

    def clean(self) -> CommandResult:
        def _clean():
            removed = self.waste.clean()
            self.clock.record_care()
            log.debug("cleaned %d", removed)
            return self.waste.snapshot()
        return self._run("clean", _clean)

    def apply_happiness_delta(self, delta: int) -> CommandResult:
        def _apply():
            if isinstance(delta, bool) or not isinstance(delta, (int, np.integer)):
                raise InvalidCommand("apply_happiness_delta", "not_an_integer")
            self.needs.adjust_happiness(int(delta))
            return self.needs.snapshot()
        return self._run("apply_happiness_delta", _apply)

    def report_minigame(self, outcome: str) -> CommandResult:
        def _report():
            try:
                delta = outcome_delta(outcome)
            except KeyError:
                raise InvalidCommand("report_minigame", "unknown_outcome") from None
            self.needs.adjust_happiness(delta)
            return self.needs.snapshot()
        return self._run("report_minigame", _report)

    # ------------------------------------------------------------------
    # conversation

    def _check_can_talk(self, command: str):
        if self.session.active:
            raise InvalidCommand(command, "conversation_active")
        if self.machine.state in (AnimationState.EATING, AnimationState.PLAYING):
            raise InvalidCommand(command, "busy")

    def offer_conversation(self) -> CommandResult:
        def _offer():
            self._check_can_talk("offer_conversation")
            choices = self.conversation.offer_choices()
            self.session.offer(choices)
            return tuple(choices)
        return self._run("offer_conversation", _offer)

    def select_choice(self, choice_id: str) -> CommandResult:
        def _select():
            choice: Optional[ConversationChoice] = self.session.find(choice_id)
            if choice is None:
                raise InvalidCommand("select_choice", "not_offered")
            utterance = self.conversation.respond(choice)
            self.session.show(utterance)
            self.clock.record_conversation()
            return utterance
        return self._run("select_choice", _select)

    def greet(self) -> CommandResult:
        def _greet():
            self._check_can_talk("greet")
            utterance = self.conversation.personalized_greeting(self.profile)
            self.session.show(utterance)
            self.clock.record_conversation()
            return utterance
        return self._run("greet", _greet)

    def cancel_conversation(self) -> CommandResult:
        return self._run("cancel_conversation", self.session.dismiss)

    # ------------------------------------------------------------------
    # time of day

    def set_time_of_day(self, is_daytime: bool) -> CommandResult:
        def _set():
            self.daycycle.set(is_daytime)
            return self.daycycle.is_daytime
        return self._run("set_time_of_day", _set, interaction=False)

    def toggle_time_of_day(self) -> CommandResult:
        return self._run("toggle_time_of_day", self.daycycle.toggle,
                         interaction=False)

    def start_time_of_day_timer(self) -> CommandResult:
        def _start():
            try:
                self.daycycle.start()
            except RuntimeError:
                raise InvalidCommand("start_time_of_day_timer", "no_scheduler") from None
            return self.daycycle.is_daytime
        return self._run("start_time_of_day_timer", _start, interaction=False)

    def stop_time_of_day_timer(self) -> CommandResult:
        return self._run("stop_time_of_day_timer", self.daycycle.stop,
                         interaction=False)

    # ------------------------------------------------------------------
    # profile

    def save_name(self, new_name: str) -> CommandResult:
        def _save():
            name = self._clean_name("save_name", new_name)
            self.profile.name = name
            if self.profile.adoption_date is None:
                self.profile.adoption_date = self._now().date()
            return name
        return self._run("save_name", _save)

    def save_owner_name(self, new_name: str) -> CommandResult:
        def _save():
            name = self._clean_name("save_owner_name", new_name)
            self.profile.owner_name = name
            return name
        return self._run("save_owner_name", _save)

    def save_adoption_date(self, when) -> CommandResult:
        def _save():
            if isinstance(when, datetime):
                day = when.date()
            elif isinstance(when, date):
                day = when
            else:
                raise InvalidCommand("save_adoption_date", "not_a_date")
            if day > self._now().date():
                raise InvalidCommand("save_adoption_date", "future_date")
            self.profile.adoption_date = day
            return day
        return self._run("save_adoption_date", _save)

    def days_together(self) -> int:
        return self.profile.days_together(self._now().date())

    # ------------------------------------------------------------------
    # time

    def tick(self, elapsed_s: Optional[float] = None) -> AnimationState:
        """One periodic update; defaults to a single animation tick."""
        if elapsed_s is None:
            elapsed_s = self.machine.tick_s
        elapsed_s = max(0.0, float(elapsed_s))
        self.needs.decay(elapsed_s)
        if self.waste.tick_spawn(elapsed_s, self.needs.hunger):
            self._waste_changed()
        self.session.advance(elapsed_s, self._bubble_s)
        state = self.machine.advance(elapsed_s)
        self.clock.mark_active()
        return state

    def resume(self) -> float:
        """Catch up on time spent suspended. Returns seconds applied."""
        elapsed = self.clock.elapsed_since_active().total_seconds()
        applied = min(elapsed, self._max_catchup)
        if applied > 0:
            self.needs.decay(applied)
            if self.waste.tick_spawn(applied, self.needs.hunger):
                self._waste_changed()
            log.info("caught up %.0fs of %.0fs away", applied, elapsed)
        self.clock.mark_active()
        return applied

    def elapsed_since_last_care(self):
        return self.clock.elapsed_since_last_care()

    # ------------------------------------------------------------------
    # snapshots and records

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            name=self.profile.name,
            owner_name=self.profile.owner_name,
            adoption_date=self.profile.adoption_date,
            days_together=self.days_together(),
            needs=self.needs.snapshot(),
            waste=self.waste.snapshot(),
            animation=self.machine.snapshot(),
            is_daytime=self.daycycle.is_daytime,
            offered=tuple(c.prompt for c in self.session.offered),
            bubble=self.session.response,
            last_care_at=self.clock.state.last_care_at,
            last_interaction_at=self.clock.state.last_interaction_at,
            last_conversation_at=self.clock.state.last_conversation_at,
        )

    def to_record(self) -> dict:
        self.clock.mark_active()
        return {
            "version": RECORD_VERSION,
            "profile": self.profile.to_record(),
            "needs": {"hunger": self.needs.hunger,
                      "happiness": self.needs.happiness},
            "waste": {"count": self.waste.count},
            "clock": self.clock.state.to_record(),
            "is_daytime": self.daycycle.is_daytime,
        }

    def load_record(self, record) -> CommandResult:
        """
        Restore a record from to_record() and catch up on the time away.
        A record that fails validation leaves a fresh puppy behind and
        reports CorruptedProfile.
        """
        try:
            profile, hunger, happiness, count, clock, daytime = _parse_record(
                record, aware=self._now().tzinfo is not None)
        except CorruptedProfile as e:
            log.warning("load failed, starting fresh: %s", e)
            self._reset()
            return CommandResult(ok=False, value=self.snapshot(), error=e)

        self.profile = profile
        self.needs.hunger = hunger
        self.needs.happiness = happiness
        self.waste.restore(count)
        self.clock.state = clock
        self.daycycle.set(daytime)
        self.session.dismiss()
        self.resume()
        return CommandResult(ok=True, value=self.snapshot())

    # ------------------------------------------------------------------

    def _reset(self):
        defaults = self.cfg["needs"]
        self.profile = PetProfile()
        self.needs.hunger = defaults["hunger"]
        self.needs.happiness = defaults["happiness"]
        self.waste.restore(0)
        self.clock = InteractionClock(now=self._now)
        self.session.dismiss()

    def _waste_changed(self):
        if self.waste.count >= WASTE_SAD_AT and not self.machine.busy:
            self.machine.redecide()

    @staticmethod
    def _food(food_type) -> FoodType:
        if isinstance(food_type, FoodType):
            return food_type
        if isinstance(food_type, str):
            key = food_type.strip().lower()
            for food in FoodType:
                if key in (food.value, food.name.lower()):
                    return food
        raise InvalidCommand("feed", "unknown_food")

    @staticmethod
    def _clean_name(command: str, value) -> str:
        if not isinstance(value, str) or not value.strip():
            raise InvalidCommand(command, "blank_name")
        return value.strip()


def _number(value, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CorruptedProfile(f"{what} is not a number")
    value = float(value)
    if math.isnan(value) or not 0.0 <= value <= 100.0:
        raise CorruptedProfile(f"{what} out of range")
    return value


def _parse_record(record, aware: bool = False):
    if not isinstance(record, dict):
        raise CorruptedProfile("record is not a mapping")
    if record.get("version") != RECORD_VERSION:
        raise CorruptedProfile(f"unsupported version {record.get('version')!r}")
    try:
        profile = PetProfile.from_record(record["profile"])
        clock = EngineClock.from_record(record["clock"])
        needs = record["needs"]
        hunger = _number(needs["hunger"], "hunger")
        happiness = _number(needs["happiness"], "happiness")
        count = record["waste"]["count"]
        daytime = record["is_daytime"]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise CorruptedProfile(f"{type(e).__name__}: {e}") from None
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise CorruptedProfile("waste count must be a non-negative integer")
    if not isinstance(daytime, bool):
        raise CorruptedProfile("is_daytime must be a boolean")
    # stamps must compare against the engine clock's now()
    stamps = (clock.last_interaction_at, clock.last_care_at,
              clock.last_active_at, clock.last_conversation_at)
    for stamp in stamps:
        if stamp is not None and (stamp.tzinfo is not None) != aware:
            raise CorruptedProfile("timestamp timezone does not match engine clock")
    return profile, hunger, happiness, count, clock, daytime
