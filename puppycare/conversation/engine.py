"""
conversation/engine.py

Scripted small talk. The owner picks one of a couple of offered prompts
and the puppy answers with a random response from that prompt's list.
Only semantic keys leave this module; the host's text provider turns
them into display strings.

Table file format (YAML):

    choices:
      - prompt: talk.how_are_you
        responses: [reply.great, reply.sleepy]
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
import yaml

from ..errors import EmptyResponseSet
from ..profile import PetProfile

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversationChoice:
    prompt:    str
    responses: Tuple[str, ...]


@dataclass(frozen=True)
class Utterance:
    key:    str
    params: Dict[str, str] = field(default_factory=dict)


DEFAULT_CHOICES: Tuple[ConversationChoice, ...] = (
    ConversationChoice("talk.how_are_you",
                       ("reply.feeling_great", "reply.bit_sleepy", "reply.tail_wag")),
    ConversationChoice("talk.good_dog",
                       ("reply.proud_bark", "reply.happy_spin")),
    ConversationChoice("talk.want_to_play",
                       ("reply.yes_play", "reply.fetch_ball", "reply.later_nap")),
    ConversationChoice("talk.are_you_hungry",
                       ("reply.tummy_rumble", "reply.just_ate", "reply.treat_please")),
    ConversationChoice("talk.love_you",
                       ("reply.love_you_too", "reply.nuzzle")),
    ConversationChoice("talk.go_for_walk",
                       ("reply.leash_fetch", "reply.too_cold")),
)


def load_table(path: str) -> List[ConversationChoice]:
    """Read extra choices from a YAML table. Malformed entries are skipped."""
    data = yaml.safe_load(Path(path).read_text()) or {}
    entries = data.get("choices", []) if isinstance(data, dict) else None
    if not isinstance(entries, list):
        log.warning("conversation table %s has no 'choices' list, ignoring it", path)
        return []
    choices = []
    for entry in entries:
        prompt = entry.get("prompt") if isinstance(entry, dict) else None
        responses = entry.get("responses") if isinstance(entry, dict) else None
        if not isinstance(prompt, str) or not isinstance(responses, list):
            log.warning("skipping malformed conversation entry: %r", entry)
            continue
        choices.append(ConversationChoice(prompt, tuple(str(r) for r in responses)))
    return choices


class ConversationSession:
    """Offered choice set plus the one response bubble on screen."""

    def __init__(self):
        self.offered: Tuple[ConversationChoice, ...] = ()
        self.response: Optional[Utterance] = None
        self._response_age = 0.0

    @property
    def active(self) -> bool:
        return bool(self.offered) or self.response is not None

    def offer(self, choices: Iterable[ConversationChoice]):
        self.offered = tuple(choices)

    def find(self, prompt: str) -> Optional[ConversationChoice]:
        for choice in self.offered:
            if choice.prompt == prompt:
                return choice
        return None

    def show(self, utterance: Utterance):
        self.offered = ()
        self.response = utterance
        self._response_age = 0.0

    def dismiss(self):
        self.offered = ()
        self.response = None
        self._response_age = 0.0

    def advance(self, elapsed_s: float, bubble_s: float):
        if self.response is None:
            return
        self._response_age += elapsed_s
        if self._response_age >= bubble_s:
            log.debug("bubble %s expired", self.response.key)
            self.response = None
            self._response_age = 0.0


class ConversationEngine:

    def __init__(self, rng=None, offer_count: int = 2,
                 table: Optional[str] = None,
                 choices: Optional[Iterable[ConversationChoice]] = None, **_):
        self._rng = rng if rng is not None else np.random.default_rng()
        self._offer_count = offer_count
        pool = list(choices) if choices is not None else list(DEFAULT_CHOICES)
        if table:
            try:
                pool.extend(load_table(table))
            except (OSError, yaml.YAMLError) as e:
                log.warning("conversation table %s unreadable: %s", table, e)
        self._pool = tuple(pool)

    @property
    def pool(self) -> Tuple[ConversationChoice, ...]:
        return self._pool

    def offer_choices(self, pool: Optional[Iterable[ConversationChoice]] = None
                      ) -> List[ConversationChoice]:
        """
        Pick up to offer_count choices with distinct prompts, without
        replacement. Never mutates the pool and never raises on a short one.
        """
        source = self._pool if pool is None else tuple(pool)
        distinct: Dict[str, ConversationChoice] = {}
        for choice in source:
            distinct.setdefault(choice.prompt, choice)
        unique = list(distinct.values())
        k = min(self._offer_count, len(unique))
        if k == 0:
            return []
        picks = self._rng.choice(len(unique), size=k, replace=False)
        offered = [unique[int(i)] for i in picks]
        log.debug("offering %s", [c.prompt for c in offered])
        return offered

    def respond(self, choice: ConversationChoice) -> Utterance:
        if not choice.responses:
            raise EmptyResponseSet(choice.prompt)
        idx = int(self._rng.integers(0, len(choice.responses)))
        return Utterance(choice.responses[idx])

    @staticmethod
    def personalized_greeting(profile: PetProfile) -> Utterance:
        owner = profile.owner_name
        name = profile.name
        if owner and name:
            return Utterance("greeting.owner_and_pet", {"owner": owner, "pet": name})
        if owner:
            return Utterance("greeting.owner", {"owner": owner})
        if name:
            return Utterance("greeting.pet", {"pet": name})
        return Utterance("greeting.generic")
