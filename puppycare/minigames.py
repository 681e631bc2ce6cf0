"""
puppycare.minigames
===================
Happiness deltas reported back by the host's mini-games. The boards
themselves live in the presentation layer; the engine only sees these
outcome keys.
"""

from typing import Dict

MINIGAME_OUTCOMES: Dict[str, int] = {
    "hide_and_seek.found":  25,   # opened the box with the puppy inside
    "hide_and_seek.missed": -5,   # opened an empty box
    "find_toy.finished":    20,
}


def outcome_delta(outcome: str) -> int:
    if outcome not in MINIGAME_OUTCOMES:
        raise KeyError(outcome)
    return MINIGAME_OUTCOMES[outcome]
