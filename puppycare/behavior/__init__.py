"""
behavior/
Animation state machine and its weighted-random policy.
"""
from .machine import (
    AnimationState, AnimationSnapshot, AnimationStateMachine, FoodType,
    BUSY_STATES, MOOD_STATES, decide_state, roll_state, threshold_state,
)
from .walk import WalkMotion

__all__ = [
    "AnimationState", "AnimationSnapshot", "AnimationStateMachine", "FoodType",
    "BUSY_STATES", "MOOD_STATES", "decide_state", "roll_state",
    "threshold_state", "WalkMotion",
]
