"""
puppycare
Virtual puppy care engine: needs, waste, day/night, small talk and the
animation state machine, behind a single PetEngine command API.
"""
from .behavior.machine import AnimationState, FoodType
from .engine import CommandResult, EngineSnapshot, PetEngine
from .errors import CorruptedProfile, EmptyResponseSet, InvalidCommand, PuppyCareError

__version__ = "0.3.0"

__all__ = [
    "AnimationState", "FoodType", "CommandResult", "EngineSnapshot", "PetEngine",
    "CorruptedProfile", "EmptyResponseSet", "InvalidCommand", "PuppyCareError",
]
