"""
needs/
Hunger, happiness and waste bookkeeping.
"""
from .model import NeedsModel, NeedsSnapshot, need_level
from .waste import WasteAccumulator, WasteSnapshot, MAX_WASTE

__all__ = [
    "NeedsModel", "NeedsSnapshot", "need_level",
    "WasteAccumulator", "WasteSnapshot", "MAX_WASTE",
]
