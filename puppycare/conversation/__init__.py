"""
conversation/
Prompt/response table and the single active conversation bubble.
"""
from .engine import (
    ConversationChoice, ConversationEngine, ConversationSession, Utterance,
    DEFAULT_CHOICES, load_table,
)

__all__ = [
    "ConversationChoice", "ConversationEngine", "ConversationSession",
    "Utterance", "DEFAULT_CHOICES", "load_table",
]
