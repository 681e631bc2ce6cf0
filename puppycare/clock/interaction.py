"""
clock.interaction
=================
Timestamps of the owner's last interaction, last care session and last
conversation, plus the last moment the engine was running (used for
offline catch-up).
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional


@dataclass
class EngineClock:
    last_interaction_at:  datetime
    last_care_at:         datetime
    last_active_at:       datetime
    last_conversation_at: Optional[datetime] = None

    def to_record(self) -> dict:
        return {
            "last_interaction_at": self.last_interaction_at.isoformat(),
            "last_care_at": self.last_care_at.isoformat(),
            "last_active_at": self.last_active_at.isoformat(),
            "last_conversation_at": (self.last_conversation_at.isoformat()
                                     if self.last_conversation_at else None),
        }

    @classmethod
    def from_record(cls, data: dict) -> "EngineClock":
        convo = data.get("last_conversation_at")
        return cls(
            last_interaction_at=datetime.fromisoformat(data["last_interaction_at"]),
            last_care_at=datetime.fromisoformat(data["last_care_at"]),
            last_active_at=datetime.fromisoformat(data["last_active_at"]),
            last_conversation_at=datetime.fromisoformat(convo) if convo else None,
        )


class InteractionClock:

    def __init__(self, now: Optional[Callable[[], datetime]] = None,
                 state: Optional[EngineClock] = None):
        self._now = now or datetime.now
        if state is None:
            t = self._now()
            state = EngineClock(last_interaction_at=t, last_care_at=t,
                                last_active_at=t)
        self.state = state

    def now(self) -> datetime:
        return self._now()

    def record_interaction(self):
        self.state.last_interaction_at = self._now()

    def record_care(self):
        self.state.last_care_at = self._now()

    def record_conversation(self):
        self.state.last_conversation_at = self._now()

    def mark_active(self):
        self.state.last_active_at = self._now()

    def elapsed_since_last_care(self) -> timedelta:
        return max(timedelta(0), self._now() - self.state.last_care_at)

    def elapsed_since_active(self) -> timedelta:
        return max(timedelta(0), self._now() - self.state.last_active_at)
