"""
puppycare.profile
=================
Who the pet is and how long it has lived with its owner.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class PetProfile:
    name:          Optional[str] = None
    owner_name:    Optional[str] = None
    adoption_date: Optional[date] = None

    def days_together(self, today: date) -> int:
        """Whole days since adoption, never negative."""
        if self.adoption_date is None:
            return 0
        return max(0, (today - self.adoption_date).days)

    def to_record(self) -> dict:
        return {
            "name": self.name,
            "owner_name": self.owner_name,
            "adoption_date": self.adoption_date.isoformat() if self.adoption_date else None,
        }

    @classmethod
    def from_record(cls, data: dict) -> "PetProfile":
        """Raises TypeError/ValueError on malformed data. Blank names load as None."""
        name = data.get("name")
        owner = data.get("owner_name")
        for value in (name, owner):
            if value is not None and not isinstance(value, str):
                raise TypeError(f"expected str or None, got {type(value).__name__}")
        name = (name or "").strip() or None
        owner = (owner or "").strip() or None
        raw_date = data.get("adoption_date")
        adopted = date.fromisoformat(raw_date) if raw_date else None
        return cls(name=name, owner_name=owner, adoption_date=adopted)
