"""
models/goal.py
--------------
Domain model for savings goals.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, Optional

from models.record import RecordId, RecordReader, build_payload


@dataclass
class Goal:
    """A savings goal with a target amount and a deadline."""
    kind: ClassVar[str] = "goal"

    id: RecordId
    name: str
    target_amount: float
    current_amount: float = 0.0
    deadline: Optional[date] = None
    start_date: Optional[date] = None
    extra: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        r = RecordReader(data)
        return cls(
            id=r.value("id"),
            name=r.text("name"),
            target_amount=r.amount("targetAmount"),
            current_amount=r.amount("currentAmount"),
            deadline=r.date("deadline"),
            start_date=r.date("startDate"),
            extra=r.leftovers(),
        )

    def to_dict(self) -> dict:
        return build_payload({
            "id": self.id,
            "name": self.name,
            "targetAmount": self.target_amount,
            "currentAmount": self.current_amount,
            "deadline": self.deadline,
            "startDate": self.start_date,
        }, self.extra)

    @property
    def progress(self) -> float:
        """Percentage reached; not capped, so it can exceed 100."""
        if self.target_amount <= 0:
            return 0.0
        return self.current_amount / self.target_amount * 100

    def is_reached(self) -> bool:
        return self.progress >= 100
