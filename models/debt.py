"""
models/debt.py
--------------
Legacy debt records. Older versions of the client stored debts in a
parallel `debts` collection with an installment count instead of a
duration; they are only shown on the payment calendar.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, Optional

from models.frequency import MONTHLY
from models.record import RecordId, RecordReader, build_payload


@dataclass
class LegacyDebt:
    kind: ClassVar[str] = "debt"

    id: RecordId
    name: str
    amount: float
    installments: int = 0
    frequency: str = MONTHLY
    start_date: Optional[date] = None
    extra: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> "LegacyDebt":
        r = RecordReader(data)
        return cls(
            id=r.value("id"),
            name=r.text("name"),
            amount=r.amount("amount"),
            installments=r.integer("installments"),
            frequency=r.text("frequency", MONTHLY),
            start_date=r.date("startDate"),
            extra=r.leftovers(),
        )

    def to_dict(self) -> dict:
        return build_payload({
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "installments": self.installments,
            "frequency": self.frequency,
            "startDate": self.start_date,
        }, self.extra)

    @property
    def installment_amount(self) -> float:
        return self.amount / self.installments if self.installments > 0 else 0.0
