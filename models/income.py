"""
models/income.py
----------------
Domain model for an income source (salary, freelance work, sales...).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, Optional

from models.frequency import MONTHLY
from models.record import RecordId, RecordReader, build_payload


@dataclass
class Income:
    """
    A single income entry, one-off or recurring.

    Attributes:
        id: Identifier assigned by the client.
        amount: Amount received per occurrence.
        date: First (or only) date the income is received.
        frequency: One of models.frequency.INCOME_FREQUENCIES.
        end_date: Last date a recurring income is received (open-ended if None).
        source: What the income is (e.g. 'Salario').
        company: Who pays it.
        extra: Stored fields not modeled here.
    """
    kind: ClassVar[str] = "income"

    id: RecordId
    amount: float
    date: Optional[date]
    frequency: str = MONTHLY
    end_date: Optional[date] = None
    source: str = ""
    company: str = ""
    extra: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> "Income":
        r = RecordReader(data)
        return cls(
            id=r.value("id"),
            amount=r.amount("amount"),
            date=r.date("date"),
            frequency=r.text("frequency", MONTHLY),
            end_date=r.date("endDate"),
            source=r.text("source"),
            company=r.text("company"),
            extra=r.leftovers(),
        )

    def to_dict(self) -> dict:
        return build_payload({
            "id": self.id,
            "amount": self.amount,
            "date": self.date,
            "frequency": self.frequency,
            "endDate": self.end_date,
            "source": self.source,
            "company": self.company,
        }, self.extra)

    def __str__(self) -> str:
        return f"+{self.amount:.2f} | {self.source or 'Ingreso'} ({self.frequency}) | {self.date}"
