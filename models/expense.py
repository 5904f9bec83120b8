"""
models/expense.py
-----------------
Domain model for expenses, one-off or recurring.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, Optional

from models.frequency import ONE_OFF
from models.record import RecordId, RecordReader, build_payload

DEFAULT_CATEGORY = "Otros"

EXPENSE_CATEGORIES = (
    "Transporte", "Servicios", "Alimentación", "Salud",
    "Entretenimiento", "Educación", "Hogar", "Ropa",
    "Ahorro", "Deudas", DEFAULT_CATEGORY,
)


@dataclass
class Expense:
    """
    Represents a single expense.

    Attributes:
        id: Identifier assigned by the client.
        amount: Amount paid per occurrence.
        category: One of EXPENSE_CATEGORIES; unknown strings are kept as-is
            and folded into "Otros" by the aggregations.
        description: Human-readable label.
        date: Date of the (last known) payment.
        frequency: One of models.frequency.EXPENSE_FREQUENCIES.
        end_date: Last date a recurring expense applies.
        next_payment_date: Cached next occurrence entered by the user.
        extra: Stored fields not modeled here (notes, payment method...).
    """
    kind: ClassVar[str] = "expense"

    id: RecordId
    amount: float
    date: Optional[date]
    category: str = DEFAULT_CATEGORY
    description: str = ""
    frequency: str = ONE_OFF
    end_date: Optional[date] = None
    next_payment_date: Optional[date] = None
    extra: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> "Expense":
        r = RecordReader(data)
        return cls(
            id=r.value("id"),
            amount=r.amount("amount"),
            date=r.date("date"),
            category=r.text("category", DEFAULT_CATEGORY),
            description=r.text("description"),
            frequency=r.text("frequency", ONE_OFF),
            end_date=r.date("endDate"),
            next_payment_date=r.date("nextPaymentDate"),
            extra=r.leftovers(),
        )

    def to_dict(self) -> dict:
        return build_payload({
            "id": self.id,
            "amount": self.amount,
            "date": self.date,
            "category": self.category,
            "description": self.description,
            "frequency": self.frequency,
            "endDate": self.end_date,
            "nextPaymentDate": self.next_payment_date,
        }, self.extra)

    def is_one_off(self) -> bool:
        """Returns True if the expense does not repeat."""
        return self.frequency == ONE_OFF

    def __str__(self) -> str:
        return f"-{self.amount:.2f} | {self.category} | {self.description} ({self.frequency})"
