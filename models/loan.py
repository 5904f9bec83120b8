"""
models/loan.py
--------------
Domain model for installment debts (loans, credits).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, Optional

from models.frequency import MONTHLY
from models.record import RecordId, RecordReader, build_payload


@dataclass
class Loan:
    """
    An installment debt.

    Attributes:
        id: Identifier assigned by the client.
        name: Friendly name (e.g. 'Préstamo auto').
        total: Total amount to repay.
        paid: Cumulative amount already paid (currency, not installments).
        duration: Number of base periods; how it maps to installments
            depends on the frequency (see services.amortization).
        frequency: One of models.frequency.LOAN_FREQUENCIES.
        start_date: Date the loan started.
        last_payment_date: Date of the most recent payment, if recorded.
        category: Expense category the installments belong to.
        extra: Stored fields not modeled here.
    """
    kind: ClassVar[str] = "loan"

    id: RecordId
    name: str
    total: float
    paid: float = 0.0
    duration: int = 0
    frequency: str = MONTHLY
    start_date: Optional[date] = None
    last_payment_date: Optional[date] = None
    category: str = "Deudas"
    extra: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> "Loan":
        r = RecordReader(data)
        return cls(
            id=r.value("id"),
            name=r.text("name"),
            total=r.amount("total"),
            paid=r.amount("paid"),
            duration=r.integer("duration"),
            frequency=r.text("frequency", MONTHLY),
            start_date=r.date("startDate"),
            last_payment_date=r.date("lastPaymentDate"),
            category=r.text("category", "Deudas"),
            extra=r.leftovers(),
        )

    def to_dict(self) -> dict:
        return build_payload({
            "id": self.id,
            "name": self.name,
            "total": self.total,
            "paid": self.paid,
            "duration": self.duration,
            "frequency": self.frequency,
            "startDate": self.start_date,
            "lastPaymentDate": self.last_payment_date,
            "category": self.category,
        }, self.extra)

    def __str__(self) -> str:
        return f"{self.name}: {self.paid:.2f}/{self.total:.2f} ({self.frequency}, {self.duration})"
