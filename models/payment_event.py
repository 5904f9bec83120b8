"""
models/payment_event.py
-----------------------
Derived, never-persisted structures produced by the projection core.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from models.record import RecordId

EXPENSE_EVENT = "gasto"
LOAN_EVENT = "préstamo"
CARD_EVENT = "tarjeta"

EVENT_TYPES = (EXPENSE_EVENT, LOAN_EVENT, CARD_EVENT)


@dataclass(frozen=True)
class PaymentEvent:
    """
    A payment that falls due on a given date.

    Attributes:
        id: Unique within one projection (e.g. '17-loan-3', '4-card').
        type: One of EVENT_TYPES.
        name: What is being paid.
        amount: Amount due.
        due_date: When it is due.
        payment_type: Human label ('Pago único', 'Cuota 3/12', 'Pago mínimo').
        category: Expense category, when the source record has one.
    """
    id: RecordId
    type: str
    name: str
    amount: float
    due_date: date
    payment_type: str
    category: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "amount": self.amount,
            "dueDate": self.due_date.isoformat(),
            "paymentType": self.payment_type,
            "category": self.category,
        }

    def __str__(self) -> str:
        return f"{self.due_date} | {self.name} | {self.amount:.2f} ({self.payment_type})"


@dataclass(frozen=True)
class CalendarEvent:
    """An obligation shown on one day of the payment calendar."""
    type: str
    title: str
    amount: float


@dataclass(frozen=True)
class ReportRow:
    """One flat row handed to the export sinks."""
    date: Optional[date]
    type: str
    name: str
    amount: float
    category: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat() if self.date else "",
            "type": self.type,
            "name": self.name,
            "amount": self.amount,
            "category": self.category or "",
        }
