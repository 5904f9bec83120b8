"""
models/credit_card.py
---------------------
Domain model for credit cards.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, Optional

from models.frequency import MONTHLY
from models.record import RecordId, RecordReader, build_payload

ACTIVE = "Activa"
INACTIVE = "Inactiva"


@dataclass
class CreditCard:
    """
    A credit card and its repayment terms.

    Only the day of month of `payment_date` matters for scheduling; the
    full date is the anchor from which payments start.
    """
    kind: ClassVar[str] = "credit_card"

    id: RecordId
    bank: str
    card_name: str
    credit_limit: float = 0.0
    current_debt: float = 0.0
    min_payment: float = 0.0
    payment_date: Optional[date] = None
    cut_date: Optional[date] = None
    interest_rate: float = 0.0
    frequency: str = MONTHLY
    status: str = ACTIVE
    last4_digits: str = ""
    extra: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> "CreditCard":
        r = RecordReader(data)
        return cls(
            id=r.value("id"),
            bank=r.text("bank"),
            card_name=r.text("cardName"),
            credit_limit=r.amount("creditLimit"),
            current_debt=r.amount("currentDebt"),
            min_payment=r.amount("minPayment"),
            payment_date=r.date("paymentDate"),
            cut_date=r.date("cutDate"),
            interest_rate=r.amount("interestRate"),
            frequency=r.text("frequency", MONTHLY),
            status=r.text("status", ACTIVE),
            last4_digits=r.text("last4Digits"),
            extra=r.leftovers(),
        )

    def to_dict(self) -> dict:
        return build_payload({
            "id": self.id,
            "bank": self.bank,
            "cardName": self.card_name,
            "creditLimit": self.credit_limit,
            "currentDebt": self.current_debt,
            "minPayment": self.min_payment,
            "paymentDate": self.payment_date,
            "cutDate": self.cut_date,
            "interestRate": self.interest_rate,
            "frequency": self.frequency,
            "status": self.status,
            "last4Digits": self.last4_digits,
        }, self.extra)

    @property
    def display_name(self) -> str:
        return f"{self.card_name} ({self.bank})"

    def is_active(self) -> bool:
        return self.status != INACTIVE
